"""
=================================
Column entities for DDL rendering.
=================================

A Column is either a named definition (name, type, attributes) or a
pre-rendered table-level constraint clause such as ``UNIQUE (email)``.
Both shapes are frozen, so one Column may be shared by a Table and by any
number of constraints built from it.

Classes:
    Column: Common base with the rendering contract
    ColumnDefinition: Named column with type and optional attributes
    ColumnConstraint: Opaque constraint clause text
    ColumnShapeError: Raised when a definition-only operation hits a constraint

Example:
    >>> from sql.columns import ColumnDefinition
    >>> from sql.vocabulary import Attribute, ColumnType
    >>>
    >>> col = ColumnDefinition("id", ColumnType.INTEGER, (Attribute.PRIMARY_KEY,))
    >>> col.create_statement()
    'id INTEGER PRIMARY KEY'
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from sql.names import TableNameLike, table_name
from sql.vocabulary import ColumnAttribute, ColumnType

logger = logging.getLogger(__name__)


class ColumnShapeError(AssertionError):
    """Raised when a definition-only operation is called on a constraint.

    Constraints carry no name and cannot be added with ALTER TABLE. Reaching
    this error means the caller passed the wrong kind of Column; it is a
    programming error and is never handled inside the library.
    """
    pass


class Column(ABC):
    """Base class for both column shapes."""

    is_constraint: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the column identifier."""

    @abstractmethod
    def create_statement(self) -> str:
        """Render the fragment used inside CREATE TABLE (...)."""

    @abstractmethod
    def create_add_sql(self, table: Optional[TableNameLike] = None) -> str:
        """Render ALTER TABLE ... ADD for this column."""


@dataclass(frozen=True)
class ColumnDefinition(Column):
    """Named column with a type and optional attributes.

    Attributes:
        column_name: Column identifier, used verbatim
        column_type: Storage type keyword
        attributes: Ordered attributes, or None when there are none
    """

    column_name: str
    column_type: ColumnType
    attributes: Optional[Tuple[ColumnAttribute, ...]] = None

    def __post_init__(self):
        # Any iterable becomes a tuple; empty ones become None
        attributes = tuple(self.attributes) if self.attributes is not None else ()
        object.__setattr__(self, "attributes", attributes or None)

    @property
    def name(self) -> str:
        """Get the column identifier."""
        return self.column_name

    def create_statement(self) -> str:
        """Render the column definition fragment.

        Returns:
            ``<name> <TYPE>`` followed by space-separated attributes, if any
        """
        if self.attributes is None:
            return f"{self.column_name} {self.column_type.sql}"
        attributes = " ".join(attribute.sql for attribute in self.attributes)
        return f"{self.column_name} {self.column_type.sql} {attributes}"

    def create_add_sql(self, table: Optional[TableNameLike] = None) -> str:
        """Generate ALTER TABLE ... ADD statement for this column.

        Args:
            table: Target table (name, TableName or table object). When
                omitted the column's own name is used as the target.

        Returns:
            SQL ALTER TABLE statement

        Example:
            >>> column("nickname", ColumnType.TEXT).create_add_sql("users")
            'ALTER TABLE users ADD nickname TEXT'
        """
        if table is None:
            logger.warning(
                f"No target table given for column '{self.column_name}', "
                f"using the column name as table name"
            )
            target = self.column_name
        else:
            target = table_name(table)

        sql = f"ALTER TABLE {target} ADD {self.create_statement()}"
        logger.debug(f"Rendered: {sql}")
        return sql


@dataclass(frozen=True)
class ColumnConstraint(Column):
    """Pre-rendered table-level constraint clause.

    Attributes:
        text: Clause text, e.g. ``PRIMARY KEY (a, b)``
    """

    text: str
    is_constraint = True

    @property
    def name(self) -> str:
        """Constraints have no name.

        Raises:
            ColumnShapeError: Always
        """
        logger.error(f"Name requested from constraint '{self.text}'")
        raise ColumnShapeError(f"Constraint has no column name: {self.text}")

    def create_statement(self) -> str:
        return self.text

    def create_add_sql(self, table: Optional[TableNameLike] = None) -> str:
        """Constraints cannot be added as columns.

        Raises:
            ColumnShapeError: Always
        """
        logger.error(f"ALTER TABLE ADD requested for constraint '{self.text}'")
        raise ColumnShapeError(f"Cannot add a constraint as a column: {self.text}")
