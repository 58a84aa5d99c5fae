"""
=======================================================================
Data Definition Language (DDL) builders for tables and columns.
=======================================================================

Builds CREATE TABLE and ALTER TABLE ... ADD statements from typed column
descriptions instead of hand-written SQL text. Identifiers are emitted
verbatim; only DEFAULT literals are escaped.

Key Features:
    - Typed column definitions (see sql.vocabulary)
    - Table-level PRIMARY KEY, UNIQUE and FOREIGN KEY constraints
    - Referential actions (ON DELETE CASCADE, DEFERRABLE INITIALLY DEFERRED, ...)
    - Any record type can act as a table by implementing name()/columns()

Functions:
    column: Build a column definition
    primary_key: Build a PRIMARY KEY (...) constraint
    unique: Build a UNIQUE (...) constraint
    foreign_key: Build a FOREIGN KEY (...) REFERENCES constraint
    create_sql: Generate CREATE TABLE for any TableLike
    create_add_sql: Generate ALTER TABLE ... ADD for a column of a table

Classes:
    TableLike: Protocol for objects exposing name() and columns()
    BaseTable: Abstract base providing create_sql() to subclasses
    Table: Concrete immutable table

Example:
    >>> from sql.ddl import Table, column, unique
    >>> from sql.vocabulary import Attribute, ColumnType, Default
    >>>
    >>> hoge = column("hoge", ColumnType.TEXT)
    >>> table = Table(
    ...     "my_table",
    ...     [
    ...         column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY, Attribute.NOT_NULL]),
    ...         column("val", ColumnType.TEXT, [Default("def")]),
    ...         hoge,
    ...         unique([hoge]),
    ...     ],
    ... )
    >>> table.create_sql()
    "CREATE TABLE my_table (id INTEGER PRIMARY KEY NOT NULL, val TEXT DEFAULT 'def', hoge TEXT, UNIQUE (hoge))"
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Protocol, Sequence, Tuple, runtime_checkable

from sql.columns import Column, ColumnConstraint, ColumnDefinition
from sql.names import TableName, TableNameLike, table_name
from sql.vocabulary import Attribute, ColumnAttribute, ColumnType, ForeignKeyAction

logger = logging.getLogger(__name__)


# ====================
# Column builders
# ====================

def column(
    name: str,
    column_type: ColumnType,
    attributes: Iterable[ColumnAttribute] = ()
) -> ColumnDefinition:
    """Build a column definition.

    The name is not validated; callers are responsible for valid identifiers.

    Args:
        name: Column identifier
        column_type: Storage type
        attributes: Ordered column attributes (may be empty)

    Returns:
        ColumnDefinition with empty attributes stored as None

    Example:
        >>> column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY]).create_statement()
        'id INTEGER PRIMARY KEY'
    """
    return ColumnDefinition(name, column_type, tuple(attributes))


def _key_constraint(keyword: str, columns: Iterable[Column]) -> ColumnConstraint:
    names = ", ".join(col.name for col in columns)
    return ColumnConstraint(f"{keyword} ({names})")


def primary_key(columns: Iterable[Column]) -> ColumnConstraint:
    """Build a table-level PRIMARY KEY constraint.

    Args:
        columns: Column definitions in key order (kept as given)

    Returns:
        ColumnConstraint rendering ``PRIMARY KEY (a, b, ...)``

    Raises:
        ColumnShapeError: If one of the columns is a constraint
    """
    return _key_constraint(Attribute.PRIMARY_KEY.sql, columns)


def unique(columns: Iterable[Column]) -> ColumnConstraint:
    """Build a table-level UNIQUE constraint.

    Args:
        columns: Column definitions in key order (kept as given)

    Returns:
        ColumnConstraint rendering ``UNIQUE (a, b, ...)``

    Raises:
        ColumnShapeError: If one of the columns is a constraint
    """
    return _key_constraint(Attribute.UNIQUE.sql, columns)


def foreign_key(
    column: Column,
    action: ForeignKeyAction,
    other_table: TableNameLike,
    other_column: Column,
    extra: Iterable[ForeignKeyAction] = ()
) -> ColumnConstraint:
    """Build a table-level FOREIGN KEY constraint.

    Args:
        column: Local column definition
        action: Linking keyword, normally ForeignKeyAction.REFERENCES
        other_table: Referenced table (name, TableName or table object)
        other_column: Referenced column definition
        extra: Trailing clauses, e.g. [ON_DELETE, CASCADE]

    Returns:
        ColumnConstraint rendering
        ``FOREIGN KEY (col) REFERENCES table (other_col)[ extra ...]``

    Raises:
        ColumnShapeError: If column or other_column is a constraint

    Example:
        >>> foreign_key(
        ...     user_id, ForeignKeyAction.REFERENCES, "users", id_col,
        ...     [ForeignKeyAction.ON_DELETE, ForeignKeyAction.CASCADE]
        ... ).create_statement()
        'FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE'
    """
    sql = (
        f"FOREIGN KEY ({column.name}) {action.sql} "
        f"{table_name(other_table)} ({other_column.name})"
    )

    clauses = " ".join(clause.sql for clause in extra)
    if clauses:
        sql += f" {clauses}"

    return ColumnConstraint(sql)


# ====================
# Tables
# ====================

@runtime_checkable
class TableLike(Protocol):
    """Anything that can be rendered as CREATE TABLE."""

    def name(self) -> str: ...

    def columns(self) -> Sequence[Column]: ...


def create_sql(table: TableLike) -> str:
    """Generate CREATE TABLE statement for a table.

    Columns are rendered in declared order; nothing is reordered or
    deduplicated, so a column may appear both as a definition and inside a
    trailing constraint.

    Args:
        table: Object exposing name() and columns()

    Returns:
        SQL CREATE TABLE statement
    """
    fragments = ", ".join(col.create_statement() for col in table.columns())
    sql = f"CREATE TABLE {table.name()} ({fragments})"
    logger.debug(f"Rendered: {sql}")
    return sql


def create_add_sql(table: TableNameLike, column: Column) -> str:
    """Generate ALTER TABLE ... ADD statement for a column of a table.

    Args:
        table: Target table (name, TableName or table object)
        column: Column definition to add

    Returns:
        SQL ALTER TABLE statement

    Raises:
        ColumnShapeError: If column is a constraint
    """
    return column.create_add_sql(table)


class BaseTable(ABC):
    """Base class for caller-defined table types.

    Subclasses provide name() and columns(); rendering is inherited.

    Example:
        >>> class Users(BaseTable):
        ...     id = column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY])
        ...     email = column("email", ColumnType.TEXT, [Attribute.NOT_NULL])
        ...
        ...     def name(self):
        ...         return "users"
        ...
        ...     def columns(self):
        ...         return [self.id, self.email, unique([self.email])]
        >>>
        >>> Users().create_sql()
        'CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT NOT NULL, UNIQUE (email))'
    """

    @abstractmethod
    def name(self) -> str:
        """Get the table identifier."""

    @abstractmethod
    def columns(self) -> Sequence[Column]:
        """Get the columns and constraints in declaration order."""

    def table_name(self) -> TableName:
        """Get this table's identifier as a TableName."""
        return TableName.of(self)

    def create_sql(self) -> str:
        """Generate CREATE TABLE statement for this table."""
        return create_sql(self)

    def create_add_sql(self, column: Column) -> str:
        """Generate ALTER TABLE ... ADD statement targeting this table."""
        return create_add_sql(self, column)


class Table(BaseTable):
    """Concrete immutable table.

    Holds the identifier and the ordered column tuple, both fixed at
    construction.
    """

    def __init__(self, name: str, columns: Iterable[Column]):
        """Initialize the table.

        Args:
            name: Table identifier, used verbatim
            columns: Columns and constraints in declaration order
        """
        self._name = name
        self._columns: Tuple[Column, ...] = tuple(columns)

    def name(self) -> str:
        return self._name

    def columns(self) -> Tuple[Column, ...]:
        return self._columns

    def column(self, name: str) -> Optional[ColumnDefinition]:
        """Find a column definition by name.

        Args:
            name: Column identifier

        Returns:
            Matching ColumnDefinition, or None if absent
        """
        for col in self._columns:
            if not col.is_constraint and col.name == name:
                return col
        return None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self._name == other._name and self._columns == other._columns

    def __hash__(self) -> int:
        return hash((self._name, self._columns))

    def __repr__(self) -> str:
        return f"Table(name={self._name!r}, columns={list(self._columns)!r})"
