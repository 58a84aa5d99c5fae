"""
=====================================================
SQL keyword vocabularies for column DDL construction.
=====================================================

Closed enumerations of the keywords that may appear in a column definition
or a table-level constraint. Every member maps to one fixed keyword string,
so rendering is pure and total.

Enumerations:
    ColumnType: Column storage types (INTEGER, TEXT, UNSIGNED BIG INT, ...)
    Attribute: Column-level attribute tags (PRIMARY KEY, NOT NULL, ...)
    ForeignKeyAction: Referential keywords (REFERENCES, ON DELETE, CASCADE, ...)

Values:
    Default: DEFAULT attribute carrying a literal payload

Functions:
    escape_string: Quote a value as a SQL string literal
    render: Render any vocabulary value to its SQL text

Example:
    >>> from sql.vocabulary import Attribute, ColumnType, Default, render
    >>>
    >>> render(ColumnType.UNSIGNED_BIG_INT)
    'UNSIGNED BIG INT'
    >>> render(Default("it's"))
    "DEFAULT 'it''s'"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ColumnType(str, Enum):
    """SQL column storage types.

    The member value is the canonical keyword emitted in a column definition.
    """

    INTEGER = "INTEGER"
    INT = "INT"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    MEDIUMINT = "MEDIUMINT"
    BIGINT = "BIGINT"
    UNSIGNED_BIG_INT = "UNSIGNED BIG INT"
    INT2 = "INT2"
    INT8 = "INT8"
    TEXT = "TEXT"
    CLOB = "CLOB"
    BLOB = "BLOB"
    REAL = "REAL"
    DOUBLE = "DOUBLE"
    DOUBLE_PRECISION = "DOUBLE PRECISION"
    FLOAT = "FLOAT"
    NUMERIC = "NUMERIC"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"

    @property
    def sql(self) -> str:
        """Get the SQL keyword for this type."""
        return self.value

    def __str__(self) -> str:
        return self.value


class Attribute(str, Enum):
    """Stateless column attribute tags.

    DEFAULT carries a value and lives in its own class, see Default.
    """

    PRIMARY_KEY = "PRIMARY KEY"
    ASC = "ASC"
    DESC = "DESC"
    UNIQUE = "UNIQUE"
    NOT_NULL = "NOT NULL"
    AUTOINCREMENT = "AUTOINCREMENT"

    @property
    def sql(self) -> str:
        """Get the SQL keyword for this attribute."""
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Default:
    """DEFAULT attribute with a literal payload.

    The payload is always emitted as a quoted string literal, see escape_string.

    Attributes:
        value: Literal default value (unescaped)

    Example:
        >>> Default("def").sql
        "DEFAULT 'def'"
    """

    value: str

    @property
    def sql(self) -> str:
        """Get the rendered DEFAULT clause."""
        return f"DEFAULT {escape_string(self.value)}"

    def __str__(self) -> str:
        return self.sql


class ForeignKeyAction(str, Enum):
    """Keywords used to link and qualify a FOREIGN KEY constraint."""

    REFERENCES = "REFERENCES"
    ON_DELETE = "ON DELETE"
    ON_UPDATE = "ON UPDATE"
    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    NO_ACTION = "NO ACTION"
    DEFERRABLE_INITIALLY_DEFERRED = "DEFERRABLE INITIALLY DEFERRED"

    @property
    def sql(self) -> str:
        """Get the SQL keyword for this action."""
        return self.value

    def __str__(self) -> str:
        return self.value


# Anything that may follow the type keyword in a column definition
ColumnAttribute = Union[Attribute, Default]

Vocabulary = Union[ColumnType, Attribute, Default, ForeignKeyAction]


def escape_string(value: Any) -> str:
    """Quote a value as a SQL string literal.

    Every single quote is doubled and the result is wrapped in single quotes.
    Backslashes are left untouched.

    Args:
        value: Value to quote (converted with str() when not a string)

    Returns:
        Quoted SQL string literal

    Example:
        >>> escape_string("O'Brien")
        "'O''Brien'"
    """
    text = value if isinstance(value, str) else str(value)
    return "'" + text.replace("'", "''") + "'"


def render(value: Vocabulary) -> str:
    """Render a vocabulary value to its SQL text.

    Args:
        value: ColumnType, Attribute, Default or ForeignKeyAction member

    Returns:
        SQL keyword or clause text

    Raises:
        TypeError: If value is not part of the vocabulary
    """
    if isinstance(value, (ColumnType, Attribute, Default, ForeignKeyAction)):
        return value.sql
    raise TypeError(f"Not a DDL vocabulary value: {value!r}")
