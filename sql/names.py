"""
==========================
Table identifier handling.
==========================

TableName wraps a table identifier so that a FOREIGN KEY or ALTER TABLE
statement can point at a table without holding the table itself.

Example:
    >>> from sql.names import TableName, table_name
    >>>
    >>> table_name("customers")
    'customers'
    >>> table_name(TableName("orders"))
    'orders'
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TableName:
    """Identifier of a table.

    Attributes:
        value: Table identifier text, used verbatim

    Example:
        >>> TableName.of(customers_table)
        TableName(value='customers')
    """

    value: str

    @classmethod
    def of(cls, table: Any) -> "TableName":
        """Build a TableName from anything exposing a name() method.

        Args:
            table: Table instance (BaseTable, Table or any TableLike)

        Returns:
            TableName holding table.name()
        """
        return cls(table.name())

    def __str__(self) -> str:
        return self.value


# str, TableName, or a table exposing name()
TableNameLike = Union[str, TableName, Any]


def table_name(table: TableNameLike) -> str:
    """Resolve a table reference to its identifier text.

    Args:
        table: Literal name, TableName, or table object with a name() method

    Returns:
        Identifier text

    Raises:
        TypeError: If table cannot be resolved to a name
    """
    if isinstance(table, str):
        return table
    if isinstance(table, TableName):
        return table.value
    name = getattr(table, "name", None)
    if callable(name):
        return name()
    raise TypeError(f"Cannot resolve a table name from {table!r}")
