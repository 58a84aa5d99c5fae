"""
====================================================
SQL DDL builder package.
====================================================

Builds CREATE TABLE and ALTER TABLE ... ADD statements from typed column
descriptions. All rendering is pure; nothing here talks to a database.

The package follows a strictly downward dependency order:
    - vocabulary.py: Column types, attributes, foreign-key actions, escaping
    - names.py: Table identifiers (TableName)
    - columns.py: Column entities (definitions and constraints)
    - ddl.py: Builder functions and the Table abstraction

Example:
    >>> from sql import Attribute, ColumnType, ForeignKeyAction, Table
    >>> from sql import column, foreign_key
    >>>
    >>> user_id = column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY])
    >>> users = Table("users", [user_id])
    >>>
    >>> owner = column("owner", ColumnType.INTEGER)
    >>> posts = Table("posts", [
    ...     owner,
    ...     foreign_key(owner, ForeignKeyAction.REFERENCES, users, user_id,
    ...                 [ForeignKeyAction.ON_DELETE, ForeignKeyAction.CASCADE])
    ... ])
    >>> posts.create_sql()
    'CREATE TABLE posts (owner INTEGER, FOREIGN KEY (owner) REFERENCES users (id) ON DELETE CASCADE)'
"""

__version__ = "1.0.0"
__all__ = [
    # Vocabulary
    'ColumnType', 'Attribute', 'Default', 'ForeignKeyAction',
    'escape_string', 'render',
    # Columns
    'Column', 'ColumnDefinition', 'ColumnConstraint', 'ColumnShapeError',
    # Builders and tables
    'column', 'primary_key', 'unique', 'foreign_key',
    'create_sql', 'create_add_sql',
    'TableLike', 'BaseTable', 'Table', 'TableName', 'table_name'
]

from .columns import Column, ColumnConstraint, ColumnDefinition, ColumnShapeError
from .ddl import (
    BaseTable,
    Table,
    TableLike,
    column,
    create_add_sql,
    create_sql,
    foreign_key,
    primary_key,
    unique,
)
from .names import TableName, table_name
from .vocabulary import (
    Attribute,
    ColumnType,
    Default,
    ForeignKeyAction,
    escape_string,
    render,
)
