"""
==========================
Utility Functions Package.
==========================

Helpers that run generated DDL against a real database engine.

Modules:
    database_utils: SQLAlchemy execution and reflection helpers
"""

__version__ = "1.0.0"
__all__ = [
    'StatementExecutionError',
    'create_validation_engine',
    'execute_statements',
    'verify_statement',
    'get_table_columns'
]

from .database_utils import (
    StatementExecutionError,
    create_validation_engine,
    execute_statements,
    get_table_columns,
    verify_statement,
)
