"""
==================================================
Execution helpers for checking generated DDL.
==================================================

The builder in sql/ only produces text. These helpers hand that text to a
real engine through SQLAlchemy to confirm it is accepted. The default
engine is an in-memory SQLite database (see core.config).

Example:
    >>> from sql.ddl import Table, column
    >>> from sql.vocabulary import ColumnType
    >>> from utils.database_utils import (
    ...     create_validation_engine,
    ...     execute_statements,
    ...     get_table_columns
    ... )
    >>>
    >>> engine = create_validation_engine()
    >>> users = Table("users", [column("id", ColumnType.INTEGER)])
    >>> execute_statements([users.create_sql()], engine)
    1
    >>> get_table_columns(engine, "users")
    ['id']
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config
from core.logger import get_logger

logger = get_logger(__name__)


class StatementExecutionError(Exception):
    """Exception raised when the engine rejects a generated statement.

    Attributes:
        statement: The statement that failed
    """

    def __init__(self, message: str, statement: str):
        super().__init__(message)
        self.statement = statement


def _enable_transactional_ddl(engine: Engine) -> None:
    """Make pysqlite run DDL inside the SQLAlchemy transaction.

    pysqlite only opens transactions for DML by default, so a rolled back
    CREATE TABLE would otherwise persist. The driver is put in autocommit
    mode and BEGIN is emitted by SQLAlchemy instead.
    """

    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_validation_engine(
    url: Optional[str] = None,
    echo: Optional[bool] = None
) -> Engine:
    """Create the SQLAlchemy engine used to check statements.

    SQLite engines get transactional DDL, so rollbacks undo CREATE TABLE
    and ALTER TABLE.

    Args:
        url: Database URL (defaults to config.validation_url)
        echo: Enable SQL statement logging (defaults to config.validation.echo)

    Returns:
        SQLAlchemy Engine
    """
    url = url or config.validation_url
    echo = config.validation.echo if echo is None else echo

    logger.debug(f"Creating validation engine for {url}")
    engine = create_engine(url, echo=echo)

    if engine.dialect.name == 'sqlite':
        _enable_transactional_ddl(engine)

    return engine


@contextmanager
def _engine_scope(engine: Optional[Engine]) -> Iterator[Engine]:
    """Yield the given engine, or a fresh one that is disposed afterwards."""
    if engine is not None:
        yield engine
        return

    engine = create_validation_engine()
    try:
        yield engine
    finally:
        engine.dispose()


def execute_statements(
    statements: Iterable[str],
    engine: Optional[Engine] = None
) -> int:
    """Execute statements in a single transaction.

    Statements are sent with exec_driver_sql, so DEFAULT literals containing
    colons are not mistaken for bind parameters.

    Args:
        statements: DDL statements in execution order
        engine: Target engine (a temporary validation engine if omitted)

    Returns:
        Number of statements executed

    Raises:
        StatementExecutionError: If a statement is rejected; the
            transaction is rolled back
    """
    executed = 0
    statement = None

    with _engine_scope(engine) as target:
        try:
            with target.begin() as conn:
                for statement in statements:
                    conn.exec_driver_sql(statement)
                    executed += 1
                    logger.debug(f"Executed: {statement}")
        except SQLAlchemyError as e:
            logger.error(f"Statement rejected: {statement}: {e}")
            raise StatementExecutionError(f"Statement rejected: {e}", statement) from e

    logger.info(f"Executed {executed} statement(s)")
    return executed


def verify_statement(statement: str, engine: Optional[Engine] = None) -> bool:
    """Check that the engine accepts a statement, without keeping its effects.

    The statement runs inside a transaction that is always rolled back.
    Engines from create_validation_engine roll back DDL on SQLite as well.

    Args:
        statement: DDL statement to check
        engine: Target engine (a temporary validation engine if omitted)

    Returns:
        True if the statement executed, False if it was rejected
    """
    with _engine_scope(engine) as target:
        try:
            with target.connect() as conn:
                trans = conn.begin()
                try:
                    conn.exec_driver_sql(statement)
                finally:
                    trans.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Statement rejected: {statement}: {e}")
            return False

    return True


def get_table_columns(engine: Engine, table: str) -> List[str]:
    """Get column names of a table as reported by the engine.

    Args:
        engine: Engine holding the table
        table: Table name

    Returns:
        Column names in table order
    """
    return [col['name'] for col in inspect(engine).get_columns(table)]
