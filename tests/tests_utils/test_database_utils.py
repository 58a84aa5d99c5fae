"""
===================================================
Pytest suite for utils.database_utils and real SQL.
===================================================

Generated statements are executed against an in-memory SQLite engine to
check that the engine accepts them.

Sections:
---------
1. Unit tests - engine creation, error wrapping
2. Integration tests - CREATE TABLE, FOREIGN KEY, ALTER TABLE on SQLite
3. Regression tests - rollback of checked DDL, engine disposal

How to Execute:
---------------
All tests:          pytest tests/tests_utils/test_database_utils.py -v
Integration only:   pytest tests/tests_utils/test_database_utils.py -m integration
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from sql.ddl import BaseTable, Table, column, foreign_key, primary_key, unique
from sql.vocabulary import Attribute, ColumnType, Default, ForeignKeyAction
from utils.database_utils import (
    StatementExecutionError,
    create_validation_engine,
    execute_statements,
    get_table_columns,
    verify_statement,
)

# =========================
# UNIT TESTS
# =========================

@pytest.mark.unit
def test_create_validation_engine_uses_config_defaults():
    """Test the engine URL and echo flag come from config when omitted."""
    with patch("utils.database_utils.create_engine") as mock_create_engine, \
            patch("utils.database_utils.config") as mock_config:
        mock_config.validation_url = "sqlite:///ddl.db"
        mock_config.validation.echo = True

        create_validation_engine()

    mock_create_engine.assert_called_once_with("sqlite:///ddl.db", echo=True)


@pytest.mark.unit
def test_create_validation_engine_explicit_arguments():
    """Test explicit arguments override config."""
    with patch("utils.database_utils.create_engine") as mock_create_engine:
        create_validation_engine("sqlite://", echo=False)

    mock_create_engine.assert_called_once_with("sqlite://", echo=False)


@pytest.mark.unit
def test_execute_statements_wraps_engine_errors():
    """Test SQLAlchemy errors are re-raised as StatementExecutionError."""
    mock_conn = MagicMock()
    mock_conn.exec_driver_sql.side_effect = OperationalError("CREATE", {}, Exception("boom"))
    mock_engine = MagicMock()
    mock_engine.begin.return_value.__enter__.return_value = mock_conn

    with pytest.raises(StatementExecutionError) as exc_info:
        execute_statements(["CREATE TABLE broken"], mock_engine)

    assert exc_info.value.statement == "CREATE TABLE broken"
    assert isinstance(exc_info.value.__cause__, OperationalError)


@pytest.mark.unit
def test_execute_statements_empty(engine):
    """Test executing nothing returns zero."""
    assert execute_statements([], engine) == 0


# =========================
# INTEGRATION TESTS
# =========================

@pytest.mark.integration
def test_reference_table_is_accepted(engine):
    """Test the reference table shape is accepted by SQLite."""
    hoge = column("hoge", ColumnType.TEXT)
    table = Table(
        "my_table",
        [
            column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY, Attribute.NOT_NULL]),
            column("val", ColumnType.TEXT, [Default("def")]),
            hoge,
            unique([hoge]),
        ],
    )

    assert execute_statements([table.create_sql()], engine) == 1
    assert get_table_columns(engine, "my_table") == ["id", "val", "hoge"]


@pytest.mark.integration
def test_every_column_type_is_accepted(engine):
    """Test a table using all twenty column types is accepted."""
    columns = [
        column(f"c_{column_type.name.lower()}", column_type)
        for column_type in ColumnType
    ]
    table = Table("all_types", columns)

    execute_statements([table.create_sql()], engine)

    assert len(get_table_columns(engine, "all_types")) == 20


@pytest.mark.integration
def test_escaped_default_round_trips_through_engine(engine):
    """Test an escaped DEFAULT literal is stored exactly as given."""
    value = "it's: 'quoted'"
    table = Table("notes", [
        column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY]),
        column("body", ColumnType.TEXT, [Default(value)]),
    ])

    execute_statements([table.create_sql(), "INSERT INTO notes (id) VALUES (1)"], engine)

    with engine.connect() as conn:
        stored = conn.exec_driver_sql("SELECT body FROM notes").scalar()

    assert stored == value


@pytest.mark.integration
def test_foreign_keys_with_actions_are_accepted(engine):
    """Test composite keys and FOREIGN KEY action clauses are accepted."""
    class Authors(BaseTable):
        id = column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY, Attribute.AUTOINCREMENT])

        def name(self):
            return "authors"

        def columns(self):
            return [self.id]

    authors = Authors()
    book_id = column("book_id", ColumnType.INTEGER, [Attribute.NOT_NULL])
    author_id = column("author_id", ColumnType.INTEGER, [Attribute.NOT_NULL])
    books_authors = Table("books_authors", [
        book_id,
        author_id,
        primary_key([book_id, author_id]),
        foreign_key(
            author_id, ForeignKeyAction.REFERENCES, authors, Authors.id,
            [
                ForeignKeyAction.ON_DELETE, ForeignKeyAction.CASCADE,
                ForeignKeyAction.ON_UPDATE, ForeignKeyAction.NO_ACTION,
                ForeignKeyAction.DEFERRABLE_INITIALLY_DEFERRED,
            ]
        ),
    ])

    executed = execute_statements([authors.create_sql(), books_authors.create_sql()], engine)

    assert executed == 2
    assert get_table_columns(engine, "books_authors") == ["book_id", "author_id"]


@pytest.mark.integration
def test_alter_table_add_is_accepted(engine):
    """Test ALTER TABLE ... ADD output is accepted and adds the column."""
    users = Table("users", [column("id", ColumnType.INTEGER, [Attribute.PRIMARY_KEY])])
    nickname = column("nickname", ColumnType.TEXT, [Default("anonymous")])

    execute_statements([users.create_sql(), users.create_add_sql(nickname)], engine)

    assert get_table_columns(engine, "users") == ["id", "nickname"]


@pytest.mark.integration
def test_verify_statement(engine):
    """Test verify_statement reports acceptance and rejection."""
    table = Table("checked", [column("id", ColumnType.INTEGER)])

    assert verify_statement(table.create_sql(), engine) is True
    assert verify_statement("CREATE TABLE (", engine) is False


@pytest.mark.integration
def test_rejected_statement_raises(engine):
    """Test a statement rejected by the engine raises StatementExecutionError."""
    table = Table("twice", [column("id", ColumnType.INTEGER)])

    with pytest.raises(StatementExecutionError) as exc_info:
        execute_statements([table.create_sql(), table.create_sql()], engine)

    assert exc_info.value.statement == table.create_sql()


# =========================
# REGRESSION TESTS
# =========================

@pytest.mark.regression
def test_verify_statement_leaves_no_table_behind(engine):
    """Test a verified CREATE TABLE is rolled back and can be executed afterwards."""
    sql = Table("t", [column("id", ColumnType.INTEGER)]).create_sql()

    assert verify_statement(sql, engine) is True
    assert inspect(engine).has_table("t") is False
    assert execute_statements([sql], engine) == 1
    assert get_table_columns(engine, "t") == ["id"]


@pytest.mark.regression
def test_rejected_batch_is_rolled_back(engine):
    """Test statements before a rejected one are not kept."""
    first = Table("first", [column("id", ColumnType.INTEGER)]).create_sql()

    with pytest.raises(StatementExecutionError):
        execute_statements([first, "CREATE TABLE ("], engine)

    assert inspect(engine).has_table("first") is False


@pytest.mark.regression
def test_temporary_engine_is_disposed_after_execute():
    """Test an engine created for a single call is disposed."""
    mock_engine = MagicMock()

    with patch("utils.database_utils.create_validation_engine", return_value=mock_engine):
        execute_statements(["CREATE TABLE t (id INTEGER)"])

    mock_engine.begin.assert_called_once()
    mock_engine.dispose.assert_called_once()


@pytest.mark.regression
def test_temporary_engine_is_disposed_after_failed_execute():
    """Test the temporary engine is disposed even when a statement is rejected."""
    mock_conn = MagicMock()
    mock_conn.exec_driver_sql.side_effect = OperationalError("CREATE", {}, Exception("boom"))
    mock_engine = MagicMock()
    mock_engine.begin.return_value.__enter__.return_value = mock_conn

    with patch("utils.database_utils.create_validation_engine", return_value=mock_engine):
        with pytest.raises(StatementExecutionError):
            execute_statements(["CREATE TABLE broken"])

    mock_engine.dispose.assert_called_once()


@pytest.mark.regression
def test_temporary_engine_is_disposed_after_verify():
    """Test verify_statement disposes the engine it created."""
    mock_engine = MagicMock()

    with patch("utils.database_utils.create_validation_engine", return_value=mock_engine):
        assert verify_statement("CREATE TABLE t (id INTEGER)") is True

    mock_engine.dispose.assert_called_once()


@pytest.mark.regression
def test_given_engine_is_not_disposed(engine):
    """Test a caller-supplied engine stays usable after the call."""
    execute_statements([Table("kept", [column("id", ColumnType.INTEGER)]).create_sql()], engine)

    assert get_table_columns(engine, "kept") == ["id"]
