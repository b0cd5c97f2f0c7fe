"""
tests/test_session.py
"""
import pytest

from app.db.session import (
    DatabaseError,
    QueryExecutor,
    _sqlite_schema_path,
    check_connection,
    executor,
)


def test_execute_returns_rows_as_dicts():
    rows = executor.execute("SELECT :p1 AS word, :p2 AS number", ["cask", 3])
    assert rows == [{"word": "cask", "number": 3}]


def test_execute_without_result_set_returns_empty_list():
    assert executor.execute("DELETE FROM app.blogs WHERE slug = :p1", ["missing"]) == []


def test_execute_wraps_statement_errors():
    with pytest.raises(DatabaseError) as excinfo:
        executor.execute("SELECT * FROM app.no_such_table")
    assert excinfo.value.__cause__ is not None


def test_failed_statement_does_not_poison_the_pool():
    with pytest.raises(DatabaseError):
        executor.execute("INSERT INTO app.blogs (status) VALUES (:p1)", ["draft"])
    assert executor.execute("SELECT 1 AS ok") == [{"ok": 1}]


def test_engine_is_created_lazily_and_disposed():
    local = QueryExecutor("sqlite://")
    assert local._engine is None
    assert local.execute("SELECT 2 AS two") == [{"two": 2}]
    assert local._engine is not None
    local.dispose()
    assert local._engine is None


def test_check_connection_ok():
    check_connection()


def test_check_connection_rejects_unexpected_result():
    class OddExecutor:
        def execute(self, sql_text, parameters=(), result_types=None):
            return [{"ok": 0}]

    with pytest.raises(DatabaseError):
        check_connection(OddExecutor())


@pytest.mark.parametrize(
    "database, expected",
    [
        (None, ":memory:"),
        (":memory:", ":memory:"),
        ("./caskly.db", "./caskly.app.db"),
        ("blogdata", "blogdata.app"),
    ],
)
def test_sqlite_schema_path(database, expected):
    assert _sqlite_schema_path(database, "app") == expected


def test_result_types_decode_json_columns():
    from sqlalchemy import JSON

    rows = executor.execute(
        "SELECT :p1 AS doc, :p2 AS plain",
        ['"123"', '"123"'],
        result_types={"doc": JSON(), "missing": JSON()},
    )
    assert rows == [{"doc": "123", "plain": '"123"'}]


def test_sqlite_lower_folds_unicode():
    assert executor.execute("SELECT lower(:p1) AS folded", ["ÖL UND BIER"]) == [{"folded": "öl und bier"}]
