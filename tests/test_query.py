"""
tests/test_query.py
"""
import pytest

from app.core.errors import ValidationError
from app.db.query import QueryParams, insert_statement, set_clause, where_clause
from app.services.blog import parse_limit, parse_offset, to_json_text


def test_bind_numbers_placeholders_in_order():
    params = QueryParams()
    assert params.bind("published", "status") == ":p1"
    assert params.bind("%fish%") == ":p2"
    assert params.values == ["published", "%fish%"]
    assert [b.column for b in params.bindings] == ["status", None]
    assert [b.index for b in params.bindings] == [1, 2]
    assert len(params) == 2


def test_where_clause_joins_conditions():
    assert where_clause([]) == ""
    assert where_clause(["status = :p1"]) == "WHERE status = :p1"
    assert where_clause(["a = :p1", "b = :p2"]) == "WHERE a = :p1 AND b = :p2"


def test_set_clause_keeps_values_out_of_sql():
    params = QueryParams()
    params.bind("already-bound")
    sql = set_clause({"title": "x'; DROP TABLE blogs; --", "subtitle": None}, params)

    assert sql == "title = :p2, subtitle = :p3"
    assert "DROP" not in sql
    assert params.values == ["already-bound", "x'; DROP TABLE blogs; --", None]


def test_insert_statement_returns_row():
    params = QueryParams()
    sql = insert_statement("app.blogs", {"slug": "s", "status": "draft"}, params)
    assert sql == "INSERT INTO app.blogs (slug, status) VALUES (:p1, :p2) RETURNING *"
    assert params.values == ["s", "draft"]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ('{ "a" : 1 }', '{"a":1}'),
        ("[]", "[]"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
        ([{"q": "Öl?"}], '[{"q":"Öl?"}]'),
    ],
)
def test_to_json_text(value, expected):
    assert to_json_text(value) == expected


def test_to_json_text_rejects_malformed_text():
    with pytest.raises(ValidationError) as excinfo:
        to_json_text("{oops", "schema_json")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Invalid JSON in schema_json"


@pytest.mark.parametrize(
    "raw, expected",
    [("20", 20), ("7", 7), ("500", 100), ("abc", 20), ("0", 20), ("-3", 20), (None, 20)],
)
def test_parse_limit(raw, expected):
    assert parse_limit(raw) == expected


@pytest.mark.parametrize("raw, expected", [("0", 0), ("40", 40), ("-1", 0), ("x", 0)])
def test_parse_offset(raw, expected):
    assert parse_offset(raw) == expected

