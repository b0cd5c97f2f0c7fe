"""Parameter-binding helpers for hand-written SQL.

Values never end up in the SQL text. Every value is appended to a
:class:`QueryParams` list and referenced by a positional placeholder
(``:p1``, ``:p2``, ...) that :class:`app.db.session.QueryExecutor` binds.
"""
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence


class Binding(NamedTuple):
    column: Optional[str]
    index: int
    value: Any


def placeholder(index: int) -> str:
    return f":p{index}"


class QueryParams:
    def __init__(self):
        self.bindings: List[Binding] = []

    def bind(self, value: Any, column: Optional[str] = None) -> str:
        """Append ``value`` and return the placeholder that refers to it."""
        index = len(self.bindings) + 1
        self.bindings.append(Binding(column, index, value))
        return placeholder(index)

    @property
    def values(self) -> List[Any]:
        return [binding.value for binding in self.bindings]

    def __len__(self) -> int:
        return len(self.bindings)


def where_clause(conditions: Sequence[str]) -> str:
    if not conditions:
        return ""
    return "WHERE " + " AND ".join(conditions)


def set_clause(fields: Mapping[str, Any], params: QueryParams) -> str:
    """Render ``col = :pN`` pairs for every entry of ``fields``, in order."""
    return ", ".join(f"{column} = {params.bind(value, column)}" for column, value in fields.items())


def insert_statement(table: str, fields: Mapping[str, Any], params: QueryParams) -> str:
    columns = ", ".join(fields)
    placeholders = ", ".join(params.bind(value, column) for column, value in fields.items())
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *"
