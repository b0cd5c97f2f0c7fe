import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from app.core.config import settings
from app.core.errors import NotFoundError, StorageError, ValidationError
from app.db.query import QueryParams, insert_statement, set_clause, where_clause
from app.db.session import DatabaseError, QueryExecutor
from app.models.blog import JSON_FIELDS, OUTLINE_FIELDS, WRITABLE_FIELDS, JsonDocument

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
DEFAULT_STATUS = "draft"

# Decoded by the JSON type on every backend (SQLite returns the raw text)
JSON_RESULT_TYPES = {field: JsonDocument for field in JSON_FIELDS}


def to_json_text(value: Any, field: str = "value") -> Optional[str]:
    """Canonical JSON text for ``value``, or None when there is nothing to store.

    Strings are treated as already-serialised JSON and re-serialised so that
    equivalent documents are stored identically.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON in {field}") from exc
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def parse_limit(raw: Any) -> int:
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    if limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def parse_offset(raw: Any) -> int:
    try:
        offset = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(offset, 0)


class BlogService:
    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    @property
    def table(self) -> str:
        if settings.DB_SCHEMA:
            return f"{settings.DB_SCHEMA}.blogs"
        return "blogs"

    def _execute(self, sql: str, params: QueryParams, failure_message: str) -> List[Dict[str, Any]]:
        try:
            return self.executor.execute(sql, params.values, result_types=JSON_RESULT_TYPES)
        except DatabaseError:
            logger.exception(failure_message)
            raise StorageError(failure_message)

    def list_outlines(
        self,
        status: Optional[str] = "published",
        limit: Any = DEFAULT_LIMIT,
        offset: Any = 0,
        search: Optional[str] = "",
    ) -> List[Dict[str, Any]]:
        params = QueryParams()
        conditions = []

        if status:
            conditions.append(f"status = {params.bind(status, 'status')}")

        if search:
            pattern = params.bind(f"%{search.lower()}%")
            conditions.append(f"(lower(title) LIKE {pattern} OR lower(excerpt) LIKE {pattern})")

        limit_placeholder = params.bind(parse_limit(limit))
        offset_placeholder = params.bind(parse_offset(offset))

        sql = f"""
            SELECT {", ".join(OUTLINE_FIELDS)}
            FROM {self.table}
            {where_clause(conditions)}
            ORDER BY published_at DESC NULLS LAST, created_at DESC
            LIMIT {limit_placeholder}
            OFFSET {offset_placeholder}
        """
        return self._execute(sql, params, "Failed to fetch blog outlines")

    def get_by_slug(self, slug: str) -> Dict[str, Any]:
        params = QueryParams()
        sql = f"SELECT * FROM {self.table} WHERE slug = {params.bind(slug, 'slug')} LIMIT 1"
        rows = self._execute(sql, params, "Failed to fetch blog")
        if not rows:
            raise NotFoundError("Blog not found")
        return rows[0]

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = {field: data.get(field) for field in WRITABLE_FIELDS}
        fields["status"] = fields["status"] or DEFAULT_STATUS
        for field in JSON_FIELDS:
            fields[field] = to_json_text(fields[field], field)

        params = QueryParams()
        sql = insert_statement(self.table, fields, params)
        rows = self._execute(sql, params, "Failed to create blog")
        logger.info("Created blog %s (%s)", rows[0].get("id"), rows[0].get("slug"))
        return rows[0]

    def update(self, blog_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """Write only the keys present in ``data``; ``updated_at`` is always refreshed."""
        fields = {field: data[field] for field in WRITABLE_FIELDS if field in data}
        if not fields:
            raise ValidationError("No fields to update")

        for field in JSON_FIELDS:
            if field in fields:
                fields[field] = to_json_text(fields[field], field)
        fields["updated_at"] = datetime.now(timezone.utc)

        params = QueryParams()
        assignments = set_clause(fields, params)
        sql = f"""
            UPDATE {self.table}
            SET {assignments}
            WHERE id = {params.bind(blog_id, 'id')}
            RETURNING *
        """
        rows = self._execute(sql, params, "Failed to update blog")
        if not rows:
            raise NotFoundError("Blog not found")
        return rows[0]
