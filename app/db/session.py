import logging
import os
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence
from sqlalchemy import bindparam, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import CreateSchema
from sqlalchemy.types import TypeEngine
from sqlmodel import SQLModel, create_engine
from app.core.config import settings

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when a connection or statement fails."""


def _sqlite_schema_path(database: Optional[str], schema: str) -> str:
    if not database or database == ":memory:":
        return ":memory:"
    root, ext = os.path.splitext(database)
    return f"{root}.{schema}{ext}"


def _unicode_lower(value):
    if isinstance(value, str):
        return value.lower()
    return value


def build_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    kwargs: Dict[str, Any] = {}

    if url.get_backend_name() == "sqlite":
        # check_same_thread is needed for SQLite since requests run on a thread pool
        kwargs["connect_args"] = {"check_same_thread": False}
        if not url.database or url.database == ":memory:":
            kwargs["poolclass"] = StaticPool
    elif settings.is_production:
        # Serverless: one connection, TLS required, recycle idle connections quickly
        kwargs["connect_args"] = {"sslmode": "require"}
        kwargs["pool_size"] = 1
        kwargs["max_overflow"] = 0
        kwargs["pool_recycle"] = 20
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)

    if url.get_backend_name() == "sqlite":
        schema = settings.DB_SCHEMA
        attach_path = _sqlite_schema_path(url.database, schema)

        @event.listens_for(engine, "connect")
        def _prepare_sqlite(dbapi_connection, connection_record):
            # The built-in lower() only folds ASCII
            dbapi_connection.create_function("lower", 1, _unicode_lower)
            if schema:
                # SQLite has no schemas; attach a database under the schema name so
                # qualified names like app.blogs resolve
                dbapi_connection.execute(f"ATTACH DATABASE '{attach_path}' AS {schema}")

    return engine


class QueryExecutor:
    """Runs one SQL statement per call against a lazily created engine.

    Placeholders in ``sql_text`` are positional: ``:p1`` binds
    ``parameters[0]``, ``:p2`` binds ``parameters[1]`` and so on. Each call
    checks a connection out of the pool inside its own transaction and always
    returns it, whether the statement succeeds or fails.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        self._database_url = database_url
        self._engine = engine
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    url = self._database_url or settings.database_url
                    self._engine = build_engine(url)
                    logger.info("Created %s engine", self._engine.dialect.name)
        return self._engine

    def execute(
        self,
        sql_text: str,
        parameters: Sequence[Any] = (),
        result_types: Optional[Mapping[str, TypeEngine]] = None,
    ) -> List[Dict[str, Any]]:
        """Run ``sql_text`` and return its rows as dicts.

        ``result_types`` maps result column names to SQLAlchemy types whose
        result processing should apply, e.g. JSON columns that SQLite returns
        as text. Columns missing from the result are ignored.
        """
        statement = text(sql_text)
        if parameters:
            statement = statement.bindparams(
                *(bindparam(f"p{index}", value) for index, value in enumerate(parameters, start=1))
            )
        if result_types:
            statement = statement.columns(**result_types)

        try:
            with self.engine.begin() as connection:
                result = connection.execute(statement)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as exc:
            raise DatabaseError(str(exc)) from exc

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None


executor = QueryExecutor()


def get_executor() -> QueryExecutor:
    return executor


def create_db_and_tables(query_executor: Optional[QueryExecutor] = None) -> None:
    engine = (query_executor or executor).engine
    schema = settings.DB_SCHEMA
    if schema and engine.dialect.name == "postgresql":
        with engine.begin() as connection:
            connection.execute(CreateSchema(schema, if_not_exists=True))
    SQLModel.metadata.create_all(engine)


def check_connection(query_executor: Optional[QueryExecutor] = None) -> None:
    """Raise DatabaseError unless ``SELECT 1`` round-trips."""
    rows = (query_executor or executor).execute("SELECT 1 AS ok")
    if not rows or rows[0].get("ok") != 1:
        raise DatabaseError("Unexpected response from database")
