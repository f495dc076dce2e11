"""Raw-query executor over a connection factory.

:class:`RawCrudKit` runs finished SQL text (typically produced by
:class:`~crudkit.query.fluent.FluentQuery`) with an optional mapping of
named parameters.  Every call opens a connection from the factory and
closes it before returning.

Rows come back as dicts, or as instances of a caller-supplied ``model``
built with ``model(**row)`` (dataclasses, pydantic models, plain classes
with keyword constructors).

Text with parameters is compiled by SQLAlchemy (``:name`` placeholders).
Text without parameters goes to the driver unchanged, so raw-mode builder
output may contain colons inside quoted literals.  Caller ``params``
that reuse a builder placeholder name (``p0``, ``p1`` ...) are rejected.

Failures are raised once as :class:`~crudkit.core.errors.QueryError`
chained to the SQLAlchemy exception.  Nothing is retried.

Usage:
    >>> kit = RawCrudKit(SqlConnectionFactory("sqlite:///app.db"))
    >>> q = FluentQuery(bind_params=True).select("*").from_("users").where_in("id", [1, 2])
    >>> kit.find(q)
    [{'id': 1, 'name': 'a'}, {'id': 2, 'name': 'b'}]
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from crudkit.core.errors import QueryError
from crudkit.core.logging import get_logger
from crudkit.core.protocols import ConnectionFactory
from crudkit.query.fluent import FluentQuery

logger = get_logger(__name__)


class RawCrudKit:
    """Executes raw SQL through connections from *connection_factory*."""

    def __init__(self, connection_factory: ConnectionFactory) -> None:
        self._connection_factory = connection_factory

    def find_one(
        self,
        query: str | FluentQuery,
        params: Mapping[str, Any] | None = None,
        *,
        model: type[Any] | None = None,
    ) -> Any | None:
        """Return the first matching row, or ``None`` when there is none."""
        sql, bound = self._statement(query, params)
        with self._connection(sql) as conn:
            row = self._run(conn, sql, bound).mappings().first()
        return self._map(row, model) if row is not None else None

    def find(
        self,
        query: str | FluentQuery,
        params: Mapping[str, Any] | None = None,
        *,
        model: type[Any] | None = None,
    ) -> list[Any]:
        """Return every matching row; an empty list when nothing matches."""
        sql, bound = self._statement(query, params)
        with self._connection(sql) as conn:
            rows = self._run(conn, sql, bound).mappings().all()
        return [self._map(row, model) for row in rows]

    def execute(
        self, query: str | FluentQuery, params: Mapping[str, Any] | None = None
    ) -> bool:
        """Run a non-query (INSERT/UPDATE/DELETE) and commit.

        Returns ``True`` when one or more rows were affected.
        """
        sql, bound = self._statement(query, params)
        with self._connection(sql) as conn:
            affected = self._run(conn, sql, bound).rowcount
            conn.commit()
        return affected > 0

    # -- Internals ---------------------------------------------------------

    @staticmethod
    def _statement(
        query: str | FluentQuery, params: Mapping[str, Any] | None
    ) -> tuple[str, dict[str, Any]]:
        if isinstance(query, FluentQuery):
            sql, bound = query.to_statement()
        else:
            sql, bound = query, {}
        if params:
            clash = sorted(bound.keys() & params.keys())
            if clash:
                raise QueryError(
                    f"Parameters collide with the builder's bindings: {', '.join(clash)}",
                    query=sql,
                )
            bound.update(params)
        return sql, bound

    @staticmethod
    def _run(conn: Connection, sql: str, bound: dict[str, Any]) -> CursorResult[Any]:
        # Without parameters the text goes to the driver as-is, so a ":word"
        # inside a quoted literal is not read as a bind parameter.
        if bound:
            return conn.execute(text(sql), bound)
        return conn.exec_driver_sql(sql)

    @staticmethod
    def _map(row: Mapping[str, Any], model: type[Any] | None) -> Any:
        return model(**row) if model is not None else dict(row)

    @contextmanager
    def _connection(self, sql: str) -> Iterator[Connection]:
        logger.debug("raw.execute", query=sql)
        try:
            with self._connection_factory.get_connection() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.error("raw.query_failed", query=sql, error=str(e))
            raise QueryError("Raw query failed", query=sql, cause=e) from e


__all__ = [
    "RawCrudKit",
]
