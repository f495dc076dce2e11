"""Fluent SQL string builder.

Provides :class:`FluentQuery`, a mutable, append-only builder whose
chained methods write SQL clause fragments in the exact order they are
called.  The finished text is handed to a raw-query executor such as
:class:`~crudkit.kits.raw.RawCrudKit`.

Manifesto:
    The builder is a string-concatenation DSL, nothing more.  It does not
    parse, reorder, deduplicate or validate.  Calling ``where()`` twice
    writes two ``WHERE`` keywords; passing an empty table name writes
    ``" FROM "``.  Malformed input produces malformed SQL, reported only
    when the database rejects it.

Architecture::

    ┌───────────────────────────────────────────────────────────────────┐
    │                          FluentQuery                              │
    │                                                                   │
    │   _parts: list[str]      ← append-only fragments                  │
    │   _params: dict          ← bound values (bind_params=True only)   │
    │                                                                   │
    │   select / from_ / where / and_ / or_        → raw text           │
    │   where_in / where_not_in / and_in / and_not_in                   │
    │   join / left_join / right_join / on                              │
    │   order_by / group_by / limit / between                           │
    │   columns / values                                                │
    │                                                                   │
    │   to_query()     → accumulated text (idempotent)                  │
    │   to_statement() → (text, params)                                 │
    └───────────────────────────────────────────────────────────────────┘

Raw vs bound mode:
    By default every value is interpolated as text.  Values in the
    ``*_in`` family are wrapped in single quotes but **never escaped**, so
    raw mode must not receive untrusted input.

    ``FluentQuery(bind_params=True)`` renders the value-carrying methods
    (``where_in``, ``where_not_in``, ``and_in``, ``and_not_in`` and
    ``values``) as named placeholders ``:p0``, ``:p1`` … and keeps the
    values in :attr:`params` for the executor to bind out-of-band.  The
    remaining methods take SQL text (identifiers, predicates) and are
    written verbatim in both modes.

Thread safety:
    None.  A builder is owned by one caller; sharing an instance across
    threads interleaves fragments unpredictably.

Examples:
    >>> FluentQuery().select("*").from_("users").where("age > 21").to_query()
    'SELECT * FROM users WHERE age > 21'

    >>> FluentQuery().select("id").from_("users").where_in("id", ["a", "b"]).to_query()
    "SELECT id FROM users WHERE id IN ('a', 'b')"

    >>> q = FluentQuery(bind_params=True).select("*").from_("users").where_in("id", [7])
    >>> q.to_statement()
    ('SELECT * FROM users WHERE id = :p0', {'p0': 7})

Tags:
    query-builder, sql, fluent, string-builder, crudkit
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from crudkit.core.strings import to_csv, to_quoted_csv


class FluentQuery:
    """Append-only SQL text builder with chained clause methods.

    Parameters:
        query: Optional initial text the builder starts with.
        bind_params: Emit named placeholders for values instead of
                     interpolating them (see module docstring).
    """

    def __init__(self, query: str = "", *, bind_params: bool = False) -> None:
        self._parts: list[str] = [query] if query else []
        self._params: dict[str, Any] = {}
        self.bind_params = bind_params

    # -- Projection ----------------------------------------------------------

    def select(self, columns: str) -> FluentQuery:
        """Append ``SELECT <columns>``."""
        self._parts.append(f"SELECT {columns}")
        return self

    def select_columns(self, *columns: str, quoted: bool = False) -> FluentQuery:
        """Append ``SELECT`` with a comma-joined column list.

        With ``quoted=True`` each name is wrapped in single quotes.
        """
        rendered = to_quoted_csv(columns) if quoted else to_csv(columns)
        self._parts.append(f"SELECT {rendered}")
        return self

    def from_(self, table: str) -> FluentQuery:
        """Append `` FROM <table>``."""
        self._parts.append(f" FROM {table}")
        return self

    # -- Predicates ----------------------------------------------------------

    def where(self, statement: str) -> FluentQuery:
        self._parts.append(f" WHERE {statement}")
        return self

    def and_(self, statement: str) -> FluentQuery:
        self._parts.append(f" AND {statement}")
        return self

    def or_(self, statement: str) -> FluentQuery:
        self._parts.append(f" OR {statement}")
        return self

    def where_in(self, column: str, values: Iterable[Any] | None) -> FluentQuery:
        """Append `` WHERE column = 'v'`` or `` WHERE column IN ('a', 'b')``.

        No-op when *values* is ``None`` or empty.
        """
        return self._membership(" WHERE ", column, values, negate=False)

    def where_not_in(self, column: str, values: Iterable[Any] | None) -> FluentQuery:
        """Append `` WHERE column <> 'v'`` or `` WHERE column NOT IN ('a', 'b')``.

        No-op when *values* is ``None`` or empty.
        """
        return self._membership(" WHERE ", column, values, negate=True)

    def and_in(self, column: str, values: Iterable[Any] | None) -> FluentQuery:
        return self._membership(" AND ", column, values, negate=False)

    def and_not_in(self, column: str, values: Iterable[Any] | None) -> FluentQuery:
        return self._membership(" AND ", column, values, negate=True)

    def between(self, start: str, end: str) -> FluentQuery:
        self._parts.append(f" BETWEEN {start} AND {end}")
        return self

    # -- Joins ---------------------------------------------------------------

    def join(self, statement: str) -> FluentQuery:
        self._parts.append(f" JOIN {statement}")
        return self

    def left_join(self, statement: str) -> FluentQuery:
        self._parts.append(f" LEFT JOIN {statement}")
        return self

    def right_join(self, statement: str) -> FluentQuery:
        self._parts.append(f" RIGHT JOIN {statement}")
        return self

    def on(self, statement: str) -> FluentQuery:
        self._parts.append(f" ON {statement}")
        return self

    # -- Ordering / grouping / paging ----------------------------------------

    def order_by(self, column: str, ascending: bool = True) -> FluentQuery:
        """Append `` ORDER BY <column> ASC `` (or `` DESC ``).

        The trailing space after the direction is part of the output.
        """
        direction = " ASC " if ascending else " DESC "
        self._parts.append(f" ORDER BY {column}{direction}")
        return self

    def group_by(self, column: str) -> FluentQuery:
        self._parts.append(f" GROUP BY {column}")
        return self

    def limit(self, skip: int, take: int) -> FluentQuery:
        """Append `` LIMIT <skip>,<take>`` (MySQL/SQLite syntax)."""
        self._parts.append(f" LIMIT {skip},{take}")
        return self

    # -- INSERT helpers ------------------------------------------------------

    def columns(self, *columns: str) -> FluentQuery:
        """Append a parenthesised, quoted column list: ``('a', 'b')``."""
        self._parts.append(f"({to_quoted_csv(columns)})")
        return self

    def values(self, *values: Any) -> FluentQuery:
        """Append ``VALUES(a, b)`` with unquoted values.

        In bound mode each value becomes a placeholder.
        """
        if self.bind_params:
            rendered = ", ".join(self._bind(v) for v in values)
        else:
            rendered = to_csv(values)
        self._parts.append(f"VALUES({rendered})")
        return self

    # -- Output --------------------------------------------------------------

    @property
    def params(self) -> dict[str, Any]:
        """Values bound so far (always empty in raw mode)."""
        return dict(self._params)

    def to_query(self) -> str:
        """Return the accumulated text. Does not reset the builder."""
        return "".join(self._parts)

    def to_statement(self) -> tuple[str, dict[str, Any]]:
        """Return ``(text, params)`` ready for a raw-query executor."""
        return self.to_query(), self.params

    def __str__(self) -> str:
        return self.to_query()

    def __repr__(self) -> str:
        return f"FluentQuery({self.to_query()!r}, bind_params={self.bind_params})"

    # -- Internals -----------------------------------------------------------

    def _bind(self, value: Any) -> str:
        name = f"p{len(self._params)}"
        self._params[name] = value
        return f":{name}"

    def _membership(
        self,
        keyword: str,
        column: str,
        values: Iterable[Any] | None,
        *,
        negate: bool,
    ) -> FluentQuery:
        items = list(values) if values is not None else []
        if not items:
            return self

        if len(items) == 1:
            operator = "<>" if negate else "="
            if self.bind_params:
                operand = self._bind(items[0])
            else:
                operand = f"'{items[0]}'"
            clause = f"{column} {operator} {operand}"
        else:
            operator = "NOT IN" if negate else "IN"
            if self.bind_params:
                operand = ", ".join(self._bind(v) for v in items)
            else:
                operand = to_quoted_csv(items)
            clause = f"{column} {operator} ({operand})"

        self._parts.append(f"{keyword}{clause}")
        return self


__all__ = [
    "FluentQuery",
]
