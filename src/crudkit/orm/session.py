"""SQLAlchemy engine factory and pre-configured session.

This module provides:

* ``create_crudkit_engine``    -- Create a SA engine from a URL.
* ``CrudKitSession``           -- ``Session`` subclass with ``expire_on_commit=False``.
* ``crudkit_session_factory``  -- ``sessionmaker`` producing ``CrudKitSession``.

Pooling, transactions and migrations stay with SQLAlchemy; these helpers
only pick defaults.

Tags:
    crudkit, orm, sqlalchemy, session, engine
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def _is_sqlite_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.endswith(":memory:")


def create_crudkit_engine(
    url: str = "sqlite://",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql://…``, etc.)
    echo:
        If ``True``, log all SQL.
    pool_size, max_overflow:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.

    In-memory SQLite uses a ``StaticPool`` so every connection handed out
    by the engine shares one database.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        if _is_sqlite_memory(url):
            kwargs.setdefault("poolclass", StaticPool)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow

    return _sa_create_engine(url, echo=echo, **pool_kwargs, **kwargs)


class CrudKitSession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Entities stay readable after ``save()`` commits.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def crudkit_session_factory(engine: Engine) -> sessionmaker[CrudKitSession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``CrudKitSession`` instances.

    ``sessionmaker`` passes its own ``expire_on_commit`` to every session it
    builds, so the flag is set here as well as in :class:`CrudKitSession`.
    """
    return sessionmaker(bind=engine, class_=CrudKitSession, expire_on_commit=False)
