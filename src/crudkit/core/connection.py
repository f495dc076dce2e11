"""Connection factory: create SQL connections from a configured connection string.

:class:`SqlConnectionFactory` resolves a named connection string from
:class:`~crudkit.config.settings.CrudKitSettings` (or takes a URL
directly) and hands out a **new** SQLAlchemy ``Connection`` on every
:meth:`~SqlConnectionFactory.get_connection` call.  The raw-query
executor opens one per operation and closes it when done.

Usage
-----
::

    from crudkit.config import CrudKitSettings
    from crudkit.core.connection import SqlConnectionFactory

    settings = CrudKitSettings(connection_strings={"reporting": "sqlite:///r.db"})
    factory = SqlConnectionFactory.from_settings(settings, "reporting")

    with factory.get_connection() as conn:
        conn.execute(text("SELECT 1"))

    print(factory.info)
    # ConnectionInfo(backend='sqlite', url='sqlite:///r.db')

Design
------
The engine (and therefore SQLAlchemy's pool) is created lazily on first
use and reused until :meth:`dispose`.  Pooling itself is SQLAlchemy's
concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.engine import Connection, Engine, make_url

from crudkit.core.errors import MissingConfigError
from crudkit.core.logging import get_logger
from crudkit.orm.session import create_crudkit_engine

if TYPE_CHECKING:
    from crudkit.config.settings import CrudKitSettings

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConnectionInfo:
    """Metadata about a configured connection string."""

    backend: str
    """Backend identifier: ``"sqlite"``, ``"postgresql"``, ``"mysql"`` …"""

    url: str
    """The connection string, password masked."""

    def __repr__(self) -> str:
        return f"ConnectionInfo(backend={self.backend!r}, url={self.url!r})"

    @property
    def is_sqlite(self) -> bool:
        return self.backend == "sqlite"


class SqlConnectionFactory:
    """Produces new connection handles from one connection string.

    Parameters:
        url: SQLAlchemy database URL.
        echo: Log every statement through SQLAlchemy.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self._url = url
        self._echo = echo
        self._engine: Engine | None = None

    @classmethod
    def from_settings(
        cls, settings: CrudKitSettings, name: str = "default"
    ) -> SqlConnectionFactory:
        """Build a factory from the connection string registered under *name*.

        Raises:
            MissingConfigError: If *name* is not configured.
        """
        url = settings.connection_string(name)
        if not url:
            raise MissingConfigError(
                f"connection_strings.{name}",
                f"Connection string '{name}' is not configured",
            )
        return cls(url, echo=settings.database_echo)

    @property
    def info(self) -> ConnectionInfo:
        parsed = make_url(self._url)
        return ConnectionInfo(
            backend=parsed.get_backend_name(),
            url=parsed.render_as_string(hide_password=True),
        )

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine, created on first access."""
        if self._engine is None:
            self._engine = create_crudkit_engine(self._url, echo=self._echo)
            logger.debug("connection.engine_created", backend=self.info.backend)
        return self._engine

    def get_connection(self) -> Connection:
        """Return a new connection. The caller is responsible for closing it."""
        return self.engine.connect()

    def dispose(self) -> None:
        """Release the engine and its pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def close(self) -> None:
        self.dispose()


__all__ = [
    "ConnectionInfo",
    "SqlConnectionFactory",
]
