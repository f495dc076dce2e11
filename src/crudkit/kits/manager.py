"""Lazy access to the relational and document kits from one object.

Applications that talk to both SQL and MongoDB resolve a single
:class:`CrudKitManager` and reach each store through :attr:`sql` and
:attr:`mongo`.  Each kit is built on first access, so a process that
only uses SQL never opens a MongoDB client.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from crudkit.kits.mongo import MongoCrudKit
from crudkit.kits.orm import OrmCrudKit

if TYPE_CHECKING:
    from crudkit.config.settings import CrudKitSettings


class CrudKitManager:
    """Holds a session and settings; builds kits on demand."""

    def __init__(self, session: Session, settings: CrudKitSettings) -> None:
        self._session = session
        self._settings = settings

    @cached_property
    def sql(self) -> OrmCrudKit:
        return OrmCrudKit(self._session)

    @cached_property
    def mongo(self) -> MongoCrudKit:
        return MongoCrudKit.from_options(self._settings.mongo)

    def close(self) -> None:
        """Close the MongoDB client if :attr:`mongo` was ever built.

        The session belongs to the caller and is left open.
        """
        if "mongo" in self.__dict__:
            self.mongo.close()


__all__ = [
    "CrudKitManager",
]
