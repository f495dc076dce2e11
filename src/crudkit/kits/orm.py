"""Relational CRUD facade over a SQLAlchemy ORM session.

:class:`OrmCrudKit` exposes the uniform CRUD surface (insert, update,
delete, toggle, find, count, exists, save) for every model derived from
:class:`~crudkit.orm.base.EntityBase`.  Each operation is a pass-through
to the session; change tracking, identity map and SQL generation stay
with SQLAlchemy.

Architecture::

    ┌────────────────────────────────────────────────────────────────┐
    │                        OrmCrudKit                              │
    │                                                                │
    │   session: Session                                             │
    │                                                                │
    │   insert / insert_many       → session.add / add_all           │
    │   update / update_many       → session.merge                   │
    │   delete / delete_many       → session.delete                  │
    │   toggle                     → flip is_deprecated + merge      │
    │   find_by_id / find / select → session.get / scalars(select)   │
    │   count / exists             → SELECT count(*) / LIMIT 1       │
    │   save                       → session.commit                  │
    └────────────────────────────────────────────────────────────────┘

Mutators take ``save_now=True``: the change is committed immediately.
Pass ``save_now=False`` to batch several changes and call :meth:`save`
once.

Usage:
    >>> kit = OrmCrudKit(session)
    >>> user = User(name="a")
    >>> kit.insert(user)
    >>> kit.exists(User, User.name == "a")
    True
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, Select, func, literal, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crudkit.core.errors import DatabaseError
from crudkit.core.logging import get_logger
from crudkit.orm.base import EntityBase

logger = get_logger(__name__)

E = TypeVar("E", bound=EntityBase)


class OrmCrudKit:
    """Generic relational facade bound to one session.

    Parameters:
        session: The SQLAlchemy session all operations run in.  The kit
                 does not own it; closing the session is the caller's job.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- Writes ------------------------------------------------------------

    def insert(self, entity: EntityBase, save_now: bool = True) -> None:
        logger.debug("orm.insert", entity=type(entity).__name__)
        self.session.add(entity)
        self._maybe_save(save_now)

    def insert_many(self, entities: Sequence[EntityBase], save_now: bool = True) -> None:
        logger.debug("orm.insert_many", count=len(entities))
        self.session.add_all(entities)
        self._maybe_save(save_now)

    def update(self, entity: EntityBase, save_now: bool = True) -> None:
        """Attach *entity* (tracked or detached) and persist its state."""
        logger.debug("orm.update", entity=type(entity).__name__)
        self.session.merge(entity)
        self._maybe_save(save_now)

    def update_many(self, entities: Sequence[EntityBase], save_now: bool = True) -> None:
        logger.debug("orm.update_many", count=len(entities))
        for entity in entities:
            self.session.merge(entity)
        self._maybe_save(save_now)

    def delete(self, entity: EntityBase, save_now: bool = True) -> None:
        logger.debug("orm.delete", entity=type(entity).__name__)
        self.session.delete(self._attached(entity))
        self._maybe_save(save_now)

    def delete_many(self, entities: Sequence[EntityBase], save_now: bool = True) -> None:
        logger.debug("orm.delete_many", count=len(entities))
        for entity in entities:
            self.session.delete(self._attached(entity))
        self._maybe_save(save_now)

    def toggle(
        self, entities: EntityBase | Sequence[EntityBase], save_now: bool = True
    ) -> None:
        """Flip ``is_deprecated`` on one entity or a list of entities.

        The caller's instances are updated in place.
        """
        batch = [entities] if isinstance(entities, EntityBase) else list(entities)
        logger.debug("orm.toggle", count=len(batch))
        for entity in batch:
            entity.is_deprecated = not entity.is_deprecated
            self.session.merge(entity)
        self._maybe_save(save_now)

    # -- Reads -------------------------------------------------------------

    def find_by_id(self, model: type[E], id: Any, track_changes: bool = False) -> E | None:
        """Load one entity by primary key.

        With ``track_changes=False`` an entity loaded by this call is
        detached from the session, so later edits to it are not flushed.
        An entity the session already tracked stays tracked.
        """
        held = self._held()
        entity = self.session.get(model, id)
        if entity is not None and not track_changes:
            self._release([entity], held)
        return entity

    def select(self, model: type[E], *criteria: ColumnElement[bool]) -> Select[tuple[E]]:
        """Composable ``SELECT`` over *model* filtered by *criteria*.

        Execute with ``kit.session.scalars(stmt)`` after adding ordering,
        paging or joins.
        """
        return select(model).where(*criteria)

    def find(
        self, model: type[E], *criteria: ColumnElement[bool], track_changes: bool = False
    ) -> list[E]:
        held = self._held()
        entities = list(self.session.scalars(self.select(model, *criteria)))
        if not track_changes:
            self._release(entities, held)
        return entities

    def count(self, model: type[EntityBase], *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        return int(self.session.scalar(stmt) or 0)

    def exists(self, model: type[EntityBase], *criteria: ColumnElement[bool]) -> bool:
        stmt = select(literal(1)).select_from(model).where(*criteria).limit(1)
        return self.session.scalar(stmt) is not None

    # -- Unit of work ------------------------------------------------------

    def save(self) -> int:
        """Commit pending changes and return how many entities were written.

        Raises:
            DatabaseError: The commit failed; the session has been rolled back.
        """
        pending = len(self.session.new) + len(self.session.dirty) + len(self.session.deleted)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("orm.save_failed", error=str(e))
            raise DatabaseError("Failed to save changes", cause=e) from e
        logger.debug("orm.save", written=pending)
        return pending

    # -- Internals ---------------------------------------------------------

    def _maybe_save(self, save_now: bool) -> None:
        if save_now:
            self.save()

    def _held(self) -> set[int]:
        # Pending entities count: autoflush turns them persistent during the read.
        objects = [*self.session.identity_map.values(), *self.session.new]
        return {id(obj) for obj in objects}

    def _release(self, entities: Sequence[EntityBase], held: set[int]) -> None:
        for entity in entities:
            if id(entity) not in held:
                self.session.expunge(entity)

    def _attached(self, entity: EntityBase) -> EntityBase:
        if entity in self.session:
            return entity
        return self.session.merge(entity)


__all__ = [
    "OrmCrudKit",
]
