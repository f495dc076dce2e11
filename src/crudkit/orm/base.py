"""Declarative base and the entity base class for crudkit ORM models.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map``
so models can annotate columns with plain Python types.

Every model handled by :class:`~crudkit.kits.orm.OrmCrudKit` subclasses
:class:`EntityBase`, which contributes:

* **id**: ``uuid.UUID`` primary key, assigned at construction
* **is_deprecated**: soft-delete flag flipped by ``toggle()``
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Boolean, Integer, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class CrudKitBase(DeclarativeBase):
    """Shared declarative base for crudkit models.

    * ``str``       → ``Text``
    * ``int``       → ``Integer``
    * ``bool``      → ``Boolean``
    * ``uuid.UUID`` → ``Uuid`` (CHAR(32) on SQLite, native UUID elsewhere)
    """

    type_annotation_map = {
        str: Text,
        int: Integer,
        bool: Boolean,
        uuid.UUID: Uuid,
    }


class EntityBase(CrudKitBase):
    """Abstract base for relational entities.

    The id is generated in the constructor (not at flush) so callers can
    reference it before the entity is saved.
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    is_deprecated: Mapped[bool] = mapped_column(nullable=False, default=False)

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("is_deprecated", False)
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!s})"
