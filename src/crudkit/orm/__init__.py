"""SQLAlchemy 2.0 ORM layer for crudkit.

Modules
-------
base        CrudKitBase (declarative base) + EntityBase
session     Engine factory, CrudKitSession, crudkit_session_factory

Tags:
    crudkit, orm, sqlalchemy, declarative
"""

from __future__ import annotations

from crudkit.orm.base import CrudKitBase, EntityBase
from crudkit.orm.session import (
    CrudKitSession,
    create_crudkit_engine,
    crudkit_session_factory,
)

__all__ = [
    "CrudKitBase",
    "EntityBase",
    "CrudKitSession",
    "create_crudkit_engine",
    "crudkit_session_factory",
]
