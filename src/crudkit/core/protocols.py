"""
Canonical protocol definitions for crudkit.

Every facade crudkit ships is described here as a structural protocol.
Application code and the service container depend on these shapes, never
on the concrete kit classes, so a test double or an alternative backend
satisfies them without inheritance.

Architecture:
    ::

        protocols.py
        ├── ConnectionFactory        — new SQL connection per call
        ├── OrmCrudKitProtocol       — relational facade (SQLAlchemy Session)
        ├── MongoCrudKitProtocol     — document facade (pymongo Database)
        ├── RawCrudKitProtocol       — raw-query executor
        └── CrudKitManagerProtocol   — lazy access to SQL + Mongo kits

    Implementations:
        crudkit.core.connection.SqlConnectionFactory
        crudkit.kits.orm.OrmCrudKit
        crudkit.kits.mongo.MongoCrudKit
        crudkit.kits.raw.RawCrudKit
        crudkit.kits.manager.CrudKitManager

Guardrails:
    ❌ DON'T: Register concrete kit classes as container keys
    ✅ DO: Register and resolve by protocol

    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts

Tags:
    protocol, repository, crud, contracts, crudkit
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.engine import Connection

    from crudkit.kits.mongo import MongoDocument
    from crudkit.orm.base import EntityBase
    from crudkit.query.fluent import FluentQuery

E = TypeVar("E", bound="EntityBase")
D = TypeVar("D", bound="MongoDocument")


@runtime_checkable
class ConnectionFactory(Protocol):
    """Produces a new connection handle from a configured connection string."""

    def get_connection(self) -> Connection:
        """Return a new SQLAlchemy ``Connection``. Caller closes it."""
        ...


@runtime_checkable
class OrmCrudKitProtocol(Protocol):
    """Relational CRUD facade over one ORM session."""

    def insert(self, entity: EntityBase, save_now: bool = True) -> None: ...

    def insert_many(self, entities: Sequence[EntityBase], save_now: bool = True) -> None: ...

    def update(self, entity: EntityBase, save_now: bool = True) -> None: ...

    def update_many(self, entities: Sequence[EntityBase], save_now: bool = True) -> None: ...

    def delete(self, entity: EntityBase, save_now: bool = True) -> None: ...

    def delete_many(self, entities: Sequence[EntityBase], save_now: bool = True) -> None: ...

    def toggle(
        self, entities: EntityBase | Sequence[EntityBase], save_now: bool = True
    ) -> None: ...

    def find_by_id(self, model: type[E], id: Any, track_changes: bool = False) -> E | None: ...

    def find(
        self, model: type[E], *criteria: ColumnElement[bool], track_changes: bool = False
    ) -> list[E]: ...

    def select(self, model: type[E], *criteria: ColumnElement[bool]) -> Select[tuple[E]]: ...

    def count(self, model: type[EntityBase], *criteria: ColumnElement[bool]) -> int: ...

    def exists(self, model: type[EntityBase], *criteria: ColumnElement[bool]) -> bool: ...

    def save(self) -> int: ...


@runtime_checkable
class MongoCrudKitProtocol(Protocol):
    """Document CRUD facade over one MongoDB database."""

    def insert(self, document: MongoDocument) -> None: ...

    def insert_many(self, documents: Sequence[MongoDocument]) -> None: ...

    def replace(self, model: type[D], filter: Mapping[str, Any], document: D) -> None: ...

    def update_one(self, document: MongoDocument, filter: Mapping[str, Any]) -> None: ...

    def delete(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> None: ...

    def delete_many(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> None: ...

    def find_one(self, model: type[D], filter: Mapping[str, Any]) -> D | None: ...

    def find(self, model: type[D], filter: Mapping[str, Any]) -> list[D]: ...

    def query(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> Any: ...

    def count(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> int: ...

    def exists(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> bool: ...


@runtime_checkable
class RawCrudKitProtocol(Protocol):
    """Raw-query executor: finished SQL text plus optional parameters."""

    def find_one(
        self,
        query: str | FluentQuery,
        params: Mapping[str, Any] | None = None,
        *,
        model: type[Any] | None = None,
    ) -> Any | None: ...

    def find(
        self,
        query: str | FluentQuery,
        params: Mapping[str, Any] | None = None,
        *,
        model: type[Any] | None = None,
    ) -> list[Any]: ...

    def execute(
        self, query: str | FluentQuery, params: Mapping[str, Any] | None = None
    ) -> bool: ...


@runtime_checkable
class CrudKitManagerProtocol(Protocol):
    """Single entry point when an application talks to both SQL and Mongo."""

    @property
    def sql(self) -> OrmCrudKitProtocol: ...

    @property
    def mongo(self) -> MongoCrudKitProtocol: ...


__all__ = [
    "ConnectionFactory",
    "OrmCrudKitProtocol",
    "MongoCrudKitProtocol",
    "RawCrudKitProtocol",
    "CrudKitManagerProtocol",
]
