"""Document CRUD facade over a pymongo database.

:class:`MongoCrudKit` stores :class:`MongoDocument` models (pydantic) in a
collection named after the model class.  Filters are plain Mongo query
documents; every operation maps one-to-one onto a pymongo collection
method.

Architecture::

    ┌───────────────────────────────────────────────────────────────┐
    │                        MongoCrudKit                           │
    │                                                               │
    │   database: pymongo.database.Database                         │
    │   collection = database[Model.__name__]                       │
    │                                                               │
    │   insert / insert_many      → insert_one / insert_many        │
    │   replace                   → replace_one                     │
    │   update_one                → update_one({"$set": fields})    │
    │   delete / delete_many      → delete_one / delete_many        │
    │   find_one / find / query   → find_one / find                 │
    │   count / exists            → count_documents / find_one      │
    └───────────────────────────────────────────────────────────────┘

Usage:
    >>> class User(MongoDocument):
    ...     name: str = ""
    >>> kit = MongoCrudKit.from_options(MongoDbOptions(database_name="app"))
    >>> kit.insert(User(name="a"))
    >>> kit.find_one(User, {"name": "a"})
    User(id='…', name='a')
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.cursor import Cursor
from pymongo.database import Database
from pymongo.errors import PyMongoError

from crudkit.core.errors import DocumentStoreError
from crudkit.core.logging import get_logger

if TYPE_CHECKING:
    from crudkit.config.settings import MongoDbOptions

logger = get_logger(__name__)


class MongoDocument(BaseModel):
    """Base model for documents stored through :class:`MongoCrudKit`.

    ``id`` is serialized as ``_id`` and defaults to a new UUID4 string.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")

    @classmethod
    def collection_name(cls) -> str:
        return cls.__name__

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


D = TypeVar("D", bound=MongoDocument)


class MongoCrudKit:
    """Generic document facade bound to one MongoDB database."""

    def __init__(self, database: Database, *, client: MongoClient | None = None) -> None:
        self.database = database
        self._client = client

    @classmethod
    def from_options(cls, options: MongoDbOptions) -> MongoCrudKit:
        """Open a client from *options* and wrap its configured database.

        The kit owns that client and closes it in :meth:`close`.
        """
        client: MongoClient = MongoClient(options.connection_string)
        return cls(client[options.database_name], client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    # -- Writes ------------------------------------------------------------

    def insert(self, document: MongoDocument) -> None:
        collection = self._collection(type(document))
        with self._driver_errors("insert", collection):
            collection.insert_one(document.to_document())

    def insert_many(self, documents: Sequence[MongoDocument]) -> None:
        """Insert *documents* into the collection of the first one's type.

        No-op for an empty sequence.
        """
        if not documents:
            return
        collection = self._collection(type(documents[0]))
        with self._driver_errors("insert_many", collection):
            collection.insert_many([d.to_document() for d in documents])

    def replace(self, model: type[D], filter: Mapping[str, Any], document: D) -> None:
        collection = self._collection(model)
        with self._driver_errors("replace", collection):
            collection.replace_one(dict(filter), document.to_document())

    def update_one(self, document: MongoDocument, filter: Mapping[str, Any]) -> None:
        """``$set`` every field of *document* except ``_id`` on the first match."""
        fields = {k: v for k, v in document.to_document().items() if k not in ("_id", "id")}
        collection = self._collection(type(document))
        with self._driver_errors("update_one", collection):
            collection.update_one(dict(filter), {"$set": fields})

    def delete(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> None:
        collection = self._collection(model)
        with self._driver_errors("delete", collection):
            collection.delete_one(dict(filter))

    def delete_many(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> None:
        collection = self._collection(model)
        with self._driver_errors("delete_many", collection):
            collection.delete_many(dict(filter))

    # -- Reads -------------------------------------------------------------

    def find_one(self, model: type[D], filter: Mapping[str, Any]) -> D | None:
        collection = self._collection(model)
        with self._driver_errors("find_one", collection):
            raw = collection.find_one(dict(filter))
        return model.model_validate(raw) if raw is not None else None

    def find(self, model: type[D], filter: Mapping[str, Any]) -> list[D]:
        collection = self._collection(model)
        with self._driver_errors("find", collection):
            return [model.model_validate(raw) for raw in collection.find(dict(filter))]

    def query(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> Cursor:
        """Lazy pymongo cursor for further sorting, skipping or limiting."""
        return self._collection(model).find(dict(filter))

    def count(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> int:
        collection = self._collection(model)
        with self._driver_errors("count", collection):
            return collection.count_documents(dict(filter))

    def exists(self, model: type[MongoDocument], filter: Mapping[str, Any]) -> bool:
        collection = self._collection(model)
        with self._driver_errors("exists", collection):
            return collection.find_one(dict(filter), projection={"_id": 1}) is not None

    # -- Internals ---------------------------------------------------------

    def _collection(self, model: type[MongoDocument]) -> Collection:
        return self.database[model.collection_name()]

    @contextmanager
    def _driver_errors(self, operation: str, collection: Collection) -> Iterator[None]:
        logger.debug(f"mongo.{operation}", collection=collection.name)
        try:
            yield
        except PyMongoError as e:
            logger.error(f"mongo.{operation}_failed", collection=collection.name, error=str(e))
            raise DocumentStoreError(
                f"MongoDB {operation} failed on '{collection.name}'",
                context={"collection": collection.name},
                cause=e,
            ) from e


__all__ = [
    "MongoDocument",
    "MongoCrudKit",
]
