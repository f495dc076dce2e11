"""Data-access facades ("kits"), one per wrapped library."""

from crudkit.kits.manager import CrudKitManager
from crudkit.kits.mongo import MongoCrudKit, MongoDocument
from crudkit.kits.orm import OrmCrudKit
from crudkit.kits.raw import RawCrudKit

__all__ = [
    "OrmCrudKit",
    "MongoCrudKit",
    "MongoDocument",
    "RawCrudKit",
    "CrudKitManager",
]
