"""
crudkit - uniform CRUD facades over SQLAlchemy, pymongo and raw SQL.

Packages
--------
core       errors, logging, protocols, CSV helpers, connection factory
query      FluentQuery string builder
orm        declarative base, EntityBase, engine/session helpers
kits       OrmCrudKit, MongoCrudKit, RawCrudKit, CrudKitManager
config     CrudKitSettings, service container, registration helpers
"""

__version__ = "0.1.0"

from crudkit.config import (
    CrudKitSettings,
    MongoDbOptions,
    ServiceCollection,
    ServiceProvider,
    ServiceScope,
    configure_crud_kit_manager,
    configure_mongo_crud_kit,
    configure_orm_crud_kit,
    configure_raw_crud_kit,
    get_settings,
)
from crudkit.core import (
    ConnectionFactory,
    CrudKitError,
    CrudKitManagerProtocol,
    MongoCrudKitProtocol,
    OrmCrudKitProtocol,
    RawCrudKitProtocol,
    SqlConnectionFactory,
)
from crudkit.kits import CrudKitManager, MongoCrudKit, MongoDocument, OrmCrudKit, RawCrudKit
from crudkit.orm import EntityBase
from crudkit.query import FluentQuery

__all__ = [
    "__version__",
    # query
    "FluentQuery",
    # kits
    "OrmCrudKit",
    "MongoCrudKit",
    "MongoDocument",
    "RawCrudKit",
    "CrudKitManager",
    "EntityBase",
    # contracts
    "ConnectionFactory",
    "OrmCrudKitProtocol",
    "MongoCrudKitProtocol",
    "RawCrudKitProtocol",
    "CrudKitManagerProtocol",
    "SqlConnectionFactory",
    "CrudKitError",
    # config
    "CrudKitSettings",
    "MongoDbOptions",
    "get_settings",
    "ServiceCollection",
    "ServiceProvider",
    "ServiceScope",
    "configure_orm_crud_kit",
    "configure_mongo_crud_kit",
    "configure_raw_crud_kit",
    "configure_crud_kit_manager",
]
