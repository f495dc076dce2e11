"""Core primitives shared by every kit.

Modules
-------
errors      CrudKitError hierarchy
logging     structlog configuration and get_logger
protocols   structural contracts used as container keys
strings     to_csv / to_quoted_csv
connection  SqlConnectionFactory
"""

from crudkit.core.connection import ConnectionInfo, SqlConnectionFactory
from crudkit.core.errors import (
    ConfigError,
    CrudKitError,
    DatabaseError,
    DocumentStoreError,
    ErrorCategory,
    MissingConfigError,
    QueryError,
    ServiceResolutionError,
)
from crudkit.core.protocols import (
    ConnectionFactory,
    CrudKitManagerProtocol,
    MongoCrudKitProtocol,
    OrmCrudKitProtocol,
    RawCrudKitProtocol,
)
from crudkit.core.strings import to_csv, to_quoted_csv

__all__ = [
    "ConnectionInfo",
    "SqlConnectionFactory",
    "ErrorCategory",
    "CrudKitError",
    "ConfigError",
    "MissingConfigError",
    "DatabaseError",
    "QueryError",
    "DocumentStoreError",
    "ServiceResolutionError",
    "ConnectionFactory",
    "OrmCrudKitProtocol",
    "MongoCrudKitProtocol",
    "RawCrudKitProtocol",
    "CrudKitManagerProtocol",
    "to_csv",
    "to_quoted_csv",
]
