"""Settings, service container and registration helpers.

Quick start::

    from crudkit.config import ServiceCollection, configure_raw_crud_kit

    services = configure_raw_crud_kit(ServiceCollection())
    with services.build_provider() as provider:
        kit = provider.get(RawCrudKitProtocol)

Architecture::

    settings.py       CrudKitSettings (pydantic-settings) + get_settings() cache
    container.py      ServiceCollection / ServiceProvider / ServiceScope
    registration.py   configure_orm / mongo / raw crud kit, crud kit manager

Guardrails:
    ❌ Reading CRUDKIT_* env vars ad-hoc
    ✅ ``get_settings().connection_string("default")``
"""

from crudkit.config.container import (
    Lifetime,
    ServiceCollection,
    ServiceDescriptor,
    ServiceProvider,
    ServiceScope,
)
from crudkit.config.registration import (
    configure_crud_kit_manager,
    configure_mongo_crud_kit,
    configure_orm_crud_kit,
    configure_raw_crud_kit,
)
from crudkit.config.settings import (
    CrudKitSettings,
    MongoDbOptions,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CrudKitSettings",
    "MongoDbOptions",
    "get_settings",
    "clear_settings_cache",
    "Lifetime",
    "ServiceDescriptor",
    "ServiceCollection",
    "ServiceProvider",
    "ServiceScope",
    "configure_orm_crud_kit",
    "configure_mongo_crud_kit",
    "configure_raw_crud_kit",
    "configure_crud_kit_manager",
]
