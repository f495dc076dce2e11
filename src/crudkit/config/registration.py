"""Registration helpers that wire the crudkit facades into a container.

Each helper registers one facade under its protocol key with the
requested lifetime (``as_singleton=True`` → singleton, otherwise scoped)
and returns the collection for chaining::

    services = ServiceCollection()
    configure_orm_crud_kit(services, session_factory, as_singleton=False)
    configure_raw_crud_kit(services, settings)
    provider = services.build_provider()

    with provider.create_scope() as scope:
        kit = scope.get(OrmCrudKitProtocol)

Settings handling is shared: an explicit ``settings`` argument is
registered as the :class:`CrudKitSettings` instance; otherwise an already
registered one is used, falling back to :func:`get_settings`.
"""

from __future__ import annotations

from collections.abc import Callable

from pymongo.database import Database
from sqlalchemy.orm import Session

from crudkit.config.container import Lifetime, ServiceCollection
from crudkit.config.settings import CrudKitSettings, get_settings
from crudkit.core.connection import SqlConnectionFactory
from crudkit.core.protocols import (
    ConnectionFactory,
    CrudKitManagerProtocol,
    MongoCrudKitProtocol,
    OrmCrudKitProtocol,
    RawCrudKitProtocol,
)
from crudkit.kits.manager import CrudKitManager
from crudkit.kits.mongo import MongoCrudKit
from crudkit.kits.orm import OrmCrudKit
from crudkit.kits.raw import RawCrudKit


def _lifetime(as_singleton: bool) -> Lifetime:
    return Lifetime.SINGLETON if as_singleton else Lifetime.SCOPED


def _register_settings(services: ServiceCollection, settings: CrudKitSettings | None) -> None:
    if settings is not None:
        services.add_instance(CrudKitSettings, settings)
    elif CrudKitSettings not in services:
        services.add_singleton(CrudKitSettings, lambda _sp: get_settings())


def configure_orm_crud_kit(
    services: ServiceCollection,
    session_factory: Callable[[], Session] | None = None,
    *,
    as_singleton: bool = True,
) -> ServiceCollection:
    """Register :class:`OrmCrudKit` under :class:`OrmCrudKitProtocol`.

    When *session_factory* is given, ``Session`` is registered with the
    same lifetime; otherwise a ``Session`` registration must already exist.
    """
    lifetime = _lifetime(as_singleton)
    if session_factory is not None:
        services.add(Session, lambda _sp: session_factory(), lifetime)
    services.add(OrmCrudKitProtocol, lambda sp: OrmCrudKit(sp.get(Session)), lifetime)
    return services


def configure_mongo_crud_kit(
    services: ServiceCollection,
    settings: CrudKitSettings | None = None,
    *,
    as_singleton: bool = True,
) -> ServiceCollection:
    """Register :class:`MongoCrudKit` under :class:`MongoCrudKitProtocol`.

    A pymongo ``Database`` already registered in the container takes
    precedence over ``settings.mongo``.
    """
    _register_settings(services, settings)

    def _build(sp):
        database = sp.get_optional(Database)
        if database is not None:
            return MongoCrudKit(database)
        return MongoCrudKit.from_options(sp.get(CrudKitSettings).mongo)

    services.add(MongoCrudKitProtocol, _build, _lifetime(as_singleton))
    return services


def configure_raw_crud_kit(
    services: ServiceCollection,
    settings: CrudKitSettings | None = None,
    connection_name: str = "default",
    *,
    as_singleton: bool = True,
) -> ServiceCollection:
    """Register :class:`RawCrudKit` and its :class:`ConnectionFactory`.

    The connection factory is always a singleton so its engine (and pool)
    is shared.
    """
    _register_settings(services, settings)
    services.add_singleton(
        ConnectionFactory,
        lambda sp: SqlConnectionFactory.from_settings(sp.get(CrudKitSettings), connection_name),
    )
    services.add(
        RawCrudKitProtocol,
        lambda sp: RawCrudKit(sp.get(ConnectionFactory)),
        _lifetime(as_singleton),
    )
    return services


def configure_crud_kit_manager(
    services: ServiceCollection,
    settings: CrudKitSettings | None = None,
    *,
    as_singleton: bool = True,
) -> ServiceCollection:
    """Register :class:`CrudKitManager` under :class:`CrudKitManagerProtocol`.

    Requires a ``Session`` registration (see :func:`configure_orm_crud_kit`).
    """
    _register_settings(services, settings)
    services.add(
        CrudKitManagerProtocol,
        lambda sp: CrudKitManager(sp.get(Session), sp.get(CrudKitSettings)),
        _lifetime(as_singleton),
    )
    return services


__all__ = [
    "configure_orm_crud_kit",
    "configure_mongo_crud_kit",
    "configure_raw_crud_kit",
    "configure_crud_kit_manager",
]
