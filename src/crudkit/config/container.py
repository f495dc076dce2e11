"""
Minimal dependency-injection container with singleton and scoped lifetimes.

:class:`ServiceCollection` records *how* to build each service; the
:class:`ServiceProvider` it builds creates instances on first resolution
and caches them according to their :class:`Lifetime`:

* **singleton**: one instance per root provider
* **scoped**: one instance per :class:`ServiceScope` (e.g. per request
  or per unit of work); resolving a scoped service from the root
  provider is an error

Usage::

    from sqlalchemy.orm import Session
    from crudkit.config import ServiceCollection

    services = ServiceCollection()
    services.add_scoped(Session, lambda sp: session_factory())
    provider = services.build_provider()

    with provider.create_scope() as scope:
        session = scope.get(Session)      # same instance within the scope
    # scope exit closed the session

Factories receive the resolving provider so they can pull their own
dependencies: ``lambda sp: OrmCrudKit(sp.get(Session))``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from crudkit.core.errors import ServiceResolutionError
from crudkit.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Lifetime(str, Enum):
    """How long a resolved instance is reused."""

    SINGLETON = "singleton"
    SCOPED = "scoped"


@dataclass(frozen=True)
class ServiceDescriptor:
    key: Any
    factory: Callable[[ServiceProvider], Any]
    lifetime: Lifetime
    owned: bool = True
    """Whether the provider closes the instance on shutdown."""


class ServiceCollection:
    """Registration side of the container. Later registrations replace earlier ones."""

    def __init__(self) -> None:
        self._descriptors: dict[Any, ServiceDescriptor] = {}

    def add(
        self,
        key: Any,
        factory: Callable[[ServiceProvider], Any],
        lifetime: Lifetime,
    ) -> ServiceCollection:
        self._descriptors[key] = ServiceDescriptor(key, factory, lifetime)
        return self

    def add_singleton(self, key: Any, factory: Callable[[ServiceProvider], Any]) -> ServiceCollection:
        return self.add(key, factory, Lifetime.SINGLETON)

    def add_scoped(self, key: Any, factory: Callable[[ServiceProvider], Any]) -> ServiceCollection:
        return self.add(key, factory, Lifetime.SCOPED)

    def add_instance(self, key: Any, instance: Any) -> ServiceCollection:
        """Register an existing object as a singleton. The provider never closes it."""
        self._descriptors[key] = ServiceDescriptor(
            key, lambda _sp: instance, Lifetime.SINGLETON, owned=False
        )
        return self

    def lifetime_of(self, key: Any) -> Lifetime | None:
        descriptor = self._descriptors.get(key)
        return descriptor.lifetime if descriptor else None

    def __contains__(self, key: Any) -> bool:
        return key in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def build_provider(self) -> ServiceProvider:
        return ServiceProvider(dict(self._descriptors))


class ServiceProvider:
    """Resolves services registered in a :class:`ServiceCollection`."""

    def __init__(
        self,
        descriptors: Mapping[Any, ServiceDescriptor],
        root: ServiceProvider | None = None,
    ) -> None:
        self._descriptors = descriptors
        self._root = root or self
        self._instances: dict[Any, Any] = {}
        self._owned: list[Any] = []

    @property
    def is_root(self) -> bool:
        return self._root is self

    def get(self, key: type[T] | Any) -> T:
        """Resolve *key*, creating the instance on first use.

        Raises:
            ServiceResolutionError: *key* is not registered, or it is a
                scoped service resolved outside a scope.
        """
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            raise ServiceResolutionError(key)

        if descriptor.lifetime is Lifetime.SINGLETON:
            owner = self._root
        elif self.is_root:
            name = getattr(key, "__name__", repr(key))
            raise ServiceResolutionError(
                key,
                f"Scoped service {name} cannot be resolved from the root provider; "
                "use create_scope()",
            )
        else:
            owner = self

        if key not in owner._instances:
            instance = descriptor.factory(owner)
            owner._instances[key] = instance
            if descriptor.owned:
                owner._owned.append(instance)
            logger.debug(
                "container.created",
                service=getattr(key, "__name__", repr(key)),
                lifetime=descriptor.lifetime.value,
            )
        return owner._instances[key]

    def get_optional(self, key: type[T] | Any) -> T | None:
        """Like :meth:`get` but returns ``None`` for unregistered keys."""
        if key not in self._descriptors:
            return None
        return self.get(key)

    def create_scope(self) -> ServiceScope:
        return ServiceScope(self._descriptors, root=self._root)

    # ── Lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        """Close every instance this provider created, newest first."""
        for instance in reversed(self._owned):
            close = getattr(instance, "close", None)
            if callable(close):
                try:
                    close()
                except Exception:
                    logger.warning(
                        "container.close_failed",
                        service=type(instance).__name__,
                        exc_info=True,
                    )
        self._owned.clear()
        self._instances.clear()

    def __enter__(self) -> ServiceProvider:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class ServiceScope(ServiceProvider):
    """Child provider holding scoped instances; singletons come from the root."""

    def __enter__(self) -> ServiceScope:
        return self


__all__ = [
    "Lifetime",
    "ServiceDescriptor",
    "ServiceCollection",
    "ServiceProvider",
    "ServiceScope",
]
