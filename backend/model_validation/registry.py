"""Service registry — a small service-location container for validators.

Registration happens once at startup through a ``ServiceCollection`` with
try-add semantics (the first registration for a key wins). ``build_provider``
then freezes the descriptors into a ``ServiceProvider``; singletons are built
eagerly so the root provider is read-only while requests are served.
"""

from contextvars import ContextVar
from enum import Enum
from typing import Any, Callable, Hashable, Iterator, NamedTuple, Optional, Union

import structlog

from model_validation.config import get_settings
from model_validation.exceptions import ServiceResolutionError

logger = structlog.get_logger()

Factory = Callable[["ServiceProvider"], Any]

# Keys currently being constructed in this execution context
_resolving: ContextVar[tuple] = ContextVar("model_validation_resolving", default=())


class ServiceLifetime(str, Enum):
    """How long a resolved instance lives."""

    SINGLETON = "singleton"  # One instance for the process
    SCOPED = "scoped"        # One instance per scope (request)
    TRANSIENT = "transient"  # New instance per resolve


class ValidatorKey(NamedTuple):
    """Service key under which the validator for ``model_type`` is registered."""

    model_type: type


def validator_key(model_type: type) -> ValidatorKey:
    return ValidatorKey(model_type)


def resolve_lifetime(lifetime: Union[ServiceLifetime, str, None]) -> ServiceLifetime:
    """Normalize a caller-supplied lifetime, falling back to settings."""
    if lifetime is None:
        lifetime = get_settings().VALIDATOR_LIFETIME
    return ServiceLifetime(lifetime)


class ServiceDescriptor:
    """A registration: service key, how to build it, and for how long it lives."""

    def __init__(
        self,
        key: Hashable,
        factory: Factory,
        lifetime: ServiceLifetime = ServiceLifetime.SINGLETON,
        implementation: Optional[type] = None,
    ):
        self.key = key
        self.factory = factory
        self.lifetime = ServiceLifetime(lifetime)
        self.implementation = implementation

    def __repr__(self) -> str:
        impl = self.implementation.__name__ if self.implementation else self.factory
        return f"ServiceDescriptor({self.key!r}, {impl}, {self.lifetime.value})"


class ServiceCollection:
    """Ordered, startup-time registration table."""

    def __init__(self):
        self._descriptors: dict[Hashable, ServiceDescriptor] = {}

    def try_add(self, descriptor: ServiceDescriptor) -> bool:
        """Register ``descriptor`` unless its key is already taken.

        Returns:
            True if inserted, False if an earlier registration was kept
        """
        if descriptor.key in self._descriptors:
            logger.debug(
                "service_registration_skipped",
                key=repr(descriptor.key),
                kept=repr(self._descriptors[descriptor.key]),
            )
            return False
        self._descriptors[descriptor.key] = descriptor
        return True

    def contains(self, key: Hashable) -> bool:
        return key in self._descriptors

    def get_descriptor(self, key: Hashable) -> Optional[ServiceDescriptor]:
        return self._descriptors.get(key)

    def __contains__(self, key: Hashable) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(self._descriptors.values())

    def build_provider(self) -> "ServiceProvider":
        """Freeze the registrations and build every singleton."""
        provider = ServiceProvider(dict(self._descriptors))
        for descriptor in self._descriptors.values():
            if descriptor.lifetime == ServiceLifetime.SINGLETON:
                provider.get_required_service(descriptor.key)
        logger.info("service_provider_built", services=len(self._descriptors))
        return provider


class ServiceProvider:
    """Resolves registered services; scopes share the root's singletons."""

    def __init__(
        self,
        descriptors: dict[Hashable, ServiceDescriptor],
        root: Optional["ServiceProvider"] = None,
    ):
        self._descriptors = descriptors
        self._root = root or self
        self._instances: dict[Hashable, Any] = {}

    def create_scope(self) -> "ServiceProvider":
        return ServiceProvider(self._descriptors, root=self._root)

    def registered_keys(self) -> list[Hashable]:
        return list(self._descriptors)

    def get_service(self, key: Hashable) -> Any:
        """Resolve ``key`` or return None when nothing is registered."""
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            return None
        return self._resolve(descriptor)

    def get_required_service(self, key: Hashable) -> Any:
        """Resolve ``key`` or raise ``ServiceResolutionError``."""
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            raise ServiceResolutionError(f"No service is registered for {key!r}")
        return self._resolve(descriptor)

    def _resolve(self, descriptor: ServiceDescriptor) -> Any:
        if descriptor.lifetime == ServiceLifetime.TRANSIENT:
            return self._build(descriptor, self)

        owner = self._root if descriptor.lifetime == ServiceLifetime.SINGLETON else self
        if descriptor.key in owner._instances:
            return owner._instances[descriptor.key]
        return owner._instances.setdefault(descriptor.key, self._build(descriptor, owner))

    @staticmethod
    def _build(descriptor: ServiceDescriptor, provider: "ServiceProvider") -> Any:
        chain = _resolving.get()
        if descriptor.key in chain:
            path = " -> ".join(repr(k) for k in (*chain, descriptor.key))
            raise ServiceResolutionError(f"Circular service dependency: {path}")

        token = _resolving.set((*chain, descriptor.key))
        try:
            return descriptor.factory(provider)
        finally:
            _resolving.reset(token)
