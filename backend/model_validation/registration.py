"""Validator registration — populate a ServiceCollection with model validators.

Validators come either from an explicit list or from scanning a module or
package. Each concrete validator is registered under every model type it
declares with try-add semantics: when two validators target the same type,
the one seen first wins and the other is dropped.
"""

import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import Iterable, Iterator, Union

import structlog

from model_validation.base import ModelValidator, declared_model_types
from model_validation.registry import (
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
    resolve_lifetime,
    validator_key,
)
from model_validation.service import ModelValidatorService

logger = structlog.get_logger()


def add_model_validators(
    services: ServiceCollection,
    validators: Iterable[type],
    lifetime: Union[ServiceLifetime, str, None] = None,
) -> ServiceCollection:
    """Register ``validators`` in order, then the validator service itself.

    Args:
        services: Collection to populate
        validators: Candidate validator classes; abstract or undeclared ones are skipped
        lifetime: Service lifetime; defaults to settings.VALIDATOR_LIFETIME (singleton)

    Returns:
        The same collection, for chaining
    """
    lifetime = resolve_lifetime(lifetime)

    registered = 0
    for validator_cls in _concrete_validators(validators):
        for model_type in declared_model_types(validator_cls):
            descriptor = ServiceDescriptor(
                validator_key(model_type),
                validator_cls.from_provider,
                lifetime,
                implementation=validator_cls,
            )
            if services.try_add(descriptor):
                registered += 1
                logger.debug(
                    "model_validator_registered",
                    model_type=model_type.__name__,
                    validator=validator_cls.__name__,
                    lifetime=lifetime.value,
                )
            else:
                logger.debug(
                    "model_validator_duplicate_ignored",
                    model_type=model_type.__name__,
                    validator=validator_cls.__name__,
                )

    services.try_add(ServiceDescriptor(
        ModelValidatorService,
        ModelValidatorService,
        lifetime,
        implementation=ModelValidatorService,
    ))

    logger.info("model_validators_registered", count=registered, lifetime=lifetime.value)
    return services


def add_model_validators_from_module(
    services: ServiceCollection,
    module: Union[ModuleType, str],
    lifetime: Union[ServiceLifetime, str, None] = None,
) -> ServiceCollection:
    """Scan a module (or a package and all its submodules) for validators.

    Packages are walked depth-first with submodules in name order; members of
    each module are taken in definition order.
    """
    if isinstance(module, str):
        module = importlib.import_module(module)
    return add_model_validators(services, find_model_validators(module), lifetime)


def add_model_validators_from_module_containing(
    services: ServiceCollection,
    marker: type,
    lifetime: Union[ServiceLifetime, str, None] = None,
) -> ServiceCollection:
    """Scan the package that directly contains the module defining ``marker``.

    Only that package and its submodules are scanned, not the top-level
    package: ``marker`` should live beside the validators, e.g. one of the
    validator classes itself.
    """
    module_name = marker.__module__
    package = module_name.rpartition(".")[0] or module_name
    return add_model_validators_from_module(services, package, lifetime)


def find_model_validators(module: ModuleType) -> list[type]:
    """Collect validator classes defined in ``module`` and its submodules.

    Classes a module merely imports are left to the module that defines them.
    """
    found: dict[type, None] = {}
    for scanned in _walk_modules(module):
        for member in vars(scanned).values():
            if (
                inspect.isclass(member)
                and issubclass(member, ModelValidator)
                and member.__module__ == scanned.__name__
            ):
                found.setdefault(member, None)
    return list(found)


def _walk_modules(module: ModuleType) -> Iterator[ModuleType]:
    yield module
    if hasattr(module, "__path__"):
        for info in pkgutil.walk_packages(module.__path__, prefix=f"{module.__name__}."):
            yield importlib.import_module(info.name)


def _concrete_validators(candidates: Iterable[type]) -> Iterator[type]:
    seen = set()
    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)

        if candidate is ModelValidator or inspect.isabstract(candidate):
            continue
        if not declared_model_types(candidate):
            logger.debug("model_validator_without_model_type", validator=candidate.__name__)
            continue
        yield candidate
