"""Model validation — per-type validators dispatched by a central service.

Usage:
    from model_validation import ServiceCollection, add_model_validators_from_module

    services = add_model_validators_from_module(ServiceCollection(), "myapp.validators")
    provider = services.build_provider()
    service = provider.get_required_service(ModelValidatorService)
    service.validate_and_raise(model)
"""

from model_validation.base import DEFAULT_SCENARIO, ModelValidator
from model_validation.exceptions import (
    MissingValidatorError,
    ModelValidationError,
    ServiceResolutionError,
    ValidationFailed,
)
from model_validation.integration import (
    ModelValidationRoute,
    get_model_validator_service,
    install_exception_handlers,
    use_automatic_model_validation,
    validate_arguments,
)
from model_validation.models import ValidationContext, ValidationFailure, ValidationReport
from model_validation.registration import (
    add_model_validators,
    add_model_validators_from_module,
    add_model_validators_from_module_containing,
)
from model_validation.registry import (
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
    ServiceProvider,
    validator_key,
)
from model_validation.service import ModelValidatorService

__all__ = [
    "DEFAULT_SCENARIO",
    "ModelValidator",
    "MissingValidatorError",
    "ModelValidationError",
    "ServiceResolutionError",
    "ValidationFailed",
    "ModelValidationRoute",
    "get_model_validator_service",
    "install_exception_handlers",
    "use_automatic_model_validation",
    "validate_arguments",
    "ValidationContext",
    "ValidationFailure",
    "ValidationReport",
    "add_model_validators",
    "add_model_validators_from_module",
    "add_model_validators_from_module_containing",
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceLifetime",
    "ServiceProvider",
    "ModelValidatorService",
    "validator_key",
]
