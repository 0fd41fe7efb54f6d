"""Model validator service — resolves the validator for a model's type and runs it.

Two lookup modes:
    - strict: ``validate`` / ``validate_and_raise`` on a model raise
      MissingValidatorError when nothing is registered for its type
    - lenient: ``validate_context`` (used by automatic request validation)
      returns no failures for types without a validator

Usage:
    service = provider.get_required_service(ModelValidatorService)
    failures = list(service.validate(order))
    service.validate_and_raise(order)
"""

from typing import Any, Iterable, Optional

import structlog

from model_validation.base import ModelValidator
from model_validation.exceptions import MissingValidatorError
from model_validation.models import ValidationContext, ValidationFailure
from model_validation.registry import ServiceProvider, validator_key

logger = structlog.get_logger()


class ModelValidatorService:
    """Runtime facade over the registered validators.

    Holds nothing but the provider it resolves from, so a single instance is
    safe to share between concurrent requests.
    """

    def __init__(self, provider: ServiceProvider):
        self._provider = provider

    def get_validator(self, model_type: type, services: Optional[ServiceProvider] = None) -> Optional[ModelValidator]:
        """Return the validator registered for ``model_type``, or None."""
        return (services or self._provider).get_service(validator_key(model_type))

    def validate(self, model: Any, model_type: Optional[type] = None) -> Iterable[ValidationFailure]:
        """Strict validation of ``model``.

        Args:
            model: Model instance, or a ValidationContext (routed to the lenient path)
            model_type: Type to resolve the validator for; defaults to type(model)

        Raises:
            MissingValidatorError: if no validator is registered for the type
        """
        if isinstance(model, ValidationContext):
            return self.validate_context(model)

        validator = self._require_validator(model_type or type(model))
        return validator.validate(model)

    def validate_context(self, context: ValidationContext) -> Iterable[ValidationFailure]:
        """Lenient validation driven by the context's declared type.

        Types without a registered validator yield no failures.
        """
        validator = self.get_validator(context.object_type, context.services)
        if validator is None:
            logger.debug(
                "model_validator_not_registered",
                model_type=context.type_name,
                argument=context.items.get("argument"),
            )
            return ()
        return validator.validate_context(context)

    def validate_and_raise(self, model: Any, model_type: Optional[type] = None) -> None:
        """Validate ``model`` and raise if it is invalid.

        Raises:
            MissingValidatorError: if no validator is registered for the type
            ValidationFailed: if the model produced any failures
        """
        validator = self._require_validator(model_type or type(model))
        validator.validate_and_raise(model)

    def _require_validator(self, model_type: type) -> ModelValidator:
        validator = self.get_validator(model_type)
        if validator is None:
            logger.warning("model_validator_missing", model_type=model_type.__name__)
            raise MissingValidatorError(model_type.__name__)
        return validator
