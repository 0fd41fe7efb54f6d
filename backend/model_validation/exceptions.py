"""Errors raised by the model validation layer.

Both ``MissingValidatorError`` and ``ValidationFailed`` propagate out of the
core untouched; the host pipeline decides how to render them.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from model_validation.models import ValidationReport


class ModelValidationError(Exception):
    """Base class for all model validation errors."""


class MissingValidatorError(ModelValidationError, LookupError):
    """No validator is registered for the requested model type."""

    def __init__(self, model_type_name: str):
        self.model_type_name = model_type_name
        super().__init__(
            f"No model validator is registered for '{model_type_name}'. "
            "Either it has not been created or it has not been registered "
            "in the service collection."
        )


class ValidationFailed(ModelValidationError):
    """A model produced one or more validation failures."""

    default_message = "Model validation failed."

    def __init__(self, report: "ValidationReport", message: str = default_message):
        self.report = report
        super().__init__(message)


class ServiceResolutionError(ModelValidationError, LookupError):
    """A required service could not be resolved from the provider."""
