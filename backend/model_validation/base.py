"""Base model validator — the contract every per-type validator implements.

Each validator is a stateless, independently testable unit bound to one model
type. New validators are added without touching the dispatch service.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Generic, Iterable, TypeVar, Union

from model_validation.exceptions import ValidationFailed
from model_validation.models import ValidationContext, ValidationFailure, ValidationReport

if TYPE_CHECKING:
    from model_validation.registry import ServiceProvider

T = TypeVar("T")

DEFAULT_SCENARIO = 0


class ModelValidator(ABC, Generic[T]):
    """Abstract base for all model validators.

    Contract:
        - validate() never mutates the model
        - validate() expresses invalid data as returned failures, never by raising
        - validate() is deterministic for a given (model, scenario)
        - instances hold no per-call state and are shared across requests

    Subclasses declare the model type(s) they handle::

        class OrderValidator(ModelValidator[Order]):
            model_type = Order
    """

    model_type: ClassVar[Union[type, tuple[type, ...], None]] = None

    @classmethod
    def from_provider(cls, provider: "ServiceProvider") -> "ModelValidator":
        """Construct the validator, resolving any dependencies from ``provider``.

        Validators that compose another validator override this to request it
        explicitly.
        """
        return cls()

    @abstractmethod
    def validate(self, model: T, scenario: int = DEFAULT_SCENARIO) -> Iterable[ValidationFailure]:
        """Return the failures for ``model`` (empty when valid).

        Args:
            model: Instance of the declared model type
            scenario: Rule subset selector; unknown values use the default rules

        Returns:
            Finite, possibly lazy, sequence of ValidationFailure
        """
        ...

    def validate_context(self, context: ValidationContext) -> Iterable[ValidationFailure]:
        """Validate the instance carried by an ambient context with the default scenario."""
        return self.validate(context.instance)

    def validate_and_raise(self, model: T) -> None:
        """Validate with the default scenario and raise if anything failed.

        Raises:
            ValidationFailed: carrying the full report
        """
        failures = list(self.validate(model))
        if failures:
            raise ValidationFailed(ValidationReport.build(failures, type(model).__name__))

    # ── Helper Methods ──

    def _failure(self, message: str, *field_names: str) -> ValidationFailure:
        """Convenience method to create a ValidationFailure."""
        return ValidationFailure(message=message, field_names=field_names)


def declared_model_types(validator_cls: type) -> tuple[type, ...]:
    """Return the model types a validator class declares, in declaration order."""
    declared = getattr(validator_cls, "model_type", None)
    if declared is None:
        return ()
    if isinstance(declared, tuple):
        return declared
    return (declared,)
