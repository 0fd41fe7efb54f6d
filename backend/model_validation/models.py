"""Validation models: failures, the field-keyed report, and the ambient context."""

from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field, model_validator


class ValidationFailure(BaseModel):
    """A single violated rule.

    An empty ``field_names`` means the failure concerns the model as a whole.
    """

    message: str
    field_names: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @property
    def is_model_level(self) -> bool:
        return not self.field_names


class ValidationReport(BaseModel):
    """Field name -> messages, in first-detected-first-listed order."""

    errors: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def build(cls, failures: Iterable[ValidationFailure], model_key: str) -> "ValidationReport":
        """Build a report from failures, keying field-less ones under ``model_key``."""
        report = cls()
        for failure in failures:
            report.add_failure(failure, model_key)
        return report

    def add_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, []).append(message)

    def add_failure(self, failure: ValidationFailure, model_key: str) -> None:
        """Add a failure under each of its fields, or under ``model_key``."""
        if not failure.is_model_level:
            for field_name in failure.field_names:
                self.add_error(field_name, failure.message)
        else:
            self.add_error(model_key, failure.message)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return sum(len(messages) for messages in self.errors.values())

    def to_dict(self) -> dict[str, list[str]]:
        """Serializable field -> messages map used as the rejection payload."""
        return {key: list(messages) for key, messages in self.errors.items()}


class ValidationContext(BaseModel):
    """Ambient description of a type-erased value about to be validated.

    ``object_type`` defaults to the runtime type of ``instance``.
    """

    instance: Any
    object_type: Optional[type] = None
    services: Optional[Any] = None  # ServiceProvider for the current scope
    items: dict[str, Any] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_object_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("object_type") is None and "instance" in data:
            data = {**data, "object_type": type(data["instance"])}
        return data

    @property
    def type_name(self) -> str:
        return self.object_type.__name__
