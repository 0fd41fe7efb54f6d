"""Update request validator — checks the id, then delegates contact fields."""

from typing import Iterator

from model_validation import DEFAULT_SCENARIO, ModelValidator, ServiceProvider, ValidationFailure, validator_key

from sample_api.models.requests import NIL_UUID, SampleCreateRequest, SampleUpdateRequest


class SampleUpdateRequestValidator(ModelValidator[SampleUpdateRequest]):
    """Requires an id and re-yields the create validator's failures unchanged."""

    model_type = SampleUpdateRequest

    def __init__(self, create_request_validator: ModelValidator[SampleCreateRequest]):
        self._create_request_validator = create_request_validator

    @classmethod
    def from_provider(cls, provider: ServiceProvider) -> "SampleUpdateRequestValidator":
        return cls(provider.get_required_service(validator_key(SampleCreateRequest)))

    def validate(self, model: SampleUpdateRequest, scenario: int = DEFAULT_SCENARIO) -> Iterator[ValidationFailure]:
        if model.id == NIL_UUID:
            yield self._failure("Id is a required field", "id")

        yield from self._create_request_validator.validate(model)
