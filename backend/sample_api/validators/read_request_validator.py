"""Read request validator — rule subsets selected by scenario."""

from typing import Iterator
from uuid import UUID

from model_validation import DEFAULT_SCENARIO, ModelValidator, ValidationFailure
from model_validation.checks import is_blank

from sample_api.models.requests import SampleReadRequest

SCENARIO_PAGED = 1
SCENARIO_LOOKUP = 2

MAX_PAGE_SIZE = 100


class SampleReadRequestValidator(ModelValidator[SampleReadRequest]):
    """Validates read queries.

    Scenarios:
        DEFAULT_SCENARIO: an id is required
        SCENARIO_PAGED: page and page_size must describe a real page
        SCENARIO_LOOKUP: the id must be a UUID
    Any other value runs the default rules.
    """

    model_type = SampleReadRequest

    def validate(self, model: SampleReadRequest, scenario: int = DEFAULT_SCENARIO) -> Iterator[ValidationFailure]:
        if scenario == SCENARIO_PAGED:
            return self._validate_paged(model)
        if scenario == SCENARIO_LOOKUP:
            return self._validate_lookup(model)
        return self._validate_default(model)

    def _validate_default(self, model: SampleReadRequest) -> Iterator[ValidationFailure]:
        if is_blank(model.id):
            yield self._failure("Id is a required value", "id")

    def _validate_paged(self, model: SampleReadRequest) -> Iterator[ValidationFailure]:
        if model.page < 1:
            yield self._failure("Page numbers start at 1", "page")
        if not 1 <= model.page_size <= MAX_PAGE_SIZE:
            yield self._failure(f"Page size must be between 1 and {MAX_PAGE_SIZE}", "page_size")

    def _validate_lookup(self, model: SampleReadRequest) -> Iterator[ValidationFailure]:
        try:
            UUID(model.id)
        except ValueError:
            yield self._failure("Id must be a UUID", "id")
