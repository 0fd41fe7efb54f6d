"""Create request validator — per-field checks first, cross-field rules second."""

from typing import Iterator

from model_validation import DEFAULT_SCENARIO, ModelValidator, ValidationFailure
from model_validation.checks import is_blank, is_email_address, is_phone_number, is_url

from sample_api.models.requests import SampleCreateRequest


class SampleCreateRequestValidator(ModelValidator[SampleCreateRequest]):
    """Validates contact details on create (and, by delegation, update) requests.

    Cross-field rules only run once every field passed its own check, so a
    malformed email is not also reported as "email or phone required".
    """

    model_type = SampleCreateRequest

    def validate(self, model: SampleCreateRequest, scenario: int = DEFAULT_SCENARIO) -> Iterator[ValidationFailure]:
        all_fields_valid = True
        has_email_or_phone = not (is_blank(model.email) and is_blank(model.phone))
        has_website = not is_blank(model.website)

        if is_blank(model.name):
            all_fields_valid = False
            yield self._failure("Name is a required value", "name")

        if not is_blank(model.email) and not is_email_address(model.email):
            all_fields_valid = False
            yield self._failure("Not a valid email address", "email")

        if not is_blank(model.phone) and not is_phone_number(model.phone):
            all_fields_valid = False
            yield self._failure("Not a valid phone number", "phone")

        if has_website and not is_url(model.website):
            all_fields_valid = False
            yield self._failure("Invalid website url", "website")

        if not all_fields_valid:
            return

        if not has_email_or_phone:
            yield self._failure("Either an email address or a phone number is required", "email", "phone")

        if model.auto_redirect and not has_website:
            yield self._failure("A website url is required to use auto redirect", "website")
