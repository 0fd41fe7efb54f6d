import pytest

from model_validation import (
    DEFAULT_SCENARIO,
    MissingValidatorError,
    ModelValidator,
    ModelValidatorService,
    ServiceCollection,
    ValidationContext,
    ValidationFailed,
    ValidationFailure,
    add_model_validators,
)
from sample_api.models.requests import SampleCreateRequest, SampleUpdateRequest
from sample_api.validators.create_request_validator import SampleCreateRequestValidator


class Unvalidated:
    pass


class Ticket:
    def __init__(self, title="", priority=1):
        self.title = title
        self.priority = priority


class TicketValidator(ModelValidator[Ticket]):
    model_type = Ticket

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        if not model.title:
            yield self._failure("Title is required", "title")
        if model.priority > 5:
            yield self._failure("Priority is out of range")


@pytest.fixture
def ticket_service() -> ModelValidatorService:
    provider = add_model_validators(ServiceCollection(), [TicketValidator]).build_provider()
    return provider.get_required_service(ModelValidatorService)


def test_get_validator_returns_registered_instance(service):
    assert isinstance(service.get_validator(SampleCreateRequest), SampleCreateRequestValidator)


def test_get_validator_returns_none_when_absent(service):
    assert service.get_validator(Unvalidated) is None


def test_strict_validate_raises_for_unregistered_type(service):
    with pytest.raises(MissingValidatorError) as exc_info:
        service.validate(Unvalidated())

    assert exc_info.value.model_type_name == "Unvalidated"
    assert "Unvalidated" in str(exc_info.value)


def test_strict_validate_and_raise_raises_for_unregistered_type(service):
    with pytest.raises(MissingValidatorError):
        service.validate_and_raise(Unvalidated())


def test_missing_validator_is_a_lookup_error(service):
    with pytest.raises(LookupError):
        service.validate(Unvalidated())


def test_lenient_validate_returns_nothing_for_unregistered_type(service):
    context = ValidationContext(instance=Unvalidated())

    assert list(service.validate_context(context)) == []
    assert list(service.validate(context)) == []


def test_strict_validate_delegates_to_validator(ticket_service):
    failures = list(ticket_service.validate(Ticket(title="")))

    assert failures == [ValidationFailure(message="Title is required", field_names=("title",))]


def test_lenient_validate_uses_context_object_type(ticket_service):
    class SpecialTicket(Ticket):
        pass

    special = SpecialTicket(title="")

    assert list(ticket_service.validate_context(ValidationContext(instance=special))) == []
    context = ValidationContext(instance=special, object_type=Ticket)
    assert len(list(ticket_service.validate_context(context))) == 1


def test_explicit_model_type_overrides_runtime_type(service):
    update = SampleUpdateRequest(name="Bob", email="bob@x.com")

    # Update requests are create requests too; the create rules alone pass
    assert list(service.validate(update, model_type=SampleCreateRequest)) == []
    assert [f.field_names for f in service.validate(update)] == [("id",)]


def test_validate_and_raise_returns_normally_for_valid_model(ticket_service):
    assert ticket_service.validate_and_raise(Ticket(title="Fix it")) is None


def test_validate_and_raise_carries_full_report(ticket_service):
    with pytest.raises(ValidationFailed) as exc_info:
        ticket_service.validate_and_raise(Ticket(title="", priority=9))

    assert exc_info.value.report.to_dict() == {
        "title": ["Title is required"],
        "Ticket": ["Priority is out of range"],
    }
    assert str(exc_info.value) == "Model validation failed."


def test_validate_and_raise_report_keys_match_failures(service):
    model = SampleCreateRequest(name="", email="not-an-email", phone="123")
    failures = list(service.validate(model))

    with pytest.raises(ValidationFailed) as exc_info:
        service.validate_and_raise(model)

    expected_keys = {name for failure in failures for name in failure.field_names}
    assert set(exc_info.value.report.errors) == expected_keys == {"name", "email", "phone"}


def test_service_resolves_from_a_request_scope(services):
    provider = services.build_provider()
    scope = provider.create_scope()
    service = provider.get_required_service(ModelValidatorService)

    context = ValidationContext(instance=SampleCreateRequest(name="Bob"), services=scope)
    failures = list(service.validate_context(context))

    assert [f.field_names for f in failures] == [("email", "phone")]
