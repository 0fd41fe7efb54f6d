import importlib
import sys

import pytest

from model_validation import (
    DEFAULT_SCENARIO,
    ModelValidator,
    ModelValidatorService,
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
    ValidationFailure,
    add_model_validators,
    add_model_validators_from_module,
    add_model_validators_from_module_containing,
    validator_key,
)
from model_validation.registration import find_model_validators
from sample_api import validators as sample_validators
from sample_api.models.requests import SampleCreateRequest, SampleReadRequest, SampleUpdateRequest
from sample_api.validators.create_request_validator import SampleCreateRequestValidator
from sample_api.validators.update_request_validator import SampleUpdateRequestValidator


class Gadget:
    pass


class Gizmo:
    pass


class FirstGadgetValidator(ModelValidator[Gadget]):
    model_type = Gadget

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message="first")


class SecondGadgetValidator(ModelValidator[Gadget]):
    model_type = Gadget

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message="second")


class AbstractGadgetValidator(ModelValidator[Gadget]):
    model_type = Gadget


class UndeclaredValidator(ModelValidator):
    def validate(self, model, scenario=DEFAULT_SCENARIO):
        return ()


class SharedValidator(ModelValidator):
    model_type = (Gadget, Gizmo)

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message=f"shared {type(model).__name__}")


def _messages(services, model):
    service = services.build_provider().get_required_service(ModelValidatorService)
    return [failure.message for failure in service.validate(model)]


@pytest.mark.parametrize("order,expected", [
    ([FirstGadgetValidator, SecondGadgetValidator], ["first"]),
    ([SecondGadgetValidator, FirstGadgetValidator], ["second"]),
])
def test_first_registered_validator_wins(order, expected):
    services = add_model_validators(ServiceCollection(), order)

    assert _messages(services, Gadget()) == expected


def test_later_registration_call_does_not_overwrite():
    services = add_model_validators(ServiceCollection(), [FirstGadgetValidator])
    add_model_validators(services, [SecondGadgetValidator])

    assert _messages(services, Gadget()) == ["first"]


def test_abstract_and_undeclared_validators_are_skipped():
    services = add_model_validators(
        ServiceCollection(),
        [ModelValidator, AbstractGadgetValidator, UndeclaredValidator],
    )

    assert validator_key(Gadget) not in services
    assert [d.key for d in services] == [ModelValidatorService]


def test_validator_declaring_several_types_is_registered_for_each():
    services = add_model_validators(ServiceCollection(), [SharedValidator])

    assert _messages(services, Gadget()) == ["shared Gadget"]
    assert _messages(services, Gizmo()) == ["shared Gizmo"]


def test_validator_service_is_registered_once_with_try_add():
    custom = ServiceDescriptor(ModelValidatorService, ModelValidatorService, ServiceLifetime.TRANSIENT)
    services = ServiceCollection()
    services.try_add(custom)

    add_model_validators(services, [FirstGadgetValidator])

    assert services.get_descriptor(ModelValidatorService) is custom


def test_default_lifetime_is_singleton():
    services = add_model_validators(ServiceCollection(), [FirstGadgetValidator])

    assert services.get_descriptor(validator_key(Gadget)).lifetime is ServiceLifetime.SINGLETON
    assert services.get_descriptor(ModelValidatorService).lifetime is ServiceLifetime.SINGLETON


def test_caller_can_override_lifetime():
    services = add_model_validators(ServiceCollection(), [FirstGadgetValidator], lifetime="transient")
    provider = services.build_provider()

    assert services.get_descriptor(validator_key(Gadget)).lifetime is ServiceLifetime.TRANSIENT
    assert provider.get_service(validator_key(Gadget)) is not provider.get_service(validator_key(Gadget))


CONTACT_LIBRARY = '''
from model_validation import DEFAULT_SCENARIO, ModelValidator, ValidationFailure


class Contact:
    pass


class LibraryContactValidator(ModelValidator):
    model_type = Contact

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message="library")
'''

CONTACT_APP_VALIDATORS = '''
from {library} import Contact, LibraryContactValidator
from model_validation import DEFAULT_SCENARIO, ValidationFailure


class AppContactValidator(LibraryContactValidator):
    model_type = Contact

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message="app")
'''

ORDERED_VALIDATORS = '''
from model_validation import DEFAULT_SCENARIO, ModelValidator, ValidationFailure


class Part:
    pass


class SecondPartValidator(ModelValidator):
    model_type = Part

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message="second")


class FirstPartValidator(ModelValidator):
    model_type = Part

    def validate(self, model, scenario=DEFAULT_SCENARIO):
        yield ValidationFailure(message="first")
'''


def _import_source(tmp_path, monkeypatch, name, source):
    (tmp_path / f"{name}.py").write_text(source, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, name, raising=False)
    return importlib.import_module(name)


def test_scan_of_a_module_uses_definition_order(tmp_path, monkeypatch):
    module = _import_source(tmp_path, monkeypatch, "ordered_part_validators", ORDERED_VALIDATORS)

    assert find_model_validators(module) == [module.SecondPartValidator, module.FirstPartValidator]

    services = add_model_validators_from_module(ServiceCollection(), module)
    assert _messages(services, module.Part()) == ["second"]


def test_scan_registers_only_validators_defined_in_the_module(tmp_path, monkeypatch):
    library = _import_source(tmp_path, monkeypatch, "contact_library", CONTACT_LIBRARY)
    app_module = _import_source(
        tmp_path,
        monkeypatch,
        "contact_app_validators",
        CONTACT_APP_VALIDATORS.format(library="contact_library"),
    )

    assert find_model_validators(app_module) == [app_module.AppContactValidator]

    services = add_model_validators_from_module(ServiceCollection(), app_module)
    assert _messages(services, library.Contact()) == ["app"]


def test_scan_of_sample_package_registers_every_validator(services):
    assert validator_key(SampleCreateRequest) in services
    assert validator_key(SampleUpdateRequest) in services
    assert validator_key(SampleReadRequest) in services
    assert ModelValidatorService in services
    assert services.get_descriptor(validator_key(SampleCreateRequest)).implementation is SampleCreateRequestValidator


def test_scan_accepts_a_dotted_module_name():
    services = add_model_validators_from_module(ServiceCollection(), "sample_api.validators")

    assert validator_key(SampleUpdateRequest) in services


def test_scan_of_package_containing_a_marker():
    services = add_model_validators_from_module_containing(ServiceCollection(), SampleCreateRequestValidator)

    assert validator_key(SampleCreateRequest) in services
    assert validator_key(SampleReadRequest) in services


def test_marker_scan_is_limited_to_the_marker_package():
    services = add_model_validators_from_module_containing(ServiceCollection(), SampleCreateRequest)

    assert validator_key(SampleCreateRequest) not in services
    assert ModelValidatorService in services


def test_composed_validator_receives_its_dependency(provider):
    update_validator = provider.get_service(validator_key(SampleUpdateRequest))

    assert isinstance(update_validator, SampleUpdateRequestValidator)
    assert update_validator._create_request_validator is provider.get_service(validator_key(SampleCreateRequest))


def test_sample_package_scan_finds_no_duplicates():
    found = find_model_validators(sample_validators)

    assert len(found) == len(set(found))
