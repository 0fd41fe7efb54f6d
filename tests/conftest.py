"""Shared fixtures: a provider built from the sample validators and a test client."""

import pytest
from fastapi.testclient import TestClient

from model_validation import ModelValidatorService, ServiceCollection, add_model_validators_from_module
from sample_api import validators as sample_validators
from sample_api.main import create_app


@pytest.fixture
def services() -> ServiceCollection:
    return add_model_validators_from_module(ServiceCollection(), sample_validators)


@pytest.fixture
def provider(services):
    return services.build_provider()


@pytest.fixture
def service(provider) -> ModelValidatorService:
    return provider.get_required_service(ModelValidatorService)


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client
