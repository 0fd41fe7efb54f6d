"""Automatic model validation for FastAPI routes.

FastAPI binds and structurally validates request arguments first; when that
fails it answers 422 itself and the endpoint (and this hook) never runs. When
it succeeds, ``ModelValidationRoute`` runs every bound argument through the
lenient validator lookup, merges the failures into one report and rejects the
request if the report is not empty.

Usage:
    services = add_model_validators_from_module(ServiceCollection(), "app.validators")
    use_automatic_model_validation(app, services)
    router = APIRouter(route_class=ModelValidationRoute)
"""

import functools
import inspect
import typing
from typing import Any, Callable, Mapping, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool

from model_validation.config import get_settings
from model_validation.exceptions import MissingValidatorError, ValidationFailed
from model_validation.models import ValidationContext, ValidationReport
from model_validation.registry import ServiceCollection, ServiceProvider
from model_validation.service import ModelValidatorService

logger = structlog.get_logger()

# Extra parameter injected into wrapped endpoints so the hook can reach the request
REQUEST_PARAMETER = "model_validation_request"

_WRAPPED_MARKER = "__model_validation_wrapped__"


def validate_arguments(
    service: ModelValidatorService,
    arguments: Mapping[str, Any],
    services: Optional[ServiceProvider] = None,
) -> ValidationReport:
    """Validate each argument value leniently and merge the failures.

    Field-less failures are keyed by the argument value's type name.
    """
    report = ValidationReport()
    for name, value in arguments.items():
        if value is None:
            continue

        context = ValidationContext(instance=value, services=services, items={"argument": name})
        for failure in service.validate_context(context):
            report.add_failure(failure, type(value).__name__)

    return report


def get_request_services(request: Request) -> ServiceProvider:
    """Return the service scope for ``request``, creating it on first use."""
    scope = getattr(request.state, "model_validation_scope", None)
    if scope is None:
        provider = getattr(request.app.state, "model_validation_services", None)
        if provider is None:
            raise RuntimeError(
                "Automatic model validation is not configured. "
                "Call use_automatic_model_validation() during application setup."
            )
        scope = provider.create_scope()
        request.state.model_validation_scope = scope
    return scope


def get_model_validator_service(request: Request) -> ModelValidatorService:
    """FastAPI dependency that yields the validator service for the current request."""
    return get_request_services(request).get_required_service(ModelValidatorService)


def _reject_invalid_arguments(request: Request, arguments: Mapping[str, Any]) -> Optional[JSONResponse]:
    scope = get_request_services(request)
    service = scope.get_required_service(ModelValidatorService)
    report = validate_arguments(service, arguments, services=scope)

    if report.is_valid:
        return None

    logger.info(
        "model_validation_rejected",
        path=request.url.path,
        method=request.method,
        fields=list(report.errors),
        error_count=report.error_count,
    )
    return JSONResponse(status_code=get_settings().ERROR_STATUS_CODE, content=report.to_dict())


def _with_request_parameter(endpoint: Callable) -> inspect.Signature:
    """Endpoint signature with resolved annotations plus the injected request parameter."""
    signature = inspect.signature(endpoint)
    hints = typing.get_type_hints(endpoint, include_extras=True)

    parameters = []
    var_keyword = None
    for parameter in signature.parameters.values():
        if parameter.name in hints:
            parameter = parameter.replace(annotation=hints[parameter.name])
        if parameter.kind == inspect.Parameter.VAR_KEYWORD:
            var_keyword = parameter
            continue
        parameters.append(parameter)

    parameters.append(inspect.Parameter(
        REQUEST_PARAMETER,
        inspect.Parameter.KEYWORD_ONLY,
        annotation=Request,
    ))
    if var_keyword is not None:
        parameters.append(var_keyword)

    return signature.replace(
        parameters=parameters,
        return_annotation=hints.get("return", signature.return_annotation),
    )


def wrap_endpoint(endpoint: Callable) -> Callable:
    """Run automatic model validation before ``endpoint``; idempotent."""
    if getattr(endpoint, _WRAPPED_MARKER, False):
        return endpoint

    is_coroutine = inspect.iscoroutinefunction(endpoint)

    @functools.wraps(endpoint)
    async def wrapper(*args, **kwargs):
        request = kwargs.pop(REQUEST_PARAMETER)

        rejection = _reject_invalid_arguments(request, kwargs)
        if rejection is not None:
            return rejection

        if is_coroutine:
            return await endpoint(*args, **kwargs)
        return await run_in_threadpool(endpoint, *args, **kwargs)

    # FastAPI unwraps __wrapped__ when deciding whether an endpoint is async
    del wrapper.__wrapped__
    wrapper.__signature__ = _with_request_parameter(endpoint)
    setattr(wrapper, _WRAPPED_MARKER, True)
    return wrapper


class ModelValidationRoute(APIRoute):
    """APIRoute whose endpoint is guarded by automatic model validation."""

    def __init__(self, path: str, endpoint: Callable, **kwargs: Any):
        super().__init__(path, wrap_endpoint(endpoint), **kwargs)


# ── Exception translation ──

async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    """Render an explicit validate_and_raise failure like an automatic rejection."""
    logger.info(
        "model_validation_failed",
        path=request.url.path,
        method=request.method,
        fields=list(exc.report.errors),
    )
    return JSONResponse(status_code=get_settings().ERROR_STATUS_CODE, content=exc.report.to_dict())


async def missing_validator_handler(request: Request, exc: MissingValidatorError) -> JSONResponse:
    """A missing validator on a strict path is a configuration defect."""
    logger.error(
        "model_validator_missing",
        path=request.url.path,
        method=request.method,
        model_type=exc.model_type_name,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "missing_model_validator", "message": str(exc)},
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(MissingValidatorError, missing_validator_handler)


def use_automatic_model_validation(app: FastAPI, services: ServiceCollection) -> ServiceProvider:
    """Enable automatic model validation for ``app``.

    Builds the service provider, stores it on ``app.state``, makes
    ModelValidationRoute the default route class of the app router and
    installs the exception handlers. Routers included from elsewhere must be
    created with ``route_class=ModelValidationRoute``.

    Raises:
        RuntimeError: if no validators (and thus no validator service) were registered
    """
    if ModelValidatorService not in services:
        raise RuntimeError(
            f"Unable to resolve {ModelValidatorService.__name__}. You may have forgotten "
            "to register model validators before calling this function."
        )

    provider = services.build_provider()
    app.state.model_validation_services = provider
    app.router.route_class = ModelValidationRoute
    install_exception_handlers(app)

    logger.info("automatic_model_validation_enabled", services=len(services))
    return provider
