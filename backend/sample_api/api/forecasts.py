"""Forecasts API — sample endpoints exercising automatic and explicit validation."""

import random
from datetime import date, timedelta

from fastapi import APIRouter, Depends

import structlog

from model_validation import ModelValidationRoute, ModelValidatorService, get_model_validator_service
from sample_api.models.requests import SampleCreateRequest, SampleReadRequest, SampleUpdateRequest
from sample_api.models.responses import WeatherForecast

logger = structlog.get_logger()

# Every bound argument of these endpoints is validated before the handler runs
router = APIRouter(route_class=ModelValidationRoute)

# Plain routes; handlers call the validator service themselves
explicit_router = APIRouter()

SUMMARIES = [
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
]


@router.get("/forecasts", response_model=list[WeatherForecast])
async def list_forecasts():
    """Five days of made-up weather."""
    today = date.today()
    return [
        WeatherForecast(
            date=today + timedelta(days=offset),
            temperature_c=random.randint(-20, 54),
            summary=random.choice(SUMMARIES),
        )
        for offset in range(1, 6)
    ]


@router.post("/forecasts", response_model=SampleCreateRequest)
async def create_forecast(request_body: SampleCreateRequest):
    """Echo a create request that passed automatic validation."""
    logger.info("forecast_created", name=request_body.name)
    return request_body


@router.post("/forecasts/{forecast_id}", response_model=SampleCreateRequest)
def create_forecast_for(
    forecast_id: str,
    request_body: SampleCreateRequest,
    query: SampleReadRequest = Depends(),
):
    """Body and query models are both validated automatically."""
    logger.info("forecast_created", forecast_id=forecast_id, name=request_body.name, read_id=query.id)
    return request_body


@explicit_router.put("/forecasts", response_model=SampleUpdateRequest)
async def update_forecast(
    request_body: SampleUpdateRequest,
    service: ModelValidatorService = Depends(get_model_validator_service),
):
    """Validate explicitly; failures surface through the ValidationFailed handler."""
    service.validate_and_raise(request_body)
    logger.info("forecast_updated", id=str(request_body.id))
    return request_body
