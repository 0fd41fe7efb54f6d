"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from model_validation.registry import ValidatorKey
from sample_api.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """System health check with the number of registered validators."""
    provider = getattr(request.app.state, "model_validation_services", None)

    if provider is None:
        status = "unhealthy"
        registered = 0
    else:
        registered = sum(isinstance(key, ValidatorKey) for key in provider.registered_keys())
        status = "healthy" if registered else "degraded"

    return HealthResponse(
        status=status,
        uptime_seconds=round(time.time() - _start_time, 2),
        registered_validators=registered,
    )
