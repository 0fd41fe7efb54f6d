"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from sample_api.api.health import router as health_router
from sample_api.api.forecasts import router as forecasts_router, explicit_router as explicit_forecasts_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Forecasts: automatic validation on every argument
api_router.include_router(forecasts_router, tags=["Forecasts"])

# Forecasts: explicit validate_and_raise inside the endpoint
api_router.include_router(explicit_forecasts_router, tags=["Forecasts"])
