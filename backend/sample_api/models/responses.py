"""API response models."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel


class WeatherForecast(BaseModel):
    """A single day's forecast."""

    date: date
    temperature_c: int
    summary: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    registered_validators: int
