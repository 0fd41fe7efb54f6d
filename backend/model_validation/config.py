"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Model validation settings loaded from environment variables."""

    # Server
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Registration
    VALIDATOR_LIFETIME: str = "singleton"

    # Pipeline
    ERROR_STATUS_CODE: int = 422

    # Format checks
    DEFAULT_PHONE_REGION: str = "US"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "MODEL_VALIDATION_",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
