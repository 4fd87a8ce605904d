"""Pydantic v2 configuration schema, frozen once loaded."""

from enum import StrEnum

from pydantic import BaseModel, Field

from weatherapp.config.defaults import DEFAULT_API_BASE_URL, DEFAULT_CORS_ORIGINS


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    base_url: str = DEFAULT_API_BASE_URL
    timeout_ms: int = Field(default=30_000, gt=0)
    enable_logging: bool = False
    max_retries: int = Field(default=2, ge=0, le=2)
    retry_base_delay_s: float = Field(default=0.5, ge=0.0)


class BackendConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    environment: Environment = Environment.DEVELOPMENT
    host: str = "127.0.0.1"
    port: int = Field(default=5197, ge=1, le=65535)
    days: int = Field(default=5, ge=1, le=14)
    seed: int | None = None
    allowed_origins: list[str] = DEFAULT_CORS_ORIGINS


class AppConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    api: ApiConfig = ApiConfig()
    backend: BackendConfig = BackendConfig()
