"""Configuration settings loaded from environment variables."""

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Decision service connection
    decision_service_url: str = Field(
        default="http://localhost:8080/flowable-rest/dmn-api",
        description="Base URL of the decision-evaluation REST service",
    )
    decision_service_username: str | None = Field(
        default=None,
        description="Basic auth user for the decision service",
    )
    decision_service_password: str | None = Field(
        default=None,
        description="Basic auth password for the decision service",
    )

    # Performance Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    max_retries: int = Field(default=3, ge=1, description="Max API retry attempts")
    request_timeout: int = Field(default=30, description="Request timeout in seconds")

    # Engine-wide decision task behaviour
    always_use_arrays_for_multi_hit: bool = Field(
        default=True,
        description="Bind multi-hit results as an array even when only one rule matched",
    )
    enable_definition_info_cache: bool = Field(
        default=False,
        description="Apply dynamic per-step overrides to the decision key",
    )

    model_config = {"extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance loaded from environment."""
    return Settings(
        decision_service_url=os.getenv(
            "DECISION_SERVICE_URL", "http://localhost:8080/flowable-rest/dmn-api"
        ),
        decision_service_username=os.getenv("DECISION_SERVICE_USERNAME"),
        decision_service_password=os.getenv("DECISION_SERVICE_PASSWORD"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        max_retries=int(os.getenv("MAX_RETRIES", "3")),
        request_timeout=int(os.getenv("REQUEST_TIMEOUT", "30")),
        always_use_arrays_for_multi_hit=_env_flag(
            "ALWAYS_USE_ARRAYS_FOR_DMN_MULTI_HIT_POLICIES", "true"
        ),
        enable_definition_info_cache=_env_flag("ENABLE_PROCESS_DEFINITION_INFO_CACHE", "false"),
    )
