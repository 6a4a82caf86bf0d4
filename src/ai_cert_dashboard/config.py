"""Configuration loading and validation."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

API_URL_ENV = "AI_DASHBOARD_API_URL"


class ApiConfig(BaseModel):
    """Statistics API connection configuration."""

    base_url: str = "http://127.0.0.1:3000"
    prefix: str = "/ai_transform_webapi"
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    account: str | None = Field(default=None, description="Employee account forwarded upstream")

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Normalize the prefix to a leading slash and no trailing slash."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v


class MockServerConfig(BaseModel):
    """Mock backend server configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)


class DashboardConfig(BaseModel):
    """Dashboard query defaults."""

    dept_code: str = "0"
    person_type: str = Field(default="0", pattern=r"^[0-3]$")


class Config(BaseModel):
    """Root configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    mock: MockServerConfig = Field(default_factory=MockServerConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)


def load_config(path: Path | None = None) -> Config:
    """Load and validate configuration from a YAML file.

    When no path is given the defaults are used. The API base URL can be
    overridden with the ``AI_DASHBOARD_API_URL`` environment variable.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    raw_config: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open(encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}

    config = Config.model_validate(raw_config)

    env_url = os.getenv(API_URL_ENV)
    if env_url:
        config.api.base_url = env_url

    return config
