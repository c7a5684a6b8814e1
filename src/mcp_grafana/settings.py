from typing import Annotated

from pydantic import BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_upper(v: str) -> str:
    """Converts to uppercase and strips whitespace."""
    return v.strip().upper() if isinstance(v, str) else v


def parse_stripped(v: str) -> str:
    """Strips surrounding whitespace."""
    return v.strip() if isinstance(v, str) else v


UpperStr = Annotated[str, BeforeValidator(parse_upper)]
StrippedStr = Annotated[str, BeforeValidator(parse_stripped)]

DEFAULT_GRAFANA_URL = "http://localhost:3000"


class EnvBase(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(EnvBase):
    """General application settings."""

    PROJECT_NAME: str = "mcp-grafana"

    ENV_MODE: UpperStr = "LOCAL"

    # Logging
    LOG_LEVEL: UpperStr = "INFO"


class GrafanaSettings(EnvBase):
    """Grafana connection and header forwarding settings."""

    GRAFANA_URL: StrippedStr = DEFAULT_GRAFANA_URL
    GRAFANA_SERVICE_ACCOUNT_TOKEN: str = ""
    # Deprecated in favour of GRAFANA_SERVICE_ACCOUNT_TOKEN
    GRAFANA_API_KEY: str = ""
    GRAFANA_ORG_ID: StrippedStr = ""

    # JSON object of header name -> value sent on every Grafana request
    GRAFANA_EXTRA_HEADERS: str = ""
    # Comma-separated header names copied from the incoming request, or "*"
    GRAFANA_FORWARD_REQUEST_HEADERS: str = ""


class Settings:
    def __init__(self):
        self.app = AppSettings()


settings = Settings()
