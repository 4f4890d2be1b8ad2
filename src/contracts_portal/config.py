from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalSettings(BaseSettings):
    """
    Settings for the portal client.

    Read from `CONTRACTS_PORTAL_*` environment variables or a `.env` file.
    """

    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the Contracts API"
    )

    request_timeout: float = Field(
        default=60.0,
        description="Seconds to wait for the API before giving up"
    )

    notification_ttl_seconds: float = Field(
        default=5.0,
        description="How long a notification stays visible"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    model_config = SettingsConfigDict(
        env_prefix="CONTRACTS_PORTAL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_portal_settings() -> PortalSettings:
    return PortalSettings()
