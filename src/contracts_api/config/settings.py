# src/contracts_api/config/settings.py
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_DEV = "local-dev"
AWS_MOCK = "aws-mock"
AWS_PROD = "aws-prod"
DEPLOYMENT_MODES = [LOCAL_DEV, AWS_MOCK, AWS_PROD]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """
    Single source of truth for the gateway settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from contracts_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="contracts-api",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default=LOCAL_DEV,
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="contract-portal-files",
        description="S3 bucket for contract archives"
    )

    s3_object_acl: Optional[str] = Field(
        default="public-read",
        description="Canned ACL applied to uploaded objects; empty disables it"
    )

    s3_public_base_url: Optional[str] = Field(
        default=None,
        description="Base URL objects are publicly served from (e.g. a CDN)"
    )

    # Database Configuration
    database_path: str = Field(
        default="contracts.db",
        description="SQLite database holding contract metadata"
    )

    # Local Storage Configuration
    storage_dir: str = Field(
        default="storage",
        description="Local blob directory used in local-dev mode"
    )

    public_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL the API is reachable on, used for local blob URLs"
    )

    # HTTP
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("deployment_mode", mode="before")
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Map legacy mode names onto the current ones."""
        if v:
            mode_mapping = {
                "local": LOCAL_DEV,
                "local-mock": LOCAL_DEV,
                "mock": AWS_MOCK,
                "cloud": AWS_PROD,
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator("deployment_mode")
    @classmethod
    def validate_deployment_mode(cls, v):
        if v not in DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {DEPLOYMENT_MODES}")
        return v

    @field_validator("s3_object_acl", "s3_public_base_url", "aws_endpoint_url", mode="before")
    @classmethod
    def empty_string_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def set_mock_defaults(self):
        """Point aws-mock at a local moto server unless told otherwise."""
        if self.deployment_mode == AWS_MOCK:
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = "http://localhost:5000"
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        return self

    @property
    def uses_s3(self) -> bool:
        return self.deployment_mode in [AWS_MOCK, AWS_PROD]

    @property
    def s3_base_url(self) -> str:
        """Base URL under which uploaded objects are addressed."""
        if self.s3_public_base_url:
            return self.s3_public_base_url.rstrip("/")
        if self.aws_endpoint_url:
            return f"{self.aws_endpoint_url.rstrip('/')}/{self.s3_bucket_name}"
        return f"https://{self.s3_bucket_name}.s3.{self.aws_region}.amazonaws.com"

    def get_environment_dict(self) -> dict:
        """Get configuration as a dictionary suitable for subprocesses or display."""
        return {
            "DEPLOYMENT_MODE": self.deployment_mode,
            "S3_BUCKET_NAME": self.s3_bucket_name,
            "AWS_DEFAULT_REGION": self.aws_region,
            "AWS_ENDPOINT_URL": self.aws_endpoint_url or "",
            "DATABASE_PATH": self.database_path,
            "STORAGE_DIR": self.storage_dir,
            "PUBLIC_BASE_URL": self.public_base_url,
            "LOG_LEVEL": self.log_level,
        }


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
