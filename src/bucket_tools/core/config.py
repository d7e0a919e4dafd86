"""Configuration management for bucket-tools."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bucket_tools.core.exceptions import ValidationError
from bucket_tools.schemas import S3StorageConfig


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "bucket-tools"

    model_config = {
        "env_prefix": "BUCKET_TOOLS_",
        "case_sensitive": False,
    }


class StorageEnvironment(BaseSettings):
    """Storage connection settings sourced from SS_AWS_* environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", populate_by_name=True
    )

    access_key_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("SS_AWS_ACCESS_KEY_ID")
    )
    secret_access_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("SS_AWS_SECRET_ACCESS_KEY")
    )
    region_name: str = Field(
        "us-east-1", validation_alias=AliasChoices("SS_AWS_REGION")
    )
    bucket: Optional[str] = Field(
        None, validation_alias=AliasChoices("SS_AWS_S3_BUCKET")
    )
    kms_key_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("SS_AWS_KMS_KEY_ID")
    )
    user_agent: Optional[str] = Field(
        None, validation_alias=AliasChoices("SS_AWS_CLIENT_USER_AGENT")
    )
    endpoint_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("SS_AWS_ENDPOINT_URL")
    )

    def to_storage_config(self, **overrides) -> S3StorageConfig:
        """Build a storage configuration, letting non-None overrides win.

        Raises:
            ValidationError: If no bucket is available from either source
        """
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not values.get("bucket"):
            raise ValidationError(
                "No bucket configured; set SS_AWS_S3_BUCKET or pass a bucket"
            )

        return S3StorageConfig(**values)


settings = Settings()
