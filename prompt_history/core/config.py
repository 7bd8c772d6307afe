"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Prompt History"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Record store
    RECORD_STORE_BACKEND: str = "dynamodb"

    # AWS (DynamoDB + S3)
    AWS_REGION: str = "ap-south-1"
    AWS_ENDPOINT_URL: Optional[str] = None
    DYNAMODB_TABLE: str = "PromptHistory"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 10
    REDIS_KEY_PREFIX: str = "prompt:"

    # Media
    MEDIA_BUCKET: str = Field(..., description="S3 bucket holding generated media")
    MEDIA_KEY_PREFIX: str = "generated-media/"

    # Behaviour
    STRICT_UPDATE_VALIDATION: bool = False
    EXPOSE_STORE_ERRORS: bool = True

    # HTTP
    CORS_ALLOW_ORIGINS: str = "*"

    # Observability
    METRICS_ENABLED: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ALLOW_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v

    @field_validator("RECORD_STORE_BACKEND")
    @classmethod
    def validate_record_store_backend(cls, v: str) -> str:
        """Validate record store backend."""
        valid_backends = {"dynamodb", "redis"}
        v = v.lower()
        if v not in valid_backends:
            raise ValueError(f"RECORD_STORE_BACKEND must be one of {valid_backends}")
        return v

    @field_validator("MEDIA_KEY_PREFIX")
    @classmethod
    def validate_media_key_prefix(cls, v: str) -> str:
        """Media keys live under a folder, so the prefix ends with a slash."""
        if v and not v.endswith("/"):
            v = f"{v}/"
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
