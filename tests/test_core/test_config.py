"""Tests for application settings."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from prompt_history.core.config import Settings


@pytest.mark.unit
class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self):
        config = Settings(MEDIA_BUCKET="media", RECORD_STORE_BACKEND="dynamodb")

        assert config.PORT == 8080
        assert config.DYNAMODB_TABLE == "PromptHistory"
        assert config.MEDIA_KEY_PREFIX == "generated-media/"
        assert config.STRICT_UPDATE_VALIDATION is False
        assert config.EXPOSE_STORE_ERRORS is True

    def test_log_level_is_normalized(self):
        config = Settings(MEDIA_BUCKET="media", LOG_LEVEL="debug")
        assert config.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(MEDIA_BUCKET="media", LOG_LEVEL="LOUD")

    def test_invalid_record_store_backend(self):
        with pytest.raises(PydanticValidationError):
            Settings(MEDIA_BUCKET="media", RECORD_STORE_BACKEND="postgres")

    def test_media_key_prefix_gets_trailing_slash(self):
        config = Settings(MEDIA_BUCKET="media", MEDIA_KEY_PREFIX="renders")
        assert config.MEDIA_KEY_PREFIX == "renders/"

    def test_cors_origins_list(self):
        config = Settings(
            MEDIA_BUCKET="media",
            CORS_ALLOW_ORIGINS="https://a.example.com, https://b.example.com",
        )
        assert config.cors_origins_list == ["https://a.example.com", "https://b.example.com"]
