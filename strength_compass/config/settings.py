from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="Strength Compass", validation_alias="APP_NAME")
    api_base_url: str = Field(
        default="http://localhost:5000",  # Default for local dev; MUST point at the prediction API in production
        validation_alias="API_BASE_URL",
    )
    api_timeout_seconds: float = Field(
        default=30.0,
        validation_alias="API_TIMEOUT_SECONDS",
        description="Fixed request timeout for the prediction API",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, value: str) -> str:
        """Strip the trailing slash so endpoint paths join cleanly."""
        if not value.startswith(("http://", "https://")):
            logger.warning(f"API_BASE_URL should be an http(s) URL, but got: {value}. Prediction calls will fall back locally.")
        return value.rstrip("/")

    @field_validator("api_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("API_TIMEOUT_SECONDS must be positive")
        return value


settings = Settings()
