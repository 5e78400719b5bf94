"""Application configuration using pydantic-settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Tour of Heroes Client"
    app_version: str = "0.1.0"

    # Backend serving the heroes resource
    api_base_url: str = "http://localhost:4200"
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Locale used when formatting message timestamps
    locale: str = "ja-JP"

    @field_validator("api_base_url")
    @classmethod
    def check_api_base_url(cls, value: str) -> str:
        """
        Require an absolute http(s) URL.

        Relative request paths are resolved against this URL by httpx.
        """
        if not value.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return value.rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
