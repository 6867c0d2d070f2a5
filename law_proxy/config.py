"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LAW_API_URL = "https://www.law.go.kr/DRF/lawSearch.do"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Law open API configuration
    law_oc: str = Field(default="", description="Caller identity token (OC) issued by law.go.kr")
    law_api_url: str = Field(default=DEFAULT_LAW_API_URL, description="Law search endpoint")
    law_timeout: float = Field(default=15.0, description="HTTP request timeout in seconds")
    law_user_agent: str = Field(
        default="LawSearchProxy/1.0", description="User-Agent sent to the upstream API"
    )

    # CORS
    cors_allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin value")

    # Application Configuration
    app_title: str = Field(default="Law Search Proxy", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
