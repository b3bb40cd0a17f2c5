"""
Core configuration using Pydantic Settings.
Loads from environment variables.
"""

from typing import Literal, Optional
from urllib.parse import quote

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = Field(default="interview-service", alias="APP_NAME")
    app_version: str = "1.0.0"
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", alias="APP_ENV"
    )
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    port: int = Field(default=3003, alias="PORT")

    # API
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Database
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_username: str = Field(default="postgres", alias="DB_USERNAME")
    db_password: str = Field(default="postgres", alias="DB_PASSWORD")
    db_name: str = Field(default="interviews", alias="DB_NAME")
    db_echo: bool = Field(default=False, alias="DB_ECHO")
    db_synchronize: Optional[bool] = Field(default=None, alias="DB_SYNCHRONIZE")

    # Redis message channel
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_port: int = Field(default=6379, alias="REDIS_PORT")
    redis_password: Optional[str] = Field(default=None, alias="REDIS_PASSWORD")
    redis_db: int = Field(default=0, alias="REDIS_DB")
    redis_connect_timeout_ms: int = Field(default=10000, alias="REDIS_CONNECT_TIMEOUT")
    redis_retry_attempts: int = Field(default=5, alias="REDIS_RETRY_ATTEMPTS")
    redis_retry_delay_ms: int = Field(default=1000, alias="REDIS_RETRY_DELAY")
    message_request_timeout_ms: int = Field(
        default=5000, alias="MESSAGE_REQUEST_TIMEOUT"
    )

    # Logging
    json_logs: bool = Field(default=True, alias="JSON_LOGS")

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL, built from the DB_* variables unless overridden."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{quote(self.db_username)}:{quote(self.db_password)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def redis_url(self) -> str:
        auth = f":{quote(self.redis_password)}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def synchronize_schema(self) -> bool:
        """Create tables on start-up; off in production unless forced."""
        if self.db_synchronize is not None:
            return self.db_synchronize
        return self.app_env != "production"

    @property
    def message_request_timeout(self) -> float:
        return self.message_request_timeout_ms / 1000


# Global settings instance
settings = Settings()
