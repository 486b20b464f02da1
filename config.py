"""Configuration management for the short link service."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    storage_url: str = Field(
        default="memory://",
        description="Storage connection string (memory://, postgresql://..., redis://...)"
    )

    storage_create_tables: bool = Field(
        default=False,
        description="Create the PostgreSQL schema on startup"
    )

    storage_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum PostgreSQL connection pool size"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8001,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. memory:// storage is per-process, so keep 1 with it."
    )

    # Short link settings
    short_id_length: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Length of generated short IDs"
    )

    max_generation_attempts: int = Field(
        default=5,
        ge=1,
        description="Insert attempts before a create fails with a 5xx"
    )

    require_http_scheme: bool = Field(
        default=True,
        description="Only accept absolute http/https URLs for shortening"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
