# Courier Configuration
"""Configuration settings loaded from environment variables."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Courier settings from environment variables (``COURIER_`` prefix)."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string passed to logging.basicConfig",
    )
    log_body_limit: int = Field(
        default=2048,
        description="Maximum number of body characters rendered in log records",
    )

    # Transport
    base_url: Optional[str] = Field(
        default=None,
        description="Base URL for the shared HTTP client",
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    user_agent: str = Field(default="courier/1.0", description="User-Agent header value")

    # Correlation
    correlation_header: str = Field(
        default="X-Correlation-ID",
        description="Header carrying the request correlation id",
    )

    class Config:
        env_prefix = "COURIER_"
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
