# Courier Logging Setup
"""Process-wide logging configuration."""

import logging
from typing import Optional

from courier.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger with the configured level and format."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=settings.log_format,
    )
