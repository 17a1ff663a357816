"""Logging configuration for the application."""

import logging
import secrets
import sys
import time

from roost.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Third-party loggers stay quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger("roost").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )


def new_ref_code(level: str = "ERRO") -> str:
    """Build a reference code that ties a client-visible error to its log entry.

    Format: ``<LEVEL>-<epoch millis>-<6 hex chars>``, e.g.
    ``ERRO-1718000000000-a1b2c3``.
    """
    return f"{level.upper()[:4]}-{time.time_ns() // 1_000_000}-{secrets.token_hex(3)}"
