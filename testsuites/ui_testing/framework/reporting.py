"""
================================================================================
Reporting: Logging and Allure Attachments
================================================================================

Centralized Loguru setup and Allure attachment helpers for the UI suite.

init_logger() is idempotent and reads the `logging.*` section through
ConfigLoader, so LOGGING_LEVEL / LOGGING_FILE environment variables work
the same way as every other setting.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import allure
from loguru import logger

from .config_loader import ConfigLoader


DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

_logger_initialized: bool = False


def init_logger(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        log_file: Optional log file path. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = ConfigLoader()
    log_level = (level or config.get("logging.level", "INFO")).upper()
    log_format = config.get("logging.format", DEFAULT_LOG_FORMAT)
    log_file = log_file or config.get("logging.file", None)

    # Remove default logger and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text") -> None:
    """Attach text content to Allure report."""
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT,
    )


def attach_png(image: bytes, name: str = "Screenshot") -> None:
    """Attach a PNG image to Allure report."""
    allure.attach(
        image,
        name=name,
        attachment_type=allure.attachment_type.PNG,
    )


def attach_locator_health(locator) -> None:
    """Attach the locator health report if any fallback selectors were used."""
    if locator.fallbacks_used:
        attach_text(locator.get_health_report(), name="🔍 Locator Health")


__all__ = [
    "init_logger",
    "attach_text",
    "attach_png",
    "attach_locator_health",
]
