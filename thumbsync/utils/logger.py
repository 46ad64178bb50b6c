"""Standardized logger utility for the entire application."""

from __future__ import annotations

import logging
from typing import List, Optional


def configure_logger(
    level: str = "INFO",
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    console: bool = True,
) -> None:
    """Configure the root logger with standard settings.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        file_path: Also write records to this file when given
        console: Attach a stderr handler to the root logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if file_path:
        handlers.append(logging.FileHandler(file_path))
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
