"""Logging utilities."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "codeactions"


def configure_logging(level: str = "INFO", *, rich_tracebacks: bool = True) -> None:
    """Send package logs to stderr so stdout carries only the transcript."""
    console = Console(stderr=True)
    handler = RichHandler(console=console, rich_tracebacks=rich_tracebacks, markup=False, show_path=False)
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level.upper())


def get_logger(name: str, *extra_names: str) -> logging.Logger:
    """Return a namespaced logger."""
    namespace = ".".join([name, *extra_names]) if extra_names else name
    return logging.getLogger(namespace)


__all__ = ["configure_logging", "get_logger"]
