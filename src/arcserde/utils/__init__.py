"""Utility functions for arcserde."""

from __future__ import annotations

from .logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "JsonFormatter",
]
