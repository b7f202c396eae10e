"""Pydantic wire record models for arcserde.

This module provides the ArcFileItem wire record and its field helpers.
"""

from __future__ import annotations

from .fields import SignedInt, int_bounds
from .record import ArcFileHeaderItem, ArcFileItem

__all__ = [
    "ArcFileItem",
    "ArcFileHeaderItem",
    "SignedInt",
    "int_bounds",
]
