"""Field type helpers for wire record models."""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def int_bounds(bits: int) -> tuple[int, int]:
    """Return the inclusive (min, max) range of a signed integer of ``bits`` width."""
    if bits <= 0:
        raise ValueError(f"bits must be > 0, got {bits}")
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def SignedInt(*, bits: int, **kwargs: Any) -> FieldInfo:
    """Create a signed fixed-width integer field.

    This is a convenience wrapper around Pydantic's Field() that sets ge= and le=
    to the two's complement range of the given width.

    Args:
        bits: Integer width in bits (32 for int columns, 64 for bigint columns)
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Record(BaseModel):
        ...     flags: int = SignedInt(bits=32)
    """
    lo, hi = int_bounds(bits)
    return cast(FieldInfo, Field(ge=lo, le=hi, **kwargs))
