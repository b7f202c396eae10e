"""Archive record codec for arcserde.

This module provides schema validation and conversion in both directions
between ArcFileItem wire records and generic table rows.
"""

from __future__ import annotations

from .decoder import decode
from .encoder import encode
from .schema import (
    CANONICAL_COLUMNS,
    HEADER_LIST_TYPE,
    LIST_COLUMN_TYPES,
    ROW_TYPE,
    CompiledLayout,
    compile_layout,
    verify_schema,
)
from .serde import ArcSerDe

__all__ = [
    "ArcSerDe",
    "encode",
    "decode",
    "compile_layout",
    "verify_schema",
    "CompiledLayout",
    "CANONICAL_COLUMNS",
    "HEADER_LIST_TYPE",
    "LIST_COLUMN_TYPES",
    "ROW_TYPE",
]
