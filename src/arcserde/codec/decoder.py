"""Archive record to row decoder.

This module provides the decode() function that converts an ArcFileItem wire
record into a generic table row laid out by a CompiledLayout.
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..exceptions import FieldTypeError
from ..models.record import ArcFileHeaderItem, ArcFileItem
from .schema import (
    ARC_FILE_NAME,
    ARC_FILE_POS,
    ARC_FILE_SIZE,
    CONTENT,
    FILE_HEADERS,
    FLAGS,
    HEADER_KEY,
    HEADER_VALUE,
    HOST_IP,
    MIME_TYPE,
    RECORD_LENGTH,
    TIMESTAMP,
    URI,
    CompiledLayout,
)


def decode(record: Optional[ArcFileItem], layout: CompiledLayout) -> Optional[List[Any]]:
    """Decode an archive record to a row.

    Each call builds a new row; nothing is shared between calls, so the caller
    owns the returned list.

    Args:
        record: Wire record to decode, or None
        layout: Layout returned by compile_layout()

    Returns:
        Row of 11 values in column order, or None if ``record`` is None

    Raises:
        FieldTypeError: If ``record`` is not an ArcFileItem

    Example:
        >>> row = decode(item, layout)
        >>> row[layout.positions["uri"]]
        'http://example.com/'
    """
    if record is None:
        return None
    if not isinstance(record, ArcFileItem):
        raise FieldTypeError(f"Expected an ArcFileItem, received a {type(record).__name__}")

    positions = layout.positions
    row: List[Any] = [None] * layout.width

    row[positions[URI]] = record.uri
    row[positions[HOST_IP]] = record.host_ip
    row[positions[TIMESTAMP]] = record.timestamp
    row[positions[MIME_TYPE]] = record.mime_type
    row[positions[RECORD_LENGTH]] = record.record_length
    # An absent header list still decodes to an empty list
    row[positions[FILE_HEADERS]] = _decode_headers(record.header_items, layout)
    try:
        row[positions[CONTENT]] = record.content.decode(
            layout.content_encoding, layout.content_errors
        )
    except UnicodeDecodeError as e:
        raise FieldTypeError(
            f"Field {CONTENT}: bytes are not valid {layout.content_encoding}: {e}"
        ) from e
    row[positions[ARC_FILE_NAME]] = record.arc_file_name
    row[positions[ARC_FILE_POS]] = record.arc_file_pos
    row[positions[FLAGS]] = record.flags
    row[positions[ARC_FILE_SIZE]] = record.arc_file_size

    return row


def _decode_headers(
    items: Optional[List[ArcFileHeaderItem]], layout: CompiledLayout
) -> List[List[str]]:
    """Convert header items to ``[key, value]`` pairs, preserving order."""
    if items is None:
        return []

    key_pos = layout.header_positions[HEADER_KEY]
    value_pos = layout.header_positions[HEADER_VALUE]
    headers: List[List[str]] = []
    for item in items:
        header: List[str] = [""] * len(layout.header_positions)
        header[key_pos] = item.item_key
        header[value_pos] = item.item_value
        headers.append(header)
    return headers
