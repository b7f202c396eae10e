"""Archive file item wire record.

An ArcFileItem is one captured web resource plus the metadata describing where
it was stored. Records are produced by the ingestion layer, already parsed from
their binary form; the codec only reads them, or builds new ones on encode.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .fields import SignedInt


class WireModel(BaseModel):
    """Base class for wire record models."""

    model_config = ConfigDict(
        # No implicit coercion between str/int/bytes
        strict=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )


class ArcFileHeaderItem(WireModel):
    """One HTTP response header captured with the resource.

    Attributes:
        item_key: Header name, e.g. ``Content-Type``
        item_value: Header value, e.g. ``text/html``
    """

    item_key: str
    item_value: str


class ArcFileItem(WireModel):
    """A captured web resource and its archive metadata.

    Attributes:
        uri: URI the resource was fetched from
        host_ip: IP address of the serving host
        timestamp: Capture time (signed 64-bit)
        mime_type: Declared MIME type
        record_length: Length of the archive record (signed 32-bit)
        header_items: Response headers in received order, or None if absent
        content: Raw resource body
        arc_file_name: Name of the archive file holding the record
        arc_file_pos: Offset of the record within the archive file (signed 32-bit)
        flags: Record flags (signed 32-bit)
        arc_file_size: Size of the archive file (signed 32-bit)

    Example:
        >>> item = ArcFileItem(
        ...     uri="http://example.com/",
        ...     host_ip="93.184.216.34",
        ...     timestamp=1262304000000,
        ...     mime_type="text/html",
        ...     record_length=1024,
        ...     content=b"<html></html>",
        ...     arc_file_name="1262304000000_0.arc.gz",
        ...     arc_file_pos=0,
        ...     flags=0,
        ...     arc_file_size=100000000,
        ... )
        >>> item.header_items is None
        True
    """

    uri: str
    host_ip: str
    timestamp: int = SignedInt(bits=64)
    mime_type: str
    record_length: int = SignedInt(bits=32)
    header_items: Optional[List[ArcFileHeaderItem]] = None
    content: bytes = b""
    arc_file_name: str
    arc_file_pos: int = SignedInt(bits=32)
    flags: int = SignedInt(bits=32)
    arc_file_size: int = SignedInt(bits=32)
