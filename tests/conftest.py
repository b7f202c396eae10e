"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from arcserde import ArcFileHeaderItem, ArcFileItem, CompiledLayout, compile_layout

COLUMN_TYPES = (
    "string:string:bigint:string:int:array<struct<key:string,value:string>>"
    ":string:string:int:int:int"
)


@pytest.fixture
def column_types() -> str:
    """Column type string matching the archive record layout."""
    return COLUMN_TYPES


@pytest.fixture
def layout() -> CompiledLayout:
    """Compiled layout with default content codec."""
    return compile_layout(COLUMN_TYPES)


@pytest.fixture
def sample_item() -> ArcFileItem:
    """Archive record with two headers."""
    return ArcFileItem(
        uri="http://example.com/index.html",
        host_ip="93.184.216.34",
        timestamp=1262304000000,
        mime_type="text/html",
        record_length=2048,
        header_items=[
            ArcFileHeaderItem(item_key="Content-Type", item_value="text/html"),
            ArcFileHeaderItem(item_key="Server", item_value="Apache"),
        ],
        content=b"<html><body>Hello, archive!</body></html>",
        arc_file_name="1262304000000_0.arc.gz",
        arc_file_pos=4096,
        flags=1,
        arc_file_size=100000000,
    )


@pytest.fixture
def sample_row() -> list:
    """Row equivalent to sample_item."""
    return [
        "http://example.com/index.html",
        "93.184.216.34",
        1262304000000,
        "text/html",
        2048,
        [["Content-Type", "text/html"], ["Server", "Apache"]],
        "<html><body>Hello, archive!</body></html>",
        "1262304000000_0.arc.gz",
        4096,
        1,
        100000000,
    ]
