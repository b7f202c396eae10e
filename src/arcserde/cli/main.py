"""Main CLI entry point for arcserde."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from .. import __version__
from ..codec.schema import CANONICAL_COLUMNS, CompiledLayout, compile_layout
from ..codec.serde import ArcSerDe
from ..config import LOG_LEVELS, get_settings
from ..exceptions import ArcSerdeError, SchemaError
from ..models.record import ArcFileItem
from ..utils.logging import configure_logging, get_logger

log = get_logger(__name__)

DEFAULT_COLUMN_TYPES = ":".join(column.type.type_name for column in CANONICAL_COLUMNS)


def print_layout(layout: CompiledLayout) -> None:
    """Print one line per column of a compiled layout."""
    print(f"{'idx':>3}  {'column':<14} type")
    for column in layout.row_type.fields:
        print(f"{layout.positions[column.name]:>3}  {column.name:<14} {column.type.type_name}")
    print(f"content codec: {layout.content_encoding} (errors={layout.content_errors})")


def check_schema(column_types: str) -> int:
    settings = get_settings()
    try:
        layout = compile_layout(
            column_types,
            content_encoding=settings.content_encoding,
            content_errors=settings.content_errors,
        )
    except SchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    log.info("schema matches", extra={"columns": layout.width})
    print_layout(layout)
    return 0


def decode_file(file_path: Path) -> int:
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        record = ArcFileItem.model_validate_json(file_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        print(f"Error: Invalid archive record in {file_path}: {e}", file=sys.stderr)
        return 1
    log.debug("loaded record", extra={"uri": record.uri, "path": str(file_path)})

    serde = ArcSerDe()
    serde.initialize(DEFAULT_COLUMN_TYPES)
    try:
        row = serde.deserialize(record)
    except ArcSerdeError as e:
        print(f"Error decoding {file_path}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(row, indent=2, ensure_ascii=False))
    return 0


def main() -> int:
    """Main entry point for the arcserde CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="arcserde: Archive Record SerDe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  arcserde --check-schema "{DEFAULT_COLUMN_TYPES}"
  arcserde --decode record.json          Decode a JSON archive record to a row
  arcserde --version                      Show version
        """,
    )

    parser.add_argument(
        "--check-schema",
        metavar="TYPES",
        type=str,
        help="Validate a column type string against the archive record layout",
    )

    parser.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode an archive record stored as JSON and print the row",
    )

    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        type=str,
        default=None,
        help="Logging level (default: ARCSERDE_LOG_LEVEL or WARNING)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"arcserde {__version__}",
    )

    args = parser.parse_args()

    try:
        level = args.log_level.upper() if args.log_level else get_settings().log_level
    except ValidationError as e:
        print(f"Error: Invalid settings: {e}", file=sys.stderr)
        return 1
    if level not in LOG_LEVELS:
        print(
            f"Error: Invalid log level {args.log_level!r}, expected one of {', '.join(LOG_LEVELS)}",
            file=sys.stderr,
        )
        return 1
    configure_logging(level=level, json_logs=args.json_logs)

    if args.check_schema:
        return check_schema(args.check_schema)

    if args.decode:
        return decode_file(Path(args.decode))

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
