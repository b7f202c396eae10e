"""Exception hierarchy for arcserde.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ArcSerdeError for easy catching of any arcserde-specific error.
"""

from __future__ import annotations


class ArcSerdeError(Exception):
    """Base exception for all arcserde errors."""

    pass


class SchemaError(ArcSerdeError):
    """Raised when a column schema does not match the archive record layout.

    Examples:
        - Table does not have exactly 11 columns
        - Column declared with the wrong primitive type
        - Header column is not array<struct<key:string,value:string>>
        - Column type string cannot be parsed
    """

    pass


class FieldTypeError(ArcSerdeError, TypeError):
    """Raised when a value does not have the type a field requires.

    Also a builtin TypeError, so callers can catch either.

    Examples:
        - Row field declared as string where bigint is expected
        - Row value is a str where an integer is expected
        - Field name missing from the row's struct type
        - Object passed to decode is not an ArcFileItem
    """

    pass
