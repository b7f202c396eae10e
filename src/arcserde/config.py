"""
Configuration settings for arcserde.

Uses Pydantic Settings to load environment variables (prefix ``ARCSERDE_``)
for the text codec applied to the ``content`` column and the CLI log level.
"""

from __future__ import annotations

import codecs
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CodecSettings(BaseSettings):
    # Content column text codec
    content_encoding: str = Field("utf-8")
    content_errors: Literal["strict", "replace", "surrogateescape", "ignore"] = Field("replace")

    # CLI
    log_level: str = Field("WARNING")

    model_config = SettingsConfigDict(
        env_prefix="ARCSERDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("content_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            name = codecs.lookup(value).name
            b"".decode(name)
        except LookupError as err:
            raise ValueError(f"unknown text encoding {value!r}") from err
        return name

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
            )
        return level


@lru_cache(maxsize=1)
def get_settings() -> CodecSettings:
    """
    Retrieve a cached instance of CodecSettings to avoid repeated env parsing.
    """
    return CodecSettings()


__all__ = ["CodecSettings", "get_settings", "LOG_LEVELS"]
