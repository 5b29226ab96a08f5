"""Configuration for torrent-cleanup using Pydantic Settings.

Every field can be set through ``TORRENT_CLEANUP_*`` environment variables,
with ``__`` separating nested sections::

    TORRENT_CLEANUP_DECODER__MAX_DEPTH=64
    TORRENT_CLEANUP_CASE_SENSITIVE=true

Usage:
    from torrent_cleanup.config import settings
    print(settings.decoder.max_depth)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Each nesting level costs the recursive decoder and the value hash two
# Python frames, which must stay well inside the default recursion limit.
MAX_DEPTH_LIMIT = 300


class DecoderConfig(BaseModel):
    """Switches for the bencode decoder."""

    max_depth: int = Field(default=256, ge=1, le=MAX_DEPTH_LIMIT)
    duplicate_keys: Literal["error", "last"] = Field(default="error")
    # The reference grammar has no sign; negative integers are opt-in.
    allow_negative: bool = Field(default=False)


class CleanupSettings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TORRENT_CLEANUP_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    decoder: DecoderConfig = Field(default_factory=DecoderConfig)

    default_encoding: str = Field(
        default="utf-8",
        description="Codec for path segments when a torrent declares none",
    )
    case_sensitive: bool = Field(
        default=False,
        description="Compare paths exactly instead of lower-casing them",
    )
    follow_symlinks: bool = Field(default=False)
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"] = Field(
        default="INFO"
    )
    log_file: Path | None = Field(
        default=None,
        description="Also write log records to this file",
    )

    @field_validator("default_encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            b"".decode(value)
        except LookupError as exc:
            raise ValueError(f"unknown text codec '{value}'") from exc
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


settings = CleanupSettings()

__all__ = ["MAX_DEPTH_LIMIT", "CleanupSettings", "DecoderConfig", "settings"]
