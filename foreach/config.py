"""Process-wide settings read from the environment.

Per-run options (split mode, delimiter, command) come from the command
line and live in :class:`foreach.models.RunConfig`; this module only holds
the ambient knobs that apply to every run.
"""

import codecs
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``FOREACH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FOREACH_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    input_encoding: Optional[str] = Field(
        default=None,
        description="Transcode input lines from this encoding. Unset passes line bytes through unchanged.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("input_encoding")
    @classmethod
    def known_encoding(cls, v: Optional[str]) -> Optional[str]:
        """Reject encodings Python has no codec for."""
        if v is None:
            return v
        try:
            return codecs.lookup(v).name
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {v}") from exc


@lru_cache
def get_settings() -> Settings:
    """Get or create the cached Settings instance."""
    return Settings()
