"""Configuration for locale, collation and logging defaults."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from natorder.comparison.collation import BACKEND_NAMES, CollationStrength


class Settings(BaseSettings):
    # Locale
    default_locale: Optional[str] = Field(
        default=None,
        description="Locale used when none is given (e.g. 'de_DE'). Unset: use the system locale",
    )
    fallback_locale: str = Field(
        default="en_US",
        description="Locale used when the system locale is unset or unknown to CLDR",
    )

    # Collation
    collation_strength: str = Field(
        default="secondary",
        description="Text collation strength: 'primary', 'secondary', 'tertiary' or 'identical'",
    )
    collator_backend: str = Field(
        default="unicode",
        description=(
            "Collator implementation: 'unicode' (case folding), 'locale' (C library strxfrm) "
            "or 'icu' (PyICU, tailored to default_locale)"
        ),
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Log level for the CLI")
    log_file: Optional[str] = Field(default=None, description="Optional log file for the CLI")

    model_config = SettingsConfigDict(
        env_prefix="NATORDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("collation_strength")
    @classmethod
    def _check_strength(cls, value: str) -> str:
        return CollationStrength.parse(value).name.lower()

    @field_validator("collator_backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in BACKEND_NAMES:
            raise ValueError(f"Unknown collator backend {value!r}")
        return value


def get_settings() -> Settings:
    """Return a cached settings instance."""
    return _get_settings()


@lru_cache()
def _get_settings() -> Settings:
    return Settings()
