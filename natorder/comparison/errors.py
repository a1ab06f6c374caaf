"""Exception types raised by the natural order comparison package."""
from __future__ import annotations


class NaturalOrderError(Exception):
    """Base class for all natorder errors."""


class LocaleProfileError(NaturalOrderError, ValueError):
    """A locale identifier could not be resolved to numeric symbols."""

    def __init__(self, identifier: str, reason: str = "unknown locale"):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Cannot build numeric profile for locale {identifier!r}: {reason}")
