"""Shared fixtures for natorder tests."""
from __future__ import annotations

import os

import pytest

from natorder.comparison.collation import UnicodeCollator
from natorder.comparison.locale_profile import NumericProfile
from natorder.comparison.natural_order import NaturalOrderComparator, default_comparator
from natorder.config.settings import _get_settings


def _clear_caches() -> None:
    _get_settings.cache_clear()
    default_comparator.cache_clear()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from NATORDER_* variables and cached settings."""
    for name in list(os.environ):
        if name.startswith("NATORDER_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("NATORDER_FALLBACK_LOCALE", "en_US")
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def english():
    """Case-insensitive comparator with English numeric symbols."""
    return NaturalOrderComparator(UnicodeCollator("secondary"), NumericProfile.english())


@pytest.fixture
def german():
    return NaturalOrderComparator(UnicodeCollator("secondary"), NumericProfile.from_locale("de_DE"))
