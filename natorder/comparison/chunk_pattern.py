"""
Chunk Pattern Module

Splits text into (text, number) chunks for natural order comparison:

    "Item 1,000.5 of 12" -> ("Item", "1,000.5"), ("of", "12"), remainder ""

The pattern is derived from a locale's numeric symbols:
- Optional minus sign (widened to any dash when the locale uses a dash)
- Digit groups joined by the grouping separator (any group size)
- Optional decimal separator with fraction digits

Digits are matched by Unicode category (Nd), so Arabic-Indic, Devanagari and
other digit scripts are recognised as numbers too.
"""
from __future__ import annotations

import re
import sys
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, NamedTuple, Optional

from natorder.comparison.locale_profile import NumericProfile


# =============================================================================
# Unicode Character Tables
# =============================================================================

MATH_MINUS = "\u2212"

# Dash punctuation (general category Pd) plus the mathematical minus sign.
# Number formatters disagree on which of these a locale's minus sign is.
DASH_CHARACTERS = tuple(
    chr(cp) for cp in range(sys.maxunicode + 1) if unicodedata.category(chr(cp)) == "Pd"
) + (MATH_MINUS,)

_DASH_CLASS = "[" + "".join(re.escape(c) for c in DASH_CHARACTERS) + "]"
# LRM, RLM and ALM may precede the minus sign in right-to-left locales
_DASH_MINUS = "(?:[\u200e\u200f\u061c]?" + _DASH_CLASS + ")"
_WHITESPACE_CLASS = r"\s"
_DIGITS = r"\d+"


class Segment(NamedTuple):
    """One matched chunk: the text before a number and the number itself."""

    text: str
    number: str
    start: int
    end: int


def _strip_format_chars(symbol: str) -> str:
    # Bidi marks (LRM, RLM, ALM) surround minus signs in RTL locales
    return "".join(c for c in symbol if unicodedata.category(c) != "Cf")


def is_dash_symbol(symbol: str) -> bool:
    """Return True if ``symbol`` is a single dash or minus character."""
    core = _strip_format_chars(symbol)
    return len(core) == 1 and (core == MATH_MINUS or unicodedata.category(core) == "Pd")


def is_whitespace_symbol(symbol: str) -> bool:
    """Return True if ``symbol`` is a single whitespace character (e.g. NBSP)."""
    return len(symbol) == 1 and symbol.isspace()


def _symbol_pattern(symbol: str) -> str:
    return "(?:" + re.escape(symbol) + ")"


@dataclass(frozen=True)
class ChunkPattern:
    """Compiled chunk matcher for one numeric profile.

    Instances hold only compiled patterns, so they can be shared between
    threads without locking.
    """

    profile: NumericProfile
    chunk_re: re.Pattern
    minus_re: Optional[re.Pattern]
    grouping_re: Optional[re.Pattern]
    decimal_re: Optional[re.Pattern]

    def match_at(self, text: str, pos: int = 0) -> Optional[Segment]:
        """Match the next chunk starting at ``pos``, or None if no number follows."""
        m = self.chunk_re.match(text, pos)
        if m is None:
            return None
        return Segment(text=m.group(1), number=m.group(2), start=m.start(), end=m.end())

    def iter_segments(self, text: str) -> Iterator[Segment]:
        """Yield every chunk of ``text`` left to right.

        The caller can pick up the trailing text at the ``end`` of the last segment.
        """
        pos = 0
        while True:
            segment = self.match_at(text, pos)
            if segment is None:
                return
            yield segment
            pos = segment.end

    def canonicalize_number(self, number: str) -> str:
        """Replace locale symbols with ``-`` and ``.`` and drop grouping separators."""
        if self.minus_re is not None:
            number = self.minus_re.sub("-", number)
        if self.grouping_re is not None:
            number = self.grouping_re.sub("", number)
        if self.decimal_re is not None:
            number = self.decimal_re.sub(".", number)
        return number


@lru_cache(maxsize=64)
def build_chunk_pattern(profile: NumericProfile) -> ChunkPattern:
    """Compile the chunk matcher for ``profile``.

    Args:
        profile: Numeric symbols of the locale

    Returns:
        ChunkPattern shared by every comparator using an equal profile
    """
    minus = None
    if profile.minus_sign:
        minus = _DASH_MINUS if is_dash_symbol(profile.minus_sign) else _symbol_pattern(profile.minus_sign)

    grouping = None
    if profile.grouping_separator:
        if is_whitespace_symbol(profile.grouping_separator):
            grouping = _WHITESPACE_CLASS
        else:
            grouping = _symbol_pattern(profile.grouping_separator)

    decimal = _symbol_pattern(profile.decimal_separator) if profile.decimal_separator else None

    # Empty symbols are left out entirely so they cannot match empty strings
    number = ""
    if minus is not None:
        number += minus + "?"
    if grouping is not None:
        number += "(?:" + _DIGITS + grouping + ")*"
    number += _DIGITS
    if decimal is not None:
        number += "(?:" + decimal + _DIGITS + ")?"

    chunk_re = re.compile(r"(.*?)\s*(" + number + ")", re.DOTALL)

    return ChunkPattern(
        profile=profile,
        chunk_re=chunk_re,
        minus_re=re.compile(minus) if minus is not None else None,
        grouping_re=re.compile(grouping) if grouping is not None else None,
        decimal_re=re.compile(decimal) if decimal is not None else None,
    )
