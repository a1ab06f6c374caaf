"""
Natural Order Comparator

Orders strings the way people read them: embedded numbers compare by value
("item 2" < "item 11"), text compares through a locale-aware collator, and
whitespace differences are ignored.

Comparison walks both strings chunk by chunk (see ``chunk_pattern``):
1. Text before the number, via the collator (whitespace collapsed)
2. The number itself, parsed as an exact Decimal
3. When either string runs out of numbers, the remaining text

Two normalization keys are provided for equality pre-filtering. If
``compare(a, b) == 0`` then ``normalize(a) == normalize(b)`` and
``normalize_for_lookup(a) == normalize_for_lookup(b)``. The converse does
not hold, and neither key can be used for ordering.
"""
from __future__ import annotations

import functools
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from natorder.comparison.chunk_pattern import ChunkPattern, build_chunk_pattern
from natorder.comparison.collation import CollationStrength, Collator, create_collator
from natorder.comparison.locale_profile import NumericProfile

logger = logging.getLogger("natorder.natural_order")

T = TypeVar("T")

_WHITESPACE_RE = re.compile(r"\s+")
_KEY_SEPARATOR = b"\x01"


def squash_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and strip both ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_number(canonical: str) -> Optional[Decimal]:
    """Parse a canonicalized number (``-``/``.`` symbols, no grouping).

    Returns None when the text is not a finite decimal number.
    """
    try:
        value = Decimal(canonical)
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def format_number(value: Decimal) -> str:
    """Locale-neutral canonical form: no grouping, no trailing zeros, no exponent.

    >>> format_number(Decimal("-0001000.500"))
    '-1000.5'
    """
    if not value:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class NaturalOrderComparator:
    """Compare strings in natural order.

    Args:
        collator: Text collation capability (defaults to the configured
            strength and backend, case-insensitive unless changed)
        profile: Numeric symbols of the locale (defaults to the configured
            or system locale)

    The comparator holds only immutable configuration and may be shared
    between threads.
    """

    def __init__(
        self,
        collator: Optional[Collator] = None,
        profile: Optional[NumericProfile] = None,
    ):
        if collator is None or profile is None:
            from natorder.config.settings import get_settings

            settings = get_settings()
            if collator is None:
                collator = create_collator(
                    settings.collation_strength, settings.collator_backend, settings.default_locale
                )
            if profile is None:
                if settings.default_locale:
                    profile = NumericProfile.from_locale(settings.default_locale)
                else:
                    profile = NumericProfile.default(settings.fallback_locale)

        self.collator = collator
        self.profile = profile
        self._pattern: ChunkPattern = build_chunk_pattern(profile)
        self._sort_key = functools.cmp_to_key(self.compare)

        logger.debug("Natural order comparator: profile=%s collator=%r", profile, collator)

    @classmethod
    def for_locale(
        cls,
        identifier: str,
        strength: "CollationStrength | str | int" = CollationStrength.SECONDARY,
        backend: str = "icu",
    ) -> "NaturalOrderComparator":
        """Comparator for a locale such as ``"sv_SE"``.

        Numbers use the locale's CLDR symbols and text uses its ICU collation
        rules (pass ``backend="unicode"`` to compare text without PyICU).
        """
        profile = NumericProfile.from_locale(identifier)
        return cls(create_collator(strength, backend, identifier), profile)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(collator={self.collator!r}, profile={self.profile!r})"

    def __call__(self, lhs: str, rhs: str) -> int:
        return self.compare(lhs, rhs)

    @property
    def pattern(self) -> ChunkPattern:
        return self._pattern

    @property
    def sort_key(self) -> Callable[[str], object]:
        """Key function for ``sorted``/``list.sort``."""
        return self._sort_key

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, lhs: str, rhs: str) -> int:
        """Return -1, 0 or 1 as ``lhs`` sorts before, equal to or after ``rhs``."""
        pattern = self._pattern
        lhs_end = 0
        rhs_end = 0

        while True:
            left = pattern.match_at(lhs, lhs_end)
            if left is None:
                break
            right = pattern.match_at(rhs, rhs_end)
            if right is None:
                break

            # Text before a number takes priority over the number
            result = self._compare_text(left.text, right.text)
            if result:
                return result

            result = self._compare_numbers(left.number, right.number)
            if result:
                return result

            lhs_end = left.end
            rhs_end = right.end

        # Final segment, where one or both sides have no further number
        return self._compare_text(lhs[lhs_end:], rhs[rhs_end:])

    def _compare_text(self, lhs: str, rhs: str) -> int:
        return _sign(self.collator.compare(squash_whitespace(lhs), squash_whitespace(rhs)))

    def _compare_numbers(self, lhs: str, rhs: str) -> int:
        lhs_canonical = self._pattern.canonicalize_number(lhs)
        rhs_canonical = self._pattern.canonicalize_number(rhs)
        lhs_value = parse_number(lhs_canonical)
        rhs_value = parse_number(rhs_canonical)

        if lhs_value is None or rhs_value is None:
            logger.debug(
                "Number chunks %r / %r did not parse; comparing as text", lhs, rhs
            )
            return _sign(self.collator.compare(lhs_canonical, rhs_canonical))

        return (lhs_value > rhs_value) - (lhs_value < rhs_value)

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize(self, text: str) -> str:
        """Canonical display string for equality pre-filtering.

        Text parts are folded at the collator's strength and numbers are
        written without locale punctuation, so "Item 1,000.50" and
        "item 1000.5" normalize identically (English, case-insensitive).
        """
        parts: List[str] = []
        end = 0
        for segment in self._pattern.iter_segments(text):
            parts.append(self.collator.fold(squash_whitespace(segment.text)))
            canonical = self._pattern.canonicalize_number(segment.number)
            value = parse_number(canonical)
            if value is None:
                logger.debug("Number chunk %r did not parse; keeping text", segment.number)
                parts.append(self.collator.fold(canonical))
            else:
                parts.append(format_number(value))
            end = segment.end

        parts.append(self.collator.fold(squash_whitespace(text[end:])))
        return " ".join(part for part in parts if part)

    def normalize_for_lookup(self, text: str) -> bytes:
        """Opaque byte key built from collation keys and canonical numbers.

        Suitable as a dict key or database index for first-pass lookups;
        candidates with equal keys still need ``compare`` to confirm.
        """
        key = bytearray()
        end = 0
        for segment in self._pattern.iter_segments(text):
            key += self.collator.collation_key(squash_whitespace(segment.text))
            key += _KEY_SEPARATOR
            canonical = self._pattern.canonicalize_number(segment.number)
            value = parse_number(canonical)
            if value is None:
                key += b"t" + self.collator.collation_key(canonical)
            else:
                key += b"n" + format_number(value).encode("ascii")
            key += _KEY_SEPARATOR
            end = segment.end

        key += self.collator.collation_key(squash_whitespace(text[end:]))
        return bytes(key)

    def lookup_hash(self, text: str) -> int:
        """Hash of the lookup key (stable within one interpreter process only)."""
        return hash(self.normalize_for_lookup(text))


# =============================================================================
# Sorting Helpers
# =============================================================================

@functools.lru_cache(maxsize=1)
def default_comparator() -> NaturalOrderComparator:
    """Comparator built from settings, shared by the module-level helpers."""
    return NaturalOrderComparator()


def natural_sorted(
    items: Iterable[T],
    key: Optional[Callable[[T], str]] = None,
    reverse: bool = False,
    comparator: Optional[NaturalOrderComparator] = None,
) -> List[T]:
    """Return a new list sorted in natural order.

    Args:
        items: Strings, or any objects when ``key`` is given
        key: Function producing the string to compare for each item
        reverse: Sort descending
        comparator: Comparator to use (defaults to ``default_comparator()``)

    Returns:
        Sorted list

    Example:
        >>> natural_sorted(["track10.mp3", "track2.mp3", "track1.mp3"])
        ['track1.mp3', 'track2.mp3', 'track10.mp3']
    """
    items = list(items)
    natural_sort(items, key=key, reverse=reverse, comparator=comparator)
    return items


def natural_sort(
    items: List[T],
    key: Optional[Callable[[T], str]] = None,
    reverse: bool = False,
    comparator: Optional[NaturalOrderComparator] = None,
) -> None:
    """Sort a list in place in natural order. See ``natural_sorted``."""
    comparator = comparator or default_comparator()
    sort_key = comparator.sort_key
    if key is None:
        items.sort(key=sort_key, reverse=reverse)
    else:
        items.sort(key=lambda item: sort_key(key(item)), reverse=reverse)


def group_equal(
    items: Iterable[str],
    comparator: Optional[NaturalOrderComparator] = None,
) -> List[List[str]]:
    """Group strings that compare equal, in order of first appearance.

    Candidates are bucketed by ``normalize_for_lookup`` and confirmed with
    ``compare``, so only strings sharing a key are compared pairwise.

    Example:
        >>> group_equal(["Item 1,000", "item 1000", "item 2"])
        [['Item 1,000', 'item 1000'], ['item 2']]
    """
    comparator = comparator or default_comparator()
    groups: List[List[str]] = []
    buckets: Dict[bytes, List[List[str]]] = {}

    for item in items:
        candidates = buckets.setdefault(comparator.normalize_for_lookup(item), [])
        for group in candidates:
            if comparator.compare(group[0], item) == 0:
                group.append(item)
                break
        else:
            group = [item]
            candidates.append(group)
            groups.append(group)

    return groups
