"""Comparison module - natural order comparison and normalization of text."""
from natorder.comparison.chunk_pattern import ChunkPattern, Segment, build_chunk_pattern
from natorder.comparison.collation import (
    CollationStrength,
    Collator,
    IcuCollator,
    LocaleCollator,
    UnicodeCollator,
    create_collator,
)
from natorder.comparison.errors import LocaleProfileError, NaturalOrderError
from natorder.comparison.locale_profile import NumericProfile
from natorder.comparison.natural_order import (
    NaturalOrderComparator,
    default_comparator,
    group_equal,
    natural_sort,
    natural_sorted,
)

__all__ = [
    "ChunkPattern",
    "Segment",
    "build_chunk_pattern",
    "CollationStrength",
    "Collator",
    "IcuCollator",
    "LocaleCollator",
    "UnicodeCollator",
    "create_collator",
    "LocaleProfileError",
    "NaturalOrderError",
    "NumericProfile",
    "NaturalOrderComparator",
    "default_comparator",
    "group_equal",
    "natural_sort",
    "natural_sorted",
]
