"""Locale-aware natural order string comparison."""
from natorder.comparison import (
    CollationStrength,
    Collator,
    IcuCollator,
    LocaleCollator,
    LocaleProfileError,
    NaturalOrderComparator,
    NaturalOrderError,
    NumericProfile,
    UnicodeCollator,
    create_collator,
    group_equal,
    natural_sort,
    natural_sorted,
)

__version__ = "1.6.0"

__all__ = [
    "CollationStrength",
    "Collator",
    "IcuCollator",
    "LocaleCollator",
    "LocaleProfileError",
    "NaturalOrderComparator",
    "NaturalOrderError",
    "NumericProfile",
    "UnicodeCollator",
    "create_collator",
    "group_equal",
    "natural_sort",
    "natural_sorted",
]
