"""
Collation Module

Text comparison used for the non-numeric parts of natural order comparison.

A collator compares strings level by level, like ICU/UCA collation:
- Level 1 (primary): base letters only (case and accents ignored)
- Level 2 (secondary): case ignored, accents significant
- Level 3 (tertiary): case and accents significant, canonical equivalents equal
- Level 4 (identical): exact code points

The configured strength decides how many levels take part, so "résumé" sorts
next to "resume" and only ties are broken by finer levels.

Backends:
- unicode: case folding and canonical decomposition, code point order
- locale: the same levels ordered by the C library (process LC_COLLATE)
- icu: ICU collation tailored to a locale identifier (PyICU)
"""
from __future__ import annotations

import locale
import unicodedata
from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable

from natorder.comparison.errors import NaturalOrderError
from natorder.comparison.locale_profile import parse_locale


class CollationStrength(Enum):
    PRIMARY = 1
    SECONDARY = 2
    TERTIARY = 3
    IDENTICAL = 4

    @classmethod
    def parse(cls, value: "str | int | CollationStrength") -> "CollationStrength":
        """Accept an enum member, a level number or a name such as ``"secondary"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            names = ", ".join(member.name.lower() for member in cls)
            raise ValueError(f"Unknown collation strength {value!r} (expected one of: {names})") from None


@runtime_checkable
class Collator(Protocol):
    """Locale-aware text comparison capability."""

    def compare(self, lhs: str, rhs: str) -> int:
        ...

    def collation_key(self, text: str) -> bytes:
        ...

    def fold(self, text: str) -> str:
        ...


def _nfd(text: str) -> str:
    return unicodedata.normalize("NFD", text)


def _strip_marks(text: str) -> str:
    return "".join(c for c in text if not unicodedata.combining(c))


class UnicodeCollator:
    """Collator built on Unicode case folding and canonical decomposition.

    Ordering within a level is by code point, which matches alphabetical
    order for most Latin, Greek and Cyrillic text.
    """

    backend = "unicode"

    def __init__(self, strength: "CollationStrength | str | int" = CollationStrength.SECONDARY):
        self.strength = CollationStrength.parse(strength)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strength={self.strength.name.lower()!r})"

    def _raw_levels(self, text: str) -> Tuple[str, ...]:
        decomposed = _nfd(text)
        # Canonical caseless match: NFD(casefold(NFD(x)))
        caseless = _nfd(decomposed.casefold())
        levels = (_strip_marks(caseless), caseless, decomposed, text)
        return levels[: self.strength.value]

    def sort_levels(self, text: str) -> Tuple[str, ...]:
        """Per-level comparison keys for ``text``, coarsest first."""
        return self._raw_levels(text)

    def compare(self, lhs: str, rhs: str) -> int:
        if lhs == rhs:
            return 0
        left = self.sort_levels(lhs)
        right = self.sort_levels(rhs)
        return (left > right) - (left < right)

    def collation_key(self, text: str) -> bytes:
        """Byte key that is equal for strings comparing equal (not for ordering)."""
        return b"\x00".join(
            level.encode("utf-8", "surrogatepass") for level in self.sort_levels(text)
        )

    def fold(self, text: str) -> str:
        """Canonical form of ``text`` at this collator's strength."""
        finest = self._raw_levels(text)[-1]
        if self.strength is CollationStrength.IDENTICAL:
            return finest
        return unicodedata.normalize("NFC", finest)


class LocaleCollator(UnicodeCollator):
    """Collator that orders each level with the C library's ``strxfrm``.

    Alphabet order follows the process ``LC_COLLATE`` setting, which the
    application is expected to set with ``locale.setlocale``.
    """

    backend = "locale"

    def sort_levels(self, text: str) -> Tuple[str, ...]:
        raw = self._raw_levels(text)
        # strxfrm rejects embedded NULs
        transformed = tuple(locale.strxfrm(level.replace("\x00", "")) for level in raw)
        # strxfrm is not guaranteed to be injective; the raw finest level breaks ties
        return transformed + (raw[-1],)


class IcuCollator:
    """Collator backed by ICU with the tailored collation rules of a locale.

    Alphabet order follows the locale: "ö" sorts after "z" in Swedish and
    next to "o" in German. Comparison and sort keys may be used from many
    threads at once.

    Args:
        strength: Collation strength
        identifier: Locale identifier such as ``"sv_SE"`` (None: ICU default locale)
    """

    backend = "icu"

    def __init__(
        self,
        strength: "CollationStrength | str | int" = CollationStrength.SECONDARY,
        identifier: Optional[str] = None,
    ):
        try:
            import icu
        except ImportError as exc:
            raise NaturalOrderError(
                "PyICU is required for the 'icu' collator backend. Install via `pip install PyICU` "
                "(the ICU development libraries must be installed first)."
            ) from exc

        self.strength = CollationStrength.parse(strength)
        if identifier is None:
            icu_locale = icu.Locale.getDefault()
        else:
            icu_locale = icu.Locale(str(parse_locale(identifier)))
        self.locale = icu_locale.getName()

        self._collator = icu.Collator.createInstance(icu_locale)
        self._collator.setStrength(getattr(icu.Collator, self.strength.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strength={self.strength.name.lower()!r}, identifier={self.locale!r})"

    def compare(self, lhs: str, rhs: str) -> int:
        result = self._collator.compare(lhs, rhs)
        return (result > 0) - (result < 0)

    def collation_key(self, text: str) -> bytes:
        """ICU sort key; byte order matches ``compare`` order."""
        return bytes(self._collator.getSortKey(text))

    def fold(self, text: str) -> str:
        """Hex form of the sort key.

        ICU equivalence classes (ignorable characters, kana variants,
        contractions) have no string representative, so the sort key stands in.
        """
        return self.collation_key(text).hex()


_BACKENDS = {
    UnicodeCollator.backend: UnicodeCollator,
    LocaleCollator.backend: LocaleCollator,
    IcuCollator.backend: IcuCollator,
}

BACKEND_NAMES = tuple(sorted(_BACKENDS))


def create_collator(
    strength: "CollationStrength | str | int" = CollationStrength.SECONDARY,
    backend: str = "unicode",
    identifier: Optional[str] = None,
) -> Collator:
    """Build a collator by backend name (``"unicode"``, ``"locale"`` or ``"icu"``).

    ``identifier`` selects the locale of the ``"icu"`` backend; the other
    backends ignore it.
    """
    name = backend.strip().lower()
    try:
        collator_cls = _BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown collator backend {backend!r} (expected one of: {', '.join(BACKEND_NAMES)})"
        ) from None
    if collator_cls is IcuCollator:
        return IcuCollator(strength, identifier)
    return collator_cls(strength)
