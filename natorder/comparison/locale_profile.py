"""Locale numeric symbols used to recognise numbers inside text.

Symbols come from CLDR through Babel; a profile can also be built by hand
for locales or formatters that CLDR does not describe.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from babel import Locale, UnknownLocaleError, default_locale
from babel.numbers import get_decimal_symbol, get_group_symbol, get_minus_sign_symbol

from natorder.comparison.errors import LocaleProfileError

logger = logging.getLogger("natorder.locale_profile")


@dataclass(frozen=True)
class NumericProfile:
    """Minus sign, grouping separator and decimal separator of a locale.

    Any symbol may be empty, in which case numbers are recognised without it.
    """

    minus_sign: str = "-"
    grouping_separator: str = ","
    decimal_separator: str = "."

    def __post_init__(self) -> None:
        if self.grouping_separator and self.grouping_separator == self.decimal_separator:
            logger.warning(
                "Grouping and decimal separators are both %r; numbers will be ambiguous",
                self.grouping_separator,
            )

    @classmethod
    def from_locale(cls, identifier: str | Locale) -> "NumericProfile":
        """Look up the numeric symbols of a locale (e.g. ``"de_DE"`` or ``"fr-CA"``)."""
        locale = parse_locale(identifier)
        return cls(
            minus_sign=get_minus_sign_symbol(locale),
            grouping_separator=get_group_symbol(locale),
            decimal_separator=get_decimal_symbol(locale),
        )

    @classmethod
    def default(cls, fallback: Optional[str] = None) -> "NumericProfile":
        """Profile of the system default locale.

        The environment (``LC_ALL``, ``LC_NUMERIC``, ``LANG``) is consulted first,
        then ``fallback``, then the configured fallback locale.
        """
        identifier = default_locale("LC_NUMERIC")
        if identifier:
            try:
                return cls.from_locale(identifier)
            except LocaleProfileError as exc:
                logger.debug("Ignoring system locale: %s", exc)

        if fallback is None:
            from natorder.config.settings import get_settings

            fallback = get_settings().fallback_locale
        return cls.from_locale(fallback)

    @classmethod
    def english(cls) -> "NumericProfile":
        return cls(minus_sign="-", grouping_separator=",", decimal_separator=".")


def parse_locale(identifier: str | Locale) -> Locale:
    """Parse a CLDR or POSIX locale identifier, raising LocaleProfileError if unknown."""
    if isinstance(identifier, Locale):
        return identifier
    # POSIX identifiers may carry an encoding or modifier ("de_DE.UTF-8@euro")
    name = identifier.split(".", 1)[0].split("@", 1)[0]
    if name in ("C", "POSIX"):
        name = "en_US_POSIX"
    try:
        return Locale.parse(name, sep="-" if "-" in name else "_")
    except UnknownLocaleError as exc:
        raise LocaleProfileError(identifier) from exc
    except (TypeError, ValueError) as exc:
        raise LocaleProfileError(identifier, str(exc)) from exc
