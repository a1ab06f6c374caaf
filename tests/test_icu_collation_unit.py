"""
Unit tests for the ICU collator backend.

These tests verify that:
1. Text order follows the alphabet of the requested locale
2. Strength controls case and accent sensitivity
3. compare(a, b) == 0 implies equal sort keys and folds
4. for_locale() binds both numeric symbols and text collation to the locale
"""
from __future__ import annotations

from decimal import Decimal

import pytest

pytest.importorskip("icu")

from babel.numbers import format_decimal  # noqa: E402

from natorder.cli import main  # noqa: E402
from natorder.comparison.collation import Collator, IcuCollator, create_collator  # noqa: E402
from natorder.comparison.errors import LocaleProfileError  # noqa: E402
from natorder.comparison.locale_profile import NumericProfile  # noqa: E402
from natorder.comparison.natural_order import NaturalOrderComparator, natural_sorted  # noqa: E402


def sign(value) -> int:
    return (value > 0) - (value < 0)


class TestLocaleTailoring:
    def test_swedish_o_diaeresis_sorts_after_z(self):
        swedish = NaturalOrderComparator.for_locale("sv_SE")

        assert swedish.compare("ö 1", "z 1") > 0
        assert swedish.compare("z 1", "ö 1") < 0

    def test_german_o_diaeresis_sorts_with_o(self):
        german = NaturalOrderComparator.for_locale("de_DE")

        assert german.compare("ö 1", "z 1") < 0
        assert german.compare("ö 1", "o 1") > 0

    def test_swedish_natural_sort(self):
        swedish = NaturalOrderComparator.for_locale("sv_SE")
        items = ["ö 2", "z 10", "a 1", "z 2", "å 1"]

        assert natural_sorted(items, comparator=swedish) == ["a 1", "z 2", "z 10", "å 1", "ö 2"]

    def test_for_locale_uses_locale_numbers(self):
        swedish = NaturalOrderComparator.for_locale("sv_SE")

        assert isinstance(swedish.collator, IcuCollator)
        assert swedish.collator.locale == "sv_SE"
        assert swedish.profile == NumericProfile.from_locale("sv_SE")
        assert swedish.compare("Summa 1 000,5", "summa 1000,50") == 0


class TestStrength:
    def test_secondary_ignores_case_but_not_accents(self):
        collator = IcuCollator("secondary", "en_US")

        assert collator.compare("ABC", "abc") == 0
        assert collator.compare("e", "é") != 0

    def test_primary_ignores_accents(self):
        collator = IcuCollator("primary", "en_US")

        assert collator.compare("résumé", "Resume") == 0

    def test_tertiary_keeps_case(self):
        collator = IcuCollator("tertiary", "en_US")

        assert collator.compare("a", "A") != 0
        assert collator.compare("a", "B") < 0


class TestKeys:
    def test_equal_compare_gives_equal_keys(self):
        collator = IcuCollator("secondary", "de_DE")

        for lhs, rhs in [("ABC", "abc"), ("École", "école"), ("Straße", "STRASSE")]:
            assert collator.compare(lhs, rhs) == 0, (lhs, rhs)
            assert collator.collation_key(lhs) == collator.collation_key(rhs)
            assert collator.fold(lhs) == collator.fold(rhs)

    def test_sort_keys_follow_compare_order(self):
        collator = IcuCollator("secondary", "sv_SE")
        words = ["a", "z", "å", "ä", "ö", "B"]

        for lhs in words:
            for rhs in words:
                key_order = sign((collator.collation_key(lhs) > collator.collation_key(rhs))
                                 - (collator.collation_key(lhs) < collator.collation_key(rhs)))
                assert key_order == collator.compare(lhs, rhs), (lhs, rhs)

    @pytest.mark.parametrize("locale", ["en_US", "de_DE", "sv_SE", "fr_FR", "he_IL"])
    def test_rendered_numbers_share_keys(self, locale):
        comparator = NaturalOrderComparator.for_locale(locale)

        for number in (Decimal("-1234.5"), Decimal("0"), Decimal("1000000")):
            rendered = format_decimal(number, format="#,##0.#####", locale=locale)
            lhs = "TOTAL " + rendered
            rhs = "total " + rendered
            assert comparator.compare(lhs, rhs) == 0
            assert comparator.normalize(lhs) == comparator.normalize(rhs)
            assert comparator.normalize_for_lookup(lhs) == comparator.normalize_for_lookup(rhs)


class TestConstruction:
    def test_unknown_locale_raises(self):
        with pytest.raises(LocaleProfileError):
            IcuCollator("secondary", "zz_ZZ")

    def test_create_collator_passes_locale(self):
        collator = create_collator("tertiary", "ICU", "de_DE")

        assert isinstance(collator, IcuCollator)
        assert isinstance(collator, Collator)
        assert collator.locale == "de_DE"

    def test_default_construction_from_settings(self, monkeypatch):
        monkeypatch.setenv("NATORDER_DEFAULT_LOCALE", "sv_SE")
        monkeypatch.setenv("NATORDER_COLLATOR_BACKEND", "icu")
        comparator = NaturalOrderComparator()

        assert comparator.compare("ö 1", "z 1") > 0

    def test_cli_icu_backend(self, capsys):
        assert main(["compare", "ö 1", "z 1", "--locale", "sv_SE", "--backend", "icu"]) == 0
        assert capsys.readouterr().out.strip() == "1"
