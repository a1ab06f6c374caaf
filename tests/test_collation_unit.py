from __future__ import annotations

import pytest

from natorder.comparison.collation import (
    CollationStrength,
    Collator,
    LocaleCollator,
    UnicodeCollator,
    create_collator,
)


def test_strength_parse_accepts_names_numbers_and_members():
    assert CollationStrength.parse("Primary") is CollationStrength.PRIMARY
    assert CollationStrength.parse(" tertiary ") is CollationStrength.TERTIARY
    assert CollationStrength.parse(2) is CollationStrength.SECONDARY
    assert CollationStrength.parse(CollationStrength.IDENTICAL) is CollationStrength.IDENTICAL

    with pytest.raises(ValueError):
        CollationStrength.parse("quaternary")


def test_secondary_ignores_case_but_not_accents():
    collator = UnicodeCollator("secondary")

    assert collator.compare("ABC", "abc") == 0
    assert collator.compare("Straße", "STRASSE") == 0
    assert collator.compare("e", "é") < 0
    assert collator.compare("é", "e") > 0


def test_primary_ignores_case_and_accents():
    collator = UnicodeCollator(CollationStrength.PRIMARY)

    assert collator.compare("Résumé", "resume") == 0
    assert collator.fold("École") == "ecole"


def test_tertiary_orders_alphabetically_before_case():
    collator = UnicodeCollator("tertiary")

    assert collator.compare("a", "A") != 0
    assert collator.compare("a", "B") < 0
    assert collator.compare("B", "a") > 0
    # Canonically equivalent forms are equal
    assert collator.compare("\u00e9", "e\u0301") == 0


def test_identical_distinguishes_canonical_equivalents():
    collator = UnicodeCollator("identical")

    assert collator.compare("\u00e9", "e\u0301") != 0
    assert collator.fold("e\u0301") == "e\u0301"


def test_fold_is_nfc_at_secondary():
    collator = UnicodeCollator()

    assert collator.fold("ÉCOLE") == "école"
    assert collator.fold("École") == "école"


def test_equal_compare_gives_equal_keys():
    collator = UnicodeCollator("secondary")
    pairs = [("ABC", "abc"), ("Straße", "strasse"), ("É", "é")]

    for lhs, rhs in pairs:
        assert collator.compare(lhs, rhs) == 0
        assert collator.collation_key(lhs) == collator.collation_key(rhs)
        assert collator.fold(lhs) == collator.fold(rhs)

    assert collator.collation_key("abc") != collator.collation_key("abd")


def test_compare_is_antisymmetric():
    collator = UnicodeCollator("tertiary")
    words = ["", "a", "A", "ab", "á", "b", "Z", "ß"]

    for lhs in words:
        for rhs in words:
            assert collator.compare(lhs, rhs) == -collator.compare(rhs, lhs)


def test_locale_collator_handles_nul_and_keys():
    collator = LocaleCollator("secondary")

    assert collator.compare("abc", "ABD") < 0
    assert collator.compare("a\x00b", "a\x00c") < 0
    assert collator.compare("Hello", "hello") == 0
    assert collator.collation_key("Hello") == collator.collation_key("hello")
    assert collator.fold("Hello") == "hello"


def test_create_collator_backends():
    assert isinstance(create_collator("tertiary", "locale"), LocaleCollator)
    collator = create_collator("primary", "Unicode")
    assert type(collator) is UnicodeCollator
    assert collator.strength is CollationStrength.PRIMARY

    with pytest.raises(ValueError):
        create_collator(backend="qt")


def test_collators_satisfy_protocol():
    assert isinstance(UnicodeCollator(), Collator)
    assert isinstance(LocaleCollator(), Collator)
