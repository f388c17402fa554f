"""Tests for the phoneme catalog."""

from dictwalk.phonemes import (
    CATALOG,
    MIDWORD_PAUSE,
    SEPARATOR,
    Phoneme,
    render,
)


def test_catalog_ordinals_unique_and_dense():
    ordinals = list(CATALOG.values())
    assert len(set(ordinals)) == len(ordinals)
    assert ordinals == list(range(len(ordinals)))


def test_separator():
    assert SEPARATOR.ordinal == 0
    assert SEPARATOR.symbol == " "
    assert SEPARATOR.is_separator
    assert str(SEPARATOR) == " "


def test_known_symbol():
    p = Phoneme.from_symbol("DZ2")
    assert p.symbol == "DZ2"
    assert p.ordinal == 9
    assert p.valid
    assert not p.accented


def test_marker_symbol_drops_brackets():
    p = Phoneme.from_symbol("[PAUSE]")
    assert p.symbol == "PAUSE"
    assert p.ordinal == 37
    assert str(p) == "[PAUSE]"
    assert MIDWORD_PAUSE.ordinal == 47


def test_unknown_symbol_is_invalid():
    p = Phoneme.from_symbol("labas")
    assert not p.valid
    assert p.ordinal == -1
    assert p.symbol == "ERR-labas"
    assert str(p) == "[ERR-labas]"


def test_accented_display():
    assert str(Phoneme.from_symbol("A", accented=True)) == "{A}"
    assert str(Phoneme.from_symbol("A")) == "[A]"


def test_separator_never_accented():
    assert not Phoneme.from_symbol(" ", accented=True).accented


def test_display_forms_are_not_catalog_keys():
    for code in ("{A}", "[A]", "{O_}", "[S2]"):
        p = Phoneme.from_symbol(code)
        assert not p.valid
        assert p.symbol == f"ERR-{code}"
    assert Phoneme.from_symbol("[NOISE]").ordinal == 48


def test_render():
    phonemes = [
        Phoneme.from_symbol("L"),
        Phoneme.from_symbol("A", accented=True),
        SEPARATOR,
        Phoneme.from_symbol("[PAUSE]"),
    ]
    assert render(phonemes) == "[L]{A} [PAUSE]"

