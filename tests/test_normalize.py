"""Tests for transcript normalization."""

import pytest

from dictwalk.normalize import (
    clean_whitespace,
    fix_encoding_errors,
    fix_spelling_errors,
    normalize,
    process_accents,
    process_markers,
    tokenize,
)


class TestStages:
    def test_encoding_errors(self):
        assert fix_encoding_errors("\ufeffla\u009aas\u001f") == "lažas"

    def test_spelling_errors(self):
        assert fix_spelling_errors("_centrai centrai") == "centrai"
        assert fix_spelling_errors("_puslpais") == "_puslapis"
        assert fix_spelling_errors("_dutys") == "_durys"
        assert fix_spelling_errors("Simono-Petro") == "Simono Petro"
        assert fix_spelling_errors("Achemenidu") == "Achemenidų"

    def test_spelling_fixes_are_cumulative(self):
        # "_is kvepimas" is fixed into a marker that the next stage understands
        assert process_markers(fix_spelling_errors("_is kvepimas")) == "[EXHALE]"

    def test_markers(self):
        assert process_markers("_pauze _tyla") == "[PAUSE] [PAUSE]"
        assert process_markers("_ikvepimas _iskvepimas") == "[INHALE] [EXHALE]"
        assert process_markers("_puslapis _durys _eh") == "[PAGE] [DOOR] [EH]"
        assert process_markers("_kede _pilvas _garsas") == "[CHAIR] [STOMACH] [NOISE]"
        assert process_markers("_nurijimas _cepsejimas") == "[SWALLOW] [SMACK]"

    def test_hyphen_becomes_midword_pause(self):
        assert process_markers("a-b") == "a[MIDWORDPAUSE]b"

    def test_postfix_accent_removed(self):
        assert process_accents("namas_2 kelias") == "namas kelias"

    def test_detached_accent_fix(self):
        assert process_accents(fix_spelling_errors("indais _dais")) == "indais"

    def test_lone_underscores_deleted(self):
        assert process_accents("_labas") == "labas"

    def test_whitespace(self):
        assert clean_whitespace("  a\r\nb\t\tc   d  ") == "a b c d"


class TestNormalize:
    def test_marker_example(self):
        assert normalize("a-b _pauze c") == "a[MIDWORDPAUSE]b [PAUSE] c"

    def test_full_pipeline(self):
        raw = "\ufeff_ikvepimas Labas_1   rytas,\r\n _pauze\tSimono-Petro"
        assert normalize(raw) == "[INHALE] Labas rytas, [PAUSE] Simono Petro"

    def test_unmatched_passthrough(self):
        assert normalize("paprastas sakinys") == "paprastas sakinys"

    def test_empty(self):
        assert normalize("") == ""

    @pytest.mark.parametrize("raw", [
        "a-b _pauze c",
        "indais _dais ir _centrai centrai",
        " _Achemenidu karalius",
        "Achemenidu_ ",
        "_is kvepimas\t\tpo-to",
        "namas_2  _kede\u009a\u001f",
        "\ufeff\ufeff--__",
    ])
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_stage_order(self):
        raw = " _Achemenidu karalius_2 po-to\t_pauze"
        staged = raw
        for stage in (fix_encoding_errors, fix_spelling_errors, process_markers,
                      process_accents, clean_whitespace):
            staged = stage(staged)
        assert normalize(raw) == staged == "Achemenidų karalius po[MIDWORDPAUSE]to [PAUSE]"

    def test_tokenize_after_normalize(self):
        assert tokenize(normalize(" vienas\ndu  trys ")) == ["vienas", "du", "trys"]
