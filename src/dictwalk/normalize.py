"""Transcript normalization: raw transcript text -> canonical token stream.

The stages run in a fixed order and each one only ever removes the patterns
it matches, so ``normalize(normalize(t)) == normalize(t)``.
"""

import re

# (pattern, replacement) pairs applied with str.replace, in order.
ENCODING_FIXES: list[tuple[str, str]] = [
    ("\ufeff", ""),      # zero-width no-break space / stray BOM
    ("\u009a", "ž"),     # legacy single-byte value for ž
    ("\u001f", ""),      # unit separator control byte
]

SPELLING_FIXES: list[tuple[str, str]] = [
    ("_centrai centrai", "centrai"),     # word included twice
    ("indais _dais", "indais_dais"),     # detached accent
    ("_is kvepimas", "_iskvepimas"),     # misspelled marker
    ("_puslpais", "_puslapis"),
    ("_dutys", "_durys"),
    ("Simono-Petro", "Simono Petro"),
    ("Achemenidu", "Achemenidų"),
]

MARKERS: list[tuple[str, str]] = [
    ("_pauze", "[PAUSE]"),
    ("_tyla", "[PAUSE]"),
    ("_ikvepimas", "[INHALE]"),
    ("_iskvepimas", "[EXHALE]"),
    ("_nurijimas", "[SWALLOW]"),
    ("_cepsejimas", "[SMACK]"),
    ("_kede", "[CHAIR]"),
    ("_pilvas", "[STOMACH]"),
    ("_garsas", "[NOISE]"),
    ("_puslapis", "[PAGE]"),
    ("_durys", "[DOOR]"),
    ("_eh", "[EH]"),
    ("-", "[MIDWORDPAUSE]"),
]

MIDWORD_PAUSE_MARKER = "[MIDWORDPAUSE]"

_POSTFIX_ACCENT_RE = re.compile(r"(?P<last>[^ ])(?P<accent>_[^ ]+)")
_MULTI_SPACE_RE = re.compile(r" {2,}")


def _apply(text: str, table: list[tuple[str, str]]) -> str:
    for old, new in table:
        text = text.replace(old, new)
    return text


def fix_encoding_errors(text: str) -> str:
    return _apply(text, ENCODING_FIXES)


def fix_spelling_errors(text: str) -> str:
    """Correct known transcription typos; each fix sees the previous ones."""
    return _apply(text, SPELLING_FIXES)


def process_markers(text: str) -> str:
    """Replace underscore-prefixed marker words with bracketed tokens."""
    return _apply(text, MARKERS)


def process_accents(text: str) -> str:
    """Drop ``_accent`` suffixes glued to a word, then any leftover ``_``."""
    return _POSTFIX_ACCENT_RE.sub(r"\g<last>", text).replace("_", "")


def clean_whitespace(text: str) -> str:
    text = text.replace("\r", " ").replace("\n", " ").replace("\t", " ").strip()
    return _MULTI_SPACE_RE.sub(" ", text)


def normalize(raw: str) -> str:
    """Run all normalization stages over a raw transcript.

    >>> normalize("a-b _pauze c")
    'a[MIDWORDPAUSE]b [PAUSE] c'
    """
    text = fix_encoding_errors(raw)
    text = fix_spelling_errors(text)
    text = process_markers(text)
    text = process_accents(text)
    return clean_whitespace(text)


def tokenize(text: str) -> list[str]:
    """Split normalized text into word tokens."""
    return text.split()
