"""Closed phoneme catalog and the Phoneme value type.

Every valid phoneme has a stable ordinal taken from ``CATALOG``. Ordinal 0
is the word separator, -1 marks a symbol the catalog does not know.
"""

from dataclasses import dataclass

# Lookup key -> ordinal. Declaration order is ordinal order.
CATALOG: dict[str, int] = {
    " ": 0,
    # Lithuanian phoneme codes
    "A": 1,
    "A_": 2,
    "B": 3,
    "C": 4,
    "C2": 5,
    "CH": 6,
    "D": 7,
    "DZ": 8,
    "DZ2": 9,
    "E": 10,
    "E_": 11,
    "E3_": 12,
    "F": 13,
    "G": 14,
    "H": 15,
    "I": 16,
    "I_": 17,
    "IO_": 18,
    "IU": 19,
    "IU_": 20,
    "J.": 21,
    "K": 22,
    "L": 23,
    "M": 24,
    "N": 25,
    "O_": 26,
    "P": 27,
    "R": 28,
    "S": 29,
    "S2": 30,
    "T": 31,
    "U": 32,
    "U_": 33,
    "V": 34,
    "Z": 35,
    "Z2": 36,
    # Non-speech markers produced by transcript normalization
    "[PAUSE]": 37,
    "[INHALE]": 38,
    "[EXHALE]": 39,
    "[SWALLOW]": 40,
    "[SMACK]": 41,
    "[CHAIR]": 42,
    "[STOMACH]": 43,
    "[PAGE]": 44,
    "[DOOR]": 45,
    "[EH]": 46,
    "[MIDWORDPAUSE]": 47,
    "[NOISE]": 48,
}

SEPARATOR_ORDINAL = 0
INVALID_ORDINAL = -1
INVALID_PREFIX = "ERR-"


def _display_symbol(key: str) -> str:
    """Markers are stored bracketed but displayed bare: '[PAUSE]' -> 'PAUSE'."""
    if key.startswith("[") and key.endswith("]") and len(key) > 2:
        return key[1:-1]
    return key


@dataclass(frozen=True)
class Phoneme:
    """An atomic pronunciation unit."""
    symbol: str          # canonical name, or ERR-<raw> when unknown
    ordinal: int
    accented: bool = False
    valid: bool = True

    @classmethod
    def from_symbol(cls, symbol: str, accented: bool = False) -> "Phoneme":
        """Look up a catalog key; unknown keys give an invalid phoneme."""
        ordinal = CATALOG.get(symbol)
        if ordinal is None:
            return cls(
                symbol=f"{INVALID_PREFIX}{symbol}",
                ordinal=INVALID_ORDINAL,
                accented=accented,
                valid=False,
            )
        if ordinal == SEPARATOR_ORDINAL:
            accented = False
        return cls(
            symbol=_display_symbol(symbol),
            ordinal=ordinal,
            accented=accented,
            valid=True,
        )

    @property
    def is_separator(self) -> bool:
        return self.ordinal == SEPARATOR_ORDINAL

    def __str__(self) -> str:
        if self.is_separator:
            return self.symbol
        if self.accented:
            return f"{{{self.symbol}}}"
        return f"[{self.symbol}]"


SEPARATOR = Phoneme.from_symbol(" ")
MIDWORD_PAUSE = Phoneme.from_symbol("[MIDWORDPAUSE]")


def render(phonemes: list[Phoneme]) -> str:
    """Concatenate display forms: 'labas' -> '[L][A_][B][A][S]'."""
    return "".join(str(p) for p in phonemes)
