"""Resolver interface and the table-driven resolvers."""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from dictwalk.phonemes import Phoneme

logger = logging.getLogger(__name__)

_DICT_LINE_RE = re.compile(r"^(?P<graphemes>[^ ]+) +(?P<phonemes>.+)$")


class PhonemeResolver(ABC):
    """Abstract base for grapheme-to-phoneme strategies.

    A resolver either answers a word with a phoneme list or declines with
    None, letting the next resolver in the chain try.
    """

    name: str = "base"

    @abstractmethod
    def resolve(self, word: str) -> list[Phoneme] | None:
        """Return the word's phonemes, or None to decline."""

    def close(self) -> None:
        """Release held resources. Safe to call more than once."""

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class DictionaryPhonemeResolver(PhonemeResolver):
    """Exact lookup in a pronunciation dictionary."""

    name = "dictionary"

    def __init__(self, entries: dict[str, list[Phoneme]] | None = None):
        self.entries = dict(entries or {})

    @classmethod
    def parse(cls, text: str) -> "DictionaryPhonemeResolver":
        """Build a resolver from dictionary text.

        Each line is ``<graphemes> <code> <code> ...``. Lines that do not
        have that shape are skipped with a warning.
        """
        entries: dict[str, list[Phoneme]] = {}
        for line in text.splitlines():
            match = _DICT_LINE_RE.match(line.rstrip("\r"))
            if match is None:
                logger.warning(f"Cannot parse dictionary line \"{line}\" as a dictionary entry")
                continue
            entries[match.group("graphemes")] = [
                Phoneme.from_symbol(code) for code in match.group("phonemes").split()
            ]
        return cls(entries)

    @classmethod
    def load(cls, path: str | Path) -> "DictionaryPhonemeResolver":
        path = Path(path)
        resolver = cls.parse(path.read_text(encoding="utf-8"))
        logger.info(f"Loaded {len(resolver.entries)} dictionary entries from {path}")
        return resolver

    def __len__(self) -> int:
        return len(self.entries)

    def resolve(self, word: str) -> list[Phoneme] | None:
        phonemes = self.entries.get(word)
        if phonemes is None:
            return None
        return list(phonemes)


class MarkerPhonemeResolver(PhonemeResolver):
    """Bracketed markers like ``[PAUSE]`` that name a catalog symbol."""

    name = "marker"

    def resolve(self, word: str) -> list[Phoneme] | None:
        if not word.startswith("["):
            return None
        phoneme = Phoneme.from_symbol(word)
        if not phoneme.valid:
            return None
        return [phoneme]


class DeadEndPhonemeResolver(PhonemeResolver):
    """Catch-all: always answers, marking unknown words as invalid phonemes."""

    name = "dead-end"

    def resolve(self, word: str) -> list[Phoneme] | None:
        logger.warning(f"Failed to resolve phonemes for word \"{word}\"")
        return [Phoneme.from_symbol(word)]


class DummyPhonemeResolver(PhonemeResolver):
    """Declines every word."""

    name = "dummy"

    def resolve(self, word: str) -> list[Phoneme] | None:
        return None
