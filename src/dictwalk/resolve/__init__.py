"""Resolver chain: word tokens -> phonemes via ordered fallback strategies."""

import logging
from pathlib import Path

from dictwalk.normalize import tokenize
from dictwalk.phonemes import SEPARATOR, Phoneme
from dictwalk.resolve.resolvers import (
    DeadEndPhonemeResolver,
    DictionaryPhonemeResolver,
    DummyPhonemeResolver,
    MarkerPhonemeResolver,
    PhonemeResolver,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DeadEndPhonemeResolver",
    "DictionaryPhonemeResolver",
    "DummyPhonemeResolver",
    "MarkerPhonemeResolver",
    "PhonemeResolver",
    "ResolutionError",
    "ResolverChain",
    "build_chain",
    "convert_to_phonemes",
    "prepare_word",
]


class ResolutionError(ValueError):
    """No resolver in the chain answered a word."""


def prepare_word(word: str) -> str:
    """Lowercase a word token; bracketed markers are kept verbatim."""
    if word.startswith("["):
        return word
    return word.lower()


def resolve_word(word: str, resolvers: list[PhonemeResolver]) -> list[Phoneme]:
    """Ask each resolver in order; the first non-None answer wins.

    Raises:
        ResolutionError: if every resolver declines.
    """
    for resolver in resolvers:
        phonemes = resolver.resolve(word)
        if phonemes is not None:
            logger.debug(f"{resolver.name} resolved {word!r}")
            return phonemes
    raise ResolutionError(
        f"No resolver produced phonemes for {word!r}; "
        f"chain {[r.name for r in resolvers]} has no catch-all"
    )


def convert_to_phonemes(text: str, resolvers: list[PhonemeResolver]) -> list[Phoneme]:
    """Resolve normalized text word by word, separating words with a space."""
    words = tokenize(text)
    result: list[Phoneme] = []
    for i, word in enumerate(words):
        result.extend(resolve_word(prepare_word(word), resolvers))
        if i != len(words) - 1:
            result.append(SEPARATOR)
    return result


class ResolverChain:
    """An ordered list of resolvers that owns their lifetime.

    Closing the chain closes every member once, in reverse order.
    """

    def __init__(self, resolvers: list[PhonemeResolver]):
        self.resolvers = list(resolvers)
        self._closed = False

    def __iter__(self):
        return iter(self.resolvers)

    def __len__(self) -> int:
        return len(self.resolvers)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.resolvers]

    def resolve(self, word: str) -> list[Phoneme]:
        return resolve_word(prepare_word(word), self.resolvers)

    def convert(self, text: str) -> list[Phoneme]:
        return convert_to_phonemes(text, self.resolvers)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for resolver in reversed(self.resolvers):
            resolver.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _get_seq2seq_class():
    """Lazy import of the sequence model resolver."""
    from dictwalk.resolve.seq2seq import SequenceModelPhonemeResolver
    return SequenceModelPhonemeResolver


def build_chain(
    dictionary: str | Path | None = None,
    model_dir: str | Path | None = None,
) -> ResolverChain:
    """Build the canonical chain: dictionary, model, marker, dead-end.

    Without a model_dir the model slot holds a DummyPhonemeResolver.

    Args:
        dictionary: Pronunciation dictionary file (optional).
        model_dir: Folder with model.json, encoder.onnx and decoder.onnx
            (optional).
    """
    resolvers: list[PhonemeResolver] = []
    if dictionary is not None:
        resolvers.append(DictionaryPhonemeResolver.load(dictionary))
    if model_dir is not None:
        resolvers.append(_get_seq2seq_class().load(model_dir))
    else:
        logger.info("No sequence model configured, model slot declines every word")
        resolvers.append(DummyPhonemeResolver())
    resolvers.append(MarkerPhonemeResolver())
    resolvers.append(DeadEndPhonemeResolver())

    chain = ResolverChain(resolvers)
    logger.info(f"Resolver chain: {' -> '.join(chain.names)}")
    return chain
