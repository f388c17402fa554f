"""Sequence-to-sequence model resolver with an autoregressive decode loop."""

import logging
import re
from pathlib import Path

import numpy as np

from dictwalk.normalize import MIDWORD_PAUSE_MARKER
from dictwalk.phonemes import MIDWORD_PAUSE, Phoneme
from dictwalk.resolve.backend import Seq2SeqBackend
from dictwalk.resolve.io_map import IOMap
from dictwalk.resolve.model_def import ModelDef
from dictwalk.resolve.resolvers import PhonemeResolver

logger = logging.getLogger(__name__)

# Appended to the model's output vocabulary, in this order
BOS_TOKEN = "<bos>"
EOS_TOKEN = "<eos>"

_MIDWORD_SPLIT_RE = re.compile(re.escape(MIDWORD_PAUSE_MARKER), re.IGNORECASE)


def decode_sequence(
    backend: Seq2SeqBackend,
    in_map: IOMap,
    out_map: IOMap,
    tokens: list[str],
    max_in_length: int,
    max_out_length: int,
) -> list[str]:
    """Run the encode-once, decode-iteratively protocol for one input.

    Starting from BOS, each decoder step's argmax symbol is fed back as the
    next step's input until EOS comes out or ``max_out_length`` steps have
    run.

    Returns:
        The generated symbols, without BOS and EOS.
    """
    inputs = in_map.encode(tokens, max_in_length)[np.newaxis, ...]
    states = backend.encode(inputs)

    last_output = out_map.encode([BOS_TOKEN], 1)[np.newaxis, ...]
    symbols: list[str] = []
    for _ in range(max_out_length):
        output, states = backend.decode(last_output, states)
        symbol = out_map.decode(output)[-1]
        if symbol == EOS_TOKEN:
            return symbols
        symbols.append(symbol)
        last_output = out_map.encode([symbol], 1)[np.newaxis, ...]

    logger.warning(
        f"Decoder did not emit {EOS_TOKEN} within {max_out_length} steps "
        f"for {''.join(tokens)!r}; keeping {len(symbols)} symbols"
    )
    return symbols


class SequenceModelPhonemeResolver(PhonemeResolver):
    """Predicts phonemes for words the dictionary does not cover.

    Declines words containing characters outside the model's input
    vocabulary or longer than its input length. Words split by a mid-word
    pause are resolved part by part.
    """

    name = "seq2seq"

    def __init__(self, model_def: ModelDef, backend: Seq2SeqBackend):
        self.model_def = model_def
        self.in_map = IOMap(model_def.in_tokens)
        self.out_map = IOMap([*model_def.out_tokens, BOS_TOKEN, EOS_TOKEN])
        self._backend: Seq2SeqBackend | None = backend

    @classmethod
    def load(
        cls, model_dir: str | Path, providers: list[str] | None = None,
    ) -> "SequenceModelPhonemeResolver":
        """Load ``model.json`` plus the ONNX encoder/decoder from a folder."""
        from dictwalk.resolve.backend import OnnxSeq2SeqBackend

        model_dir = Path(model_dir)
        model_def = ModelDef.load(model_dir)
        backend = OnnxSeq2SeqBackend(model_dir, providers=providers)
        logger.info(
            f"Loaded model {model_def.name!r}: {len(model_def.in_tokens)} input tokens, "
            f"{len(model_def.out_tokens)} output tokens"
        )
        return cls(model_def, backend)

    @property
    def closed(self) -> bool:
        return self._backend is None

    def close(self) -> None:
        if self._backend is not None:
            backend, self._backend = self._backend, None
            backend.close()

    def resolve(self, word: str) -> list[Phoneme] | None:
        if _MIDWORD_SPLIT_RE.search(word):
            result: list[Phoneme] = []
            for idx, part in enumerate(_MIDWORD_SPLIT_RE.split(word)):
                phonemes = self._resolve_part(part) if part else []
                if phonemes is None:
                    return None
                if idx != 0:
                    result.append(MIDWORD_PAUSE)
                result.extend(phonemes)
            return result
        return self._resolve_part(word)

    def _resolve_part(self, word: str) -> list[Phoneme] | None:
        if self._backend is None:
            raise RuntimeError(f"Resolver for model {self.model_def.name!r} is closed")

        tokens = list(word)
        if not tokens:
            return None
        unknown = [t for t in tokens if t not in self.in_map]
        if unknown:
            logger.debug(f"Model cannot resolve {word!r}: unknown characters {unknown}")
            return None
        if len(tokens) > self.model_def.max_in_length:
            logger.debug(
                f"Model cannot resolve {word!r}: longer than {self.model_def.max_in_length}"
            )
            return None

        symbols = decode_sequence(
            self._backend,
            self.in_map,
            self.out_map,
            tokens,
            self.model_def.max_in_length,
            self.model_def.max_out_length,
        )
        return [Phoneme.from_symbol(symbol) for symbol in symbols]
