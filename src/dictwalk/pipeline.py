"""Dictionary pipeline: collect entries, normalize transcripts, resolve phonemes."""

import json
import logging
import os
import tempfile
from pathlib import Path

from dictwalk.collect import (
    DEFAULT_AUDIO_EXTENSIONS,
    DEFAULT_TEXT_EXTENSIONS,
    collect_entries,
)
from dictwalk.resolve import build_chain
from dictwalk.resolve.resolvers import PhonemeResolver
from dictwalk.types import TrainingEntry

logger = logging.getLogger(__name__)


def entries_to_json(entries: list[TrainingEntry]) -> str:
    return json.dumps(
        {"entries": [e.to_dict() for e in entries]},
        indent=2,
        ensure_ascii=False,
    )


def _atomic_write(target: Path, data: bytes) -> None:
    """Write data to target atomically via temp file + rename."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, target)
    except Exception:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def write_entries(path: str | Path, entries: list[TrainingEntry]) -> Path:
    """Write training entries as JSON. Returns the written path."""
    path = Path(path)
    _atomic_write(path, entries_to_json(entries).encode("utf-8"))
    logger.info(f"Wrote {len(entries)} entries to {path}")
    return path


def process(
    root: str | Path,
    dictionary: str | Path | None = None,
    model_dir: str | Path | None = None,
    audio_extensions=DEFAULT_AUDIO_EXTENSIONS,
    text_extensions=DEFAULT_TEXT_EXTENSIONS,
    output: str | Path | None = None,
    resolvers: list[PhonemeResolver] | None = None,
) -> list[TrainingEntry]:
    """Run the full pipeline over a dictionary tree.

    Args:
        root: Directory tree of paired audio and transcript files.
        dictionary: Pronunciation dictionary for the dictionary resolver.
        model_dir: Sequence model folder for the model resolver.
        audio_extensions: Audio file extensions.
        text_extensions: Transcript file extensions.
        output: JSON file to write; nothing is written when None.
        resolvers: Use this resolver list instead of building a chain from
            dictionary/model_dir. The caller keeps ownership.

    Returns:
        One TrainingEntry per complete dictionary entry.
    """
    logger.info(f"Collecting entries under {root}")
    dict_entries = collect_entries(root, audio_extensions, text_extensions)

    if resolvers is not None:
        training = [TrainingEntry.from_dict_entry(e, resolvers) for e in dict_entries]
    else:
        with build_chain(dictionary=dictionary, model_dir=model_dir) as chain:
            training = [TrainingEntry.from_dict_entry(e, chain) for e in dict_entries]
    logger.info(f"Resolved phonemes for {len(training)} entries")

    invalid = sum(1 for t in training for p in t.phonemes if not p.valid)
    if invalid:
        logger.warning(f"{invalid} phonemes could not be resolved and are marked ERR-")

    if output is not None:
        write_entries(output, training)
    return training
