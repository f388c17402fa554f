"""Walk a dictionary tree and pair audio files with their transcripts."""

import logging
from collections import deque
from pathlib import Path

from dictwalk.decode import decode_bytes
from dictwalk.types import DictEntry

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_EXTENSIONS = frozenset({"wav"})
DEFAULT_TEXT_EXTENSIONS = frozenset({"txt"})


class CollectError(OSError):
    """Raised when the dictionary tree cannot be collected."""


class NamingCollisionError(CollectError):
    """Two audio (or two transcript) files share a stem."""


def normalize_extensions(extensions) -> frozenset[str]:
    """Lowercase extensions and drop any leading dot: {'.WAV'} -> {'wav'}."""
    return frozenset(ext.lower().lstrip(".") for ext in extensions)


def read_transcript(path: Path) -> str:
    """Read a transcript file, detecting its encoding."""
    data = Path(path).read_bytes()
    return decode_bytes(data, path)


def _walk_files(root: Path) -> list[Path]:
    """Breadth-first listing of every non-directory path under root."""
    if not root.is_dir():
        return [root]

    files = []
    pending = deque([root])
    while pending:
        directory = pending.popleft()
        logger.debug(f"Visiting path \"{directory}\"")
        for child in sorted(directory.iterdir()):
            if child.is_dir():
                pending.append(child)
            else:
                files.append(child)
    return files


def collect_entries(
    root: str | Path,
    audio_extensions=DEFAULT_AUDIO_EXTENSIONS,
    text_extensions=DEFAULT_TEXT_EXTENSIONS,
) -> list[DictEntry]:
    """Collect complete audio/transcript pairs under root.

    Entries are keyed by file stem across the whole tree, so an audio file
    and its transcript may live in different subdirectories. A file whose
    extension is neither audio nor text discards its stem's entry.

    Args:
        root: Directory to walk, or a single file.
        audio_extensions: Audio extensions, matched case-insensitively.
        text_extensions: Transcript extensions, matched case-insensitively.

    Returns:
        Complete entries only, in no particular order.

    Raises:
        CollectError: root does not exist.
        NamingCollisionError: two audio or two transcript files share a stem.
        DecodeError: a transcript could not be decoded.
        OSError: a file or directory could not be read.
    """
    root = Path(root)
    if not root.exists():
        raise CollectError(f"Path \"{root}\" does not exist")

    audio_exts = normalize_extensions(audio_extensions)
    text_exts = normalize_extensions(text_extensions)
    entries: dict[str, DictEntry] = {}

    for path in _walk_files(root):
        stem = path.stem
        extension = path.suffix.lstrip(".").lower()
        entry = entries.setdefault(stem, DictEntry())
        entry.name = stem
        entry.containing_dir = str(path.parent)

        if extension in audio_exts:
            if entry.audio_path:
                raise NamingCollisionError(
                    f"Naming collision: \"{entry.audio_path}\" vs \"{path}\"!"
                )
            entry.audio_path = str(path)
        elif extension in text_exts:
            if entry.transcript_path:
                raise NamingCollisionError(
                    f"Naming collision: \"{entry.transcript_path}\" vs \"{path}\"!"
                )
            entry.transcript_path = str(path)
            entry.transcript = read_transcript(path)
        else:
            logger.warning(f"Unknown file extension \"{extension}\", file {path}!")
            del entries[stem]

    complete = []
    for entry in entries.values():
        if entry.is_complete():
            complete.append(entry)
        else:
            logger.warning(f"Incomplete entry: {entry}")

    logger.info(f"Collected {len(complete)} entries from {root}")
    return complete
