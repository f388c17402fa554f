"""Core data types for dictwalk."""

from dataclasses import dataclass, field

from dictwalk.normalize import normalize
from dictwalk.phonemes import Phoneme, render
from dictwalk.resolve import convert_to_phonemes


@dataclass
class DictEntry:
    """One audio/transcript pair discovered on disk."""
    name: str = ""             # shared file stem
    transcript: str = ""       # decoded transcript text
    containing_dir: str = ""
    audio_path: str = ""
    transcript_path: str = ""

    def is_complete(self) -> bool:
        return all((
            self.name,
            self.transcript,
            self.containing_dir,
            self.audio_path,
            self.transcript_path,
        ))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "transcript": self.transcript,
            "containing_dir": self.containing_dir,
            "audio_path": self.audio_path,
            "transcript_path": self.transcript_path,
        }


@dataclass
class TrainingEntry:
    """Normalized transcript with its resolved phonemes and audio file."""
    transcript: str
    phonemes: list[Phoneme] = field(default_factory=list)
    audio_path: str = ""

    @classmethod
    def from_dict_entry(cls, entry: DictEntry, chain) -> "TrainingEntry":
        """Normalize an entry's transcript and resolve it through a resolver chain."""
        transcript = normalize(entry.transcript)
        return cls(
            transcript=transcript,
            phonemes=convert_to_phonemes(transcript, list(chain)),
            audio_path=entry.audio_path,
        )

    def to_dict(self) -> dict:
        """Serialize for JSON output; phonemes become one display string."""
        return {
            "transcript": self.transcript,
            "phonemes": render(self.phonemes),
            "audio_path": self.audio_path,
        }
