"""Sequence model definition (``model.json``)."""

import json
from dataclasses import dataclass
from pathlib import Path

MODEL_DEF_FILENAME = "model.json"

_REQUIRED_KEYS = ("name", "in_tokens", "out_tokens", "max_in_length", "max_out_length")


class ModelDefError(ValueError):
    """Raised when a model definition is missing keys or malformed."""


@dataclass(frozen=True)
class ModelDef:
    """Vocabularies and length limits of a grapheme-to-phoneme model."""
    name: str
    in_tokens: tuple[str, ...]      # grapheme vocabulary, in one-hot order
    out_tokens: tuple[str, ...]     # phoneme vocabulary, in one-hot order
    max_in_length: int
    max_out_length: int

    @classmethod
    def from_dict(cls, data: dict) -> "ModelDef":
        missing = [k for k in _REQUIRED_KEYS if k not in data]
        if missing:
            raise ModelDefError(f"Model definition is missing keys: {missing}")
        max_in = int(data["max_in_length"])
        max_out = int(data["max_out_length"])
        if max_in <= 0 or max_out <= 0:
            raise ModelDefError(
                f"Model lengths must be positive, got in={max_in} out={max_out}"
            )
        return cls(
            name=str(data["name"]),
            in_tokens=tuple(data["in_tokens"]),
            out_tokens=tuple(data["out_tokens"]),
            max_in_length=max_in,
            max_out_length=max_out,
        )

    @classmethod
    def load(cls, path: str | Path) -> "ModelDef":
        """Load from a ``model.json`` file or the folder containing one."""
        path = Path(path)
        if path.is_dir():
            path = path / MODEL_DEF_FILENAME
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ModelDefError(f"Cannot parse model definition {path}: {e}") from e
        if not isinstance(data, dict):
            raise ModelDefError(f"Model definition {path} is not a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "in_tokens": list(self.in_tokens),
            "out_tokens": list(self.out_tokens),
            "max_in_length": self.max_in_length,
            "max_out_length": self.max_out_length,
        }
