"""Inference backends for encoder/decoder sequence models."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)

ENCODER_FILENAME = "encoder.onnx"
DECODER_FILENAME = "decoder.onnx"


class Seq2SeqBackend(ABC):
    """Two-stage inference: encode a sequence once, then decode step by step."""

    @abstractmethod
    def encode(self, inputs: np.ndarray) -> list[np.ndarray]:
        """Run the encoder on a (batch, steps, vocab) array.

        Returns:
            The encoder's state tensors, in the order the decoder takes them.
        """

    @abstractmethod
    def decode(
        self, last_output: np.ndarray, states: list[np.ndarray],
    ) -> tuple[np.ndarray, list[np.ndarray]]:
        """Run one decoder step.

        Args:
            last_output: (batch, 1, vocab) one-hot of the previous symbol.
            states: State tensors from the encoder or the previous step.

        Returns:
            (output distribution, updated states)
        """

    def close(self) -> None:
        """Release the backend's resources."""


class OnnxSeq2SeqBackend(Seq2SeqBackend):
    """Encoder and decoder graphs exported to ONNX, run with onnxruntime.

    The encoder takes one input and returns its states as outputs. The
    decoder's first input is the previous symbol, the rest are the states in
    order; its first output is the symbol distribution, the rest are the new
    states.
    """

    def __init__(self, model_dir: str | Path, providers: list[str] | None = None):
        try:
            import onnxruntime as ort
        except ImportError as e:
            raise ImportError(
                f"Sequence model resolver requires the 'onnxruntime' package "
                f"(pip install dictwalk[model]): {e}"
            ) from e

        model_dir = Path(model_dir)
        encoder_path = model_dir / ENCODER_FILENAME
        decoder_path = model_dir / DECODER_FILENAME
        for path in (encoder_path, decoder_path):
            if not path.exists():
                raise FileNotFoundError(f"ONNX model not found: {path}")

        providers = providers or ["CPUExecutionProvider"]
        self._encoder = ort.InferenceSession(str(encoder_path), providers=providers)
        self._decoder = ort.InferenceSession(str(decoder_path), providers=providers)
        self._encoder_input = self._encoder.get_inputs()[0].name
        self._encoder_outputs = [o.name for o in self._encoder.get_outputs()]
        self._decoder_inputs = [i.name for i in self._decoder.get_inputs()]
        self._decoder_outputs = [o.name for o in self._decoder.get_outputs()]

        n_states = len(self._decoder_inputs) - 1
        if n_states != len(self._encoder_outputs) or len(self._decoder_outputs) != n_states + 1:
            raise ValueError(
                f"Encoder/decoder state mismatch in {model_dir}: encoder emits "
                f"{len(self._encoder_outputs)} states, decoder takes {n_states} "
                f"and emits {len(self._decoder_outputs) - 1}"
            )
        logger.info(f"Loaded ONNX encoder/decoder from {model_dir} ({n_states} state tensors)")

    def encode(self, inputs: np.ndarray) -> list[np.ndarray]:
        return list(self._encoder.run(self._encoder_outputs, {self._encoder_input: inputs}))

    def decode(
        self, last_output: np.ndarray, states: list[np.ndarray],
    ) -> tuple[np.ndarray, list[np.ndarray]]:
        feed = dict(zip(self._decoder_inputs, [last_output, *states]))
        output, *new_states = self._decoder.run(self._decoder_outputs, feed)
        return output, new_states

    def close(self) -> None:
        # InferenceSession has no explicit release; dropping the references frees it
        self._encoder = None
        self._decoder = None
