"""One-hot encoding between token vocabularies and numpy tensors."""

import numpy as np


class IOMap:
    """Bidirectional map between an ordered vocabulary and one-hot rows.

    Position i of a row corresponds to the i-th vocabulary token.
    """

    def __init__(self, tokens):
        self.tokens: list[str] = list(tokens)
        self._index: dict[str, int] = {}
        for idx, token in enumerate(self.tokens):
            if token in self._index:
                raise ValueError(f"Duplicate vocabulary token: {token!r}")
            self._index[token] = idx

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, token: str) -> bool:
        return token in self._index

    def index(self, token: str) -> int:
        try:
            return self._index[token]
        except KeyError:
            raise ValueError(f"Token {token!r} is not in the vocabulary") from None

    def encode(self, tokens, length: int | None = None) -> np.ndarray:
        """Encode tokens as a (length, vocab) float32 array.

        Rows past the last token stay all-zero. ``length`` defaults to the
        number of tokens.
        """
        tokens = list(tokens)
        if length is None:
            length = len(tokens)
        if len(tokens) > length:
            raise ValueError(f"{len(tokens)} tokens do not fit in length {length}")

        encoded = np.zeros((length, len(self.tokens)), dtype=np.float32)
        for row, token in enumerate(tokens):
            encoded[row, self.index(token)] = 1.0
        return encoded

    def decode(self, array: np.ndarray) -> list[str]:
        """Decode each row to the token at its maximum.

        Accepts any shape whose size is a multiple of the vocabulary size,
        e.g. (1, steps, vocab). Ties go to the lowest position.
        """
        rows = np.asarray(array).reshape(-1, len(self.tokens))
        # np.argmax returns the first maximal index
        return [self.tokens[int(i)] for i in np.argmax(rows, axis=1)]
