"""Tests for one-hot vocabulary encoding."""

import numpy as np
import pytest

from dictwalk.resolve.io_map import IOMap


@pytest.fixture
def io_map():
    return IOMap(["a", "b", "č", "d"])


def test_positions_follow_declaration_order(io_map):
    assert [io_map.index(t) for t in "abčd"] == [0, 1, 2, 3]
    assert len(io_map) == 4


def test_encode_shape_and_padding(io_map):
    encoded = io_map.encode(["b", "a"], length=4)
    assert encoded.shape == (4, 4)
    assert encoded.dtype == np.float32
    assert encoded[0].tolist() == [0, 1, 0, 0]
    assert encoded[1].tolist() == [1, 0, 0, 0]
    assert not encoded[2:].any()


def test_decode_recovers_tokens(io_map):
    tokens = ["č", "a", "d", "d", "b"]
    assert io_map.decode(io_map.encode(tokens)) == tokens


def test_decode_batched_shape(io_map):
    encoded = io_map.encode(["d"], length=1)[np.newaxis, ...]
    assert io_map.decode(encoded) == ["d"]


def test_decode_argmax_of_distribution(io_map):
    probs = np.array([[0.1, 0.2, 0.6, 0.1]])
    assert io_map.decode(probs) == ["č"]


def test_decode_tie_goes_to_lowest_index(io_map):
    probs = np.array([[0.1, 0.4, 0.1, 0.4]])
    assert io_map.decode(probs) == ["b"]


def test_encode_too_long(io_map):
    with pytest.raises(ValueError, match="do not fit"):
        io_map.encode(["a", "b", "c"], length=2)


def test_encode_unknown_token(io_map):
    with pytest.raises(ValueError, match="not in the vocabulary"):
        io_map.encode(["x"])


def test_contains(io_map):
    assert "č" in io_map
    assert "c" not in io_map


def test_duplicate_tokens_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        IOMap(["a", "a"])
