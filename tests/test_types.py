"""Tests for core data types."""

import json

from dictwalk.phonemes import SEPARATOR, Phoneme, render
from dictwalk.resolve import DeadEndPhonemeResolver, MarkerPhonemeResolver, ResolverChain
from dictwalk.resolve.resolvers import DictionaryPhonemeResolver
from dictwalk.types import DictEntry, TrainingEntry


def test_dict_entry_defaults_empty():
    entry = DictEntry()
    assert entry.name == ""
    assert not entry.is_complete()


def test_dict_entry_to_dict():
    entry = DictEntry("a", "labas", "/d", "/d/a.wav", "/d/a.txt")
    assert entry.to_dict() == {
        "name": "a",
        "transcript": "labas",
        "containing_dir": "/d",
        "audio_path": "/d/a.wav",
        "transcript_path": "/d/a.txt",
    }


def test_training_entry_to_dict_renders_phonemes():
    entry = TrainingEntry(
        transcript="ta [PAUSE]",
        phonemes=[
            Phoneme.from_symbol("T"),
            Phoneme.from_symbol("A", accented=True),
            SEPARATOR,
            Phoneme.from_symbol("[PAUSE]"),
        ],
        audio_path="/d/a.wav",
    )
    data = entry.to_dict()
    assert data["phonemes"] == "[T]{A} [PAUSE]"
    assert data["audio_path"] == "/d/a.wav"
    json.dumps(data)


def test_training_entry_defaults():
    entry = TrainingEntry(transcript="")
    assert entry.phonemes == []
    assert entry.to_dict()["phonemes"] == ""


def test_training_entry_from_dict_entry():
    entry = DictEntry("a", "Labas  _pauze", "/d", "/d/a.wav", "/d/a.txt")
    chain = ResolverChain([
        DictionaryPhonemeResolver.parse("labas L A_ B A S\n"),
        MarkerPhonemeResolver(),
        DeadEndPhonemeResolver(),
    ])
    training = TrainingEntry.from_dict_entry(entry, chain)
    assert training.transcript == "Labas [PAUSE]"
    assert render(training.phonemes) == "[L][A_][B][A][S] [PAUSE]"
    assert training.audio_path == "/d/a.wav"
