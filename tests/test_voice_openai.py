"""
tests/test_voice_openai.py — OpenAI speech playback.
"""

import os
from unittest.mock import MagicMock

import pytest

voice_openai = pytest.importorskip("artisan_voice.voice_openai")


def test_speak_removes_temporary_wav(monkeypatch):
    client = MagicMock()
    client.audio.speech.create.return_value = MagicMock(content=b"RIFF0000WAVE")
    monkeypatch.setattr(voice_openai, "_get_client", lambda: client)

    played = []

    def from_wave_file(path):
        played.append(path)
        assert os.path.exists(path)
        return MagicMock()

    monkeypatch.setattr(voice_openai.sa.WaveObject, "from_wave_file", from_wave_file)
    voice_openai.speak("What is your name?", "en-IN")

    assert len(played) == 1
    assert not os.path.exists(played[0])
    assert voice_openai._play_obj is None


def test_speak_removes_temporary_wav_when_playback_fails(monkeypatch):
    client = MagicMock()
    client.audio.speech.create.return_value = MagicMock(content=b"not a wav")
    monkeypatch.setattr(voice_openai, "_get_client", lambda: client)

    played = []

    def from_wave_file(path):
        played.append(path)
        raise ValueError("bad wav")

    monkeypatch.setattr(voice_openai.sa.WaveObject, "from_wave_file", from_wave_file)
    voice_openai.speak("Where do you live?")

    assert not os.path.exists(played[0])
