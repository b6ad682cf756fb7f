"""
Voice backend using OpenAI.
- STT: microphone capture as in voice_free, transcribed with gpt-4o-transcribe
- TTS: gpt-4o-mini-tts (text-to-speech), played with simpleaudio
"""

import os
import tempfile
import threading
from typing import Optional
import simpleaudio as sa
import speech_recognition as sr
import openai
from openai import OpenAI

from artisan_voice import config
from artisan_voice.languages import primary_subtag
from artisan_voice.recognition import NETWORK
from artisan_voice.voice_free import MicrophoneEngine

_client: Optional[OpenAI] = None
_tts_lock = threading.Lock()
_play_obj = None


def _get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(api_key=config.OPENAI_API_KEY)
    return _client


# --- Transcribe captured phrases with OpenAI ---
class WhisperEngine(MicrophoneEngine):
    name = "openai"

    def is_supported(self) -> bool:
        if not config.OPENAI_API_KEY:
            print("[WARN] OPENAI_API_KEY not set; OpenAI transcription unavailable.")
            return False
        return super().is_supported()

    def transcribe(self, audio: "sr.AudioData", language: str) -> str:
        kwargs = {}
        if primary_subtag(language):
            kwargs["language"] = primary_subtag(language)
        resp = _get_client().audio.transcriptions.create(
            model=config.OPENAI_STT_MODEL,
            file=("answer.wav", audio.get_wav_data()),
            **kwargs,
        )
        return resp.text.strip()

    def classify_error(self, exc: Exception) -> str:
        if isinstance(exc, (openai.APIConnectionError, openai.APITimeoutError)):
            return NETWORK
        if isinstance(exc, openai.APIError):
            print(f"[STT ERROR] {exc}")
            return "service-error"
        return super().classify_error(exc)


# --- Speak agent prompts ---
def speak(text: str, language: Optional[str] = None, voice: Optional[str] = None):
    """
    Text-to-speech via OpenAI API. The model picks up the language from the text.
    Blocking: returns after playback finishes.
    """
    global _play_obj
    if not text or not text.strip():
        return

    with _tts_lock:
        tmp_path = None
        try:
            resp = _get_client().audio.speech.create(
                model=config.OPENAI_TTS_MODEL,
                voice=voice or config.OPENAI_TTS_VOICE,
                response_format="wav",
                input=text,
            )

            tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".wav")
            tmp.write(resp.content)
            tmp.flush()
            tmp.close()
            tmp_path = tmp.name

            wave_obj = sa.WaveObject.from_wave_file(tmp_path)
            _play_obj = wave_obj.play()
            _play_obj.wait_done()
        except Exception as e:
            print(f"[TTS ERROR] {e}")
        finally:
            _play_obj = None
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)


def cancel():
    play_obj = _play_obj
    if play_obj is not None:
        play_obj.stop()
