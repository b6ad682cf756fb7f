"""
Free/local voice backend.
- STT: SpeechRecognition microphone capture, transcribed with Google Web Speech
- TTS: pyttsx3 (offline, system voices)
- Listening stops after one phrase (config.VOICE_PAUSE_SECONDS of silence) or when the session stops it.
"""

from __future__ import annotations
import threading
from typing import Optional
import simpleaudio as sa
import numpy as np
import speech_recognition as sr
import pyttsx3

from artisan_voice import config
from artisan_voice.languages import pick_voice
from artisan_voice.recognition import (
    RecognitionEngine, NO_SPEECH, AUDIO_CAPTURE, NOT_ALLOWED, NETWORK,
)

_tts_lock = threading.Lock()  # ensure TTS calls never overlap
_engine: Optional["pyttsx3.Engine"] = None


def play_beep(frequency=1000, duration=200, volume=0.5):
    """Play a short beep sound before recording."""
    fs = 44100  # sample rate
    t = np.linspace(0, duration / 1000, int(fs * duration / 1000), False)
    wave = np.sin(frequency * t * 2 * np.pi)
    audio = (wave * (32767 * volume)).astype(np.int16)
    play_obj = sa.play_buffer(audio, 1, 2, fs)
    play_obj.wait_done()


def list_microphones() -> list[str]:
    """Return available microphone device names (useful for choosing MIC_DEVICE_INDEX)."""
    return sr.Microphone.list_microphone_names()


# -------- Recognition (one phrase per session) --------
class MicrophoneEngine(RecognitionEngine):
    """
    Captures a single phrase in the background and hands the audio to
    transcribe(). Subclasses swap the transcription service.
    Only final results are emitted; this backend has no interim transcripts.
    """
    name = "google"

    def __init__(self):
        self._recognizer = sr.Recognizer()
        self._stop_listening = None
        self._lock = threading.Lock()

    def is_supported(self) -> bool:
        try:
            return len(list_microphones()) > 0
        except (OSError, AttributeError) as e:
            print(f"[WARN] Microphone access unavailable: {e}")
            return False

    def transcribe(self, audio: "sr.AudioData", language: str) -> str:
        return self._recognizer.recognize_google(audio, language=language)

    def start(self, language, listener):
        sr_rate = int(getattr(config, "VOICE_SAMPLE_RATE", 16000))
        calibrate = float(getattr(config, "VOICE_CALIBRATE_SECONDS", 1.0))
        pause = float(getattr(config, "VOICE_PAUSE_SECONDS", 1.2))
        phrase_limit = getattr(config, "VOICE_PHRASE_TIME_LIMIT", 15)
        mic_index = getattr(config, "MIC_DEVICE_INDEX", None)

        self._recognizer.dynamic_energy_threshold = True
        self._recognizer.pause_threshold = pause
        self._recognizer.non_speaking_duration = min(0.6, pause)

        source = sr.Microphone(sample_rate=sr_rate, device_index=mic_index)
        # PermissionError/OSError propagate so the session reports a start failure
        with source:
            self._recognizer.adjust_for_ambient_noise(source, duration=calibrate)

        if getattr(config, "VOICE_BEEP", False):
            try:
                play_beep()
            except Exception as e:
                print(f"[WARN] Beep failed: {e}")

        def _on_phrase(recognizer, audio):
            self._halt()
            try:
                text = self.transcribe(audio, language)
                if text and text.strip():
                    listener.result(text.strip(), True)
                else:
                    listener.error(NO_SPEECH)
            except Exception as e:
                listener.error(self.classify_error(e))
            finally:
                listener.end()

        with self._lock:
            self._stop_listening = self._recognizer.listen_in_background(
                source, _on_phrase, phrase_time_limit=phrase_limit
            )

    def classify_error(self, exc: Exception) -> str:
        if isinstance(exc, (sr.WaitTimeoutError, sr.UnknownValueError)):
            return NO_SPEECH
        if isinstance(exc, sr.RequestError):
            return NETWORK
        if isinstance(exc, PermissionError):
            return NOT_ALLOWED
        if isinstance(exc, OSError):
            return AUDIO_CAPTURE
        print(f"[STT ERROR] {exc}")
        return type(exc).__name__

    def _halt(self):
        with self._lock:
            stop_fn, self._stop_listening = self._stop_listening, None
        if stop_fn:
            stop_fn(wait_for_stop=False)

    def stop(self):
        self._halt()


# -------- TTS (robust on Windows) --------
def speak(text: str, language: Optional[str] = None):
    """
    Offline TTS via pyttsx3, using an installed voice that matches the language.
    Re-initialize per call to avoid 'only first utterance plays' bug on Windows.
    Blocking: returns when playback completes.
    """
    global _engine
    if not text or not text.strip():
        return
    with _tts_lock:
        try:
            engine = pyttsx3.init()
            _engine = engine
            base_rate = engine.getProperty("rate") or 200
            engine.setProperty("rate", int(base_rate * float(getattr(config, "TTS_RATE", 1.0))))
            engine.setProperty("volume", float(getattr(config, "TTS_VOLUME", 1.0)))
            voice = pick_voice(engine.getProperty("voices"), language or config.DEFAULT_LANGUAGE)
            if voice is not None:
                engine.setProperty("voice", voice.id)
            engine.say(text)
            engine.runAndWait()
            engine.stop()
        except Exception as e:
            print(f"[TTS ERROR] {e}")
        finally:
            _engine = None


def cancel():
    """Stop the utterance in progress, if any."""
    engine = _engine
    if engine is not None:
        try:
            engine.stop()
        except Exception as e:
            print(f"[TTS ERROR] {e}")
