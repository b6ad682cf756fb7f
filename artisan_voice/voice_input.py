"""
Central voice input wrapper (STT).
Prefers config.VOICE_INPUT_ENGINE; TypedEngine reads answers from the keyboard instead.
"""
from artisan_voice import config
from artisan_voice.recognition import RecognitionEngine


class TypedEngine(RecognitionEngine):
    """
    Keyboard stand-in for a recognizer. start() only records the listener;
    the driver reads a line and hands it to deliver().
    """
    name = "text"

    def __init__(self):
        self._listener = None

    @property
    def awaiting_input(self) -> bool:
        return self._listener is not None

    def start(self, language, listener):
        self._listener = listener

    def stop(self):
        self._listener = None

    def deliver(self, text: str):
        listener, self._listener = self._listener, None
        if listener is None:
            return
        if text and text.strip():
            listener.result(text.strip(), True)
        else:
            listener.error("no-speech")
        listener.end()


def get_engine() -> RecognitionEngine:
    """Build the configured microphone engine. Raises ImportError if its audio stack is missing."""
    engine = getattr(config, "VOICE_INPUT_ENGINE", "free").lower()

    if engine == "openai":
        from artisan_voice.voice_openai import WhisperEngine
        return WhisperEngine()
    elif engine == "free":
        from artisan_voice.voice_free import MicrophoneEngine
        return MicrophoneEngine()
    raise ValueError(f"Unknown VOICE_INPUT_ENGINE: {engine}")


def list_microphones():
    from artisan_voice.voice_free import list_microphones as _list
    return _list()


__all__ = ["TypedEngine", "get_engine", "list_microphones"]
