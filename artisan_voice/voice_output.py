"""
Central voice output wrapper (TTS).
Prefers config.VOICE_OUTPUT_ENGINE.
"""
from artisan_voice import config

engine = getattr(config, "VOICE_OUTPUT_ENGINE", "free").lower()

if engine == "openai":
    from artisan_voice.voice_openai import speak, cancel
elif engine == "free":
    from artisan_voice.voice_free import speak, cancel
else:
    raise ValueError(f"Unknown VOICE_OUTPUT_ENGINE: {engine}")

__all__ = ["speak", "cancel"]
