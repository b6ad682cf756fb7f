import os
from dotenv import load_dotenv
load_dotenv()

# ---------------- Project ----------------
PROJECT_NAME = "Artisan Voice Registration"
VERSION = "0.1.0"

# ---------------- Wizard ----------------
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en-IN")
RECOGNITION_TIMEOUT_SECONDS = float(os.getenv("RECOGNITION_TIMEOUT_SECONDS", "15"))
MAX_STEP_ATTEMPTS = int(os.getenv("MAX_STEP_ATTEMPTS", "3"))

# ---------------- Files ----------------
SESSION_DIR = "sessions"
SAVE_TRANSCRIPTS = os.getenv("SAVE_TRANSCRIPTS", "1") not in ("0", "false", "no")

# ---------------- Voice ----------------
AGENT_VOICE_OUTPUT = True
USER_VOICE_INPUT = True
VOICE_SAMPLE_RATE = 16000
VOICE_CALIBRATE_SECONDS = 1.0
VOICE_PAUSE_SECONDS = 1.2
VOICE_PHRASE_TIME_LIMIT = 15
MIC_DEVICE_INDEX = None
VOICE_BEEP = True

# Synthesis: rate is relative to the engine's default words-per-minute
TTS_RATE = 0.85
TTS_VOLUME = 0.9

VOICE_INPUT_ENGINE = os.getenv("VOICE_INPUT_ENGINE", "free").lower()
VOICE_OUTPUT_ENGINE = os.getenv("VOICE_OUTPUT_ENGINE", "free").lower()

# OpenAI settings
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_STT_MODEL = os.getenv("OPENAI_STT_MODEL", "gpt-4o-transcribe")
OPENAI_TTS_MODEL = os.getenv("OPENAI_TTS_MODEL", "gpt-4o-mini-tts")
OPENAI_TTS_VOICE = os.getenv("OPENAI_TTS_VOICE", "alloy")

# ---------------- Registration API ----------------
REGISTRATION_API_URL = os.getenv("REGISTRATION_API_URL", "http://localhost:5000/api/artisans")
REGISTRATION_TIMEOUT_SECONDS = float(os.getenv("REGISTRATION_TIMEOUT_SECONDS", "15"))

if VOICE_INPUT_ENGINE not in {"openai", "free"}:
    raise ValueError(f"VOICE_INPUT_ENGINE must be 'openai' or 'free', got {VOICE_INPUT_ENGINE}")
if VOICE_OUTPUT_ENGINE not in {"openai", "free"}:
    raise ValueError(f"VOICE_OUTPUT_ENGINE must be 'openai' or 'free', got {VOICE_OUTPUT_ENGINE}")
