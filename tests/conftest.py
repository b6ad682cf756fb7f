"""
pytest fixtures for the artisan voice registration suite.

The wizard is driven with a fake recognition engine: tests push transcripts
through the engine's listener and then dispatch the queued events, exactly
as the CLI loop does with a real microphone.
"""

import os
import sys
import pytest

# Ensure project root is on sys.path so imports work
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from artisan_voice.recognition import RecognitionEngine  # noqa: E402
from artisan_voice.submit import RegistrationError  # noqa: E402
from artisan_voice.wizard import RegistrationWizard  # noqa: E402


class FakeEngine(RecognitionEngine):
    name = "fake"

    def __init__(self):
        self.calls = []
        self.listener = None
        self.supported = True
        self.fail_on_start = None

    def is_supported(self):
        return self.supported

    def start(self, language, listener):
        if self.fail_on_start:
            raise self.fail_on_start
        self.calls.append(("start", language, listener.step))
        self.listener = listener

    def stop(self):
        self.calls.append(("stop",))

    def say(self, text):
        listener = self.listener
        listener.result(text, True)
        listener.end()

    @property
    def starts(self):
        return [c for c in self.calls if c[0] == "start"]


class FakeClient:
    def __init__(self, error=None):
        self.payloads = []
        self.error = error

    def register(self, payload):
        self.payloads.append(payload)
        if self.error:
            raise RegistrationError(self.error, status_code=400)
        return {"success": True, "data": {"artisanId": "artisan-1", "name": payload["name"]}}


class Speaker:
    def __init__(self):
        self.spoken = []

    def __call__(self, text, language=None):
        self.spoken.append((text, language))

    @property
    def texts(self):
        return [t for t, _ in self.spoken]


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def speaker():
    return Speaker()


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def wizard(engine, speaker, client):
    return RegistrationWizard(
        engine,
        language="en-IN",
        speak_fn=speaker,
        client=client,
        recognition_timeout=0,
        max_attempts=3,
    )


def answer(wizard, engine, text):
    """Speak `text` into the active session and dispatch the resulting events."""
    engine.say(text)
    wizard.session.process_events()


FULL_RUN = [
    "mary jane smith",
    "jaipur, rajasthan",
    "blue pottery",
    "skip",
    "mary at gmail dot com",
    "Secret1",
    "Secret1",
]


@pytest.fixture
def ready_wizard(wizard, engine):
    """A wizard that has collected every answer and is waiting for confirmation."""
    wizard.begin()
    for text in FULL_RUN:
        answer(wizard, engine, text)
    return wizard
