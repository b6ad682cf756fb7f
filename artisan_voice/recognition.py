"""
Recognition session manager.

One session per question step. Engines report results from their own
threads; the session queues those events and the driver dispatches them
with process_events(), so wizard state is only ever touched from one thread.

    Idle --start--> Listening --(final | timeout | stop | error)--> Idle
"""

from __future__ import annotations
import queue
import threading
from typing import Callable, Optional

from artisan_voice import config

IDLE = "idle"
LISTENING = "listening"

NO_SPEECH = "no-speech"
AUDIO_CAPTURE = "audio-capture"
NOT_ALLOWED = "not-allowed"
NETWORK = "network"
START_FAILED = "start-failed"

ERROR_MESSAGES = {
    NO_SPEECH: "No speech detected. Please try again.",
    AUDIO_CAPTURE: "Microphone not found. Please check your microphone.",
    NOT_ALLOWED: "Microphone access denied. Please allow microphone access.",
    NETWORK: "Network error. Please check your internet connection.",
    START_FAILED: "Unable to start speech recognition. Please check your microphone permissions and try again.",
}


def describe_error(code: str) -> str:
    return ERROR_MESSAGES.get(code) or f"Speech recognition error: {code}"


class RecognitionEngine:
    """
    Speech-to-text backend. start() must return quickly and report through
    the listener: listener.result(text, is_final), listener.error(code),
    listener.end().
    """
    name = "base"

    def is_supported(self) -> bool:
        return True

    def start(self, language: str, listener: "SessionListener"):
        raise NotImplementedError

    def stop(self):
        pass


class SessionListener:
    """Callbacks handed to an engine; bound to one session generation and step."""

    def __init__(self, session: "RecognitionSession", generation: int, step: int):
        self._session = session
        self.generation = generation
        self.step = step

    def result(self, text: str, is_final: bool = True):
        self._session._post("result", self.generation, self.step, text, is_final)

    def error(self, code: str):
        self._session._post("error", self.generation, self.step, code)

    def end(self):
        self._session._post("end", self.generation, self.step)


class RecognitionSession:
    def __init__(
        self,
        engine: RecognitionEngine,
        language: str,
        on_final: Callable[[str, int], None],
        on_interim: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[str, str], None]] = None,
        on_timeout: Optional[Callable[[int], None]] = None,
        timeout: Optional[float] = None,
    ):
        self.engine = engine
        self.language = language
        self.on_final = on_final
        self.on_interim = on_interim
        self.on_error = on_error
        self.on_timeout = on_timeout
        self.timeout = config.RECOGNITION_TIMEOUT_SECONDS if timeout is None else timeout

        self.state = IDLE
        self.step: Optional[int] = None
        self.transcript = ""
        self.error = ""

        self._events: "queue.Queue[tuple]" = queue.Queue()
        self._generation = 0
        self._timer: Optional[threading.Timer] = None

    @property
    def is_listening(self) -> bool:
        return self.state == LISTENING

    @property
    def generation(self) -> int:
        return self._generation

    # ---------- Lifecycle ----------

    def start(self, step: int):
        if self.state == LISTENING:
            self.stop()

        self._generation += 1
        gen = self._generation
        self.step = step
        self.transcript = ""
        self.error = ""
        self.state = LISTENING

        if self.timeout and self.timeout > 0:
            self._timer = threading.Timer(self.timeout, self._post, args=("timeout", gen, step))
            self._timer.daemon = True
            self._timer.start()

        try:
            self.engine.start(self.language, SessionListener(self, gen, step))
        except Exception as e:
            print(f"[STT ERROR] Failed to start recognition: {e}")
            self._fail(START_FAILED)

    def stop(self):
        """Explicit stop. Safe to call when idle."""
        if self.state == LISTENING:
            try:
                self.engine.stop()
            except Exception as e:
                print(f"[WARN] Recognition engine stop failed: {e}")
        self._cancel_timer()
        self.state = IDLE

    # ---------- Event dispatch ----------

    def pending(self) -> int:
        return self._events.qsize()

    def process_events(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """
        Dispatch queued engine events on the calling thread.
        With block=True waits up to `timeout` seconds for the first event.
        Returns the number of events handled.
        """
        handled = 0
        while True:
            try:
                if block and handled == 0:
                    event = self._events.get(timeout=timeout)
                else:
                    event = self._events.get_nowait()
            except queue.Empty:
                return handled
            self._dispatch(event)
            handled += 1

    def _post(self, kind: str, generation: int, step: int, *args):
        self._events.put((kind, generation, step) + args)

    def _dispatch(self, event: tuple):
        kind, gen, step = event[0], event[1], event[2]
        if gen != self._generation:
            # late event from a superseded session
            return

        if kind == "result":
            text, is_final = event[3], event[4]
            self.transcript = text
            if not is_final:
                if self.on_interim:
                    self.on_interim(text)
                return
            self._cancel_timer()
            self.state = IDLE
            self.on_final(text.strip(), step)

        elif kind == "error":
            self._fail(event[3])

        elif kind == "end":
            self._cancel_timer()
            self.state = IDLE

        elif kind == "timeout":
            if self.state != LISTENING:
                return
            self.stop()
            if self.on_timeout:
                self.on_timeout(step)

    def _fail(self, code: str):
        message = describe_error(code)
        self.error = message
        self._cancel_timer()
        self.state = IDLE
        if self.on_error:
            self.on_error(code, message)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
