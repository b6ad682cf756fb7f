from artisan_voice import config
from datetime import datetime

from artisan_voice.languages import get_questions
from artisan_voice.logger import SessionLogger, MASK
from artisan_voice.normalize import FIELDS, clean_answer, normalize_answer
from artisan_voice.recognition import RecognitionSession, NO_SPEECH, NETWORK
from artisan_voice.submit import RegistrationClient, RegistrationError, build_payload
from artisan_voice.validate import validate_field, validate_all_fields

PASSWORD_STEP = 5
CONFIRM_STEP = 6

# Phases
IDLE = "idle"              # not started, or restarted
COLLECTING = "collecting"  # asking questions by voice
MANUAL = "manual"          # voice gave up on a step; waiting for a typed answer
READY = "ready"            # all answers in, waiting for confirm / restart


def empty_answers():
    return {f: "" for f in FIELDS}


class RegistrationWizard:
    """
    Voice registration flow: asks steps 0-5 (one per field) and step 6
    (password confirmation), then waits in READY for confirm() or restart().
    """

    def __init__(self, engine, language=None, speak_fn=None, cancel_fn=None,
                 client=None, logger=None, recognition_timeout=None, max_attempts=None):
        self.language = language or config.DEFAULT_LANGUAGE
        self.speak_fn = speak_fn
        self.cancel_fn = cancel_fn
        self.client = client or RegistrationClient()
        self.logger = logger or SessionLogger()
        self.max_attempts = config.MAX_STEP_ATTEMPTS if max_attempts is None else max_attempts

        self.session = RecognitionSession(
            engine,
            self.language,
            on_final=self.handle_answer,
            on_interim=self._on_interim,
            on_error=self._on_recognition_error,
            on_timeout=self._on_timeout,
            timeout=recognition_timeout,
        )

        self.answers = empty_answers()
        self.current_step = 0
        self.current_question = ""
        self.phase = IDLE
        self.error = ""
        self.success = ""
        self.attempts = {}
        self.turns = []  # [(role, text, timestamp)]
        self.last_result = None
        self.registrations = 0

    # ---------- State ----------

    @property
    def questions(self):
        return get_questions(self.language)

    @property
    def is_listening(self) -> bool:
        return self.session.is_listening

    @property
    def transcript(self) -> str:
        return self.session.transcript

    @property
    def awaiting_confirmation(self) -> bool:
        return self.phase == READY

    # ---------- Flow ----------

    def begin(self):
        """Start from the first question, or resume listening on the current step."""
        if self.phase in (READY, MANUAL):
            return
        if self.phase == IDLE and self.current_step == 0:
            self.phase = COLLECTING
            first = self.questions[0]
            self.current_question = first
            self._say(f"Welcome! I'll help you create your artisan profile. {first}")
            self.listen(0)
        else:
            self.phase = COLLECTING
            self.listen(self.current_step)

    def listen(self, step: int):
        self.session.start(step)

    def stop_listening(self):
        self.session.stop()

    def handle_answer(self, answer: str, step: int):
        """
        Process a final transcript for `step` (the step that was active when
        its recognition session started).
        """
        if self.phase not in (COLLECTING, MANUAL):
            print(f"[WARN] Ignoring answer for step {step}; wizard is {self.phase}.")
            return

        self.error = ""
        self._log_turn("user", answer, secret=step >= PASSWORD_STEP)

        if step == CONFIRM_STEP:
            password = self.answers["password"]
            if password and answer.strip() == password.strip():
                self._say("Passwords match. Finalizing your profile.")
                self._finish()
            else:
                self._reject(
                    step,
                    "Passwords do not match. Please try again.",
                    "The passwords do not match. Let's try confirming the password again. "
                    "Please say your password one more time.",
                )
            return

        field = FIELDS[step]
        value, skipped = clean_answer(field, answer)
        if skipped:
            print(f"[INFO] Step {step} ({field}) skipped.")

        result = validate_field(field, value)
        if not result.is_valid:
            self._reject(step, result.message,
                         f"I didn't catch that correctly. {result.message}. Please try again.")
            return

        self.answers[field] = value
        self.attempts.pop(step, None)
        if self.phase == MANUAL:
            self.phase = COLLECTING
        self._advance(step + 1)

    def submit_manual(self, text: str):
        """Typed answer for the step voice gave up on."""
        if self.phase != MANUAL:
            return
        self.handle_answer(text, self.current_step)

    def confirm(self):
        """
        Validate everything and submit. Returns the server response on success,
        None on failure (the wizard stays READY so the user can retry).
        """
        if self.phase != READY:
            self.error = "Please answer all questions before saving."
            return None

        self.error = ""
        self.success = ""

        ok, errors = validate_all_fields(self.answers)
        if not ok:
            self.error = f"Please fix the following issues: {', '.join(errors)}"
            self._say("I found some issues with your information. Please check and correct them before saving.")
            return None

        payload = build_payload(self.answers, self.language)
        try:
            result = self.client.register(payload)
        except RegistrationError as e:
            self.error = e.message
            self._say("I apologize, but there was a problem saving your profile. Please try again.")
            return None

        self.last_result = result
        self.registrations += 1
        self._say("Wonderful! Your artisan profile has been created successfully. "
                  "Thank you for sharing your story with us!")
        self.restart()
        self.success = "Profile saved successfully!"
        return result

    def restart(self):
        """Clear everything and go back to step 0."""
        self.session.stop()
        self.session.transcript = ""
        self.answers = empty_answers()
        self.current_step = 0
        self.current_question = ""
        self.phase = IDLE
        self.error = ""
        self.success = ""
        self.attempts.clear()
        self._say("Let's start fresh! What is your name?")

    def update_answer(self, field: str, value: str) -> bool:
        """Edit one collected answer by hand (e.g. from the review screen)."""
        if field not in FIELDS:
            raise ValueError(f"Unknown field: {field}")
        cleaned = normalize_answer(field, value)
        result = validate_field(field, cleaned)
        if not result.is_valid:
            self.error = result.message
            return False
        self.answers[field] = cleaned
        self.error = ""
        return True

    def change_language(self, language: str):
        """Switch language; re-ask the current question in the new language."""
        self.language = language
        self.session.language = language
        if self.phase in (COLLECTING, MANUAL) and self.current_question:
            self.current_question = self.questions[self.current_step]
            self._say(self.current_question)
            if self.session.is_listening:
                self.listen(self.current_step)

    def close(self):
        """Teardown: stop recognition and any speech in progress."""
        self.session.stop()
        if self.cancel_fn:
            try:
                self.cancel_fn()
            except Exception as e:
                print(f"[WARN] Could not cancel speech: {e}")

    def build_session(self):
        answers = dict(self.answers)
        if answers.get("password"):
            answers["password"] = MASK
        return {
            "metadata": {"project": config.PROJECT_NAME, "version": config.VERSION},
            "language": self.language,
            "answers": answers,
            "turns": [{"role": r, "text": t, "time": ts} for (r, t, ts) in self.turns],
        }

    # ---------- Core logic ----------

    def _advance(self, next_step: int):
        questions = self.questions
        if next_step >= len(questions):
            self._finish()
            return
        self.current_step = next_step
        self.current_question = questions[next_step]
        self._say(self.current_question)
        self.listen(next_step)

    def _reject(self, step: int, message: str, spoken: str):
        self.error = message
        print(f"[WARN] Step {step}: {message}")

        if self.phase == MANUAL:
            self._say(spoken)
            return

        self.attempts[step] = self.attempts.get(step, 0) + 1
        if self.max_attempts and self.attempts[step] >= self.max_attempts:
            self.phase = MANUAL
            self.current_step = step
            self._say("I'm having trouble hearing this answer. Please type it instead.")
            return

        self._say(spoken)
        self.listen(step)

    def _finish(self):
        self.phase = READY
        self.attempts.clear()
        name = self.answers["name"] or "not provided"
        email = self.answers["email"] or "not specified"
        self._say(
            f"Perfect! Your profile for {name} is ready to be created with the email {email}. "
            "For your security, I will not read back your password. "
            "Does this look correct? Please confirm to save."
        )

    # ---------- Recognition callbacks ----------

    def _on_interim(self, text: str):
        print(f"  ... {text}")

    def _on_recognition_error(self, code: str, message: str):
        self.error = message
        print(f"[STT ERROR] {message}")
        if code in (NO_SPEECH, NETWORK):
            self._say(message)

    def _on_timeout(self, step: int):
        self.error = "No answer heard in time. Please try again."
        print(f"[WARN] Listening timed out on step {step}.")

    # ---------- Utilities ----------

    def _say(self, text: str):
        print(f"Agent: {text}")
        self._log_turn("agent", text)
        if self.speak_fn:
            self.speak_fn(text, self.language)

    def _log_turn(self, role: str, text: str, secret: bool = False):
        self.turns.append((role, MASK if secret else text, datetime.now().isoformat()))
        self.logger.log_turn(role, text, secret=secret)
