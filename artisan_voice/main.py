import argparse
import getpass
import os
import sys
from datetime import datetime

from artisan_voice.wizard import RegistrationWizard, IDLE, MANUAL, READY, PASSWORD_STEP
from artisan_voice.logger import SessionLogger, MASK
from artisan_voice.languages import LANGUAGES, get_ui_text, is_supported_language
from artisan_voice.normalize import FIELDS
from artisan_voice.validate import FIELD_LABELS
from artisan_voice.submit import RegistrationClient
from artisan_voice.voice_input import TypedEngine
from artisan_voice import config

# Voice modules (optional)
try:
    from artisan_voice.voice_input import get_engine, list_microphones
    from artisan_voice.voice_output import speak, cancel
    VOICE_AVAILABLE = True
except ImportError:
    VOICE_AVAILABLE = False

UNSUPPORTED_NOTICE = (
    "Speech recognition is not supported on this system. "
    "Connect a microphone and install the audio extras (pip install 'artisan-voice[audio]'), "
    "or run with --text to type your answers."
)

QUIT_WORDS = ("q", "quit", "exit")


def _read_answer(step: int) -> str:
    if step >= PASSWORD_STEP:
        return getpass.getpass("You (hidden): ")
    return input("You: ").strip()


def _prompt(text: str, wizard: RegistrationWizard) -> bool:
    """Idle prompt. Returns False to quit; handles 'lang <tag>'."""
    while True:
        choice = input(text).strip()
        if choice.lower() in QUIT_WORDS:
            return False
        if choice.lower().startswith("lang "):
            tag = choice.split(None, 1)[1].strip()
            if is_supported_language(tag):
                wizard.change_language(tag)
                print(f"Language set to {tag}.")
            else:
                print(f"[WARN] Unknown language '{tag}'. Use --list-languages to see options.")
            continue
        return True


def _review(wizard: RegistrationWizard, ui: dict) -> bool:
    """Terminal screen: confirm, edit, restart or quit. Returns False to quit."""
    print("\n--- Collected profile ---")
    for field in FIELDS:
        value = wizard.answers[field]
        if field == "password" and value:
            value = MASK
        print(f"  {FIELD_LABELS[field]}: {value or '—'}")

    choice = input(f"\n[c] {ui['confirm']}  [e] {ui['edit']}  [r] {ui['restart']}  [q] Quit: ").strip().lower()

    if choice == "c":
        result = wizard.confirm()
        if result is None:
            print(f"[ERROR] {wizard.error}")
        else:
            artisan_id = (result.get("data") or {}).get("artisanId")
            if artisan_id:
                print(f"Artisan ID: {artisan_id}")
    elif choice == "e":
        field = input(f"Field to edit ({', '.join(FIELDS)}): ").strip().lower()
        if field not in FIELDS:
            print(f"[WARN] Unknown field '{field}'.")
            return True
        value = getpass.getpass("New password: ") if field == "password" else input("New value: ")
        if not wizard.update_answer(field, value):
            print(f"[ERROR] {wizard.error}")
    elif choice == "r":
        wizard.restart()
    elif choice in QUIT_WORDS:
        return False
    return True


def _save(wizard: RegistrationWizard, logger: SessionLogger):
    if not config.SAVE_TRANSCRIPTS or not wizard.turns:
        return
    now = datetime.now().strftime("%Y%m%d_%H%M%S")
    os.makedirs(config.SESSION_DIR, exist_ok=True)
    logger.save_transcript(os.path.join(config.SESSION_DIR, f"{now}_transcript.txt"))
    logger.save_session_json(
        os.path.join(config.SESSION_DIR, f"{now}_session.json"),
        wizard.build_session(),
        {"registrations": wizard.registrations, "last_result": wizard.last_result},
    )
    print(f"\nSaved transcript and session JSON in '{config.SESSION_DIR}/'.")


def run_registration(language: str, typed: bool = False, api_url: str = None, voice_output: bool = True) -> int:
    ui = get_ui_text(language)
    print(f"\n--- {ui['title']}: {ui['subtitle']} ---")
    print(f"{ui['description']}\n")
    print(
        f"Mode: User input = {'Text' if typed else 'Voice'} | "
        f"Agent output = {'Voice+Text' if voice_output else 'Text only'} | Language = {language}\n"
    )

    if typed:
        engine = TypedEngine()
    else:
        engine = None
        if VOICE_AVAILABLE:
            try:
                engine = get_engine()
            except ImportError as e:
                print(f"[ERROR] {e}")
        if engine is None or not engine.is_supported():
            print(f"[ERROR] {UNSUPPORTED_NOTICE}")
            return 1

    if voice_output and not VOICE_AVAILABLE:
        print("[ERROR] Voice modules not available. Agent will use text only.\n")
        voice_output = False

    logger = SessionLogger()
    wizard = RegistrationWizard(
        engine,
        language=language,
        speak_fn=speak if voice_output else None,
        cancel_fn=cancel if voice_output else None,
        client=RegistrationClient(api_url),
        logger=logger,
        recognition_timeout=0 if typed else None,
    )

    try:
        while True:
            ui = get_ui_text(wizard.language)
            if wizard.phase == IDLE:
                if wizard.success:
                    print(f"✅ {wizard.success}")
                if not _prompt(f"\nPress Enter to {ui['start'].lower()} ('lang <tag>' to switch, q to quit): ", wizard):
                    break
                wizard.begin()
            elif wizard.phase == READY:
                if not _review(wizard, ui):
                    break
            elif wizard.phase == MANUAL:
                wizard.submit_manual(_read_answer(wizard.current_step))
            elif typed and engine.awaiting_input:
                engine.deliver(_read_answer(wizard.current_step))
            elif not wizard.is_listening and wizard.session.pending() == 0:
                if wizard.error:
                    print(f"[!] {wizard.error}")
                if not _prompt("Press Enter to answer again (q to quit): ", wizard):
                    break
                wizard.begin()

            wizard.session.process_events(block=wizard.is_listening and not typed, timeout=0.25)

    except KeyboardInterrupt:
        print("\n\nRegistration interrupted. Goodbye!")
    finally:
        wizard.close()
        _save(wizard, logger)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=config.PROJECT_NAME)
    parser.add_argument("--language", default=config.DEFAULT_LANGUAGE, help="Language tag, e.g. en-IN, hi-IN")
    parser.add_argument("--text", action="store_true", help="Type answers instead of speaking")
    parser.add_argument("--api-url", default=None, help="Profile registration endpoint")
    parser.add_argument("--no-voice-output", action="store_true", help="Print prompts without speaking them")
    parser.add_argument("--list-languages", action="store_true", help="List supported languages and exit")
    parser.add_argument("--list-mics", action="store_true", help="List microphones and exit")
    args = parser.parse_args(argv)

    if args.list_languages:
        for code, label in LANGUAGES:
            print(f"{code:8} {label}")
        return 0

    if args.list_mics:
        if not VOICE_AVAILABLE:
            print(f"[ERROR] {UNSUPPORTED_NOTICE}")
            return 1
        for i, name in enumerate(list_microphones()):
            print(f"{i:3} {name}")
        return 0

    if not is_supported_language(args.language):
        print(f"[WARN] Unknown language '{args.language}', using {config.DEFAULT_LANGUAGE}.")
        args.language = config.DEFAULT_LANGUAGE

    return run_registration(
        args.language,
        typed=args.text or not config.USER_VOICE_INPUT,
        api_url=args.api_url,
        voice_output=config.AGENT_VOICE_OUTPUT and not args.no_voice_output,
    )


if __name__ == "__main__":
    sys.exit(main())
