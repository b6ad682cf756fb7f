"""
tests/test_logger.py — transcript and session files.
"""

import json

from artisan_voice.logger import SessionLogger, MASK


def test_secret_turns_are_masked(tmp_path):
    logger = SessionLogger()
    logger.log_turn("agent", "Please create a secure password for your account.")
    logger.log_turn("user", "Secret1", secret=True)
    path = tmp_path / "transcript.txt"
    logger.save_transcript(str(path))
    text = path.read_text(encoding="utf-8")
    assert "Secret1" not in text
    assert f"USER: {MASK}" in text


def test_session_json_from_wizard(tmp_path, ready_wizard):
    path = tmp_path / "session.json"
    ready_wizard.logger.save_session_json(str(path), ready_wizard.build_session(), {"registrations": 0})
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["session"]["answers"]["name"] == "Mary Jane Smith"
    assert data["session"]["answers"]["password"] == MASK
    assert "Secret1" not in path.read_text(encoding="utf-8")
