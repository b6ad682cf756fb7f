"""
tests/test_main.py — CLI driver in typed mode.
"""

from unittest.mock import MagicMock, patch

from artisan_voice import config, main


def test_list_languages(capsys):
    assert main.main(["--list-languages"]) == 0
    out = capsys.readouterr().out
    assert "hi-IN" in out
    assert "ru-RU" in out


def test_typed_registration_end_to_end(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(config, "SESSION_DIR", str(tmp_path))
    inputs = iter([
        "",                       # start
        "mary jane smith",
        "jaipur",
        "pottery",
        "skip",
        "mary at gmail dot com",
        "c",                      # confirm on the review screen
        "q",
    ])
    secrets = iter(["Secret1", "Secret1"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
    monkeypatch.setattr(main.getpass, "getpass", lambda prompt="": next(secrets))

    response = MagicMock(ok=True, status_code=201)
    response.json.return_value = {"success": True, "data": {"artisanId": "a42"}}
    with patch("artisan_voice.submit.requests.post", return_value=response) as post:
        code = main.run_registration("en-IN", typed=True, api_url="http://api.test/api/artisans", voice_output=False)

    assert code == 0
    payload = post.call_args.kwargs["json"]
    assert payload["name"] == "Mary Jane Smith"
    assert payload["email"] == "mary@gmail.com"
    assert payload["password"] == "Secret1"
    assert payload["voiceRegistered"] is True

    out = capsys.readouterr().out
    assert "Artisan ID: a42" in out
    assert "Profile saved successfully!" in out
    saved = list(tmp_path.iterdir())
    assert len(saved) == 2
    assert all("Secret1" not in p.read_text(encoding="utf-8") for p in saved)
