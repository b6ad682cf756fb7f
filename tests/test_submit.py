"""
tests/test_submit.py — registration endpoint client.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from artisan_voice.submit import (
    GENERIC_FAILURE, RegistrationClient, RegistrationError, build_payload,
)

ANSWERS = {
    "name": "Mary", "location": "Jaipur", "category": "Pottery",
    "phone": "9876543210", "email": "mary@gmail.com", "password": "Secret1",
}


def _response(status, body=None, json_error=False):
    r = MagicMock()
    r.status_code = status
    r.ok = 200 <= status < 300
    if json_error:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = body
    return r


class TestBuildPayload:
    def test_fields(self):
        payload = build_payload(ANSWERS, "hi-IN")
        assert payload["language"] == "hi-IN"
        assert payload["voiceRegistered"] is True
        assert set(payload) == {
            "name", "location", "category", "phone", "email", "password", "language", "voiceRegistered",
        }

    def test_confirmation_is_dropped(self):
        answers = dict(ANSWERS, password_confirmation="Secret1")
        assert "password_confirmation" not in build_payload(answers, "en-IN")


class TestRegister:
    def test_posts_json(self):
        client = RegistrationClient("http://api.test/api/artisans", timeout=5)
        body = {"success": True, "data": {"artisanId": "a1"}}
        with patch("artisan_voice.submit.requests.post", return_value=_response(201, body)) as post:
            assert client.register({"name": "Mary"}) == body
        post.assert_called_once_with("http://api.test/api/artisans", json={"name": "Mary"}, timeout=5)

    def test_server_message_is_used_verbatim(self):
        client = RegistrationClient("http://api.test/api/artisans")
        body = {"success": False, "message": "Name, location, and category are required"}
        with patch("artisan_voice.submit.requests.post", return_value=_response(400, body)):
            with pytest.raises(RegistrationError) as exc:
                client.register({})
        assert exc.value.message == "Name, location, and category are required"
        assert exc.value.status_code == 400

    def test_generic_message_without_body(self):
        client = RegistrationClient("http://api.test/api/artisans")
        with patch("artisan_voice.submit.requests.post", return_value=_response(500, json_error=True)):
            with pytest.raises(RegistrationError) as exc:
                client.register({})
        assert exc.value.message == GENERIC_FAILURE

    def test_unreachable_server(self):
        client = RegistrationClient("http://api.test/api/artisans")
        with patch("artisan_voice.submit.requests.post", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(RegistrationError) as exc:
                client.register({})
        assert exc.value.message == GENERIC_FAILURE
        assert exc.value.status_code is None

    def test_default_url_from_config(self):
        from artisan_voice import config
        assert RegistrationClient().url == config.REGISTRATION_API_URL

    def test_non_object_success_body_is_empty(self):
        client = RegistrationClient("http://api.test/api/artisans")
        with patch("artisan_voice.submit.requests.post", return_value=_response(201, ["a1"])):
            assert client.register({"name": "Mary"}) == {}
