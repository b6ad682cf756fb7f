"""
Submission client for the artisan profile-provisioning endpoint.
"""

from typing import Any, Dict, Optional
import requests

from artisan_voice import config

GENERIC_FAILURE = "Failed to save profile. Please try again."

PAYLOAD_FIELDS = ["name", "location", "category", "phone", "email", "password"]


class RegistrationError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def build_payload(answers: Dict[str, str], language: str) -> Dict[str, Any]:
    """Only the provisioning fields; the password confirmation is never sent."""
    payload = {k: answers.get(k, "") for k in PAYLOAD_FIELDS}
    payload["language"] = language
    payload["voiceRegistered"] = True
    return payload


class RegistrationClient:
    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or config.REGISTRATION_API_URL
        self.timeout = timeout or config.REGISTRATION_TIMEOUT_SECONDS

    def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST the profile. Returns the parsed response body on success.
        Raises RegistrationError with the server's message (verbatim) on failure.
        """
        try:
            r = requests.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            print(f"[ERROR] Registration request failed: {e}")
            raise RegistrationError(GENERIC_FAILURE) from e

        if not r.ok:
            message = None
            try:
                body = r.json()
                if isinstance(body, dict):
                    message = body.get("message")
            except ValueError:
                pass
            raise RegistrationError(message or GENERIC_FAILURE, status_code=r.status_code)

        try:
            body = r.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
