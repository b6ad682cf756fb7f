"""
Clean up raw speech-to-text output before validation.
Each field has its own rule; passwords are never touched.
"""

from __future__ import annotations
import re
from typing import Tuple

FIELDS = ["name", "location", "category", "phone", "email", "password"]
PASSWORD_FIELDS = {"password", "password_confirmation"}
SKIP_WORDS = ("skip", "next", "pass")

_PROVIDERS = ("gmail", "yahoo", "hotmail", "outlook")

_SPOKEN_AT = re.compile(r"\s+(?:at\s+the\s+rate(?:\s+of)?|at)\s+|\s*@\s*", re.IGNORECASE)
_SPOKEN_DOT = re.compile(r"\s+dot(?:\s+|$)|\s*\.\s*", re.IGNORECASE)
_PROVIDER_COM = re.compile(r"\b(" + "|".join(_PROVIDERS) + r")\s*\.?\s*com\b", re.IGNORECASE)


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def normalize_email(text: str) -> str:
    t = " " + text.strip() + " "
    t = _SPOKEN_AT.sub("@", t)
    t = _SPOKEN_DOT.sub(".", t)
    t = _PROVIDER_COM.sub(lambda m: m.group(1).lower() + ".com", t)
    return re.sub(r"\s+", "", t)


def normalize_name(text: str) -> str:
    t = _collapse(re.sub(r"[^\w\s'-]", "", text))
    return " ".join(w.capitalize() for w in t.split(" ") if w)


def normalize_phone(text: str) -> str:
    return re.sub(r"[^\d+()-]", "", text)


def normalize_place(text: str) -> str:
    """Location / category: keep letters, digits, spaces, apostrophes, hyphens, commas."""
    t = _collapse(re.sub(r"[^\w\s',-]", "", text))
    if not t:
        return t
    return t[0].upper() + t[1:].lower()


_NORMALIZERS = {
    "email": normalize_email,
    "name": normalize_name,
    "phone": normalize_phone,
    "location": normalize_place,
    "category": normalize_place,
}


def normalize_answer(field: str, text: str) -> str:
    if text is None:
        return ""
    if field in PASSWORD_FIELDS:
        return text
    fn = _NORMALIZERS.get(field)
    return fn(text) if fn else text.strip()


def is_skip(text: str) -> bool:
    """
    True if the transcript contains "skip", "next" or "pass" anywhere.
    """
    if not text:
        return False
    t = text.lower()
    return any(w in t for w in SKIP_WORDS)


def clean_answer(field: str, text: str) -> Tuple[str, bool]:
    """
    Returns (value, skipped). A skip always maps to '', including on the
    password step; only the confirmation is compared as spoken.
    """
    if field != "password_confirmation" and is_skip(text):
        return "", True
    return normalize_answer(field, text or ""), False
