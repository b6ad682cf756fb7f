import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

REQUIRED_FIELDS = ["name", "location", "category", "email", "password"]
OPTIONAL_FIELDS = ["phone"]

FIELD_LABELS = {
    "name": "Name",
    "location": "Location",
    "category": "Category",
    "phone": "Phone",
    "email": "Email",
    "password": "Password",
}

MIN_NAME_CHARS = 2
MIN_PLACE_CHARS = 2
MIN_PASSWORD_CHARS = 6
MIN_PHONE_CHARS = 10

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class ValidationResult:
    is_valid: bool
    message: str = ""


def validate_field(field: str, value: str) -> ValidationResult:
    """Check one normalized answer. Phone is the only optional field."""
    value = value or ""
    stripped = value.strip()

    if not stripped:
        if field in OPTIONAL_FIELDS:
            return ValidationResult(True)
        return ValidationResult(False, f"{FIELD_LABELS.get(field, field)} is required")

    if field == "name" and len(stripped) < MIN_NAME_CHARS:
        return ValidationResult(False, f"Name must be at least {MIN_NAME_CHARS} characters long")
    if field == "email" and not _EMAIL_RE.match(stripped):
        return ValidationResult(False, "Please enter a valid email address")
    if field == "password" and len(value) < MIN_PASSWORD_CHARS:
        return ValidationResult(False, f"Password must be at least {MIN_PASSWORD_CHARS} characters long")
    if field == "phone" and len(value) < MIN_PHONE_CHARS:
        return ValidationResult(False, "Please enter a valid phone number")
    if field in ("location", "category") and len(stripped) < MIN_PLACE_CHARS:
        label = FIELD_LABELS[field]
        return ValidationResult(False, f"{label} must be at least {MIN_PLACE_CHARS} characters long")

    return ValidationResult(True)


def validate_all_fields(answers: Dict[str, str]) -> Tuple[bool, List[str]]:
    """Validate a whole profile before submission. Returns (is_valid, errors)."""
    errors = []
    for field in REQUIRED_FIELDS + OPTIONAL_FIELDS:
        result = validate_field(field, answers.get(field, ""))
        if not result.is_valid:
            errors.append(result.message)
    return len(errors) == 0, errors
