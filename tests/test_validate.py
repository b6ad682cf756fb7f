"""
tests/test_validate.py — per-field answer validation.
"""

import pytest
from artisan_voice.validate import validate_field, validate_all_fields

REQUIRED = ["name", "location", "category", "email", "password"]


class TestRequired:
    @pytest.mark.parametrize("field", REQUIRED)
    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_empty_rejected(self, field, value):
        result = validate_field(field, value)
        assert not result.is_valid
        assert "required" in result.message

    @pytest.mark.parametrize("value", ["", "   "])
    def test_phone_optional(self, value):
        assert validate_field("phone", value).is_valid


class TestRules:
    def test_name_min_length(self):
        assert not validate_field("name", " A ").is_valid
        assert validate_field("name", "Al").is_valid

    @pytest.mark.parametrize("email", ["john@gmail.com", "a.b@c.co.in"])
    def test_valid_email(self, email):
        assert validate_field("email", email).is_valid

    @pytest.mark.parametrize("email", ["john@gmail", "johngmail.com", "john@@gmail.com", "jo hn@gmail.com"])
    def test_invalid_email(self, email):
        result = validate_field("email", email)
        assert not result.is_valid
        assert result.message == "Please enter a valid email address"

    def test_password_min_length(self):
        assert not validate_field("password", "abc12").is_valid
        assert validate_field("password", "abc123").is_valid

    def test_phone_min_length_when_given(self):
        assert not validate_field("phone", "12345").is_valid
        assert validate_field("phone", "9876543210").is_valid

    @pytest.mark.parametrize("field", ["location", "category"])
    def test_place_min_length(self, field):
        assert not validate_field(field, "x").is_valid
        assert validate_field(field, "Goa").is_valid


class TestValidateAll:
    def test_complete_profile(self):
        ok, errors = validate_all_fields({
            "name": "Mary", "location": "Jaipur", "category": "Pottery",
            "phone": "", "email": "mary@gmail.com", "password": "Secret1",
        })
        assert ok
        assert errors == []

    def test_collects_every_error(self):
        ok, errors = validate_all_fields({"name": "M", "phone": "123"})
        assert not ok
        assert len(errors) == 6
