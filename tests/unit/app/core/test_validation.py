"""Unit tests for email validation."""

import pytest

from src.app.core.validation import is_email_valid


class TestIsEmailValid:
    @pytest.mark.parametrize(
        "email",
        [
            "a@b.com",
            "ada@example.com",
            "ada.lovelace+notes@mail.example.co.uk",
            "first_last@sub-domain.example.org",
            "nope@x.com",
        ],
    )
    def test_accepts_conventional_addresses(self, email):
        assert is_email_valid(email)

    @pytest.mark.parametrize(
        "email",
        [
            "",
            None,
            "not-an-email",
            "ada@",
            "@example.com",
            "ada@localhost",
            "ada@example.",
            "ada@.com",
            "ada example@example.com",
            "ada@example.com\n",
            ".ada@example.com",
            "ada.@example.com",
            "a..b@example.com",
        ],
    )
    def test_rejects_malformed_addresses(self, email):
        assert not is_email_valid(email)

    def test_rejects_overlong_address(self):
        email = "a" * 250 + "@example.com"
        assert not is_email_valid(email)
