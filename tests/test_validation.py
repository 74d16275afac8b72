import pytest

from studio_site.core.exceptions import ClientInputError
from studio_site.services.contact.validation import (
    is_valid_email,
    parse_submission,
    validate_submission,
)

VALID_EMAIL = "jo@x.com"
VALID_MESSAGE = "1234567890"


def _error_code(name=" Jo ", email=VALID_EMAIL, message=VALID_MESSAGE):
    with pytest.raises(ClientInputError) as exc_info:
        validate_submission(name, email, message)
    return exc_info.value.error_code


@pytest.mark.parametrize("length", [2, 80])
def test_name_length_bounds_pass(length):
    contact = validate_submission("n" * length, VALID_EMAIL, VALID_MESSAGE)
    assert len(contact.name) == length


@pytest.mark.parametrize("length", [1, 81])
def test_name_length_out_of_bounds_fails(length):
    assert _error_code(name="n" * length) == "invalid_name"


def test_name_is_measured_after_trim():
    assert _error_code(name="   a   ") == "invalid_name"


@pytest.mark.parametrize("email", ["a@b.c", "jo.smith+tag@studio.co.uk"])
def test_pragmatic_email_accepts(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["a@b", "a b@c.com", "@b.com", "a@@b.com", ""])
def test_pragmatic_email_rejects(email):
    assert _error_code(email=email) == "invalid_email"


def test_email_over_254_characters_fails():
    email = "a" * 250 + "@b.co"
    assert _error_code(email=email) == "invalid_email"


def test_message_length_bounds():
    assert _error_code(message="x" * 9) == "invalid_message"
    assert _error_code(message="x" * 4001) == "invalid_message"
    assert validate_submission("Jo", VALID_EMAIL, "x" * 10).message == "x" * 10
    assert len(validate_submission("Jo", VALID_EMAIL, "x" * 4000).message) == 4000


def test_fields_are_checked_in_order():
    assert _error_code(name="J", email="bad", message="short") == "invalid_name"
    assert _error_code(email="bad", message="short") == "invalid_email"


def test_validate_returns_trimmed_values():
    contact = validate_submission("  Jo  ", "  jo@x.com ", "\n1234567890\n")
    assert (contact.name, contact.email, contact.message) == ("Jo", "jo@x.com", "1234567890")


def test_parse_submission_coerces_non_strings_to_empty():
    submission = parse_submission({"name": 42, "email": None, "message": ["hi"]})
    assert submission.name == ""
    assert submission.email == ""
    assert submission.message == ""


def test_parse_submission_non_object_body():
    submission = parse_submission(["not", "an", "object"])
    assert submission.name == ""
    assert submission.form_started_at is None


@pytest.mark.parametrize("value", [True, "1700000000000", 0, None])
def test_parse_submission_ignores_unusable_timestamps(value):
    assert parse_submission({"formStartedAt": value}).form_started_at is None


def test_parse_submission_prefers_website_honeypot():
    submission = parse_submission({"company": "Acme", "website": " spam.example "})
    assert submission.honeypot == "spam.example"
    assert parse_submission({"company": "Acme", "website": "  "}).honeypot == "Acme"
