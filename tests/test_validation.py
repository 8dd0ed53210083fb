from __future__ import annotations

import pytest

from app.services.validation import (
    INVALID_EMAIL_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    SubmissionError,
    ensure_assessment,
    ensure_contact,
    is_valid_email,
    validate_contact,
)

VALID_CONTACT = {
    "name": "Dana Reyes",
    "email": "dana@northwind.io",
    "company": "Northwind Traders",
    "revenue": "medium",
    "operations": "25-40",
}


@pytest.mark.parametrize(
    "email,expected",
    [
        ("dana@northwind.io", True),
        ("first.last+ops@sub.example.co.uk", True),
        ("dana@northwind", False),
        ("dana@northwind.i", False),
        ("no-at-sign.example.com", False),
        ("", False),
        (None, False),
        ("tony@opusautomations.com\n", False),
        (" tony@opusautomations.com", False),
        ("tony@opusautomations.com ", False),
    ],
)
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


def test_valid_contact_has_no_errors():
    assert validate_contact(VALID_CONTACT) == []
    ensure_contact(VALID_CONTACT)


def test_validate_contact_collects_every_problem():
    errors = validate_contact({"name": " ", "email": "bad"})

    assert errors == [
        "Please enter your full name (minimum 2 characters)",
        "Please enter a valid business email address",
        "Please enter your company name",
        "Please select your company size/stage",
        "Please select weekly hours on manual work",
    ]


@pytest.mark.parametrize("field", ["name", "email", "company", "revenue", "operations"])
def test_missing_required_field(field):
    data = {k: v for k, v in VALID_CONTACT.items() if k != field}

    with pytest.raises(SubmissionError) as exc_info:
        ensure_contact(data)

    assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE


def test_invalid_email_reported_after_required_fields():
    with pytest.raises(SubmissionError) as exc_info:
        ensure_contact({**VALID_CONTACT, "email": "dana@"})

    assert exc_info.value.message == INVALID_EMAIL_MESSAGE


def test_short_name_uses_specific_message():
    with pytest.raises(SubmissionError) as exc_info:
        ensure_contact({**VALID_CONTACT, "name": "D"})

    assert exc_info.value.message == "Please enter your full name (minimum 2 characters)"


def test_assessment_only_needs_email():
    ensure_assessment({"email": "ops@example.com", "hours": "whatever"})

    with pytest.raises(SubmissionError) as exc_info:
        ensure_assessment({})
    assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE

    with pytest.raises(SubmissionError) as exc_info:
        ensure_assessment({"email": "ops@"})
    assert exc_info.value.message == INVALID_EMAIL_MESSAGE


def test_trailing_newline_email_is_rejected():
    with pytest.raises(SubmissionError) as exc_info:
        ensure_contact({**VALID_CONTACT, "email": "dana@northwind.io\n"})

    assert exc_info.value.message == INVALID_EMAIL_MESSAGE
