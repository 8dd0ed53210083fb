"""
Form validation for contact and assessment submissions.
"""
import re
from typing import Any, List, Mapping

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

REQUIRED_FIELDS_MESSAGE = "All required fields must be filled"
INVALID_EMAIL_MESSAGE = "Invalid email address"


class SubmissionError(ValueError):
    """Raised when a form submission fails validation."""

    def __init__(self, message: str, errors: List[str]):
        super().__init__(message)
        self.message = message
        self.errors = errors


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def _has_text(value: Any, min_length: int = 1) -> bool:
    return isinstance(value, str) and len(value.strip()) >= min_length


def validate_contact(data: Mapping[str, Any]) -> List[str]:
    """
    Collect human-readable problems with a contact submission.

    Returns:
        List of error messages, empty when the submission is valid
    """
    errors = []

    if not _has_text(data.get("name"), 2):
        errors.append("Please enter your full name (minimum 2 characters)")

    if not is_valid_email(data.get("email")):
        errors.append("Please enter a valid business email address")

    if not _has_text(data.get("company"), 2):
        errors.append("Please enter your company name")

    if not _has_text(data.get("revenue")):
        errors.append("Please select your company size/stage")

    if not _has_text(data.get("operations")):
        errors.append("Please select weekly hours on manual work")

    return errors


def validate_assessment(data: Mapping[str, Any]) -> List[str]:
    """Assessments only need somewhere to send the results; bands are not checked."""
    if not is_valid_email(data.get("email")):
        return ["Please enter a valid business email address"]
    return []


def ensure_contact(data: Mapping[str, Any]) -> None:
    """
    Raise SubmissionError for an invalid contact submission.

    Missing required fields are reported before a malformed email.
    """
    errors = validate_contact(data)
    if not errors:
        return

    required = ("name", "email", "company", "revenue", "operations")
    if any(not _has_text(data.get(field)) for field in required):
        raise SubmissionError(REQUIRED_FIELDS_MESSAGE, errors)
    if not is_valid_email(data.get("email")):
        raise SubmissionError(INVALID_EMAIL_MESSAGE, errors)
    raise SubmissionError(errors[0], errors)


def ensure_assessment(data: Mapping[str, Any]) -> None:
    errors = validate_assessment(data)
    if errors:
        message = REQUIRED_FIELDS_MESSAGE if not _has_text(data.get("email")) else INVALID_EMAIL_MESSAGE
        raise SubmissionError(message, errors)
