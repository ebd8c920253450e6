# -*- coding: utf-8 -*-
"""
Contact form validation.

Every field is checked independently and reports at most one violation,
so a form with three bad fields gets three messages back at once.
"""
import re
from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 1000

# One "@", no "..", and a dot-separated alphabetic TLD
EMAIL_PATTERN = re.compile(
    r"(?!.*\.\.)[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}"
)

FIELD_LABELS = {"name": "Name", "email": "Email", "message": "Message"}


class ContactFormData(BaseModel):
    """Submitted values, trimmed. Used to re-fill the form after a rejection."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = ""
    email: str = ""
    message: str = ""

    @classmethod
    def from_form(cls, form) -> "ContactFormData":
        return cls(
            name=form.get("name") or "",
            email=form.get("email") or "",
            message=form.get("message") or "",
        )


class ContactSubmission(ContactFormData):
    """Schema an acceptable contact form must satisfy."""
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LENGTH)
    message: str = Field(..., min_length=MESSAGE_MIN_LENGTH, max_length=MESSAGE_MAX_LENGTH)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if not is_valid_email(v):
            raise ValueError('Please enter a valid email address')
        return v


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def _violation_message(error: dict) -> str:
    label = FIELD_LABELS[error["loc"][0]]
    ctx = error.get("ctx", {})

    if error["type"] == "string_too_short":
        if not str(error.get("input") or "").strip():
            return f"{label} is required"
        return f"{label} must be at least {ctx['min_length']} characters"
    if error["type"] == "string_too_long":
        return f"{label} must be {ctx['max_length']} characters or fewer"
    if error["type"] == "value_error":
        return str(ctx["error"])
    return error["msg"]


def validate_contact_form(data: ContactFormData) -> List[FieldViolation]:
    """Return one violation per failing field; empty when the form is acceptable."""
    try:
        ContactSubmission.model_validate(data.model_dump())
    except ValidationError as e:
        violations = {}
        for error in e.errors():
            field = error["loc"][0]
            violations.setdefault(field, FieldViolation(field, _violation_message(error)))
        return list(violations.values())
    return []
