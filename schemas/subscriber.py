"""Subscriber record and form schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Subscriber(BaseModel):
    """A stored contact entry. id=0 means storage has not assigned one yet."""

    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    name: str
    email: str


class SubscriberForm(BaseModel):
    """Form input at submit time. Both fields are required and non-blank."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)


class MissingField(ValueError):
    """A required form field was unset or blank at submit time."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Please enter subscriber's {field}")


def validate_form(name: Optional[str], email: Optional[str]) -> SubscriberForm:
    """Return a validated form or raise MissingField for the first bad field.

    Fields are checked in form order (name before email).
    """
    try:
        return SubscriberForm(name=name, email=email)
    except ValidationError as exc:
        bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
        for field in ("name", "email"):
            if field in bad:
                raise MissingField(field) from exc
        raise
