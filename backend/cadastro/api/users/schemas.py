"""Pydantic request/response schemas for Users API."""
from __future__ import annotations

import re
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from ...errors import AGE_MESSAGE, EMAIL_MESSAGE, MAX_AGE_MESSAGE, REQUIRED_MESSAGE

_INTEGER = re.compile(r"[+-]?[0-9]+")
MAX_AGE = 150


def _required_text(value: Any) -> Any:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(REQUIRED_MESSAGE)
    return value.strip()


def _email_text(value: Any) -> str:
    """Check the address syntax but keep it exactly as submitted."""
    value = _required_text(value)
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(EMAIL_MESSAGE) from e
    return value


def _age_text(value: Any) -> str:
    """Normalize an age given as a JSON number or numeric string to its decimal text."""
    if isinstance(value, bool):
        raise ValueError(AGE_MESSAGE)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not _INTEGER.fullmatch(value) or value.startswith("-"):
            raise ValueError(AGE_MESSAGE)
        # digit count checked before int()
        if len(value.lstrip("+").lstrip("0")) > len(str(MAX_AGE)):
            raise ValueError(MAX_AGE_MESSAGE)
        value = int(value)
    if not isinstance(value, int) or value < 1:
        raise ValueError(AGE_MESSAGE)
    if value > MAX_AGE:
        raise ValueError(MAX_AGE_MESSAGE)
    return str(value)


class UserCreateIn(BaseModel):
    email: str
    name: str = Field(..., max_length=100)
    age: str

    @field_validator("email", mode="before")
    @classmethod
    def _valid_email(cls, v: Any) -> str:
        return _email_text(v)

    @field_validator("name", mode="before")
    @classmethod
    def _not_blank(cls, v: Any) -> Any:
        return _required_text(v)

    @field_validator("age", mode="before")
    @classmethod
    def _min_age(cls, v: Any) -> str:
        return _age_text(v)


class UserUpdateIn(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=100)
    age: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _valid_email(cls, v: Any) -> Optional[str]:
        return None if v is None else _email_text(v)

    @field_validator("name", mode="before")
    @classmethod
    def _not_blank(cls, v: Any) -> Any:
        return None if v is None else _required_text(v)

    @field_validator("age", mode="before")
    @classmethod
    def _min_age(cls, v: Any) -> Optional[str]:
        return None if v is None else _age_text(v)


class UserFilterIn(BaseModel):
    """Query-string filters for the list route; blank values count as absent."""

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[str] = None

    @field_validator("name", "email", "age", mode="before")
    @classmethod
    def _blank_is_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class UserOut(BaseModel):
    id: str
    email: str
    name: str
    age: str


class MessageOut(BaseModel):
    message: str
