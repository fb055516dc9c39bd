"""Credential validation rules.

Registration, sign-in and password-change forms are validated here before
they are handed to the identity service.
"""

from __future__ import annotations

import re
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, Field, field_validator, model_validator

from rpg_companion.core.exceptions import ValidationError


PASSWORD_MIN_LENGTH = 12
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
SEQUENTIAL_PATTERN = re.compile(
    r"(?:abc|bcd|cde|def|efg|fgh|ghi|hij|ijk|jkl|klm|lmn|mno|nop|opq|pqr|qrs|rst"
    r"|stu|tuv|uvw|vwx|wxy|xyz|012|123|234|345|456|567|678|789)",
    re.IGNORECASE,
)
COMMON_WORDS = ("password", "admin", "user", "login", "123456", "qwerty")


def check_password_strength(password: str) -> str:
    """Validate a new password.

    Raises:
        ValueError: With the first rule the password breaks.
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", password):
        raise ValueError("Password must contain at least one special character")
    return password


def check_username(username: str) -> str:
    if len(username) < 3:
        raise ValueError("Username must be at least 3 characters")
    if len(username) >= 30:
        raise ValueError("Username must be less than 30 characters")
    if not USERNAME_PATTERN.match(username):
        raise ValueError(
            "Username can only contain letters, numbers, underscores, and hyphens"
        )
    return username


def check_email(email: str) -> str:
    if len(email) < 5:
        raise ValueError("Email must be at least 5 characters")
    if len(email) >= 254:
        raise ValueError("Email must be less than 254 characters")
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


class Registration(BaseModel):
    email: str
    password: str
    username: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return check_username(value)


class Login(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)


class PasswordChange(BaseModel):
    """A password change request.

    Beyond the strength rules, the new password must match its
    confirmation, must not contain a run of three sequential letters or
    digits, and must not contain a common word.
    """

    current_password: str = Field(min_length=1)
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)

    @model_validator(mode="after")
    def check_rules(self) -> PasswordChange:
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords don't match")
        if SEQUENTIAL_PATTERN.search(self.new_password):
            raise ValueError("Password cannot contain sequential patterns")
        lowered = self.new_password.lower()
        if any(word in lowered for word in COMMON_WORDS):
            raise ValueError("Password cannot contain common words")
        return self


FormT = TypeVar("FormT", bound=BaseModel)


def validate_form(form: type[FormT], data: dict[str, Any]) -> FormT:
    """Validate submitted form data.

    Raises:
        ValidationError: Naming the first failing field and its message.
    """
    try:
        return form.model_validate(data)
    except pydantic.ValidationError as exc:
        error = exc.errors()[0]
        field_name = ".".join(str(part) for part in error["loc"]) or None
        message = error["msg"].removeprefix("Value error, ")
        raise ValidationError(message, field_name=field_name) from exc


__all__ = [
    "PASSWORD_MIN_LENGTH",
    "COMMON_WORDS",
    "check_password_strength",
    "check_username",
    "check_email",
    "Registration",
    "Login",
    "PasswordChange",
    "validate_form",
]
