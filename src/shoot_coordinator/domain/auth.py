"""Credential forms for sign-up, sign-in and password reset."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    EmailStr,
    field_validator,
    model_validator,
)

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


def _check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return value


Password = Annotated[str, AfterValidator(_check_password)]


class SignInForm(BaseModel):
    """Email and password sign-in."""

    email: EmailStr
    password: Password


class SignUpForm(BaseModel):
    """New photographer account."""

    email: EmailStr
    password: Password
    name: str
    phone: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        """Require a trimmed name of reasonable length."""
        cleaned = value.strip()
        if len(cleaned) < MIN_NAME_LENGTH:
            raise ValueError(f"Name must be at least {MIN_NAME_LENGTH} characters")
        if len(cleaned) > MAX_NAME_LENGTH:
            raise ValueError(f"Name must be at most {MAX_NAME_LENGTH} characters")
        return cleaned

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, value: str | None) -> str | None:
        """Treat an empty phone number as not provided."""
        if value is None:
            return None
        return value.strip() or None


class PasswordResetRequest(BaseModel):
    """Request a password reset email."""

    email: EmailStr


class PasswordUpdateForm(BaseModel):
    """New password with confirmation."""

    password: Password
    confirm_password: Password

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordUpdateForm":
        """Require the confirmation to repeat the password."""
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Identity returned by the provider after a successful sign-in."""

    user_id: UUID
    access_token: str
