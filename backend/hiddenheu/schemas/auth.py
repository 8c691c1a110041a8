"""
HiddenHeu Backend — Auth Schemas
==================================

RegisterRequest validates the shape of a sign-up; uniqueness of username
and email is checked by AuthService against the store. UserResponse is the
only way a user leaves the API, and it has no password field.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from hiddenheu.models import SUPPORTED_LANGUAGES
from hiddenheu.schemas.base import APIModel


class RegisterRequest(APIModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=128)
    email: EmailStr
    full_name: Optional[str] = Field(default=None, max_length=120)
    preferred_language: str = Field(default="english")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username must not be blank")
        return v

    @field_validator("preferred_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Accepts any casing of a supported language; stores it lowercase."""
        lowered = v.strip().lower()
        if lowered not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language '{v}'. Must be one of: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        return lowered


class LoginRequest(APIModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Same normalization as registration, so " bob " finds "bob"."""
        v = v.strip()
        if not v:
            raise ValueError("Username must not be blank")
        return v


class UserResponse(APIModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    profile_picture: Optional[str] = None
    preferred_language: str
    created_at: datetime


class UserEnvelope(APIModel):
    """Body of GET /api/auth/me."""

    user: UserResponse


class AuthResponse(APIModel):
    """
    Body of register and login.

    The session token is also set as an HttpOnly cookie; returning it lets
    non-browser clients send it as `Authorization: Bearer <token>`.
    """

    user: UserResponse
    session_token: str
