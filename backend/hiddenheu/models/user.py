"""
HiddenHeu Backend — User Record
=================================

Uniqueness of `username` and `email` is case-insensitive, but it is enforced
by AuthService before `create_user` is called, not by the store.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Preferred-language values accepted at registration
SUPPORTED_LANGUAGES = ("english", "hindi", "tamil", "bengali", "gujarati", "marathi")


@dataclass
class User:
    """A registered account."""

    id: int
    username: str
    # Salted PBKDF2 hash, see hiddenheu.security.hash_password
    password: str
    email: str
    created_at: datetime
    full_name: Optional[str] = None
    profile_picture: Optional[str] = None
    preferred_language: str = "english"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
