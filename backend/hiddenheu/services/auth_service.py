"""
HiddenHeu Backend — Auth Service
==================================

What:  Registration, login, logout and current-user resolution.
Why:   Owns the rules the store deliberately leaves out: case-insensitive
       uniqueness of username and email, password verification, and the
       mapping from a session token to a user.
How:   Uniqueness checks and the insert run under `store.lock`, so two
       concurrent sign-ups for "alice" and "Alice" cannot both succeed.

Flow (POST /api/auth/register):
    ┌──────────┐   ┌──────────────┐   ┌────────────┐   ┌──────────────┐
    │ Validate │──▶│ Username and │──▶│ Hash + add │──▶│ Start session│
    │ (schema) │   │ email unique │   │   user     │   │ (token)      │
    └──────────┘   └──────────────┘   └────────────┘   └──────────────┘
"""

import logging
from typing import Optional, Tuple

from hiddenheu.exceptions import AuthenticationError, ConflictError
from hiddenheu.models import User
from hiddenheu.schemas.auth import RegisterRequest
from hiddenheu.security import SessionManager, hash_password, verify_password
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)


class AuthService:
    """
    Stateless: the store and session registry are passed to every call.

    Every method returning a session returns `(user, token)`.
    """

    def register(
        self,
        store: MemStorage,
        sessions: SessionManager,
        payload: RegisterRequest,
    ) -> Tuple[User, str]:
        """
        Create an account and sign it in.

        Raises:
            ConflictError: Username or email already taken (case-insensitive).
        """
        # PBKDF2 is slow; hash before taking the lock other requests need
        password_hash = hash_password(payload.password)

        with store.lock:
            if store.get_user_by_username(payload.username) is not None:
                raise ConflictError(
                    message="Username already exists",
                    context={"field": "username"},
                )
            if store.get_user_by_email(payload.email) is not None:
                raise ConflictError(
                    message="Email already exists",
                    context={"field": "email"},
                )
            user = store.create_user(
                {
                    "username": payload.username,
                    "password": password_hash,
                    "email": payload.email,
                    "full_name": payload.full_name,
                    "preferred_language": payload.preferred_language,
                }
            )

        token = sessions.create(user.id)
        logger.info("Registered user %d (%s)", user.id, user.username)
        return user, token

    def login(
        self,
        store: MemStorage,
        sessions: SessionManager,
        username: str,
        password: str,
    ) -> Tuple[User, str]:
        """
        Raises:
            AuthenticationError: Unknown username or wrong password. The
                message does not say which.
        """
        user = store.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.info("Failed login attempt for username '%s'", username)
            raise AuthenticationError(message="Invalid credentials")

        token = sessions.create(user.id)
        logger.info("User %d logged in", user.id)
        return user, token

    def logout(self, sessions: SessionManager, token: Optional[str]) -> None:
        if sessions.revoke(token):
            logger.info("Session revoked")

    def current_user(
        self,
        store: MemStorage,
        sessions: SessionManager,
        token: Optional[str],
    ) -> User:
        """
        The user behind a session token.

        Raises:
            AuthenticationError: No token, unknown/expired token, or the
                user no longer exists (the token is revoked in that case).
        """
        user_id = sessions.resolve(token)
        if user_id is None:
            raise AuthenticationError(message="Not authenticated")

        user = store.get_user(user_id)
        if user is None:
            sessions.revoke(token)
            raise AuthenticationError(message="User not found")
        return user


auth_service = AuthService()
