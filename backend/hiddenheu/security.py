"""
HiddenHeu Backend — Password Hashing & Sessions
=================================================

What:  PBKDF2-SHA256 password hashing and an in-memory session token registry.
Why:   Passwords are never kept in plaintext, and every client gets its own
       session instead of one process-wide "current user".
How:   hash_password() stores `<salt hex>$<hash hex>`; SessionManager maps
       random URL-safe tokens to (user_id, expires_at).
Who:   AuthService issues and revokes sessions; dependencies.py resolves the
       token presented by a request (cookie or Bearer header).

Session lifecycle:
    register/login → create(user_id) → token set as cookie + returned in body
    each request   → resolve(token) → user_id, or None when unknown/expired
    logout         → revoke(token)
"""

import hashlib
import hmac
import logging
import os
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional

from hiddenheu.config import settings

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Password Hashing
# ══════════════════════════════════════════════════════════════════════════

def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """
    Hash a password with PBKDF2-HMAC-SHA256 and a random 16-byte salt.

    Returns:
        `<salt hex>$<hash hex>`; the salt travels with the hash so
        verify_password needs nothing else.
    """
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str, iterations: Optional[int] = None) -> bool:
    """Check a plaintext password against a value produced by hash_password."""
    rounds = iterations or settings.password_hash_iterations
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        # Malformed stored value: treat as a failed login, not a server error
        logger.warning("Stored password hash has an unexpected format")
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(dk, expected)


# ══════════════════════════════════════════════════════════════════════════
# Sessions
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class Session:
    user_id: int
    expires_at: float


class SessionManager:
    """
    In-memory registry of active session tokens.

    Any number of users can be signed in at once; each token belongs to
    exactly one user. Sessions are lost on restart, like the rest of the
    in-memory state.

    Args:
        ttl_seconds: Lifetime of a new session. Defaults to settings.session_ttl_seconds.
    """

    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl_seconds = ttl_seconds or settings.session_ttl_seconds
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> str:
        """Start a session for user_id and return its token."""
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = Session(
                user_id=user_id,
                expires_at=time.time() + self.ttl_seconds,
            )
        logger.debug("Session started for user %d", user_id)
        return token

    def resolve(self, token: Optional[str]) -> Optional[int]:
        """Return the user id behind a token, or None if it is unknown or expired."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expires_at <= time.time():
                del self._sessions[token]
                return None
            return session.user_id

    def revoke(self, token: Optional[str]) -> bool:
        """End a session. Returns False when the token was not active."""
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired session; returns how many were removed."""
        now = time.time()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


# ── Process-wide instance ─────────────────────────────────────────────────
session_manager = SessionManager()


def get_sessions() -> SessionManager:
    """FastAPI dependency; tests override it with a fresh SessionManager."""
    return session_manager
