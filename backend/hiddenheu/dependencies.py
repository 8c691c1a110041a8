"""
HiddenHeu Backend — Request Dependencies
==========================================

What:  FastAPI dependencies shared by the routers: the store, the session
       registry, the translation service and the signed-in user.
How:   The session token is read from the `hiddenheu_session` cookie, or
       from an `Authorization: Bearer <token>` header when the cookie is
       absent or no longer names a live session. Tests swap the first
       three through app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hiddenheu.config import settings
from hiddenheu.models import User
from hiddenheu.security import SessionManager, get_sessions
from hiddenheu.services.auth_service import auth_service
from hiddenheu.services.translation_service import get_translation_service
from hiddenheu.storage import MemStorage, get_storage

__all__ = [
    "get_current_user",
    "get_session_token",
    "get_sessions",
    "get_storage",
    "get_translation_service",
]

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    sessions: SessionManager = Depends(get_sessions),
) -> Optional[str]:
    """
    The session token presented by the client, or None.

    A live cookie session wins. A stale or unknown cookie does not hide a
    valid Bearer token sent alongside it.
    """
    cookie_token = request.cookies.get(settings.session_cookie_name)
    if cookie_token and sessions.resolve(cookie_token) is not None:
        return cookie_token
    if credentials is not None and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return cookie_token or None


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    store: MemStorage = Depends(get_storage),
    sessions: SessionManager = Depends(get_sessions),
) -> User:
    """
    The user behind the request's session.

    Raises:
        AuthenticationError: Not signed in (401).
    """
    return auth_service.current_user(store, sessions, token)
