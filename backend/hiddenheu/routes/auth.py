"""
HiddenHeu Backend — Auth Route Handlers
=========================================

What:  Sign-up, sign-in, sign-out and "who am I".
How:   register/login set the session token as an HttpOnly cookie and also
       return it in the body as `sessionToken` for clients that prefer the
       Authorization header.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from hiddenheu.config import settings
from hiddenheu.dependencies import get_current_user, get_session_token, get_sessions, get_storage
from hiddenheu.models import User
from hiddenheu.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)
from hiddenheu.schemas.common import ErrorResponse, SuccessResponse
from hiddenheu.security import SessionManager
from hiddenheu.services.auth_service import auth_service
from hiddenheu.storage import MemStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(user=UserResponse.model_validate(user), session_token=token)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid data or duplicate username/email", "model": ErrorResponse}},
    summary="Create an account and sign in",
)
async def register(
    payload: RegisterRequest,
    response: Response,
    store: MemStorage = Depends(get_storage),
    sessions: SessionManager = Depends(get_sessions),
) -> AuthResponse:
    user, token = auth_service.register(store, sessions, payload)
    _set_session_cookie(response, token)
    return _auth_response(user, token)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Sign in with username and password",
)
async def login(
    payload: LoginRequest,
    response: Response,
    store: MemStorage = Depends(get_storage),
    sessions: SessionManager = Depends(get_sessions),
) -> AuthResponse:
    """Usernames match case-insensitively; the password must match exactly."""
    user, token = auth_service.login(store, sessions, payload.username, payload.password)
    _set_session_cookie(response, token)
    return _auth_response(user, token)


@router.post(
    "/logout",
    response_model=SuccessResponse,
    summary="End the current session",
)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionManager = Depends(get_sessions),
) -> SuccessResponse:
    """Always succeeds, signed in or not."""
    auth_service.logout(sessions, token)
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return SuccessResponse()


@router.get(
    "/me",
    response_model=UserEnvelope,
    responses={401: {"description": "Not signed in", "model": ErrorResponse}},
    summary="The signed-in user",
)
async def me(user: User = Depends(get_current_user)) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.model_validate(user))
