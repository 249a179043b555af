"""Auth endpoints - register, login, logout, me."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel

from backend.app.api.auth import get_current_user_id, get_session_token
from backend.app.api.deps import get_session_store, get_storage
from backend.app.auth.service import authenticate, register
from backend.app.config import settings
from backend.app.db.repositories import SessionStore, Storage
from backend.app.errors import AuthError, StorageError
from backend.app.models.users import LoginRequest, RegisterRequest, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterRequest,
    storage: Annotated[Storage, Depends(get_storage)],
) -> UserPublic:
    """Create an account.

    Returns:
        The new user without its password hash
    """
    # bcrypt is CPU-bound; keep it off the event loop
    return await asyncio.to_thread(register, storage, request.username, request.password)


@router.post("/login", response_model=UserPublic)
async def login(
    request: LoginRequest,
    response: Response,
    storage: Annotated[Storage, Depends(get_storage)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
) -> UserPublic:
    """Check credentials and open a session.

    The session token is returned in an HTTP-only cookie.
    """
    user = await asyncio.to_thread(authenticate, storage, request.username, request.password)

    record = sessions.create(user.id)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=record.token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )

    logger.info(f"User {user.id} logged in")
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    user_id: Annotated[int, Depends(get_current_user_id)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
) -> MessageResponse:
    """Destroy the current session."""
    token = get_session_token(request)

    if token is None or not sessions.destroy(token):
        raise StorageError("Failed to log out")

    response.delete_cookie(settings.session_cookie_name)
    logger.info(f"User {user_id} logged out")
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserPublic)
async def me(
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> UserPublic:
    """Return the logged-in user."""
    user = storage.get_user(user_id)
    if user is None:
        raise AuthError("Unauthorized")
    return user.public()
