"""Session auth dependency.

Resolves the session cookie to a user ID. Routes that need a logged-in user
declare ``Depends(get_current_user_id)``; everything else stays public.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from backend.app.api.deps import get_session_store, get_storage
from backend.app.config import settings
from backend.app.db.repositories import SessionStore, Storage
from backend.app.errors import AuthError

logger = logging.getLogger(__name__)


def get_session_token(request: Request) -> str | None:
    """Read the session token from the request cookie."""
    return request.cookies.get(settings.session_cookie_name)


async def get_current_user_id(
    request: Request,
    sessions: Annotated[SessionStore, Depends(get_session_store)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> int:
    """Resolve the authenticated user for a protected route.

    Args:
        request: Incoming request (carries the session cookie)
        sessions: Session store
        storage: Entity store, used to confirm the user still exists

    Returns:
        Authenticated user ID

    Raises:
        AuthError: If there is no live session or its user is gone
    """
    token = get_session_token(request)
    if not token:
        raise AuthError("Unauthorized")

    record = sessions.get(token)
    if record is None:
        raise AuthError("Unauthorized")

    if storage.get_user(record.user_id) is None:
        logger.warning(f"Session references unknown user {record.user_id}, invalidating")
        sessions.destroy(token)
        raise AuthError("Unauthorized")

    return record.user_id
