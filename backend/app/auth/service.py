"""Registration and login against the user repository."""

import logging
from functools import lru_cache

from backend.app.auth.passwords import hash_password, verify_password
from backend.app.db.repositories import UserRepository
from backend.app.errors import AuthError, ConflictError
from backend.app.models.users import UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


@lru_cache
def _dummy_hash() -> str:
    """Hash checked for unknown usernames so both failure paths cost the same."""
    return hash_password("not-a-real-password")


def register(users: UserRepository, username: str, password: str) -> UserPublic:
    """Create a user account.

    Args:
        users: User repository
        username: Requested username (case-sensitive)
        password: Plain-text password

    Returns:
        The new user without its password hash

    Raises:
        ConflictError: If the username is taken
    """
    if users.get_user_by_username(username) is not None:
        raise ConflictError("Username already exists")

    user = users.create_user(username, hash_password(password))
    logger.info(f"Registered user {user.id}")
    return user.public()


def authenticate(users: UserRepository, username: str, password: str) -> UserPublic:
    """Check credentials.

    Args:
        users: User repository
        username: Username
        password: Plain-text password

    Returns:
        The matching user without its password hash

    Raises:
        AuthError: Same message for unknown user and wrong password
    """
    user = users.get_user_by_username(username)

    if user is None:
        verify_password(password, _dummy_hash())
        raise AuthError(INVALID_CREDENTIALS)

    if not verify_password(password, user.password):
        raise AuthError(INVALID_CREDENTIALS)

    return user.public()
