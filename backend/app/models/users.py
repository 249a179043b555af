"""User models."""

from pydantic import Field

from backend.app.models.common import ApiModel


class User(ApiModel):
    """Stored user record; ``password`` holds the bcrypt hash only."""

    id: int
    username: str
    password: str

    def public(self) -> "UserPublic":
        """Return the view that is safe to send to clients."""
        return UserPublic(id=self.id, username=self.username)


class UserPublic(ApiModel):
    """User without the password hash."""

    id: int
    username: str


class LoginRequest(ApiModel):
    """Request body for POST /api/auth/login."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class RegisterRequest(ApiModel):
    """Request body for POST /api/auth/register."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8)
