"""Models package - re-exports for convenience."""

from backend.app.models.common import ApiModel, SuggestionPosition
from backend.app.models.documents import (
    DEFAULT_TITLE,
    Document,
    DocumentCreate,
    DocumentUpdate,
)
from backend.app.models.suggestions import Suggestion, SuggestionCreate, SuggestionProposal
from backend.app.models.users import LoginRequest, RegisterRequest, User, UserPublic

__all__ = [
    # Common
    "ApiModel",
    "SuggestionPosition",
    # Documents
    "DEFAULT_TITLE",
    "Document",
    "DocumentCreate",
    "DocumentUpdate",
    # Suggestions
    "Suggestion",
    "SuggestionCreate",
    "SuggestionProposal",
    # Users
    "User",
    "UserPublic",
    "LoginRequest",
    "RegisterRequest",
]
