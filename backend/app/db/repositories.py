"""Repository protocol interfaces for data access."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from backend.app.models.documents import Document, DocumentCreate
from backend.app.models.suggestions import Suggestion, SuggestionCreate
from backend.app.models.users import User


class UserRepository(Protocol):
    """Repository for user operations."""

    def create_user(self, username: str, password_hash: str) -> User:
        """Create a new user.

        Args:
            username: Unique, case-sensitive username
            password_hash: Irreversible password hash

        Returns:
            Stored user

        Raises:
            ConflictError: If the username is already taken
        """
        ...

    def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        ...

    def get_user_by_username(self, username: str) -> User | None:
        """Get user by exact username."""
        ...


class DocumentRepository(Protocol):
    """Repository for document operations."""

    def get_all_documents(self) -> list[Document]:
        """List every document in creation order."""
        ...

    def get_document(self, document_id: int) -> Document | None:
        """Get document by ID."""
        ...

    def create_document(self, document: DocumentCreate) -> Document:
        """Create a document, applying title/content defaults.

        Args:
            document: Creation fields

        Returns:
            Stored document with a fresh ID and timestamp
        """
        ...

    def update_document(self, document_id: int, fields: dict[str, Any]) -> Document | None:
        """Shallow-merge fields over an existing document.

        Args:
            document_id: Document ID
            fields: Snake_case field values to overwrite

        Returns:
            Updated document or None if not found
        """
        ...


class SuggestionRepository(Protocol):
    """Repository for suggestion operations."""

    def get_suggestions(self, document_id: int) -> list[Suggestion]:
        """List suggestions for a document in creation order."""
        ...

    def get_suggestion(self, suggestion_id: int) -> Suggestion | None:
        """Get suggestion by ID."""
        ...

    def create_suggestion(self, suggestion: SuggestionCreate) -> Suggestion:
        """Create a not-yet-generated suggestion.

        Raises:
            NotFoundError: If the referenced document does not exist
        """
        ...

    def update_suggestion(self, suggestion_id: int, fields: dict[str, Any]) -> Suggestion | None:
        """Shallow-merge fields over an existing suggestion."""
        ...

    def delete_suggestion(self, suggestion_id: int) -> bool:
        """Delete a suggestion.

        Returns:
            True if a record was removed
        """
        ...

    def replace_suggestions(
        self, document_id: int, batch: Iterable[SuggestionCreate]
    ) -> list[Suggestion]:
        """Delete all suggestions of a document, then store a new batch.

        Args:
            document_id: Document whose batch is replaced
            batch: New suggestions (their document_id is overridden)

        Returns:
            The newly stored suggestions
        """
        ...


class Storage(UserRepository, DocumentRepository, SuggestionRepository, Protocol):
    """Combined store used by the HTTP layer."""


@dataclass
class SessionRecord:
    """Server-side session record."""

    token: str
    user_id: int
    created_at: datetime
    ttl_until: datetime


class SessionStore(Protocol):
    """Store for server-side login sessions."""

    def create(self, user_id: int) -> SessionRecord:
        """Open a session for a user.

        Args:
            user_id: Authenticated user ID

        Returns:
            New session record with an unguessable token
        """
        ...

    def get(self, token: str) -> SessionRecord | None:
        """Get a live session.

        Args:
            token: Session token from the cookie

        Returns:
            Record or None if unknown or expired
        """
        ...

    def destroy(self, token: str) -> bool:
        """Invalidate a session.

        Returns:
            True if a session was removed
        """
        ...
