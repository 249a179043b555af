"""In-memory implementations of repository interfaces."""

import secrets
import threading
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from backend.app.db.repositories import SessionRecord
from backend.app.errors import ConflictError, NotFoundError
from backend.app.models.documents import DEFAULT_TITLE, Document, DocumentCreate
from backend.app.models.suggestions import Suggestion, SuggestionCreate
from backend.app.models.users import User

DOCUMENT_FIELDS = frozenset({"title", "content", "user_id"})
SUGGESTION_FIELDS = frozenset(
    {"prompt", "description", "position", "generated", "generated_content"}
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStorage:
    """In-memory implementation of Storage.

    Each entity kind lives in its own dict keyed by an auto-incrementing
    integer ID. One lock serializes every operation, so multi-step writes
    such as ``replace_suggestions`` are atomic to readers.
    """

    def __init__(self, *, seed_document: bool = True) -> None:
        """Initialize storage.

        Args:
            seed_document: Create the initial empty "Untitled" document
        """
        self._lock = threading.RLock()
        self._users: dict[int, User] = {}
        self._documents: dict[int, Document] = {}
        self._suggestions: dict[int, Suggestion] = {}
        self._user_id_counter = 1
        self._document_id_counter = 1
        self._suggestion_id_counter = 1

        if seed_document:
            self.create_document(DocumentCreate(title=DEFAULT_TITLE, content="", user_id=None))

    # Users

    def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        """Get user by exact username."""
        with self._lock:
            return self._find_user(username)

    def create_user(self, username: str, password_hash: str) -> User:
        """Create a new user; usernames are unique."""
        with self._lock:
            if self._find_user(username) is not None:
                raise ConflictError("Username already exists")

            user_id = self._user_id_counter
            self._user_id_counter += 1

            user = User(id=user_id, username=username, password=password_hash)
            self._users[user_id] = user
            return user

    def _find_user(self, username: str) -> User | None:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    # Documents

    def get_all_documents(self) -> list[Document]:
        """List every document in creation order."""
        with self._lock:
            return list(self._documents.values())

    def get_document(self, document_id: int) -> Document | None:
        """Get document by ID."""
        with self._lock:
            return self._documents.get(document_id)

    def create_document(self, document: DocumentCreate) -> Document:
        """Create a document, applying title/content defaults."""
        with self._lock:
            document_id = self._document_id_counter
            self._document_id_counter += 1

            record = Document(
                id=document_id,
                title=document.title if document.title.strip() else DEFAULT_TITLE,
                content=document.content or "",
                user_id=document.user_id,
                last_modified=_utcnow(),
            )
            self._documents[document_id] = record
            return record

    def update_document(self, document_id: int, fields: dict[str, Any]) -> Document | None:
        """Shallow-merge fields over an existing document and touch its timestamp."""
        with self._lock:
            existing = self._documents.get(document_id)
            if existing is None:
                return None

            changes = {k: v for k, v in fields.items() if k in DOCUMENT_FIELDS}
            updated = Document.model_validate(
                {
                    **existing.model_dump(),
                    **changes,
                    "last_modified": self._next_timestamp(existing.last_modified),
                }
            )
            self._documents[document_id] = updated
            return updated

    @staticmethod
    def _next_timestamp(previous: datetime) -> datetime:
        """Current time, nudged forward so it always lands after ``previous``."""
        now = _utcnow()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    # Suggestions

    def get_suggestions(self, document_id: int) -> list[Suggestion]:
        """List suggestions for a document in creation order."""
        with self._lock:
            return [s for s in self._suggestions.values() if s.document_id == document_id]

    def get_suggestion(self, suggestion_id: int) -> Suggestion | None:
        """Get suggestion by ID."""
        with self._lock:
            return self._suggestions.get(suggestion_id)

    def create_suggestion(self, suggestion: SuggestionCreate) -> Suggestion:
        """Create a not-yet-generated suggestion for an existing document."""
        with self._lock:
            if suggestion.document_id not in self._documents:
                raise NotFoundError("Document not found")

            suggestion_id = self._suggestion_id_counter
            self._suggestion_id_counter += 1

            record = Suggestion(
                id=suggestion_id,
                document_id=suggestion.document_id,
                prompt=suggestion.prompt,
                description=suggestion.description or "",
                position=suggestion.position,
                generated=False,
                generated_content="",
            )
            self._suggestions[suggestion_id] = record
            return record

    def update_suggestion(self, suggestion_id: int, fields: dict[str, Any]) -> Suggestion | None:
        """Shallow-merge fields over an existing suggestion."""
        with self._lock:
            existing = self._suggestions.get(suggestion_id)
            if existing is None:
                return None

            changes = {k: v for k, v in fields.items() if k in SUGGESTION_FIELDS}
            updated = Suggestion.model_validate({**existing.model_dump(), **changes})
            self._suggestions[suggestion_id] = updated
            return updated

    def delete_suggestion(self, suggestion_id: int) -> bool:
        """Delete a suggestion; True if it existed."""
        with self._lock:
            return self._suggestions.pop(suggestion_id, None) is not None

    def replace_suggestions(
        self, document_id: int, batch: Iterable[SuggestionCreate]
    ) -> list[Suggestion]:
        """Delete the document's suggestions, then store the new batch."""
        with self._lock:
            if document_id not in self._documents:
                raise NotFoundError("Document not found")

            for suggestion in self.get_suggestions(document_id):
                self.delete_suggestion(suggestion.id)

            return [
                self.create_suggestion(item.model_copy(update={"document_id": document_id}))
                for item in batch
            ]


class InMemorySessionStore:
    """In-memory implementation of SessionStore with TTL expiry.

    Expired records are dropped when read and swept whenever a new session
    is opened, so abandoned sessions do not accumulate.
    """

    def __init__(self, ttl_seconds: int = 24 * 3600) -> None:
        """Initialize session store.

        Args:
            ttl_seconds: Session lifetime in seconds (default 24h)
        """
        self._ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionRecord] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, user_id: int, now: datetime | None = None) -> SessionRecord:
        """Open a session for a user."""
        if now is None:
            now = _utcnow()

        record = SessionRecord(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            ttl_until=now + timedelta(seconds=self._ttl_seconds),
        )
        with self._lock:
            self._sweep(now)
            self._sessions[record.token] = record
        return record

    def get(self, token: str, now: datetime | None = None) -> SessionRecord | None:
        """Get a live session; expired records are purged."""
        if now is None:
            now = _utcnow()

        with self._lock:
            record = self._sessions.get(token)

            if record is None:
                return None

            # Check if expired
            if now > record.ttl_until:
                del self._sessions[token]
                return None

            return record

    def destroy(self, token: str) -> bool:
        """Invalidate a session."""
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def _sweep(self, now: datetime) -> None:
        expired = [token for token, record in self._sessions.items() if now > record.ttl_until]
        for token in expired:
            del self._sessions[token]
