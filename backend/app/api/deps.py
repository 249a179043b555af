"""Shared FastAPI dependencies: process-wide stores and path ID parsing."""

from functools import lru_cache

from backend.app.config import settings
from backend.app.db.inmemory import InMemorySessionStore, InMemoryStorage
from backend.app.db.repositories import SessionStore, Storage
from backend.app.errors import ValidationError


@lru_cache
def get_storage() -> Storage:
    """Get the process-wide entity store (built on first use)."""
    return InMemoryStorage()


@lru_cache
def get_session_store() -> SessionStore:
    """Get the process-wide session store."""
    return InMemorySessionStore(ttl_seconds=settings.session_ttl_hours * 3600)


def parse_id(raw: str, message: str) -> int:
    """Parse a numeric path ID.

    Args:
        raw: Path segment as received
        message: Error message when the segment is not a number

    Returns:
        Parsed ID

    Raises:
        ValidationError: If the segment is not made of ASCII digits
    """
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError(message)
    return int(raw)


async def document_id_param(id: str) -> int:
    """Path ``{id}`` parsed as a document ID."""
    return parse_id(id, "Invalid document ID")


async def suggestion_id_param(id: str) -> int:
    """Path ``{id}`` parsed as a suggestion ID."""
    return parse_id(id, "Invalid suggestion ID")
