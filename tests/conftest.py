"""Shared pytest fixtures for all test suites."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.app.api.deps import get_session_store, get_storage
from backend.app.db.inmemory import InMemorySessionStore, InMemoryStorage
from backend.app.errors import GenerationError
from backend.app.llm.client import get_llm_client
from backend.app.llm.prompts import default_suggestions
from backend.app.main import app
from backend.app.models.suggestions import SuggestionProposal

TEST_USERNAME = "writer"
TEST_PASSWORD = "correct-horse"


class FakeGenerator:
    """Scriptable ContentGenerator that records its calls."""

    def __init__(self) -> None:
        self.content = "Generated paragraph."
        self.suggestions: list[SuggestionProposal] | None = None
        self.content_error: Exception | None = None
        self.suggestions_error: Exception | None = None
        self.content_calls: list[tuple[str, str]] = []
        self.suggestion_calls: list[str] = []

    async def generate_content(self, *, document_content: str, prompt: str) -> str:
        self.content_calls.append((document_content, prompt))
        if self.content_error is not None:
            raise self.content_error
        return self.content

    async def generate_suggestions(self, *, document_content: str) -> list[SuggestionProposal]:
        self.suggestion_calls.append(document_content)
        if self.suggestions_error is not None:
            raise self.suggestions_error
        if self.suggestions is None:
            return default_suggestions()
        return self.suggestions


@pytest.fixture
def storage() -> InMemoryStorage:
    """Fresh entity store with its seed document."""
    return InMemoryStorage()


@pytest.fixture
def sessions() -> InMemorySessionStore:
    """Fresh session store."""
    return InMemorySessionStore(ttl_seconds=3600)


@pytest.fixture
def generator() -> FakeGenerator:
    """Scriptable generation gateway."""
    return FakeGenerator()


@pytest.fixture
def failing_generator(generator: FakeGenerator) -> FakeGenerator:
    """Generator whose content calls fail like an upstream outage."""
    generator.content_error = GenerationError("Failed to generate content. Please try again later.")
    return generator


@pytest.fixture
def client(
    storage: InMemoryStorage, sessions: InMemorySessionStore, generator: FakeGenerator
) -> Iterator[TestClient]:
    """Test client wired to per-test stores and the fake generator."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_session_store] = lambda: sessions
    app.dependency_overrides[get_llm_client] = lambda: generator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client: TestClient) -> TestClient:
    """Test client holding a logged-in session."""
    response = client.post(
        "/api/auth/register", json={"username": TEST_USERNAME, "password": TEST_PASSWORD}
    )
    assert response.status_code == 201

    response = client.post(
        "/api/auth/login", json={"username": TEST_USERNAME, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    return client
