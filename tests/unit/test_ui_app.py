"""Tests for the Streamlit editor page, with the backend client patched out."""

from pathlib import Path
from typing import Any

import pytest
from streamlit.testing.v1 import AppTest

from ui.helpers import ApiError, WritingAssistantClient

APP_PATH = str(Path(__file__).resolve().parents[2] / "ui" / "app.py")

USER = {"id": 1, "username": "alice"}


def _missing_document(self: WritingAssistantClient, document_id: int) -> dict[str, Any]:
    raise ApiError(404, "Document not found")


@pytest.fixture
def backend_without_documents(monkeypatch: pytest.MonkeyPatch) -> None:
    """Backend whose login works but whose documents cannot be opened."""
    monkeypatch.setattr(WritingAssistantClient, "login", lambda self, u, p: USER)
    monkeypatch.setattr(WritingAssistantClient, "list_documents", lambda self: [])
    monkeypatch.setattr(WritingAssistantClient, "get_document", _missing_document)
    monkeypatch.setattr(WritingAssistantClient, "get_suggestions", lambda self, i: [])


def test_login_with_unopenable_document_shows_error(backend_without_documents: None) -> None:
    """Test that a failed document load after login is reported, not raised."""
    at = AppTest.from_file(APP_PATH)
    at.run()

    at.text_input[0].input("alice")
    at.text_input[1].input("password123")
    at.button[0].click()
    at.run()

    assert not at.exception
    assert any("Document not found" in e.value for e in at.error)
    assert at.session_state["user"] == USER


def test_logged_in_page_with_unopenable_document_shows_error(
    backend_without_documents: None,
) -> None:
    """Test that the editor reports a missing document instead of crashing."""
    at = AppTest.from_file(APP_PATH)
    at.session_state["user"] = USER
    at.session_state["document_id"] = 42
    at.run()

    assert not at.exception
    assert [e.value for e in at.error] == ["Could not open document: Document not found"]
    assert at.session_state["draft"] is None
