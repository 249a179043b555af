"""Helper functions for UI - API client, debounced document drafts, suggestion acceptance."""

import logging
import threading
from collections.abc import Callable
from typing import Any, Literal, Protocol

import httpx

logger = logging.getLogger(__name__)

# Quiet period before a burst of edits is persisted
DEBOUNCE_SECONDS = 1.0

SEPARATOR = "\n\n"


class ApiError(Exception):
    """Non-2xx response from the backend."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class WritingAssistantClient:
    """Thin HTTP client for the backend; keeps the session cookie between calls."""

    def __init__(
        self,
        backend_url: str,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            backend_url: Backend base URL (e.g. http://localhost:8000)
            timeout: Per-request timeout in seconds (generation can be slow)
            transport: Optional transport override (tests)
        """
        self._http = httpx.Client(base_url=backend_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = self._http.request(method, path, json=json)
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    # Auth

    def register(self, username: str, password: str) -> dict[str, Any]:
        """Create an account."""
        return self._request(
            "POST", "/api/auth/register", {"username": username, "password": password}
        )

    def login(self, username: str, password: str) -> dict[str, Any]:
        """Log in; the session cookie is kept on this client."""
        return self._request("POST", "/api/auth/login", {"username": username, "password": password})

    def logout(self) -> None:
        """Log out and drop the session cookie."""
        self._request("POST", "/api/auth/logout")
        self._http.cookies.clear()

    def me(self) -> dict[str, Any]:
        """Return the logged-in user."""
        return self._request("GET", "/api/auth/me")

    # Documents

    def list_documents(self) -> list[dict[str, Any]]:
        """List all documents."""
        return self._request("GET", "/api/documents")

    def get_document(self, document_id: int) -> dict[str, Any]:
        """Get one document."""
        return self._request("GET", f"/api/documents/{document_id}")

    def create_document(self, title: str = "", content: str = "") -> dict[str, Any]:
        """Create a document."""
        return self._request("POST", "/api/documents", {"title": title, "content": content})

    def update_document(self, document_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update."""
        return self._request("PATCH", f"/api/documents/{document_id}", fields)

    # Suggestions

    def get_suggestions(self, document_id: int) -> list[dict[str, Any]]:
        """List the current suggestion batch."""
        return self._request("GET", f"/api/documents/{document_id}/suggestions")

    def generate_suggestions(self, document_id: int) -> list[dict[str, Any]]:
        """Replace the suggestion batch with a freshly generated one."""
        return self._request("POST", f"/api/documents/{document_id}/generate-suggestions")

    def generate_suggestion_content(self, suggestion_id: int) -> dict[str, Any]:
        """Generate the content for one suggestion."""
        return self._request("POST", f"/api/suggestions/{suggestion_id}/generate")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return response.reason_phrase


class Timer(Protocol):
    """Cancellable one-shot timer (``threading.Timer`` satisfies this)."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def _thread_timer(interval: float, callback: Callable[[], None]) -> Timer:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class DocumentDraft:
    """Local optimistic copy of a document with debounced write-back.

    Edits apply to the local title/content immediately. Their fields are
    merged into one pending write that is sent after a quiet period; each
    edit resets the timer instead of stacking another. At most one write is
    in flight. Edits landing during a flight queue a single follow-up write.
    """

    def __init__(
        self,
        document: dict[str, Any],
        persist: Callable[[dict[str, Any]], dict[str, Any]],
        quiet_period: float = DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = _thread_timer,
    ) -> None:
        """Initialize draft.

        Args:
            document: Server-confirmed document (API JSON shape)
            persist: Sends a partial update and returns the stored document
            quiet_period: Seconds without edits before persisting
            timer_factory: Builds the debounce timer
        """
        self._lock = threading.Lock()
        self._persist = persist
        self._quiet_period = quiet_period
        self._timer_factory = timer_factory

        self.document_id: int = document["id"]
        self.confirmed: dict[str, Any] = dict(document)
        self.title: str = document.get("title", "")
        self.content: str = document.get("content", "")
        self.last_error: Exception | None = None

        self._pending: dict[str, Any] = {}
        self._timer: Timer | None = None
        self._in_flight = False
        self._follow_up = False

    @property
    def dirty(self) -> bool:
        """True while some local edit has not been confirmed by the server."""
        with self._lock:
            return bool(self._pending) or self._in_flight

    def update(self, **fields: Any) -> None:
        """Apply an edit locally and (re)schedule the write."""
        with self._lock:
            if "title" in fields:
                self.title = fields["title"]
            if "content" in fields:
                self.content = fields["content"]

            self._pending.update(fields)

            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self._quiet_period, self._on_quiet)
            self._timer.start()

    def flush(self) -> None:
        """Write pending edits now instead of waiting for the quiet period."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._write()

    def close(self) -> None:
        """Cancel the pending timer; unsent edits stay in the draft."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _on_quiet(self) -> None:
        with self._lock:
            self._timer = None
        self._write()

    def _write(self) -> None:
        with self._lock:
            if self._in_flight:
                self._follow_up = True
                return
            if not self._pending:
                return
            payload, self._pending = self._pending, {}
            self._in_flight = True

        while True:
            try:
                stored = self._persist(payload)
            except Exception as e:
                logger.warning(f"Saving document {self.document_id} failed: {e}")
                with self._lock:
                    # Newer edits win over the fields that failed to save
                    self._pending = {**payload, **self._pending}
                    self.last_error = e
                    self._in_flight = False
                    self._follow_up = False
                return

            with self._lock:
                self.confirmed = stored
                self.last_error = None
                if self._follow_up and self._pending:
                    self._follow_up = False
                    payload, self._pending = self._pending, {}
                    continue
                self._follow_up = False
                self._in_flight = False
                return


def apply_suggestion(content: str, generated_content: str, mode: Literal["add", "replace"]) -> str:
    """Merge generated content into a document.

    Args:
        content: Current document content
        generated_content: Content produced for the suggestion
        mode: "add" appends after a blank line, "replace" swaps the whole document

    Returns:
        New document content
    """
    if mode == "add":
        return content + SEPARATOR + generated_content
    if mode == "replace":
        return generated_content
    raise ValueError(f"Unknown accept mode: {mode}")


def accept_suggestion(
    client: WritingAssistantClient,
    draft: DocumentDraft,
    suggestion: dict[str, Any],
    mode: Literal["add", "replace"],
) -> dict[str, Any]:
    """Accept a suggestion card into the draft.

    Generates the suggestion's content first when it has not been generated
    yet, then applies it and schedules the usual debounced save.

    Returns:
        The (possibly freshly generated) suggestion
    """
    if not suggestion.get("generated"):
        suggestion = client.generate_suggestion_content(suggestion["id"])

    draft.update(content=apply_suggestion(draft.content, suggestion["generatedContent"], mode))
    return suggestion


def split_by_position(
    suggestions: list[dict[str, Any]],
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Split suggestions into (left, right) panels; unknown positions go right."""
    left = [s for s in suggestions if s.get("position") == "left"]
    right = [s for s in suggestions if s.get("position") != "left"]
    return left, right


def should_auto_generate(content: str, suggestions: list[dict[str, Any]]) -> bool:
    """Ask for suggestions automatically once a document has text but no cards."""
    return bool(content.strip()) and not suggestions
