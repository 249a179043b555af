"""Unit tests for UI helper functions."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ui.helpers import (
    ApiError,
    DocumentDraft,
    WritingAssistantClient,
    accept_suggestion,
    apply_suggestion,
    should_auto_generate,
    split_by_position,
)


class FakeTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.started and not self.cancelled:
            self.callback()


class TimerRecorder:
    """Timer factory that keeps every timer it builds."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def latest(self) -> FakeTimer:
        return self.timers[-1]


DOCUMENT = {"id": 1, "title": "Untitled", "content": "Hello", "userId": None}


def _make_draft(
    persist: Callable[[dict[str, Any]], dict[str, Any]],
) -> tuple[DocumentDraft, TimerRecorder]:
    timers = TimerRecorder()
    draft = DocumentDraft(dict(DOCUMENT), persist=persist, quiet_period=1.0, timer_factory=timers)
    return draft, timers


def test_apply_suggestion_add_appends_with_blank_line() -> None:
    """Test add mode."""
    assert apply_suggestion("Old text", "New text", "add") == "Old text\n\nNew text"


def test_apply_suggestion_replace_swaps_content() -> None:
    """Test replace mode."""
    assert apply_suggestion("Old text", "New text", "replace") == "New text"


def test_apply_suggestion_unknown_mode() -> None:
    """Test that unknown modes are rejected."""
    with pytest.raises(ValueError):
        apply_suggestion("a", "b", "merge")  # type: ignore[arg-type]


def test_split_by_position() -> None:
    """Test that cards are split into left and right panels."""
    suggestions = [
        {"id": 1, "position": "left"},
        {"id": 2, "position": "right"},
        {"id": 3, "position": "left"},
        {"id": 4},
    ]

    left, right = split_by_position(suggestions)

    assert [s["id"] for s in left] == [1, 3]
    assert [s["id"] for s in right] == [2, 4]


def test_should_auto_generate() -> None:
    """Test auto-generation only for non-blank documents without cards."""
    assert should_auto_generate("Some text", []) is True
    assert should_auto_generate("   ", []) is False
    assert should_auto_generate("Some text", [{"id": 1}]) is False


def test_draft_update_is_local_until_quiet_period() -> None:
    """Test that edits apply locally and are not sent immediately."""
    sent: list[dict[str, Any]] = []
    draft, timers = _make_draft(lambda fields: sent.append(fields) or {**DOCUMENT, **fields})

    draft.update(content="Hello world")

    assert draft.content == "Hello world"
    assert draft.confirmed["content"] == "Hello"
    assert draft.dirty is True
    assert sent == []
    assert timers.latest.interval == 1.0


def test_draft_debounce_resets_instead_of_stacking() -> None:
    """Test that a burst of edits produces one write with the merged fields."""
    sent: list[dict[str, Any]] = []
    draft, timers = _make_draft(lambda fields: sent.append(fields) or {**DOCUMENT, **fields})

    draft.update(content="H")
    draft.update(title="My essay")
    draft.update(content="Hi")

    assert len(timers.timers) == 3
    assert all(t.cancelled for t in timers.timers[:-1])

    for timer in timers.timers:
        timer.fire()

    assert sent == [{"content": "Hi", "title": "My essay"}]
    assert draft.confirmed["title"] == "My essay"
    assert draft.dirty is False


def test_draft_single_write_in_flight_queues_one_follow_up() -> None:
    """Test that edits during a write trigger exactly one follow-up write."""
    sent: list[dict[str, Any]] = []
    draft_box: dict[str, Any] = {}

    def persist(fields: dict[str, Any]) -> dict[str, Any]:
        sent.append(fields)
        if len(sent) == 1:
            # User keeps typing while the first save is on the wire
            draft = draft_box["draft"]
            draft.update(content="second")
            draft_box["timers"].latest.fire()
            draft.update(content="third")
            draft_box["timers"].latest.fire()
        return {**DOCUMENT, **fields}

    draft, timers = _make_draft(persist)
    draft_box.update(draft=draft, timers=timers)

    draft.update(content="first")
    timers.latest.fire()

    assert sent == [{"content": "first"}, {"content": "third"}]
    assert draft.content == "third"
    assert draft.confirmed["content"] == "third"
    assert draft.dirty is False


def test_draft_failed_write_keeps_fields_pending() -> None:
    """Test that a failed save is not retried automatically but is resent on flush."""
    calls: list[dict[str, Any]] = []

    def persist(fields: dict[str, Any]) -> dict[str, Any]:
        calls.append(fields)
        if len(calls) == 1:
            raise ApiError(500, "boom")
        return {**DOCUMENT, **fields}

    draft, timers = _make_draft(persist)

    draft.update(title="Kept", content="v1")
    timers.latest.fire()

    assert len(calls) == 1
    assert isinstance(draft.last_error, ApiError)
    assert draft.dirty is True

    draft.update(content="v2")
    draft.flush()

    assert calls[1] == {"title": "Kept", "content": "v2"}
    assert draft.last_error is None
    assert draft.dirty is False


def test_draft_flush_without_edits_is_noop() -> None:
    """Test that flushing a clean draft sends nothing."""
    sent: list[dict[str, Any]] = []
    draft, _ = _make_draft(lambda fields: sent.append(fields) or DOCUMENT)

    draft.flush()

    assert sent == []


def test_draft_close_cancels_timer() -> None:
    """Test that close stops a scheduled write."""
    sent: list[dict[str, Any]] = []
    draft, timers = _make_draft(lambda fields: sent.append(fields) or DOCUMENT)

    draft.update(content="unsaved")
    draft.close()
    timers.latest.fire()

    assert sent == []
    assert draft.content == "unsaved"


class FakeApiClient:
    """Stands in for WritingAssistantClient in acceptance tests."""

    def __init__(self, generated_content: str) -> None:
        self.generated_content = generated_content
        self.generate_calls: list[int] = []

    def generate_suggestion_content(self, suggestion_id: int) -> dict[str, Any]:
        self.generate_calls.append(suggestion_id)
        return {
            "id": suggestion_id,
            "generated": True,
            "generatedContent": self.generated_content,
        }


def test_accept_ungenerated_suggestion_add_mode() -> None:
    """Test that accepting generates first, then appends."""
    api = FakeApiClient("Generated section")
    draft, timers = _make_draft(lambda fields: {**DOCUMENT, **fields})
    suggestion = {"id": 5, "generated": False, "generatedContent": ""}

    updated = accept_suggestion(api, draft, suggestion, "add")  # type: ignore[arg-type]

    assert api.generate_calls == [5]
    assert updated["generated"] is True
    assert draft.content == "Hello\n\nGenerated section"
    assert timers.latest.started


def test_accept_ungenerated_suggestion_replace_mode() -> None:
    """Test that replace mode swaps the whole document."""
    api = FakeApiClient("Fresh draft")
    draft, _ = _make_draft(lambda fields: {**DOCUMENT, **fields})

    accept_suggestion(api, draft, {"id": 6, "generated": False}, "replace")  # type: ignore[arg-type]

    assert draft.content == "Fresh draft"


def test_accept_generated_suggestion_skips_generation() -> None:
    """Test that already-generated content is reused."""
    api = FakeApiClient("unused")
    draft, _ = _make_draft(lambda fields: {**DOCUMENT, **fields})
    suggestion = {"id": 7, "generated": True, "generatedContent": "Cached"}

    accept_suggestion(api, draft, suggestion, "add")  # type: ignore[arg-type]

    assert api.generate_calls == []
    assert draft.content == "Hello\n\nCached"


def test_client_raises_api_error_with_message() -> None:
    """Test that error bodies become ApiError messages."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Document not found"})

    client = WritingAssistantClient("http://testserver", transport=httpx.MockTransport(handler))

    with pytest.raises(ApiError) as exc_info:
        client.get_document(9)

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Document not found"


def test_client_sends_partial_update() -> None:
    """Test that update_document issues a PATCH with the given fields."""
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": 3, "content": "Hi"})

    client = WritingAssistantClient("http://testserver", transport=httpx.MockTransport(handler))

    result = client.update_document(3, {"content": "Hi"})

    assert seen["method"] == "PATCH"
    assert seen["path"] == "/api/documents/3"
    assert seen["body"] == {"content": "Hi"}
    assert result["content"] == "Hi"
