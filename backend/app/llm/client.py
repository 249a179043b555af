"""LLM client for document content and suggestion generation.

Security: Reads API key from environment only, never hardcoded.
Provides a deterministic stub when no key is present, for local runs and tests.
"""

import json
import logging
import time
from functools import lru_cache
from typing import Any, Protocol

from openai import AsyncOpenAI
from pydantic import ValidationError as PydanticValidationError

from backend.app.config import settings
from backend.app.errors import GenerationError
from backend.app.llm.prompts import (
    CONTENT_SYSTEM_PROMPT,
    SUGGESTIONS_SYSTEM_PROMPT,
    build_content_message,
    build_suggestions_message,
    default_suggestions,
)
from backend.app.models.suggestions import SuggestionProposal
from backend.app.utils.logging import StructuredGenerationLogger
from backend.app.utils.metrics import PrometheusGenerationMetrics

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate content. Please try again later."


class ContentGenerator(Protocol):
    """Protocol for content generation backends."""

    async def generate_content(self, *, document_content: str, prompt: str) -> str:
        """Generate text that carries out an instruction against a document.

        Args:
            document_content: Current document text (may be empty)
            prompt: Natural-language instruction

        Returns:
            Generated text, never empty

        Raises:
            GenerationError: If generation fails; callers may retry
        """
        ...

    async def generate_suggestions(self, *, document_content: str) -> list[SuggestionProposal]:
        """Propose suggestion prompts for a document.

        Args:
            document_content: Current document text

        Returns:
            At least one proposal; the default list when nothing better is available
        """
        ...


def parse_suggestions(raw: str | None) -> list[SuggestionProposal]:
    """Parse a structured suggestions reply.

    Accepts a bare JSON list or an object with the list under ``"suggestions"``.
    Entries that do not validate are dropped.

    Args:
        raw: Raw JSON text from the model

    Returns:
        Valid proposals, possibly empty

    Raises:
        ValueError: If the text is not JSON
    """
    payload: Any = json.loads(raw or '{"suggestions": []}')

    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        items = payload.get("suggestions") or []
    else:
        items = []

    if not isinstance(items, list):
        return []

    proposals: list[SuggestionProposal] = []
    for item in items:
        try:
            proposals.append(SuggestionProposal.model_validate(item))
        except PydanticValidationError:
            logger.warning(f"Dropping malformed suggestion entry: {item!r:.200}")
    return proposals


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    async def generate_content(self, *, document_content: str, prompt: str) -> str:
        """Generate deterministic placeholder content."""
        word_count = len(document_content.split())
        return (
            f"## {prompt}\n\n"
            f"This is placeholder content for a document of {word_count} word(s).\n\n"
            f"*This is a stub response generated without an AI model.*"
        )

    async def generate_suggestions(self, *, document_content: str) -> list[SuggestionProposal]:
        """Return the default suggestion list."""
        return default_suggestions()


class OpenAIClient:
    """OpenAI-backed client for real generation."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        timeout_seconds: float = 30.0,
        max_tokens: int = 1000,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            timeout_seconds: Per-call upper bound; calls are never retried
            max_tokens: Completion cap for content generation
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        self.model = model
        self.max_tokens = max_tokens
        self.metrics = PrometheusGenerationMetrics()
        self.call_logger = StructuredGenerationLogger()

    async def generate_content(self, *, document_content: str, prompt: str) -> str:
        """Generate content using OpenAI API."""
        started = time.perf_counter()

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": CONTENT_SYSTEM_PROMPT},
                    {"role": "user", "content": build_content_message(document_content, prompt)},
                ],
                max_tokens=self.max_tokens,
            )
            content = response.choices[0].message.content or ""
        except Exception as e:
            self._record("generate_content", started, error_reason=type(e).__name__)
            logger.error(f"OpenAI content generation failed: {e}")
            raise GenerationError(GENERATION_FAILED) from e

        # Validation: an empty reply cannot mark a suggestion as generated
        if not content.strip():
            self._record("generate_content", started, error_reason="empty_response")
            logger.warning("OpenAI returned empty content")
            raise GenerationError(GENERATION_FAILED)

        self._record("generate_content", started)
        return content

    async def generate_suggestions(self, *, document_content: str) -> list[SuggestionProposal]:
        """Generate suggestions using OpenAI API, falling back to defaults."""
        if not document_content.strip():
            self.metrics.inc_fallback("blank_document")
            return default_suggestions()

        started = time.perf_counter()

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SUGGESTIONS_SYSTEM_PROMPT},
                    {"role": "user", "content": build_suggestions_message(document_content)},
                ],
                response_format={"type": "json_object"},
            )
            suggestions = parse_suggestions(response.choices[0].message.content)
        except Exception as e:
            self._record("generate_suggestions", started, error_reason=type(e).__name__)
            logger.error(f"OpenAI suggestion generation failed: {e}")
            logger.warning("Falling back to default suggestions")
            self.metrics.inc_fallback("error")
            return default_suggestions()

        self._record("generate_suggestions", started)

        if not suggestions:
            logger.warning("OpenAI returned no usable suggestions, using defaults")
            self.metrics.inc_fallback("empty")
            return default_suggestions()

        return suggestions

    async def close(self) -> None:
        """Close the SDK's HTTP connection pool."""
        await self.client.close()

    def _record(self, operation: str, started: float, error_reason: str | None = None) -> None:
        """Log and meter one upstream call."""
        latency_ms = (time.perf_counter() - started) * 1000
        outcome = "error" if error_reason else "success"

        self.metrics.record_latency(operation, outcome, latency_ms)
        if error_reason:
            self.metrics.inc_error(operation, error_reason)

        self.call_logger.log_call(
            operation, outcome, latency_ms, model=self.model, error_reason=error_reason
        )


@lru_cache
def get_llm_client() -> ContentGenerator:
    """Get the process-wide generation client (built on first use).

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            timeout_seconds=settings.openai_timeout_seconds,
            max_tokens=settings.openai_max_tokens,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()


async def close_llm_client() -> None:
    """Release the cached client's connection pool, if one was built."""
    if get_llm_client.cache_info().currsize == 0:
        return

    client = get_llm_client()
    get_llm_client.cache_clear()
    if isinstance(client, OpenAIClient):
        await client.close()
