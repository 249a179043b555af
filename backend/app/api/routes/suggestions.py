"""Suggestion endpoints - on-demand content generation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from backend.app.api.auth import get_current_user_id
from backend.app.api.deps import get_storage, suggestion_id_param
from backend.app.db.repositories import Storage
from backend.app.errors import NotFoundError
from backend.app.llm.client import ContentGenerator, get_llm_client
from backend.app.models.suggestions import Suggestion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/suggestions", tags=["suggestions"])


@router.post("/{id}/generate", response_model=Suggestion)
async def generate_suggestion_content(
    suggestion_id: Annotated[int, Depends(suggestion_id_param)],
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
    llm: Annotated[ContentGenerator, Depends(get_llm_client)],
) -> Suggestion:
    """Generate the content for a suggestion.

    The suggestion is marked generated only after the gateway succeeds; a
    failed call leaves it untouched so the client can retry.
    """
    suggestion = storage.get_suggestion(suggestion_id)
    if suggestion is None:
        raise NotFoundError("Suggestion not found")

    document = storage.get_document(suggestion.document_id)
    if document is None:
        raise NotFoundError("Document not found")

    generated_content = await llm.generate_content(
        document_content=document.content,
        prompt=suggestion.prompt,
    )

    updated = storage.update_suggestion(
        suggestion_id,
        {"generated": True, "generated_content": generated_content},
    )
    # Regenerating the batch during the upstream call removes this suggestion
    if updated is None:
        raise NotFoundError("Suggestion not found")

    logger.info(f"Generated content for suggestion {suggestion_id}")
    return updated
