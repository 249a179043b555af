"""Document endpoints - CRUD plus per-document suggestion listing and generation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from backend.app.api.auth import get_current_user_id
from backend.app.api.deps import document_id_param, get_storage
from backend.app.db.repositories import Storage
from backend.app.errors import AppError, GenerationError, NotFoundError
from backend.app.llm.client import ContentGenerator, get_llm_client
from backend.app.models.documents import Document, DocumentCreate, DocumentUpdate
from backend.app.models.suggestions import Suggestion, SuggestionCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _require_document(storage: Storage, document_id: int) -> Document:
    document = storage.get_document(document_id)
    if document is None:
        raise NotFoundError("Document not found")
    return document


@router.get("", response_model=list[Document])
async def list_documents(
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> list[Document]:
    """List all documents."""
    return storage.get_all_documents()


@router.get("/{id}", response_model=Document)
async def get_document(
    document_id: Annotated[int, Depends(document_id_param)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> Document:
    """Get a document by ID (public)."""
    return _require_document(storage, document_id)


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: DocumentCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> Document:
    """Create a document.

    The owner defaults to the logged-in user unless the body names one.
    """
    if "user_id" not in request.model_fields_set:
        request = request.model_copy(update={"user_id": user_id})

    document = storage.create_document(request)
    logger.info(f"Created document {document.id}")
    return document


@router.patch("/{id}", response_model=Document)
async def update_document(
    document_id: Annotated[int, Depends(document_id_param)],
    request: DocumentUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> Document:
    """Apply a partial update to a document."""
    _require_document(storage, document_id)

    updated = storage.update_document(document_id, request.changes())
    if updated is None:
        raise NotFoundError("Document not found")
    return updated


@router.get("/{id}/suggestions", response_model=list[Suggestion])
async def list_suggestions(
    document_id: Annotated[int, Depends(document_id_param)],
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> list[Suggestion]:
    """List the current suggestion batch for a document."""
    _require_document(storage, document_id)
    return storage.get_suggestions(document_id)


@router.post("/{id}/generate-suggestions", response_model=list[Suggestion])
async def generate_suggestions(
    document_id: Annotated[int, Depends(document_id_param)],
    user_id: Annotated[int, Depends(get_current_user_id)],
    storage: Annotated[Storage, Depends(get_storage)],
    llm: Annotated[ContentGenerator, Depends(get_llm_client)],
) -> list[Suggestion]:
    """Generate a fresh suggestion batch, replacing the previous one.

    Returns:
        The new batch; none of the previous suggestion IDs survive
    """
    document = _require_document(storage, document_id)

    try:
        proposals = await llm.generate_suggestions(document_content=document.content)
        saved = storage.replace_suggestions(
            document_id,
            [
                SuggestionCreate(
                    document_id=document_id,
                    prompt=proposal.prompt,
                    description=proposal.description,
                    position=proposal.position,
                )
                for proposal in proposals
            ],
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"Generating suggestions for document {document_id} failed")
        raise GenerationError("Failed to generate suggestions") from e

    logger.info(f"Stored {len(saved)} suggestions for document {document_id}")
    return saved
