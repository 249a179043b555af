"""Suggestion domain models."""

from typing import Any

from pydantic import Field, field_validator

from backend.app.models.common import ApiModel, SuggestionPosition


class Suggestion(ApiModel):
    """A suggestion card attached to a document."""

    id: int
    document_id: int
    prompt: str
    description: str = ""
    position: SuggestionPosition = SuggestionPosition.right
    generated: bool = False
    generated_content: str = ""


class SuggestionCreate(ApiModel):
    """Fields accepted when storing a new suggestion."""

    document_id: int
    prompt: str
    description: str = ""
    position: SuggestionPosition = SuggestionPosition.right


class SuggestionProposal(ApiModel):
    """Suggestion as produced by the generation gateway, before storage."""

    prompt: str = Field(..., min_length=1)
    description: str = ""
    position: SuggestionPosition = SuggestionPosition.right

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: Any) -> str:
        """Treat a missing description as empty."""
        return "" if v is None else str(v)

    @field_validator("position", mode="before")
    @classmethod
    def normalize_position(cls, v: Any) -> SuggestionPosition:
        """Map anything that is not left/right onto right."""
        if isinstance(v, str) and v.strip().lower() == "left":
            return SuggestionPosition.left
        return SuggestionPosition.right
