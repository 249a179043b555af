"""Document domain models."""

from datetime import datetime
from typing import Any

from backend.app.models.common import ApiModel

DEFAULT_TITLE = "Untitled"


class Document(ApiModel):
    """A writable document."""

    id: int
    title: str = DEFAULT_TITLE
    content: str = ""
    user_id: int | None = None
    last_modified: datetime


class DocumentCreate(ApiModel):
    """Fields accepted when creating a document."""

    title: str = ""
    content: str = ""
    user_id: int | None = None


class DocumentUpdate(ApiModel):
    """Partial document update; only fields present in the body are applied."""

    title: str | None = None
    content: str | None = None
    user_id: int | None = None

    def changes(self) -> dict[str, Any]:
        """Return the fields the client actually sent.

        An explicit null for title or content means "leave unchanged";
        an explicit null owner detaches the document.
        """
        fields = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in fields.items()
            if value is not None or key == "user_id"
        }
