"""Prompt text and the fixed default suggestion list."""

from backend.app.models.common import SuggestionPosition
from backend.app.models.suggestions import SuggestionProposal

CONTENT_SYSTEM_PROMPT = (
    "You are a helpful writing assistant that generates high-quality content based on "
    "the user's current document and prompt. Provide thorough, well-structured responses "
    "that match the style and tone of the user's existing content."
)

SUGGESTIONS_SYSTEM_PROMPT = (
    "You are a helpful writing assistant that generates suggestion prompts based on the "
    "user's current document content. Generate prompts that would help the user expand, "
    "refine, or improve their document."
)

_DEFAULT_SUGGESTIONS: tuple[tuple[str, str, SuggestionPosition], ...] = (
    (
        "Generate an interesting project idea and draft an outline",
        "Get a complete project concept with structure",
        SuggestionPosition.left,
    ),
    (
        "Create a pros and cons list for this idea",
        "Evaluate the feasibility of your concept",
        SuggestionPosition.left,
    ),
    (
        "Suggest a timeline for development",
        "Break down implementation steps",
        SuggestionPosition.right,
    ),
    (
        "List potential user personas for this product",
        "Understanding your target audience",
        SuggestionPosition.right,
    ),
    (
        "Brainstorm potential monetization strategies",
        "Explore business model options",
        SuggestionPosition.right,
    ),
)


def default_suggestions() -> list[SuggestionProposal]:
    """Fresh copy of the default suggestion list."""
    return [
        SuggestionProposal(prompt=prompt, description=description, position=position)
        for prompt, description, position in _DEFAULT_SUGGESTIONS
    ]


def build_content_message(document_content: str, prompt: str) -> str:
    """User message asking for content that follows an instruction."""
    basis = "content" if document_content.strip() else "empty document"
    return (
        f"Current document content:\n{document_content}\n\n"
        f"Based on this {basis}, please {prompt}\n\n"
        "Format your response appropriately with line breaks, lists, and proper "
        "paragraph structure as needed."
    )


def build_suggestions_message(document_content: str) -> str:
    """User message asking for a JSON list of suggestion prompts."""
    return f"""Based on the following document content, generate 4-6 suggestion prompts that would help the user expand, refine, or improve their document.
These should be creative and specific to the content.

Document content:
{document_content}

Respond with a JSON object in the following format:
{{
  "suggestions": [
    {{
      "prompt": "Short prompt text (e.g., 'Generate a timeline for project implementation')",
      "description": "Brief explanation of what this will do",
      "position": "left or right - left for expanding ideas, right for refining content"
    }}
  ]
}}"""
