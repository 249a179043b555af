"""Streamlit UI for the AI writing assistant - editor with suggestion panels.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Any  # noqa: E402

import streamlit as st  # noqa: E402

from ui.helpers import (  # noqa: E402
    ApiError,
    DocumentDraft,
    WritingAssistantClient,
    accept_suggestion,
    should_auto_generate,
    split_by_position,
)

# Configuration
BACKEND_URL = "http://localhost:8000"

# Page config
st.set_page_config(
    page_title="AI Writing Assistant",
    page_icon="✍️",
    layout="wide",
)

# Initialize session state
if "client" not in st.session_state:
    st.session_state.client = WritingAssistantClient(BACKEND_URL)
if "user" not in st.session_state:
    st.session_state.user = None
if "document_id" not in st.session_state:
    st.session_state.document_id = 1
if "draft" not in st.session_state:
    st.session_state.draft = None
if "suggestions" not in st.session_state:
    st.session_state.suggestions = None

client: WritingAssistantClient = st.session_state.client


def _content_key(document_id: int) -> str:
    return f"content_{document_id}"


def _title_key(document_id: int) -> str:
    return f"title_{document_id}"


def open_document(document_id: int) -> None:
    """Switch the editor to another document, saving the current draft first."""
    draft: DocumentDraft | None = st.session_state.draft
    if draft is not None:
        draft.flush()
        draft.close()

    document = client.get_document(document_id)
    draft = DocumentDraft(
        document,
        persist=lambda fields: client.update_document(document_id, fields),
    )
    st.session_state.document_id = document_id
    st.session_state.draft = draft
    st.session_state.suggestions = client.get_suggestions(document_id)
    st.session_state[_content_key(document_id)] = draft.content
    st.session_state[_title_key(document_id)] = draft.title


def refresh_suggestions(toast: bool = True) -> None:
    """Regenerate the suggestion batch for the open document."""
    try:
        st.session_state.suggestions = client.generate_suggestions(st.session_state.document_id)
        if toast:
            st.toast("Generated new suggestions - check out the suggestion panels for new ideas")
    except ApiError as e:
        st.toast(f"Failed to generate suggestions: {e.message}", icon="⚠️")


def on_title_change() -> None:
    draft: DocumentDraft = st.session_state.draft
    draft.update(title=st.session_state[_title_key(draft.document_id)])


def on_content_change() -> None:
    draft: DocumentDraft = st.session_state.draft
    draft.update(content=st.session_state[_content_key(draft.document_id)])


def on_accept(suggestion: dict[str, Any], mode: str) -> None:
    """Accept a suggestion card into the document."""
    draft: DocumentDraft = st.session_state.draft
    try:
        updated = accept_suggestion(client, draft, suggestion, mode)  # type: ignore[arg-type]
    except ApiError as e:
        st.toast(f"Failed to generate content: {e.message}", icon="⚠️")
        return

    st.session_state.suggestions = [
        updated if s["id"] == updated["id"] else s for s in st.session_state.suggestions
    ]
    st.session_state[_content_key(draft.document_id)] = draft.content
    if mode == "add":
        st.toast("Content added - AI-generated content has been added to your document")
    else:
        st.toast("Content replaced - AI-generated content has replaced your document")


def render_suggestion_panel(suggestions: list[dict[str, Any]], label: str) -> None:
    """Render one column of suggestion cards."""
    st.subheader(label)
    if not suggestions:
        st.caption("_No suggestions yet_")
        return

    for suggestion in suggestions:
        with st.container(border=True):
            st.markdown(f"**{suggestion['prompt']}**")
            if suggestion.get("description"):
                st.caption(suggestion["description"])
            if suggestion.get("generated"):
                with st.expander("Preview"):
                    st.markdown(suggestion["generatedContent"])

            col_add, col_replace = st.columns(2)
            col_add.button(
                "Add",
                key=f"add_{suggestion['id']}",
                on_click=on_accept,
                args=(suggestion, "add"),
                use_container_width=True,
            )
            col_replace.button(
                "Replace",
                key=f"replace_{suggestion['id']}",
                on_click=on_accept,
                args=(suggestion, "replace"),
                use_container_width=True,
            )


# =============================================================================
# LOGIN / REGISTER
# =============================================================================
if st.session_state.user is None:
    st.title("✍️ AI Writing Assistant")

    tab_login, tab_register = st.tabs(["Log in", "Register"])

    with tab_login:
        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Log in", type="primary")

        if submitted:
            if not username or not password:
                st.error("Please enter both username and password")
            else:
                try:
                    st.session_state.user = client.login(username, password)
                    open_document(st.session_state.document_id)
                    st.rerun()
                except ApiError as e:
                    st.error(e.message or "Invalid username or password")

    with tab_register:
        with st.form("register_form"):
            new_username = st.text_input("Username")
            new_password = st.text_input("Password", type="password")
            confirm_password = st.text_input("Confirm password", type="password")
            registered = st.form_submit_button("Create account", type="primary")

        if registered:
            errors = []
            if not new_username or not new_password or not confirm_password:
                errors.append("All fields are required")
            if new_password != confirm_password:
                errors.append("Passwords do not match")
            if len(new_password) < 8:
                errors.append("Password must be at least 8 characters")

            if errors:
                st.error(" | ".join(errors))
            else:
                try:
                    client.register(new_username, new_password)
                    st.success("Account created - you can log in now")
                except ApiError as e:
                    st.error(e.message)

    st.stop()

# =============================================================================
# SIDEBAR - DOCUMENTS
# =============================================================================
with st.sidebar:
    st.markdown(f"Signed in as **{st.session_state.user['username']}**")

    if st.button("➕ New document", use_container_width=True):
        try:
            created = client.create_document()
            open_document(created["id"])
            st.rerun()
        except ApiError as e:
            st.error(e.message)

    st.divider()
    st.markdown("#### Documents")
    try:
        for doc in client.list_documents():
            label = doc["title"] or "Untitled"
            if doc["id"] == st.session_state.document_id:
                label = f"▶ {label}"
            if st.button(label, key=f"doc_{doc['id']}", use_container_width=True):
                open_document(doc["id"])
                st.rerun()
    except ApiError as e:
        st.error(e.message)

    st.divider()
    if st.button("Log out", use_container_width=True):
        if st.session_state.draft is not None:
            st.session_state.draft.flush()
            st.session_state.draft.close()
        client.logout()
        st.session_state.user = None
        st.session_state.draft = None
        st.session_state.suggestions = None
        st.rerun()

if st.session_state.draft is None:
    try:
        open_document(st.session_state.document_id)
    except ApiError as e:
        st.error(f"Could not open document: {e.message}")
        st.stop()

draft: DocumentDraft = st.session_state.draft

# Header
col_title, col_action = st.columns([4, 1])
with col_title:
    st.caption("AI Writing Assistant")
with col_action:
    st.button(
        "New Suggestions",
        on_click=refresh_suggestions,
        use_container_width=True,
    )

if should_auto_generate(draft.content, st.session_state.suggestions or []):
    refresh_suggestions(toast=False)

if draft.last_error is not None:
    st.warning(f"Unsaved changes: {draft.last_error}")

# Main layout - editor between the two suggestion panels
col_left, col_center, col_right = st.columns([1, 2, 1])
left_suggestions, right_suggestions = split_by_position(st.session_state.suggestions or [])

with col_left:
    render_suggestion_panel(left_suggestions, "💡 Expand")

with col_center:
    st.text_input(
        "Title",
        key=_title_key(draft.document_id),
        on_change=on_title_change,
        label_visibility="collapsed",
        placeholder="Untitled",
    )
    st.text_area(
        "Content",
        key=_content_key(draft.document_id),
        on_change=on_content_change,
        height=560,
        label_visibility="collapsed",
        placeholder="Start writing...",
    )
    st.caption("Saving..." if draft.dirty else "All changes saved")

with col_right:
    render_suggestion_panel(right_suggestions, "✏️ Refine")
