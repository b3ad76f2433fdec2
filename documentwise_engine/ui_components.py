"""
Reusable UI Components for Streamlit Pages
Provides consistent UI elements across all DocumentWise pages.

Version: 1.2.0
Date: 2026-09-26
"""

import base64
from typing import List, Optional

import streamlit as st
import streamlit.components.v1 as components

from .chat import ChatThread
from .exceptions import ConfigurationError
from .models import Document, Proposal, Signature
from .presentation import (
    TONES,
    analysis_status_label,
    format_confidence,
    format_date,
)
from .proposal_store import ProposalStore
from .refresh import EXTRACTION_REFRESH_SECONDS, DelayedRefresh
from .utils import get_logger
from .version_config import get_version_footer
from .viewer import HTML_MODE_IFRAME, HTML_MODE_INLINE, DocumentViewer
from . import session

logger = get_logger(__name__)

PAGE_IMAGE_WIDTH = 800
PAGE_VIEW_HEIGHT = 900


def status_badge(label: str, tone: str) -> str:
    """Markdown for a coloured status label."""
    emoji, colour = TONES.get(tone, TONES["neutral"])
    return f":{colour}[{emoji} **{label}**]"


def page_header(title: str, description: Optional[str] = None) -> None:
    st.title(title)
    if description:
        st.caption(description)


def render_version_footer() -> None:
    st.divider()
    st.caption(get_version_footer())


def render_loading_placeholders(count: int = 3, height: int = 80) -> None:
    """Empty bordered blocks shown while data loads."""
    for _ in range(count):
        st.container(border=True, height=height)


def render_error(message: str, title: str = "Error") -> None:
    st.error(f"**{title}**\n\n{message}")


def render_config_error(error: ConfigurationError) -> None:
    render_error(
        f"{error}. Add the missing values to your environment or to config.env and restart the app.",
        title="Configuration Error",
    )


def render_recent_proposals_sidebar(proposals: List[Proposal], current_id: Optional[int] = None, limit: int = 8) -> None:
    with st.sidebar:
        st.subheader("Recent Proposals")
        if not proposals:
            st.caption("No proposals yet.")
            return
        recent = sorted(proposals, key=lambda p: p.created_at, reverse=True)[:limit]
        for proposal in recent:
            label = f"📁 {proposal.name}"
            if st.button(
                label,
                key=f"sidebar_proposal_{proposal.id}",
                use_container_width=True,
                disabled=proposal.id == current_id,
            ):
                session.open_proposal(proposal.id)


# --- Proposals ---

def render_create_proposal_form(store: ProposalStore) -> Optional[Proposal]:
    """New-proposal form; returns the created proposal."""
    with st.expander("➕ New Proposal", expanded=False):
        with st.form("create_proposal_form", clear_on_submit=True):
            name = st.text_input("Name", placeholder="At least 3 characters")
            submitted = st.form_submit_button("Save Proposal", type="primary")
        if not submitted:
            return None
        with st.spinner("Saving..."):
            result = store.create_proposal(name)
        if not result.ok:
            st.toast(f"Error creating proposal: {result.error}", icon="❌")
            return None
        st.toast(f'Proposal "{result.data.name}" created.', icon="✅")
        return result.data


def render_proposal_card(proposal: Proposal, store: ProposalStore) -> None:
    label, tone = analysis_status_label(proposal)
    with st.container(border=True):
        st.markdown(f"#### {proposal.name}")
        st.caption(
            f"Application No: {proposal.application_number or 'N/A'} | "
            f"Created: {format_date(proposal.created_at)}"
        )
        st.write(f"📄 {len(proposal.documents)} document(s)")
        st.markdown(f"Signature Analysis: {status_badge(label, tone)}")

        open_col, delete_col = st.columns([3, 1])
        with open_col:
            if st.button("View Details", key=f"open_proposal_{proposal.id}", use_container_width=True):
                session.open_proposal(proposal.id)
        with delete_col:
            with st.popover("🗑️", use_container_width=True):
                st.write(f'Delete "{proposal.name}" and all its documents? This cannot be undone.')
                if st.button("Delete", key=f"delete_proposal_{proposal.id}", type="primary"):
                    result = store.delete_proposal(proposal.id)
                    if result.ok:
                        st.toast(f'Proposal "{proposal.name}" deleted.', icon="🗑️")
                        st.rerun()
                    else:
                        st.toast(f"Delete failed: {result.error}", icon="❌")


# --- Documents ---

def render_document_list_item(proposal_id: int, document: Document) -> None:
    with st.container(border=True):
        info_col, action_col = st.columns([4, 1])
        with info_col:
            st.markdown(f"**📄 {document.name}**")
            st.caption(f"{document.total_pages} page(s) • Uploaded {format_date(document.uploaded_at)}")
        with action_col:
            if st.button("Open", key=f"open_document_{document.id}", use_container_width=True):
                session.open_document(proposal_id, document.id)


def render_document_upload(store: ProposalStore, proposal_id: int) -> Optional[Document]:
    """PDF uploader; returns the uploaded document."""
    counter_key = f"upload_counter_{proposal_id}"
    counter = st.session_state.get(counter_key, 0)
    uploaded = st.file_uploader(
        "Upload PDF",
        type=["pdf"],
        key=f"document_upload_{proposal_id}_{counter}",
        help="PDF files only.",
    )
    if uploaded is None:
        return None

    with st.spinner(f"Uploading {uploaded.name}..."):
        result = store.upload_document(proposal_id, uploaded.name, uploaded.getvalue(), uploaded.type)
    # New key clears the uploader on the next run.
    st.session_state[counter_key] = counter + 1
    if not result.ok:
        st.toast(f"Upload failed: {result.error}", icon="❌")
        return None
    st.toast(f"{uploaded.name} has been uploaded.", icon="✅")
    return result.data


# --- Document viewer ---

def render_pdf_viewer(viewer: DocumentViewer) -> None:
    with st.container(border=True):
        prev_col, label_col, next_col = st.columns([1, 3, 1])
        with prev_col:
            if st.button("◀", key="viewer_prev", disabled=not viewer.has_previous, use_container_width=True):
                viewer.previous_page()
                st.rerun()
        with label_col:
            st.markdown(
                f"<div style='text-align:center'>Page {viewer.current_page} of {viewer.total_pages}</div>",
                unsafe_allow_html=True,
            )
        with next_col:
            if st.button("▶", key="viewer_next", disabled=not viewer.has_next, use_container_width=True):
                viewer.next_page()
                st.rerun()

        zoom_out, zoom_reset, zoom_in = st.columns(3)
        if zoom_out.button("➖ Zoom", key="viewer_zoom_out", use_container_width=True):
            viewer.zoom_out()
        if zoom_reset.button(f"{int(viewer.zoom * 100)}%", key="viewer_zoom_reset", use_container_width=True):
            viewer.reset_zoom()
        if zoom_in.button("➕ Zoom", key="viewer_zoom_in", use_container_width=True):
            viewer.zoom_in()

        if viewer.page_image and viewer.page_image.startswith(b"%PDF"):
            encoded = base64.b64encode(viewer.page_image).decode("ascii")
            height = int(PAGE_VIEW_HEIGHT * viewer.zoom)
            components.html(
                f'<iframe src="data:application/pdf;base64,{encoded}" '
                f'width="100%" height="{height}" style="border:none"></iframe>',
                height=height + 10,
            )
        elif viewer.page_image:
            st.image(
                viewer.page_image,
                caption=f"Document Page {viewer.current_page}",
                width=int(PAGE_IMAGE_WIDTH * viewer.zoom),
            )
        elif viewer.page_image_error:
            st.warning(f"Failed to load image for page {viewer.current_page}: {viewer.page_image_error}")
        else:
            st.info("Page preview not available.")


def render_html_preview(viewer: DocumentViewer, refresh: DelayedRefresh) -> None:
    refresh_key = f"html_{viewer.document.id}_{viewer.current_page}"
    with st.container(border=True):
        title_col, mode_col = st.columns([2, 1])
        with title_col:
            st.markdown("**Extracted HTML**")
        with mode_col:
            iframe = st.toggle("Server view", value=viewer.html_mode == HTML_MODE_IFRAME, key="viewer_html_mode")
        viewer.set_html_mode(HTML_MODE_IFRAME if iframe else HTML_MODE_INLINE)

        has_content = bool(viewer.html) and "not available" not in (viewer.html or "").lower()
        if st.button("Re-extract HTML" if has_content else "Extract HTML", key="viewer_extract_html"):
            with st.spinner("Triggering extraction..."):
                result = viewer.extract_html()
            if result.ok:
                st.toast(f"{result.data} Content will refresh shortly.", icon="⏳")
                refresh.schedule(refresh_key, EXTRACTION_REFRESH_SECONDS)
            else:
                st.toast(f"Extraction failed: {result.error}", icon="❌")

        if refresh.pending(refresh_key):
            st.caption("Waiting for extraction to finish...")

        if viewer.html_error:
            render_error(viewer.html_error)
        elif viewer.html_mode == HTML_MODE_IFRAME and viewer.html_view_url:
            components.iframe(viewer.html_view_url, height=700, scrolling=True)
        elif viewer.html:
            components.html(viewer.html, height=700, scrolling=True)
        else:
            st.info("No HTML content available for this page.")


def render_signature_viewer(store: ProposalStore, proposal_id: int, signatures: List[Signature]) -> None:
    if not signatures:
        st.caption("No signatures detected on this page.")
        return
    for index, signature in enumerate(signatures, 1):
        with st.expander(f"Signature {index}"):
            image = store.repository.get_signature_image(proposal_id, signature.id)
            if image.ok:
                st.image(image.data, width=300)
            else:
                st.caption(image.error)
            st.caption(f"ID: {signature.id}")
            st.caption(f"Confidence: {format_confidence(signature.confidence)}")
            if signature.ai_signature_id:
                st.caption(f"AI signature: {signature.ai_signature_id}")
            if signature.is_consistent_with_stakeholder_group is not None:
                st.caption(f"Consistent with stakeholder: {'Yes' if signature.is_consistent_with_stakeholder_group else 'No'}")
            if signature.is_unique_among_stakeholders is not None:
                st.caption(f"Unique among stakeholders: {'Yes' if signature.is_unique_among_stakeholders else 'No'}")
            if signature.analysis_notes:
                st.write(signature.analysis_notes)


# --- Chat ---

def render_chat(thread: ChatThread, key: str) -> None:
    if not thread.loaded:
        with st.spinner("Loading conversation..."):
            thread.load_history()

    header_col, refresh_col = st.columns([5, 1])
    with header_col:
        st.markdown(f"**{thread.title}**")
    with refresh_col:
        if st.button("🔄", key=f"{key}_refresh", use_container_width=True):
            thread.load_history()

    with st.container(height=420):
        if thread.error:
            render_error(thread.error)
        if not thread.messages and not thread.error:
            st.caption("No messages yet. Start the conversation!")
        for message in thread.messages:
            with st.chat_message("user" if message.role == "user" else "assistant"):
                st.markdown(message.content)
                if message.file_uri:
                    st.caption(f"📎 {message.file_uri}")

    with st.form(f"{key}_form", clear_on_submit=True):
        text_col, send_col = st.columns([5, 1])
        with text_col:
            content = st.text_input("Message", placeholder="Type your message...", label_visibility="collapsed")
        with send_col:
            submitted = st.form_submit_button("Send", use_container_width=True)
    if submitted and content.strip():
        with st.spinner("Sending..."):
            sent = thread.send(content)
        if not sent and thread.error:
            st.toast(f"Send error: {thread.error}", icon="❌")
        st.rerun()
