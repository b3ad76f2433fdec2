# ## File: pages/2_Document_Viewer.py
# Version: v1.3.0
# Date: 2026-09-26
# Purpose: Side-by-side PDF page and extracted HTML viewer for one document,
#          with the signatures detected on the current page.

import time
import streamlit as st
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from documentwise_engine import session
from documentwise_engine.exceptions import ConfigurationError
from documentwise_engine.ui_components import (
    page_header,
    render_chat,
    render_config_error,
    render_error,
    render_html_preview,
    render_pdf_viewer,
    render_signature_viewer,
    render_version_footer,
)
from documentwise_engine.utils import get_logger
from documentwise_engine.viewer import DocumentViewer

logger = get_logger(__name__)

st.set_page_config(
    page_title="Document Viewer - DocumentWise",
    page_icon="📄",
    layout="wide"
)

VIEWER_KEY = "documentwise_viewer"


def get_viewer(store, proposal_id, document) -> DocumentViewer:
    """Keep one viewer per open document across reruns."""
    viewer = st.session_state.get(VIEWER_KEY)
    if viewer is None or viewer.proposal_id != proposal_id or viewer.document.id != document.id:
        viewer = DocumentViewer(store, proposal_id, document)
        st.session_state[VIEWER_KEY] = viewer
    else:
        viewer.document = document
    if viewer.loaded_page != viewer.current_page:
        with st.spinner(f"Loading page {viewer.current_page}..."):
            viewer.load_page()
    return viewer


def main():
    proposal_id = session.selected_proposal_id()
    document_id = session.selected_document_id()
    if proposal_id is None or document_id is None:
        render_error("Invalid Proposal or Document ID.")
        if st.button("← Back to Dashboard"):
            session.open_dashboard()
        return

    try:
        store = session.get_store()
    except ConfigurationError as e:
        render_config_error(e)
        return
    refresh = session.get_refresh()

    if st.button("← Back to Proposal"):
        session.open_proposal(proposal_id)

    result = store.get_document(proposal_id, document_id)
    if not result.ok:
        render_error(result.error)
        return
    document = result.data
    viewer = get_viewer(store, proposal_id, document)

    refresh_key = f"html_{document.id}_{viewer.current_page}"
    if refresh.pop_due(refresh_key):
        logger.info(f"Reloading extracted HTML for document {document.id} page {viewer.current_page}")
        store.invalidate(proposal_id)
        viewer.load_html()

    page_header(f"📄 {document.name}", f"{document.total_pages} page(s)")

    tab_labels = ["Viewer"]
    if document.chat_session_id:
        tab_labels.append("Chat")
    tabs = st.tabs(tab_labels)

    with tabs[0]:
        pdf_col, html_col = st.columns(2)
        with pdf_col:
            render_pdf_viewer(viewer)
        with html_col:
            render_html_preview(viewer, refresh)

        st.subheader(f"Signatures on page {viewer.current_page}")
        render_signature_viewer(store, proposal_id, viewer.signatures_on_page)

    if document.chat_session_id:
        with tabs[1]:
            thread = session.get_chat_thread(document.chat_session_id, f"Chat about {document.name}")
            render_chat(thread, key=f"document_chat_{document.id}")

    render_version_footer()

    remaining = refresh.remaining(refresh_key)
    if remaining is not None:
        time.sleep(remaining)
        st.rerun()


main()
