# ## File: pages/1_Proposal_Detail.py
# Version: v1.3.0
# Date: 2026-09-26
# Purpose: Proposal detail - documents, upload, signature analysis and chat.

import time
import streamlit as st
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from documentwise_engine import session
from documentwise_engine.exceptions import ConfigurationError
from documentwise_engine.models import AnalysisState
from documentwise_engine.parallel import load_parallel
from documentwise_engine.presentation import (
    analysis_button_label,
    analysis_status_label,
    can_start_analysis,
    format_date,
)
from documentwise_engine.refresh import ANALYSIS_REFRESH_SECONDS
from documentwise_engine.ui_components import (
    page_header,
    render_chat,
    render_config_error,
    render_document_list_item,
    render_document_upload,
    render_error,
    render_loading_placeholders,
    render_recent_proposals_sidebar,
    render_version_footer,
    status_badge,
)
from documentwise_engine.utils import get_logger

logger = get_logger(__name__)

st.set_page_config(
    page_title="Proposal - DocumentWise",
    page_icon="📁",
    layout="wide"
)


def render_analysis_panel(store, refresh, proposal) -> None:
    refresh_key = f"analysis_{proposal.id}"
    label, tone = analysis_status_label(proposal)

    with st.container(border=True):
        st.subheader("Signature Analysis")
        st.markdown(f"Status: {status_badge(label, tone)}")

        busy = refresh.pending(refresh_key)
        if proposal.analysis_state == AnalysisState.FAILED:
            st.warning("The last analysis failed. You can run it again.")
        if not proposal.documents:
            st.caption("Upload at least one document before starting analysis.")

        if st.button(
            analysis_button_label(proposal),
            type="primary",
            disabled=not can_start_analysis(proposal, busy=busy),
            use_container_width=True,
        ):
            result = store.start_signature_analysis(proposal.id)
            if result.ok:
                st.toast(result.data, icon="🔍")
                refresh.schedule(refresh_key, ANALYSIS_REFRESH_SECONDS)
            else:
                st.toast(f"Analysis error: {result.error}", icon="❌")
            st.rerun()

        if proposal.analysis_state == AnalysisState.COMPLETED:
            if st.button("View Analysis Report", use_container_width=True):
                session.open_report(proposal.id)
            if proposal.signature_analysis_report_html:
                with st.expander("Report summary"):
                    st.html(proposal.signature_analysis_report_html)


def main():
    proposal_id = session.selected_proposal_id()
    if proposal_id is None:
        render_error("Invalid Proposal ID format.")
        if st.button("← Back to Dashboard"):
            session.open_dashboard()
        return

    try:
        store = session.get_store()
    except ConfigurationError as e:
        render_config_error(e)
        return
    refresh = session.get_refresh()
    refresh_key = f"analysis_{proposal_id}"
    force = refresh.pop_due(refresh_key)

    placeholder = st.empty()
    with placeholder.container():
        render_loading_placeholders()
    results = load_parallel(
        proposal=lambda: store.get_proposal(proposal_id, force=force),
        proposals=store.list_proposals,
    )
    placeholder.empty()

    proposals_result = results["proposals"]
    if proposals_result.ok:
        render_recent_proposals_sidebar(proposals_result.data, current_id=proposal_id)
    else:
        logger.warning(f"Failed to load all proposals for sidebar: {proposals_result.error}")

    if st.button("← Back to Dashboard"):
        session.open_dashboard()

    proposal_result = results["proposal"]
    if not proposal_result.ok:
        render_error(proposal_result.error)
        return
    proposal = proposal_result.data

    page_header(
        proposal.name,
        f"Application No: {proposal.application_number or 'N/A'} | Created: {format_date(proposal.created_at)}",
    )

    tab_labels = ["Documents"]
    if proposal.chat_session_id:
        tab_labels.append("Chat")
    tabs = st.tabs(tab_labels)

    with tabs[0]:
        docs_col, analysis_col = st.columns([2, 1])
        with docs_col:
            st.subheader("Documents")
            if proposal.documents:
                for document in proposal.documents:
                    render_document_list_item(proposal.id, document)
            else:
                st.info("No documents uploaded yet.")
            if render_document_upload(store, proposal.id):
                st.rerun()
        with analysis_col:
            render_analysis_panel(store, refresh, proposal)

    if proposal.chat_session_id:
        with tabs[1]:
            thread = session.get_chat_thread(proposal.chat_session_id, f"Chat about {proposal.name}")
            render_chat(thread, key=f"proposal_chat_{proposal.id}")

    render_version_footer()

    # Analysis runs on the backend; come back once the delay has passed.
    remaining = refresh.remaining(refresh_key)
    if remaining is not None:
        time.sleep(remaining)
        st.rerun()


main()
