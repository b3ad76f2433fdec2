# ## File: DocumentWise.py
# Version: v1.3.0
# Date: 2026-09-26
# Purpose: Main entry point for DocumentWise - the proposals dashboard.

import streamlit as st
import sys
from pathlib import Path

# Add the project root to the Python path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from documentwise_engine import session
from documentwise_engine.exceptions import ConfigurationError
from documentwise_engine.presentation import filter_proposals
from documentwise_engine.ui_components import (
    page_header,
    render_config_error,
    render_create_proposal_form,
    render_error,
    render_loading_placeholders,
    render_proposal_card,
    render_recent_proposals_sidebar,
    render_version_footer,
)
from documentwise_engine.utils import get_logger
from documentwise_engine.version_config import get_version_display

logger = get_logger(__name__)

st.set_page_config(
    page_title="DocumentWise",
    page_icon="📑",
    layout="wide"
)


def main():
    page_header("Proposals Dashboard", "Manage your proposals and documents.")
    st.caption(get_version_display())

    try:
        store = session.get_store()
    except ConfigurationError as e:
        render_config_error(e)
        return

    search_col, refresh_col = st.columns([4, 1])
    with search_col:
        search_term = st.text_input(
            "Search proposals",
            placeholder="Search by name or application number...",
            label_visibility="collapsed",
        )
    with refresh_col:
        force = st.button("🔄 Refresh", use_container_width=True)

    created = render_create_proposal_form(store)
    if created:
        session.open_proposal(created.id)

    placeholder = st.empty()
    with placeholder.container():
        render_loading_placeholders()
    result = store.list_proposals(force=force)
    placeholder.empty()

    if not result.ok:
        render_error(result.error)
        return

    proposals = result.data
    render_recent_proposals_sidebar(proposals)

    visible = filter_proposals(proposals, search_term)
    if not proposals:
        st.info("No proposals yet. Create one to get started.")
    elif not visible:
        st.info(f'No proposals match "{search_term}".')
    else:
        columns = st.columns(3)
        for index, proposal in enumerate(visible):
            with columns[index % 3]:
                render_proposal_card(proposal, store)

    render_version_footer()


main()
