# ## File: documentwise_engine/session.py
# Version: 1.0.0
# Date: 2026-09-24
# Purpose: Per-browser-session wiring for the Streamlit pages.
#          Builds the repositories once per session from an explicit
#          ApiConfig and hands them to pages; also carries the navigation
#          context (selected proposal / document) between pages.

from typing import Optional, Tuple

import streamlit as st

from .api_client import ChatClient, DocumentWiseClient
from .chat import ChatThread
from .config import ApiConfig, read_config
from .mock_data import InMemoryChatRepository, InMemoryProposalRepository
from .proposal_store import ProposalStore
from .refresh import DelayedRefresh
from .repository import ChatRepository, ProposalRepository
from .utils import get_logger
from .validation import parse_id

logger = get_logger(__name__)

_CONFIG_KEY = "documentwise_config"
_STORE_KEY = "documentwise_store"
_CHAT_REPO_KEY = "documentwise_chat_repository"
_REFRESH_KEY = "documentwise_refresh"
_THREADS_KEY = "documentwise_chat_threads"

PROPOSAL_PARAM = "proposal"
DOCUMENT_PARAM = "document"

DASHBOARD_PAGE = "DocumentWise.py"
PROPOSAL_PAGE = "pages/1_Proposal_Detail.py"
DOCUMENT_PAGE = "pages/2_Document_Viewer.py"
REPORT_PAGE = "pages/3_Signature_Report.py"


def build_repositories(config: ApiConfig) -> Tuple[ProposalRepository, ChatRepository]:
    """HTTP clients for the configured API, or the in-memory pair in mock mode."""
    if config.use_mock_data:
        return InMemoryProposalRepository(), InMemoryChatRepository()
    return DocumentWiseClient(config), ChatClient(config)


@st.cache_resource
def _shared_mock_repositories() -> Tuple[ProposalRepository, ChatRepository]:
    # One mock dataset per server process, so all pages see the same data.
    return InMemoryProposalRepository(), InMemoryChatRepository()


def get_config() -> ApiConfig:
    """Read the configuration once per session. Raises ConfigurationError."""
    if _CONFIG_KEY not in st.session_state:
        st.session_state[_CONFIG_KEY] = read_config()
    return st.session_state[_CONFIG_KEY]


def _ensure_repositories() -> None:
    if _STORE_KEY in st.session_state:
        return
    config = get_config()
    if config.use_mock_data:
        proposals, chats = _shared_mock_repositories()
    else:
        proposals, chats = build_repositories(config)
    st.session_state[_STORE_KEY] = ProposalStore(proposals)
    st.session_state[_CHAT_REPO_KEY] = chats


def get_store() -> ProposalStore:
    _ensure_repositories()
    return st.session_state[_STORE_KEY]


def get_chat_repository() -> ChatRepository:
    _ensure_repositories()
    return st.session_state[_CHAT_REPO_KEY]


def get_refresh() -> DelayedRefresh:
    if _REFRESH_KEY not in st.session_state:
        st.session_state[_REFRESH_KEY] = DelayedRefresh()
    return st.session_state[_REFRESH_KEY]


def get_chat_thread(session_id: str, fallback_title: Optional[str] = None) -> ChatThread:
    """One ChatThread per chat session id, kept for the browser session."""
    threads = st.session_state.setdefault(_THREADS_KEY, {})
    if session_id not in threads:
        threads[session_id] = ChatThread(get_chat_repository(), session_id, fallback_title)
    return threads[session_id]


# --- Navigation context ---

def selected_proposal_id() -> Optional[int]:
    return parse_id(st.session_state.get(PROPOSAL_PARAM)) or parse_id(st.query_params.get(PROPOSAL_PARAM))


def selected_document_id() -> Optional[int]:
    return parse_id(st.session_state.get(DOCUMENT_PARAM)) or parse_id(st.query_params.get(DOCUMENT_PARAM))


def open_proposal(proposal_id: int) -> None:
    st.session_state[PROPOSAL_PARAM] = proposal_id
    st.session_state.pop(DOCUMENT_PARAM, None)
    st.switch_page(PROPOSAL_PAGE)


def open_document(proposal_id: int, document_id: int) -> None:
    st.session_state[PROPOSAL_PARAM] = proposal_id
    st.session_state[DOCUMENT_PARAM] = document_id
    st.switch_page(DOCUMENT_PAGE)


def open_report(proposal_id: int) -> None:
    st.session_state[PROPOSAL_PARAM] = proposal_id
    st.switch_page(REPORT_PAGE)


def open_dashboard() -> None:
    st.switch_page(DASHBOARD_PAGE)
