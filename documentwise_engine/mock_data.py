# ## File: documentwise_engine/mock_data.py
# Version: 1.1.0
# Date: 2026-09-20
# Purpose: In-memory repositories used when DOCUMENTWISE_USE_MOCK_DATA is set
#          and by the tests. Data lives only as long as the process.
#          Returned models are deep copies so callers cannot mutate the store.

from __future__ import annotations

import re
import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .api_client import (
    HTML_NOT_AVAILABLE,
    MISSING_PARAMETERS,
    PROPOSAL_ID_REQUIRED,
    PROPOSAL_NOT_FOUND,
    REPORT_NOT_FOUND,
)
from .exceptions import DocumentWiseException
from .models import (
    ActionResult,
    ChatHistory,
    ChatMessage,
    ChatSessionInfo,
    Document,
    NamedCount,
    OverallStatus,
    OverallSummary,
    Page,
    Proposal,
    SignatureAnalysisReportData,
    AnalysisState,
)
from .repository import Attachment, ChatRepository, ProposalRepository
from .utils import get_logger
from .validation import validate_pdf_upload, validate_proposal_name

logger = get_logger(__name__)

_PAGE_MARKER = re.compile(rb"/Type\s*/Page(?!s)")

MOCK_PREVIEW_UNAVAILABLE = "Page previews are not available without the DocumentWise API."


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _application_number() -> str:
    return f"APP-{uuid.uuid4().hex[:9].upper()}"


def count_pdf_pages(content: bytes) -> int:
    """Rough page count from the PDF object markers; at least one page."""
    return max(1, len(_PAGE_MARKER.findall(content or b"")))


class InMemoryProposalRepository(ProposalRepository):
    """
    Proposal repository backed by a dict.

    Signature analysis moves from "In Progress" to "Completed" once
    analysis_seconds have passed, checked whenever a proposal is read.
    """

    def __init__(
        self,
        seed: bool = True,
        analysis_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lock = threading.Lock()
        self._proposals: Dict[int, Proposal] = {}
        self._analysis_started: Dict[int, float] = {}
        self._next_id = 1
        self.analysis_seconds = analysis_seconds
        self.clock = clock
        if seed:
            self._seed()

    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def _build_document(self, proposal_id: int, name: str, total_pages: int, uploaded_at: str) -> Document:
        document_id = self._new_id()
        pages = [
            Page(id=self._new_id(), page_number=n, document_id=document_id)
            for n in range(1, total_pages + 1)
        ]
        return Document(
            id=document_id,
            name=name,
            uploaded_at=uploaded_at,
            total_pages=total_pages,
            project_id=proposal_id,
            pages=pages,
        )

    def _seed(self) -> None:
        seeds = [
            ("Quarterly Business Review Documents", "2023-01-10T00:00:00+00:00", "Not Started",
             [("Initial Agreement Q1.pdf", 5, "2023-01-15T00:00:00+00:00"),
              ("Scope of Work Final.pdf", 12, "2023-01-20T00:00:00+00:00")]),
            ("New Client Onboarding Pack", "2023-02-05T00:00:00+00:00", "Completed",
             [("Project Alpha NDA.pdf", 3, "2023-02-10T00:00:00+00:00")]),
            ("Investment Round A Pitch Deck", "2023-03-01T00:00:00+00:00", "Not Started", []),
        ]
        for name, created_at, status, docs in seeds:
            proposal_id = self._new_id()
            proposal = Proposal(
                id=proposal_id,
                application_number=_application_number(),
                name=name,
                created_at=created_at,
                signature_analysis_status=status,
                chat_session_id=f"mock-session-{proposal_id}",
            )
            for doc_name, pages, uploaded_at in docs:
                proposal.documents.append(self._build_document(proposal_id, doc_name, pages, uploaded_at))
            if status == "Completed":
                proposal.signature_analysis_report_html = self._report_html(proposal)
            self._proposals[proposal_id] = proposal

    @staticmethod
    def _report_html(proposal: Proposal) -> str:
        items = "".join(f"<li>{doc.name}: no anomalies detected</li>" for doc in proposal.documents)
        return f"<div><h1>Signature Report</h1><p>{proposal.name}</p><ul>{items}</ul></div>"

    def _advance_analysis(self, proposal: Proposal) -> None:
        started = self._analysis_started.get(proposal.id)
        if started is None:
            return
        if self.clock() - started >= self.analysis_seconds:
            proposal.signature_analysis_status = "Completed"
            proposal.signature_analysis_report_html = self._report_html(proposal)
            del self._analysis_started[proposal.id]

    def _require(self, proposal_id: int) -> Proposal:
        if not isinstance(proposal_id, int) or proposal_id <= 0:
            raise DocumentWiseException(PROPOSAL_ID_REQUIRED)
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise DocumentWiseException(PROPOSAL_NOT_FOUND)
        self._advance_analysis(proposal)
        return proposal

    def _run(self, operation: Callable[[], Any]) -> ActionResult:
        with self._lock:
            try:
                return ActionResult.success(operation())
            except DocumentWiseException as e:
                return ActionResult.failure(e.message)

    # --- ProposalRepository ---

    def list_proposals(self) -> ActionResult[List[Proposal]]:
        def operation():
            for proposal in self._proposals.values():
                self._advance_analysis(proposal)
            return [p.model_copy(deep=True) for p in self._proposals.values()]
        return self._run(operation)

    def get_proposal(self, proposal_id: int) -> ActionResult[Proposal]:
        return self._run(lambda: self._require(proposal_id).model_copy(deep=True))

    def create_proposal(self, name: str, chat_session_id: Optional[str] = None) -> ActionResult[Proposal]:
        def operation():
            cleaned = validate_proposal_name(name)
            proposal_id = self._new_id()
            proposal = Proposal(
                id=proposal_id,
                application_number=_application_number(),
                name=cleaned,
                created_at=_utc_now_iso(),
                signature_analysis_status="Not Started",
                chat_session_id=chat_session_id or f"mock-session-{proposal_id}",
            )
            self._proposals[proposal_id] = proposal
            logger.info(f"Created mock proposal {proposal_id}: {proposal.name}")
            return proposal.model_copy(deep=True)
        return self._run(operation)

    def delete_proposal(self, proposal_id: int) -> ActionResult[int]:
        def operation():
            self._require(proposal_id)
            del self._proposals[proposal_id]
            self._analysis_started.pop(proposal_id, None)
            return proposal_id
        return self._run(operation)

    def upload_document(
        self,
        proposal_id: int,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> ActionResult[Document]:
        def operation():
            proposal = self._require(proposal_id)
            validate_pdf_upload(file_name, content, content_type)
            document = self._build_document(proposal_id, file_name, count_pdf_pages(content), _utc_now_iso())
            proposal.documents.append(document)
            return document.model_copy(deep=True)
        return self._run(operation)

    def start_signature_analysis(self, proposal_id: int) -> ActionResult[str]:
        def operation():
            proposal = self._require(proposal_id)
            if not proposal.documents:
                raise DocumentWiseException("Proposal has no documents to analyse.")
            proposal.signature_analysis_status = "In Progress"
            self._analysis_started[proposal_id] = self.clock()
            return "Signature analysis started."
        return self._run(operation)

    def get_signature_analysis_report(self, proposal_id: int) -> ActionResult[str]:
        def operation():
            proposal = self._require(proposal_id)
            if proposal.analysis_state != AnalysisState.COMPLETED or not proposal.signature_analysis_report_html:
                raise DocumentWiseException(REPORT_NOT_FOUND)
            return proposal.signature_analysis_report_html
        return self._run(operation)

    def get_signature_analysis_report_data(self, proposal_id: int) -> ActionResult[SignatureAnalysisReportData]:
        def operation():
            proposal = self._require(proposal_id)
            if proposal.analysis_state != AnalysisState.COMPLETED:
                raise DocumentWiseException(REPORT_NOT_FOUND)
            names = [doc.name for doc in proposal.documents]
            return SignatureAnalysisReportData(
                proposal_id=proposal.id,
                proposal_name=proposal.name,
                proposal_application_number=proposal.application_number,
                generated_at=_utc_now_iso(),
                overall_summary=OverallSummary(
                    documents_analyzed=NamedCount(count=len(names), names=names),
                    stakeholders_identified=NamedCount(),
                    overall_status=OverallStatus(
                        status="Verified",
                        description="No signatures required review.",
                    ),
                ),
            )
        return self._run(operation)

    def _require_page(self, proposal_id: int, document_id: int, page_number: int) -> Page:
        proposal = self._require(proposal_id)
        document = proposal.get_document(document_id)
        page = document.get_page(page_number) if document else None
        if page is None:
            raise DocumentWiseException(MISSING_PARAMETERS)
        return page

    def extract_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        def operation():
            page = self._require_page(proposal_id, document_id, page_number)
            page.html_content = (
                f"<div><h2>Page {page_number}</h2>"
                f"<p>Extracted form content for document {document_id}.</p></div>"
            )
            return "HTML extraction process started."
        return self._run(operation)

    def get_page_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        def operation():
            page = self._require_page(proposal_id, document_id, page_number)
            return page.html_content or HTML_NOT_AVAILABLE
        return self._run(operation)

    def get_page_html_view_url(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        return ActionResult.failure(MOCK_PREVIEW_UNAVAILABLE)

    def get_page_pdf_url(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        return ActionResult.failure(MOCK_PREVIEW_UNAVAILABLE)

    def get_page_image(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[bytes]:
        return ActionResult.failure(MOCK_PREVIEW_UNAVAILABLE)

    def get_signature_image_url(self, proposal_id: int, signature_id: int) -> ActionResult[str]:
        return ActionResult.failure(MOCK_PREVIEW_UNAVAILABLE)

    def get_signature_image(self, proposal_id: int, signature_id: int) -> ActionResult[bytes]:
        return ActionResult.failure(MOCK_PREVIEW_UNAVAILABLE)


class InMemoryChatRepository(ChatRepository):
    """Chat sessions kept in memory; the model replies with an acknowledgement."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, ChatHistory] = {}

    def _session(self, session_id: str) -> ChatHistory:
        history = self._sessions.get(session_id)
        if history is None:
            history = ChatHistory(
                session=ChatSessionInfo(id=session_id, title=f"Chat {session_id}", created_at=_utc_now_iso()),
            )
            self._sessions[session_id] = history
        return history

    def get_chat_history(self, session_id: str) -> ActionResult[ChatHistory]:
        if not (session_id or "").strip():
            return ActionResult.failure("Chat session ID is required.")
        with self._lock:
            return ActionResult.success(self._session(session_id).model_copy(deep=True))

    def send_chat_message(
        self,
        session_id: str,
        content: str,
        attachment: Optional[Attachment] = None,
    ) -> ActionResult[Dict[str, Any]]:
        if not (session_id or "").strip():
            return ActionResult.failure("Chat session ID is required.")
        if not (content or "").strip():
            return ActionResult.failure("Message cannot be empty.")
        with self._lock:
            history = self._session(session_id)
            user_message = ChatMessage(
                id=uuid.uuid4().hex,
                role="user",
                content=content,
                timestamp=_utc_now_iso(),
                file_uri=attachment[0] if attachment else None,
                file_mime_type=attachment[2] if attachment else None,
            )
            reply = ChatMessage(
                id=uuid.uuid4().hex,
                role="model",
                content=f"Received: {content}",
                timestamp=_utc_now_iso(),
            )
            history.messages.extend([user_message, reply])
            return ActionResult.success({"message": reply.content})
