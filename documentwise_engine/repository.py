"""
Repository Interfaces
Defines the operations every DocumentWise data source provides. The HTTP
clients and the in-memory mock implement these, and pages only talk to them.

Every method returns an ActionResult and never raises for expected failures.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from .models import (
    ActionResult,
    ChatHistory,
    Document,
    Proposal,
    SignatureAnalysisReportData,
)

# (file_name, content, content_type)
Attachment = Tuple[str, bytes, Optional[str]]


class ProposalRepository(ABC):
    """Abstract interface for proposal / document / signature operations."""

    @abstractmethod
    def list_proposals(self) -> ActionResult[List[Proposal]]:
        pass

    @abstractmethod
    def get_proposal(self, proposal_id: int) -> ActionResult[Proposal]:
        pass

    @abstractmethod
    def create_proposal(self, name: str, chat_session_id: Optional[str] = None) -> ActionResult[Proposal]:
        pass

    @abstractmethod
    def delete_proposal(self, proposal_id: int) -> ActionResult[int]:
        pass

    @abstractmethod
    def upload_document(
        self,
        proposal_id: int,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> ActionResult[Document]:
        pass

    @abstractmethod
    def start_signature_analysis(self, proposal_id: int) -> ActionResult[str]:
        pass

    @abstractmethod
    def get_signature_analysis_report(self, proposal_id: int) -> ActionResult[str]:
        """HTML rendering of the report."""
        pass

    @abstractmethod
    def get_signature_analysis_report_data(self, proposal_id: int) -> ActionResult[SignatureAnalysisReportData]:
        """Structured report, for servers that return JSON."""
        pass

    @abstractmethod
    def extract_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        pass

    @abstractmethod
    def get_page_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        pass

    @abstractmethod
    def get_page_html_view_url(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        pass

    @abstractmethod
    def get_page_pdf_url(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        pass

    @abstractmethod
    def get_page_image(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[bytes]:
        pass

    @abstractmethod
    def get_signature_image_url(self, proposal_id: int, signature_id: int) -> ActionResult[str]:
        pass

    @abstractmethod
    def get_signature_image(self, proposal_id: int, signature_id: int) -> ActionResult[bytes]:
        pass


class ChatRepository(ABC):
    """Abstract interface for chat sessions."""

    @abstractmethod
    def get_chat_history(self, session_id: str) -> ActionResult[ChatHistory]:
        pass

    @abstractmethod
    def send_chat_message(
        self,
        session_id: str,
        content: str,
        attachment: Optional[Attachment] = None,
    ) -> ActionResult[Dict[str, Any]]:
        pass
