"""
DocumentWise Models
Version: 1.2.0
Date: 2026-09-14

Purpose: Client-side projections of the proposal / document / page / signature
data owned by the DocumentWise API. Attributes are snake_case in Python and
serialise to the camelCase client convention with model_dump(by_alias=True).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ClientModel(BaseModel):
    """Base for every client model: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisState(str, Enum):
    """Normalised signature analysis states."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_status(cls, raw: Optional[str]) -> "AnalysisState":
        """Map the API's free-form status string onto a state."""
        value = (raw or "").strip().lower()
        if not value or value in {"not started", "not_started", "notstarted"}:
            return cls.NOT_STARTED
        if value in {"in progress", "inprogress", "in_progress", "processing", "pending"}:
            return cls.IN_PROGRESS
        if value in {"completed", "completed_success"}:
            return cls.COMPLETED
        if value in {"failed", "error"}:
            return cls.FAILED
        return cls.UNKNOWN


class BoundingBox(ClientModel):
    x: float
    y: float
    width: float
    height: float


class Signature(ClientModel):
    id: int
    page_id: int
    document_id: int = Field(description="Owning document, inferred from the page's document")
    stakeholder_id: Optional[int] = None
    ai_signature_id: Optional[str] = None
    confidence: Optional[float] = Field(default=None, description="Parsed from the API's ai_confidence string")
    coordinates: Optional[BoundingBox] = None
    is_consistent_with_stakeholder_group: Optional[bool] = None
    is_unique_among_stakeholders: Optional[bool] = None
    analysis_notes: Optional[str] = None


class Page(ClientModel):
    id: int
    page_number: int
    html_content: Optional[str] = Field(default=None, description="From generated_form_html")
    text_content: Optional[str] = None
    signatures: List[Signature] = Field(default_factory=list)
    document_id: int


class Document(ClientModel):
    id: int
    name: str = Field(description="From file_name")
    uploaded_at: str = Field(description="ISO timestamp from created_at")
    total_pages: int = 0
    project_id: int
    pages: List[Page] = Field(default_factory=list)
    chat_session_id: Optional[str] = None

    def get_page(self, page_number: int) -> Optional[Page]:
        for page in self.pages:
            if page.page_number == page_number:
                return page
        return None


class Proposal(ClientModel):
    id: int
    application_number: Optional[str] = None
    name: str
    created_at: str
    documents: List[Document] = Field(default_factory=list)
    signature_analysis_status: Optional[str] = None
    signature_analysis_report_html: Optional[str] = None
    chat_session_id: Optional[str] = None

    @property
    def analysis_state(self) -> AnalysisState:
        return AnalysisState.from_status(self.signature_analysis_status)

    def get_document(self, document_id: int) -> Optional[Document]:
        for document in self.documents:
            if document.id == document_id:
                return document
        return None


class ProposalCreatePayload(BaseModel):
    """Request body for POST /proposals/ (snake_case, as the API expects)."""
    name: str
    chat_session_id: Optional[str] = None


# --- Chat ---

class ChatMessage(ClientModel):
    id: str
    role: str = Field(description="'user' or 'model'")
    content: str
    timestamp: str
    file_uri: Optional[str] = None
    file_mime_type: Optional[str] = None


class ChatSessionInfo(ClientModel):
    id: str
    title: str = ""
    created_at: Optional[str] = None


class ChatHistory(ClientModel):
    session: ChatSessionInfo
    messages: List[ChatMessage] = Field(default_factory=list)


# --- Signature analysis report ---

class NamedCount(ClientModel):
    count: int = 0
    names: List[str] = Field(default_factory=list)


class OverallStatus(ClientModel):
    status: str = "Unknown"
    description: str = ""


class OverallSummary(ClientModel):
    documents_analyzed: NamedCount = Field(default_factory=NamedCount)
    stakeholders_identified: NamedCount = Field(default_factory=NamedCount)
    overall_status: OverallStatus = Field(default_factory=OverallStatus)


class SignatureInstanceDetail(ClientModel):
    signature_instance_id: int
    document_name: str = ""
    page_number: Optional[int] = None
    role: Optional[str] = None


class ConsistencyResult(ClientModel):
    result: str = "Unknown"
    confidence: Optional[float] = None
    notes: Optional[str] = None


class UniquenessResult(ClientModel):
    result: str = "Unknown"
    notes: Optional[str] = None


class StakeholderAnalysisResults(ClientModel):
    intra_stakeholder_consistency: ConsistencyResult = Field(default_factory=ConsistencyResult)
    inter_stakeholder_uniqueness: UniquenessResult = Field(default_factory=UniquenessResult)


class StakeholderAnalysis(ClientModel):
    stakeholder_id: int
    stakeholder_name: str
    roles: str = ""
    status: str = "Unknown"
    signature_instances: List[SignatureInstanceDetail] = Field(default_factory=list)
    analysis_results: StakeholderAnalysisResults = Field(default_factory=StakeholderAnalysisResults)


class CrossStakeholderComparison(ClientModel):
    stakeholder_pair: str
    comparison_result_description: str = ""
    status: str = "Unknown"


class SignatureAnalysisReportData(ClientModel):
    proposal_id: int
    proposal_name: str = ""
    proposal_application_number: Optional[str] = None
    generated_at: str
    overall_summary: OverallSummary = Field(default_factory=OverallSummary)
    stakeholder_analyses: List[StakeholderAnalysis] = Field(default_factory=list)
    cross_stakeholder_uniqueness: List[CrossStakeholderComparison] = Field(default_factory=list)


# --- Results ---

@dataclass
class ActionResult(Generic[T]):
    """Outcome of one API operation: data on success, an error message otherwise."""
    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "ActionResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: str) -> "ActionResult[T]":
        return cls(error=error)
