# ## File: documentwise_engine/api_client.py
# Version: 1.3.1
# Date: 2026-10-19
# Purpose: HTTP clients for the DocumentWise backend and chat API.
#          - Every public method returns an ActionResult and never raises for
#            transport errors, HTTP errors, malformed payloads or failed
#            client-side validation.
#          - Server-supplied "detail" messages are preferred over status text.
#          - Nothing is retried; callers decide how to present failures.

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import quote

import requests

from .config import ApiConfig
from .exceptions import ApiError, DocumentWiseException, NotFoundError, TransportError, ValidationError
from .models import (
    ActionResult,
    ChatHistory,
    Document,
    Proposal,
    ProposalCreatePayload,
    SignatureAnalysisReportData,
)
from .repository import Attachment, ChatRepository, ProposalRepository
from .transforms import (
    transform_api_document,
    transform_api_proposal,
    transform_api_proposals,
    transform_chat_history,
    transform_report_data,
)
from .utils import LoggerMixin
from .validation import PDF_CONTENT_TYPE, validate_pdf_upload, validate_proposal_name

T = TypeVar("T")

PROPOSAL_ID_REQUIRED = "Proposal ID is required."
MISSING_PARAMETERS = "Missing parameters."
PROPOSAL_NOT_FOUND = "Proposal not found."
REPORT_NOT_FOUND = "Report not found or analysis not complete."
PDF_PAGE_NOT_FOUND = "PDF page not found."
HTML_NOT_AVAILABLE = "<p>HTML content not available for this page.</p>"
HTML_EMPTY = "<p>No HTML content available for this page.</p>"
REPORT_EMPTY = "<p>Report content is not available.</p>"


def _is_valid_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _require_ids(message: str, *values: Any) -> None:
    if not all(_is_valid_id(v) for v in values):
        raise ValidationError(message)


def _is_json(response: requests.Response) -> bool:
    return "application/json" in response.headers.get("Content-Type", "").lower()


def _json_or_empty(response: requests.Response) -> Dict[str, Any]:
    """Body as a dict; empty or non-JSON bodies give {}."""
    if not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def extract_error_detail(response: requests.Response) -> Optional[str]:
    """
    Pull the server's error detail out of a response.

    Handles {"detail": "..."} as well as FastAPI validation errors, where
    detail is a list of {"loc": [...], "msg": "..."} entries.
    """
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    detail = payload.get("detail")
    if detail is None or detail == "":
        return None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        messages = [
            str(item.get("msg")) if isinstance(item, dict) and item.get("msg") else str(item)
            for item in detail
        ]
        return "; ".join(m for m in messages if m) or None
    return str(detail)


def describe_http_error(response: requests.Response, failure: str) -> str:
    detail = extract_error_detail(response)
    if detail:
        return detail
    reason = response.reason or f"HTTP {response.status_code}"
    return f"Failed to {failure}: {reason}"


class _HttpClient(LoggerMixin):
    """Shared request plumbing: base URL, timeout, error mapping."""

    def __init__(self, config: ApiConfig, base_url: str, session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers["Accept"] = "application/json"

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(
        self,
        method: str,
        path: str,
        *,
        doing: str,
        failure: str,
        not_found: Optional[str] = None,
        **kwargs,
    ) -> requests.Response:
        url = self.url(path)
        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.config.request_timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            self.logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"An unexpected error occurred while {doing}.", str(e))

        if 200 <= response.status_code < 300:
            return response

        self.logger.warning(f"{method} {url} returned HTTP {response.status_code}")
        if response.status_code == 404 and not_found:
            raise NotFoundError(not_found)
        raise ApiError(describe_http_error(response, failure), status_code=response.status_code)

    def _call(self, doing: str, operation: Callable[[], T]) -> ActionResult[T]:
        try:
            return ActionResult.success(operation())
        except DocumentWiseException as e:
            return ActionResult.failure(e.message)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            # Malformed payloads, including pydantic validation errors.
            self.logger.error(f"Unexpected response while {doing}: {e}")
            return ActionResult.failure(f"Unexpected response from the API while {doing}.")


class DocumentWiseClient(_HttpClient, ProposalRepository):
    """
    Client for the proposal / document / signature endpoints.

    Example:
        >>> client = DocumentWiseClient(read_config())
        >>> result = client.get_proposal(42)
        >>> if result.ok:
        ...     print(result.data.name)
    """

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        super().__init__(config, config.api_base_url, session)

    # --- Proposals ---

    def list_proposals(self) -> ActionResult[List[Proposal]]:
        def operation():
            response = self._send("GET", "/proposals/", doing="fetching proposals", failure="fetch proposals")
            payload = response.json()
            if not isinstance(payload, list):
                raise TypeError(f"expected a list of proposals, got {type(payload).__name__}")
            return transform_api_proposals(payload)

        return self._call("fetching proposals", operation)

    def get_proposal(self, proposal_id: int) -> ActionResult[Proposal]:
        def operation():
            _require_ids(PROPOSAL_ID_REQUIRED, proposal_id)
            response = self._send(
                "GET",
                f"/proposals/{proposal_id}/",
                doing="fetching the proposal",
                failure="fetch proposal",
                not_found=PROPOSAL_NOT_FOUND,
            )
            return transform_api_proposal(response.json())

        return self._call("fetching the proposal", operation)

    def create_proposal(self, name: str, chat_session_id: Optional[str] = None) -> ActionResult[Proposal]:
        def operation():
            payload = ProposalCreatePayload(name=validate_proposal_name(name), chat_session_id=chat_session_id)
            response = self._send(
                "POST",
                "/proposals/",
                doing="creating the proposal",
                failure="create proposal",
                json=payload.model_dump(exclude_none=True),
            )
            return transform_api_proposal(response.json())

        return self._call("creating the proposal", operation)

    def delete_proposal(self, proposal_id: int) -> ActionResult[int]:
        def operation():
            _require_ids(PROPOSAL_ID_REQUIRED, proposal_id)
            self._send(
                "DELETE",
                f"/proposals/{proposal_id}/",
                doing="deleting the proposal",
                failure="delete proposal",
                not_found=PROPOSAL_NOT_FOUND,
            )
            return proposal_id

        return self._call("deleting the proposal", operation)

    # --- Documents ---

    def upload_document(
        self,
        proposal_id: int,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> ActionResult[Document]:
        def operation():
            _require_ids(PROPOSAL_ID_REQUIRED, proposal_id)
            validate_pdf_upload(file_name, content, content_type)
            response = self._send(
                "POST",
                f"/proposals/{proposal_id}/documents/",
                doing="adding the document",
                failure="upload document",
                files={"files": (file_name, content, content_type or PDF_CONTENT_TYPE)},
            )
            payload = response.json()
            # The API accepts several files and answers with a list.
            documents = payload if isinstance(payload, list) else [payload]
            if not documents or not documents[0]:
                raise ApiError("No document data returned from API.")
            return transform_api_document(documents[0])

        return self._call("adding the document", operation)

    def extract_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        def operation():
            _require_ids(MISSING_PARAMETERS, proposal_id, document_id, page_number)
            response = self._send(
                "POST",
                f"/proposals/{proposal_id}/documents/{document_id}/extract-html",
                doing="extracting HTML",
                failure="trigger HTML extraction",
                json={"page_number": page_number},
            )
            return _json_or_empty(response).get("message") or "HTML extraction process started."

        return self._call("extracting HTML", operation)

    def _page_path(self, proposal_id: int, document_id: int, page_number: int, suffix: str) -> str:
        return f"/proposals/{proposal_id}/documents/{document_id}/pages/{page_number}/{suffix}"

    def get_page_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        def operation():
            _require_ids(MISSING_PARAMETERS, proposal_id, document_id, page_number)
            try:
                response = self._send(
                    "GET",
                    self._page_path(proposal_id, document_id, page_number, "html"),
                    doing="fetching HTML content",
                    failure="fetch HTML content",
                    not_found=HTML_NOT_AVAILABLE,
                )
            except NotFoundError:
                # Not extracted yet; show a placeholder rather than an error.
                return HTML_NOT_AVAILABLE
            return _json_or_empty(response).get("html_content") or HTML_EMPTY

        return self._call("fetching HTML content", operation)

    def get_page_html_view_url(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        def operation():
            _require_ids(MISSING_PARAMETERS, proposal_id, document_id, page_number)
            return self.url(self._page_path(proposal_id, document_id, page_number, "html_view"))

        return self._call("building the HTML view URL", operation)

    def _fetch_page_pdf(self, proposal_id: int, document_id: int, page_number: int, **kwargs) -> requests.Response:
        _require_ids(MISSING_PARAMETERS, proposal_id, document_id, page_number)
        return self._send(
            "GET",
            self._page_path(proposal_id, document_id, page_number, "pdf"),
            doing="fetching the PDF page",
            failure="load PDF page",
            not_found=PDF_PAGE_NOT_FOUND,
            headers={"Accept": "*/*"},
            **kwargs,
        )

    def get_page_pdf_url(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        """Check the page endpoint answers, then hand back its URL for direct embedding."""
        def operation():
            response = self._fetch_page_pdf(proposal_id, document_id, page_number, stream=True)
            response.close()
            return self.url(self._page_path(proposal_id, document_id, page_number, "pdf"))

        return self._call("fetching the PDF page", operation)

    def get_page_image(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[bytes]:
        def operation():
            return self._fetch_page_pdf(proposal_id, document_id, page_number).content

        return self._call("fetching the PDF page", operation)

    # --- Signatures ---

    def start_signature_analysis(self, proposal_id: int) -> ActionResult[str]:
        def operation():
            _require_ids(PROPOSAL_ID_REQUIRED, proposal_id)
            response = self._send(
                "POST",
                f"/proposals/{proposal_id}/signature-analysis/start",
                doing="starting signature analysis",
                failure="start signature analysis",
            )
            return _json_or_empty(response).get("message") or "Signature analysis started."

        return self._call("starting signature analysis", operation)

    def _fetch_report(self, proposal_id: int, accept: str) -> requests.Response:
        _require_ids(PROPOSAL_ID_REQUIRED, proposal_id)
        return self._send(
            "GET",
            f"/proposals/{proposal_id}/signature-analysis/report",
            doing="fetching the signature analysis report",
            failure="fetch signature analysis report",
            not_found=REPORT_NOT_FOUND,
            headers={"Accept": accept},
        )

    def get_signature_analysis_report(self, proposal_id: int) -> ActionResult[str]:
        def operation():
            response = self._fetch_report(proposal_id, "text/html")
            if _is_json(response):
                payload = _json_or_empty(response)
                html = payload.get("report_html") or payload.get("html_content")
                if not html:
                    raise ApiError("Report is only available as structured data.")
                return html
            return response.text or REPORT_EMPTY

        return self._call("fetching the signature analysis report", operation)

    def get_signature_analysis_report_data(self, proposal_id: int) -> ActionResult[SignatureAnalysisReportData]:
        def operation():
            response = self._fetch_report(proposal_id, "application/json")
            if not _is_json(response):
                raise ApiError("Report is only available as HTML.")
            return transform_report_data(response.json())

        return self._call("fetching the signature analysis report", operation)

    def _fetch_signature_image(self, proposal_id: int, signature_id: int, **kwargs) -> requests.Response:
        _require_ids(MISSING_PARAMETERS, proposal_id, signature_id)
        return self._send(
            "GET",
            f"/proposals/{proposal_id}/signatures/{signature_id}/image",
            doing="fetching the signature image",
            failure="fetch signature image",
            headers={"Accept": "image/*"},
            **kwargs,
        )

    def get_signature_image_url(self, proposal_id: int, signature_id: int) -> ActionResult[str]:
        def operation():
            response = self._fetch_signature_image(proposal_id, signature_id, stream=True)
            response.close()
            return self.url(f"/proposals/{proposal_id}/signatures/{signature_id}/image")

        return self._call("fetching the signature image", operation)

    def get_signature_image(self, proposal_id: int, signature_id: int) -> ActionResult[bytes]:
        def operation():
            return self._fetch_signature_image(proposal_id, signature_id).content

        return self._call("fetching the signature image", operation)


class ChatClient(_HttpClient, ChatRepository):
    """Client for the chat API, which lives behind its own base URL."""

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        super().__init__(config, config.chat_api_base_url, session)

    @staticmethod
    def _session_path(session_id: str, suffix: str) -> str:
        return f"/chat/{quote(session_id, safe='')}/{suffix}"

    def get_chat_history(self, session_id: str) -> ActionResult[ChatHistory]:
        def operation():
            if not (session_id or "").strip():
                raise ValidationError("Chat session ID is required.")
            response = self._send(
                "GET",
                self._session_path(session_id, "history"),
                doing="fetching chat history",
                failure="fetch chat history",
                not_found="Chat session not found.",
            )
            return transform_chat_history(response.json())

        return self._call("fetching chat history", operation)

    def send_chat_message(
        self,
        session_id: str,
        content: str,
        attachment: Optional[Attachment] = None,
    ) -> ActionResult[Dict[str, Any]]:
        def operation():
            if not (session_id or "").strip():
                raise ValidationError("Chat session ID is required.")
            if not (content or "").strip():
                raise ValidationError("Message cannot be empty.")
            if attachment:
                file_name, data, content_type = attachment
                kwargs = {
                    "data": {"message": content},
                    "files": {"file": (file_name, data, content_type or "application/octet-stream")},
                }
            else:
                kwargs = {"json": {"message": content}}
            response = self._send(
                "POST",
                self._session_path(session_id, "message"),
                doing="sending the message",
                failure="send message",
                not_found="Chat session not found.",
                **kwargs,
            )
            return _json_or_empty(response)

        return self._call("sending the message", operation)
