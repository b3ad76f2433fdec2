# ## File: documentwise_engine/transforms.py
# Version: 1.2.0
# Date: 2026-10-19
# Purpose: Reshape DocumentWise API payloads (snake_case JSON) into the
#          client models. All functions are pure; the same payload always
#          produces an equal model.

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Mapping, Optional

from .models import (
    BoundingBox,
    ChatHistory,
    ChatMessage,
    ChatSessionInfo,
    Document,
    Page,
    Proposal,
    Signature,
    SignatureAnalysisReportData,
)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_confidence(raw: Any) -> Optional[float]:
    """
    Parse the API's ai_confidence value, which arrives as a string.

    Leading numeric text is accepted ("0.93", "0.93 (high)"); anything that
    does not start with a finite number gives None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if not match:
            return None
        value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_bounding_box(raw: Any) -> Optional[BoundingBox]:
    """Return a BoundingBox when the mapping carries numeric x/y/width/height."""
    if not isinstance(raw, Mapping):
        return None
    coords = {}
    for key in ("x", "y", "width", "height"):
        value = raw.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        coords[key] = float(value)
    return BoundingBox(**coords)


def transform_api_signature(api_sig: Dict[str, Any], document_id: int) -> Signature:
    return Signature(
        id=api_sig["id"],
        page_id=api_sig["page_id"],
        # Owning document comes from the caller's context.
        document_id=document_id,
        stakeholder_id=api_sig.get("stakeholder_id"),
        ai_signature_id=api_sig.get("ai_signature_id"),
        confidence=parse_confidence(api_sig.get("ai_confidence")),
        coordinates=parse_bounding_box(api_sig.get("bounding_box_json")),
        is_consistent_with_stakeholder_group=api_sig.get("is_consistent_with_stakeholder_group"),
        is_unique_among_stakeholders=api_sig.get("is_unique_among_stakeholders"),
        analysis_notes=api_sig.get("analysis_notes"),
    )


def transform_api_page(api_page: Dict[str, Any], document_id: int) -> Page:
    return Page(
        id=api_page["id"],
        page_number=api_page["page_number"],
        html_content=api_page.get("generated_form_html"),
        text_content=api_page.get("text_content"),
        signatures=[
            transform_api_signature(sig, document_id)
            for sig in (api_page.get("signatures") or [])
        ],
        document_id=api_page.get("document_id", document_id),
    )


def transform_api_document(api_doc: Dict[str, Any]) -> Document:
    document_id = api_doc["id"]
    return Document(
        id=document_id,
        name=api_doc.get("file_name") or "",
        uploaded_at=api_doc.get("created_at") or "",
        total_pages=api_doc.get("total_pages") or 0,
        project_id=api_doc["project_id"],
        pages=[transform_api_page(page, document_id) for page in (api_doc.get("pages") or [])],
        chat_session_id=api_doc.get("chat_session_id"),
    )


def transform_api_proposal(api_proposal: Dict[str, Any]) -> Proposal:
    return Proposal(
        id=api_proposal["id"],
        application_number=api_proposal.get("application_number"),
        name=api_proposal.get("name") or "",
        created_at=api_proposal.get("created_at") or "",
        documents=[transform_api_document(doc) for doc in (api_proposal.get("documents") or [])],
        signature_analysis_status=api_proposal.get("signature_analysis_status"),
        signature_analysis_report_html=api_proposal.get("signature_analysis_report_html"),
        chat_session_id=api_proposal.get("chat_session_id"),
    )


def transform_api_proposals(api_proposals: List[Dict[str, Any]]) -> List[Proposal]:
    return [transform_api_proposal(item) for item in api_proposals]


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"expected {what} to be an object, got {type(value).__name__}")
    return value


def transform_chat_message(api_message: Mapping[str, Any]) -> ChatMessage:
    api_message = _require_mapping(api_message, "chat message")
    return ChatMessage(
        id=str(api_message.get("id", "")),
        role=api_message.get("role") or "model",
        content=api_message.get("content") or "",
        timestamp=api_message.get("timestamp") or api_message.get("created_at") or "",
        file_uri=api_message.get("file_uri"),
        file_mime_type=api_message.get("file_mime_type"),
    )


def transform_chat_history(payload: Mapping[str, Any]) -> ChatHistory:
    """Raises TypeError when the payload, its session or a message is not an object."""
    payload = _require_mapping(payload, "chat history")
    session = _require_mapping(payload.get("session") or {}, "chat session")
    messages = payload.get("messages") or []
    if not isinstance(messages, list):
        raise TypeError(f"expected a list of chat messages, got {type(messages).__name__}")
    return ChatHistory(
        session=ChatSessionInfo(
            id=str(session.get("id", "")),
            title=session.get("title") or "",
            created_at=session.get("created_at"),
        ),
        messages=[transform_chat_message(msg) for msg in messages],
    )


def transform_report_data(payload: Dict[str, Any]) -> SignatureAnalysisReportData:
    """Report payloads are accepted in snake_case or camelCase."""
    return SignatureAnalysisReportData.model_validate(payload)
