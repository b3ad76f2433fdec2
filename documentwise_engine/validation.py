# ## File: documentwise_engine/validation.py
# Version: 1.0.0
# Date: 2026-09-02
# Purpose: Client-side checks that run before any request is sent.

from typing import Any, Optional

from .exceptions import ValidationError

MIN_PROPOSAL_NAME_LENGTH = 3
PDF_CONTENT_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF"

PROPOSAL_NAME_ERROR = f"Proposal name must be at least {MIN_PROPOSAL_NAME_LENGTH} characters."
PDF_ONLY_ERROR = "Please upload PDF files only."


def validate_proposal_name(name: Optional[str]) -> str:
    """
    Validate a new proposal name.

    Returns:
        The stripped name

    Raises:
        ValidationError: If the name is shorter than three characters
    """
    cleaned = (name or "").strip()
    if len(cleaned) < MIN_PROPOSAL_NAME_LENGTH:
        raise ValidationError(PROPOSAL_NAME_ERROR)
    return cleaned


def validate_pdf_upload(file_name: Optional[str], content: Optional[bytes], content_type: Optional[str] = None) -> None:
    """
    Reject anything that is not a PDF.

    The declared type (or the extension when no type is given) must say PDF
    and the bytes must start with the PDF header.
    """
    declared = (content_type or "").split(";")[0].strip().lower()
    name = (file_name or "").strip()
    if not name:
        raise ValidationError("File is required.")
    if declared:
        if declared != PDF_CONTENT_TYPE:
            raise ValidationError(PDF_ONLY_ERROR, f"got {declared}")
    elif not name.lower().endswith(".pdf"):
        raise ValidationError(PDF_ONLY_ERROR, name)
    if not content:
        raise ValidationError("File is empty.", name)
    if not content.startswith(PDF_MAGIC):
        raise ValidationError(PDF_ONLY_ERROR, f"{name} is not a PDF document")


def is_valid_page(page_number: Any, total_pages: Any) -> bool:
    if isinstance(page_number, bool) or not isinstance(page_number, int):
        return False
    if isinstance(total_pages, bool) or not isinstance(total_pages, int):
        return False
    return 1 <= page_number <= total_pages


def parse_id(raw: Any) -> Optional[int]:
    """Positive integer id from a query-string or session value, else None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else None
        if raw is None:
            return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value > 0 else None
