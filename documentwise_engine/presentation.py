"""
Presentation helpers shared by the Streamlit pages.

Pure functions only, so the dashboard filtering and status wording can be
tested without a running Streamlit session.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from .models import AnalysisState, Proposal

# tone -> (emoji, Streamlit badge colour)
TONES = {
    "success": ("✅", "green"),
    "warning": ("⚠️", "orange"),
    "error": ("❌", "red"),
    "progress": ("🔄", "blue"),
    "neutral": ("📊", "gray"),
}

_STATE_LABELS = {
    AnalysisState.NOT_STARTED: ("Not Started", "neutral"),
    AnalysisState.IN_PROGRESS: ("In Progress", "progress"),
    AnalysisState.COMPLETED: ("Completed", "success"),
    AnalysisState.FAILED: ("Failed", "error"),
}


def filter_proposals(proposals: Iterable[Proposal], search_term: str) -> List[Proposal]:
    """Case-insensitive match on name or application number; blank terms match everything."""
    term = (search_term or "").strip().lower()
    if not term:
        return list(proposals)
    return [
        p for p in proposals
        if term in p.name.lower() or (p.application_number and term in p.application_number.lower())
    ]


def analysis_status_label(proposal: Proposal) -> Tuple[str, str]:
    """(label, tone) for a proposal's signature analysis status."""
    state = proposal.analysis_state
    if state == AnalysisState.UNKNOWN:
        return proposal.signature_analysis_status or "Unknown", "neutral"
    return _STATE_LABELS[state]


def analysis_button_label(proposal: Proposal) -> str:
    if proposal.analysis_state in (AnalysisState.COMPLETED, AnalysisState.FAILED):
        return "Re-analyze Signatures"
    return "Start Signature Analysis"


def can_start_analysis(proposal: Proposal, busy: bool = False) -> bool:
    """Analysis needs documents and must not already be running."""
    return (
        not busy
        and bool(proposal.documents)
        and proposal.analysis_state != AnalysisState.IN_PROGRESS
    )


def report_status_tone(status: Optional[str]) -> str:
    """Tone for a free-text report status such as "Verified" or "Potential Match"."""
    lower = (status or "").lower()
    # Order matters: "mismatch" contains "match", "potential match" contains "match".
    if "mismatch" in lower or "error" in lower:
        return "error"
    if "warning" in lower or "potential match" in lower or "requires review" in lower:
        return "warning"
    if "verified" in lower or "match" in lower or "unique" in lower:
        return "success"
    return "neutral"


def format_date(iso_value: Optional[str], fmt: str = "%d %b %Y") -> str:
    if not iso_value:
        return "N/A"
    try:
        return datetime.fromisoformat(iso_value.replace("Z", "+00:00")).strftime(fmt)
    except ValueError:
        return iso_value


def format_confidence(confidence: Optional[float]) -> str:
    """Fractions in [0, 1] become percentages with one decimal."""
    if confidence is None:
        return "N/A"
    return f"{confidence * 100:.1f}%"


def truncate_names(names: Iterable[str], limit: int = 50) -> str:
    joined = ", ".join(names)
    if len(joined) <= limit:
        return joined
    return joined[:limit] + "..."
