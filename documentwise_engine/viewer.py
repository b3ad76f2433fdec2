# ## File: documentwise_engine/viewer.py
# Version: 1.1.0
# Date: 2026-09-22
# Purpose: Document viewer state: current page, zoom, and the page assets
#          (rendered PDF page and extracted HTML) for that page.
#          Navigation outside [1, total_pages] is ignored and fetches nothing.

from __future__ import annotations

from typing import List, Optional

from .models import Document, Signature
from .parallel import load_parallel
from .proposal_store import ProposalStore
from .utils import get_logger
from .validation import is_valid_page

logger = get_logger(__name__)

MIN_ZOOM = 0.5
MAX_ZOOM = 2.0
ZOOM_STEP = 0.1

HTML_MODE_INLINE = "inline"
HTML_MODE_IFRAME = "iframe"


class DocumentViewer:
    """Tracks one document's viewer state and loads page assets on demand."""

    def __init__(
        self,
        store: ProposalStore,
        proposal_id: int,
        document: Document,
        current_page: int = 1,
        html_mode: str = HTML_MODE_INLINE,
    ):
        self.store = store
        self.proposal_id = proposal_id
        self.document = document
        self.current_page = current_page if is_valid_page(current_page, document.total_pages) else 1
        self.html_mode = html_mode
        self.zoom = 1.0

        self.page_image: Optional[bytes] = None
        self.page_image_error: Optional[str] = None
        self.html: Optional[str] = None
        self.html_view_url: Optional[str] = None
        self.html_error: Optional[str] = None
        self.loaded_page: Optional[int] = None

    @property
    def total_pages(self) -> int:
        return self.document.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def signatures_on_page(self) -> List[Signature]:
        page = self.document.get_page(self.current_page)
        return list(page.signatures) if page else []

    # --- Navigation ---

    def go_to_page(self, page_number: int) -> bool:
        """
        Move to page_number and load its assets.

        Returns:
            False, with no state change and no request, when the page is out of range
        """
        if not is_valid_page(page_number, self.total_pages):
            logger.debug(f"Ignoring navigation to page {page_number} of {self.total_pages}")
            return False
        self.current_page = page_number
        self.load_page()
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.current_page - 1)

    # --- Zoom ---

    def _set_zoom(self, value: float) -> float:
        self.zoom = round(min(MAX_ZOOM, max(MIN_ZOOM, value)), 1)
        return self.zoom

    def zoom_in(self) -> float:
        return self._set_zoom(self.zoom + ZOOM_STEP)

    def zoom_out(self) -> float:
        return self._set_zoom(self.zoom - ZOOM_STEP)

    def reset_zoom(self) -> float:
        return self._set_zoom(1.0)

    # --- Assets ---

    def set_html_mode(self, mode: str) -> None:
        if mode not in (HTML_MODE_INLINE, HTML_MODE_IFRAME):
            raise ValueError(f"Unknown HTML mode: {mode}")
        if mode != self.html_mode:
            self.html_mode = mode
            self.load_html()

    def load_html(self) -> None:
        repository = self.store.repository
        page = self.current_page
        if self.html_mode == HTML_MODE_IFRAME:
            result = repository.get_page_html_view_url(self.proposal_id, self.document.id, page)
            self.html_view_url = result.data if result.ok else None
        else:
            result = repository.get_page_html(self.proposal_id, self.document.id, page)
            # A failed refresh keeps whatever was shown before.
            if result.ok:
                self.html = result.data
        self.html_error = result.error

    def load_page(self) -> None:
        """Fetch the rendered page and its HTML together."""
        repository = self.store.repository
        page = self.current_page
        results = load_parallel(
            image=lambda: repository.get_page_image(self.proposal_id, self.document.id, page),
            html=self.load_html,
        )
        image = results["image"]
        self.page_image = image.data if image.ok else None
        self.page_image_error = image.error
        self.loaded_page = page

    def extract_html(self):
        """Ask the backend to (re)generate HTML for the current page."""
        return self.store.extract_html(self.proposal_id, self.document.id, self.current_page)
