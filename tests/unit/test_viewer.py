"""
Unit Tests for DocumentViewer
Version: 1.0.0
Purpose: Page navigation bounds, zoom clamping and page asset loading
"""

from unittest.mock import MagicMock

import pytest

from documentwise_engine.models import ActionResult, Document, Page, Signature
from documentwise_engine.proposal_store import ProposalStore
from documentwise_engine.repository import ProposalRepository
from documentwise_engine.viewer import (
    HTML_MODE_IFRAME,
    HTML_MODE_INLINE,
    MAX_ZOOM,
    MIN_ZOOM,
    DocumentViewer,
)


@pytest.fixture
def document():
    signature = Signature(id=500, page_id=12, document_id=9, confidence=0.9)
    return Document(
        id=9,
        name="contract.pdf",
        uploaded_at="2024-05-01",
        total_pages=3,
        project_id=42,
        pages=[
            Page(id=11, page_number=1, document_id=9),
            Page(id=12, page_number=2, document_id=9, signatures=[signature]),
            Page(id=13, page_number=3, document_id=9),
        ],
    )


@pytest.fixture
def repository():
    repo = MagicMock(spec=ProposalRepository)
    repo.get_page_image.side_effect = lambda p, d, n: ActionResult.success(f"pdf-{n}".encode())
    repo.get_page_html.side_effect = lambda p, d, n: ActionResult.success(f"<p>page {n}</p>")
    repo.get_page_html_view_url.side_effect = lambda p, d, n: ActionResult.success(f"http://api.test/view/{n}")
    repo.extract_html.return_value = ActionResult.success("HTML extraction process started.")
    return repo


@pytest.fixture
def viewer(repository, document):
    return DocumentViewer(ProposalStore(repository), 42, document)


class TestNavigation:
    def test_starts_on_first_page(self, viewer):
        assert viewer.current_page == 1
        assert not viewer.has_previous
        assert viewer.has_next

    def test_invalid_initial_page_falls_back_to_first(self, repository, document):
        assert DocumentViewer(ProposalStore(repository), 42, document, current_page=7).current_page == 1

    def test_go_to_page_loads_assets(self, viewer, repository):
        assert viewer.go_to_page(2) is True

        assert viewer.current_page == 2
        assert viewer.loaded_page == 2
        assert viewer.page_image == b"pdf-2"
        assert viewer.html == "<p>page 2</p>"
        repository.get_page_image.assert_called_once_with(42, 9, 2)
        repository.get_page_html.assert_called_once_with(42, 9, 2)

    @pytest.mark.parametrize("page", [0, -1, 4, 100])
    def test_out_of_range_is_ignored(self, viewer, repository, page):
        assert viewer.go_to_page(page) is False

        assert viewer.current_page == 1
        assert viewer.loaded_page is None
        repository.get_page_image.assert_not_called()
        repository.get_page_html.assert_not_called()

    def test_previous_on_first_page_is_ignored(self, viewer, repository):
        assert viewer.previous_page() is False
        repository.get_page_image.assert_not_called()

    def test_next_on_last_page_is_ignored(self, viewer, repository):
        viewer.go_to_page(3)
        repository.reset_mock()
        assert viewer.next_page() is False
        assert viewer.current_page == 3
        repository.get_page_image.assert_not_called()

    def test_signatures_follow_current_page(self, viewer):
        assert viewer.signatures_on_page == []
        viewer.next_page()
        assert [s.id for s in viewer.signatures_on_page] == [500]


class TestZoom:
    def test_steps_are_rounded(self, viewer):
        for _ in range(3):
            viewer.zoom_in()
        assert viewer.zoom == 1.3
        viewer.zoom_out()
        assert viewer.zoom == 1.2

    def test_clamped(self, viewer):
        for _ in range(30):
            viewer.zoom_in()
        assert viewer.zoom == MAX_ZOOM
        for _ in range(30):
            viewer.zoom_out()
        assert viewer.zoom == MIN_ZOOM

    def test_reset(self, viewer):
        viewer.zoom_in()
        assert viewer.reset_zoom() == 1.0


class TestHtml:
    def test_failed_refresh_keeps_previous_html(self, viewer, repository):
        viewer.load_page()
        repository.get_page_html.side_effect = None
        repository.get_page_html.return_value = ActionResult.failure("Failed to fetch HTML content: HTTP 500")

        viewer.load_html()

        assert viewer.html == "<p>page 1</p>"
        assert viewer.html_error == "Failed to fetch HTML content: HTTP 500"

    def test_iframe_mode_uses_view_url(self, viewer, repository):
        viewer.set_html_mode(HTML_MODE_IFRAME)

        assert viewer.html_view_url == "http://api.test/view/1"
        repository.get_page_html.assert_not_called()

    def test_same_mode_does_not_reload(self, viewer, repository):
        viewer.set_html_mode(HTML_MODE_INLINE)
        repository.get_page_html.assert_not_called()

    def test_unknown_mode(self, viewer):
        with pytest.raises(ValueError):
            viewer.set_html_mode("popup")

    def test_extract_goes_through_store(self, viewer, repository):
        viewer.go_to_page(2)
        result = viewer.extract_html()
        assert result.ok
        repository.extract_html.assert_called_once_with(42, 9, 2)

    def test_image_error_is_recorded(self, viewer, repository):
        repository.get_page_image.side_effect = None
        repository.get_page_image.return_value = ActionResult.failure("PDF page not found.")
        viewer.load_page()
        assert viewer.page_image is None
        assert viewer.page_image_error == "PDF page not found."
