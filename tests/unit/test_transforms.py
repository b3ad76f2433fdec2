"""
Unit Tests for API payload transforms
Version: 1.0.0
Purpose: Field renames, confidence parsing and bounding box handling
"""

import pytest

from documentwise_engine.transforms import (
    parse_bounding_box,
    parse_confidence,
    transform_api_document,
    transform_api_proposal,
    transform_chat_history,
    transform_report_data,
)


class TestParseConfidence:
    @pytest.mark.parametrize("raw,expected", [
        ("0.93", 0.93),
        (" 0.5 ", 0.5),
        ("0.75 (high)", 0.75),
        ("1e-1", 0.1),
        (".8", 0.8),
        (0.6, 0.6),
        (1, 1.0),
    ])
    def test_numeric_values(self, raw, expected):
        assert parse_confidence(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "high", "nan", "inf", float("nan"), True])
    def test_unparseable_values(self, raw):
        assert parse_confidence(raw) is None


class TestParseBoundingBox:
    def test_valid_box(self):
        box = parse_bounding_box({"x": 10, "y": 20.5, "width": 100, "height": 40})
        assert (box.x, box.y, box.width, box.height) == (10.0, 20.5, 100.0, 40.0)

    @pytest.mark.parametrize("raw", [
        None,
        "10,20,30,40",
        {"x": 1, "y": 2, "width": 3},
        {"x": "1", "y": 2, "width": 3, "height": 4},
        {"x": True, "y": 2, "width": 3, "height": 4},
    ])
    def test_invalid_box(self, raw):
        assert parse_bounding_box(raw) is None


def test_document_renames_and_infers_signature_document():
    document = transform_api_document({
        "id": 9,
        "file_name": "contract.pdf",
        "created_at": "2024-05-01T09:30:00Z",
        "total_pages": 2,
        "project_id": 42,
        "chat_session_id": "doc-chat",
        "pages": [{
            "id": 90,
            "page_number": 1,
            "generated_form_html": "<form></form>",
            "text_content": "Signed by",
            "signatures": [{
                "id": 500,
                "page_id": 90,
                "stakeholder_id": 3,
                "ai_confidence": "0.91",
                "bounding_box_json": {"x": 1, "y": 2, "width": 3, "height": 4},
                "is_consistent_with_stakeholder_group": True,
            }],
        }],
    })

    assert document.name == "contract.pdf"
    assert document.uploaded_at == "2024-05-01T09:30:00Z"
    assert document.project_id == 42
    assert document.chat_session_id == "doc-chat"
    page = document.get_page(1)
    assert page.html_content == "<form></form>"
    assert page.document_id == 9
    signature = page.signatures[0]
    assert signature.document_id == 9
    assert signature.confidence == pytest.approx(0.91)
    assert signature.coordinates.width == 3.0
    assert signature.is_consistent_with_stakeholder_group is True
    assert signature.is_unique_among_stakeholders is None
    assert document.get_page(2) is None


def test_proposal_defaults_for_missing_fields():
    proposal = transform_api_proposal({"id": 1, "name": "Minimal", "created_at": "2024-01-01"})
    assert proposal.documents == []
    assert proposal.application_number is None
    assert proposal.signature_analysis_status is None
    assert proposal.get_document(1) is None


def test_proposal_missing_id_raises():
    with pytest.raises(KeyError):
        transform_api_proposal({"name": "No id"})


def test_chat_history_shape():
    history = transform_chat_history({
        "session": {"id": 12, "title": "About page 2", "created_at": "2024-05-01"},
        "messages": [{"id": 1, "role": "user", "content": "hi", "created_at": "2024-05-01T10:00:00Z"}],
    })
    assert history.session.id == "12"
    assert history.messages[0].timestamp == "2024-05-01T10:00:00Z"
    assert history.messages[0].id == "1"


def test_report_data_accepts_snake_case():
    report = transform_report_data({
        "proposal_id": 42,
        "generated_at": "2024-05-02T10:00:00Z",
        "cross_stakeholder_uniqueness": [
            {"stakeholder_pair": "A / B", "status": "Unique"},
        ],
    })
    assert report.proposal_id == 42
    assert report.cross_stakeholder_uniqueness[0].stakeholder_pair == "A / B"
    assert report.overall_summary.overall_status.status == "Unknown"
