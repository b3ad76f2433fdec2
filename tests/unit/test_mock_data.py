from documentwise_engine.mock_data import (
    MOCK_PREVIEW_UNAVAILABLE,
    InMemoryProposalRepository,
    count_pdf_pages,
)
from documentwise_engine.models import AnalysisState
from documentwise_engine.validation import PDF_ONLY_ERROR, PROPOSAL_NAME_ERROR


def test_seeded_proposals():
    repository = InMemoryProposalRepository()
    proposals = repository.list_proposals().data
    assert [p.name for p in proposals] == [
        "Quarterly Business Review Documents",
        "New Client Onboarding Pack",
        "Investment Round A Pitch Deck",
    ]
    assert [len(p.documents) for p in proposals] == [2, 1, 0]
    assert all(p.application_number.startswith("APP-") for p in proposals)


def test_reads_are_copies():
    repository = InMemoryProposalRepository()
    first = repository.get_proposal(1).data
    first.name = "Changed"
    assert repository.get_proposal(1).data.name == "Quarterly Business Review Documents"


def test_create_validates_before_allocating_id():
    repository = InMemoryProposalRepository(seed=False)
    assert repository.create_proposal("ab").error == PROPOSAL_NAME_ERROR
    assert repository.create_proposal("Valid name").data.id == 1


def test_missing_proposal():
    repository = InMemoryProposalRepository(seed=False)
    assert repository.get_proposal(5).error == "Proposal not found."
    assert repository.get_proposal(0).error == "Proposal ID is required."


def test_upload_counts_pages(minimal_pdf):
    repository = InMemoryProposalRepository(seed=False)
    proposal_id = repository.create_proposal("Upload target").data.id
    pdf = minimal_pdf + b"\n2 0 obj << /Type /Page >> endobj\n3 0 obj << /Type /Pages >> endobj"

    document = repository.upload_document(proposal_id, "two.pdf", pdf, "application/pdf").data

    assert document.total_pages == 2
    assert [p.page_number for p in document.pages] == [1, 2]
    assert len(repository.get_proposal(proposal_id).data.documents) == 1


def test_upload_rejects_non_pdf():
    repository = InMemoryProposalRepository(seed=False)
    proposal_id = repository.create_proposal("Upload target").data.id
    assert repository.upload_document(proposal_id, "a.txt", b"text").error == PDF_ONLY_ERROR


def test_count_pdf_pages_minimum():
    assert count_pdf_pages(b"%PDF-1.4") == 1


def test_analysis_completes_after_delay(fake_clock, minimal_pdf):
    repository = InMemoryProposalRepository(seed=False, analysis_seconds=3, clock=fake_clock)
    proposal_id = repository.create_proposal("Analysis").data.id
    assert repository.start_signature_analysis(proposal_id).error == "Proposal has no documents to analyse."
    repository.upload_document(proposal_id, "a.pdf", minimal_pdf)

    assert repository.start_signature_analysis(proposal_id).ok
    assert repository.get_proposal(proposal_id).data.analysis_state == AnalysisState.IN_PROGRESS
    assert repository.get_signature_analysis_report(proposal_id).error == "Report not found or analysis not complete."

    fake_clock.advance(3)
    proposal = repository.get_proposal(proposal_id).data
    assert proposal.analysis_state == AnalysisState.COMPLETED
    assert "a.pdf" in repository.get_signature_analysis_report(proposal_id).data
    report = repository.get_signature_analysis_report_data(proposal_id).data
    assert report.overall_summary.documents_analyzed.names == ["a.pdf"]


def test_extract_html_then_fetch(minimal_pdf):
    repository = InMemoryProposalRepository(seed=False)
    proposal_id = repository.create_proposal("Extraction").data.id
    document = repository.upload_document(proposal_id, "a.pdf", minimal_pdf).data

    assert "not available" in repository.get_page_html(proposal_id, document.id, 1).data
    assert repository.extract_html(proposal_id, document.id, 1).ok
    assert "<h2>Page 1</h2>" in repository.get_page_html(proposal_id, document.id, 1).data
    assert repository.get_page_html(proposal_id, document.id, 2).error == "Missing parameters."


def test_previews_unavailable():
    repository = InMemoryProposalRepository()
    assert repository.get_page_image(1, 2, 1).error == MOCK_PREVIEW_UNAVAILABLE
    assert repository.get_signature_image(1, 1).error == MOCK_PREVIEW_UNAVAILABLE


def test_delete():
    repository = InMemoryProposalRepository()
    assert repository.delete_proposal(1).data == 1
    assert repository.get_proposal(1).error == "Proposal not found."
