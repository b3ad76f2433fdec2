# ## File: pages/3_Signature_Report.py
# Version: v1.3.0
# Date: 2026-09-26
# Purpose: Signature analysis report for a proposal. Shows the structured
#          report when the API provides one, otherwise the HTML report.

import streamlit as st
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from documentwise_engine import session
from documentwise_engine.exceptions import ConfigurationError
from documentwise_engine.models import SignatureAnalysisReportData, StakeholderAnalysis
from documentwise_engine.presentation import (
    format_confidence,
    format_date,
    report_status_tone,
    truncate_names,
)
from documentwise_engine.ui_components import (
    page_header,
    render_config_error,
    render_error,
    render_version_footer,
    status_badge,
)
from documentwise_engine.utils import get_logger

logger = get_logger(__name__)

st.set_page_config(
    page_title="Signature Report - DocumentWise",
    page_icon="🔍",
    layout="wide"
)


def render_summary(report: SignatureAnalysisReportData) -> None:
    summary = report.overall_summary
    docs_col, people_col, status_col = st.columns(3)
    with docs_col:
        st.metric("Documents Analyzed", summary.documents_analyzed.count)
        st.caption(truncate_names(summary.documents_analyzed.names))
    with people_col:
        st.metric("Stakeholders Identified", summary.stakeholders_identified.count)
        st.caption(truncate_names(summary.stakeholders_identified.names))
    with status_col:
        status = summary.overall_status
        st.markdown("**Overall Status**")
        st.markdown(status_badge(status.status, report_status_tone(status.status)))
        if status.description:
            st.caption(status.description)


def render_stakeholder(store, proposal_id: int, analysis: StakeholderAnalysis) -> None:
    title = f"{analysis.stakeholder_name} ({analysis.roles})" if analysis.roles else analysis.stakeholder_name
    with st.expander(title, expanded=True):
        st.markdown(status_badge(analysis.status, report_status_tone(analysis.status)))

        results = analysis.analysis_results
        consistency_col, uniqueness_col = st.columns(2)
        with consistency_col:
            consistency = results.intra_stakeholder_consistency
            st.markdown("**Consistency across documents**")
            st.markdown(status_badge(consistency.result, report_status_tone(consistency.result)))
            if consistency.confidence is not None:
                st.caption(f"Confidence: {format_confidence(consistency.confidence)}")
            if consistency.notes:
                st.caption(consistency.notes)
        with uniqueness_col:
            uniqueness = results.inter_stakeholder_uniqueness
            st.markdown("**Uniqueness among stakeholders**")
            st.markdown(status_badge(uniqueness.result, report_status_tone(uniqueness.result)))
            if uniqueness.notes:
                st.caption(uniqueness.notes)

        if not analysis.signature_instances:
            st.caption("No signature instances recorded.")
            return
        columns = st.columns(min(4, len(analysis.signature_instances)))
        for index, instance in enumerate(analysis.signature_instances):
            with columns[index % len(columns)]:
                image = store.repository.get_signature_image(proposal_id, instance.signature_instance_id)
                if image.ok:
                    st.image(image.data, use_container_width=True)
                else:
                    st.caption("Image not available")
                location = instance.document_name
                if instance.page_number is not None:
                    location = f"{location}, page {instance.page_number}"
                st.caption(location)
                if instance.role:
                    st.caption(instance.role)


def render_cross_stakeholder(report: SignatureAnalysisReportData) -> None:
    if not report.cross_stakeholder_uniqueness:
        return
    st.subheader("Cross-Stakeholder Comparison")
    for comparison in report.cross_stakeholder_uniqueness:
        with st.container(border=True):
            pair_col, status_col = st.columns([3, 1])
            with pair_col:
                st.markdown(f"**{comparison.stakeholder_pair}**")
                st.caption(comparison.comparison_result_description)
            with status_col:
                st.markdown(status_badge(comparison.status, report_status_tone(comparison.status)))


def render_structured_report(store, proposal_id: int, report: SignatureAnalysisReportData) -> None:
    page_header(
        f"Signature Analysis: {report.proposal_name}",
        f"Application No: {report.proposal_application_number or 'N/A'} | "
        f"Generated: {format_date(report.generated_at, '%d %b %Y %H:%M')}",
    )
    render_summary(report)
    st.subheader("Stakeholder Analysis")
    if report.stakeholder_analyses:
        for analysis in report.stakeholder_analyses:
            render_stakeholder(store, proposal_id, analysis)
    else:
        st.info("No stakeholders were identified.")
    render_cross_stakeholder(report)


def main():
    proposal_id = session.selected_proposal_id()
    if proposal_id is None:
        render_error("Invalid Proposal ID format.")
        if st.button("← Back to Dashboard"):
            session.open_dashboard()
        return

    try:
        store = session.get_store()
    except ConfigurationError as e:
        render_config_error(e)
        return

    if st.button("← Back to Proposal"):
        session.open_proposal(proposal_id)

    repository = store.repository
    with st.spinner("Loading report..."):
        data = repository.get_signature_analysis_report_data(proposal_id)
    if data.ok:
        render_structured_report(store, proposal_id, data.data)
    else:
        logger.info(f"Structured report unavailable for proposal {proposal_id}: {data.error}")
        html = repository.get_signature_analysis_report(proposal_id)
        page_header("Signature Analysis Report")
        if html.ok:
            st.html(html.data)
        else:
            render_error(html.error)

    render_version_footer()


main()
