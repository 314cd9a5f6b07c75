"""Tests for Pydantic schemas."""

from datetime import datetime, timezone

import pytest
from conftest import NOW
from pydantic import ValidationError

from report_engine.models.domain import Report
from report_engine.models.schemas import RawDocumentPayload, ReportSummary


def test_raw_payload_defaults():
    payload = RawDocumentPayload()
    assert payload.title == "Untitled"
    assert payload.url == ""
    assert payload.categories == []


def test_blank_title_becomes_untitled():
    assert RawDocumentPayload(title="").title == "Untitled"
    assert RawDocumentPayload(title=None).title == "Untitled"


def test_body_prefers_content_over_full_content():
    raw = RawDocumentPayload(title="T", content="short", full_content="long").to_raw_document()
    assert raw.body == "short"
    raw = RawDocumentPayload(title="T", full_content="long").to_raw_document()
    assert raw.body == "long"


def test_published_at_parsed_from_iso_string():
    payload = RawDocumentPayload(title="T", published_at="2026-10-01T08:30:00Z")
    assert payload.published_at == datetime(2026, 10, 1, 8, 30, tzinfo=timezone.utc)


def test_invalid_published_at_rejected():
    with pytest.raises(ValidationError):
        RawDocumentPayload(title="T", published_at="last tuesday")


def test_report_summary_from_report():
    report = Report(
        report_id="r-1",
        topic="attrition",
        topic_hash="abc",
        time_range_days=30,
        max_sources=15,
        title="Attrition - Indian HR Market Analysis 2026",
        content="## Findings\nText",
        executive_summary="Summary",
        methodology="Method",
        html_content="<div></div>",
        confidence_score=0.812345,
        source_count=4,
        citation_count=6,
        word_count=3,
        generation_time_ms=1234.5678,
        source_ids=["a", "b", "c", "d"],
        created_at=NOW,
    )
    summary = ReportSummary.from_report(report)
    assert summary.confidence_score == 0.8123
    assert summary.generation_time_ms == 1234.57
    assert summary.render_path is None
    assert summary.model_dump()["citation_count"] == 6
