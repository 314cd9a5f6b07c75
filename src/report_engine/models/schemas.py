"""Pydantic models for reading raw documents and writing report summaries."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from report_engine.models.domain import RawDocument, Report


class RawDocumentPayload(BaseModel):
    title: str = "Untitled"
    url: str = ""
    snippet: str | None = None
    content: str | None = None
    full_content: str | None = None
    author: str | None = None
    published_at: datetime | None = None
    categories: list[str] = Field(default_factory=list)
    guid: str | None = None
    metadata: dict = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _blank_title(cls, v):
        return v or "Untitled"

    def to_raw_document(self) -> RawDocument:
        return RawDocument(
            title=self.title,
            url=self.url,
            snippet=self.snippet,
            body=self.content or self.full_content,
            author=self.author,
            published_at=self.published_at,
            categories=list(self.categories),
            guid=self.guid,
            metadata=dict(self.metadata),
        )


class ReportSummary(BaseModel):
    report_id: str
    title: str
    source_count: int
    citation_count: int
    word_count: int
    confidence_score: float
    generation_time_ms: float
    render_path: str | None = None

    @classmethod
    def from_report(cls, report: Report) -> ReportSummary:
        return cls(
            report_id=report.report_id,
            title=report.title,
            source_count=report.source_count,
            citation_count=report.citation_count,
            word_count=report.word_count,
            confidence_score=round(report.confidence_score, 4),
            generation_time_ms=round(report.generation_time_ms, 2),
            render_path=report.render_path,
        )
