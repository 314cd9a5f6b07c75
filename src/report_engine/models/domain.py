"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RawDocument:
    """A candidate document as delivered by any collector (search, scraper or feed)."""

    title: str
    url: str = ""
    snippet: str | None = None
    body: str | None = None
    author: str | None = None
    published_at: datetime | None = None
    categories: list[str] = field(default_factory=list)
    guid: str | None = None
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class SubScores:
    domain_authority: float
    topical_context: float
    freshness: float
    extractability: float


@dataclass
class Document:
    content_hash: str
    source: str
    title: str
    url: str
    snippet: str
    body: str
    author: str | None
    published_at: datetime | None
    categories: list[str]
    language: str

    domain_authority: float
    topical_context: float
    freshness: float
    extractability: float
    composite_score: float

    has_statistics: bool
    has_dates: bool
    has_numbers: bool
    word_count: int

    metadata: dict = field(default_factory=dict)
    collected_at: datetime = field(default_factory=utcnow)

    @property
    def sub_scores(self) -> SubScores:
        return SubScores(
            domain_authority=self.domain_authority,
            topical_context=self.topical_context,
            freshness=self.freshness,
            extractability=self.extractability,
        )

    @property
    def effective_date(self) -> datetime:
        """Publish date, or collection date when the publish date is unknown."""
        return self.published_at or self.collected_at


@dataclass(frozen=True)
class ExtractedCitation:
    sequence: int
    document_id: str
    quoted_text: str
    context: str


@dataclass
class Citation:
    citation_id: str
    report_id: str
    document_id: str
    sequence: int
    quoted_text: str
    context: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class ReportSection:
    title: str
    content: str
    citations: list[int]


@dataclass
class CitationExtraction:
    citations: list[ExtractedCitation]
    sections: list[ReportSection]


@dataclass
class Report:
    report_id: str
    topic: str
    topic_hash: str
    time_range_days: int
    max_sources: int
    title: str
    content: str
    executive_summary: str
    methodology: str
    html_content: str
    confidence_score: float
    source_count: int
    citation_count: int
    word_count: int
    generation_time_ms: float
    source_ids: list[str]
    render_path: str | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class ReportOutcome:
    status: Literal["completed", "failed"]
    report: Report | None = None
    error_code: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    @classmethod
    def completed(cls, report: Report) -> ReportOutcome:
        return cls(status="completed", report=report)

    @classmethod
    def failed(cls, error_code: str, error: str) -> ReportOutcome:
        return cls(status="failed", error_code=error_code, error=error)


@dataclass
class IngestionStats:
    source: str
    collected: int = 0
    processed: int = 0
    duplicates: int = 0
    skipped: int = 0
    errors: int = 0
    avg_score: float = 0.0
    duration_ms: float = 0.0
