"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from report_engine.config.settings import Settings
from report_engine.exceptions import GenerationError
from report_engine.generation.prompt_templates import SUMMARY_SYSTEM
from report_engine.models.domain import Document, SubScores
from report_engine.protocols.llm import PromptMessage
from report_engine.scoring.content_hash import content_hash
from report_engine.scoring.relevance import composite_score

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_document(
    title: str = "Employee attrition in India",
    url: str | None = None,
    score: float = 0.6,
    age_days: float | None = 5,
    snippet: str = "",
    body: str = "",
) -> Document:
    """A stored document whose four sub-scores all equal ``score``, so its composite equals ``score``."""
    url = url or "https://news.example.com/" + "-".join(title.lower().split())
    sub = SubScores(score, score, score, score)
    return Document(
        content_hash=content_hash(title, url),
        source="test",
        title=title,
        url=url,
        snippet=snippet or title,
        body=body,
        author=None,
        published_at=NOW - timedelta(days=age_days) if age_days is not None else None,
        categories=[],
        language="en",
        domain_authority=sub.domain_authority,
        topical_context=sub.topical_context,
        freshness=sub.freshness,
        extractability=sub.extractability,
        composite_score=round(composite_score(sub), 10),
        has_statistics=False,
        has_dates=False,
        has_numbers=False,
        word_count=len(body.split()),
        collected_at=NOW,
    )


class FakeLLM:
    """Scripted text generator that records every call."""

    def __init__(
        self,
        report_text: str = "## Key Findings\nAttrition rose [Source 1].",
        summary_text: str = "A short executive summary.",
        fail_report: bool = False,
        fail_summary: bool = False,
    ) -> None:
        self.report_text = report_text
        self.summary_text = summary_text
        self.fail_report = fail_report
        self.fail_summary = fail_summary
        self.calls: list[list[PromptMessage]] = []

    async def generate(
        self,
        messages: list[PromptMessage],
        max_tokens: int = 4000,
        temperature: float = 0.3,
    ) -> str:
        self.calls.append(messages)
        is_summary = messages[0].content == SUMMARY_SYSTEM
        if is_summary:
            if self.fail_summary:
                raise GenerationError("quota exceeded")
            return self.summary_text
        if self.fail_report:
            raise GenerationError("transport error")
        return self.report_text


class FakeDocStore:
    """In-memory document store; search results are scripted per query."""

    def __init__(self, results: dict[str, list[Document]] | None = None) -> None:
        self.results = results or {}
        self.queries: list[tuple[str, int]] = []

    async def search_by_text(self, query: str, limit: int) -> list[Document]:
        self.queries.append((query, limit))
        return list(self.results.get(query, []))[:limit]

    async def upsert(self, document: Document) -> Document:
        return document

    async def get_by_id(self, doc_id: str) -> Document | None:
        for docs in self.results.values():
            for doc in docs:
                if doc.content_hash == doc_id:
                    return doc
        return None

    async def exists(self, doc_id: str) -> bool:
        return await self.get_by_id(doc_id) is not None


class FakeReportStore:
    def __init__(self, fail: bool = False) -> None:
        self.reports: dict = {}
        self.render_paths: dict[str, str] = {}
        self.fail = fail

    async def create(self, report):
        from report_engine.exceptions import PersistenceError

        if self.fail:
            raise PersistenceError("disk full")
        self.reports[report.report_id] = report
        return report

    async def get_by_id(self, report_id):
        return self.reports.get(report_id)

    async def attach_render_path(self, report_id, render_path):
        self.render_paths[report_id] = render_path


class FakeCitationStore:
    def __init__(self, fail: bool = False) -> None:
        self.citations: list = []
        self.fail = fail

    async def create_batch(self, citations):
        from report_engine.exceptions import PersistenceError

        if self.fail:
            raise PersistenceError("constraint violation")
        self.citations.extend(citations)
        return citations


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings():
    """Test settings with temp paths."""
    tmp = tempfile.mkdtemp()
    return Settings(
        google_api_key="",
        sqlite_db_path=str(Path(tmp) / "test_reports.db"),
        render_output_dir=str(Path(tmp) / "rendered"),
    )


@pytest.fixture
def tmp_dir():
    """Create a temporary directory."""
    return tempfile.mkdtemp()
