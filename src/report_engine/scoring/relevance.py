"""Relevance scoring: COMPOSITE = 0.4*authority + 0.3*context + 0.2*freshness + 0.1*extractability."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from urllib.parse import urlparse

from report_engine.config.constants import (
    EXTRACTABILITY_BASE,
    FRESHNESS_FLOOR,
    FRESHNESS_HALF_LIFE_DAYS,
    FRESHNESS_UNKNOWN_DATE,
    KEYWORD_DENSITY_SATURATION,
    SCRAPER_VERSION,
    SNIPPET_MAX_CHARS,
    W_DOMAIN_AUTHORITY,
    W_EXTRACTABILITY,
    W_FRESHNESS,
    W_TOPICAL_CONTEXT,
)
from report_engine.config.tables import ScoringTables
from report_engine.models.domain import Document, RawDocument, SubScores
from report_engine.observability.logger import get_logger
from report_engine.scoring.content_hash import document_identity
from report_engine.scoring.patterns import (
    DATE_FLAG_PATTERNS,
    EXTRACTABILITY_SIGNALS,
    NUMBER_FLAG_PATTERN,
    STATISTICS_FLAG_PATTERNS,
    keyword_pattern,
)

logger = get_logger("relevance_scorer")


def composite_score(sub: SubScores) -> float:
    score = (
        W_DOMAIN_AUTHORITY * sub.domain_authority
        + W_TOPICAL_CONTEXT * sub.topical_context
        + W_FRESHNESS * sub.freshness
        + W_EXTRACTABILITY * sub.extractability
    )
    return max(0.0, min(1.0, score))


def _as_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def count_words(text: str | None) -> int:
    if not text:
        return 0
    return len(text.split())


def create_snippet(text: str | None, max_length: int = SNIPPET_MAX_CHARS) -> str:
    if not text:
        return ""
    cleaned = re.sub(r"\s+", " ", text).strip()
    return cleaned[:max_length] + "..." if len(cleaned) > max_length else cleaned


class RelevanceScorer:
    def __init__(self, tables: ScoringTables | None = None) -> None:
        self._tables = tables or ScoringTables.default()
        self._keyword_patterns = [keyword_pattern(k) for k in self._tables.context_keywords]

    def score_document(
        self, raw: RawDocument, source_label: str, now: datetime | None = None
    ) -> Document:
        now = now or datetime.now(timezone.utc)
        title = raw.title or ""
        content = f"{title} {raw.snippet or ''} {raw.body or ''}".lower()

        sub = self.sub_scores(raw.url or "", content, raw.published_at, now)

        return Document(
            content_hash=document_identity(raw),
            source=source_label,
            title=title,
            url=raw.url or raw.guid or "",
            snippet=raw.snippet or create_snippet(raw.body or title),
            body=raw.body or "",
            author=raw.author,
            published_at=_as_utc(raw.published_at) if raw.published_at else None,
            categories=list(raw.categories or []),
            language="en",
            domain_authority=sub.domain_authority,
            topical_context=sub.topical_context,
            freshness=sub.freshness,
            extractability=sub.extractability,
            composite_score=composite_score(sub),
            has_statistics=self.has_statistics(content),
            has_dates=self.has_dates(content),
            has_numbers=self.has_numbers(content),
            word_count=count_words(raw.body or raw.snippet or title),
            metadata={**(raw.metadata or {}), "scraper_version": SCRAPER_VERSION},
            collected_at=now,
        )

    def score_many(
        self, raws: list[RawDocument], source_label: str, now: datetime | None = None
    ) -> list[Document]:
        """Score a batch and return it ordered by composite score, best first."""
        if not raws:
            return []
        scored = [self.score_document(raw, source_label, now) for raw in raws]
        avg = sum(d.composite_score for d in scored) / len(scored)
        logger.info("batch_scored", source=source_label, items=len(scored), avg_score=round(avg, 3))
        return sorted(scored, key=lambda d: d.composite_score, reverse=True)

    def sub_scores(
        self, url: str, content: str, published_at: datetime | None, now: datetime
    ) -> SubScores:
        return SubScores(
            domain_authority=self.domain_authority(url),
            topical_context=self.topical_context(content),
            freshness=self.freshness(published_at, now),
            extractability=self.extractability(content),
        )

    def domain_authority(self, url: str) -> float:
        host = self._extract_host(url)
        return self._tables.domain_authority.get(host, self._tables.default_authority)

    def topical_context(self, content: str) -> float:
        total_words = len(content.split())
        if total_words == 0:
            return 0.0

        keyword_hits = sum(len(p.findall(content)) for p in self._keyword_patterns)
        score = min(1.0, keyword_hits / (total_words * KEYWORD_DENSITY_SATURATION))

        # Bonus groups stack on top of the density score
        for group in self._tables.context_bonuses:
            if group.matches(content):
                score += group.bonus

        return min(1.0, score)

    @staticmethod
    def freshness(published_at: datetime | None, now: datetime) -> float:
        if published_at is None:
            return FRESHNESS_UNKNOWN_DATE
        age_days = (_as_utc(now) - _as_utc(published_at)).total_seconds() / 86400
        score = 0.5 ** (age_days / FRESHNESS_HALF_LIFE_DAYS)
        return max(FRESHNESS_FLOOR, min(1.0, score))

    @staticmethod
    def extractability(content: str) -> float:
        score = EXTRACTABILITY_BASE
        for pattern, min_matches, increment in EXTRACTABILITY_SIGNALS:
            if len(pattern.findall(content)) >= min_matches:
                score += increment
        return min(1.0, score)

    @staticmethod
    def has_statistics(content: str) -> bool:
        return any(p.search(content) for p in STATISTICS_FLAG_PATTERNS)

    @staticmethod
    def has_dates(content: str) -> bool:
        return any(p.search(content) for p in DATE_FLAG_PATTERNS)

    @staticmethod
    def has_numbers(content: str) -> bool:
        return NUMBER_FLAG_PATTERN.search(content) is not None

    @staticmethod
    def _extract_host(url: str) -> str:
        try:
            host = urlparse(url).hostname
        except ValueError:
            return "unknown"
        return host.lower() if host else "unknown"
