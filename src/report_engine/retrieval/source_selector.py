"""Source selection: text search, synonym expansion when thin, recency and quality filtering."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from report_engine.config.tables import SelectionTables
from report_engine.keyword_search.tokenizer import extract_keywords
from report_engine.models.domain import Document
from report_engine.observability.logger import get_logger
from report_engine.protocols.stores import DocumentStore

logger = get_logger("source_selector")

QUALITY_FLOOR = 0.3


def _by_score(documents: list[Document]) -> list[Document]:
    # sorted() is stable, so ties keep their search order
    return sorted(documents, key=lambda d: d.composite_score, reverse=True)


class SourceSelector:
    def __init__(
        self,
        doc_store: DocumentStore,
        tables: SelectionTables | None = None,
        quality_floor: float = QUALITY_FLOOR,
        expansion_limit: int = 10,
        max_keywords: int = 10,
    ) -> None:
        self._store = doc_store
        self._tables = tables or SelectionTables.default()
        self._quality_floor = quality_floor
        self._expansion_limit = expansion_limit
        self._max_keywords = max_keywords
        self.last_expanded = False
        self.last_candidate_count = 0

    async def select(
        self,
        topic: str,
        max_sources: int,
        time_range_days: int,
        now: datetime | None = None,
    ) -> list[Document]:
        now = now or datetime.now(timezone.utc)

        candidates = await self._store.search_by_text(topic, max_sources)
        self.last_expanded = len(candidates) < max_sources / 2
        if self.last_expanded:
            candidates = await self._expand(topic, candidates, max_sources)
        self.last_candidate_count = len(candidates)

        cutoff = now - timedelta(days=time_range_days)
        in_window = [d for d in candidates if d.effective_date > cutoff]

        selected = _by_score(
            [d for d in in_window if d.composite_score > self._quality_floor]
        )

        logger.info(
            "sources_selected",
            topic=topic,
            candidates=len(candidates),
            in_window=len(in_window),
            selected=len(selected),
            expanded=self.last_expanded,
        )
        return selected

    async def _expand(
        self, topic: str, initial: list[Document], max_sources: int
    ) -> list[Document]:
        keywords = extract_keywords(topic, self._tables.synonyms, self._max_keywords)
        logger.info("search_expanded", topic=topic, keywords=keywords)

        pooled = list(initial)
        for keyword in keywords:
            pooled.extend(await self._store.search_by_text(keyword, self._expansion_limit))

        unique: dict[str, Document] = {}
        for doc in pooled:
            unique.setdefault(doc.content_hash, doc)
        return _by_score(list(unique.values()))[:max_sources]
