"""Ingestion pipeline: normalize -> score -> dedup -> store -> record stats."""

from __future__ import annotations

import time
from dataclasses import replace
from datetime import datetime

from report_engine.exceptions import ReportEngineError
from report_engine.ingestion.language import detect_language
from report_engine.ingestion.normalize import normalize_raw_document
from report_engine.models.domain import Document, IngestionStats, RawDocument
from report_engine.observability.logger import get_logger
from report_engine.observability.metrics import log_ingestion_metrics
from report_engine.scoring.relevance import RelevanceScorer
from report_engine.storage.sqlite_doc_store import SQLiteDocStore

logger = get_logger("ingestion")


class IngestionPipeline:
    def __init__(self, scorer: RelevanceScorer, doc_store: SQLiteDocStore) -> None:
        self._scorer = scorer
        self._doc_store = doc_store

    async def ingest(
        self, raws: list[RawDocument], source_label: str, now: datetime | None = None
    ) -> IngestionStats:
        """Score and upsert every item; re-collected URLs refresh the stored document."""
        return await self._run(raws, source_label, skip_existing=False, now=now)

    async def ingest_feed_items(
        self, raws: list[RawDocument], source_label: str, now: datetime | None = None
    ) -> IngestionStats:
        """Insert only feed items whose content hash is not stored yet."""
        return await self._run(raws, source_label, skip_existing=True, now=now)

    async def _run(
        self,
        raws: list[RawDocument],
        source_label: str,
        skip_existing: bool,
        now: datetime | None,
    ) -> IngestionStats:
        start = time.monotonic()
        stats = IngestionStats(source=source_label, collected=len(raws))

        addressable = []
        for raw in raws:
            if raw.url or raw.guid:
                addressable.append(normalize_raw_document(raw))
            else:
                stats.skipped += 1
        if stats.skipped:
            logger.warning("unaddressable_items_skipped", source=source_label, count=stats.skipped)

        total_score = 0.0
        seen: set[str] = set()
        for doc in self._scorer.score_many(addressable, source_label, now):
            if doc.content_hash in seen:
                stats.duplicates += 1
                continue
            seen.add(doc.content_hash)
            try:
                if skip_existing and await self._doc_store.exists(doc.content_hash):
                    stats.duplicates += 1
                    continue
                stored = await self._store(doc)
            except ReportEngineError as e:
                stats.errors += 1
                logger.error("document_store_failed", title=doc.title[:50], error=str(e))
                continue
            stats.processed += 1
            total_score += stored.composite_score

        stats.avg_score = total_score / stats.processed if stats.processed else 0.0
        stats.duration_ms = (time.monotonic() - start) * 1000

        try:
            await self._doc_store.record_collection_stats(stats)
        except ReportEngineError as e:
            logger.error("collection_stats_failed", source=source_label, error=str(e))
        log_ingestion_metrics(
            source_label,
            stats.collected,
            stats.processed,
            stats.duplicates,
            stats.errors,
            stats.avg_score,
        )
        return stats

    async def _store(self, doc: Document) -> Document:
        language = detect_language(f"{doc.title} {doc.snippet} {doc.body}")
        return await self._doc_store.upsert(replace(doc, language=language))
