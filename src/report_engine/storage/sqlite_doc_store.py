"""SQLite-backed document store with upsert-by-URL semantics."""

from __future__ import annotations

import asyncio
import json
from datetime import date, datetime, timezone

import aiosqlite

from report_engine.exceptions import PersistenceError, StorageError
from report_engine.keyword_search.text_ranker import DocumentTextRanker
from report_engine.models.domain import Document, IngestionStats
from report_engine.storage.migrations import initialize_document_db

_COLUMNS = (
    "content_hash", "source", "title", "url", "snippet", "body", "author",
    "published_at", "collected_at", "categories", "language",
    "domain_authority", "topical_context", "freshness", "extractability",
    "composite_score", "has_statistics", "has_dates", "has_numbers",
    "word_count", "metadata",
)

# Columns refreshed when a document is re-collected under an existing URL
_REFRESHED = (
    "body", "domain_authority", "topical_context", "freshness", "extractability",
    "composite_score", "has_statistics", "has_dates", "has_numbers", "word_count",
    "collected_at",
)

UPSERT_DOCUMENT = (
    f"INSERT INTO documents ({', '.join(_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in _COLUMNS)}) "
    f"ON CONFLICT(url) DO UPDATE SET "
    + ", ".join(f"{c} = excluded.{c}" for c in _REFRESHED)
)

UPSERT_COLLECTION_STATS = (
    "INSERT INTO collection_stats "
    "(date, source, items_collected, items_processed, items_duplicate, errors_count, "
    "avg_quality_score, collection_time_ms) VALUES (?, ?, ?, ?, ?, ?, ?, ?) "
    "ON CONFLICT(date, source) DO UPDATE SET "
    "items_collected = excluded.items_collected, "
    "items_processed = excluded.items_processed, "
    "items_duplicate = excluded.items_duplicate, "
    "errors_count = excluded.errors_count, "
    "avg_quality_score = excluded.avg_quality_score, "
    "collection_time_ms = excluded.collection_time_ms"
)


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    dt = datetime.fromisoformat(value)
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


class SQLiteDocStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    async def initialize(self) -> None:
        await initialize_document_db(self._db_path)

    async def upsert(self, document: Document) -> Document:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute(UPSERT_DOCUMENT, self._to_row(document))
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Document upsert failed for {document.url}: {e}") from e

        stored = await self.get_by_url(document.url)
        if stored is None:
            raise PersistenceError(f"Document upsert not confirmed for {document.url}")
        return stored

    async def exists(self, doc_id: str) -> bool:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                async with db.execute(
                    "SELECT 1 FROM documents WHERE content_hash = ?", (doc_id,)
                ) as cursor:
                    return await cursor.fetchone() is not None
        except aiosqlite.Error as e:
            raise StorageError(f"Document lookup failed: {e}") from e

    async def get_by_id(self, doc_id: str) -> Document | None:
        return await self._fetch_one("SELECT * FROM documents WHERE content_hash = ?", doc_id)

    async def get_by_url(self, url: str) -> Document | None:
        return await self._fetch_one("SELECT * FROM documents WHERE url = ?", url)

    async def get_all(self) -> list[Document]:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute(
                    "SELECT * FROM documents ORDER BY composite_score DESC, content_hash"
                ) as cursor:
                    rows = await cursor.fetchall()
                    return [self._row_to_document(row) for row in rows]
        except aiosqlite.Error as e:
            raise StorageError(f"Document read failed: {e}") from e

    async def search_by_text(self, query: str, limit: int) -> list[Document]:
        """Relevance-ranked text search over title and snippet."""
        documents = await self.get_all()
        ranker = await asyncio.to_thread(DocumentTextRanker, documents)
        return ranker.search(query, limit)

    async def count(self) -> int:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                async with db.execute("SELECT COUNT(*) FROM documents") as cursor:
                    row = await cursor.fetchone()
                    return row[0] if row else 0
        except aiosqlite.Error as e:
            raise StorageError(f"Document count failed: {e}") from e

    async def record_collection_stats(self, stats: IngestionStats, day: date | None = None) -> None:
        day = day or datetime.now(timezone.utc).date()
        row = (
            day.isoformat(),
            stats.source,
            stats.collected,
            stats.processed,
            stats.duplicates,
            stats.errors,
            stats.avg_score,
            stats.duration_ms,
        )
        try:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute(UPSERT_COLLECTION_STATS, row)
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Collection stats write failed: {e}") from e

    async def get_collection_stats(self, source: str) -> list[dict]:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute(
                    "SELECT * FROM collection_stats WHERE source = ? ORDER BY date DESC", (source,)
                ) as cursor:
                    rows = await cursor.fetchall()
                    return [dict(row) for row in rows]
        except aiosqlite.Error as e:
            raise StorageError(f"Collection stats read failed: {e}") from e

    async def _fetch_one(self, sql: str, key: str) -> Document | None:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute(sql, (key,)) as cursor:
                    row = await cursor.fetchone()
                    if row is None:
                        return None
                    return self._row_to_document(row)
        except aiosqlite.Error as e:
            raise StorageError(f"Document read failed: {e}") from e

    @staticmethod
    def _to_row(doc: Document) -> tuple:
        return (
            doc.content_hash,
            doc.source,
            doc.title,
            doc.url,
            doc.snippet,
            doc.body,
            doc.author,
            doc.published_at.isoformat() if doc.published_at else None,
            doc.collected_at.isoformat(),
            json.dumps(doc.categories),
            doc.language,
            doc.domain_authority,
            doc.topical_context,
            doc.freshness,
            doc.extractability,
            doc.composite_score,
            int(doc.has_statistics),
            int(doc.has_dates),
            int(doc.has_numbers),
            doc.word_count,
            json.dumps(doc.metadata, default=str),
        )

    @staticmethod
    def _row_to_document(row: aiosqlite.Row) -> Document:
        return Document(
            content_hash=row["content_hash"],
            source=row["source"],
            title=row["title"],
            url=row["url"],
            snippet=row["snippet"],
            body=row["body"],
            author=row["author"],
            published_at=parse_timestamp(row["published_at"]),
            categories=json.loads(row["categories"]),
            language=row["language"],
            domain_authority=row["domain_authority"],
            topical_context=row["topical_context"],
            freshness=row["freshness"],
            extractability=row["extractability"],
            composite_score=row["composite_score"],
            has_statistics=bool(row["has_statistics"]),
            has_dates=bool(row["has_dates"]),
            has_numbers=bool(row["has_numbers"]),
            word_count=row["word_count"],
            metadata=json.loads(row["metadata"]),
            collected_at=parse_timestamp(row["collected_at"]),
        )
