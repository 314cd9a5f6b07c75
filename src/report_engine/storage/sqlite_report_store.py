"""SQLite-backed report and citation stores."""

from __future__ import annotations

import json

import aiosqlite

from report_engine.exceptions import PersistenceError, StorageError
from report_engine.models.domain import Citation, Report
from report_engine.storage.migrations import initialize_report_db
from report_engine.storage.sqlite_doc_store import parse_timestamp


async def _connect(db_path: str) -> aiosqlite.Connection:
    db = await aiosqlite.connect(db_path)
    await db.execute("PRAGMA foreign_keys = ON")
    return db


class SQLiteReportStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    async def initialize(self) -> None:
        await initialize_report_db(self._db_path)

    async def create(self, report: Report) -> Report:
        try:
            db = await _connect(self._db_path)
            try:
                await db.execute(
                    "INSERT INTO reports "
                    "(report_id, topic, topic_hash, time_range_days, max_sources, title, content, "
                    "executive_summary, methodology, html_content, render_path, confidence_score, "
                    "source_count, citation_count, word_count, generation_time_ms, source_ids, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        report.report_id,
                        report.topic,
                        report.topic_hash,
                        report.time_range_days,
                        report.max_sources,
                        report.title,
                        report.content,
                        report.executive_summary,
                        report.methodology,
                        report.html_content,
                        report.render_path,
                        report.confidence_score,
                        report.source_count,
                        report.citation_count,
                        report.word_count,
                        report.generation_time_ms,
                        json.dumps(report.source_ids),
                        report.created_at.isoformat(),
                    ),
                )
                await db.commit()
            finally:
                await db.close()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Report write failed: {e}") from e

        try:
            stored = await self.get_by_id(report.report_id)
        except StorageError as e:
            raise PersistenceError(f"Report write not confirmed: {report.report_id}: {e}") from e
        if stored is None:
            raise PersistenceError(f"Report write not confirmed: {report.report_id}")
        return stored

    async def get_by_id(self, report_id: str) -> Report | None:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute(
                    "SELECT * FROM reports WHERE report_id = ?", (report_id,)
                ) as cursor:
                    row = await cursor.fetchone()
                    if row is None:
                        return None
                    return self._row_to_report(row)
        except aiosqlite.Error as e:
            raise StorageError(f"Report read failed: {e}") from e

    async def attach_render_path(self, report_id: str, render_path: str) -> None:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute(
                    "UPDATE reports SET render_path = ? WHERE report_id = ?",
                    (render_path, report_id),
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Render path update failed for {report_id}: {e}") from e

    async def list_recent(self, limit: int = 20) -> list[Report]:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute(
                    "SELECT * FROM reports ORDER BY created_at DESC LIMIT ?", (limit,)
                ) as cursor:
                    rows = await cursor.fetchall()
                    return [self._row_to_report(row) for row in rows]
        except aiosqlite.Error as e:
            raise StorageError(f"Report listing failed: {e}") from e

    async def delete(self, report_id: str) -> None:
        try:
            db = await _connect(self._db_path)
            try:
                await db.execute("DELETE FROM reports WHERE report_id = ?", (report_id,))
                await db.commit()
            finally:
                await db.close()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Report delete failed for {report_id}: {e}") from e

    @staticmethod
    def _row_to_report(row: aiosqlite.Row) -> Report:
        return Report(
            report_id=row["report_id"],
            topic=row["topic"],
            topic_hash=row["topic_hash"],
            time_range_days=row["time_range_days"],
            max_sources=row["max_sources"],
            title=row["title"],
            content=row["content"],
            executive_summary=row["executive_summary"],
            methodology=row["methodology"],
            html_content=row["html_content"],
            render_path=row["render_path"],
            confidence_score=row["confidence_score"],
            source_count=row["source_count"],
            citation_count=row["citation_count"],
            word_count=row["word_count"],
            generation_time_ms=row["generation_time_ms"],
            source_ids=json.loads(row["source_ids"]),
            created_at=parse_timestamp(row["created_at"]),
        )


class SQLiteCitationStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    async def initialize(self) -> None:
        await initialize_report_db(self._db_path)

    async def create_batch(self, citations: list[Citation]) -> list[Citation]:
        if not citations:
            return []
        try:
            db = await _connect(self._db_path)
            try:
                await db.executemany(
                    "INSERT INTO citations "
                    "(citation_id, report_id, document_id, sequence, quoted_text, context, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    [
                        (
                            c.citation_id,
                            c.report_id,
                            c.document_id,
                            c.sequence,
                            c.quoted_text,
                            c.context,
                            c.created_at.isoformat(),
                        )
                        for c in citations
                    ],
                )
                await db.commit()
            finally:
                await db.close()
        except aiosqlite.Error as e:
            raise PersistenceError(f"Citation batch write failed: {e}") from e
        return citations

    async def list_for_report(self, report_id: str) -> list[Citation]:
        try:
            async with aiosqlite.connect(self._db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute(
                    "SELECT * FROM citations WHERE report_id = ? ORDER BY sequence", (report_id,)
                ) as cursor:
                    rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageError(f"Citation read failed: {e}") from e
        return [
            Citation(
                citation_id=row["citation_id"],
                report_id=row["report_id"],
                document_id=row["document_id"],
                sequence=row["sequence"],
                quoted_text=row["quoted_text"],
                context=row["context"],
                created_at=parse_timestamp(row["created_at"]),
            )
            for row in rows
        ]
