"""Idempotent database schema creation."""

from __future__ import annotations

import aiosqlite

DOCUMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS documents (
    content_hash TEXT PRIMARY KEY,
    source TEXT NOT NULL,
    title TEXT NOT NULL,
    url TEXT NOT NULL UNIQUE,
    snippet TEXT NOT NULL DEFAULT '',
    body TEXT NOT NULL DEFAULT '',
    author TEXT,
    published_at TEXT,
    collected_at TEXT NOT NULL,
    categories TEXT NOT NULL DEFAULT '[]',
    language TEXT NOT NULL DEFAULT 'en',
    domain_authority REAL NOT NULL,
    topical_context REAL NOT NULL,
    freshness REAL NOT NULL,
    extractability REAL NOT NULL,
    composite_score REAL NOT NULL,
    has_statistics INTEGER NOT NULL DEFAULT 0,
    has_dates INTEGER NOT NULL DEFAULT 0,
    has_numbers INTEGER NOT NULL DEFAULT 0,
    word_count INTEGER NOT NULL DEFAULT 0,
    metadata TEXT NOT NULL DEFAULT '{}'
)
"""

DOCUMENTS_SCORE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_documents_score ON documents(composite_score DESC)
"""

DOCUMENTS_PUBLISHED_INDEX = """
CREATE INDEX IF NOT EXISTS idx_documents_published ON documents(published_at DESC)
"""

COLLECTION_STATS_TABLE = """
CREATE TABLE IF NOT EXISTS collection_stats (
    date TEXT NOT NULL,
    source TEXT NOT NULL,
    items_collected INTEGER NOT NULL DEFAULT 0,
    items_processed INTEGER NOT NULL DEFAULT 0,
    items_duplicate INTEGER NOT NULL DEFAULT 0,
    errors_count INTEGER NOT NULL DEFAULT 0,
    avg_quality_score REAL,
    collection_time_ms REAL,
    UNIQUE(date, source)
)
"""

REPORTS_TABLE = """
CREATE TABLE IF NOT EXISTS reports (
    report_id TEXT PRIMARY KEY,
    topic TEXT NOT NULL,
    topic_hash TEXT NOT NULL,
    time_range_days INTEGER NOT NULL,
    max_sources INTEGER NOT NULL,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    executive_summary TEXT NOT NULL DEFAULT '',
    methodology TEXT NOT NULL DEFAULT '',
    html_content TEXT NOT NULL DEFAULT '',
    render_path TEXT,
    confidence_score REAL NOT NULL,
    source_count INTEGER NOT NULL DEFAULT 0,
    citation_count INTEGER NOT NULL DEFAULT 0,
    word_count INTEGER NOT NULL DEFAULT 0,
    generation_time_ms REAL NOT NULL DEFAULT 0,
    source_ids TEXT NOT NULL DEFAULT '[]',
    created_at TEXT NOT NULL
)
"""

REPORTS_TOPIC_INDEX = """
CREATE INDEX IF NOT EXISTS idx_reports_topic_hash ON reports(topic_hash)
"""

CITATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS citations (
    citation_id TEXT PRIMARY KEY,
    report_id TEXT NOT NULL,
    document_id TEXT NOT NULL,
    sequence INTEGER NOT NULL,
    quoted_text TEXT NOT NULL DEFAULT '',
    context TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    UNIQUE(report_id, sequence),
    FOREIGN KEY (report_id) REFERENCES reports(report_id) ON DELETE CASCADE
)
"""

CITATIONS_REPORT_INDEX = """
CREATE INDEX IF NOT EXISTS idx_citations_report ON citations(report_id)
"""


async def initialize_document_db(db_path: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        await db.execute(DOCUMENTS_TABLE)
        await db.execute(DOCUMENTS_SCORE_INDEX)
        await db.execute(DOCUMENTS_PUBLISHED_INDEX)
        await db.execute(COLLECTION_STATS_TABLE)
        await db.commit()


async def initialize_report_db(db_path: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        await db.execute(REPORTS_TABLE)
        await db.execute(REPORTS_TOPIC_INDEX)
        await db.execute(CITATIONS_TABLE)
        await db.execute(CITATIONS_REPORT_INDEX)
        await db.commit()
