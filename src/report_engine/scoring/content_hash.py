"""Stable content identities used as dedup and idempotency keys."""

from __future__ import annotations

import hashlib

from report_engine.models.domain import RawDocument


def _md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def content_hash(title: str, url: str) -> str:
    """Identity of a document: identical (title, url) pairs always hash identically."""
    return _md5(f"{title}|{url}")


def feed_fallback_hash(guid: str | None, title: str, published: str | None) -> str:
    """Identity for feed items without a link: GUID, else title and publish date."""
    return _md5(guid or f"{title}-{published or ''}")


def document_identity(raw: RawDocument) -> str:
    title = raw.title or ""
    if raw.url:
        return content_hash(title, raw.url)
    published = raw.published_at.isoformat() if raw.published_at else None
    return feed_fallback_hash(raw.guid, title, published)


def topic_hash(topic: str) -> str:
    return _md5(topic.lower())
