"""Tests for content identities."""

import hashlib
from datetime import datetime, timezone

from report_engine.models.domain import RawDocument
from report_engine.scoring.content_hash import (
    content_hash,
    document_identity,
    feed_fallback_hash,
    topic_hash,
)


def test_identical_title_and_url_hash_identically():
    a = content_hash("Wage code rollout", "https://pib.gov.in/1")
    b = content_hash("Wage code rollout", "https://pib.gov.in/1")
    assert a == b
    assert a == hashlib.md5(b"Wage code rollout|https://pib.gov.in/1").hexdigest()


def test_different_title_or_url_differ():
    base = content_hash("Wage code rollout", "https://pib.gov.in/1")
    assert content_hash("Wage code rollout", "https://pib.gov.in/2") != base
    assert content_hash("Wage code delayed", "https://pib.gov.in/1") != base


def test_identity_uses_url_when_present():
    raw = RawDocument(title="Hiring outlook", url="https://x.example.com/a", guid="guid-1")
    assert document_identity(raw) == content_hash("Hiring outlook", "https://x.example.com/a")


def test_feed_item_without_link_uses_guid_then_title_and_date():
    with_guid = RawDocument(title="Hiring outlook", guid="guid-1")
    assert document_identity(with_guid) == feed_fallback_hash("guid-1", "Hiring outlook", None)

    published = datetime(2026, 10, 1, tzinfo=timezone.utc)
    bare = RawDocument(title="Hiring outlook", published_at=published)
    assert document_identity(bare) == hashlib.md5(
        f"Hiring outlook-{published.isoformat()}".encode()
    ).hexdigest()


def test_topic_hash_is_case_insensitive():
    assert topic_hash("Employee Attrition in India") == topic_hash("employee attrition in india")
