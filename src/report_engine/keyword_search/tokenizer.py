"""Text preprocessing for keyword search and topic expansion."""

from __future__ import annotations

import re
from collections.abc import Mapping

from report_engine.config.constants import STOPWORDS


def tokenize(text: str) -> list[str]:
    """Tokenize text for BM25: lowercase, strip punctuation, remove stopwords."""
    text = text.lower()
    text = re.sub(r"[^\w\s]", " ", text)
    tokens = text.split()
    return [t for t in tokens if t not in STOPWORDS and len(t) > 1]


def extract_keywords(
    topic: str, synonyms: Mapping[str, tuple[str, ...]], limit: int = 10
) -> list[str]:
    """Topic keywords longer than three characters followed by their synonym expansions."""
    cleaned = re.sub(r"[^\w\s]", "", topic.lower())
    keywords = [w for w in cleaned.split() if len(w) > 3]

    expanded = list(keywords)
    for keyword in keywords:
        expanded.extend(synonyms.get(keyword, ()))

    return list(dict.fromkeys(expanded))[:limit]
