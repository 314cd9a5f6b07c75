"""Normalization of raw collector output before scoring."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import replace

from bs4 import BeautifulSoup

from report_engine.models.domain import RawDocument

_MARKUP = re.compile(r"<[a-zA-Z/!][^>]*>")


def strip_markup(text: str | None) -> str | None:
    """Plain text from an HTML fragment, such as an RSS description."""
    if text is None:
        return None
    if _MARKUP.search(text):
        soup = BeautifulSoup(text, "html.parser")
        for tag in soup.find_all(["script", "style"]):
            tag.decompose()
        text = soup.get_text(" ")
    text = unicodedata.normalize("NFKC", text)
    return re.sub(r"\s+", " ", text).strip()


def normalize_raw_document(raw: RawDocument) -> RawDocument:
    return replace(
        raw,
        title=strip_markup(raw.title) or "Untitled",
        url=(raw.url or "").strip(),
        snippet=strip_markup(raw.snippet) or None,
        body=strip_markup(raw.body) or None,
        categories=[c.strip() for c in raw.categories if c and c.strip()],
    )
