"""BM25 relevance ranking of stored documents using rank_bm25."""

from __future__ import annotations

from rank_bm25 import BM25Okapi

from report_engine.keyword_search.tokenizer import tokenize
from report_engine.models.domain import Document


def _searchable_text(doc: Document) -> str:
    return f"{doc.title} {doc.snippet or ''}"


class DocumentTextRanker:
    """Ranks documents against a free-text query over title and snippet.

    A document matches when every query token occurs in it, or when the raw
    query appears verbatim (case-insensitive) in its title or snippet.
    Matches are ordered by BM25 relevance, then composite score.
    """

    def __init__(self, documents: list[Document]) -> None:
        self._documents = documents
        self._tokenized = [tokenize(_searchable_text(d)) for d in documents]
        # BM25Okapi cannot build an idf table from an empty vocabulary
        self._bm25 = BM25Okapi(self._tokenized) if any(self._tokenized) else None

    def search(self, query: str, limit: int) -> list[Document]:
        if not self._documents or limit <= 0:
            return []
        query_tokens = tokenize(query)
        needle = query.strip().lower()
        if self._bm25 is not None and query_tokens:
            scores = self._bm25.get_scores(query_tokens)
        else:
            scores = [0.0] * len(self._documents)

        matched: list[tuple[float, float, int]] = []
        for i, doc in enumerate(self._documents):
            tokens = set(self._tokenized[i])
            all_terms = bool(query_tokens) and all(t in tokens for t in query_tokens)
            verbatim = bool(needle) and (
                needle in doc.title.lower() or needle in (doc.snippet or "").lower()
            )
            if all_terms or verbatim:
                matched.append((float(scores[i]), doc.composite_score, i))

        matched.sort(key=lambda m: (m[0], m[1]), reverse=True)
        return [self._documents[i] for _, _, i in matched[:limit]]
