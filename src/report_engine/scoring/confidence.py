"""Report confidence: 0.5 + 0.3*quality + 0.2*coverage + 0.1*length + 0.1*citation density."""

from __future__ import annotations

import numpy as np

from report_engine.citations.markers import CitationMarkerParser, SourceMarkerParser
from report_engine.models.domain import Document
from report_engine.scoring.relevance import count_words

CONFIDENCE_BASE = 0.5
CONFIDENCE_MIN = 0.1
CONFIDENCE_MAX = 1.0


class ConfidenceEstimator:
    def __init__(self, marker_parser: CitationMarkerParser | None = None) -> None:
        self._markers = marker_parser or SourceMarkerParser()

    def estimate(self, sources: list[Document], text: str) -> float:
        avg_source_score = (
            float(np.mean([s.composite_score for s in sources])) if sources else 0.0
        )
        word_count = count_words(text)
        marker_count = len(self._markers.find(text))
        return self.score(avg_source_score, len(sources), word_count, marker_count)

    @staticmethod
    def score(
        avg_source_score: float, source_count: int, word_count: int, citation_count: int
    ) -> float:
        confidence = CONFIDENCE_BASE
        confidence += 0.3 * avg_source_score
        confidence += 0.2 * min(1.0, source_count / 10)
        confidence += 0.1 * min(1.0, word_count / 1000)

        # Guard keeps the density defined for empty text
        density = citation_count / max(1, word_count / 100)
        confidence += 0.1 * min(1.0, density / 5)

        return max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, confidence))
