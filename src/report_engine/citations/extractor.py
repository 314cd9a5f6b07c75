"""Citation extraction: resolve inline source markers and partition report text into sections."""

from __future__ import annotations

import re

from report_engine.citations.markers import CitationMarkerParser, SourceMarkerParser
from report_engine.config.constants import CITATION_CONTEXT_CHARS
from report_engine.models.domain import (
    CitationExtraction,
    Document,
    ExtractedCitation,
    ReportSection,
)
from report_engine.observability.logger import get_logger

logger = get_logger("citation_extractor")

HEADING_PATTERN = re.compile(r"^(#{1,3}|\d+\.)\s+(.+)$")


class CitationExtractor:
    def __init__(
        self,
        marker_parser: CitationMarkerParser | None = None,
        context_chars: int = CITATION_CONTEXT_CHARS,
    ) -> None:
        self._markers = marker_parser or SourceMarkerParser()
        self._context_chars = context_chars

    def extract(self, text: str, sources: list[Document]) -> CitationExtraction:
        citations = self.extract_citations(text, sources)
        sections = self.split_sections(text)
        logger.info(
            "citations_extracted",
            citations=len(citations),
            sections=len(sections),
        )
        return CitationExtraction(citations=citations, sections=sections)

    def extract_citations(self, text: str, sources: list[Document]) -> list[ExtractedCitation]:
        """One citation per in-range marker, numbered 1.. in order of appearance."""
        citations: list[ExtractedCitation] = []
        skipped = 0
        for marker in self._markers.find(text):
            index = marker.label - 1
            if not 0 <= index < len(sources):
                skipped += 1
                continue
            source = sources[index]
            citations.append(
                ExtractedCitation(
                    sequence=len(citations) + 1,
                    document_id=source.content_hash,
                    quoted_text=source.title,
                    context=self._context(text, marker.start, marker.end),
                )
            )
        if skipped:
            logger.debug("out_of_range_markers_skipped", count=skipped)
        return citations

    def split_sections(self, text: str) -> list[ReportSection]:
        sections: list[ReportSection] = []
        current_title = ""
        current_lines: list[str] = []

        for line in (text or "").split("\n"):
            heading = HEADING_PATTERN.match(line)
            if heading:
                if current_title:
                    sections.append(self._section(current_title, current_lines))
                current_title = heading.group(2)
                current_lines = []
            else:
                current_lines.append(line)

        if current_title:
            sections.append(self._section(current_title, current_lines))
        return sections

    def _section(self, title: str, lines: list[str]) -> ReportSection:
        content = "\n".join(lines).strip()
        return ReportSection(
            title=title,
            content=content,
            citations=[m.label for m in self._markers.find(content)],
        )

    def _context(self, text: str, start: int, end: int) -> str:
        lo = max(0, start - self._context_chars)
        hi = min(len(text), end + self._context_chars)
        return re.sub(r"\s+", " ", text[lo:hi]).strip()
