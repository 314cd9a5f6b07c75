"""Tests for citation extraction and section partitioning."""

import re

from conftest import make_document

from report_engine.citations.extractor import CitationExtractor
from report_engine.citations.markers import MarkerMatch, SourceMarkerParser


def _sources(n: int):
    return [make_document(f"Source title {i}") for i in range(1, n + 1)]


def test_out_of_range_marker_is_skipped():
    sources = _sources(2)
    text = "Trends show growth [Source 1] and decline [Source 3]"
    citations = CitationExtractor().extract_citations(text, sources)

    assert len(citations) == 1
    assert citations[0].sequence == 1
    assert citations[0].document_id == sources[0].content_hash
    assert citations[0].quoted_text == "Source title 1"


def test_sequence_follows_order_of_appearance():
    sources = _sources(2)
    text = "A [Source 2] B [Source 1] C [Source 2] D [Source 0]"
    citations = CitationExtractor().extract_citations(text, sources)

    assert [c.sequence for c in citations] == [1, 2, 3]
    assert [c.document_id for c in citations] == [
        sources[1].content_hash,
        sources[0].content_hash,
        sources[1].content_hash,
    ]


def test_context_window_around_marker():
    text = "x" * 200 + "[Source 1]" + "y" * 200
    citation = CitationExtractor().extract_citations(text, _sources(1))[0]
    assert citation.context == "x" * 50 + "[Source 1]" + "y" * 50


def test_context_collapses_whitespace():
    text = "Hiring\n\nslowed   sharply [Source 1]\nacross sectors"
    citation = CitationExtractor().extract_citations(text, _sources(1))[0]
    assert citation.context == "Hiring slowed sharply [Source 1] across sectors"


def test_no_markers():
    assert CitationExtractor().extract_citations("No citations here.", _sources(3)) == []
    assert CitationExtractor().extract_citations("", _sources(3)) == []


def test_sections_split_on_headings():
    text = (
        "Preamble without heading\n"
        "# Executive Summary\n"
        "Summary text [Source 1]\n"
        "\n"
        "## Key Findings\n"
        "Finding one.\n"
        "#### Not a heading\n"
        "1.5 million jobs were added.\n"
        "1. Recommendations\n"
        "Do things [Source 2] and more [Source 2]"
    )
    sections = CitationExtractor().split_sections(text)

    assert [s.title for s in sections] == ["Executive Summary", "Key Findings", "Recommendations"]
    assert sections[0].content == "Summary text [Source 1]"
    assert sections[0].citations == [1]
    assert sections[1].content == "Finding one.\n#### Not a heading\n1.5 million jobs were added."
    assert sections[1].citations == []
    assert sections[2].citations == [2, 2]


def test_text_without_headings_has_no_sections():
    assert CitationExtractor().split_sections("Just a paragraph [Source 1].") == []


def test_extract_returns_both_passes():
    sources = _sources(2)
    result = CitationExtractor().extract("## Findings\nGrowth [Source 1] [Source 2]", sources)
    assert len(result.citations) == 2
    assert len(result.sections) == 1


class NumericMarkerParser:
    _pattern = re.compile(r"\[(\d+)\]")

    def find(self, text):
        return [MarkerMatch(int(m.group(1)), m.start(), m.end()) for m in self._pattern.finditer(text)]

    def format(self, label):
        return f"[{label}]"


def test_marker_syntax_is_swappable():
    sources = _sources(2)
    extractor = CitationExtractor(marker_parser=NumericMarkerParser())
    citations = extractor.extract_citations("Growth [2] and [Source 1]", sources)
    assert [c.document_id for c in citations] == [sources[1].content_hash]


def test_source_marker_parser_roundtrip_format():
    parser = SourceMarkerParser()
    assert [m.label for m in parser.find(parser.format(7))] == [7]
