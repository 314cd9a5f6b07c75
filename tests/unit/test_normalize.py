"""Tests for raw document normalization and language detection."""

from report_engine.ingestion.language import detect_language
from report_engine.ingestion.normalize import normalize_raw_document, strip_markup
from report_engine.models.domain import RawDocument


def test_strip_markup_removes_tags_and_scripts():
    html = "<p>Hiring <b>rose</b> 12%</p><script>track()</script><style>p{}</style>"
    assert strip_markup(html) == "Hiring rose 12%"


def test_strip_markup_plain_text_collapses_whitespace():
    assert strip_markup("  Salary\n\n hikes   of 9.5% ") == "Salary hikes of 9.5%"


def test_strip_markup_keeps_comparison_operators():
    assert strip_markup("growth < 5% and > 2%") == "growth < 5% and > 2%"


def test_strip_markup_none():
    assert strip_markup(None) is None


def test_normalize_raw_document():
    raw = RawDocument(
        title="<h1>  </h1>",
        url="  https://example.com/a  ",
        snippet="<p>Snippet</p>",
        body="",
        categories=[" HR ", "", "  "],
    )
    normalized = normalize_raw_document(raw)
    assert normalized.title == "Untitled"
    assert normalized.url == "https://example.com/a"
    assert normalized.snippet == "Snippet"
    assert normalized.body is None
    assert normalized.categories == ["HR"]


def test_short_text_defaults_to_english():
    assert detect_language("Hi") == "en"
    assert detect_language("") == "en"


def test_detects_english_and_french():
    english = "Companies across India are reporting higher attrition among software engineers this quarter."
    french = "Les entreprises indiennes signalent une hausse des départs parmi les ingénieurs logiciels ce trimestre."
    assert detect_language(english) == "en"
    assert detect_language(french) == "fr"


def test_undetectable_text_defaults_to_english():
    assert detect_language("1234567890 1234567890 !!!") == "en"
