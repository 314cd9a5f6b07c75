"""Tests for search tokenizer and topic keyword extraction."""

from report_engine.config.tables import SelectionTables
from report_engine.keyword_search.tokenizer import extract_keywords, tokenize


def test_tokenize_basic():
    tokens = tokenize("The quick brown fox jumps over the lazy dog")
    assert "quick" in tokens
    assert "brown" in tokens
    assert "fox" in tokens
    # Stopwords removed
    assert "the" not in tokens
    assert "over" not in tokens


def test_tokenize_punctuation():
    tokens = tokenize("Attrition, hiring! Salary?")
    assert tokens == ["attrition", "hiring", "salary"]


def test_tokenize_empty():
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_extract_keywords_drops_short_tokens_and_punctuation():
    keywords = extract_keywords("Gig-work in the IT sector?", {})
    assert keywords == ["gigwork", "sector"]


def test_extract_keywords_expands_synonyms():
    synonyms = SelectionTables.default().synonyms
    keywords = extract_keywords("employee attrition in India", synonyms)
    assert keywords == [
        "employee", "attrition", "india", "turnover", "retention", "quit", "resign",
    ]


def test_extract_keywords_deduplicates_and_caps():
    synonyms = SelectionTables.default().synonyms
    keywords = extract_keywords("hiring salary hiring remote skills", synonyms, limit=10)
    assert len(keywords) == 10
    assert len(set(keywords)) == 10
    assert keywords[:4] == ["hiring", "salary", "remote", "skills"]
