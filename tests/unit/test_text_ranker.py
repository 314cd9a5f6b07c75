"""Tests for BM25 document ranking."""

from conftest import make_document

from report_engine.keyword_search.text_ranker import DocumentTextRanker


def test_requires_all_query_terms():
    docs = [
        make_document("Employee attrition climbs in India"),
        make_document("Attrition in European banks"),
        make_document("India hiring outlook"),
    ]
    results = DocumentTextRanker(docs).search("employee attrition in India", 10)
    assert [d.title for d in results] == ["Employee attrition climbs in India"]


def test_verbatim_substring_matches():
    docs = [make_document("Q3 gig-economy report", snippet="Gig-economy payouts rose")]
    results = DocumentTextRanker(docs).search("gig-economy payouts", 10)
    assert len(results) == 1


def test_limit_and_tie_break_on_composite():
    docs = [make_document(f"Remote work policy {i}", score=0.1 * i) for i in range(1, 6)]
    results = DocumentTextRanker(docs).search("remote", 3)
    assert len(results) == 3
    scores = [d.composite_score for d in results]
    assert scores == sorted(scores, reverse=True)


def test_empty_corpus_and_query():
    assert DocumentTextRanker([]).search("anything", 5) == []
    docs = [make_document("Remote work policy")]
    assert DocumentTextRanker(docs).search("", 5) == []


def test_corpus_without_searchable_tokens():
    docs = [make_document("A", url="https://x.example/a", snippet="A")]
    ranker = DocumentTextRanker(docs)
    assert ranker.search("employee attrition", 5) == []
    assert [d.title for d in ranker.search("a", 5)] == ["A"]
