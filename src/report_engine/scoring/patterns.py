"""Regular expressions for extractability scoring and feature flags.

The extractability patterns and the flag patterns overlap but are not the same
set: the statistics flag, for example, ignores "analysis" and the million/billion
forms. A document can therefore score low extractability while still carrying
``has_statistics``. Keep the two groups independent.
"""

from __future__ import annotations

import re

# Extractability signals: (pattern, minimum matches, increment)
PERCENTAGE = re.compile(r"\d+(?:\.\d+)?%")
CURRENCY_SYMBOL = re.compile(r"₹[\d,]+")
CURRENCY_WORDS = re.compile(r"\d+\s*(?:lakh|crore|million|billion)", re.IGNORECASE)
YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
GROUPED_NUMBER = re.compile(r"\b\d{1,3}(?:,\d{3})*\b")
LONG_QUOTE = re.compile(r'"[^"]{20,}"')
ANALYSIS_WORDS = re.compile(r"\b(?:survey|study|report|data|statistics|analysis)\b", re.IGNORECASE)

EXTRACTABILITY_SIGNALS = (
    (PERCENTAGE, 1, 0.20),
    (CURRENCY_SYMBOL, 1, 0.15),
    (CURRENCY_WORDS, 1, 0.15),
    (YEAR, 2, 0.10),
    (GROUPED_NUMBER, 3, 0.10),
    (LONG_QUOTE, 1, 0.05),
    (ANALYSIS_WORDS, 1, 0.10),
)

# Feature flags
STATISTICS_FLAG_PATTERNS = (
    re.compile(r"\d+(?:\.\d+)?%"),
    re.compile(r"₹[\d,]+"),
    re.compile(r"\d+\s*(?:lakh|crore)", re.IGNORECASE),
    re.compile(r"\b(?:survey|study|report|data|statistics)\b", re.IGNORECASE),
)

DATE_FLAG_PATTERNS = (
    re.compile(r"\b(?:19|20)\d{2}\b"),
    re.compile(r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\b", re.IGNORECASE),
    re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}"),
)

NUMBER_FLAG_PATTERN = re.compile(r"\b\d{1,3}(?:,\d{3})*\b")


def keyword_pattern(keyword: str) -> re.Pattern:
    """Whole-word matcher for a context keyword, including symbol keywords like ``₹``."""
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)
