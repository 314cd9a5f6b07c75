"""Immutable lookup tables injected into the scorer and source selector.

The defaults reproduce the reference weighting: every host scores the baseline
authority, the topical context keywords target Indian HR coverage, and the
synonym table expands common HR topics. Alternate tables can be built for
tests or other markets without touching module state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEFAULT_AUTHORITY = 0.70

INDIAN_CONTEXT_KEYWORDS = (
    "india", "indian", "rupee", "inr", "₹", "lakh", "crore",
    "epfo", "esi", "pf", "provident fund", "gratuity",
    "labour code", "wage code", "osh code", "posh",
    "ministry of labour", "government of india",
    "mumbai", "delhi", "bangalore", "bengaluru", "chennai",
    "hyderabad", "pune", "kolkata", "ahmedabad",
)

# (substrings, bonus) pairs; each group adds its bonus once if any substring is present
INDIAN_CONTEXT_BONUSES = (
    (("india", "indian"), 0.20),
    (("epfo", "esi", "pf"), 0.30),
    (("labour code", "wage code"), 0.20),
    (("₹", "lakh", "crore"), 0.15),
)

HR_SYNONYMS = {
    "attrition": ("turnover", "retention", "quit", "resign"),
    "hiring": ("recruitment", "talent", "job", "employment"),
    "salary": ("compensation", "wage", "pay", "benefits"),
    "remote": ("wfh", "hybrid", "flexible", "telecommute"),
    "skills": ("upskilling", "training", "development", "learning"),
}


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class BonusGroup:
    terms: tuple[str, ...]
    bonus: float

    def matches(self, content: str) -> bool:
        return any(term in content for term in self.terms)


@dataclass(frozen=True)
class ScoringTables:
    domain_authority: Mapping[str, float] = field(default_factory=lambda: _frozen({}))
    default_authority: float = DEFAULT_AUTHORITY
    context_keywords: tuple[str, ...] = INDIAN_CONTEXT_KEYWORDS
    context_bonuses: tuple[BonusGroup, ...] = tuple(
        BonusGroup(terms, bonus) for terms, bonus in INDIAN_CONTEXT_BONUSES
    )

    @classmethod
    def default(cls) -> ScoringTables:
        return cls()

    @classmethod
    def build(
        cls,
        domain_authority: Mapping[str, float] | None = None,
        default_authority: float = DEFAULT_AUTHORITY,
        context_keywords: Iterable[str] = INDIAN_CONTEXT_KEYWORDS,
        context_bonuses: Iterable[tuple[Iterable[str], float]] = INDIAN_CONTEXT_BONUSES,
    ) -> ScoringTables:
        return cls(
            domain_authority=_frozen({k.lower(): v for k, v in (domain_authority or {}).items()}),
            default_authority=default_authority,
            context_keywords=tuple(k.lower() for k in context_keywords),
            context_bonuses=tuple(
                BonusGroup(tuple(t.lower() for t in terms), bonus)
                for terms, bonus in context_bonuses
            ),
        )


@dataclass(frozen=True)
class SelectionTables:
    synonyms: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: _frozen(HR_SYNONYMS))

    @classmethod
    def default(cls) -> SelectionTables:
        return cls()

    @classmethod
    def build(cls, synonyms: Mapping[str, Iterable[str]]) -> SelectionTables:
        return cls(synonyms=_frozen({k.lower(): tuple(v) for k, v in synonyms.items()}))
