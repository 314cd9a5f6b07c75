"""Inline citation marker syntax, isolated so the marker format can change in one place."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class MarkerMatch:
    label: int
    start: int
    end: int


class CitationMarkerParser(Protocol):
    def find(self, text: str) -> list[MarkerMatch]: ...

    def format(self, label: int) -> str: ...


class SourceMarkerParser:
    """Markers of the form ``[Source N]`` with a 1-based source label."""

    _pattern = re.compile(r"\[Source (\d+)\]")

    def find(self, text: str) -> list[MarkerMatch]:
        return [
            MarkerMatch(label=int(m.group(1)), start=m.start(), end=m.end())
            for m in self._pattern.finditer(text or "")
        ]

    def format(self, label: int) -> str:
        return f"[Source {label}]"
