"""Protocol for report render-artifact producers."""

from __future__ import annotations

from typing import Protocol

from report_engine.models.domain import Document, Report


class ReportRenderer(Protocol):
    async def render(self, report: Report, sources: list[Document]) -> str:
        """Returns the path of the rendered artifact."""
        ...
