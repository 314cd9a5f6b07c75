"""Writes a standalone HTML artifact for a stored report."""

from __future__ import annotations

import asyncio
from html import escape
from pathlib import Path

from report_engine.exceptions import RenderError
from report_engine.models.domain import Document, Report
from report_engine.observability.logger import get_logger

logger = get_logger("file_renderer")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
<p class="meta">Confidence: {confidence:.0%} &middot; Sources: {source_count} &middot; Citations: {citation_count}</p>
<section class="executive-summary"><h2>Executive Summary</h2><p>{summary}</p></section>
{body}
<section class="methodology"><h2>Methodology</h2><p>{methodology}</p></section>
</body>
</html>
"""


class HtmlFileRenderer:
    def __init__(self, output_dir: str) -> None:
        self._output_dir = Path(output_dir)

    async def render(self, report: Report, sources: list[Document]) -> str:
        page = PAGE_TEMPLATE.format(
            title=escape(report.title),
            confidence=report.confidence_score,
            source_count=report.source_count,
            citation_count=report.citation_count,
            summary=escape(report.executive_summary),
            body=report.html_content,
            methodology=escape(report.methodology),
        )
        path = self._output_dir / f"report-{report.report_id}.html"
        try:
            await asyncio.to_thread(self._write, path, page)
        except OSError as e:
            raise RenderError(f"Failed to write {path}: {e}") from e
        logger.info("report_rendered", report_id=report.report_id, path=str(path))
        return str(path)

    @staticmethod
    def _write(path: Path, page: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(page, encoding="utf-8")
