"""HTML assembly for report sections and the bibliography."""

from __future__ import annotations

from html import escape

from report_engine.generation.prompt_templates import format_date
from report_engine.models.domain import Document, ReportSection


def render_report_html(sections: list[ReportSection], sources: list[Document]) -> str:
    parts = ['<div class="research-report">']

    for section in sections:
        body = escape(section.content).replace("\n", "<br>")
        parts.append(
            f"<section><h2>{escape(section.title)}</h2>"
            f'<div class="content">{body}</div></section>'
        )

    if sources:
        parts.append('<section class="bibliography"><h2>Sources</h2><ol>')
        for source in sources:
            url = escape(source.url, quote=True)
            parts.append(
                "<li>"
                f"<strong>{escape(source.title)}</strong><br>"
                f'<a href="{url}" target="_blank">{escape(source.url)}</a><br>'
                f"Published: {format_date(source)}<br>"
                f"Source: {escape(source.source)}<br>"
                "</li>"
            )
        parts.append("</ol></section>")

    parts.append("</div>")
    return "".join(parts)
