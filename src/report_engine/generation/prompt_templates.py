"""All prompt templates for report generation."""

from __future__ import annotations

from report_engine.models.domain import Document

REPORT_SYSTEM = """You are an expert HR researcher specializing in the Indian job market. You write comprehensive, data-driven reports based on recent news and developments.

Your reports should:
- Be factual and analytical, not promotional
- Include specific statistics, dates, and numbers when available
- Reference sources using [Source X] format
- Focus on trends, implications, and actionable insights
- Use professional business language
- Structure content with clear sections and subheadings
- Cite sources frequently throughout the text

Write a comprehensive research report on the given topic using only the provided sources."""

REPORT_PROMPT = """Topic: {topic}

Please write a comprehensive research report using these sources:

{source_block}

The report should be well-structured with:
1. Executive Summary
2. Key Findings
3. Current Market Trends
4. Statistical Analysis
5. Regional/Sector Breakdown (if applicable)
6. Future Implications
7. Recommendations

Use [Source X] citations throughout. Focus on Indian HR market context."""

SUMMARY_SYSTEM = (
    "You are a senior business analyst. Create a concise executive summary that "
    "highlights the most important findings and recommendations."
)

SUMMARY_PROMPT = """Based on this research report, write a 150-200 word executive summary that covers:
- Key findings
- Main trends identified
- Critical implications
- Primary recommendations

Report content:
{report_excerpt}

Note: This analysis is based on {source_count} recent sources from the Indian HR market."""

FALLBACK_SUMMARY = (
    "Executive Summary: This research report analyzes recent developments in the Indian HR "
    "market based on {source_count} sources. The analysis covers key trends, statistical "
    "insights, and strategic implications for HR professionals and business leaders."
)

METHODOLOGY = (
    "This report was generated through automated analysis of {source_count} recent sources "
    "from the {market}, covering the {time_range_days}-day period ending {end_date}. Sources "
    "were selected based on relevance, authority, and recency, then analyzed using AI to "
    "extract key insights and trends."
)


def format_date(doc: Document) -> str:
    return doc.published_at.date().isoformat() if doc.published_at else "Unknown"


def format_source_block(sources: list[Document], excerpt_chars: int = 1000) -> str:
    """Numbered source context; labels are 1-based positions in ``sources``."""
    blocks = []
    for i, source in enumerate(sources, 1):
        excerpt = (source.body or source.snippet or "")[:excerpt_chars]
        blocks.append(
            f"[Source {i}] {source.title}\n"
            f"URL: {source.url}\n"
            f"Published: {format_date(source)}\n"
            f"Content: {excerpt}\n"
            "---"
        )
    return "\n".join(blocks)
