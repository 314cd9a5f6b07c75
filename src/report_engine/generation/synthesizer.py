"""Report synthesis orchestrator: select sources, generate, extract citations, persist."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from report_engine.citations.extractor import CitationExtractor
from report_engine.config.settings import Settings
from report_engine.exceptions import ReportEngineError
from report_engine.generation.prompt_templates import (
    FALLBACK_SUMMARY,
    METHODOLOGY,
    REPORT_PROMPT,
    REPORT_SYSTEM,
    SUMMARY_PROMPT,
    SUMMARY_SYSTEM,
    format_source_block,
)
from report_engine.models.domain import (
    Citation,
    Document,
    ExtractedCitation,
    Report,
    ReportOutcome,
    utcnow,
)
from report_engine.models.error_codes import ErrorCode
from report_engine.observability.logger import get_logger
from report_engine.observability.metrics import (
    log_latency,
    log_report_metrics,
    log_selection_metrics,
)
from report_engine.observability.tracing import ReportTrace
from report_engine.protocols.llm import PromptMessage, TextGenerator
from report_engine.protocols.renderer import ReportRenderer
from report_engine.protocols.stores import CitationStore, ReportStore
from report_engine.rendering.html import render_report_html
from report_engine.retrieval.source_selector import SourceSelector
from report_engine.scoring.confidence import ConfidenceEstimator
from report_engine.scoring.content_hash import topic_hash
from report_engine.scoring.relevance import count_words

logger = get_logger("synthesizer")


def _caller_cancelled() -> bool:
    """True when the running task itself was asked to cancel, not just the backend call."""
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class ReportSynthesizer:
    def __init__(
        self,
        selector: SourceSelector,
        llm: TextGenerator,
        extractor: CitationExtractor,
        confidence: ConfidenceEstimator,
        report_store: ReportStore,
        citation_store: CitationStore,
        settings: Settings,
        renderer: ReportRenderer | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._selector = selector
        self._llm = llm
        self._extractor = extractor
        self._confidence = confidence
        self._report_store = report_store
        self._citation_store = citation_store
        self._settings = settings
        self._renderer = renderer
        self._clock = clock

    async def generate_report(
        self,
        topic: str,
        max_sources: int | None = None,
        time_range_days: int | None = None,
    ) -> ReportOutcome:
        if max_sources is None:
            max_sources = self._settings.default_max_sources
        if time_range_days is None:
            time_range_days = self._settings.default_time_range_days
        trace = ReportTrace(topic)
        now = self._clock()
        logger.info("report_started", trace_id=trace.trace_id, topic=topic)

        # STEP 1: Source selection
        try:
            with trace.stage(
                "selection", max_sources=max_sources, time_range_days=time_range_days
            ):
                sources = await self._selector.select(topic, max_sources, time_range_days, now=now)
        except ReportEngineError as e:
            logger.error("selection_failed", trace_id=trace.trace_id, error=str(e))
            return ReportOutcome.failed(ErrorCode.SELECTION_FAILED, str(e))

        log_selection_metrics(
            trace.trace_id,
            topic,
            self._selector.last_candidate_count,
            self._selector.last_expanded,
            [s.composite_score for s in sources],
        )
        if not sources:
            return ReportOutcome.failed(
                ErrorCode.NO_SOURCES_FOUND, f"No relevant sources found for topic: {topic}"
            )

        # STEP 2: Report body
        try:
            with trace.stage("generation", sources=len(sources)):
                content = await self._generate_body(topic, sources)
        except asyncio.CancelledError:
            if _caller_cancelled():
                raise
            logger.error("generation_cancelled", trace_id=trace.trace_id)
            return ReportOutcome.failed(
                ErrorCode.GENERATION_FAILED, "Failed to generate content: backend call cancelled"
            )
        except Exception as e:
            logger.error("generation_failed", trace_id=trace.trace_id, error=str(e))
            return ReportOutcome.failed(
                ErrorCode.GENERATION_FAILED, f"Failed to generate content: {e}"
            )

        # STEP 3: Executive summary (degrades to a templated summary)
        with trace.stage("summary"):
            summary = await self._generate_summary(content, len(sources))

        # STEP 4-5: Citations, sections and confidence
        with trace.stage("extraction"):
            extraction = self._extractor.extract(content, sources)
            confidence = self._confidence.estimate(sources, content)

        # STEP 6: Assemble
        report = Report(
            report_id=str(uuid4()),
            topic=topic,
            topic_hash=topic_hash(topic),
            time_range_days=time_range_days,
            max_sources=max_sources,
            title=self._title(topic, now),
            content=content,
            executive_summary=summary,
            methodology=METHODOLOGY.format(
                source_count=len(sources),
                market=self._settings.market_label,
                time_range_days=time_range_days,
                end_date=now.date().isoformat(),
            ),
            html_content=render_report_html(extraction.sections, sources),
            confidence_score=confidence,
            source_count=len(sources),
            citation_count=len(extraction.citations),
            word_count=count_words(content),
            generation_time_ms=trace.elapsed_ms,
            source_ids=[s.content_hash for s in sources],
            created_at=now,
        )

        # STEP 7: Persist report, then citations
        try:
            with trace.stage("persistence"):
                report = await self._report_store.create(report)
        except ReportEngineError as e:
            logger.error("report_persist_failed", trace_id=trace.trace_id, error=str(e))
            return ReportOutcome.failed(ErrorCode.PERSISTENCE_FAILED, str(e))

        await self._persist_citations(trace, report, extraction.citations)

        # STEP 8: Render artifact
        if self._renderer is not None:
            await self._render(trace, report, sources)

        for span in trace.stages:
            log_latency(trace.trace_id, span.stage, span.duration_ms, **span.fields)
        log_report_metrics(
            trace.trace_id,
            report.report_id,
            report.confidence_score,
            report.citation_count,
            report.word_count,
        )
        logger.info(
            "report_completed",
            trace_id=trace.trace_id,
            report_id=report.report_id,
            duration_ms=round(trace.elapsed_ms, 2),
            stages=trace.durations(),
            failed_stages=trace.failed_stages(),
        )
        return ReportOutcome.completed(report)

    async def _generate_body(self, topic: str, sources: list[Document]) -> str:
        messages = [
            PromptMessage(role="system", content=REPORT_SYSTEM),
            PromptMessage(
                role="user",
                content=REPORT_PROMPT.format(
                    topic=topic,
                    source_block=format_source_block(
                        sources, self._settings.source_excerpt_chars
                    ),
                ),
            ),
        ]
        content = await asyncio.wait_for(
            self._llm.generate(
                messages,
                max_tokens=self._settings.report_max_tokens,
                temperature=self._settings.report_temperature,
            ),
            timeout=self._settings.generation_timeout_seconds,
        )
        logger.info("report_body_generated", words=count_words(content))
        return content

    async def _generate_summary(self, content: str, source_count: int) -> str:
        messages = [
            PromptMessage(role="system", content=SUMMARY_SYSTEM),
            PromptMessage(
                role="user",
                content=SUMMARY_PROMPT.format(
                    report_excerpt=content[: self._settings.summary_input_chars],
                    source_count=source_count,
                ),
            ),
        ]
        try:
            return await asyncio.wait_for(
                self._llm.generate(
                    messages,
                    max_tokens=self._settings.summary_max_tokens,
                    temperature=self._settings.summary_temperature,
                ),
                timeout=self._settings.generation_timeout_seconds,
            )
        except asyncio.CancelledError:
            if _caller_cancelled():
                raise
            logger.warning("summary_fallback", error="backend call cancelled")
        except Exception as e:
            logger.warning("summary_fallback", error=str(e))
        return FALLBACK_SUMMARY.format(source_count=source_count)

    async def _persist_citations(
        self, trace: ReportTrace, report: Report, extracted: list[ExtractedCitation]
    ) -> None:
        if not extracted:
            return
        citations = [
            Citation(
                citation_id=str(uuid4()),
                report_id=report.report_id,
                document_id=c.document_id,
                sequence=c.sequence,
                quoted_text=c.quoted_text,
                context=c.context,
            )
            for c in extracted
        ]
        try:
            with trace.stage("citations", count=len(citations)):
                await self._citation_store.create_batch(citations)
            logger.info("citations_saved", report_id=report.report_id, count=len(citations))
        except Exception as e:
            logger.error(
                "citation_persist_failed",
                trace_id=trace.trace_id,
                report_id=report.report_id,
                error=str(e),
            )

    async def _render(self, trace: ReportTrace, report: Report, sources: list[Document]) -> None:
        try:
            with trace.stage("render"):
                path = await self._renderer.render(report, sources)
                await self._report_store.attach_render_path(report.report_id, path)
            report.render_path = path
        except Exception as e:
            logger.error(
                "render_failed",
                trace_id=trace.trace_id,
                report_id=report.report_id,
                error=str(e),
            )

    def _title(self, topic: str, now: datetime) -> str:
        return f"{topic[:1].upper()}{topic[1:]} - {self._settings.market_label} Analysis {now.year}"
