"""Metric recording helpers for selection, generation and ingestion."""

from __future__ import annotations

from report_engine.observability.logger import get_logger

logger = get_logger("metrics")


def log_selection_metrics(
    trace_id: str,
    topic: str,
    candidates: int,
    expanded: bool,
    selected_scores: list[float],
) -> None:
    avg = sum(selected_scores) / len(selected_scores) if selected_scores else 0.0
    logger.info(
        "selection_metrics",
        trace_id=trace_id,
        topic=topic,
        candidates=candidates,
        expanded=expanded,
        selected=len(selected_scores),
        avg_score=round(avg, 3),
    )


def log_report_metrics(
    trace_id: str,
    report_id: str,
    confidence: float,
    citation_count: int,
    word_count: int,
) -> None:
    logger.info(
        "report_metrics",
        trace_id=trace_id,
        report_id=report_id,
        confidence=round(confidence, 4),
        citations=citation_count,
        words=word_count,
    )


def log_ingestion_metrics(
    source: str,
    collected: int,
    processed: int,
    duplicates: int,
    errors: int,
    avg_score: float,
) -> None:
    logger.info(
        "ingestion_metrics",
        source=source,
        collected=collected,
        processed=processed,
        duplicates=duplicates,
        errors=errors,
        avg_score=round(avg_score, 3),
    )


def log_latency(trace_id: str, stage: str, duration_ms: float, **fields) -> None:
    logger.info(
        "latency",
        trace_id=trace_id,
        stage=stage,
        duration_ms=round(duration_ms, 2),
        **fields,
    )
