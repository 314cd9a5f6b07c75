"""Engine factory: wires stores, scorer, selector and synthesizer from settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from report_engine.citations.extractor import CitationExtractor
from report_engine.config.settings import Settings
from report_engine.config.tables import ScoringTables, SelectionTables
from report_engine.exceptions import ConfigurationError
from report_engine.generation.gemini_provider import GeminiProvider
from report_engine.generation.synthesizer import ReportSynthesizer
from report_engine.ingestion.pipeline import IngestionPipeline
from report_engine.models.domain import Document, RawDocument, ReportOutcome
from report_engine.observability.logger import get_logger
from report_engine.protocols.llm import TextGenerator
from report_engine.rendering.file_renderer import HtmlFileRenderer
from report_engine.retrieval.source_selector import SourceSelector
from report_engine.scoring.confidence import ConfidenceEstimator
from report_engine.scoring.relevance import RelevanceScorer
from report_engine.storage.sqlite_doc_store import SQLiteDocStore
from report_engine.storage.sqlite_report_store import SQLiteCitationStore, SQLiteReportStore

logger = get_logger("engine")


@dataclass
class ReportEngine:
    settings: Settings
    doc_store: SQLiteDocStore
    report_store: SQLiteReportStore
    citation_store: SQLiteCitationStore
    scorer: RelevanceScorer
    ingestion: IngestionPipeline
    synthesizer: ReportSynthesizer | None

    def score_document(self, raw: RawDocument, source_label: str) -> Document:
        return self.scorer.score_document(raw, source_label)

    async def generate_report(
        self,
        topic: str,
        max_sources: int | None = None,
        time_range_days: int | None = None,
    ) -> ReportOutcome:
        if self.synthesizer is None:
            raise ConfigurationError("No text generation backend configured")
        return await self.synthesizer.generate_report(topic, max_sources, time_range_days)


async def create_engine(
    settings: Settings | None = None,
    llm: TextGenerator | None = None,
    scoring_tables: ScoringTables | None = None,
    selection_tables: SelectionTables | None = None,
) -> ReportEngine:
    settings = settings or Settings()
    Path(settings.sqlite_db_path).parent.mkdir(parents=True, exist_ok=True)

    # Storage
    doc_store = SQLiteDocStore(settings.sqlite_db_path)
    await doc_store.initialize()
    report_store = SQLiteReportStore(settings.sqlite_db_path)
    await report_store.initialize()
    citation_store = SQLiteCitationStore(settings.sqlite_db_path)

    # Scoring and ingestion
    scorer = RelevanceScorer(scoring_tables)
    ingestion = IngestionPipeline(scorer=scorer, doc_store=doc_store)

    # LLM
    if llm is None and settings.google_api_key:
        llm = GeminiProvider(api_key=settings.google_api_key, model=settings.gemini_model)

    synthesizer = None
    if llm is not None:
        selector = SourceSelector(
            doc_store,
            tables=selection_tables,
            quality_floor=settings.quality_floor,
            expansion_limit=settings.expansion_search_limit,
            max_keywords=settings.max_expansion_keywords,
        )
        synthesizer = ReportSynthesizer(
            selector=selector,
            llm=llm,
            extractor=CitationExtractor(),
            confidence=ConfidenceEstimator(),
            report_store=report_store,
            citation_store=citation_store,
            settings=settings,
            renderer=HtmlFileRenderer(settings.render_output_dir),
        )
    else:
        logger.warning("no_llm_configured", hint="set REPORT_GOOGLE_API_KEY to enable generation")

    return ReportEngine(
        settings=settings,
        doc_store=doc_store,
        report_store=report_store,
        citation_store=citation_store,
        scorer=scorer,
        ingestion=ingestion,
        synthesizer=synthesizer,
    )
