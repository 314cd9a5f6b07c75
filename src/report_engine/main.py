"""Entrypoint: command line for ingestion and report generation."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from report_engine.config.settings import Settings
from report_engine.engine import create_engine
from report_engine.exceptions import ConfigurationError
from report_engine.models.domain import RawDocument
from report_engine.models.schemas import RawDocumentPayload, ReportSummary
from report_engine.observability.logger import setup_logging


def load_raw_documents(path: Path) -> list[RawDocument]:
    """Read one raw document per JSON line; invalid lines are reported and skipped."""
    docs: list[RawDocument] = []
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                docs.append(RawDocumentPayload.model_validate_json(line).to_raw_document())
            except ValidationError as e:
                print(f"{path}:{lineno}: skipped invalid document ({e.error_count()} errors)", file=sys.stderr)
    return docs


async def cmd_init_db(settings: Settings, args: argparse.Namespace) -> int:
    engine = await create_engine(settings)
    print(f"Database ready at {settings.sqlite_db_path} ({await engine.doc_store.count()} documents)")
    return 0


async def cmd_ingest(settings: Settings, args: argparse.Namespace) -> int:
    engine = await create_engine(settings)
    raws = load_raw_documents(Path(args.file))
    if args.feed:
        stats = await engine.ingestion.ingest_feed_items(raws, args.source)
    else:
        stats = await engine.ingestion.ingest(raws, args.source)
    print(
        f"{stats.source}: collected {stats.collected}, processed {stats.processed}, "
        f"duplicates {stats.duplicates}, skipped {stats.skipped}, errors {stats.errors}, "
        f"avg score {stats.avg_score:.3f}"
    )
    return 0 if stats.errors == 0 else 1


async def cmd_generate(settings: Settings, args: argparse.Namespace) -> int:
    engine = await create_engine(settings)
    try:
        outcome = await engine.generate_report(args.topic, args.max_sources, args.days)
    except ConfigurationError as e:
        print(f"Cannot generate reports: {e}", file=sys.stderr)
        return 2
    if not outcome.ok:
        print(f"Report generation failed [{outcome.error_code}]: {outcome.error}", file=sys.stderr)
        return 1
    print(ReportSummary.from_report(outcome.report).model_dump_json(indent=2))
    return 0


async def cmd_show(settings: Settings, args: argparse.Namespace) -> int:
    engine = await create_engine(settings)
    report = await engine.report_store.get_by_id(args.report_id)
    if report is None:
        print(f"Report not found: {args.report_id}", file=sys.stderr)
        return 1
    citations = await engine.citation_store.list_for_report(report.report_id)
    payload = ReportSummary.from_report(report).model_dump()
    payload["executive_summary"] = report.executive_summary
    payload["citations"] = [
        {"sequence": c.sequence, "document_id": c.document_id, "quoted_text": c.quoted_text}
        for c in citations
    ]
    print(json.dumps(payload, indent=2))
    return 0


COMMANDS = {
    "init-db": cmd_init_db,
    "ingest": cmd_ingest,
    "generate": cmd_generate,
    "show": cmd_show,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="report-engine", description="Research report pipeline")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables")

    ingest = sub.add_parser("ingest", help="Score and store raw documents from a JSON-lines file")
    ingest.add_argument("file")
    ingest.add_argument("--source", required=True, help="Source label, e.g. brave or rss")
    ingest.add_argument("--feed", action="store_true", help="Skip items already stored")

    generate = sub.add_parser("generate", help="Generate a cited report for a topic")
    generate.add_argument("topic")
    generate.add_argument("--max-sources", type=int, default=None)
    generate.add_argument("--days", type=int, default=None)

    show = sub.add_parser("show", help="Print a stored report and its citations")
    show.add_argument("report_id")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level, settings.json_logs)
    return asyncio.run(COMMANDS[args.command](settings, args))


if __name__ == "__main__":
    sys.exit(main())
