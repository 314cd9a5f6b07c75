"""Tests for the report-engine command line."""

import json
from pathlib import Path

import pytest

from report_engine.main import build_parser, load_raw_documents, main


@pytest.fixture
def cli_env(monkeypatch, tmp_dir):
    monkeypatch.setenv("REPORT_SQLITE_DB_PATH", str(Path(tmp_dir) / "cli.db"))
    monkeypatch.setenv("REPORT_RENDER_OUTPUT_DIR", str(Path(tmp_dir) / "rendered"))
    monkeypatch.setenv("REPORT_GOOGLE_API_KEY", "")
    return Path(tmp_dir)


def _write_jsonl(path: Path, rows: list) -> Path:
    path.write_text("\n".join(r if isinstance(r, str) else json.dumps(r) for r in rows), encoding="utf-8")
    return path


def test_load_raw_documents_skips_invalid_lines(tmp_dir, capsys):
    path = _write_jsonl(
        Path(tmp_dir) / "docs.jsonl",
        [
            {"title": "Attrition climbs", "url": "https://example.com/a", "content": "Body"},
            "{not json",
            "",
            {"title": "", "url": "https://example.com/b", "published_at": "2026-10-01T00:00:00Z"},
        ],
    )

    docs = load_raw_documents(path)

    assert [d.title for d in docs] == ["Attrition climbs", "Untitled"]
    assert docs[0].body == "Body"
    assert "docs.jsonl:2" in capsys.readouterr().err


def test_parser_requires_source_for_ingest():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["ingest", "docs.jsonl"])


def test_generate_options_parsed():
    args = build_parser().parse_args(["generate", "gig work", "--max-sources", "5", "--days", "7"])
    assert (args.topic, args.max_sources, args.days) == ("gig work", 5, 7)


def test_init_ingest_and_generate_without_backend(cli_env, capsys):
    assert main(["init-db"]) == 0
    assert "0 documents" in capsys.readouterr().out

    path = _write_jsonl(
        cli_env / "docs.jsonl",
        [{"title": "Attrition climbs", "url": "https://example.com/a", "content": "Attrition rose."}],
    )
    assert main(["ingest", str(path), "--source", "search"]) == 0
    assert "processed 1" in capsys.readouterr().out

    assert main(["generate", "attrition"]) == 2
    assert "Cannot generate reports" in capsys.readouterr().err


def test_show_unknown_report(cli_env, capsys):
    assert main(["show", "missing"]) == 1
    assert "Report not found" in capsys.readouterr().err
