"""Protocols for document, report and citation persistence."""

from __future__ import annotations

from typing import Protocol

from report_engine.models.domain import Citation, Document, Report


class DocumentStore(Protocol):
    async def upsert(self, document: Document) -> Document: ...

    async def search_by_text(self, query: str, limit: int) -> list[Document]: ...

    async def get_by_id(self, doc_id: str) -> Document | None: ...

    async def exists(self, doc_id: str) -> bool: ...


class ReportStore(Protocol):
    async def create(self, report: Report) -> Report: ...

    async def get_by_id(self, report_id: str) -> Report | None: ...

    async def attach_render_path(self, report_id: str, render_path: str) -> None: ...


class CitationStore(Protocol):
    async def create_batch(self, citations: list[Citation]) -> list[Citation]: ...
