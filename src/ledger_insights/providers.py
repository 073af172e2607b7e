"""Data provider interfaces consumed by the insight service.

Document records and industry benchmarks live outside this package. The
service only depends on the two protocols below; the in-memory versions
back tests and simple embedding.
"""

from typing import Protocol

from ledger_insights.domain.models import BenchmarkEntry, FinancialRecord


class InsightDataError(Exception):
    """Base exception for missing input data."""

    pass


class DocumentNotFoundError(InsightDataError):
    def __init__(self, document_id: int):
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class NoFinancialDataError(InsightDataError):
    """Document exists but has no financial records."""

    def __init__(self, message: str = "No financial data found for analysis", document_id: int | None = None):
        super().__init__(message)
        self.document_id = document_id


class DocumentProvider(Protocol):
    async def get_records_for_document(
        self, document_id: int
    ) -> tuple[list[FinancialRecord], bool]:
        """Return ``(records, found)`` for a document."""
        ...

    async def get_document_name(self, document_id: int) -> str:
        ...


class BenchmarkProvider(Protocol):
    async def get_benchmarks_for_industry(self, industry: str) -> dict[str, BenchmarkEntry]:
        """Return benchmark entries for one industry keyed by metric name."""
        ...


class InMemoryDocumentProvider:
    """Documents held in a dict of ``id -> (name, records)``."""

    def __init__(self, documents: dict[int, tuple[str, list[FinancialRecord]]] | None = None):
        self._documents = dict(documents or {})

    def add(self, document_id: int, name: str, records: list[FinancialRecord]) -> None:
        self._documents[document_id] = (name, list(records))

    async def get_records_for_document(
        self, document_id: int
    ) -> tuple[list[FinancialRecord], bool]:
        if document_id not in self._documents:
            return [], False
        return list(self._documents[document_id][1]), True

    async def get_document_name(self, document_id: int) -> str:
        if document_id not in self._documents:
            raise DocumentNotFoundError(document_id)
        return self._documents[document_id][0]


class InMemoryBenchmarkProvider:
    """Benchmarks held as ``industry -> metric name -> entry``."""

    def __init__(self, benchmarks: dict[str, dict[str, BenchmarkEntry]] | None = None):
        self._benchmarks = {k: dict(v) for k, v in (benchmarks or {}).items()}

    async def get_benchmarks_for_industry(self, industry: str) -> dict[str, BenchmarkEntry]:
        return dict(self._benchmarks.get(industry, {}))
