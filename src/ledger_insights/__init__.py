"""Ledger Insights - turns ledger records into structured financial insights with a local LLM."""

__version__ = "0.1.0"

from ledger_insights.clients import GenerationError, OllamaClient
from ledger_insights.domain import AnalysisKind, FinancialRecord, IndustryType
from ledger_insights.insights import InsightService
from ledger_insights.providers import (
    DocumentNotFoundError,
    InMemoryBenchmarkProvider,
    InMemoryDocumentProvider,
    NoFinancialDataError,
)

__all__ = [
    "AnalysisKind",
    "DocumentNotFoundError",
    "FinancialRecord",
    "GenerationError",
    "InMemoryBenchmarkProvider",
    "InMemoryDocumentProvider",
    "IndustryType",
    "InsightService",
    "NoFinancialDataError",
    "OllamaClient",
    "__version__",
]
