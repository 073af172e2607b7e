"""Pytest configuration and fixtures."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from ledger_insights.clients.ollama import OllamaClient
from ledger_insights.config.settings import Settings
from ledger_insights.domain.models import BenchmarkEntry, FinancialRecord
from ledger_insights.providers import InMemoryBenchmarkProvider, InMemoryDocumentProvider


def make_record(
    account: str,
    category: str,
    amount: str | int,
    period: str = "2024-01",
) -> FinancialRecord:
    """Build a record with a Decimal amount."""
    return FinancialRecord(
        account_name=account,
        category=category,
        amount=Decimal(str(amount)),
        period=period,
    )


@pytest.fixture
def settings():
    """Settings with fast retries and the default fallback policy."""
    return Settings(
        ollama_base_url="http://localhost:11434",
        default_text_model="llama3.2",
        vision_model="llama3.2-vision",
        timeout_seconds=30,
        max_retries=3,
        retry_delay_seconds=2,
        fallback_analyses=["CashFlowOptimization"],
    )


@pytest.fixture
def profitable_records():
    """A healthy company: 30% margin, assets well above liabilities."""
    return [
        make_record("Product Sales", "Revenue", 80000),
        make_record("Service Revenue", "Revenue", 20000),
        make_record("Salaries", "Expense", 50000),
        make_record("Rent", "Expense", 20000),
        make_record("Cash at Bank", "Asset", 40000),
        make_record("Accounts Receivable", "Asset", 20000),
        make_record("Accounts Payable", "Liability", 15000),
        make_record("Long-term Loan", "Liability", 5000),
        make_record("Owner Equity", "Equity", 40000),
    ]


@pytest.fixture
def loss_making_records():
    """A company losing money with more liabilities than assets."""
    return [
        make_record("Product Sales", "Revenue", 50000),
        make_record("Salaries", "Expense", 60000),
        make_record("Cash at Bank", "Asset", 12000),
        make_record("Credit Line", "Liability", 30000),
        make_record("Owner Equity", "Equity", 10000),
    ]


@pytest.fixture
def mock_client():
    """OllamaClient double whose generate() is an AsyncMock."""
    client = MagicMock(spec=OllamaClient)
    client.generate = AsyncMock(return_value="")
    client.default_model = "llama3.2"
    return client


@pytest.fixture
def documents(profitable_records, loss_making_records):
    return InMemoryDocumentProvider(
        {
            1: ("q1-ledger.xlsx", profitable_records),
            2: ("struggling-co.csv", loss_making_records),
            3: ("empty.csv", []),
        }
    )


@pytest.fixture
def benchmarks():
    return InMemoryBenchmarkProvider(
        {
            "Technology": {
                "NetMargin": BenchmarkEntry(
                    metric_name="NetMargin",
                    industry_average=Decimal("20"),
                    industry_median=Decimal("18"),
                    description="Percentage of revenue remaining as net profit",
                ),
                "CurrentRatio": BenchmarkEntry(
                    metric_name="CurrentRatio",
                    industry_average=Decimal("2"),
                    industry_median=Decimal("2"),
                ),
                "DebtToEquity": BenchmarkEntry(
                    metric_name="DebtToEquity",
                    industry_average=Decimal("1"),
                    industry_median=Decimal("0.8"),
                ),
            },
        }
    )
