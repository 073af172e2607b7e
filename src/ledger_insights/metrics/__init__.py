"""Metric aggregation over ledger records."""

from ledger_insights.metrics.aggregator import (
    AmountStatistics,
    aggregate,
    calculate_cash_flow_metrics,
    calculate_key_metrics,
    calculate_ratios,
    calculate_statistics,
    category_totals,
)

__all__ = [
    "AmountStatistics",
    "aggregate",
    "calculate_cash_flow_metrics",
    "calculate_key_metrics",
    "calculate_ratios",
    "calculate_statistics",
    "category_totals",
]
