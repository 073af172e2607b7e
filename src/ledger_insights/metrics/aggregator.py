"""Aggregation of ledger records into summaries, ratios and metric maps.

Every function here is total: any list of records, including an empty
one or one full of unknown categories, produces a result without raising.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from ledger_insights.domain.models import (
    ZERO,
    FinancialCategory,
    FinancialRecord,
    FinancialSummary,
    RatioSet,
)


def _total(records: Iterable[FinancialRecord], category: FinancialCategory) -> Decimal:
    return sum(
        (r.amount for r in records if r.financial_category is category),
        ZERO,
    )


def aggregate(records: list[FinancialRecord]) -> FinancialSummary:
    """Sum record amounts into the five recognized buckets."""
    unrecognized = [
        r for r in records if r.financial_category is FinancialCategory.UNRECOGNIZED
    ]
    return FinancialSummary(
        revenue=_total(records, FinancialCategory.REVENUE),
        expenses=_total(records, FinancialCategory.EXPENSE),
        assets=_total(records, FinancialCategory.ASSET),
        liabilities=_total(records, FinancialCategory.LIABILITY),
        equity=_total(records, FinancialCategory.EQUITY),
        unrecognized=sum((r.amount for r in unrecognized), ZERO),
        unrecognized_count=len(unrecognized),
    )


def calculate_ratios(summary: FinancialSummary) -> RatioSet:
    """Compute the basic ratio set with guarded denominators."""
    ratios = RatioSet()

    if summary.revenue > 0:
        ratios["ProfitMargin"] = summary.net_income / summary.revenue * 100
        ratios["GrossMargin"] = (summary.revenue - summary.expenses) / summary.revenue * 100

    if summary.liabilities > 0 and summary.assets > 0:
        ratios["CurrentRatio"] = summary.assets / summary.liabilities

    if summary.equity > 0 and summary.liabilities > 0:
        ratios["DebtToEquity"] = summary.liabilities / summary.equity

    return ratios


def calculate_key_metrics(records: list[FinancialRecord]) -> RatioSet:
    """Build the metric map compared against industry benchmarks.

    Margin and return metrics are floored at 0 when net income is not
    positive; the ratio group is omitted entirely when its denominator is.
    """
    summary = aggregate(records)
    revenue = summary.revenue
    net_income = summary.net_income

    metrics = RatioSet(
        Revenue=revenue,
        Expenses=summary.expenses,
        NetIncome=net_income,
        Assets=summary.assets,
        Liabilities=summary.liabilities,
        Equity=summary.equity,
    )

    if revenue > 0:
        metrics["GrossMargin"] = (revenue - summary.expenses) / revenue * 100
        metrics["OperatingMargin"] = net_income / revenue * 100 if net_income > 0 else ZERO
        metrics["NetMargin"] = net_income / revenue * 100 if net_income > 0 else ZERO

    if summary.liabilities > 0:
        metrics["CurrentRatio"] = summary.assets / summary.liabilities
        # Simplified: no split between liquid and illiquid assets is available
        metrics["QuickRatio"] = (summary.assets - summary.liabilities) / summary.liabilities

    if summary.equity > 0:
        metrics["DebtToEquity"] = summary.liabilities / summary.equity
        metrics["ReturnOnEquity"] = net_income / summary.equity * 100 if net_income > 0 else ZERO

    if summary.assets > 0:
        metrics["ReturnOnAssets"] = net_income / summary.assets * 100 if net_income > 0 else ZERO

    return metrics


# Sentinel runway for a business that is not burning cash
UNLIMITED_RUNWAY = Decimal("999")
DEFAULT_RUNWAY_MONTHS = Decimal("6")


def calculate_cash_flow_metrics(records: list[FinancialRecord]) -> RatioSet:
    """Estimate cash-flow figures from ledger totals and cash account names."""
    summary = aggregate(records)
    operating_cash = summary.net_income

    metrics = RatioSet(OperatingCashFlow=operating_cash)

    cash_position = sum(
        (r.amount for r in records if "Cash" in r.account_name),
        ZERO,
    )
    # Estimate from the asset base when no cash account is present
    metrics["CashPosition"] = cash_position if cash_position > 0 else summary.assets * Decimal("0.1")

    if operating_cash < 0:
        burn_rate = abs(operating_cash) / 12
        metrics["BurnRate"] = burn_rate
        metrics["RunwayMonths"] = (
            cash_position / burn_rate if cash_position > 0 else DEFAULT_RUNWAY_MONTHS
        )
    else:
        metrics["BurnRate"] = ZERO
        metrics["RunwayMonths"] = UNLIMITED_RUNWAY

    current_assets = sum(
        (
            r.amount
            for r in records
            if r.financial_category is FinancialCategory.ASSET
            and "Property" not in r.account_name
            and "Equipment" not in r.account_name
        ),
        ZERO,
    )
    current_liabilities = sum(
        (
            r.amount
            for r in records
            if r.financial_category is FinancialCategory.LIABILITY
            and "Long-term" not in r.account_name
        ),
        ZERO,
    )
    metrics["WorkingCapital"] = current_assets - current_liabilities

    metrics["InvestingCashFlow"] = -summary.assets * Decimal("0.05")
    metrics["FinancingCashFlow"] = summary.liabilities * Decimal("0.02")
    metrics["NetCashFlow"] = (
        operating_cash + metrics["InvestingCashFlow"] + metrics["FinancingCashFlow"]
    )

    return metrics


@dataclass(frozen=True)
class AmountStatistics:
    average: Decimal
    median: Decimal
    count: int


def calculate_statistics(records: list[FinancialRecord]) -> AmountStatistics:
    """Average and median record amount, all zero for no records."""
    if not records:
        return AmountStatistics(average=ZERO, median=ZERO, count=0)

    amounts = sorted(r.amount for r in records)
    count = len(amounts)
    middle = count // 2
    if count % 2 == 0:
        median = (amounts[middle - 1] + amounts[middle]) / 2
    else:
        median = amounts[middle]

    return AmountStatistics(
        average=sum(amounts, ZERO) / count,
        median=median,
        count=count,
    )


def category_totals(records: list[FinancialRecord]) -> list[tuple[str, Decimal]]:
    """Totals per raw category label, largest absolute total first."""
    totals: dict[str, Decimal] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, ZERO) + record.amount
    return sorted(totals.items(), key=lambda item: abs(item[1]), reverse=True)
