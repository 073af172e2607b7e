"""Deterministic scoring and classification rules.

Scores are computed from the aggregated numbers only and never from
generated text, so they are stable regardless of response quality.
"""

import re
from collections.abc import Sequence
from decimal import ROUND_FLOOR, Decimal

from ledger_insights.domain.dtos import BenchmarkComparison, CompetitivePositioning, RiskItem
from ledger_insights.domain.models import ZERO, BenchmarkEntry, FinancialSummary, RatioSet
from ledger_insights.parsing import SENTINELS
from ledger_insights.prompts.formatting import currency

LOW = "Low"
MEDIUM = "Medium"
HIGH = "High"
CRITICAL = "Critical"

WELL_ABOVE = "Well Above Average"
ABOVE = "Above Average"
AT_AVERAGE = "At Industry Average"
BELOW = "Below Average"
WELL_BELOW = "Well Below Average"

NOT_RATED = "Not Rated"

_RISK_SCORES = {CRITICAL: 80, HIGH: 60, MEDIUM: 40, LOW: 20}


def clamp_score(value: Decimal | int) -> int:
    """Truncate to an int in 0..100."""
    return int(min(max(Decimal(value), ZERO), Decimal(100)))


def health_score(summary: FinancialSummary, ratios: RatioSet) -> int:
    """Base 50 plus points for profitability, liquidity and cost efficiency."""
    score = 50

    if summary.net_income > 0:
        score += 15
    if ratios.get_or_zero("ProfitMargin") > 10:
        score += 15

    if ratios.get_or_zero("CurrentRatio") > Decimal("1.5"):
        score += 15
    if summary.assets > summary.liabilities:
        score += 15

    if summary.revenue > 0 and summary.expenses > 0 and summary.expense_ratio < 80:
        score += 20

    return clamp_score(score)


def health_rating(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"


def profitability_score(ratios: RatioSet) -> int:
    return clamp_score(ratios.get_or_zero("ProfitMargin") * 5)


def liquidity_score(ratios: RatioSet) -> int:
    return clamp_score(ratios.get_or_zero("CurrentRatio") * 50)


def efficiency_score(summary: FinancialSummary) -> int:
    """Share of revenue not consumed by expenses; 0 without revenue."""
    if summary.revenue <= 0:
        return 0
    return clamp_score(100 - summary.expense_ratio)


def stability_score(summary: FinancialSummary) -> int:
    return 80 if summary.net_income > 0 else 40


def risk_level(summary: FinancialSummary, ratios: RatioSet) -> str:
    """Critical, High, Medium or Low from weighted red flags.

    A missing current ratio counts as 0 and therefore as a liquidity flag.
    """
    points = 0
    if summary.net_income < 0:
        points += 30
    if ratios.get_or_zero("DebtToEquity") > 2:
        points += 20
    if ratios.get_or_zero("CurrentRatio") < 1:
        points += 25
    if summary.revenue > 0 and summary.expenses / summary.revenue > Decimal("0.9"):
        points += 25

    if points > 60:
        return CRITICAL
    if points > 40:
        return HIGH
    if points > 20:
        return MEDIUM
    return LOW


def risk_score(level: str) -> int:
    return _RISK_SCORES.get(level, _RISK_SCORES[LOW])


_SEVERITY_SUFFIX = re.compile(r"^(.*?)\s*[-–]\s*Severity:\s*(low|medium|high|critical)\b", re.IGNORECASE)

_RISK_CATEGORIES = (
    ("Liquidity", ("current ratio", "liquidity", "cash", "working capital")),
    ("Leverage", ("debt", "leverage", "liabilit", "equity")),
    ("Profitability", ("net income", "margin", "profit", "loss")),
    ("Operational", ("expense", "cost")),
)

_RISK_IMPACTS = {
    CRITICAL: "Threatens business continuity",
    HIGH: "Significant impact on financial stability",
    MEDIUM: "Moderate impact on financial performance",
    LOW: "Limited impact on current operations",
}

_CATEGORY_RECOMMENDATIONS = {
    "Liquidity": ("Improve cash flow management", "Strengthen working capital"),
    "Leverage": ("Reduce debt levels", "Strengthen the equity base"),
    "Profitability": ("Review expenses", "Increase revenue"),
    "Operational": ("Reduce operating costs", "Improve process efficiency"),
    "Financial": ("Monitor financial ratios", "Review financial strategy"),
}


def _risk_category(description: str) -> str:
    lowered = description.lower()
    for category, keywords in _RISK_CATEGORIES:
        if any(keyword in lowered for keyword in keywords):
            return category
    return "Financial"


def _risk_item(description: str, severity: str) -> RiskItem:
    category = _risk_category(description)
    return RiskItem(
        category=category,
        description=description,
        severity=severity,
        impact=_RISK_IMPACTS[severity],
        recommendations=_CATEGORY_RECOMMENDATIONS[category],
    )


def risk_items(risk_lines: Sequence[str], summary: FinancialSummary) -> tuple[RiskItem, ...]:
    """Build risk items from extracted lines such as ``"Debt ratio of 2.5 - Severity: High"``.

    Lines without a severity suffix default to Medium. When no real lines were
    extracted, a single net-income item derived from the numbers is returned.
    """
    items = []
    for line in risk_lines:
        if line in SENTINELS:
            continue
        match = _SEVERITY_SUFFIX.match(line)
        if match:
            description = match.group(1).strip() or line
            severity = match.group(2).capitalize()
        else:
            description, severity = line, MEDIUM
        items.append(_risk_item(description, severity))

    if items:
        return tuple(items)

    return (
        RiskItem(
            category="Financial",
            description=f"Net Income: {currency(summary.net_income)}",
            severity=HIGH if summary.net_income < 0 else LOW,
            impact="Affects profitability",
            recommendations=("Review expenses", "Increase revenue"),
        ),
    )


def performance_rating(variance_percentage: Decimal) -> str:
    if variance_percentage > 25:
        return WELL_ABOVE
    if variance_percentage > 10:
        return ABOVE
    if variance_percentage >= -10:
        return AT_AVERAGE
    if variance_percentage >= -25:
        return BELOW
    return WELL_BELOW


def variance_percentage(company_value: Decimal, industry_average: Decimal) -> Decimal:
    if industry_average == 0:
        return ZERO
    return (company_value - industry_average) / industry_average * 100


def percentile_ranking(company_value: Decimal, benchmark: BenchmarkEntry) -> Decimal:
    """Approximate percentile from a z-score.

    The spread is taken as half the gap between median and average, and
    each standard deviation is worth 34.13 points. Returns 50 when the
    spread is zero; the result is clamped to 0..100.
    """
    mean = benchmark.industry_average
    spread = abs(benchmark.industry_median - mean) * Decimal("0.5")
    if spread == 0:
        return Decimal(50)

    z_score = (company_value - mean) / spread
    percentile = 50 + z_score * Decimal("34.13")
    return min(max(percentile, ZERO), Decimal(100))


_METRIC_RECOMMENDATIONS = {
    WELL_ABOVE: "Excellent performance in {metric}. Maintain current strategies.",
    ABOVE: "Strong performance in {metric}. Continue current approach with minor optimizations.",
    AT_AVERAGE: "Average performance in {metric}. Focus on targeted improvements.",
    BELOW: "{metric} needs attention. Implement industry best practices.",
    WELL_BELOW: "Critical improvement needed in {metric}. Immediate action required.",
}


def metric_recommendation(metric_name: str, rating: str) -> str:
    template = _METRIC_RECOMMENDATIONS.get(
        rating, "Review {metric} performance and develop improvement plan."
    )
    return template.format(metric=metric_name)


def competitive_position(score: Decimal) -> str:
    if score >= 80:
        return "Leader"
    if score >= 60:
        return "Above Average"
    if score >= 40:
        return "Average"
    if score >= 20:
        return "Below Average"
    return "Laggard"


def competitive_positioning(benchmarks: Sequence[BenchmarkComparison]) -> CompetitivePositioning:
    """Summarize how many metrics sit above or below the industry.

    Metrics above average score 100, metrics at average 50, and the score is
    the floored mean. With no benchmarks the score is 0 and the position is
    ``Not Rated``.
    """
    above = [b for b in benchmarks if "Above" in b.performance_rating]
    below = [b for b in benchmarks if "Below" in b.performance_rating]
    total = len(benchmarks)

    if total == 0:
        return CompetitivePositioning(
            overall_position=NOT_RATED,
            competitive_score=ZERO,
            strengths_count=0,
            weaknesses_count=0,
            market_position_summary="No industry benchmarks are available for comparison.",
        )

    middle = total - len(above) - len(below)
    score = (Decimal(len(above) * 100 + middle * 50) / total).to_integral_value(ROUND_FLOOR)
    position = competitive_position(score)

    return CompetitivePositioning(
        overall_position=position,
        competitive_score=score,
        strengths_count=len(above),
        weaknesses_count=len(below),
        competitive_advantages=tuple(
            f"{b.metric_name}: {b.variance_percentage:.1f}% above industry average" for b in above
        ),
        competitive_disadvantages=tuple(
            f"{b.metric_name}: {abs(b.variance_percentage):.1f}% below industry average"
            for b in below
        ),
        market_position_summary=(
            f"Company ranks as {position} with {len(above)} strengths and "
            f"{len(below)} areas for improvement out of {total} key metrics."
        ),
    )
