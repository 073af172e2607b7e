"""Tests for deterministic scoring rules."""

from decimal import Decimal

import pytest

from ledger_insights.domain.dtos import BenchmarkComparison
from ledger_insights.domain.models import BenchmarkEntry, FinancialSummary, RatioSet
from ledger_insights.insights import scoring
from ledger_insights.metrics import aggregate, calculate_ratios
from ledger_insights.parsing import NO_RISK_ANALYSIS, RISK_EXTRACTION_FAILED


def summary_and_ratios(records):
    summary = aggregate(records)
    return summary, calculate_ratios(summary)


def comparison(metric: str, rating: str, variance: str) -> BenchmarkComparison:
    return BenchmarkComparison(
        metric_name=metric,
        company_value=Decimal("1"),
        industry_average=Decimal("1"),
        industry_median=Decimal("1"),
        performance_rating=rating,
        percentile_ranking=Decimal("50"),
        variance_from_average=Decimal("0"),
        variance_percentage=Decimal(variance),
    )


class TestHealthScoring:
    """Tests for health scores and ratings."""

    def test_profitable_company(self, profitable_records):
        summary, ratios = summary_and_ratios(profitable_records)

        assert scoring.health_score(summary, ratios) == 100
        assert scoring.health_rating(100) == "Excellent"
        assert scoring.profitability_score(ratios) == 100
        assert scoring.liquidity_score(ratios) == 100
        assert scoring.efficiency_score(summary) == 30
        assert scoring.stability_score(summary) == 80

    def test_loss_making_company(self, loss_making_records):
        summary, ratios = summary_and_ratios(loss_making_records)

        assert scoring.health_score(summary, ratios) == 50
        assert scoring.health_rating(50) == "Fair"
        assert scoring.profitability_score(ratios) == 0
        assert scoring.liquidity_score(ratios) == 20
        assert scoring.efficiency_score(summary) == 0
        assert scoring.stability_score(summary) == 40

    def test_no_revenue_scores(self):
        summary = FinancialSummary()

        assert scoring.health_score(summary, RatioSet()) == 50
        assert scoring.efficiency_score(summary) == 0

    @pytest.mark.parametrize(
        ("score", "rating"),
        [(80, "Excellent"), (79, "Good"), (60, "Good"), (59, "Fair"), (40, "Fair"), (39, "Poor"), (0, "Poor")],
    )
    def test_rating_bands(self, score, rating):
        assert scoring.health_rating(score) == rating

    def test_clamp_score(self):
        assert scoring.clamp_score(Decimal("150.7")) == 100
        assert scoring.clamp_score(Decimal("-3")) == 0
        assert scoring.clamp_score(Decimal("42.9")) == 42


class TestRiskScoring:
    """Tests for risk level and risk items."""

    def test_profitable_company_is_low_risk(self, profitable_records):
        summary, ratios = summary_and_ratios(profitable_records)

        level = scoring.risk_level(summary, ratios)

        assert level == scoring.LOW
        assert scoring.risk_score(level) == 20

    def test_loss_making_company_is_critical(self, loss_making_records):
        summary, ratios = summary_and_ratios(loss_making_records)

        level = scoring.risk_level(summary, ratios)

        assert level == scoring.CRITICAL
        assert scoring.risk_score(level) == 80

    def test_missing_current_ratio_counts_as_flag(self):
        summary = FinancialSummary(revenue=Decimal("100"), expenses=Decimal("50"))

        # Only the liquidity flag (25 points) applies
        assert scoring.risk_level(summary, RatioSet()) == scoring.MEDIUM

    def test_risk_items_from_severity_lines(self):
        lines = [
            "Negative net income of $(10,000) - Severity: High",
            "High debt-to-equity ratio of 3.00 - Severity: High",
            "Low current ratio of 0.40 indicates liquidity constraints - Severity: Critical",
            "Customer concentration",
        ]

        items = scoring.risk_items(lines, FinancialSummary())

        assert [i.category for i in items] == ["Profitability", "Leverage", "Liquidity", "Financial"]
        assert [i.severity for i in items] == ["High", "High", "Critical", "Medium"]
        assert items[0].description == "Negative net income of $(10,000)"
        assert items[2].impact == "Threatens business continuity"
        assert items[3].description == "Customer concentration"

    @pytest.mark.parametrize("sentinel", [NO_RISK_ANALYSIS, RISK_EXTRACTION_FAILED])
    def test_sentinels_fall_back_to_net_income_item(self, sentinel):
        summary = FinancialSummary(revenue=Decimal("50000"), expenses=Decimal("60000"))

        items = scoring.risk_items([sentinel], summary)

        assert len(items) == 1
        assert items[0].description == "Net Income: -$10,000.00"
        assert items[0].severity == "High"

    def test_fallback_item_low_when_profitable(self):
        summary = FinancialSummary(revenue=Decimal("100"), expenses=Decimal("50"))

        assert scoring.risk_items([], summary)[0].severity == "Low"


class TestBenchmarkScoring:
    """Tests for benchmark comparison rules."""

    @pytest.mark.parametrize(
        ("variance", "rating"),
        [
            ("50", scoring.WELL_ABOVE),
            ("25.01", scoring.WELL_ABOVE),
            ("25", scoring.ABOVE),
            ("10", scoring.AT_AVERAGE),
            ("-10", scoring.AT_AVERAGE),
            ("-10.5", scoring.BELOW),
            ("-25", scoring.BELOW),
            ("-25.5", scoring.WELL_BELOW),
        ],
    )
    def test_performance_rating_bands(self, variance, rating):
        assert scoring.performance_rating(Decimal(variance)) == rating

    def test_variance_percentage(self):
        assert scoring.variance_percentage(Decimal("30"), Decimal("20")) == Decimal("50")
        assert scoring.variance_percentage(Decimal("30"), Decimal("0")) == 0

    def test_percentile_zero_spread_is_fifty(self):
        entry = BenchmarkEntry("CurrentRatio", Decimal("2"), Decimal("2"))

        assert scoring.percentile_ranking(Decimal("3"), entry) == 50

    def test_percentile_from_z_score(self):
        entry = BenchmarkEntry("NetMargin", Decimal("20"), Decimal("16"))

        # spread 2, z = 0.5
        assert scoring.percentile_ranking(Decimal("21"), entry) == Decimal("67.065")

    def test_percentile_clamped(self):
        entry = BenchmarkEntry("NetMargin", Decimal("20"), Decimal("18"))

        assert scoring.percentile_ranking(Decimal("30"), entry) == 100
        assert scoring.percentile_ranking(Decimal("0"), entry) == 0

    def test_metric_recommendation(self):
        assert scoring.metric_recommendation("NetMargin", scoring.WELL_BELOW) == (
            "Critical improvement needed in NetMargin. Immediate action required."
        )
        assert scoring.metric_recommendation("NetMargin", "Unknown") == (
            "Review NetMargin performance and develop improvement plan."
        )

    def test_empty_benchmarks_not_rated(self):
        positioning = scoring.competitive_positioning([])

        assert positioning.overall_position == scoring.NOT_RATED
        assert positioning.competitive_score == 0
        assert positioning.strengths_count == 0
        assert positioning.weaknesses_count == 0

    def test_positioning_score_is_floored(self):
        benchmarks = [
            comparison("NetMargin", scoring.WELL_ABOVE, "50"),
            comparison("CurrentRatio", scoring.ABOVE, "12"),
            comparison("DebtToEquity", scoring.WELL_BELOW, "-50"),
        ]

        positioning = scoring.competitive_positioning(benchmarks)

        assert positioning.competitive_score == Decimal("66")
        assert positioning.overall_position == "Above Average"
        assert positioning.competitive_advantages == (
            "NetMargin: 50.0% above industry average",
            "CurrentRatio: 12.0% above industry average",
        )
        assert positioning.competitive_disadvantages == ("DebtToEquity: 50.0% below industry average",)
        assert positioning.market_position_summary == (
            "Company ranks as Above Average with 2 strengths and 1 areas for improvement out of 3 key metrics."
        )

    @pytest.mark.parametrize(
        ("score", "position"),
        [(80, "Leader"), (60, "Above Average"), (40, "Average"), (20, "Below Average"), (19, "Laggard")],
    )
    def test_competitive_position_bands(self, score, position):
        assert scoring.competitive_position(Decimal(score)) == position
