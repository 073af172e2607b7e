"""Tests for prompt rendering."""

from decimal import Decimal

import pytest

from ledger_insights.domain.models import AnalysisKind, FinancialSummary, RatioSet
from ledger_insights.metrics import aggregate, calculate_cash_flow_metrics, calculate_key_metrics, calculate_ratios
from ledger_insights.prompts import (
    anomaly_detection_prompt,
    build_benchmark_prompt,
    build_cash_flow_prompt,
    build_investment_prompt,
    build_prompt,
    context_question_prompt,
    currency,
    custom_question_prompt,
    format_records_table,
    overall_rating_label,
    prompt_risk_label,
    ratio_analysis_prompt,
)


@pytest.fixture
def profitable(profitable_records):
    summary = aggregate(profitable_records)
    return summary, calculate_ratios(summary)


@pytest.fixture
def loss_making(loss_making_records):
    summary = aggregate(loss_making_records)
    return summary, calculate_ratios(summary)


class TestFormatting:
    """Tests for number formatting helpers."""

    def test_currency(self):
        assert currency(Decimal("1234.5")) == "$1,234.50"
        assert currency(Decimal("-10000")) == "-$10,000.00"
        assert currency(Decimal("0")) == "$0.00"

    def test_records_table(self, profitable_records):
        table = format_records_table(profitable_records)

        assert table.startswith("```")
        assert "Cash at Bank" in table
        assert "Summary by Category:" in table
        assert "$100,000.00" in table

    def test_records_table_without_records(self):
        assert format_records_table([]) == "No financial data available."


class TestLabels:
    """Tests for threshold labels written into prompts."""

    @pytest.mark.parametrize(
        ("margin", "expected"),
        [("30", "Good"), ("15.01", "Good"), ("15", "Fair"), ("5.01", "Fair"), ("5", "Poor"), ("-20", "Poor")],
    )
    def test_overall_rating_label(self, margin, expected):
        assert overall_rating_label(Decimal(margin)) == expected

    def test_risk_label_high_on_loss(self):
        assert prompt_risk_label(Decimal("-1"), Decimal("0"), Decimal("3"), Decimal("10")) == "High"

    def test_risk_label_high_on_leverage(self):
        assert prompt_risk_label(Decimal("100"), Decimal("2.5"), Decimal("3"), Decimal("10")) == "High"

    def test_risk_label_medium(self):
        assert prompt_risk_label(Decimal("100"), Decimal("1"), Decimal("0.8"), Decimal("10")) == "Medium"
        assert prompt_risk_label(Decimal("100"), Decimal("1"), Decimal("2"), Decimal("85")) == "Medium"

    def test_risk_label_low(self):
        assert prompt_risk_label(Decimal("100"), Decimal("0.5"), Decimal("2"), Decimal("70")) == "Low"


class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_prompts_are_deterministic(self, profitable):
        summary, ratios = profitable

        for kind in AnalysisKind:
            assert build_prompt(summary, ratios, kind) == build_prompt(summary, ratios, kind)

    def test_health_check_prompt(self, profitable):
        summary, ratios = profitable

        prompt = build_prompt(summary, ratios, AnalysisKind.HEALTH_CHECK)

        assert "OVERALL RATING: Good" in prompt
        assert "STRENGTHS (EXACTLY 3):" in prompt
        assert "CONCERNS (EXACTLY 3):" in prompt
        assert "PRIORITY ACTIONS (EXACTLY 3):" in prompt
        assert "Net Income: $30,000.00" in prompt
        assert "Profit Margin: 30.00%" in prompt
        assert "Current Ratio: 3.00" in prompt
        assert "1. Profit margin of 30.00% indicates strong profitability" in prompt

    def test_risk_prompt_for_loss_making_company(self, loss_making):
        summary, ratios = loss_making

        prompt = build_prompt(summary, ratios, AnalysisKind.RISK_ANALYSIS)

        assert "RISK LEVEL: High" in prompt
        assert "RISK FACTORS (EXACTLY 5):" in prompt
        assert "1. Negative net income of -$10,000.00 - Severity: High" in prompt
        assert "2. High debt-to-equity ratio of 3.00 - Severity: High" in prompt
        assert "MITIGATION STRATEGIES (EXACTLY 3):" in prompt

    def test_risk_prompt_for_profitable_company(self, profitable):
        summary, ratios = profitable

        prompt = build_prompt(summary, ratios, "RiskAnalysis")

        assert "RISK LEVEL: Low" in prompt
        assert "1. Net income of $30,000.00 - Severity: Low" in prompt

    def test_optimization_and_growth_prompts(self, profitable):
        summary, ratios = profitable

        optimization = build_prompt(summary, ratios, AnalysisKind.OPTIMIZATION)
        growth = build_prompt(summary, ratios, AnalysisKind.GROWTH)

        assert "OPTIMIZATION OPPORTUNITIES (EXACTLY 5):" in optimization
        assert "save $3,500 to $7,000" in optimization
        assert "GROWTH STRATEGIES (EXACTLY 5):" in growth
        assert "$115,000-$120,000" in growth

    def test_unknown_kind_uses_general_template(self, profitable):
        summary, ratios = profitable

        prompt = build_prompt(summary, ratios, "SomethingElse")

        assert prompt == build_prompt(summary, ratios, AnalysisKind.GENERAL)
        assert "KEY OBSERVATIONS (EXACTLY 3):" in prompt
        assert "RECOMMENDATIONS (EXACTLY 3):" in prompt

    @pytest.mark.parametrize("kind", list(AnalysisKind))
    def test_zero_totals_render_without_error(self, kind):
        """Test that an empty summary with no ratios still renders."""
        prompt = build_prompt(FinancialSummary(), RatioSet(), kind)

        assert "$0.00" in prompt

    def test_liabilities_without_assets(self):
        summary = FinancialSummary(liabilities=Decimal("1000"))

        health = build_prompt(summary, RatioSet(), AnalysisKind.HEALTH_CHECK)
        risk = build_prompt(summary, RatioSet(), AnalysisKind.RISK_ANALYSIS)

        assert "not covered by recorded assets" in health
        assert "not covered by recorded assets" in risk


class TestSpecializedPrompts:
    """Tests for benchmark, investment and cash-flow prompts."""

    def test_benchmark_prompt_lists_each_metric(self, profitable_records):
        metrics = calculate_key_metrics(profitable_records)

        prompt = build_benchmark_prompt(
            metrics, "Technology", {"NetMargin": Decimal("20"), "CurrentRatio": Decimal("2")}
        )

        assert "BENCHMARK COMPARISON (Technology):" in prompt
        assert "- NetMargin: Company 30.00 vs Industry 20.00 (variance 50.0%)" in prompt
        assert "- CurrentRatio: Company 3.00 vs Industry 2.00 (variance 50.0%)" in prompt
        assert "KEY INSIGHTS (EXACTLY 5):" in prompt
        assert "INDUSTRY TRENDS (EXACTLY 3):" in prompt

    def test_benchmark_prompt_without_benchmarks(self, profitable_records):
        prompt = build_benchmark_prompt(calculate_key_metrics(profitable_records), "Mining", {})

        assert "- No industry benchmark data available" in prompt

    def test_investment_prompt(self, profitable_records):
        prompt = build_investment_prompt(calculate_key_metrics(profitable_records), "General", "Conservative")

        assert "Conservative risk tolerance" in prompt
        assert "INVESTMENT RATING:" in prompt
        assert "Return on Equity: 75.00%" in prompt
        assert "ALTERNATIVES (EXACTLY 3):" in prompt

    def test_cash_flow_prompt(self, loss_making_records):
        prompt = build_cash_flow_prompt(calculate_cash_flow_metrics(loss_making_records), "a retail shop")

        assert "cash flow consultant for a retail shop" in prompt
        assert "Runway: 14.4 months" in prompt
        for header in (
            "IMMEDIATE ACTIONS",
            "SHORT-TERM IMPROVEMENTS",
            "LONG-TERM STRATEGIES",
            "WORKING CAPITAL OPTIMIZATION",
            "CASH GENERATION STRATEGIES",
            "RISK MITIGATION",
            "IMPLEMENTATION ROADMAP",
            "SUCCESS METRICS",
        ):
            assert header in prompt


class TestNarrativePrompts:
    """Tests for free-form prompts."""

    def test_anomaly_prompt_includes_statistics(self, profitable_records):
        prompt = anomaly_detection_prompt(profitable_records)

        assert "Total transactions: 9" in prompt
        assert "Median amount: $20,000.00" in prompt

    def test_ratio_prompt_lists_ratios(self):
        prompt = ratio_analysis_prompt({"CurrentRatio": Decimal("1.5"), "DebtToEquity": Decimal("0.75")})

        assert "  CurrentRatio: 1.50" in prompt
        assert "  DebtToEquity: 0.75" in prompt

    def test_custom_question_prompt(self, profitable_records):
        prompt = custom_question_prompt("Can we afford a new hire?", aggregate(profitable_records))

        assert "**Question:** Can we afford a new hire?" in prompt
        assert "- Net Income: $30,000.00" in prompt

    def test_context_prompt_keeps_last_five_messages(self, profitable_records):
        history = [f"message {i}" for i in range(1, 8)]

        prompt = context_question_prompt("And next quarter?", aggregate(profitable_records), history)

        assert "Previous conversation:" in prompt
        assert "message 1\n" not in prompt
        assert "message 2\n" not in prompt
        for i in range(3, 8):
            assert f"message {i}" in prompt
        assert "- Profit Margin: 30.00%" in prompt
