"""Tests for insight result objects."""

import json
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ledger_insights.domain.dtos import (
    AIInsight,
    CompetitiveAnalysis,
    FinancialHealth,
    RiskAssessment,
    RiskItem,
)
from ledger_insights.insights import cash_flow_fallback
from ledger_insights.insights.scoring import competitive_positioning


class TestToDict:
    """Tests for to_dict() serialization."""

    def test_insight_to_dict(self):
        generated = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        insight = AIInsight(
            document_id=1,
            document_name="q1-ledger.xlsx",
            analysis_type="General",
            title="General Analysis",
            summary="Solid quarter.",
            detailed_analysis="Solid quarter.",
            key_findings=("Revenue up",),
            generated_date=generated,
        )

        data = insight.to_dict()

        assert data["document_id"] == 1
        assert data["key_findings"] == ["Revenue up"]
        assert data["generated_date"] == "2024-03-01T12:00:00+00:00"
        assert data["risk_level"] == "Medium"

    def test_nested_items_serialized(self):
        assessment = RiskAssessment(
            risk_level="High",
            risk_score=60,
            risks=(RiskItem("Leverage", "High debt", "High", "Significant impact", ("Reduce debt",)),),
        )

        data = assessment.to_dict()

        assert data["risks"] == [
            {
                "category": "Leverage",
                "description": "High debt",
                "severity": "High",
                "impact": "Significant impact",
                "recommendations": ["Reduce debt"],
            }
        ]

    def test_decimals_become_strings(self):
        data = cash_flow_fallback(7).to_dict()

        assert data["current_cash_position"] == "75000"
        assert data["runway_months"] == "9.4"
        assert data["is_fallback"] is True
        json.dumps(data)

    def test_analysis_is_json_serializable(self):
        analysis = CompetitiveAnalysis(
            document_id=1,
            document_name="q1-ledger.xlsx",
            industry="Mining",
            benchmarks=(),
            positioning=competitive_positioning([]),
        )

        data = json.loads(json.dumps(analysis.to_dict()))

        assert data["positioning"]["overall_position"] == "Not Rated"
        assert data["positioning"]["competitive_score"] == "0"


def test_results_are_immutable():
    health = FinancialHealth(
        overall_score=80,
        profitability_score=70,
        liquidity_score=90,
        efficiency_score=60,
        stability_score=80,
        overall_rating="Excellent",
    )

    with pytest.raises(FrozenInstanceError):
        health.overall_score = 10  # type: ignore[misc]

    assert health.to_dict()["overall_score"] == 80
    assert isinstance(cash_flow_fallback(1).current_cash_position, Decimal)
