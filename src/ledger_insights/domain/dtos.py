"""Insight result objects handed to outer layers (UI, report writers).

Every result is immutable once returned and serializes to a flat,
JSON-friendly dictionary via ``to_dict``. Monetary values are emitted
as strings so no precision is lost.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for JSON transmission."""
        return {f.name: _to_json(getattr(self, f.name)) for f in fields(self)}  # type: ignore[arg-type]


@dataclass(frozen=True)
class AIInsight(_Serializable):
    """Comprehensive insight for one document and analysis type."""

    document_id: int
    document_name: str
    analysis_type: str
    title: str
    summary: str
    detailed_analysis: str
    key_findings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    health_score: int = 0
    risk_level: str = "Medium"
    generated_date: datetime = field(default_factory=_utcnow)
    execution_time_ms: int = 0
    model_used: str = ""


@dataclass(frozen=True)
class FinancialHealth(_Serializable):
    """Scored health assessment; scores are 0-100."""

    overall_score: int
    profitability_score: int
    liquidity_score: int
    efficiency_score: int
    stability_score: int
    overall_rating: str
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    priorities: tuple[str, ...] = ()
    execution_time_ms: int = 0
    model_used: str = ""


@dataclass(frozen=True)
class RiskItem(_Serializable):
    category: str
    description: str
    severity: str
    impact: str
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class RiskAssessment(_Serializable):
    """Risk level (Low/Medium/High/Critical) with a 0-100 score, higher is riskier."""

    risk_level: str
    risk_score: int
    risks: tuple[RiskItem, ...] = ()
    mitigation_strategies: tuple[str, ...] = ()
    execution_time_ms: int = 0
    model_used: str = ""


@dataclass(frozen=True)
class BenchmarkComparison(_Serializable):
    """Company value for one metric set against the industry reference."""

    metric_name: str
    company_value: Decimal
    industry_average: Decimal
    industry_median: Decimal
    performance_rating: str
    percentile_ranking: Decimal
    variance_from_average: Decimal
    variance_percentage: Decimal
    metric_description: str = ""
    recommendation: str = ""


@dataclass(frozen=True)
class CompetitivePositioning(_Serializable):
    overall_position: str
    competitive_score: Decimal
    strengths_count: int
    weaknesses_count: int
    competitive_advantages: tuple[str, ...] = ()
    competitive_disadvantages: tuple[str, ...] = ()
    market_position_summary: str = ""


@dataclass(frozen=True)
class CompetitiveAnalysis(_Serializable):
    document_id: int
    document_name: str
    industry: str
    benchmarks: tuple[BenchmarkComparison, ...]
    positioning: CompetitivePositioning
    key_insights: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    industry_trends: tuple[str, ...] = ()
    executive_summary: str = ""
    analysis_date: datetime = field(default_factory=_utcnow)
    execution_time_ms: int = 0
    model_used: str = ""


@dataclass(frozen=True)
class InvestmentRecommendation(_Serializable):
    document_id: int
    risk_tolerance: str
    recommendation: str
    confidence_level: str
    time_horizon: str
    expected_returns: str
    key_factors: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()
    analysis_date: datetime = field(default_factory=_utcnow)
    execution_time_ms: int = 0
    model_used: str = ""


@dataclass(frozen=True)
class CashFlowOptimization(_Serializable):
    document_id: int
    current_cash_position: Decimal
    monthly_burn_rate: Decimal
    runway_months: Decimal
    immediate_actions: tuple[str, ...] = ()
    short_term_improvements: tuple[str, ...] = ()
    long_term_strategies: tuple[str, ...] = ()
    working_capital_optimizations: tuple[str, ...] = ()
    cash_generation_strategies: tuple[str, ...] = ()
    risk_mitigations: tuple[str, ...] = ()
    implementation_roadmap: tuple[str, ...] = ()
    success_metrics: tuple[str, ...] = ()
    is_fallback: bool = False
    analysis_date: datetime = field(default_factory=_utcnow)
    execution_time_ms: int = 0
    model_used: str = ""
