"""Domain types for financial records, derived metrics and insight results."""

from ledger_insights.domain.dtos import (
    AIInsight,
    BenchmarkComparison,
    CashFlowOptimization,
    CompetitiveAnalysis,
    CompetitivePositioning,
    FinancialHealth,
    InvestmentRecommendation,
    RiskAssessment,
    RiskItem,
)
from ledger_insights.domain.models import (
    AnalysisKind,
    BenchmarkEntry,
    FinancialCategory,
    FinancialRecord,
    FinancialSummary,
    IndustryType,
    RatioSet,
    describe_metric,
)

__all__ = [
    "AIInsight",
    "AnalysisKind",
    "BenchmarkComparison",
    "BenchmarkEntry",
    "CashFlowOptimization",
    "CompetitiveAnalysis",
    "CompetitivePositioning",
    "FinancialCategory",
    "FinancialHealth",
    "FinancialRecord",
    "FinancialSummary",
    "IndustryType",
    "InvestmentRecommendation",
    "RatioSet",
    "RiskAssessment",
    "RiskItem",
    "describe_metric",
]
