"""Total, pattern-based extractors over generated text.

No function in this package raises on any string input; when nothing
matches, each returns its documented default.
"""

from ledger_insights.parsing.classifiers import (
    DEFAULT_CONFIDENCE,
    DEFAULT_EXPECTED_RETURNS,
    DEFAULT_RATING,
    DEFAULT_TIME_HORIZON,
    extract_confidence_level,
    extract_expected_returns,
    extract_investment_rating,
    extract_time_horizon,
)
from ledger_insights.parsing.lists import (
    NO_OPPORTUNITY_ANALYSIS,
    NO_RISK_ANALYSIS,
    OPPORTUNITY_EXTRACTION_FAILED,
    RISK_EXTRACTION_FAILED,
    SENTINELS,
    extract_alternatives,
    extract_cash_generation_strategies,
    extract_immediate_actions,
    extract_implementation_roadmap,
    extract_industry_trends,
    extract_key_factors,
    extract_key_findings,
    extract_key_insights,
    extract_long_term_strategies,
    extract_opportunities,
    extract_priorities,
    extract_recommendations,
    extract_risk_factors,
    extract_risk_mitigations,
    extract_short_term_improvements,
    extract_strengths,
    extract_success_metrics,
    extract_working_capital_optimizations,
)
from ledger_insights.parsing.numbers import extract_numeric_data, extract_percentages
from ledger_insights.parsing.sections import (
    MAIN_CONTENT,
    extract_executive_summary,
    extract_summary,
    format_for_display,
    parse_sections,
)
from ledger_insights.parsing.strategies import ExtractionChain

__all__ = [
    "DEFAULT_CONFIDENCE",
    "DEFAULT_EXPECTED_RETURNS",
    "DEFAULT_RATING",
    "DEFAULT_TIME_HORIZON",
    "MAIN_CONTENT",
    "NO_OPPORTUNITY_ANALYSIS",
    "NO_RISK_ANALYSIS",
    "OPPORTUNITY_EXTRACTION_FAILED",
    "RISK_EXTRACTION_FAILED",
    "SENTINELS",
    "ExtractionChain",
    "extract_alternatives",
    "extract_cash_generation_strategies",
    "extract_confidence_level",
    "extract_executive_summary",
    "extract_expected_returns",
    "extract_immediate_actions",
    "extract_implementation_roadmap",
    "extract_industry_trends",
    "extract_investment_rating",
    "extract_key_factors",
    "extract_key_findings",
    "extract_key_insights",
    "extract_long_term_strategies",
    "extract_numeric_data",
    "extract_opportunities",
    "extract_percentages",
    "extract_priorities",
    "extract_recommendations",
    "extract_risk_factors",
    "extract_risk_mitigations",
    "extract_short_term_improvements",
    "extract_strengths",
    "extract_success_metrics",
    "extract_summary",
    "extract_time_horizon",
    "extract_working_capital_optimizations",
    "format_for_display",
    "parse_sections",
]
