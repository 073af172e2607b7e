"""Deterministic prompt rendering for every analysis kind."""

from ledger_insights.prompts.formatting import (
    currency,
    fixed,
    format_records_table,
    percent_of,
    whole,
)
from ledger_insights.prompts.narrative import (
    CONTEXT_HISTORY_LIMIT,
    anomaly_detection_prompt,
    cash_flow_analysis_prompt,
    comparison_prompt,
    context_question_prompt,
    custom_analysis_prompt,
    custom_question_prompt,
    financial_summary_prompt,
    forecasting_prompt,
    ratio_analysis_prompt,
    trend_analysis_prompt,
)
from ledger_insights.prompts.structured import (
    build_benchmark_prompt,
    build_cash_flow_prompt,
    build_investment_prompt,
    build_prompt,
    overall_rating_label,
    prompt_risk_label,
)

__all__ = [
    "CONTEXT_HISTORY_LIMIT",
    "anomaly_detection_prompt",
    "build_benchmark_prompt",
    "build_cash_flow_prompt",
    "build_investment_prompt",
    "build_prompt",
    "cash_flow_analysis_prompt",
    "comparison_prompt",
    "context_question_prompt",
    "currency",
    "custom_analysis_prompt",
    "custom_question_prompt",
    "financial_summary_prompt",
    "fixed",
    "forecasting_prompt",
    "format_records_table",
    "overall_rating_label",
    "percent_of",
    "prompt_risk_label",
    "ratio_analysis_prompt",
    "trend_analysis_prompt",
    "whole",
]
