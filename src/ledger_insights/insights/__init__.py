"""Insight assembly: scoring rules, fallbacks and the insight service."""

from ledger_insights.insights.fallbacks import cash_flow_fallback
from ledger_insights.insights.pipeline import PipelineRun, PipelineStage
from ledger_insights.insights.service import InsightService

__all__ = ["InsightService", "PipelineRun", "PipelineStage", "cash_flow_fallback"]
