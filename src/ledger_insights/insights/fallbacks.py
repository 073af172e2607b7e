"""Results substituted when generation fails for a fallback-enabled analysis."""

from decimal import Decimal

from ledger_insights.domain.dtos import CashFlowOptimization

FALLBACK_CASH_POSITION = Decimal("75000")
FALLBACK_BURN_RATE = Decimal("8000")
FALLBACK_RUNWAY_MONTHS = Decimal("9.4")


def cash_flow_fallback(document_id: int, execution_time_ms: int = 0, model_used: str = "") -> CashFlowOptimization:
    """Fixed cash-flow plan with placeholder figures, flagged ``is_fallback``."""
    return CashFlowOptimization(
        document_id=document_id,
        current_cash_position=FALLBACK_CASH_POSITION,
        monthly_burn_rate=FALLBACK_BURN_RATE,
        runway_months=FALLBACK_RUNWAY_MONTHS,
        immediate_actions=(
            "Review accounts receivable aging",
            "Contact overdue customers",
            "Delay non-essential expenses",
        ),
        short_term_improvements=(
            "Implement cash flow forecasting",
            "Negotiate extended payment terms",
            "Reduce inventory levels",
        ),
        long_term_strategies=(
            "Secure line of credit",
            "Diversify revenue sources",
            "Optimize pricing strategy",
        ),
        working_capital_optimizations=(
            "Accelerate receivables",
            "Manage payables strategically",
            "Optimize inventory",
        ),
        cash_generation_strategies=(
            "Increase sales volume",
            "Improve collection process",
            "Offer discounts for early payment",
        ),
        risk_mitigations=(
            "Build emergency cash reserve",
            "Monitor cash flow metrics",
            "Develop contingency plans",
        ),
        implementation_roadmap=(
            "Immediate: Cash audit",
            "Week 2: Action implementation",
            "Month 1: Process improvements",
            "Ongoing: Monitoring",
        ),
        success_metrics=(
            "Cash runway > 6 months",
            "Burn rate < 10% of revenue",
            "DPO > 45 days",
            "DSO < 30 days",
        ),
        is_fallback=True,
        execution_time_ms=execution_time_ms,
        model_used=model_used,
    )
