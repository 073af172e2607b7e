"""Strict-format prompt templates.

These prompts spell out section headers and exact item counts so the
pattern-based response parser can recover structure from the reply. The
rating and risk labels are pre-computed from the numbers with fixed
thresholds; the parser and downstream callers look for the same labels.

All builders are pure: identical inputs produce byte-identical prompts.
"""

from decimal import Decimal

from ledger_insights.domain.models import AnalysisKind, FinancialSummary, RatioSet
from ledger_insights.prompts.formatting import currency, fixed, percent_of, whole


def overall_rating_label(profit_margin: Decimal) -> str:
    """Rating written into health-check prompts."""
    if profit_margin > 15:
        return "Good"
    if profit_margin > 5:
        return "Fair"
    return "Poor"


def prompt_risk_label(
    net_income: Decimal,
    debt_to_equity: Decimal,
    current_ratio: Decimal,
    expense_ratio: Decimal,
) -> str:
    """Risk bucket written into risk-analysis prompts."""
    if net_income < 0 or debt_to_equity > 2:
        return "High"
    if current_ratio < 1 or expense_ratio > 80:
        return "Medium"
    return "Low"


def build_prompt(summary: FinancialSummary, ratios: RatioSet, kind: AnalysisKind | str) -> str:
    """Render the analysis prompt for ``kind``; unknown kinds get the general template."""
    kind = AnalysisKind.parse(kind)
    builder = _BUILDERS.get(kind, _general_prompt)
    return builder(summary, ratios)


def _health_check_prompt(s: FinancialSummary, ratios: RatioSet) -> str:
    profit_margin = s.profit_margin
    expense_ratio = s.expense_ratio
    current_ratio = ratios.get_or_zero("CurrentRatio")
    debt_to_equity = ratios.get_or_zero("DebtToEquity")

    strength_3 = (
        f"Positive net income of {currency(s.net_income)}"
        if s.net_income > 0
        else f"Revenue of {currency(s.revenue)}"
    )
    concern_1 = (
        f"Debt-to-equity ratio of {fixed(debt_to_equity)} indicates leverage risk"
        if debt_to_equity > 1
        else f"Equity of {currency(s.equity)} requires monitoring"
    )
    concern_2 = (
        f"Expense ratio of {fixed(expense_ratio)}% is high relative to revenue"
        if expense_ratio > 70
        else f"Expenses of {currency(s.expenses)} represent {fixed(expense_ratio)}% of revenue"
    )
    if s.liabilities > s.assets * Decimal("0.5"):
        if s.assets > 0:
            concern_3 = (
                f"Liabilities of {currency(s.liabilities)} are "
                f"{fixed(percent_of(s.liabilities, s.assets), 1)}% of assets"
            )
        else:
            concern_3 = f"Liabilities of {currency(s.liabilities)} are not covered by recorded assets"
    else:
        concern_3 = f"Asset base of {currency(s.assets)} requires strategic deployment"

    return f"""You are a financial analyst. Use ONLY the calculations below. Do NOT interpret or add context.

FINANCIAL DATA (USE THESE EXACT NUMBERS):
Revenue: {currency(s.revenue)}
Expenses: {currency(s.expenses)}
Net Income: {currency(s.net_income)}
Assets: {currency(s.assets)}
Liabilities: {currency(s.liabilities)}
Equity: {currency(s.equity)}

CALCULATED RATIOS (USE THESE EXACT NUMBERS):
Profit Margin: {fixed(profit_margin)}%
Expense Ratio: {fixed(expense_ratio)}%
Current Ratio: {fixed(current_ratio)}
Debt/Equity: {fixed(debt_to_equity)}

ANALYSIS RULES:
- Use ONLY the numbers above
- Do NOT calculate additional metrics
- Do NOT add interpretation beyond the numbers
- Reference specific $ amounts and % values

FORMAT (MUST MATCH EXACTLY):

OVERALL RATING: {overall_rating_label(profit_margin)}

STRENGTHS (EXACTLY 3):
1. Profit margin of {fixed(profit_margin)}% {"indicates strong profitability" if profit_margin > 10 else "shows profitability"}
2. Current ratio of {fixed(current_ratio)} {"demonstrates strong liquidity" if current_ratio > Decimal("1.5") else "indicates adequate liquidity"}
3. {strength_3} supports operations

CONCERNS (EXACTLY 3):
1. {concern_1}
2. {concern_2}
3. {concern_3}

PRIORITY ACTIONS (EXACTLY 3):
1. {"Reduce operating expenses to improve margins" if expense_ratio > 70 else "Monitor expense growth relative to revenue"}
2. {"Improve working capital management" if current_ratio < Decimal("1.5") else "Maintain current liquidity levels"}
3. {"Increase revenue through market expansion or pricing optimization" if profit_margin < 10 else "Focus on operational efficiency to maintain profitability"}"""


def _risk_analysis_prompt(s: FinancialSummary, ratios: RatioSet) -> str:
    profit_margin = s.profit_margin
    expense_ratio = s.expense_ratio
    current_ratio = ratios.get_or_zero("CurrentRatio")
    debt_to_equity = ratios.get_or_zero("DebtToEquity")
    risk_label = prompt_risk_label(s.net_income, debt_to_equity, current_ratio, expense_ratio)

    if s.net_income < 0:
        factor_1 = f"Negative net income of {currency(s.net_income)} - Severity: High"
    else:
        factor_1 = f"Net income of {currency(s.net_income)} - Severity: Low"

    if debt_to_equity > 2:
        factor_2 = f"High debt-to-equity ratio of {fixed(debt_to_equity)} - Severity: High"
    else:
        severity = "Medium" if debt_to_equity > 1 else "Low"
        factor_2 = f"Debt-to-equity ratio of {fixed(debt_to_equity)} - Severity: {severity}"

    if current_ratio < 1:
        factor_3 = (
            f"Low current ratio of {fixed(current_ratio)} indicates liquidity constraints"
            " - Severity: High"
        )
    else:
        severity = "Medium" if current_ratio < Decimal("1.5") else "Low"
        factor_3 = f"Current ratio of {fixed(current_ratio)} - Severity: {severity}"

    if expense_ratio > 80:
        factor_4 = (
            f"High expense ratio of {fixed(expense_ratio)}% reduces profitability"
            " - Severity: Medium"
        )
    else:
        factor_4 = f"Expense ratio of {fixed(expense_ratio)}% - Severity: Low"

    if s.liabilities > s.assets * Decimal("0.6"):
        if s.assets > 0:
            share = f"{fixed(percent_of(s.liabilities, s.assets), 1)}% of assets"
        else:
            share = "a level not covered by recorded assets"
        factor_5 = f"Liabilities at {share} - Severity: Medium"
    else:
        factor_5 = f"Liabilities of {currency(s.liabilities)} - Severity: Low"

    return f"""You are a risk expert. Analyze ONLY these specific metrics. Do NOT add interpretation.

FINANCIAL METRICS (USE THESE EXACT NUMBERS):
Net Income: {currency(s.net_income)}
Revenue: {currency(s.revenue)}
Expenses: {currency(s.expenses)}
Debt/Equity Ratio: {fixed(debt_to_equity)}
Current Ratio: {fixed(current_ratio)}
Profit Margin: {fixed(profit_margin)}%
Expense Ratio: {fixed(expense_ratio)}%

RISK SCORING:
- Net Income < 0: High Risk
- Debt/Equity > 2: High Risk
- Current Ratio < 1: Medium Risk
- Expense Ratio > 80%: Medium Risk

FORMAT (MUST MATCH EXACTLY):

RISK LEVEL: {risk_label}

RISK FACTORS (EXACTLY 5):
1. {factor_1}
2. {factor_2}
3. {factor_3}
4. {factor_4}
5. {factor_5}

MITIGATION STRATEGIES (EXACTLY 3):
1. {"Implement cost reduction program to achieve profitability" if s.net_income < 0 else "Monitor profit margins and maintain cost controls"}
2. {"Reduce debt levels or increase equity to improve leverage ratio" if debt_to_equity > Decimal("1.5") else "Maintain balanced capital structure"}
3. {"Improve cash flow management and working capital" if current_ratio < Decimal("1.5") else "Continue prudent financial management"}"""


def _optimization_prompt(s: FinancialSummary, ratios: RatioSet) -> str:
    profit_margin = s.profit_margin
    expense_ratio = s.expense_ratio

    return f"""You are an optimization consultant. Analyze ONLY these metrics. Provide specific % targets.

CURRENT METRICS (USE THESE EXACT NUMBERS):
Revenue: {currency(s.revenue)}
Expenses: {currency(s.expenses)}
Net Income: {currency(s.net_income)}
Profit Margin: {fixed(profit_margin)}%
Expense Ratio: {fixed(expense_ratio)}%

FORMAT (MUST MATCH EXACTLY):

OPTIMIZATION OPPORTUNITIES (EXACTLY 5):
1. Reduce operating expenses by 5-10% to save ${whole(s.expenses * Decimal("0.05"))} to ${whole(s.expenses * Decimal("0.10"))}
2. Increase revenue by 10-15% through market expansion to reach ${whole(s.revenue * Decimal("1.10"))} to ${whole(s.revenue * Decimal("1.15"))}
3. Improve profit margin from {fixed(profit_margin)}% to {fixed(profit_margin * Decimal("1.2"))}% through efficiency gains
4. Reduce expense ratio from {fixed(expense_ratio)}% to {fixed(expense_ratio * Decimal("0.90"))}% to improve profitability
5. Target net income increase of 20-30% to ${whole(s.net_income * Decimal("1.20"))} to ${whole(s.net_income * Decimal("1.30"))}"""


def _growth_prompt(s: FinancialSummary, ratios: RatioSet) -> str:
    profit_margin = s.profit_margin

    return f"""You are a growth strategist. Base strategies ONLY on these metrics. Provide specific targets.

CURRENT METRICS (USE THESE EXACT NUMBERS):
Revenue: {currency(s.revenue)}
Net Income: {currency(s.net_income)}
Profit Margin: {fixed(profit_margin)}%
Assets: {currency(s.assets)}

FORMAT (MUST MATCH EXACTLY):

GROWTH STRATEGIES (EXACTLY 5):
1. Expand into new markets to increase revenue by 15-20% to ${whole(s.revenue * Decimal("1.15"))}-${whole(s.revenue * Decimal("1.20"))}
2. Launch new products or services to add ${whole(s.revenue * Decimal("0.10"))} in additional revenue
3. Increase profit margin from {fixed(profit_margin)}% to {fixed(profit_margin + 3)}% through operational improvements
4. Leverage asset base of {currency(s.assets)} to generate 10-15% ROA improvement
5. Target net income growth of 25% to ${whole(s.net_income * Decimal("1.25"))} within 12 months"""


def _general_prompt(s: FinancialSummary, ratios: RatioSet) -> str:
    profit_margin = s.profit_margin
    expense_ratio = s.expense_ratio
    current_ratio = ratios.get_or_zero("CurrentRatio")

    return f"""You are a financial analyst. Use ONLY these numbers. Do NOT interpret.

FINANCIAL DATA (USE THESE EXACT NUMBERS):
Revenue: {currency(s.revenue)}
Expenses: {currency(s.expenses)}
Net Income: {currency(s.net_income)}
Assets: {currency(s.assets)}
Liabilities: {currency(s.liabilities)}
Profit Margin: {fixed(profit_margin)}%
Expense Ratio: {fixed(expense_ratio)}%

FORMAT (MUST MATCH EXACTLY):

KEY OBSERVATIONS (EXACTLY 3):
1. Revenue of {currency(s.revenue)} with profit margin of {fixed(profit_margin)}%
2. Expenses of {currency(s.expenses)} represent {fixed(expense_ratio)}% of revenue
3. Net income of {currency(s.net_income)} {"indicates profitability" if s.net_income > 0 else "requires attention"}

RECOMMENDATIONS (EXACTLY 3):
1. {"Reduce expense ratio to improve profitability" if expense_ratio > 75 else "Monitor expense growth"}
2. {"Increase profit margins through revenue growth or cost reduction" if profit_margin < 15 else "Maintain profitability"}
3. {"Improve liquidity and working capital management" if current_ratio < Decimal("1.5") else "Continue current financial management"}
"""


_BUILDERS = {
    AnalysisKind.HEALTH_CHECK: _health_check_prompt,
    AnalysisKind.RISK_ANALYSIS: _risk_analysis_prompt,
    AnalysisKind.OPTIMIZATION: _optimization_prompt,
    AnalysisKind.GROWTH: _growth_prompt,
    AnalysisKind.GENERAL: _general_prompt,
}


def build_benchmark_prompt(
    company_metrics: RatioSet,
    industry: str,
    industry_averages: dict[str, Decimal],
) -> str:
    """Prompt comparing company metrics with industry averages, metric by metric."""
    if industry_averages:
        rows = []
        for name, average in industry_averages.items():
            company_value = company_metrics.get_or_zero(name)
            variance = percent_of(company_value - average, average)
            rows.append(
                f"- {name}: Company {fixed(company_value)} vs Industry {fixed(average)}"
                f" (variance {fixed(variance, 1)}%)"
            )
        comparison = "\n".join(rows)
    else:
        comparison = "- No industry benchmark data available"

    return f"""You are an industry analyst. Compare the company ONLY against the {industry} industry figures below.

COMPANY FINANCIALS (USE THESE EXACT NUMBERS):
Revenue: {currency(company_metrics.get_or_zero("Revenue"))}
Net Income: {currency(company_metrics.get_or_zero("NetIncome"))}
Assets: {currency(company_metrics.get_or_zero("Assets"))}
Liabilities: {currency(company_metrics.get_or_zero("Liabilities"))}

BENCHMARK COMPARISON ({industry}):
{comparison}

FORMAT (MUST MATCH EXACTLY):

EXECUTIVE SUMMARY:
Two sentences describing the company's position in the {industry} industry.

KEY INSIGHTS (EXACTLY 5):
1. <metric-specific insight referencing the numbers above>

RECOMMENDATIONS (EXACTLY 3):
1. <action to close the largest gap against the industry average>

INDUSTRY TRENDS (EXACTLY 3):
1. <trend in the {industry} market relevant to these metrics>"""


def build_investment_prompt(
    company_metrics: RatioSet,
    industry: str,
    risk_tolerance: str,
) -> str:
    """Prompt for a buy/hold/sell recommendation at a given risk tolerance."""
    return f"""You are an investment advisor. Base the recommendation ONLY on these metrics for an investor with {risk_tolerance} risk tolerance.

COMPANY METRICS (USE THESE EXACT NUMBERS):
Industry: {industry}
Revenue: {currency(company_metrics.get_or_zero("Revenue"))}
Net Income: {currency(company_metrics.get_or_zero("NetIncome"))}
Net Margin: {fixed(company_metrics.get_or_zero("NetMargin"))}%
Return on Equity: {fixed(company_metrics.get_or_zero("ReturnOnEquity"))}%
Return on Assets: {fixed(company_metrics.get_or_zero("ReturnOnAssets"))}%
Current Ratio: {fixed(company_metrics.get_or_zero("CurrentRatio"))}
Debt/Equity: {fixed(company_metrics.get_or_zero("DebtToEquity"))}

FORMAT (MUST MATCH EXACTLY):

INVESTMENT RATING: <Buy, Hold or Sell>
CONFIDENCE: <High confidence, Moderate confidence or Low confidence>
TIME HORIZON: <Short-term, Medium-term or Long-term>
EXPECTED RETURNS: <expected return range with a percentage>

KEY FACTORS (EXACTLY 5):
1. <factor referencing a metric above>

RISK FACTORS (EXACTLY 3):
1. <risk referencing a metric above>

ALTERNATIVES (EXACTLY 3):
1. <alternative investment option for this risk tolerance>"""


def build_cash_flow_prompt(cash_flow_metrics: RatioSet, business_context: str) -> str:
    """Prompt for a cash-flow optimization plan over fixed time buckets."""
    runway = cash_flow_metrics.get_or_zero("RunwayMonths")
    return f"""You are a cash flow consultant for {business_context}. Use ONLY the numbers below.

CASH FLOW METRICS (USE THESE EXACT NUMBERS):
Operating Cash Flow: {currency(cash_flow_metrics.get_or_zero("OperatingCashFlow"))}
Cash Position: {currency(cash_flow_metrics.get_or_zero("CashPosition"))}
Monthly Burn Rate: {currency(cash_flow_metrics.get_or_zero("BurnRate"))}
Runway: {fixed(runway, 1)} months
Working Capital: {currency(cash_flow_metrics.get_or_zero("WorkingCapital"))}
Net Cash Flow: {currency(cash_flow_metrics.get_or_zero("NetCashFlow"))}

FORMAT (MUST MATCH EXACTLY):

IMMEDIATE ACTIONS (NEXT 30 DAYS, EXACTLY 3):
1. <immediate action>

SHORT-TERM IMPROVEMENTS (3-6 MONTHS, EXACTLY 3):
1. <short-term improvement>

LONG-TERM STRATEGIES (6-12 MONTHS, EXACTLY 3):
1. <long-term strategy>

WORKING CAPITAL OPTIMIZATION (EXACTLY 3):
1. <receivable, payable or inventory change>

CASH GENERATION STRATEGIES (EXACTLY 3):
1. <revenue or sales initiative>

RISK MITIGATION (EXACTLY 3):
1. <risk mitigation or contingency step>

IMPLEMENTATION ROADMAP (EXACTLY 4):
1. <timeline milestone>

SUCCESS METRICS (EXACTLY 4):
1. <KPI to measure>"""
