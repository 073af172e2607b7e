"""Open-ended prompt templates for narrative analyses.

Unlike the strict-format templates, these ask for free-form structured prose;
their output is returned to the caller mostly as-is.
"""

from collections.abc import Sequence
from decimal import Decimal

from ledger_insights.domain.models import FinancialRecord, FinancialSummary
from ledger_insights.metrics import calculate_statistics
from ledger_insights.prompts.formatting import currency, fixed, format_records_table

CONTEXT_HISTORY_LIMIT = 5


def financial_summary_prompt(records: list[FinancialRecord]) -> str:
    return f"""You are an expert financial analyst. Analyze the following financial data and provide a comprehensive summary.

{format_records_table(records)}

Please provide your analysis in the following structured format:

1. **Summary Overview**
   - Total Revenue
   - Total Expenses
   - Net Income/Loss
   - Overall financial health assessment

2. **Key Observations**
   - Notable trends
   - Significant items
   - Areas of concern

3. **Recommendations**
   - Actionable insights
   - Suggested improvements
   - Risk mitigation strategies

Provide clear, professional analysis with specific numbers and percentages."""


def trend_analysis_prompt(records: list[FinancialRecord], period: str) -> str:
    return f"""You are a financial analyst specializing in trend analysis. Analyze the following financial data for the period: {period}

{format_records_table(records)}

Please provide your trend analysis including:

1. **Period-over-Period Comparison**
   - Compare current period to previous periods if data available
   - Calculate percentage changes
   - Identify growth or decline patterns

2. **Trend Identification**
   - Revenue trends (growing, stable, declining)
   - Expense trends and their drivers
   - Profitability trends

3. **Pattern Recognition**
   - Seasonal patterns
   - Cyclical trends
   - Emerging trends

4. **Visualization Recommendations**
   - Suggest appropriate chart types
   - Key metrics to visualize

5. **Forecasting Insights**
   - Short-term trend projections
   - Factors that may impact future trends

Provide specific numbers, percentages, and timeframes in your analysis."""


def anomaly_detection_prompt(records: list[FinancialRecord]) -> str:
    stats = calculate_statistics(records)
    return f"""You are a financial auditor specializing in anomaly detection. Analyze the following financial data for unusual patterns or outliers.

{format_records_table(records)}

Statistical Context:
- Average transaction amount: {currency(stats.average)}
- Median amount: {currency(stats.median)}
- Total transactions: {stats.count}

Please identify and analyze:

1. **Outliers and Unusual Amounts**
   - Transactions significantly above or below normal
   - Severity rating (Low/Medium/High)
   - Potential explanations

2. **Pattern Anomalies**
   - Unexpected categorizations
   - Missing expected transactions
   - Duplicate or redundant entries

3. **Timing Anomalies**
   - Transactions at unusual times/dates
   - Period inconsistencies

4. **Red Flags**
   - Suspicious patterns
   - Compliance concerns
   - Fraud indicators

5. **Investigation Recommendations**
   - Priority items requiring review
   - Suggested next steps
   - Required documentation

Rate each anomaly by severity and provide specific transaction details."""


def ratio_analysis_prompt(ratios: dict[str, Decimal]) -> str:
    ratio_lines = "\n".join(f"  {name}: {value:,.2f}" for name, value in ratios.items())
    return f"""You are a financial analyst specializing in ratio analysis. Evaluate the following financial ratios:

Calculated Financial Ratios:
{ratio_lines}

Please provide comprehensive analysis:

1. **Ratio Interpretation**
   - Explain what each ratio indicates
   - Assess whether values are healthy/concerning
   - Context for each metric

2. **Industry Benchmarking**
   - Compare to typical industry standards
   - Identify strengths and weaknesses
   - Competitive position assessment

3. **Liquidity Analysis**
   - Current ratio and quick ratio evaluation
   - Working capital assessment
   - Short-term financial health

4. **Profitability Analysis**
   - Profit margin evaluation
   - Return on investment assessment
   - Efficiency metrics

5. **Overall Financial Health**
   - Composite health score
   - Key strengths
   - Areas requiring attention

6. **Strategic Recommendations**
   - Actions to improve weak ratios
   - Strategies to leverage strengths
   - Risk mitigation plans

Provide specific, actionable insights with clear explanations."""


def comparison_prompt(
    current_period: list[FinancialRecord],
    previous_period: list[FinancialRecord],
) -> str:
    return f"""You are a financial analyst performing period-over-period comparison. Analyze the following data:

**CURRENT PERIOD:**
{format_records_table(current_period)}

**PREVIOUS PERIOD:**
{format_records_table(previous_period)}

Please provide detailed comparison:

1. **Revenue Analysis**
   - Period-over-period change (amount and %)
   - Revenue drivers
   - Growth/decline explanation

2. **Expense Analysis**
   - Cost changes by category
   - Expense trends
   - Cost efficiency improvements or concerns

3. **Variance Analysis**
   - Significant variances explained
   - Budget vs actual (if applicable)
   - Unexpected changes

4. **Profitability Changes**
   - Net income change
   - Margin improvements/deterioration
   - Contributing factors

5. **Strategic Insights**
   - What's working well
   - What needs attention
   - Recommended actions

Highlight the most significant changes with specific numbers and percentages."""


def cash_flow_analysis_prompt(records: list[FinancialRecord]) -> str:
    return f"""You are a financial analyst specializing in cash flow management. Analyze the following financial data with focus on cash and liquidity:

{format_records_table(records)}

Please provide comprehensive cash flow analysis:

1. **Cash Flow Categories**
   - Operating activities
   - Investing activities
   - Financing activities

2. **Liquidity Assessment**
   - Current cash position
   - Cash burn rate (if applicable)
   - Runway calculation
   - Liquidity ratios

3. **Working Capital Analysis**
   - Working capital position
   - Changes in working capital
   - Efficiency of working capital usage

4. **Cash Flow Trends**
   - Cash generation patterns
   - Seasonal variations
   - Sustainability of cash flow

5. **Concerns and Red Flags**
   - Cash flow problems
   - Liquidity risks
   - Warning signs

6. **Recommendations**
   - Cash management improvements
   - Working capital optimization
   - Liquidity enhancement strategies

Focus on actionable insights for cash management and liquidity improvement."""


def forecasting_prompt(records: list[FinancialRecord], periods_ahead: int) -> str:
    return f"""You are a financial forecasting specialist. Based on the following historical data, provide projections for the next {periods_ahead} period(s):

{format_records_table(records)}

Please provide detailed forecast:

1. **Trend-Based Projections**
   - Revenue forecast with confidence levels
   - Expense projections by category
   - Expected net income

2. **Methodology**
   - Forecasting approach used
   - Key assumptions made
   - Statistical basis for projections

3. **Confidence Levels**
   - Best case scenario
   - Most likely scenario
   - Worst case scenario
   - Confidence intervals

4. **Growth Assumptions**
   - Expected growth rates
   - Market conditions considered
   - Seasonal adjustments

5. **Risk Factors**
   - Internal risks
   - External risks
   - Sensitivity to assumptions

6. **Recommendations**
   - Planning suggestions
   - Risk mitigation strategies
   - Contingency plans

Provide specific numbers with ranges and probabilities where applicable."""


def custom_analysis_prompt(question: str, records: list[FinancialRecord]) -> str:
    return f"""You are an expert financial analyst. Please answer the following question using the provided financial data:

**Question:**
{question}

**Financial Data:**
{format_records_table(records)}

Please provide:
1. Direct answer to the question
2. Supporting evidence from the data
3. Relevant analysis and context
4. Specific numbers and calculations
5. Any caveats or limitations

Be specific, data-driven, and actionable in your response."""


def custom_question_prompt(question: str, summary: FinancialSummary) -> str:
    """Question about one document, answered from its aggregated totals."""
    return f"""You are a financial advisor. Answer the following question based on the financial data:

**Question:** {question}

**Financial Summary:**
- Revenue: {currency(summary.revenue)}
- Expenses: {currency(summary.expenses)}
- Net Income: {currency(summary.net_income)}
- Assets: {currency(summary.assets)}
- Liabilities: {currency(summary.liabilities)}

Provide a clear, concise answer with specific numbers where applicable."""


def context_question_prompt(
    question: str,
    summary: FinancialSummary,
    history: Sequence[str],
) -> str:
    """Follow-up question carrying the most recent conversation messages."""
    recent = list(history)[-CONTEXT_HISTORY_LIMIT:]
    conversation = "\n".join(["Previous conversation:", *recent])
    return f"""You are a financial advisor. Answer the following question considering the conversation history.

{conversation}

**Current Financial Summary:**
- Revenue: {currency(summary.revenue)}
- Expenses: {currency(summary.expenses)}
- Net Income: {currency(summary.net_income)}
- Profit Margin: {fixed(summary.profit_margin)}%

**Question:** {question}

Provide a clear, concise answer with specific numbers where applicable."""
