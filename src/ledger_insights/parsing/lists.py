"""List extractors for findings, recommendations, risks and plan items."""

import re

from ledger_insights.parsing.strategies import (
    ExtractionChain,
    keyword_lines,
    numbered_keyword_lines,
    numbered_section,
    pattern_matches,
)

NO_RISK_ANALYSIS = "No risk analysis available"
NO_OPPORTUNITY_ANALYSIS = "No opportunity analysis available"
RISK_EXTRACTION_FAILED = "Unable to extract structured risk analysis from AI response"
OPPORTUNITY_EXTRACTION_FAILED = "Unable to extract structured opportunity analysis from AI response"

# Values that mean "nothing was extracted" rather than real content
SENTINELS = frozenset(
    {NO_RISK_ANALYSIS, NO_OPPORTUNITY_ANALYSIS, RISK_EXTRACTION_FAILED, OPPORTUNITY_EXTRACTION_FAILED}
)

_BULLET_LINE = re.compile(r"^\s*[-*•]\s+(.+)$", re.MULTILINE)
_NUMBERED_ITEM = re.compile(r"^\s*\d+\.\s+(.+)$", re.MULTILINE)
_RECOMMENDATION_SECTION = re.compile(
    r"(?:recommendation|suggest|action|next step)s?:?\s*\n((?:(?!\n\n).)+)",
    re.IGNORECASE | re.DOTALL,
)
_BULLET_ITEM = re.compile(r"[-*•]\s+(.+)")
_ACTION_PHRASE = re.compile(
    r"(?:should|must|need to|recommended to|consider|suggest)\s+([^.!?\n]+[.!?])",
    re.IGNORECASE,
)


def _recommendation_section_bullets(text: str) -> list[str]:
    match = _RECOMMENDATION_SECTION.search(text)
    if match is None:
        return []
    return [m.group(1).strip() for m in _BULLET_ITEM.finditer(match.group(1)) if m.group(1).strip()]


_bullets = pattern_matches(_BULLET_LINE)
_numbered = pattern_matches(_NUMBERED_ITEM)
_action_phrases = pattern_matches(_ACTION_PHRASE)

extract_key_findings = ExtractionChain(
    name="key_findings",
    strategies=(_bullets, _numbered),
    limit=10,
)

extract_recommendations = ExtractionChain(
    name="recommendations",
    strategies=(
        _recommendation_section_bullets,
        numbered_section(
            ["RECOMMENDATIONS", "MITIGATION STRATEGIES", "PRIORITY ACTIONS"],
            ["VALIDATION", "RISK", "CONCERNS", "STRENGTHS", "KEY", "INDUSTRY TRENDS"],
        ),
        _action_phrases,
    ),
)

extract_risk_factors = ExtractionChain(
    name="risk_factors",
    strategies=(
        numbered_section(
            ["RISK FACTORS", "CONCERNS"],
            [
                "MITIGATION",
                "PRIORITY",
                "VALIDATION",
                "STRENGTHS",
                "KEY OBSERVATIONS",
                "RECOMMENDATIONS",
                "ALTERNATIVES",
            ],
        ),
        numbered_keyword_lines(["risk", "concern", "debt", "equity", "loss", "negative"]),
    ),
    default=(RISK_EXTRACTION_FAILED,),
    blank_default=(NO_RISK_ANALYSIS,),
)

extract_opportunities = ExtractionChain(
    name="opportunities",
    strategies=(
        numbered_section(
            ["OPPORTUNITIES", "GROWTH STRATEGIES", "OPTIMIZATION", "STRENGTHS"],
            ["VALIDATION", "RISK", "CONCERNS", "PRIORITY"],
        ),
        numbered_keyword_lines(["opportunity", "potential", "growth", "increase", "improve", "expand"]),
    ),
    default=(OPPORTUNITY_EXTRACTION_FAILED,),
    blank_default=(NO_OPPORTUNITY_ANALYSIS,),
)

extract_strengths = ExtractionChain(
    name="strengths",
    strategies=(
        numbered_section(["STRENGTHS"], ["CONCERNS", "WEAKNESSES", "PRIORITY", "RISK"]),
        _bullets,
        _numbered,
    ),
    limit=3,
)

extract_priorities = ExtractionChain(
    name="priorities",
    strategies=(
        numbered_section(["PRIORITY ACTIONS"], ["VALIDATION", "STRENGTHS", "CONCERNS", "RISK"]),
        _recommendation_section_bullets,
        _action_phrases,
    ),
    limit=3,
)

extract_key_insights = ExtractionChain(
    name="key_insights",
    strategies=(
        numbered_section(["KEY INSIGHTS"], ["RECOMMENDATIONS", "INDUSTRY TRENDS"]),
        _bullets,
        _numbered,
    ),
)

extract_key_factors = ExtractionChain(
    name="key_factors",
    strategies=(
        numbered_section(["KEY FACTORS"], ["RISK", "ALTERNATIVES"]),
        _bullets,
        _numbered,
    ),
)

extract_industry_trends = ExtractionChain(
    name="industry_trends",
    strategies=(
        numbered_section(["INDUSTRY TRENDS"], ["RECOMMENDATIONS", "KEY INSIGHTS"]),
        keyword_lines(["trend", "industry", "market"]),
    ),
)

extract_alternatives = ExtractionChain(
    name="alternatives",
    strategies=(
        numbered_section(["ALTERNATIVES"], ["RISK", "KEY FACTORS"]),
        keyword_lines(["alternative", "option"]),
    ),
    limit=3,
)


# Cash-flow plan sections, in the order the cash-flow prompt requests them
_CASH_FLOW_HEADERS = (
    "IMMEDIATE ACTIONS",
    "SHORT-TERM IMPROVEMENTS",
    "LONG-TERM STRATEGIES",
    "WORKING CAPITAL OPTIMIZATION",
    "CASH GENERATION STRATEGIES",
    "RISK MITIGATION",
    "IMPLEMENTATION ROADMAP",
    "SUCCESS METRICS",
)


def _cash_flow_chain(
    name: str,
    header: str,
    keywords: list[str],
    default: tuple[str, ...],
) -> ExtractionChain:
    other_headers = [h for h in _CASH_FLOW_HEADERS if h != header]
    return ExtractionChain(
        name=name,
        strategies=(numbered_section([header], other_headers), keyword_lines(keywords)),
        default=default,
    )


extract_immediate_actions = _cash_flow_chain(
    "immediate_actions",
    "IMMEDIATE ACTIONS",
    ["immediate", "next 30", "week"],
    (
        "Review accounts receivable collection process",
        "Optimize inventory management",
        "Negotiate better payment terms with suppliers",
    ),
)

extract_short_term_improvements = _cash_flow_chain(
    "short_term_improvements",
    "SHORT-TERM IMPROVEMENTS",
    ["short-term", "3-6 months", "quarter"],
    (
        "Implement automated invoicing system",
        "Establish cash flow forecasting",
        "Reduce operating expenses by 5%",
    ),
)

extract_long_term_strategies = _cash_flow_chain(
    "long_term_strategies",
    "LONG-TERM STRATEGIES",
    ["long-term", "6-12 months", "year"],
    (
        "Diversify revenue streams",
        "Secure long-term financing",
        "Invest in working capital optimization",
    ),
)

extract_working_capital_optimizations = _cash_flow_chain(
    "working_capital_optimizations",
    "WORKING CAPITAL OPTIMIZATION",
    ["working capital", "receivable", "payable", "inventory"],
    (
        "Reduce accounts receivable days to 30",
        "Optimize inventory turnover",
        "Extend accounts payable terms",
    ),
)

extract_cash_generation_strategies = _cash_flow_chain(
    "cash_generation_strategies",
    "CASH GENERATION STRATEGIES",
    ["generation", "revenue", "sales"],
    (
        "Increase sales through marketing",
        "Offer early payment discounts",
        "Sell underutilized assets",
    ),
)

extract_risk_mitigations = _cash_flow_chain(
    "risk_mitigations",
    "RISK MITIGATION",
    ["risk", "mitigation", "contingency"],
    (
        "Build cash reserves",
        "Diversify funding sources",
        "Monitor cash flow weekly",
    ),
)

extract_implementation_roadmap = _cash_flow_chain(
    "implementation_roadmap",
    "IMPLEMENTATION ROADMAP",
    ["roadmap", "timeline", "milestone"],
    (
        "Week 1: Cash flow audit",
        "Month 1: Implement immediate actions",
        "Month 3: Short-term improvements",
        "Month 6: Long-term strategies",
    ),
)

extract_success_metrics = _cash_flow_chain(
    "success_metrics",
    "SUCCESS METRICS",
    ["metric", "measure", "kpi"],
    (
        "Cash position improvement",
        "Burn rate reduction",
        "Runway extension",
        "Working capital efficiency",
    ),
)
