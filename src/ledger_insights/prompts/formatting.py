"""Number and table formatting shared by prompt templates."""

from decimal import Decimal

from ledger_insights.domain.models import FinancialRecord
from ledger_insights.metrics import category_totals


def currency(value: Decimal) -> str:
    """Format as US dollars with cents, e.g. ``-$1,234.50``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def whole(value: Decimal) -> str:
    """Format with thousands separators and no decimals."""
    return f"{value:,.0f}"


def fixed(value: Decimal, places: int = 2) -> str:
    return f"{value:.{places}f}"


def percent_of(part: Decimal, total: Decimal) -> Decimal:
    """``part`` as a percentage of ``total``, 0 when ``total`` is 0."""
    if total == 0:
        return Decimal("0")
    return part / total * 100


def format_records_table(records: list[FinancialRecord]) -> str:
    """Render records as a fixed-width table followed by category totals."""
    if not records:
        return "No financial data available."

    lines = ["```", f"{'Account':<40} | {'Category':<15} | {'Period':<12} | {'Amount':>15}"]
    lines.append("-" * 90)

    for record in sorted(records, key=lambda r: (r.category, r.period)):
        name = record.account_name
        if len(name) > 38:
            name = name[:35] + "..."
        lines.append(
            f"{name:<40} | {record.category:<15} | {record.period:<12} | {currency(record.amount):>15}"
        )

    lines.append("-" * 90)
    lines.append("")
    lines.append("Summary by Category:")
    for category, total in category_totals(records):
        lines.append(f"  {category:<30}: {currency(total):>15}")

    lines.append("```")
    return "\n".join(lines) + "\n"
