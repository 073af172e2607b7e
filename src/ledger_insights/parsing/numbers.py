"""Labelled amount and percentage extraction."""

import re
from decimal import Decimal, InvalidOperation

_LABELLED_AMOUNT = re.compile(r"([A-Za-z][A-Za-z \t]*):\s*\$?\s*([\d,]+\.?\d*)\s*(?:USD|%)?")
_LABELLED_PERCENT = re.compile(r"([A-Za-z][A-Za-z \t]*?)(?:\s+of\s+|\s*:\s*|\s+)?([\d.]+)\s*%")


def extract_numeric_data(text: str | None) -> dict[str, Decimal]:
    """Map ``Label: $1,234.56`` style pairs to amounts; the first occurrence of a label wins."""
    values: dict[str, Decimal] = {}
    if not text:
        return values

    for match in _LABELLED_AMOUNT.finditer(text):
        label = match.group(1).strip()
        try:
            value = Decimal(match.group(2).replace(",", ""))
        except InvalidOperation:
            continue
        values.setdefault(label, value)
    return values


def extract_percentages(text: str | None) -> dict[str, float]:
    """Map ``growth: 15.5%`` or ``increase of 20%`` style phrases to values."""
    values: dict[str, float] = {}
    if not text:
        return values

    for match in _LABELLED_PERCENT.finditer(text):
        label = match.group(1).strip()
        try:
            value = float(match.group(2))
        except ValueError:
            continue
        values.setdefault(label, value)
    return values
