"""Small-vocabulary classifiers over generated text, each with a fixed default."""

import re

DEFAULT_RATING = "Hold"
DEFAULT_CONFIDENCE = "Moderate"
DEFAULT_TIME_HORIZON = "Medium-term (1-3 years)"
DEFAULT_EXPECTED_RETURNS = "Moderate growth expected"

_RATING_LABEL = re.compile(r"rating\s*:\s*\**\s*(buy|hold|sell)\b", re.IGNORECASE)
_RATING_WORD = re.compile(r"\b(buy|hold|sell)\b", re.IGNORECASE)

_CONFIDENCE_LABEL = re.compile(r"confidence(?: level)?\s*:\s*\**\s*(high|moderate|medium|low)\b", re.IGNORECASE)

# Checked in order; the first phrase present wins
_CONFIDENCE_PHRASES = (
    ("high confidence", "High"),
    ("moderate confidence", "Moderate"),
    ("low confidence", "Low"),
)
_HORIZON_PHRASES = (
    ("long-term", "Long-term (3-5 years)"),
    ("medium-term", "Medium-term (1-3 years)"),
    ("short-term", "Short-term (6-12 months)"),
)
_HORIZON_LABEL = re.compile(r"time horizon\s*:\s*\**\s*(long|medium|short)", re.IGNORECASE)

_RETURN_WORDS = ("return", "growth", "yield")


def extract_investment_rating(text: str | None) -> str:
    """Buy, Hold or Sell; an explicit ``RATING:`` label beats a bare mention."""
    if not text:
        return DEFAULT_RATING
    match = _RATING_LABEL.search(text) or _RATING_WORD.search(text)
    if match is None:
        return DEFAULT_RATING
    return match.group(1).capitalize()


def extract_confidence_level(text: str | None) -> str:
    if not text:
        return DEFAULT_CONFIDENCE

    labelled = _CONFIDENCE_LABEL.search(text)
    if labelled:
        value = labelled.group(1).lower()
        return "Moderate" if value == "medium" else value.capitalize()

    lowered = text.lower()
    for phrase, level in _CONFIDENCE_PHRASES:
        if phrase in lowered:
            return level
    return DEFAULT_CONFIDENCE


def extract_time_horizon(text: str | None) -> str:
    if not text:
        return DEFAULT_TIME_HORIZON

    labelled = _HORIZON_LABEL.search(text)
    if labelled:
        prefix = labelled.group(1).lower()
        for phrase, horizon in _HORIZON_PHRASES:
            if phrase.startswith(prefix):
                return horizon

    lowered = text.lower()
    for phrase, horizon in _HORIZON_PHRASES:
        if phrase in lowered:
            return horizon
    return DEFAULT_TIME_HORIZON


def extract_expected_returns(text: str | None) -> str:
    """First line that talks about returns, growth or yield."""
    if not text:
        return DEFAULT_EXPECTED_RETURNS
    for line in text.split("\n"):
        lowered = line.lower()
        if line.strip() and any(word in lowered for word in _RETURN_WORDS):
            return line.strip()
    return DEFAULT_EXPECTED_RETURNS
