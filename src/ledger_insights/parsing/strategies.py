"""Ordered extraction strategies over generated text.

An ``ExtractionChain`` tries its strategies in order and returns the first
non-empty result, de-duplicated and capped. When every strategy comes up
empty it logs ``extraction_degraded`` and returns its documented default.
Chains never raise on any input.
"""

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

Strategy = Callable[[str], list[str]]

NUMBERED_LINE = re.compile(r"^\d+\.\s")
NUMBER_PREFIX = re.compile(r"^\d+\.\s*")
# Prompt instructions echoed back by the model
INSTRUCTION_WORDS = re.compile(r"must|exactly|items", re.IGNORECASE)


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeated items, keeping first-seen order."""
    return list(dict.fromkeys(items))


def strip_number(line: str) -> str:
    return NUMBER_PREFIX.sub("", line).strip()


def clean_lines(text: str) -> list[str]:
    """Non-blank lines of ``text``, stripped."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def numbered_section(starts: Sequence[str], stops: Sequence[str]) -> Strategy:
    """Numbered items under the first header containing one of ``starts``.

    A header matches when it contains a start marker anywhere (case-insensitive).
    Once inside the section, numbered lines are items even when they mention a
    start marker. Collection ends at the first later line that begins with a stop marker.
    Items that read like echoed format instructions are skipped.
    """
    start_markers = [s.lower() for s in starts]
    stop_markers = tuple(s.lower() for s in stops)

    def extract(text: str) -> list[str]:
        items: list[str] = []
        in_section = False
        for line in clean_lines(text):
            lowered = line.lower()
            numbered = NUMBERED_LINE.match(line) is not None
            # Inside a section a numbered line is always an item
            if not (in_section and numbered) and any(
                marker in lowered for marker in start_markers
            ):
                in_section = True
                continue
            if not in_section:
                continue
            if lowered.startswith(stop_markers):
                break
            if numbered:
                item = strip_number(line)
                if item and not INSTRUCTION_WORDS.search(item):
                    items.append(item)
        return items

    return extract


def numbered_keyword_lines(keywords: Sequence[str]) -> Strategy:
    """Numbered lines anywhere in the text mentioning any keyword."""
    lowered_keywords = [k.lower() for k in keywords]

    def extract(text: str) -> list[str]:
        items = []
        for line in clean_lines(text):
            if not NUMBERED_LINE.match(line):
                continue
            lowered = line.lower()
            if any(keyword in lowered for keyword in lowered_keywords):
                item = strip_number(line)
                if item:
                    items.append(item)
        return items

    return extract


def keyword_lines(keywords: Sequence[str]) -> Strategy:
    """Any line mentioning a keyword, with list markers removed.

    Section headers and echoed instructions are skipped so that a header such
    as ``IMMEDIATE ACTIONS (...):`` is not returned as an item.
    """
    lowered_keywords = [k.lower() for k in keywords]

    def extract(text: str) -> list[str]:
        items = []
        for line in clean_lines(text):
            if line.endswith(":") or INSTRUCTION_WORDS.search(line):
                continue
            lowered = line.lower()
            if any(keyword in lowered for keyword in lowered_keywords):
                item = strip_number(line.lstrip("-*• ").strip())
                if item:
                    items.append(item)
        return items

    return extract


def pattern_matches(pattern: re.Pattern[str], group: int = 1) -> Strategy:
    """Every non-blank capture of ``pattern`` in order."""

    def extract(text: str) -> list[str]:
        return [m.group(group).strip() for m in pattern.finditer(text) if m.group(group).strip()]

    return extract


@dataclass(frozen=True)
class ExtractionChain:
    """First-non-empty-wins sequence of strategies with a fallback default.

    Attributes:
        name: Extractor name used in degradation logs.
        strategies: Strategies tried in order.
        default: Returned when every strategy finds nothing.
        blank_default: Returned for empty or whitespace-only input; ``default``
            when not set.
        limit: Maximum number of items returned.
    """

    name: str
    strategies: tuple[Strategy, ...]
    default: tuple[str, ...] = ()
    blank_default: tuple[str, ...] | None = None
    limit: int = 5

    def __call__(self, text: str | None) -> list[str]:
        if not text or not text.strip():
            fallback = self.blank_default if self.blank_default is not None else self.default
            return list(fallback)

        for strategy in self.strategies:
            items = strategy(text)
            if items:
                return dedupe(items)[: self.limit]

        logger.warning(
            "extraction_degraded",
            extractor=self.name,
            response_length=len(text),
        )
        return list(self.default)
