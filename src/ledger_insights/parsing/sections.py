"""Section splitting, summaries and display cleanup for generated text."""

import re

MAIN_CONTENT = "Main Content"

# "## Title", "**Title**", "__Title__", "1. **Title**" with an optional trailing colon
_EXPLICIT_HEADER = re.compile(
    r"^\s*(?:#+\s+.+|(?:\d+\.?\s+)?(?:\*\*[^*]+\*\*|__[^_]+__):?)\s*$"
)
_NUMBERED_HEADER = re.compile(r"^\s*\d+\.?\s+[A-Z]")
_TITLE_MARKUP = re.compile(r"[#*_]+")
_TITLE_NUMBER = re.compile(r"^\d+\.?\s*")


def clean_section_title(title: str) -> str:
    """Strip markdown, numbering and colons from a header line."""
    title = _TITLE_MARKUP.sub("", title)
    title = _TITLE_NUMBER.sub("", title.strip())
    return title.replace(":", "").strip()


def _is_likely_header(line: str) -> bool:
    if not line.strip():
        return False
    if line.lstrip().startswith("#"):
        return True
    if "**" in line or "__" in line:
        return True
    if _NUMBERED_HEADER.match(line):
        return True
    return len(line) < 100 and line.rstrip().endswith(":")


def _split(text: str, is_header) -> dict[str, str]:
    sections: dict[str, str] = {}
    title = MAIN_CONTENT
    content: list[str] = []

    for line in text.split("\n"):
        if not line.strip():
            continue
        if is_header(line):
            if content:
                sections[title] = "\n".join(content).strip()
                content = []
            title = clean_section_title(line) or title
        else:
            content.append(line)

    if content:
        sections[title] = "\n".join(content).strip()
    return sections


def parse_sections(text: str | None) -> dict[str, str]:
    """Split text into titled sections.

    Explicit markdown or bold headers are tried first. If the text has none,
    a looser heuristic also treats numbered capitalized lines and short lines
    ending in a colon as headers. Content before the first header is filed
    under ``Main Content``. Returns an empty dict for blank input.
    """
    if not text or not text.strip():
        return {}

    if any(_EXPLICIT_HEADER.match(line) for line in text.split("\n")):
        sections = _split(text, lambda line: bool(_EXPLICIT_HEADER.match(line)))
        if sections:
            return sections

    return _split(text, _is_likely_header)


def format_for_display(text: str | None) -> str:
    """Normalize whitespace and put a blank line after markdown headers."""
    if not text or not text.strip():
        return ""

    formatted = text.replace("\r\n", "\n")
    formatted = re.sub(r"\n{3,}", "\n\n", formatted)
    formatted = re.sub(r" {2,}", " ", formatted)
    formatted = re.sub(r"(#{1,6}\s+.+)\n(?!\n)", r"\1\n\n", formatted)
    return formatted.strip()


def leading_lines(text: str | None, count: int) -> str:
    """Join the first ``count`` lines of ``text`` with spaces."""
    if not text:
        return ""
    return " ".join(text.split("\n")[:count]).strip()


def extract_summary(text: str | None) -> str:
    return leading_lines(text, 5)


def extract_executive_summary(text: str | None) -> str:
    return leading_lines(text, 3)
