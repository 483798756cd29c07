"""
Labeled-field parsing of model responses.

Expected shape (any field may be missing):

    HYPOTHESIS: ...
    EVIDENCE: ...
    CONFIDENCE: 80%
    LIMITATIONS: ...
    SOURCES: Paper A, Paper B

A field's body runs until the next line starting with an upper-case label.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

_NEXT_LABEL = r"(?=\n[A-Z][A-Z ]*:|\Z)"

HYPOTHESIS_PATTERN = re.compile(rf"HYPOTHESIS:\s*(.+?){_NEXT_LABEL}", re.DOTALL)
TITLE_PATTERN = re.compile(rf"TITLE:\s*(.+?){_NEXT_LABEL}", re.DOTALL)
CONFIDENCE_PATTERN = re.compile(r"CONFIDENCE:\s*(\d+)%?")
LIMITATIONS_PATTERN = re.compile(rf"LIMITATIONS:\s*(.+?){_NEXT_LABEL}", re.DOTALL)
SOURCES_PATTERN = re.compile(rf"(?:SOURCE PAPERS|SOURCES):\s*(.+?){_NEXT_LABEL}", re.DOTALL)


class ParsedHypothesis(BaseModel):
    """Fields recovered from a generation response."""

    hypothesis: str
    title: Optional[str] = None
    confidence: Optional[int] = None
    limitations: Optional[str] = None
    sources: Optional[list[str]] = Field(default=None)


def _field(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def parse_hypothesis_response(response: str) -> ParsedHypothesis:
    """Parse a response; absent fields are None, never an error."""
    confidence_match = CONFIDENCE_PATTERN.search(response)
    sources = _field(SOURCES_PATTERN, response)

    return ParsedHypothesis(
        hypothesis=_field(HYPOTHESIS_PATTERN, response) or response,
        title=_field(TITLE_PATTERN, response),
        confidence=int(confidence_match.group(1)) if confidence_match else None,
        limitations=_field(LIMITATIONS_PATTERN, response),
        sources=[s.strip() for s in sources.split(",") if s.strip()] if sources else None,
    )
