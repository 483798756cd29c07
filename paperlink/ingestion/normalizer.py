"""
Text cleaning for raw extraction output.

Raw strategy output is full of PDF operator debris, escaped control
sequences and words run together. The normalizer turns it into a canonical
run of sentences, then caps the document length and flags documents that
came out too short to be useful.

Pipeline (each step total and individually idempotent):
1. Literal \\n, \\r, \\t escapes -> space
2. Whitespace runs -> one space
3. Characters outside [A-Za-z0-9 .,;:!?()'"-] -> space, re-collapse
4. Split lower/upper and letter/digit runs
5. Sentence segmentation: keep fragments > 10 chars with a letter
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..schemas.extraction import ExtractionStatus
from .byte_scanner import to_printable_string
from .sections import SectionSplitter

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "... [Content truncated]"

PLACEHOLDER_TEMPLATE = (
    "PDF document content extracted from file {source_id}. The document may "
    "contain complex formatting or embedded images that require alternative "
    "processing methods for optimal text extraction."
)
MAX_PLACEHOLDER_ID_CHARS = 100

_ESCAPES = re.compile(r"\\[nrt]")
_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^A-Za-z0-9 .,;:!?()'\"-]")
_LOWER_UPPER = re.compile(r"([a-z])([A-Z])")
_LETTER_DIGIT = re.compile(r"([A-Za-z])(\d)")
_DIGIT_LETTER = re.compile(r"(\d)([A-Za-z])")
_SENTENCE_END = re.compile(r"[.!?]+")
_HAS_LETTER = re.compile(r"[A-Za-z]")


def collapse_escapes(text: str) -> str:
    return _ESCAPES.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def strip_disallowed(text: str) -> str:
    return collapse_whitespace(_DISALLOWED.sub(" ", text))


def split_run_together(text: str) -> str:
    """Undo word-run-together artifacts: 'geneExpression2' -> 'gene Expression 2'."""
    text = _LOWER_UPPER.sub(r"\1 \2", text)
    text = _LETTER_DIGIT.sub(r"\1 \2", text)
    return _DIGIT_LETTER.sub(r"\1 \2", text)


def segment_sentences(text: str, min_chars: int = 10) -> list[str]:
    """Split on sentence terminators, keeping substantive fragments."""
    sentences = []
    for fragment in _SENTENCE_END.split(text):
        fragment = fragment.strip()
        if len(fragment) > min_chars and _HAS_LETTER.search(fragment):
            sentences.append(fragment + ".")
    return sentences


def normalize(text: str) -> str:
    """Canonical cleaned text. normalize(normalize(s)) == normalize(s)."""
    text = collapse_escapes(text)
    text = collapse_whitespace(text)
    text = strip_disallowed(text)
    text = split_run_together(text)
    return " ".join(segment_sentences(text))


def placeholder_id(source_id: str) -> str:
    """Printable ASCII form of source_id, capped in length."""
    printable = to_printable_string(source_id.encode("utf-8")).strip()
    return printable[:MAX_PLACEHOLDER_ID_CHARS].strip() or "document"


@dataclass
class CleanedDocument:
    """Cleaned text plus its sections and quality status."""

    text: str
    sections: list[str] = field(default_factory=list)
    status: ExtractionStatus = ExtractionStatus.OK


class TextNormalizer:
    """Cleans extracted text and partitions it into sections."""

    def __init__(
        self,
        max_chars: int = 8000,
        min_chars: int = 50,
        splitter: Optional[SectionSplitter] = None,
    ):
        self.max_chars = max_chars
        self.min_chars = min_chars
        self.splitter = splitter or SectionSplitter()

    def normalize(self, text: str) -> str:
        return normalize(text)

    def clean_document(self, text: str, source_id: str = "document") -> CleanedDocument:
        """
        Clean a raw document and derive its sections.

        Text over max_chars is cut and marked. Text under min_chars is
        replaced with a placeholder naming source_id and flagged DEGRADED.
        """
        cleaned = normalize(text)
        status = ExtractionStatus.OK

        if len(cleaned) > self.max_chars:
            cleaned = cleaned[:self.max_chars] + TRUNCATION_MARKER
            status = ExtractionStatus.TRUNCATED

        if len(cleaned) < self.min_chars:
            logger.warning(
                f"Extraction degraded for {source_id}: {len(cleaned)} usable chars"
            )
            cleaned = PLACEHOLDER_TEMPLATE.format(source_id=placeholder_id(source_id))
            status = ExtractionStatus.DEGRADED

        return CleanedDocument(
            text=cleaned,
            sections=self.splitter.split(cleaned),
            status=status,
        )
