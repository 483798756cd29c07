"""
Section splitting for cleaned paper text.

Three tiers, first one that produces output wins:
1. Header split on the usual research-paper labels
2. Blank-line paragraphs
3. Fixed-size chunks

The result is never empty for non-empty text.
"""

import re

SECTION_LABELS = (
    "Abstract",
    "Introduction",
    "Methods",
    "Results",
    "Discussion",
    "Conclusion",
    "References",
)

# A label counts as a header at text start, line start, or sentence start
SECTION_HEADER_PATTERN = re.compile(
    r"(?:^|(?<=[.!?] ))[ \t]*"
    r"(abstract|introduction|methods?|results?|discussion|conclusions?|references?)"
    r"\b[ \t]*:?",
    re.IGNORECASE | re.MULTILINE,
)

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def canonical_label(header: str) -> str:
    """Map a matched header ('METHOD', 'results') to its canonical label."""
    lowered = header.lower()
    for label in SECTION_LABELS:
        if label.lower().startswith(lowered) or lowered.startswith(label.lower()):
            return label
    return header.capitalize()


class SectionSplitter:
    """Partition cleaned text into bounded sections."""

    def __init__(
        self,
        max_chars: int = 1000,
        min_chars: int = 100,
        max_paragraphs: int = 10,
        max_chunks: int = 5,
    ):
        self.max_chars = max_chars
        self.min_chars = min_chars
        self.max_paragraphs = max_paragraphs
        self.max_chunks = max_chunks

    def split(self, text: str) -> list[str]:
        if not text.strip():
            return []

        headers = list(SECTION_HEADER_PATTERN.finditer(text))
        if headers:
            sections = self.split_by_headers(text, headers)
        else:
            sections = self.split_by_paragraphs(text)

        if not sections:
            sections = self.split_into_chunks(text)

        return sections

    def split_by_headers(self, text: str, headers: list[re.Match]) -> list[str]:
        sections = []

        for i, header in enumerate(headers):
            end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
            content = text[header.end():end].strip()
            if len(content) > self.min_chars:
                label = canonical_label(header.group(1))
                sections.append(f"{label}: {content[:self.max_chars]}")

        return sections

    def split_by_paragraphs(self, text: str) -> list[str]:
        # Flat text has no paragraphs to split
        if not PARAGRAPH_BREAK.search(text):
            return []

        paragraphs = [
            p.strip() for p in PARAGRAPH_BREAK.split(text)
            if len(p.strip()) > self.min_chars
        ]

        return [
            f"Section {index}: {paragraph[:self.max_chars]}"
            for index, paragraph in enumerate(paragraphs[:self.max_paragraphs], 1)
        ]

    def split_into_chunks(self, text: str) -> list[str]:
        chunks = [
            text[i:i + self.max_chars].strip()
            for i in range(0, len(text), self.max_chars)
        ]
        chunks = [chunk for chunk in chunks if chunk]

        return [
            f"Content Part {index}: {chunk}"
            for index, chunk in enumerate(chunks[:self.max_chunks], 1)
        ]
