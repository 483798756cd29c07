"""
Text extraction strategies.

Each strategy recovers text fragments from raw PDF bytes using one
structural regularity of the format. Strategies share no state and are run
by TextExtractor in priority order:

1. StreamExtraction    - stream ... endstream blocks
2. TextObjectExtraction - (string) Tj show operators
3. TextBlockExtraction  - BT ... ET text blocks
4. AsciiFallback        - every printable byte, last resort
"""

import re
from abc import ABC, abstractmethod

from ..schemas.extraction import ExtractionMethod
from .byte_scanner import BytesLike, find_blocks, find_pattern, to_printable_string

_TEXT_SHOW = re.compile(rb"\(([^)]+)\)\s*Tj")
_PARENTHESIZED = re.compile(rb"\(([^)]+)\)")
_HAS_LETTER = re.compile(r"[a-zA-Z]")

_ASCII_KEEP = frozenset(range(32, 127)) | {10, 13}
_ASCII_DROP = bytes(b for b in range(256) if b not in _ASCII_KEEP)


class TextExtractionStrategy(ABC):
    """One heuristic for recovering readable text from PDF bytes."""

    name: str = ""

    @abstractmethod
    def extract(self, buffer: BytesLike) -> list[str]:
        """Return accepted text fragments in document order."""


class StreamExtraction(TextExtractionStrategy):
    """Printable content of stream ... endstream blocks."""

    name = ExtractionMethod.STREAM.value

    def __init__(self, min_chars: int = 20):
        self.min_chars = min_chars

    def extract(self, buffer: BytesLike) -> list[str]:
        data = bytes(buffer)
        fragments = []

        for start, stop in find_blocks(data, b"stream", b"endstream"):
            body = data[start + len(b"stream"):stop - len(b"endstream")]
            readable = to_printable_string(body).strip()
            if len(readable) > self.min_chars:
                fragments.append(readable)

        return fragments


class TextObjectExtraction(TextExtractionStrategy):
    """Strings passed to the Tj text-show operator."""

    name = ExtractionMethod.TEXT_OBJECTS.value

    def __init__(self, min_chars: int = 2):
        self.min_chars = min_chars

    def extract(self, buffer: BytesLike) -> list[str]:
        fragments = []

        for match in find_pattern(buffer, _TEXT_SHOW):
            text = to_printable_string(match.group(1)).strip()
            if len(text) > self.min_chars:
                fragments.append(text)

        return fragments


class TextBlockExtraction(TextExtractionStrategy):
    """Parenthesised words inside BT ... ET text blocks."""

    name = ExtractionMethod.TEXT_BLOCKS.value

    def __init__(self, min_chars: int = 1):
        self.min_chars = min_chars

    def extract(self, buffer: BytesLike) -> list[str]:
        data = bytes(buffer)
        words = []

        for start, stop in find_blocks(data, b"BT", b"ET"):
            block = data[start + 2:stop - 2]
            for match in _PARENTHESIZED.finditer(block):
                word = to_printable_string(match.group(1)).strip()
                if len(word) > self.min_chars and _HAS_LETTER.search(word):
                    words.append(word)

        return words


class AsciiFallback(TextExtractionStrategy):
    """
    Every printable byte of the buffer.

    Line breaks become a space once some text has been emitted. Binary
    noise is dropped, so the output interleaves unrelated content but is
    non-empty for any buffer with printable bytes.
    """

    name = ExtractionMethod.ASCII_FALLBACK.value

    def extract(self, buffer: BytesLike) -> list[str]:
        kept = bytes(buffer).translate(None, _ASCII_DROP).lstrip(b"\r\n")
        text = kept.replace(b"\r", b" ").replace(b"\n", b" ").decode("ascii")
        return [text] if text else []


def default_strategies(min_stream_chars: int = 20) -> list[TextExtractionStrategy]:
    """Structural strategies in priority order (fallback excluded)."""
    return [
        StreamExtraction(min_chars=min_stream_chars),
        TextObjectExtraction(),
        TextBlockExtraction(),
    ]
