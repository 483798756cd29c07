"""
Stateless scanning helpers over raw PDF bytes.

Nothing here understands the PDF object model. The scanner only finds
delimited byte ranges and converts bytes to printable text, so malformed
input degrades to fewer matches rather than raising.
"""

import re
from typing import Iterator, Union

BytesLike = Union[bytes, bytearray, memoryview]

# Printable ASCII plus the whitespace bytes that survive conversion
_PRINTABLE = frozenset(range(32, 127)) | {9, 10, 13}
_NON_PRINTABLE = bytes(b for b in range(256) if b not in _PRINTABLE)
_TO_SPACE = bytes.maketrans(_NON_PRINTABLE, b" " * len(_NON_PRINTABLE))

_WHITESPACE_RUN = re.compile(r"\s+")


def find_blocks(
    buffer: BytesLike,
    start_marker: bytes,
    end_marker: bytes,
) -> Iterator[tuple[int, int]]:
    """
    Yield (start, stop) ranges of start_marker...end_marker blocks.

    Ranges include both markers, never overlap, and are found leftmost
    first with the shortest possible body. A start marker with no matching
    end marker yields nothing and ends the scan.
    """
    data = bytes(buffer)
    position = 0

    while True:
        start = data.find(start_marker, position)
        if start < 0:
            return

        end = data.find(end_marker, start + len(start_marker))
        if end < 0:
            return

        stop = end + len(end_marker)
        yield start, stop
        position = stop


def find_pattern(buffer: BytesLike, pattern: "re.Pattern[bytes]") -> Iterator[re.Match]:
    """Yield non-overlapping regex matches over the raw bytes."""
    return pattern.finditer(bytes(buffer))


def to_printable_string(data: BytesLike) -> str:
    """
    Convert bytes to printable text.

    Bytes outside 32-126 (other than tab, LF, CR) become spaces, then
    every whitespace run collapses to a single space.
    """
    text = bytes(data).translate(_TO_SPACE).decode("ascii")
    return _WHITESPACE_RUN.sub(" ", text)
