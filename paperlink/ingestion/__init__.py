"""
Heuristic PDF text recovery.

Pipeline:
    byte_scanner.py - delimited block and pattern scanning over raw bytes
    strategies.py   - stream / text-object / text-block / ASCII strategies
    extractor.py    - tiered orchestration with a quality gate
    normalizer.py   - cleaning, length cap, degraded-document flag
    sections.py     - header / paragraph / chunk sectioning
    ingest.py       - raw bytes -> SourcePaper
"""

from .byte_scanner import find_blocks, find_pattern, to_printable_string
from .extractor import TextExtractor, extract_pdf_text
from .ingest import build_source_paper, load_source_paper
from .normalizer import TRUNCATION_MARKER, CleanedDocument, TextNormalizer, normalize
from .sections import SectionSplitter
from .strategies import (
    AsciiFallback,
    StreamExtraction,
    TextBlockExtraction,
    TextExtractionStrategy,
    TextObjectExtraction,
    default_strategies,
)

__all__ = [
    "find_blocks",
    "find_pattern",
    "to_printable_string",
    "TextExtractor",
    "extract_pdf_text",
    "build_source_paper",
    "load_source_paper",
    "TRUNCATION_MARKER",
    "CleanedDocument",
    "TextNormalizer",
    "normalize",
    "SectionSplitter",
    "AsciiFallback",
    "StreamExtraction",
    "TextBlockExtraction",
    "TextExtractionStrategy",
    "TextObjectExtraction",
    "default_strategies",
]
