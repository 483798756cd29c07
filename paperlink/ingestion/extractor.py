"""
Tiered Text Extractor

Main entry point for recovering text from raw PDF bytes.
Coordinates extraction through multiple strategies:
1. Stream extraction (stream ... endstream)
2. Text objects ((string) Tj)
3. Text blocks (BT ... ET)
4. ASCII fallback - only when 1-3 yield under the quality gate
5. Cleaning, length cap and sectioning
"""

import logging
import time
from typing import Optional, Sequence

from ..schemas.extraction import ExtractionResult
from .byte_scanner import BytesLike
from .normalizer import TextNormalizer
from .strategies import AsciiFallback, TextExtractionStrategy, default_strategies

logger = logging.getLogger(__name__)


class ExtractionTimer:
    """Context manager for timing extraction operations."""

    def __init__(self):
        self.start_time: float = 0
        self.elapsed_ms: int = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = int((time.perf_counter() - self.start_time) * 1000)


class TextExtractor:
    """
    Orchestrator for tiered PDF text extraction.

    Runs every structural strategy, space-joins their accepted output and
    keeps it if it clears min_combined_chars. Otherwise the fallback's
    output replaces it. New strategies are added by passing them in
    priority order; the orchestration does not change.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[TextExtractionStrategy]] = None,
        fallback: Optional[TextExtractionStrategy] = None,
        normalizer: Optional[TextNormalizer] = None,
        min_combined_chars: int = 100,
    ):
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.fallback = fallback or AsciiFallback()
        self.normalizer = normalizer or TextNormalizer()
        self.min_combined_chars = min_combined_chars

    def extract_raw(self, buffer: BytesLike) -> tuple[str, list[str]]:
        """
        Run the strategies without cleaning.

        Returns:
            (raw text, tags of the strategies that produced it)
        """
        pieces: list[str] = []
        methods: list[str] = []

        for strategy in self.strategies:
            fragments = strategy.extract(buffer)
            if fragments:
                pieces.extend(fragments)
                methods.append(strategy.name)
                logger.debug(f"{strategy.name}: {len(fragments)} fragments")

        combined = " ".join(pieces)
        if len(combined) >= self.min_combined_chars:
            return combined, methods

        logger.info(
            f"Structural strategies yielded {len(combined)} chars, "
            f"using {self.fallback.name}"
        )
        fallback_text = " ".join(self.fallback.extract(buffer))
        return fallback_text, [self.fallback.name]

    def extract(self, buffer: BytesLike, source_id: str = "document") -> ExtractionResult:
        """
        Extract cleaned text and sections from a PDF buffer.

        Args:
            buffer: Raw PDF bytes
            source_id: Identifier used in the degraded-extraction placeholder

        Returns:
            ExtractionResult with text, sections and strategy tags
        """
        with ExtractionTimer() as timer:
            raw_text, methods = self.extract_raw(buffer)
            document = self.normalizer.clean_document(raw_text, source_id=source_id)

        result = ExtractionResult(
            text=document.text,
            methods_used=methods,
            original_byte_length=len(buffer),
            sections=document.sections,
            status=document.status,
            extraction_time_ms=timer.elapsed_ms,
        )

        logger.info(
            f"Extracted {source_id}: {len(result.text)} chars, "
            f"{len(result.sections)} sections, methods={methods}, "
            f"status={result.status.value}, time={result.extraction_time_ms}ms"
        )
        return result


def extract_pdf_text(buffer: BytesLike, source_id: str = "document") -> ExtractionResult:
    """Convenience function for tiered extraction with default settings."""
    return TextExtractor().extract(buffer, source_id=source_id)
