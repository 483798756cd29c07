"""
Extraction result schema.

Carries the cleaned document text together with the strategy tags that
produced it, so callers can tell structural extraction from the ASCII
fallback and degraded documents from healthy ones.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ExtractionStatus(str, Enum):
    """Quality flag for an extracted document."""

    OK = "ok"
    TRUNCATED = "truncated"
    DEGRADED = "degraded"


class ExtractionMethod(str, Enum):
    """Tags recorded in ExtractionResult.methods_used."""

    STREAM = "stream_extraction"
    TEXT_OBJECTS = "text_objects"
    TEXT_BLOCKS = "text_blocks"
    ASCII_FALLBACK = "ascii_fallback"


class ExtractionResult(BaseModel):
    """Text recovered from one raw PDF buffer."""

    text: str = Field(..., description="Cleaned, length-capped document text")
    methods_used: list[str] = Field(
        default_factory=list,
        description="Strategy tags that contributed, in priority order",
    )
    original_byte_length: int = Field(..., ge=0)
    sections: list[str] = Field(
        default_factory=list,
        description="Labelled or inferred excerpts of the cleaned text",
    )
    status: ExtractionStatus = Field(default=ExtractionStatus.OK)
    extraction_time_ms: int = Field(default=0, ge=0)

    @property
    def is_degraded(self) -> bool:
        return self.status == ExtractionStatus.DEGRADED

    @property
    def used_fallback(self) -> bool:
        return ExtractionMethod.ASCII_FALLBACK.value in self.methods_used
