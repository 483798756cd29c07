"""
Hypothesis schemas.

Defines the registered Hypothesis record plus the value objects produced by
grounding a hypothesis against its source papers.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HypothesisStatus(str, Enum):
    DRAFT = "draft"
    TESTING = "testing"
    VALIDATED = "validated"
    REJECTED = "rejected"


class Evidence(BaseModel):
    """Passage from a source paper backing a hypothesis."""

    paper_id: str
    evidence_text: str
    section: str = "Extracted Content"


class SupportingEvidence(BaseModel):
    """Evidence found during validation, with the paper's word overlap."""

    paper_id: str
    evidence_text: str
    relevance: float = Field(..., ge=0.0, le=1.0)
    section: str = "Extracted Content"


class SourceValidation(BaseModel):
    """Outcome of grounding hypothesis text against source papers."""

    is_valid: bool = False
    confidence: float = Field(default=0.0, ge=0.0, le=100.0)
    supporting_evidence: list[SupportingEvidence] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class HypothesisDraft(BaseModel):
    """A hypothesis ready to be linked into the graph."""

    id: str = Field(default_factory=lambda: f"hyp_{uuid4().hex[:12]}")
    title: str
    description: str
    status: HypothesisStatus = HypothesisStatus.DRAFT
    confidence: float = Field(..., ge=0.0, le=100.0)
    source_paper_ids: list[str] = Field(..., min_length=1)
    extracted_evidence: list[Evidence] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class Hypothesis(HypothesisDraft):
    """A registered hypothesis. Always carries its graph node id."""

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    knowledge_graph_node_id: str

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, description and tags."""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


class GenerationResult(BaseModel):
    """Result of generating or submitting a hypothesis."""

    success: bool
    hypothesis: Optional[Hypothesis] = None
    error: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)
    source_validation: SourceValidation = Field(default_factory=SourceValidation)


def hypothesis_node_id(hypothesis_id: str) -> str:
    return f"hypothesis_{hypothesis_id}"
