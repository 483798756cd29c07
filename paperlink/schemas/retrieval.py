"""Schemas for query results and chat answers."""

from typing import Optional

from pydantic import BaseModel, Field


class SectionHit(BaseModel):
    """A scored excerpt of one paper."""

    paper_id: str
    section_text: str
    relevance_score: float = Field(..., ge=0.0, le=1.0)


class SearchResponse(BaseModel):
    """Ranked search hits across all stored papers."""

    query: str
    results: list[SectionHit] = Field(default_factory=list)
    has_relevant_content: bool = False


class ChatAnswer(BaseModel):
    """Answer to a free-text question grounded on stored papers."""

    success: bool
    answer: Optional[str] = None
    sources: list[str] = Field(default_factory=list)
    error: Optional[str] = None
