"""Hypothesis validation, generation and lifecycle endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from ...errors import DuplicateHypothesisError, HypothesisNotFoundError, MissingSourceError
from ...rag.orchestrator import RAGOrchestrator
from ...schemas.hypothesis import GenerationResult, Hypothesis, HypothesisStatus, SourceValidation
from ...schemas.retrieval import ChatAnswer
from ..dependencies import get_orchestrator


router = APIRouter(prefix="/hypotheses", tags=["hypotheses"])


# =============================================================================
# Request Models
# =============================================================================


class ValidateRequest(BaseModel):
    text: str = Field(..., min_length=1)
    paper_ids: list[str] = Field(..., min_length=1)


class GenerateRequest(BaseModel):
    query: str = Field(..., min_length=1)
    paper_ids: Optional[list[str]] = Field(
        default=None,
        description="Restrict generation to these papers (default: all stored papers)",
    )


class SubmitRequest(BaseModel):
    """A user-authored hypothesis."""

    id: Optional[str] = None
    title: str
    description: str
    paper_ids: list[str] = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)


class StatusUpdateRequest(BaseModel):
    status: HypothesisStatus


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=list[Hypothesis])
async def list_hypotheses(
    term: Optional[str] = Query(default=None, description="Case-insensitive filter"),
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.hypotheses(term)


@router.post("/validate", response_model=SourceValidation)
async def validate_hypothesis(
    request: ValidateRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    """Check how well the named papers support a hypothesis."""
    try:
        return orchestrator.validate_hypothesis(request.text, request.paper_ids)
    except MissingSourceError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/generate", response_model=GenerationResult)
async def generate_hypothesis(
    request: GenerateRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.generate_hypothesis(request.query, paper_ids=request.paper_ids)


@router.post("", response_model=GenerationResult)
async def submit_hypothesis(
    request: SubmitRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    """Register a user-authored hypothesis if its sources support it."""
    try:
        return orchestrator.submit_hypothesis(
            title=request.title,
            description=request.description,
            paper_ids=request.paper_ids,
            tags=request.tags,
            hypothesis_id=request.id,
        )
    except MissingSourceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateHypothesisError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{hypothesis_id}", response_model=Hypothesis)
async def get_hypothesis(
    hypothesis_id: str,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    try:
        return orchestrator.linker.registry.require(hypothesis_id)
    except HypothesisNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{hypothesis_id}/status", response_model=Hypothesis)
async def update_status(
    hypothesis_id: str,
    request: StatusUpdateRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    try:
        return orchestrator.update_hypothesis_status(hypothesis_id, request.status)
    except HypothesisNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


chat_router = APIRouter(prefix="/chat", tags=["chat"])


@chat_router.post("", response_model=ChatAnswer)
async def ask(
    request: ChatRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    """Answer a question strictly from stored paper content."""
    return orchestrator.answer_question(request.question)
