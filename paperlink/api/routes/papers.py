"""Paper ingestion, listing and search endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field

from ...errors import EmptyDocumentError
from ...rag.orchestrator import RAGOrchestrator
from ...schemas.paper import SourcePaper
from ...schemas.retrieval import SearchResponse
from ..dependencies import get_orchestrator


router = APIRouter(prefix="/papers", tags=["papers"])


# =============================================================================
# Request Models
# =============================================================================


class AddPaperRequest(BaseModel):
    """A paper whose text was extracted by another service."""

    id: str
    title: str
    authors: list[str] = Field(default_factory=list)
    url: str = ""
    extracted_text: str
    relevant_sections: list[str] = Field(default_factory=list)


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    top_n: Optional[int] = Field(default=None, ge=1, le=100)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/upload", response_model=SourcePaper, status_code=201)
async def upload_pdf(
    request: Request,
    paper_id: str = Query(..., description="Identifier for the uploaded PDF"),
    title: Optional[str] = Query(default=None),
    authors: list[str] = Query(default=[]),
    url: str = Query(default=""),
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    """Ingest a raw PDF sent as the request body."""
    buffer = await request.body()
    try:
        return orchestrator.ingest_pdf(buffer, paper_id, title=title, authors=authors, url=url)
    except EmptyDocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=SourcePaper, status_code=201)
async def add_paper(
    request: AddPaperRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    paper = orchestrator.add_paper(SourcePaper(
        **request.model_dump(),
        citation_style=f"{request.title} (PDF Document)",
    ))
    if paper is None:
        raise HTTPException(status_code=422, detail=f"Paper {request.id} has insufficient content")
    return paper


@router.get("", response_model=list[SourcePaper])
async def list_papers(
    term: Optional[str] = Query(default=None, description="Case-insensitive filter"),
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    if term:
        return orchestrator.store.search(term)
    return orchestrator.papers()


@router.post("/search", response_model=SearchResponse)
async def search_papers(
    request: SearchRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    """Ranked section hits for a free-text query."""
    return orchestrator.search(request.query, top_n=request.top_n)


@router.get("/{paper_id}", response_model=SourcePaper)
async def get_paper(
    paper_id: str,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
):
    paper = orchestrator.store.get(paper_id)
    if paper is None:
        raise HTTPException(status_code=404, detail=f"Paper not found: {paper_id}")
    return paper
