"""Read-only knowledge graph export."""

from fastapi import APIRouter, Depends

from ...rag.orchestrator import RAGOrchestrator
from ...schemas.graph import GraphExport
from ..dependencies import get_orchestrator


router = APIRouter(prefix="/graph", tags=["graph"])


@router.get("", response_model=GraphExport)
async def export_graph(orchestrator: RAGOrchestrator = Depends(get_orchestrator)):
    return orchestrator.export_graph()
