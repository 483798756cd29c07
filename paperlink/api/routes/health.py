"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ...config.settings import get_settings
from ...rag.orchestrator import RAGOrchestrator
from ..dependencies import get_orchestrator


router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    return {"status": "healthy", "service": "paperlink"}


@router.get("/ready")
async def readiness_check(orchestrator: RAGOrchestrator = Depends(get_orchestrator)):
    """
    Readiness check.

    "degraded" means papers can be ingested and searched but hypothesis
    generation and chat will report a missing model.
    """
    checks = {
        "llm_configured": orchestrator.is_llm_available(),
        "langsmith_configured": orchestrator.settings.is_langsmith_configured(),
    }

    return {
        "status": "ready" if checks["llm_configured"] else "degraded",
        "checks": checks,
        "papers": len(orchestrator.store),
        "hypotheses": len(orchestrator.linker.registry),
    }


@router.get("/config")
async def config_info():
    """Non-sensitive configuration."""
    settings = get_settings()

    return {
        "llm_provider": "azure" if settings.is_azure_configured() else "openai",
        "llm_model": settings.openai_model,
        "langsmith_project": settings.langchain_project if settings.is_langsmith_configured() else None,
        "max_document_chars": settings.max_document_chars,
        "validity_threshold": settings.validity_threshold,
        "confidence_ceiling": settings.confidence_ceiling,
    }
