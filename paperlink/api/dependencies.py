"""Shared FastAPI dependencies."""

from functools import lru_cache

from ..rag.orchestrator import RAGOrchestrator, build_orchestrator


@lru_cache()
def _process_orchestrator() -> RAGOrchestrator:
    return build_orchestrator()


async def get_orchestrator() -> RAGOrchestrator:
    """
    One orchestrator (and one set of in-memory stores) per process.

    Routes and this dependency are coroutines, so every call into the
    orchestrator runs on the event loop one at a time.
    """
    return _process_orchestrator()
