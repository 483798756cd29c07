"""API route modules."""

from .graph import router as graph_router
from .health import router as health_router
from .hypotheses import chat_router
from .hypotheses import router as hypotheses_router
from .papers import router as papers_router

__all__ = ["chat_router", "graph_router", "health_router", "hypotheses_router", "papers_router"]
