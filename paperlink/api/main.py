"""
FastAPI application for paperlink.

Provides REST endpoints for:
- Ingesting PDFs and externally extracted papers
- Ranked section search
- Hypothesis validation, generation and status changes
- Grounded Q&A
- Knowledge graph export
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..observability.tracing import configure_langsmith
from .routes import chat_router, graph_router, health_router, hypotheses_router, papers_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_langsmith()
    logger.info("paperlink API started")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="paperlink API",
        description="PDF text recovery, section retrieval and hypothesis grounding",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(papers_router)
    app.include_router(hypotheses_router)
    app.include_router(chat_router)
    app.include_router(graph_router)

    @app.get("/")
    async def root():
        return {
            "service": "paperlink",
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "paperlink.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
