"""
LangSmith tracing for the research pipeline.

Provides:
- configure_langsmith(): environment wiring from Settings
- ResearchTracer: spans plus structured runs for searches, validations
  and errors
- traced(): decorator wrapping a function call in a span

Everything is a no-op unless LANGCHAIN_API_KEY is configured.
"""

import logging
import os
from contextlib import contextmanager
from functools import lru_cache, wraps
from typing import Any, Callable, Optional, TypeVar

from langsmith import Client
from langsmith.run_trees import RunTree

from ..config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def configure_langsmith(settings: Optional[Settings] = None) -> Optional[Client]:
    """
    Export LangSmith settings to the environment and build a client.

    Returns:
        LangSmith client, or None when no API key is set
    """
    settings = settings or get_settings()

    if not settings.is_langsmith_configured():
        logger.debug("LangSmith not configured, tracing disabled")
        return None

    os.environ["LANGCHAIN_TRACING_V2"] = str(settings.langchain_tracing_v2).lower()
    os.environ["LANGCHAIN_PROJECT"] = settings.langchain_project
    os.environ["LANGCHAIN_API_KEY"] = settings.langchain_api_key

    logger.info(f"LangSmith tracing enabled for project {settings.langchain_project}")
    return Client()


class ResearchTracer:
    """Structured LangSmith runs for paper search and hypothesis grounding."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._project = self._settings.langchain_project
        self._client: Optional[Client] = None
        self._configured = False

    @property
    def client(self) -> Optional[Client]:
        if not self._configured:
            self._client = configure_langsmith(self._settings)
            self._configured = True
        return self._client

    @property
    def is_enabled(self) -> bool:
        return self.client is not None

    @contextmanager
    def span(self, name: str, run_type: str = "chain", **metadata):
        """
        Open a trace span.

        Args:
            name: Span name
            run_type: LangSmith run type (chain, tool, llm, ...)
            **metadata: Extra fields attached to the run

        Yields:
            RunTree, or None when tracing is disabled
        """
        if not self.is_enabled:
            yield None
            return

        run = RunTree(
            name=name,
            run_type=run_type,
            extra=metadata,
            project_name=self._project,
        )
        try:
            yield run
        except Exception as e:
            run.end(error=str(e))
            run.post()
            raise
        run.end()
        run.post()

    def _record(self, name: str, run_type: str, inputs: dict[str, Any], outputs: dict[str, Any], **extra) -> None:
        if not self.is_enabled:
            return
        self.client.create_run(
            name=name,
            run_type=run_type,
            project_name=self._project,
            inputs=inputs,
            outputs=outputs,
            **extra,
        )

    def log_search(self, query: str, num_papers: int, num_results: int, top_score: float) -> None:
        self._record(
            "paper_search",
            "retriever",
            inputs={"query": query, "num_papers": num_papers},
            outputs={"num_results": num_results, "top_score": top_score},
        )

    def log_validation(
        self,
        hypothesis_text: str,
        paper_ids: list[str],
        is_valid: bool,
        confidence: float,
        num_warnings: int,
    ) -> None:
        """Record the outcome of grounding a hypothesis against its papers."""
        self._record(
            "hypothesis_validation",
            "chain",
            inputs={"hypothesis": hypothesis_text, "paper_ids": paper_ids},
            outputs={
                "is_valid": is_valid,
                "confidence": confidence,
                "num_warnings": num_warnings,
            },
        )

    def log_error(self, error: Exception, context: dict[str, Any]) -> None:
        self._record(
            "error",
            "chain",
            inputs=context,
            outputs={
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
            error=str(error),
        )


@lru_cache()
def get_tracer() -> ResearchTracer:
    """Process-wide tracer."""
    return ResearchTracer()


def traced(name: Optional[str] = None, run_type: str = "chain"):
    """
    Trace each call of the decorated function as a span.

    Example:
        @traced("generate_hypothesis", run_type="llm")
        def generate(query: str) -> GenerationResult:
            ...
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            with get_tracer().span(name or func.__name__, run_type=run_type):
                return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
