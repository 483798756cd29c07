"""LangSmith tracing."""

from .tracing import ResearchTracer, configure_langsmith, get_tracer, traced

__all__ = ["ResearchTracer", "configure_langsmith", "get_tracer", "traced"]
