"""Shared fixtures for paperlink tests."""

import pytest

from paperlink.config.settings import Settings, get_settings
from paperlink.linking.linker import HypothesisLinker
from paperlink.observability.tracing import get_tracer
from paperlink.schemas.paper import SourcePaper
from paperlink.store.hypothesis_registry import HypothesisRegistry
from paperlink.store.knowledge_graph import KnowledgeGraph
from paperlink.store.paper_store import SourcePaperStore

_PROVIDER_ENV = (
    "OPENAI_API_KEY",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_DEPLOYMENT_NAME",
    "LANGCHAIN_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """No provider credentials and no cached settings or tracer."""
    for key in _PROVIDER_ENV:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    get_tracer.cache_clear()
    yield
    get_settings.cache_clear()
    get_tracer.cache_clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


def stream_pdf(*bodies: bytes) -> bytes:
    """Minimal PDF-like buffer with one stream object per body."""
    parts = [b"%PDF-1.4\n"]
    for i, body in enumerate(bodies, 1):
        parts.append(b"%d 0 obj\n<< /Length %d >>\nstream\n" % (i, len(body)))
        parts.append(body)
        parts.append(b"\nendstream\nendobj\n")
    parts.append(b"%%EOF\n")
    return b"".join(parts)


@pytest.fixture
def make_pdf():
    return stream_pdf


# =============================================================================
# Papers
# =============================================================================


@pytest.fixture
def expression_paper():
    """Mentions "gene expression" and "phenotype" but never "drives"."""
    return SourcePaper(
        id="paper_a",
        title="Gene Expression in Yeast",
        authors=["A. Rivera", "K. Osei"],
        extracted_text=(
            "Abstract: We measured gene expression in yeast cultures over many "
            "generations. Results: Changes in gene expression correlate with "
            "phenotype shifts across strains."
        ),
        relevant_sections=[
            "Abstract: We measured gene expression in yeast cultures over many generations.",
            "Results: Changes in gene expression correlate with phenotype shifts across strains.",
        ],
    )


@pytest.fixture
def transcript_paper():
    """Shares "expression drives phenotype" without containing "gene"."""
    return SourcePaper(
        id="paper_b",
        title="Transcript Levels in Plants",
        authors=["M. Tanaka"],
        extracted_text=(
            "Transcript expression drives phenotype in flowering plants. "
            "Seasonal light cycles modulate the effect."
        ),
        relevant_sections=[
            "Section 1: Transcript expression drives phenotype in flowering plants.",
        ],
    )


@pytest.fixture
def unrelated_paper():
    return SourcePaper(
        id="paper_c",
        title="Ocean Tides",
        authors=["L. Brandt"],
        extracted_text="Ocean tides respond to lunar cycles and coastal shape.",
        relevant_sections=["Section 1: Ocean tides respond to lunar cycles and coastal shape."],
    )


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def graph():
    return KnowledgeGraph()


@pytest.fixture
def store(graph):
    return SourcePaperStore(graph)


@pytest.fixture
def registry():
    return HypothesisRegistry()


@pytest.fixture
def linker(store, registry, graph):
    return HypothesisLinker(store, registry=registry, graph=graph)
