"""
Pydantic schemas for papers, hypotheses, graph records and results.

Hypotheses and graph connections refer to papers by id so every reference
can be resolved through the owning store.
"""

from .extraction import ExtractionMethod, ExtractionResult, ExtractionStatus
from .graph import (
    ConnectionEvidence,
    ConnectionType,
    GraphConnection,
    GraphExport,
    KnowledgeGraphNode,
    NodeType,
)
from .hypothesis import (
    Evidence,
    GenerationResult,
    Hypothesis,
    HypothesisDraft,
    HypothesisStatus,
    SourceValidation,
    SupportingEvidence,
    hypothesis_node_id,
)
from .paper import SourcePaper, paper_node_id
from .retrieval import ChatAnswer, SearchResponse, SectionHit

__all__ = [
    "ExtractionMethod",
    "ExtractionResult",
    "ExtractionStatus",
    "ConnectionEvidence",
    "ConnectionType",
    "GraphConnection",
    "GraphExport",
    "KnowledgeGraphNode",
    "NodeType",
    "Evidence",
    "GenerationResult",
    "Hypothesis",
    "HypothesisDraft",
    "HypothesisStatus",
    "SourceValidation",
    "SupportingEvidence",
    "hypothesis_node_id",
    "SourcePaper",
    "paper_node_id",
    "ChatAnswer",
    "SearchResponse",
    "SectionHit",
]
