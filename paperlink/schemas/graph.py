"""
Knowledge graph schemas.

Nodes and connections are plain records; adjacency lives in the
KnowledgeGraph arena and is resolved by id lookup.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    PAPER = "paper"
    HYPOTHESIS = "hypothesis"
    CONCEPT = "concept"
    EVIDENCE = "evidence"
    AUTHOR = "author"


class ConnectionType(str, Enum):
    SUPPORTS = "supports"
    CONTRADICTS = "contradicts"
    RELATES_TO = "relates_to"
    DERIVED_FROM = "derived_from"
    CITES = "cites"


class KnowledgeGraphNode(BaseModel):
    """A paper, hypothesis or concept in the knowledge graph."""

    id: str
    label: str
    type: NodeType
    importance: float = Field(default=0.5, ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)
    connections: list[str] = Field(
        default_factory=list,
        description="Ids of connected nodes (filled from the graph on read)",
    )


class ConnectionEvidence(BaseModel):
    """Evidence attached to a graph connection."""

    paper_id: str
    evidence_text: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class GraphConnection(BaseModel):
    """Directed, weighted edge between two nodes."""

    model_config = {"frozen": True}

    source_id: str
    target_id: str
    type: ConnectionType
    weight: float = Field(..., ge=0.0, le=1.0)
    evidence: tuple[ConnectionEvidence, ...] = ()

    @property
    def connection_id(self) -> str:
        return f"{self.source_id}_to_{self.target_id}"


class GraphExport(BaseModel):
    """Read-only snapshot of the graph for rendering."""

    nodes: list[KnowledgeGraphNode] = Field(default_factory=list)
    connections: list[GraphConnection] = Field(default_factory=list)
