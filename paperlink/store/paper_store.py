"""In-memory store of ingested papers, mirrored as paper nodes in the graph."""

import logging
from typing import Optional

from ..schemas.graph import KnowledgeGraphNode, NodeType
from ..schemas.paper import SourcePaper
from .knowledge_graph import KnowledgeGraph

logger = logging.getLogger(__name__)


class SourcePaperStore:
    """
    Papers keyed by id.

    Every add writes a `paper_<id>` node into the graph. No quality checks
    happen here; the extractor flags degraded documents.
    """

    def __init__(self, graph: Optional[KnowledgeGraph] = None, node_importance: float = 0.8):
        self.graph = graph if graph is not None else KnowledgeGraph()
        self.node_importance = node_importance
        self._papers: dict[str, SourcePaper] = {}

    def add(self, paper: SourcePaper) -> SourcePaper:
        """Insert or overwrite a paper and its graph node."""
        if paper.id in self._papers:
            logger.info(f"Overwriting paper {paper.id}")
        self._papers[paper.id] = paper

        self.graph.upsert_node(KnowledgeGraphNode(
            id=paper.node_id,
            label=paper.title,
            type=NodeType.PAPER,
            importance=self.node_importance,
            metadata={
                "description": f"Research paper: {paper.title}",
                "source_papers": [paper.id],
                "extraction_status": paper.extraction_status.value,
            },
        ))
        return paper

    def get(self, paper_id: str) -> Optional[SourcePaper]:
        return self._papers.get(paper_id)

    def all(self) -> list[SourcePaper]:
        return list(self._papers.values())

    def search(self, term: str) -> list[SourcePaper]:
        """Papers whose title, authors or text contain term, ignoring case."""
        return [paper for paper in self._papers.values() if paper.matches(term)]

    def missing(self, paper_ids: list[str]) -> list[str]:
        return [paper_id for paper_id in paper_ids if paper_id not in self._papers]

    def enrich_sections(self, paper_id: str, sections: list[str]) -> SourcePaper:
        """Fill in sections for a paper that was stored without any."""
        paper = self._papers.get(paper_id)
        if paper is None:
            raise KeyError(paper_id)
        if paper.relevant_sections or not sections:
            return paper

        paper = paper.model_copy(update={"relevant_sections": list(sections)})
        self._papers[paper_id] = paper
        return paper

    def __len__(self) -> int:
        return len(self._papers)

    def __contains__(self, paper_id: object) -> bool:
        return paper_id in self._papers
