"""
Hypothesis grounding and graph linking.

Flow:
1. validate(): measure how much of a hypothesis's vocabulary appears in
   each claimed source paper
2. create_hypothesis(): check every reference, then write the hypothesis
   node, one derived_from edge per paper, and the registry record
3. update_status(): move a registered hypothesis through its lifecycle
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..errors import DuplicateHypothesisError, MissingSourceError
from ..retrieval.tokenizers import concept_words, text_tokens
from ..schemas.graph import (
    ConnectionEvidence,
    ConnectionType,
    GraphConnection,
    KnowledgeGraphNode,
    NodeType,
)
from ..schemas.hypothesis import (
    Hypothesis,
    HypothesisDraft,
    HypothesisStatus,
    SourceValidation,
    SupportingEvidence,
    hypothesis_node_id,
)
from ..schemas.paper import SourcePaper, paper_node_id
from ..store.hypothesis_registry import HypothesisRegistry
from ..store.knowledge_graph import KnowledgeGraph
from ..store.paper_store import SourcePaperStore

logger = logging.getLogger(__name__)

DEFAULT_VALIDITY_THRESHOLD = 0.3
DEFAULT_CONFIDENCE_CEILING = 95.0
DEFAULT_EDGE_WEIGHT = 0.8


class HypothesisLinker:
    """
    Grounds hypotheses in their source papers and links them into the graph.

    The store, registry and graph are shared with the rest of the process;
    the linker owns no state of its own.
    """

    def __init__(
        self,
        store: SourcePaperStore,
        registry: Optional[HypothesisRegistry] = None,
        graph: Optional[KnowledgeGraph] = None,
        validity_threshold: float = DEFAULT_VALIDITY_THRESHOLD,
        confidence_ceiling: float = DEFAULT_CONFIDENCE_CEILING,
        edge_weight: float = DEFAULT_EDGE_WEIGHT,
    ):
        self.store = store
        self.registry = registry if registry is not None else HypothesisRegistry()
        self.graph = graph if graph is not None else store.graph
        self.validity_threshold = validity_threshold
        self.confidence_ceiling = confidence_ceiling
        self.edge_weight = edge_weight

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, hypothesis_text: str, papers: Sequence[SourcePaper]) -> SourceValidation:
        """
        Check a hypothesis's wording against the papers it claims as sources.

        Per paper, relevance is the number of hypothesis words longer than
        three characters found in the paper text over the total number of
        hypothesis words. Relevance is averaged over all papers.

        Args:
            hypothesis_text: Hypothesis statement
            papers: Claimed source papers

        Returns:
            SourceValidation; never raises for weak support
        """
        if not papers:
            return SourceValidation(
                is_valid=False,
                confidence=0.0,
                warnings=["No source papers provided for validation"],
            )

        total_words = len(text_tokens(hypothesis_text))
        concepts = concept_words(hypothesis_text)

        supporting: list[SupportingEvidence] = []
        warnings: list[str] = []
        total_relevance = 0.0

        for paper in papers:
            paper_text = paper.extracted_text.lower()
            found = [word for word in concepts if word in paper_text]

            if not found:
                warnings.append(f"No supporting evidence found in paper: {paper.title}")
                continue

            relevance = len(found) / total_words
            total_relevance += relevance

            section = next(
                (s for s in paper.relevant_sections if found[0] in s.lower()),
                None,
            )
            if section is not None:
                supporting.append(SupportingEvidence(
                    paper_id=paper.id,
                    evidence_text=section,
                    relevance=relevance,
                ))

        avg_relevance = total_relevance / len(papers)
        confidence = min(avg_relevance * 100, self.confidence_ceiling)

        logger.info(
            f"Validated hypothesis against {len(papers)} papers: "
            f"avg relevance {avg_relevance:.2f}, {len(warnings)} warnings"
        )

        return SourceValidation(
            is_valid=avg_relevance > self.validity_threshold,
            confidence=confidence,
            supporting_evidence=supporting,
            warnings=warnings,
        )

    def validate_ids(self, hypothesis_text: str, paper_ids: Sequence[str]) -> SourceValidation:
        """Validate against stored papers, raising if any id is unknown."""
        missing = self.store.missing(list(paper_ids))
        if missing:
            raise MissingSourceError(missing)
        return self.validate(hypothesis_text, [self.store.get(pid) for pid in paper_ids])

    # =========================================================================
    # Linking
    # =========================================================================

    def create_hypothesis(self, draft: HypothesisDraft) -> Hypothesis:
        """
        Register a hypothesis and link it to each of its source papers.

        Either the node, every edge and the registry record are written, or
        nothing is.

        Raises:
            MissingSourceError: a source paper id is not in the store
            DuplicateHypothesisError: the hypothesis id is already registered
        """
        missing = self.store.missing(draft.source_paper_ids)
        if missing:
            raise MissingSourceError(missing)

        # The graph may be a different instance from store.graph
        unlinked = [
            paper_id for paper_id in dict.fromkeys(draft.source_paper_ids)
            if not self.graph.has_node(paper_node_id(paper_id))
        ]
        if unlinked:
            raise MissingSourceError(unlinked)

        node_id = hypothesis_node_id(draft.id)
        if draft.id in self.registry or self.graph.has_node(node_id):
            raise DuplicateHypothesisError(draft.id)

        hypothesis = Hypothesis(**draft.model_dump(), knowledge_graph_node_id=node_id)
        connections = [
            self._derived_from(hypothesis, paper_id)
            for paper_id in dict.fromkeys(hypothesis.source_paper_ids)
        ]

        self.graph.upsert_node(KnowledgeGraphNode(
            id=node_id,
            label=hypothesis.title,
            type=NodeType.HYPOTHESIS,
            importance=hypothesis.confidence / 100,
            metadata={
                "source_papers": list(hypothesis.source_paper_ids),
                "confidence": hypothesis.confidence,
                "status": hypothesis.status.value,
                "description": hypothesis.description,
            },
        ))
        self.graph.add_connections(connections)
        self.registry.add(hypothesis)

        logger.info(
            f"Linked hypothesis {hypothesis.id} to {len(connections)} papers "
            f"(confidence {hypothesis.confidence:.1f})"
        )
        return hypothesis

    def _derived_from(self, hypothesis: Hypothesis, paper_id: str) -> GraphConnection:
        evidence = tuple(
            ConnectionEvidence(
                paper_id=item.paper_id,
                evidence_text=item.evidence_text,
                confidence=hypothesis.confidence / 100,
            )
            for item in hypothesis.extracted_evidence
            if item.paper_id == paper_id
        )
        return GraphConnection(
            source_id=hypothesis.knowledge_graph_node_id,
            target_id=paper_node_id(paper_id),
            type=ConnectionType.DERIVED_FROM,
            weight=self.edge_weight,
            evidence=evidence,
        )

    def update_status(self, hypothesis_id: str, status: HypothesisStatus) -> Hypothesis:
        """
        Change a hypothesis's status and mirror it on its graph node.

        Raises:
            HypothesisNotFoundError: no hypothesis with that id
        """
        current = self.registry.require(hypothesis_id)
        hypothesis = self.registry.update(
            hypothesis_id,
            status=status,
            updated_at=datetime.now(timezone.utc),
        )
        self.graph.update_node_metadata(
            hypothesis.knowledge_graph_node_id,
            status=status.value,
            confidence=hypothesis.confidence,
        )
        logger.info(f"Hypothesis {hypothesis_id}: {current.status.value} -> {status.value}")
        return hypothesis
