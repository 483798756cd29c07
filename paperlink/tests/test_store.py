"""Tests for the paper store, hypothesis registry and knowledge graph."""

import pytest

from paperlink.errors import HypothesisNotFoundError
from paperlink.schemas.graph import (
    ConnectionType,
    GraphConnection,
    KnowledgeGraphNode,
    NodeType,
)
from paperlink.schemas.hypothesis import Hypothesis
from paperlink.store.export import load_papers, save_graph, save_papers
from paperlink.store.hypothesis_registry import HypothesisRegistry
from paperlink.store.knowledge_graph import KnowledgeGraph
from paperlink.store.paper_store import SourcePaperStore


def _node(node_id, node_type=NodeType.CONCEPT):
    return KnowledgeGraphNode(id=node_id, label=node_id, type=node_type)


class TestKnowledgeGraph:
    """Tests for the arena graph."""

    def test_add_connection_links_both_endpoints(self, graph):
        graph.upsert_node(_node("a"))
        graph.upsert_node(_node("b"))
        graph.add_connection(GraphConnection(
            source_id="a", target_id="b", type=ConnectionType.RELATES_TO, weight=0.5,
        ))

        assert graph.get_node("a").connections == ["b"]
        assert graph.get_node("b").connections == ["a"]
        assert graph.connection_count == 1
        assert graph.get_connection("a_to_b") is not None

    def test_unknown_endpoint_rejected(self, graph):
        graph.upsert_node(_node("a"))
        with pytest.raises(KeyError, match="ghost"):
            graph.add_connection(GraphConnection(
                source_id="a", target_id="ghost", type=ConnectionType.CITES, weight=0.1,
            ))
        assert graph.connection_count == 0
        assert graph.get_node("a").connections == []

    def test_add_connections_is_all_or_nothing(self, graph):
        graph.upsert_node(_node("a"))
        graph.upsert_node(_node("b"))
        good = GraphConnection(source_id="a", target_id="b", type=ConnectionType.CITES, weight=0.1)
        bad = GraphConnection(source_id="a", target_id="zzz", type=ConnectionType.CITES, weight=0.1)

        with pytest.raises(KeyError):
            graph.add_connections([good, bad])
        assert graph.connection_count == 0

    def test_upsert_keeps_adjacency(self, graph):
        graph.upsert_node(_node("a"))
        graph.upsert_node(_node("b"))
        graph.add_connection(GraphConnection(
            source_id="a", target_id="b", type=ConnectionType.SUPPORTS, weight=1.0,
        ))

        graph.upsert_node(KnowledgeGraphNode(id="a", label="renamed", type=NodeType.CONCEPT))

        node = graph.get_node("a")
        assert node.label == "renamed"
        assert node.connections == ["b"]
        assert graph.node_count == 2

    def test_returned_nodes_are_copies(self, graph):
        graph.upsert_node(_node("a"))
        node = graph.get_node("a")
        node.connections.append("mutated")
        node.metadata["x"] = 1

        assert graph.get_node("a").connections == []
        assert graph.get_node("a").metadata == {}

    def test_update_node_metadata(self, graph):
        graph.upsert_node(KnowledgeGraphNode(id="a", label="a", type=NodeType.HYPOTHESIS, metadata={"k": 1}))
        graph.update_node_metadata("a", status="testing")
        assert graph.get_node("a").metadata == {"k": 1, "status": "testing"}

    def test_export(self, graph):
        graph.upsert_node(_node("a"))
        graph.upsert_node(_node("b"))
        graph.add_connection(GraphConnection(
            source_id="a", target_id="b", type=ConnectionType.RELATES_TO, weight=0.3,
        ))

        export = graph.export()
        assert {n.id for n in export.nodes} == {"a", "b"}
        assert all(n.connections for n in export.nodes)
        assert len(export.connections) == 1


class TestSourcePaperStore:
    """Tests for the paper store."""

    def test_add_creates_paper_node(self, store, graph, expression_paper):
        store.add(expression_paper)

        node = graph.get_node("paper_paper_a")
        assert node.type == NodeType.PAPER
        assert node.importance == 0.8
        assert node.label == "Gene Expression in Yeast"
        assert node.metadata["description"] == "Research paper: Gene Expression in Yeast"
        assert node.metadata["source_papers"] == ["paper_a"]

    def test_overwrite_by_id(self, store, graph, expression_paper):
        store.add(expression_paper)
        store.add(expression_paper.model_copy(update={"title": "Revised"}))

        assert len(store) == 1
        assert store.get("paper_a").title == "Revised"
        assert graph.get_node("paper_paper_a").label == "Revised"
        assert graph.node_count == 1

    def test_get_missing(self, store):
        assert store.get("nope") is None
        assert "nope" not in store

    def test_all(self, store, expression_paper, transcript_paper):
        store.add(expression_paper)
        store.add(transcript_paper)
        assert [p.id for p in store.all()] == ["paper_a", "paper_b"]

    def test_search_is_case_insensitive(self, store, expression_paper, transcript_paper):
        store.add(expression_paper)
        store.add(transcript_paper)

        assert [p.id for p in store.search("YEAST")] == ["paper_a"]
        assert [p.id for p in store.search("tanaka")] == ["paper_b"]
        assert [p.id for p in store.search("transcript levels")] == ["paper_b"]
        assert store.search("nothing like this") == []

    def test_no_quality_gate(self, store):
        from paperlink.schemas.paper import SourcePaper

        store.add(SourcePaper(id="empty", title="Empty"))
        assert "empty" in store

    def test_enrich_sections_only_when_empty(self, store, expression_paper):
        store.add(expression_paper.model_copy(update={"relevant_sections": []}))

        enriched = store.enrich_sections("paper_a", ["Section 1: new"])
        assert enriched.relevant_sections == ["Section 1: new"]

        again = store.enrich_sections("paper_a", ["Section 1: other"])
        assert again.relevant_sections == ["Section 1: new"]

    def test_enrich_unknown_paper(self, store):
        with pytest.raises(KeyError):
            store.enrich_sections("ghost", ["x"])


class TestHypothesisRegistry:
    """Tests for the hypothesis registry."""

    def _hypothesis(self):
        return Hypothesis(
            id="h1",
            title="T",
            description="D",
            confidence=50,
            source_paper_ids=["p"],
            knowledge_graph_node_id="hypothesis_h1",
        )

    def test_add_and_get(self):
        registry = HypothesisRegistry()
        registry.add(self._hypothesis())

        assert "h1" in registry
        assert registry.get("h1").title == "T"
        assert len(registry) == 1

    def test_search_matches_title_description_and_tags(self):
        registry = HypothesisRegistry()
        registry.add(self._hypothesis().model_copy(update={
            "title": "Kinase activity",
            "description": "Phosphorylation rises under stress",
            "tags": ["Signalling"],
        }))

        assert len(registry.search("KINASE")) == 1
        assert len(registry.search("stress")) == 1
        assert len(registry.search("signal")) == 1
        assert registry.search("tides") == []

    def test_require_missing(self):
        with pytest.raises(HypothesisNotFoundError, match="ghost"):
            HypothesisRegistry().require("ghost")

    def test_update_replaces_record(self):
        registry = HypothesisRegistry()
        original = registry.add(self._hypothesis())
        updated = registry.update("h1", title="New")

        assert updated.title == "New"
        assert original.title == "T"
        assert registry.get("h1").title == "New"


class TestExport:
    """Tests for JSONL snapshots."""

    def test_papers_round_trip(self, tmp_path, expression_paper, transcript_paper):
        path = tmp_path / "out" / "papers.jsonl"
        assert save_papers([expression_paper, transcript_paper], path) == 2
        assert load_papers(path) == [expression_paper, transcript_paper]

    def test_graph_records(self, tmp_path):
        import jsonlines

        graph = KnowledgeGraph()
        graph.upsert_node(_node("a"))
        graph.upsert_node(_node("b"))
        graph.add_connection(GraphConnection(
            source_id="a", target_id="b", type=ConnectionType.DERIVED_FROM, weight=0.8,
        ))

        path = tmp_path / "graph.jsonl"
        save_graph(graph.export(), path)

        with jsonlines.open(path) as reader:
            records = list(reader)
        assert [r["record"] for r in records] == ["node", "node", "connection"]
        assert records[2]["id"] == "a_to_b"
        assert records[2]["type"] == "derived_from"
