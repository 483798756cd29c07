"""
Arena-backed knowledge graph.

Nodes and connections are kept in id-indexed dicts; adjacency is a separate
id -> set[id] map. Node records never hold references to each other, so the
`connections` list on a node is materialised from the adjacency map on read.

Nodes are never deleted and adjacency only grows.
"""

import logging
from typing import Any, Iterable, Optional

from ..schemas.graph import GraphConnection, GraphExport, KnowledgeGraphNode

logger = logging.getLogger(__name__)


class KnowledgeGraph:
    """In-memory graph of papers, hypotheses and their relationships."""

    def __init__(self):
        self._nodes: dict[str, KnowledgeGraphNode] = {}
        self._adjacency: dict[str, set[str]] = {}
        self._connections: dict[str, GraphConnection] = {}

    # =========================================================================
    # Nodes
    # =========================================================================

    def upsert_node(self, node: KnowledgeGraphNode) -> KnowledgeGraphNode:
        """Insert or overwrite a node record. Existing adjacency is kept."""
        stored = node.model_copy(update={"connections": []}, deep=True)
        self._nodes[node.id] = stored
        self._adjacency.setdefault(node.id, set())
        return self.get_node(node.id)

    def get_node(self, node_id: str) -> Optional[KnowledgeGraphNode]:
        node = self._nodes.get(node_id)
        if node is None:
            return None
        return node.model_copy(
            update={"connections": sorted(self._adjacency.get(node_id, ()))},
            deep=True,
        )

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def update_node_metadata(self, node_id: str, **values: Any) -> KnowledgeGraphNode:
        """Merge values into a node's metadata."""
        node = self._nodes.get(node_id)
        if node is None:
            raise KeyError(node_id)
        metadata = {**node.metadata, **values}
        self._nodes[node_id] = node.model_copy(update={"metadata": metadata})
        return self.get_node(node_id)

    # =========================================================================
    # Connections
    # =========================================================================

    def missing_endpoints(self, connection: GraphConnection) -> list[str]:
        return [
            node_id
            for node_id in (connection.source_id, connection.target_id)
            if node_id not in self._nodes
        ]

    def add_connection(self, connection: GraphConnection) -> GraphConnection:
        """
        Record a connection and link both endpoints.

        Raises:
            KeyError: if either endpoint is not a node in this graph
        """
        missing = self.missing_endpoints(connection)
        if missing:
            raise KeyError(f"Unknown graph nodes: {', '.join(missing)}")

        self._connections[connection.connection_id] = connection
        self._adjacency[connection.source_id].add(connection.target_id)
        self._adjacency[connection.target_id].add(connection.source_id)
        logger.debug(
            f"Connected {connection.source_id} -> {connection.target_id} "
            f"({connection.type.value})"
        )
        return connection

    def add_connections(self, connections: Iterable[GraphConnection]) -> None:
        """Add several connections; none are added if any endpoint is unknown."""
        connections = list(connections)
        for connection in connections:
            missing = self.missing_endpoints(connection)
            if missing:
                raise KeyError(f"Unknown graph nodes: {', '.join(missing)}")
        for connection in connections:
            self.add_connection(connection)

    def get_connection(self, connection_id: str) -> Optional[GraphConnection]:
        return self._connections.get(connection_id)

    # =========================================================================
    # Enumeration
    # =========================================================================

    def nodes(self) -> list[KnowledgeGraphNode]:
        return [self.get_node(node_id) for node_id in self._nodes]

    def connections(self) -> list[GraphConnection]:
        return list(self._connections.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def export(self) -> GraphExport:
        """Snapshot of every node and connection."""
        return GraphExport(nodes=self.nodes(), connections=self.connections())
