"""
In-memory stores.

Instances are constructed explicitly and passed to callers; the paper store
and hypothesis linker share one KnowledgeGraph.
"""

from .export import load_papers, save_graph, save_papers
from .hypothesis_registry import HypothesisRegistry
from .knowledge_graph import KnowledgeGraph
from .paper_store import SourcePaperStore

__all__ = [
    "HypothesisRegistry",
    "KnowledgeGraph",
    "SourcePaperStore",
    "load_papers",
    "save_graph",
    "save_papers",
]
