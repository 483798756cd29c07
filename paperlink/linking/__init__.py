"""Hypothesis validation against source papers and knowledge graph linking."""

from .linker import HypothesisLinker

__all__ = ["HypothesisLinker"]
