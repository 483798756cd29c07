"""
Retrieval interface.

- relevance_score(): bounded query/text relevance
- search_papers(): ranked, de-duplicated section hits across papers
- extract_excerpt(): query-centred excerpt of a long text
"""

from .relevance import RelevanceScorer, relevance_score
from .search import extract_excerpt, search_papers
from .tokenizers import concept_words, query_words, text_tokens

__all__ = [
    "RelevanceScorer",
    "relevance_score",
    "extract_excerpt",
    "search_papers",
    "concept_words",
    "query_words",
    "text_tokens",
]
