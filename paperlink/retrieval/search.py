"""
Ranked section search across stored papers.

Each paper contributes up to one "Main Content" hit (an excerpt around the
query terms, scored on the full text) plus one hit per stored section.
Hits below min_relevance are dropped, the rest are sorted by score and
de-duplicated on (paper_id, section_text).
"""

import logging
import re
from typing import Iterable, Optional

from ..schemas.paper import SourcePaper
from ..schemas.retrieval import SearchResponse, SectionHit
from .relevance import RelevanceScorer

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def extract_excerpt(query: str, text: str, max_length: int = 500) -> str:
    """
    Excerpt around the first sentence that mentions a query word.

    Takes one sentence before and two after for context. Falls back to the
    head of the text when no sentence matches.
    """
    words = query.lower().split()
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > 10]

    best_index = next(
        (
            i for i, sentence in enumerate(sentences)
            if any(word in sentence.lower() for word in words)
        ),
        None,
    )

    if best_index is None:
        return text[:max_length] + "..."

    context = sentences[max(0, best_index - 1):best_index + 3]
    excerpt = ". ".join(s.strip() for s in context).strip()

    if len(excerpt) > max_length:
        return excerpt[:max_length] + "..."
    return excerpt


def search_papers(
    query: str,
    papers: Iterable[SourcePaper],
    scorer: Optional[RelevanceScorer] = None,
    top_n: int = 10,
    min_relevance: float = 0.1,
    relevant_threshold: float = 0.3,
) -> SearchResponse:
    """
    Score every paper's full text and sections against a query.

    Args:
        query: Free-text query
        papers: Papers to search
        scorer: Relevance scorer (default weights if omitted)
        top_n: Maximum number of hits returned
        min_relevance: Hits must score strictly above this
        relevant_threshold: Top hit must exceed this for has_relevant_content

    Returns:
        SearchResponse with hits sorted by descending relevance
    """
    scorer = scorer or RelevanceScorer()
    hits: list[SectionHit] = []

    for paper in papers:
        main_score = scorer.score(query, paper.extracted_text)
        if main_score > min_relevance:
            excerpt = extract_excerpt(query, paper.extracted_text)
            hits.append(SectionHit(
                paper_id=paper.id,
                section_text=f"Main Content: {excerpt}",
                relevance_score=main_score,
            ))

        for section in paper.relevant_sections:
            section_score = scorer.score(query, section)
            if section_score > min_relevance:
                hits.append(SectionHit(
                    paper_id=paper.id,
                    section_text=section,
                    relevance_score=section_score,
                ))

    hits.sort(key=lambda hit: hit.relevance_score, reverse=True)

    seen: set[tuple[str, str]] = set()
    unique: list[SectionHit] = []
    for hit in hits:
        key = (hit.paper_id, hit.section_text)
        if key not in seen:
            seen.add(key)
            unique.append(hit)

    results = unique[:top_n]
    logger.info(f"Search {query!r}: {len(hits)} hits, returning {len(results)}")

    return SearchResponse(
        query=query,
        results=results,
        has_relevant_content=bool(results) and results[0].relevance_score > relevant_threshold,
    )
