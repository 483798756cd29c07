"""
Prompt templates for hypothesis generation and grounded Q&A.

The model is only ever shown text recovered from stored papers; both
prompts forbid outside knowledge.
"""

from typing import Sequence

from ..schemas.paper import SourcePaper
from ..schemas.retrieval import SectionHit

TRUNCATION_NOTE = "... [truncated for efficiency]"
INSUFFICIENT_DATA = "INSUFFICIENT DATA"

HYPOTHESIS_SYSTEM_PROMPT = (
    "You are a medical research analyst. Generate hypotheses ONLY from provided "
    "PDF sources. Never hallucinate or add external information."
)

CHAT_SYSTEM_PROMPT = "Answer strictly from provided PDF content. No external knowledge."

HYPOTHESIS_PROMPT_TEMPLATE = """MEDICAL RESEARCH ANALYSIS - ZERO HALLUCINATION MODE

STRICT RULES:
1. Use ONLY the PDF content below
2. NO external knowledge
3. Cite specific papers for claims
4. If insufficient data, state "{insufficient}"

PDF SOURCES:
{sources}

QUERY: {query}

Provide:
HYPOTHESIS: [Based only on above PDFs]
EVIDENCE: [Direct quotes with paper citations]
CONFIDENCE: [0-95% based on evidence strength]
LIMITATIONS: [Missing info/gaps]
SOURCES: [Paper citations that support hypothesis]
"""

CHAT_PROMPT_TEMPLATE = """You are a research assistant that ONLY answers based on provided PDF content.

PDF CONTENT:
{context}

USER QUESTION: {question}

Answer based ONLY on the PDF content above. If insufficient information, state that clearly."""


def format_source(index: int, paper: SourcePaper, max_text_chars: int = 2000, max_sections: int = 3) -> str:
    """One numbered entry of the PDF SOURCES block."""
    content = paper.extracted_text
    if len(content) > max_text_chars:
        content = content[:max_text_chars] + TRUNCATION_NOTE

    return (
        f"[{index}] {paper.title}\n"
        f"Authors: {', '.join(paper.authors)}\n"
        f"Content: {content}\n"
        f"Sections: {'; '.join(paper.relevant_sections[:max_sections])}\n"
    )


def build_hypothesis_prompt(
    query: str,
    papers: Sequence[SourcePaper],
    max_papers: int = 5,
    max_text_chars: int = 2000,
    max_sections: int = 3,
) -> str:
    """
    Build the generation prompt from at most max_papers papers.

    Args:
        query: Research question from the user
        papers: Candidate source papers, in priority order
        max_papers: Papers beyond this are left out
        max_text_chars: Per-paper text cap
        max_sections: Per-paper section cap

    Returns:
        Prompt text for the user message
    """
    sources = "\n".join(
        format_source(i, paper, max_text_chars, max_sections)
        for i, paper in enumerate(papers[:max_papers], start=1)
    )
    return HYPOTHESIS_PROMPT_TEMPLATE.format(
        insufficient=INSUFFICIENT_DATA,
        sources=sources,
        query=query,
    )


def build_chat_prompt(question: str, hits: Sequence[SectionHit], titles: dict[str, str]) -> str:
    """Q&A prompt with each hit attributed to its paper title."""
    context = "\n\n".join(
        f"**From: {titles.get(hit.paper_id, 'Unknown')}**\n{hit.section_text}"
        for hit in hits
    )
    return CHAT_PROMPT_TEMPLATE.format(context=context, question=question)
