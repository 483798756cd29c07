"""
Retrieval-augmented generation.

    prompts.py         - generation and Q&A prompt templates
    response_parser.py - labeled-field parsing of model output
    orchestrator.py    - ingestion, search, generation and linking front door
"""

from .orchestrator import RAGOrchestrator, build_orchestrator
from .prompts import build_chat_prompt, build_hypothesis_prompt
from .response_parser import ParsedHypothesis, parse_hypothesis_response

__all__ = [
    "RAGOrchestrator",
    "build_orchestrator",
    "build_chat_prompt",
    "build_hypothesis_prompt",
    "ParsedHypothesis",
    "parse_hypothesis_response",
]
