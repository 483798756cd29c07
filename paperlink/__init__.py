"""
Paperlink Research Layer.

Recovers text from PDF byte buffers without a PDF parser, scores free-text
queries against the recovered content, and grounds research hypotheses in
the papers that support them via an in-memory knowledge graph.

Layers:
- ingestion: byte scanning, tiered text extraction, cleaning, sectioning
- retrieval: relevance scoring and ranked section search
- store: paper store, hypothesis registry, knowledge graph
- linking: hypothesis validation and graph linking
- rag: orchestration around the external text-completion model
"""

__version__ = "0.1.0"
