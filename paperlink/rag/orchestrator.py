"""
Retrieval-augmented hypothesis generation over stored papers.

Pipeline for generate_hypothesis():
1. Select source papers (explicit ids, or every stored paper)
2. Build a prompt from at most max_source_papers papers
3. Ask the chat model for a labeled response
4. Parse HYPOTHESIS / CONFIDENCE / LIMITATIONS / SOURCES
5. Ground the hypothesis text against the papers
6. Link the accepted hypothesis into the knowledge graph

Every failure along the way is reported as a GenerationResult with
success=False and a readable reason; only integrity errors raise.
"""

import logging
from typing import Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from ..config.llm_providers import get_llm
from ..config.settings import Settings, get_settings
from ..ingestion.byte_scanner import BytesLike
from ..ingestion.extractor import TextExtractor
from ..ingestion.ingest import build_source_paper
from ..ingestion.normalizer import TextNormalizer
from ..ingestion.sections import SectionSplitter
from ..ingestion.strategies import default_strategies
from ..linking.linker import HypothesisLinker
from ..observability.tracing import get_tracer, traced
from ..retrieval.relevance import RelevanceScorer
from ..retrieval.search import search_papers
from ..schemas.graph import GraphExport
from ..schemas.hypothesis import (
    Evidence,
    GenerationResult,
    Hypothesis,
    HypothesisDraft,
    HypothesisStatus,
    SourceValidation,
)
from ..schemas.paper import SourcePaper
from ..schemas.retrieval import ChatAnswer, SearchResponse
from ..store.hypothesis_registry import HypothesisRegistry
from ..store.knowledge_graph import KnowledgeGraph
from ..store.paper_store import SourcePaperStore
from .prompts import (
    CHAT_SYSTEM_PROMPT,
    HYPOTHESIS_SYSTEM_PROMPT,
    INSUFFICIENT_DATA,
    build_chat_prompt,
    build_hypothesis_prompt,
)
from .response_parser import parse_hypothesis_response

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "PDF-Based Hypothesis"
GENERATED_TAGS = ["RAG-generated", "source-based"]
FALLBACK_MODEL_CONFIDENCE = 85
MIN_PAPER_CHARS = 10


class RAGOrchestrator:
    """
    Front door for ingestion, search and hypothesis work.

    All stores are passed in or created per instance; nothing is shared
    between orchestrators. The chat model is created lazily from settings
    unless one is injected.
    """

    def __init__(
        self,
        store: SourcePaperStore,
        linker: HypothesisLinker,
        extractor: Optional[TextExtractor] = None,
        scorer: Optional[RelevanceScorer] = None,
        llm: Optional[BaseChatModel] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store
        self.linker = linker
        self.extractor = extractor or TextExtractor()
        self.scorer = scorer or RelevanceScorer()
        self._llm = llm

    # =========================================================================
    # Model access
    # =========================================================================

    @property
    def llm(self) -> BaseChatModel:
        """Chat model (lazy loaded). Raises LLMNotConfiguredError."""
        if self._llm is None:
            self._llm = get_llm(settings=self.settings)
        return self._llm

    def is_llm_available(self) -> bool:
        return self._llm is not None or self.settings.is_llm_configured()

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        response = self.llm.invoke([
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ])
        content = response.content
        return content if isinstance(content, str) else str(content)

    # =========================================================================
    # Papers
    # =========================================================================

    def ingest_pdf(
        self,
        buffer: BytesLike,
        paper_id: str,
        title: Optional[str] = None,
        authors: Optional[list[str]] = None,
        url: str = "",
    ) -> SourcePaper:
        """
        Extract a PDF buffer into a SourcePaper and store it.

        Raises:
            EmptyDocumentError: If the buffer is empty
        """
        paper = build_source_paper(
            buffer,
            paper_id=paper_id,
            title=title,
            authors=authors,
            url=url,
            extractor=self.extractor,
        )
        self.store.add(paper)
        logger.info(
            f"Ingested {paper.id}: {len(paper.extracted_text)} chars, "
            f"{len(paper.relevant_sections)} sections ({paper.extraction_status.value})"
        )
        return paper

    def add_paper(self, paper: SourcePaper) -> Optional[SourcePaper]:
        """
        Store a paper whose text was extracted elsewhere.

        Text is normalised; sections are derived when the paper has none.
        Papers with almost no text are skipped.
        """
        if len(paper.extracted_text.strip()) < MIN_PAPER_CHARS:
            logger.warning(f"Skipping {paper.id}: insufficient content")
            return None

        normalizer = self.extractor.normalizer
        text = normalizer.normalize(paper.extracted_text)
        stored = self.store.add(paper.model_copy(update={"extracted_text": text}))

        if not stored.relevant_sections:
            stored = self.store.enrich_sections(stored.id, normalizer.splitter.split(text))

        logger.info(
            f"Added {stored.id}: {len(stored.extracted_text)} chars, "
            f"{len(stored.relevant_sections)} sections"
        )
        return stored

    def papers(self) -> list[SourcePaper]:
        return self.store.all()

    def hypotheses(self, term: Optional[str] = None) -> list[Hypothesis]:
        """Registered hypotheses, optionally filtered by a case-insensitive term."""
        if term:
            return self.linker.registry.search(term)
        return self.linker.registry.all()

    # =========================================================================
    # Retrieval
    # =========================================================================

    def search(self, query: str, top_n: Optional[int] = None) -> SearchResponse:
        """Ranked section hits across every stored paper."""
        response = search_papers(
            query,
            self.store.all(),
            scorer=self.scorer,
            top_n=top_n or self.settings.search_top_n,
            min_relevance=self.settings.min_relevance,
            relevant_threshold=self.settings.relevant_content_threshold,
        )
        get_tracer().log_search(
            query=query,
            num_papers=len(self.store),
            num_results=len(response.results),
            top_score=response.results[0].relevance_score if response.results else 0.0,
        )
        return response

    # =========================================================================
    # Hypotheses
    # =========================================================================

    def validate_hypothesis(self, text: str, paper_ids: Sequence[str]) -> SourceValidation:
        """
        Ground hypothesis text against stored papers.

        Raises:
            MissingSourceError: If any paper id is not stored
        """
        validation = self.linker.validate_ids(text, paper_ids)
        get_tracer().log_validation(
            hypothesis_text=text,
            paper_ids=list(paper_ids),
            is_valid=validation.is_valid,
            confidence=validation.confidence,
            num_warnings=len(validation.warnings),
        )
        return validation

    def _select_papers(self, paper_ids: Optional[Sequence[str]]) -> list[SourcePaper]:
        if paper_ids is None:
            return self.store.all()
        return [self.store.get(pid) for pid in paper_ids if pid in self.store]

    @traced("generate_hypothesis", run_type="chain")
    def generate_hypothesis(
        self,
        query: str,
        paper_ids: Optional[Sequence[str]] = None,
    ) -> GenerationResult:
        """
        Generate a hypothesis from stored papers only.

        Args:
            query: Research question
            paper_ids: Restrict to these papers (unknown ids are ignored)

        Returns:
            GenerationResult; success=False carries the reason in error
        """
        warnings: list[str] = []
        papers = self._select_papers(paper_ids)

        if not papers:
            return GenerationResult(
                success=False,
                error="No PDF sources available. Please upload and process research papers first.",
                warnings=["Critical: Cannot generate hypotheses without source papers"],
            )

        if self.settings.require_multiple_sources and len(papers) < 2:
            warnings.append(
                "Warning: Only one source paper available. "
                "Research hypotheses require multiple sources for validation."
            )

        papers = papers[:self.settings.max_source_papers]

        if not self.is_llm_available():
            return GenerationResult(
                success=False,
                error="No LLM provider configured. Cannot generate hypotheses.",
                warnings=warnings,
            )

        prompt = build_hypothesis_prompt(
            query,
            papers,
            max_papers=self.settings.max_source_papers,
            max_text_chars=self.settings.prompt_text_chars,
            max_sections=self.settings.prompt_max_sections,
        )

        try:
            response = self._complete(HYPOTHESIS_SYSTEM_PROMPT, prompt)
        except Exception as e:
            logger.exception(f"Hypothesis generation failed for query {query!r}")
            get_tracer().log_error(e, {"query": query, "paper_ids": [p.id for p in papers]})
            return GenerationResult(success=False, error=str(e), warnings=warnings)

        # Only the hypothesis body counts; LIMITATIONS may say "insufficient data"
        parsed = parse_hypothesis_response(response)
        if INSUFFICIENT_DATA in parsed.hypothesis.upper():
            return GenerationResult(
                success=False,
                error="Source papers contain insufficient data for this query.",
                warnings=warnings,
            )

        validation = self.linker.validate(parsed.hypothesis, papers)
        get_tracer().log_validation(
            hypothesis_text=parsed.hypothesis,
            paper_ids=[p.id for p in papers],
            is_valid=validation.is_valid,
            confidence=validation.confidence,
            num_warnings=len(validation.warnings),
        )

        if validation.confidence < self.settings.min_confidence_threshold:
            warnings.append(
                f"Low confidence ({validation.confidence:.0f}%). "
                "Consider adding more source papers."
            )

        if not validation.is_valid:
            return GenerationResult(
                success=False,
                error="Generated hypothesis not sufficiently supported by source papers.",
                warnings=warnings + validation.warnings,
                source_validation=validation,
            )

        draft = HypothesisDraft(
            title=parsed.title or DEFAULT_TITLE,
            description=parsed.hypothesis,
            confidence=min(validation.confidence, parsed.confidence or FALLBACK_MODEL_CONFIDENCE),
            source_paper_ids=[p.id for p in papers],
            extracted_evidence=[
                Evidence(paper_id=ev.paper_id, evidence_text=ev.evidence_text)
                for ev in validation.supporting_evidence
            ],
            tags=list(GENERATED_TAGS),
        )
        hypothesis = self.linker.create_hypothesis(draft)

        return GenerationResult(
            success=True,
            hypothesis=hypothesis,
            warnings=warnings,
            source_validation=validation,
        )

    def submit_hypothesis(
        self,
        title: str,
        description: str,
        paper_ids: Sequence[str],
        tags: Optional[list[str]] = None,
        hypothesis_id: Optional[str] = None,
    ) -> GenerationResult:
        """
        Register a user-authored hypothesis if its sources support it.

        Raises:
            MissingSourceError: If any paper id is not stored
            DuplicateHypothesisError: If hypothesis_id is already registered
        """
        validation = self.validate_hypothesis(description, paper_ids)

        if not validation.is_valid:
            return GenerationResult(
                success=False,
                error="Hypothesis not sufficiently supported by source papers.",
                warnings=list(validation.warnings),
                source_validation=validation,
            )

        fields = dict(
            title=title,
            description=description,
            confidence=validation.confidence,
            source_paper_ids=list(paper_ids),
            extracted_evidence=[
                Evidence(paper_id=ev.paper_id, evidence_text=ev.evidence_text)
                for ev in validation.supporting_evidence
            ],
            tags=tags or [],
        )
        if hypothesis_id:
            fields["id"] = hypothesis_id

        hypothesis = self.linker.create_hypothesis(HypothesisDraft(**fields))
        return GenerationResult(
            success=True,
            hypothesis=hypothesis,
            warnings=list(validation.warnings),
            source_validation=validation,
        )

    def update_hypothesis_status(self, hypothesis_id: str, status: HypothesisStatus) -> Hypothesis:
        return self.linker.update_status(hypothesis_id, status)

    # =========================================================================
    # Chat
    # =========================================================================

    @traced("answer_question", run_type="chain")
    def answer_question(self, question: str) -> ChatAnswer:
        """Answer a question from the top search hits, citing paper titles."""
        if len(self.store) == 0:
            return ChatAnswer(
                success=False,
                error="No PDF content available. Please upload research papers first.",
            )

        if not self.is_llm_available():
            return ChatAnswer(success=False, error="No LLM provider configured.")

        search = self.search(question)
        if not search.has_relevant_content:
            return ChatAnswer(
                success=False,
                error=f'No relevant content found for "{question}". '
                      "Please ask about content from your uploaded PDFs.",
            )

        hits = search.results[:self.settings.chat_context_sections]
        titles = {paper.id: paper.title for paper in self.store.all()}
        prompt = build_chat_prompt(question, hits, titles)

        try:
            answer = self._complete(CHAT_SYSTEM_PROMPT, prompt)
        except Exception as e:
            logger.exception(f"Chat completion failed for question {question!r}")
            get_tracer().log_error(e, {"question": question})
            return ChatAnswer(success=False, error=str(e))

        sources = [titles.get(hit.paper_id, "Unknown Paper") for hit in hits]
        return ChatAnswer(
            success=True,
            answer=f"{answer}\n\n**Sources:** {', '.join(sources)}",
            sources=sources,
        )

    # =========================================================================
    # Graph
    # =========================================================================

    def export_graph(self) -> GraphExport:
        return self.store.graph.export()


def build_orchestrator(
    settings: Optional[Settings] = None,
    llm: Optional[BaseChatModel] = None,
) -> RAGOrchestrator:
    """Wire a fresh orchestrator, stores and graph from settings."""
    settings = settings or get_settings()

    graph = KnowledgeGraph()
    store = SourcePaperStore(graph, node_importance=settings.paper_node_importance)
    linker = HypothesisLinker(
        store,
        registry=HypothesisRegistry(),
        graph=graph,
        validity_threshold=settings.validity_threshold,
        confidence_ceiling=settings.confidence_ceiling,
        edge_weight=settings.derived_from_weight,
    )
    splitter = SectionSplitter(
        max_chars=settings.section_max_chars,
        min_chars=settings.min_section_chars,
        max_paragraphs=settings.max_paragraph_sections,
        max_chunks=settings.max_chunk_sections,
    )
    extractor = TextExtractor(
        strategies=default_strategies(min_stream_chars=settings.min_stream_chars),
        normalizer=TextNormalizer(
            max_chars=settings.max_document_chars,
            min_chars=settings.min_document_chars,
            splitter=splitter,
        ),
        min_combined_chars=settings.min_combined_chars,
    )

    return RAGOrchestrator(
        store=store,
        linker=linker,
        extractor=extractor,
        llm=llm,
        settings=settings,
    )
