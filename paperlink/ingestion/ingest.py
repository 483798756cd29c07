"""
Ingestion boundary.

Turns one raw PDF buffer handed over by a fetching collaborator into a
SourcePaper record: extract -> clean -> section.
"""

import logging
from pathlib import Path
from typing import Optional

from ..errors import EmptyDocumentError
from ..schemas.paper import SourcePaper
from .byte_scanner import BytesLike
from .extractor import TextExtractor

logger = logging.getLogger(__name__)


def build_source_paper(
    buffer: BytesLike,
    paper_id: str,
    title: Optional[str] = None,
    authors: Optional[list[str]] = None,
    url: str = "",
    extractor: Optional[TextExtractor] = None,
) -> SourcePaper:
    """
    Build a SourcePaper from raw PDF bytes.

    Args:
        buffer: Raw PDF bytes (non-empty)
        paper_id: Caller-supplied identifier
        title: Display title, defaults to paper_id
        authors: Author names, if known
        url: Where the document came from
        extractor: Extractor to use (default strategies if omitted)

    Returns:
        SourcePaper with extracted text and sections

    Raises:
        EmptyDocumentError: If the buffer is empty
    """
    if not buffer:
        raise EmptyDocumentError(f"PDF file is empty: {paper_id}")

    extractor = extractor or TextExtractor()
    title = title or paper_id
    result = extractor.extract(buffer, source_id=paper_id)

    return SourcePaper(
        id=paper_id,
        title=title,
        authors=authors or [],
        url=url,
        extracted_text=result.text,
        relevant_sections=result.sections,
        citation_style=f"{title} (PDF Document)",
        extraction_status=result.status,
    )


def load_source_paper(
    pdf_path: Path,
    extractor: Optional[TextExtractor] = None,
) -> SourcePaper:
    """Build a SourcePaper from a PDF on disk, keyed by file stem."""
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    logger.info(f"Loading {pdf_path.name}")
    return build_source_paper(
        pdf_path.read_bytes(),
        paper_id=pdf_path.stem,
        title=pdf_path.stem.replace("_", " "),
        url=pdf_path.resolve().as_uri(),
        extractor=extractor,
    )
