"""
Source paper schema.

A SourcePaper is created once per ingested document and owned by the
SourcePaperStore. Hypotheses and graph nodes refer to it by id only.
"""

from pydantic import BaseModel, Field

from .extraction import ExtractionStatus


class SourcePaper(BaseModel):
    """An ingested research paper."""

    id: str = Field(..., description="Unique paper identifier")
    title: str
    authors: list[str] = Field(default_factory=list)
    url: str = ""
    extracted_text: str = ""
    relevant_sections: list[str] = Field(default_factory=list)
    citation_style: str = ""
    extraction_status: ExtractionStatus = Field(default=ExtractionStatus.OK)

    @property
    def node_id(self) -> str:
        """Id of the knowledge graph node representing this paper."""
        return paper_node_id(self.id)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, authors and text."""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.extracted_text.lower()
            or any(needle in author.lower() for author in self.authors)
        )


def paper_node_id(paper_id: str) -> str:
    return f"paper_{paper_id}"
