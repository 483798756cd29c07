"""Tests for ranked section search."""

from paperlink.retrieval.search import extract_excerpt, search_papers
from paperlink.schemas.paper import SourcePaper


def _paper(paper_id, text, sections=()):
    return SourcePaper(
        id=paper_id,
        title=paper_id.title(),
        extracted_text=text,
        relevant_sections=list(sections),
    )


class TestExtractExcerpt:
    """Tests for query-centred excerpts."""

    def test_window_around_first_match(self):
        text = (
            "First sentence is about soil. Second sentence is about rain. "
            "Third sentence mentions protein folding. Fourth sentence is about wind. "
            "Fifth sentence is about snow. Sixth sentence is about fog."
        )
        excerpt = extract_excerpt("protein", text)

        assert excerpt.startswith("Second sentence is about rain")
        assert "Fifth sentence is about snow" in excerpt
        assert "Sixth" not in excerpt

    def test_no_match_returns_head(self):
        assert extract_excerpt("zebra", "abc " * 200) == ("abc " * 200)[:500] + "..."

    def test_long_excerpt_is_capped(self):
        text = "protein " * 200 + "."
        excerpt = extract_excerpt("protein", text)
        assert len(excerpt) == 503
        assert excerpt.endswith("...")


class TestSearchPapers:
    """Tests for ranked, de-duplicated search."""

    def test_main_content_hit(self, expression_paper):
        response = search_papers("gene expression", [expression_paper])

        main_hits = [h for h in response.results if h.section_text.startswith("Main Content: ")]
        assert len(main_hits) == 1
        assert main_hits[0].section_text.startswith("Main Content: Abstract: We measured")
        assert response.has_relevant_content

    def test_sections_are_scored(self, expression_paper):
        response = search_papers("gene expression", [expression_paper])
        texts = [h.section_text for h in response.results]
        assert expression_paper.relevant_sections[1] in texts

    def test_results_sorted_descending(self, expression_paper, transcript_paper, unrelated_paper):
        response = search_papers(
            "expression phenotype",
            [expression_paper, transcript_paper, unrelated_paper],
        )
        scores = [h.relevance_score for h in response.results]
        assert scores == sorted(scores, reverse=True)
        assert all(h.paper_id != "paper_c" for h in response.results)

    def test_duplicates_removed(self):
        section = "Protein folding results are described in detail here."
        paper = _paper("dup", "Unrelated main text about weather.", [section, section])

        response = search_papers("protein folding", [paper])
        assert [h.section_text for h in response.results].count(section) == 1

    def test_top_n(self):
        sections = [f"Protein assay number {i} measured stability." for i in range(15)]
        paper = _paper("many", " ".join(sections), sections)

        response = search_papers("protein", [paper], top_n=10)
        assert len(response.results) == 10

    def test_no_relevant_content(self, unrelated_paper):
        response = search_papers("quantum chromodynamics", [unrelated_paper])
        assert response.results == []
        assert not response.has_relevant_content

    def test_weak_hit_is_not_relevant_content(self):
        paper = _paper("weak", "proteins " + "filler " * 99)
        response = search_papers("protein stability", [paper])

        assert len(response.results) == 1
        assert 0.1 < response.results[0].relevance_score <= 0.3
        assert not response.has_relevant_content

    def test_empty_store(self):
        response = search_papers("anything", [])
        assert response.results == []
        assert response.query == "anything"
