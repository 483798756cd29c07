"""Tests for text cleaning and sectioning."""

import pytest

from paperlink.ingestion.normalizer import (
    TRUNCATION_MARKER,
    TextNormalizer,
    normalize,
    segment_sentences,
    split_run_together,
)
from paperlink.ingestion.sections import SectionSplitter, canonical_label
from paperlink.schemas.extraction import ExtractionStatus

SAMPLES = [
    "",
    "plain sentence without any terminator at all",
    "geneExpression2drives phenotype in 3cells. Short. Another sentence here!",
    "Escaped\\nnewlines\\tand\\rreturns are collapsed into spaces here.",
    "Weird ~~ symbols {} [] <> _ are @@ dropped # from $ the text.",
    "Multiple...   terminators???  in   a row!!! should be stable enough.",
    "A1b2C3d4 mixed tokens: AbcDef ghiJkl mnoPqr stuVwx.",
]


class TestNormalize:
    """Tests for the cleaning pipeline."""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once

    def test_escapes_and_whitespace(self):
        assert normalize("first line\\nsecond line\\tcontinues here.") == (
            "first line second line continues here."
        )

    def test_disallowed_characters_removed(self):
        cleaned = normalize("Treated {all} groups <equally> with [care] and attention.")
        assert cleaned == "Treated all groups equally with care and attention."

    def test_short_fragments_dropped(self):
        assert segment_sentences("Ok. This sentence is long enough. 12345678901.") == [
            "This sentence is long enough."
        ]

    def test_run_together_words_split(self):
        assert split_run_together("geneExpression2drives") == "gene Expression 2 drives"

    def test_output_characters(self):
        cleaned = normalize("Ünïcödé – text with ‘quotes’ and more content here.")
        assert all(ch.isascii() for ch in cleaned)


class TestTextNormalizer:
    """Tests for document-level cleaning."""

    def test_truncates_long_documents(self):
        text = "This is a reasonably long sentence. " * 400
        document = TextNormalizer(max_chars=8000).clean_document(text)

        assert document.status == ExtractionStatus.TRUNCATED
        assert document.text.endswith(TRUNCATION_MARKER)
        assert len(document.text) == 8000 + len(TRUNCATION_MARKER)

    def test_placeholder_for_near_empty_text(self):
        document = TextNormalizer().clean_document("tiny", source_id="doc_7")

        assert document.status == ExtractionStatus.DEGRADED
        assert "doc_7" in document.text
        assert document.sections

    def test_placeholder_id_is_printable_and_capped(self):
        document = TextNormalizer().clean_document("tiny", source_id="résumé_" + "x" * 20000)

        assert document.status == ExtractionStatus.DEGRADED
        assert all(32 <= ord(ch) < 127 for ch in document.text)
        assert "r sum _x" in document.text
        assert len(document.text) < 400

    def test_healthy_document(self):
        text = "This paper studies protein folding in detail. " * 5
        document = TextNormalizer().clean_document(text)

        assert document.status == ExtractionStatus.OK
        assert document.sections


class TestSectionSplitter:
    """Tests for section partitioning."""

    def test_header_sections(self):
        body = "word " * 30
        text = f"Abstract: {body}. Methods: {body}. Results {body}"
        sections = SectionSplitter().split(text)

        assert [s.split(":")[0] for s in sections] == ["Abstract", "Methods", "Results"]

    def test_short_header_sections_skipped_then_chunked(self):
        sections = SectionSplitter().split("Abstract: too short. Results: also short.")
        assert sections == ["Content Part 1: Abstract: too short. Results: also short."]

    def test_paragraph_sections(self):
        paragraph = "This paragraph has plenty of words in it. " * 4
        text = f"{paragraph}\n\n{paragraph}\n\nshort"
        sections = SectionSplitter().split(text)

        assert len(sections) == 2
        assert sections[0].startswith("Section 1: ")
        assert sections[1].startswith("Section 2: ")

    def test_flat_text_is_chunked(self):
        text = "x" * 2500
        sections = SectionSplitter().split(text)

        assert [s.split(":")[0] for s in sections] == [
            "Content Part 1",
            "Content Part 2",
            "Content Part 3",
        ]
        assert all(len(s) <= len("Content Part 1: ") + 1000 for s in sections)

    def test_chunk_limit(self):
        sections = SectionSplitter().split("y" * 10000)
        assert len(sections) == 5

    def test_section_length_capped(self):
        text = "Introduction: " + "long text " * 300
        sections = SectionSplitter().split(text)
        assert sections == [f"Introduction: {('long text ' * 300).strip()[:1000]}"]

    def test_mid_word_label_is_not_a_header(self):
        text = "The aggregated results were clear. " * 5
        sections = SectionSplitter().split(text)
        assert sections[0].startswith("Content Part 1")

    @pytest.mark.parametrize("text", [
        "a",
        "Results:",
        "Short text.",
        "word " * 500,
        "Abstract: x. Methods: y.",
    ])
    def test_never_empty_for_non_empty_text(self, text):
        assert SectionSplitter().split(text)

    def test_empty_text(self):
        assert SectionSplitter().split("   ") == []

    def test_canonical_label(self):
        assert canonical_label("METHOD") == "Methods"
        assert canonical_label("conclusions") == "Conclusion"
        assert canonical_label("Result") == "Results"
