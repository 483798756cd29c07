"""Tests for relevance scoring."""

import pytest

from paperlink.retrieval.relevance import RelevanceScorer, relevance_score
from paperlink.retrieval.tokenizers import concept_words, query_words

EXACT_PHRASE_TEXT = "Carriers of the BRCA1 mutation face increased risk"
PARTIAL_MATCH_TEXT = "Carriers of BRCA1-positive variants show mutations in tumours"


class TestTokenizers:
    def test_query_words_drop_short_tokens(self):
        assert query_words("The BRCA1 of an gene") == ["the", "brca1", "gene"]

    def test_concept_words_need_four_characters(self):
        assert concept_words("the BRCA1 gene is") == ["brca1", "gene"]


class TestRelevanceScorer:
    """Tests for the bounded relevance score."""

    def test_phrase_bonus_applied(self):
        scorer = RelevanceScorer()
        # 2 exact matches (2 each) + phrase bonus 3
        assert scorer.raw_score("BRCA1 mutation", EXACT_PHRASE_TEXT) == 7.0

    def test_phrase_bonus_needs_adjacent_words(self):
        scorer = RelevanceScorer()
        assert scorer.raw_score("BRCA1 mutation", "a mutation of BRCA1 was found") == 4.0

    def test_exact_phrase_beats_partial_matches(self):
        exact = relevance_score("BRCA1 mutation", EXACT_PHRASE_TEXT)
        partial = relevance_score("BRCA1 mutation", PARTIAL_MATCH_TEXT)

        assert RelevanceScorer().raw_score("BRCA1 mutation", PARTIAL_MATCH_TEXT) == 1.0
        assert exact > partial
        assert partial == pytest.approx(1.0 / (8 * 0.01 + 2))

    def test_length_penalty(self):
        text = "protein " + "filler " * 1999
        # exact 2 + phrase 3, normalised by 2000 tokens, halved by the penalty
        assert relevance_score("protein", text) == pytest.approx(5 / 21 * 0.5)

    def test_empty_text_scores_zero(self):
        assert relevance_score("BRCA1 mutation", "") == 0.0
        assert relevance_score("BRCA1 mutation", "   ") == 0.0

    def test_degenerate_query_scores_zero(self):
        assert relevance_score("", EXACT_PHRASE_TEXT) == 0.0
        assert relevance_score("a of", EXACT_PHRASE_TEXT) == 0.0

    @pytest.mark.parametrize("query,text", [
        ("BRCA1 mutation", EXACT_PHRASE_TEXT),
        ("BRCA1 mutation", PARTIAL_MATCH_TEXT),
        ("gene", "gene gene gene gene gene gene"),
        ("cancer risk", "cancer " * 5000),
        ("unrelated terms", "nothing in common here at all"),
        ("x" * 50, "x" * 500),
    ])
    def test_score_is_bounded(self, query, text):
        assert 0.0 <= relevance_score(query, text) <= 1.0

    def test_custom_weights(self):
        scorer = RelevanceScorer(exact_weight=1.0, phrase_bonus=0.0)
        assert scorer.raw_score("BRCA1 mutation", EXACT_PHRASE_TEXT) == 2.0
