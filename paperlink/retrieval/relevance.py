"""
Bounded relevance scoring between a query and a block of text.

The score is deliberately asymmetric:
- exact token matches weigh 2
- partial (substring) token matches weigh 0.5
- the literal query phrase anywhere in the text adds 3, once

The raw score is normalised by text and query size, then multiplied by a
length penalty so short, precise sections outrank long diffuse documents.
"""

from .tokenizers import query_words, text_tokens

EXACT_MATCH_WEIGHT = 2.0
PARTIAL_MATCH_WEIGHT = 0.5
PHRASE_BONUS = 3.0
LENGTH_PENALTY_TOKENS = 1000


class RelevanceScorer:
    """
    Score text blocks against a free-text query.

    Parameters:
      - exact_weight: per exact token match
      - partial_weight: per token that contains but is not the query word
      - phrase_bonus: added once if the whole query occurs in the text
      - penalty_tokens: texts longer than this are scaled down
    """

    def __init__(
        self,
        exact_weight: float = EXACT_MATCH_WEIGHT,
        partial_weight: float = PARTIAL_MATCH_WEIGHT,
        phrase_bonus: float = PHRASE_BONUS,
        penalty_tokens: int = LENGTH_PENALTY_TOKENS,
    ):
        self.exact_weight = exact_weight
        self.partial_weight = partial_weight
        self.phrase_bonus = phrase_bonus
        self.penalty_tokens = penalty_tokens

    def raw_score(self, query: str, text: str) -> float:
        """Unnormalised match score."""
        words = query_words(query)
        tokens = text_tokens(text)
        if not words or not tokens:
            return 0.0

        score = 0.0
        for word in words:
            exact = sum(1 for token in tokens if token == word)
            partial = sum(1 for token in tokens if word in token and token != word)
            score += exact * self.exact_weight + partial * self.partial_weight

        phrase = query.strip().lower()
        if phrase and phrase in text.lower():
            score += self.phrase_bonus

        return score

    def score(self, query: str, text: str) -> float:
        """Relevance of text to query in [0, 1]. Degenerate input scores 0."""
        words = query_words(query)
        token_count = len(text_tokens(text))
        if not words or token_count == 0:
            return 0.0

        normalized = self.raw_score(query, text) / (token_count * 0.01 + len(words))
        length_penalty = min(1.0, self.penalty_tokens / token_count)

        return min(1.0, normalized * length_penalty)


_default_scorer = RelevanceScorer()


def relevance_score(query: str, text: str) -> float:
    """Score with the default weights."""
    return _default_scorer.score(query, text)
