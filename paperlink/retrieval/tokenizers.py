"""
Whitespace tokenization for relevance scoring and grounding.

Tokens keep their punctuation: "expression." is a different token from
"expression" and only counts as a partial match for it.

Examples:
    "Gene Expression drives" -> ["gene", "expression", "drives"]
    query_words("the BRCA1 gene")  -> ["the", "brca1", "gene"]
    concept_words("the BRCA1 gene") -> ["brca1", "gene"]
"""


def text_tokens(text: str) -> list[str]:
    """Lowercase whitespace tokens."""
    return text.lower().split()


def query_words(query: str, min_length: int = 3) -> list[str]:
    """Query tokens of at least min_length characters."""
    return [word for word in text_tokens(query) if len(word) >= min_length]


def concept_words(text: str, min_length: int = 4) -> list[str]:
    """Content-bearing words used for hypothesis grounding."""
    return [word for word in text_tokens(text) if len(word) >= min_length]
