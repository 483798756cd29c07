"""Exception types raised by the paperlink core."""


class PaperlinkError(Exception):
    """Base class for paperlink errors."""


class MissingSourceError(PaperlinkError):
    """A hypothesis references paper ids that are not registered."""

    def __init__(self, missing_ids: list[str]):
        self.missing_ids = list(missing_ids)
        super().__init__(f"Missing source papers: {', '.join(self.missing_ids)}")


class DuplicateHypothesisError(PaperlinkError):
    """A hypothesis with the same id already exists."""

    def __init__(self, hypothesis_id: str):
        self.hypothesis_id = hypothesis_id
        super().__init__(f"Hypothesis already exists: {hypothesis_id}")


class HypothesisNotFoundError(PaperlinkError):
    """No hypothesis is registered under the given id."""

    def __init__(self, hypothesis_id: str):
        self.hypothesis_id = hypothesis_id
        super().__init__(f"Hypothesis not found: {hypothesis_id}")


class EmptyDocumentError(PaperlinkError, ValueError):
    """The PDF buffer handed to ingestion is empty."""


class LLMNotConfiguredError(PaperlinkError, ValueError):
    """No text-completion backend is configured."""
