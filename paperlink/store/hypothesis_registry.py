"""Registered hypotheses keyed by id."""

from typing import Optional

from ..errors import HypothesisNotFoundError
from ..schemas.hypothesis import Hypothesis


class HypothesisRegistry:
    def __init__(self):
        self._hypotheses: dict[str, Hypothesis] = {}

    def add(self, hypothesis: Hypothesis) -> Hypothesis:
        self._hypotheses[hypothesis.id] = hypothesis
        return hypothesis

    def get(self, hypothesis_id: str) -> Optional[Hypothesis]:
        return self._hypotheses.get(hypothesis_id)

    def require(self, hypothesis_id: str) -> Hypothesis:
        hypothesis = self._hypotheses.get(hypothesis_id)
        if hypothesis is None:
            raise HypothesisNotFoundError(hypothesis_id)
        return hypothesis

    def update(self, hypothesis_id: str, **changes) -> Hypothesis:
        """Replace a stored hypothesis with an updated copy."""
        updated = self.require(hypothesis_id).model_copy(update=changes)
        self._hypotheses[hypothesis_id] = updated
        return updated

    def all(self) -> list[Hypothesis]:
        return list(self._hypotheses.values())

    def search(self, term: str) -> list[Hypothesis]:
        return [h for h in self._hypotheses.values() if h.matches(term)]

    def __len__(self) -> int:
        return len(self._hypotheses)

    def __contains__(self, hypothesis_id: object) -> bool:
        return hypothesis_id in self._hypotheses
