"""
Base blocker interface for candidate pair generation.

Blocking reduces the quadratic comparison space by generating
only promising candidate pairs. The blocker also reports the dataset's
ground-truth match count, which the evaluator uses as its recall denominator.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Tuple

from ..core.types import CandidatePair, CandidatePairs, Record
from ..data.match_data import MatchData


class BaseBlocker(ABC):
    """
    Abstract base class for blocking strategies.

    Blockers generate labeled candidate pairs from a dataset.
    """

    def __init__(self, name: str, **kwargs):
        """
        Initialize blocker.

        Args:
            name: Blocker identifier.
            **kwargs: Blocker-specific parameters.
        """
        self.name = name
        self.params = kwargs

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{type(self).__name__}({params})"

    @abstractmethod
    def block(self, data: MatchData) -> CandidatePairs:
        """
        Generate candidate pairs.

        Args:
            data: Dataset to block.

        Returns:
            CandidatePairs with labeled pairs and the ground-truth match count.
        """
        raise NotImplementedError

    def _label(
        self,
        data: MatchData,
        pairs: Iterable[Tuple[Record, Record]],
        metadata: Dict = None,
    ) -> CandidatePairs:
        """Attach match labels and the ground-truth count to raw pairs."""
        labeled = [CandidatePair(a, b, data.is_match(a, b)) for a, b in pairs]
        return CandidatePairs(
            pairs=labeled,
            n_true_matches=data.n_true_matches(),
            metadata={"blocker": self.name, **(metadata or {})},
        )

    def evaluate(self, data: MatchData, candidates: CandidatePairs) -> Dict[str, float]:
        """
        Evaluate blocking performance.

        Args:
            data: Dataset that was blocked.
            candidates: Generated candidate pairs.

        Returns:
            Dict with blocking_recall, reduction_ratio and counts.
        """
        n_true = candidates.n_true_matches
        n_correct = candidates.n_correct
        recall = n_correct / n_true if n_true > 0 else float("nan")

        max_pairs = sum(1 for _ in data.admissible_pairs())
        reduction_ratio = 1.0 - (len(candidates) / max_pairs) if max_pairs > 0 else 0.0

        return {
            "blocking_recall": recall,
            "reduction_ratio": reduction_ratio,
            "n_candidates": len(candidates),
            "n_ground_truth": n_true,
            "n_true_positives": n_correct,
        }
