"""Null blocking: propose every admissible pair."""

from ..core.types import CandidatePairs
from ..core.registry import get_registry
from ..data.match_data import MatchData
from .base import BaseBlocker


class NullBlocker(BaseBlocker):
    """Generate all admissible pairs (O(n²)). Only for small datasets."""

    def __init__(self, max_records: int = None, **kwargs):
        """
        Args:
            max_records: Refuse datasets larger than this (no limit if None).
        """
        super().__init__("null", **kwargs)
        self.max_records = max_records

    def block(self, data: MatchData) -> CandidatePairs:
        if self.max_records is not None and len(data) > self.max_records:
            raise ValueError(
                f"Too many records ({len(data)}) for null blocking. "
                f"Maximum allowed: {self.max_records}"
            )
        return self._label(data, data.admissible_pairs())


get_registry("blockers").register("null", NullBlocker)
