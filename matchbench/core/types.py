"""
Core data types shared by blockers, distance functions and the evaluator.

A ranking is a sequence of slots; each slot is either ``Present(pair)`` or
``Absent()``. Absent slots stand for pairs dropped by a save/restore cycle
and always count as incorrect.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass(frozen=True)
class Record:
    """
    A single textual record.

    Attributes:
        index: Position of the record in its dataset.
        source: Name of the table the record came from.
        group_id: Entity identifier; records sharing it are true matches.
        text: Raw record text.
    """
    index: int
    source: str
    group_id: str
    text: str


@dataclass(frozen=True)
class CandidatePair:
    """
    A candidate match produced by blocking.

    Either record may be None when blocking failed to pair it.
    The score is attached once, by the scoring phase.
    """
    a: Optional[Record]
    b: Optional[Record]
    is_correct: bool
    score: Optional[float] = None

    def with_score(self, score: float) -> "CandidatePair":
        """Return a scored copy of this pair."""
        return replace(self, score=float(score))

    @property
    def a_text(self) -> str:
        return "***" if self.a is None else self.a.text

    @property
    def b_text(self) -> str:
        return "***" if self.b is None else self.b.text


@dataclass(frozen=True)
class Present:
    """Ranking slot holding a pair."""
    pair: CandidatePair

    @property
    def is_correct(self) -> bool:
        return self.pair.is_correct


@dataclass(frozen=True)
class Absent:
    """Ranking slot whose pair was dropped; never correct."""

    @property
    def is_correct(self) -> bool:
        return False


RankSlot = Union[Present, Absent]


@dataclass
class CandidatePairs:
    """
    Output of a blocker.

    Attributes:
        pairs: Candidate pairs in generation order.
        n_true_matches: Ground-truth match count of the whole dataset,
            including matches the blocker did not generate.
        metadata: Blocker-specific information.
    """
    pairs: List[CandidatePair]
    n_true_matches: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.pairs)

    def __getitem__(self, i: int) -> CandidatePair:
        return self.pairs[i]

    def __iter__(self) -> Iterator[CandidatePair]:
        return iter(self.pairs)

    @property
    def n_correct(self) -> int:
        return sum(1 for p in self.pairs if p.is_correct)


@dataclass
class ExperimentResult:
    """Container for the scalar results of one experiment."""
    metrics: Dict[str, float]
    timings: Dict[str, float]
    interpolated_precision: List[float]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metrics": self.metrics,
            "timings": self.timings,
            "interpolated_precision": self.interpolated_precision,
            "metadata": self.metadata,
        }
