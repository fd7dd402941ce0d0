"""
Distance function and learner interfaces.

A distance function scores a pair of records; ``higher_is_closer`` tells the
evaluator which end of the score range means "more likely a match". Learners
produce distance functions from a dataset; the teacher hands a learner the
data and the blocker it will be evaluated with.
"""

import copy
from abc import ABC, abstractmethod
from typing import Optional

from ..core.types import Record
from ..data.match_data import MatchData


class DistanceLearner(ABC):
    """Something that can be trained into a DistanceFunction."""

    @abstractmethod
    def train(self, data: MatchData, blocker=None) -> "DistanceFunction":
        """
        Train on a dataset.

        Args:
            data: Labeled dataset.
            blocker: Blocker the distance will be evaluated with.

        Returns:
            A ready-to-use DistanceFunction.
        """
        raise NotImplementedError


class DistanceFunction(DistanceLearner):
    """
    Abstract base class for record distance functions.

    Distances are their own learner: ``train`` returns a fitted copy and
    leaves the instance it was called on untouched.
    """

    higher_is_closer = True

    def __init__(self, name: str, **kwargs):
        self.name = name
        self.params = kwargs
        self._is_fitted = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    @abstractmethod
    def score(self, a: Optional[Record], b: Optional[Record]) -> float:
        """
        Score a pair of records.

        Args:
            a: First record (None if absent).
            b: Second record (None if absent).

        Returns:
            Numeric score; see ``higher_is_closer`` for its polarity.
        """
        raise NotImplementedError

    def train(self, data: MatchData, blocker=None) -> "DistanceFunction":
        fitted = copy.copy(self)
        fitted._is_fitted = True
        return fitted

    @property
    def is_fitted(self) -> bool:
        return self._is_fitted


class BasicTeacher:
    """Trains learners on a dataset, with the blocker used for evaluation."""

    def __init__(self, blocker, data: MatchData):
        self.blocker = blocker
        self.data = data

    def train(self, learner: DistanceLearner) -> DistanceFunction:
        return learner.train(self.data, self.blocker)


def _text(record: Optional[Record]) -> str:
    return "" if record is None else record.text
