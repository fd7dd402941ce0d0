"""
A matching experiment: train a distance, block, score, rank, evaluate.

Each of the four phases is timed. After ``run`` the ranking is fixed and all
metrics are computed from it.
"""

import copy
import time
from typing import Dict, Iterable, List, Optional, Tuple

from joblib import Parallel, delayed
from tqdm import tqdm

from ..blocking import BaseBlocker, NullBlocker
from ..core.types import Absent, CandidatePair, ExperimentResult, RankSlot
from ..data.match_data import MatchData
from ..distances import BasicTeacher, DistanceFunction, DistanceLearner
from ..exceptions import ComponentError
from ..metrics import ranking as ranking_metrics

PHASES = ("training", "blocking", "scoring", "ranking")


class MatchExperiment:
    """
    Evaluate a distance learner and a blocker on one dataset.

    Args:
        data: Labeled dataset.
        learner: Learner (or untrained distance) to train.
        blocker: Candidate generator; NullBlocker when omitted.
        descending: Ranking polarity. None takes it from the trained
            distance's ``higher_is_closer``.
        n_jobs: Worker threads for the scoring phase.
        verbose: Print progress.
    """

    def __init__(
        self,
        data: MatchData,
        learner: DistanceLearner,
        blocker: BaseBlocker = None,
        descending: Optional[bool] = None,
        n_jobs: int = 1,
        verbose: bool = False,
    ):
        self.data = data
        self.learner = learner
        self.blocker = blocker if blocker is not None else NullBlocker()
        self.descending = descending
        self.n_jobs = n_jobs
        self.verbose = verbose

        self.distance: Optional[DistanceFunction] = None
        self.timings: Dict[str, float] = {}
        self.n_true_matches = 0
        self._ranking: Optional[List[RankSlot]] = None

    def __repr__(self) -> str:
        return f"MatchExperiment({self.data.filename}, {self.learner!r}, {self.blocker!r})"

    def run(self) -> "MatchExperiment":
        """Run all four phases and fix the ranking."""
        if self.verbose:
            print(f"Setting up experiment: {self.learner!r} {self.blocker!r} "
                  f"file: {self.data.filename}")

        start_time = time.time()
        try:
            self.distance = BasicTeacher(self.blocker, self.data).train(self.learner)
        except Exception as e:
            raise ComponentError("training", repr(self.learner), str(e)) from e
        self.timings["training"] = time.time() - start_time

        if self.verbose:
            print(f"  Distance is {self.distance!r}")

        start_time = time.time()
        try:
            candidates = self.blocker.block(self.data)
        except Exception as e:
            raise ComponentError("blocking", repr(self.blocker), str(e)) from e
        self.timings["blocking"] = time.time() - start_time
        self.n_true_matches = candidates.n_true_matches

        if self.verbose:
            print(f"  Pairs: {len(candidates)} Correct: {candidates.n_correct} "
                  f"Ground truth: {self.n_true_matches}")

        start_time = time.time()
        scored = self._score_pairs(candidates.pairs)
        self.timings["scoring"] = time.time() - start_time

        if self.verbose:
            print(f"  Scoring time: {self.timings['scoring']:.3f}s")

        descending = self.descending
        if descending is None:
            descending = getattr(self.distance, "higher_is_closer", True)

        start_time = time.time()
        self._ranking = ranking_metrics.rank_pairs(scored, descending=descending)
        self.timings["ranking"] = time.time() - start_time

        return self

    def _score_pairs(self, pairs: List[CandidatePair]) -> List[CandidatePair]:
        """Score every pair; returns only once all scores are in."""
        try:
            if self.n_jobs == 1:
                scores = [
                    self.distance.score(p.a, p.b)
                    for p in tqdm(pairs, desc="Scoring", disable=not self.verbose)
                ]
            else:
                scores = Parallel(n_jobs=self.n_jobs, prefer="threads")(
                    delayed(self.distance.score)(p.a, p.b) for p in pairs
                )
        except Exception as e:
            raise ComponentError("scoring", repr(self.distance), str(e)) from e
        return [p.with_score(s) for p, s in zip(pairs, scores)]

    @property
    def ranking(self) -> List[RankSlot]:
        if self._ranking is None:
            raise RuntimeError("Experiment has not been run")
        return self._ranking

    def with_absent(self, indices: Iterable[int]) -> "MatchExperiment":
        """Copy of this experiment with the given ranking slots dropped."""
        drop = set(indices)
        other = copy.copy(self)
        other.timings = dict(self.timings)
        other._ranking = [
            Absent() if i in drop else slot for i, slot in enumerate(self.ranking)
        ]
        return other

    def total_time(self) -> float:
        """Total time spent in the four phases, in seconds."""
        return sum(self.timings.get(phase, 0.0) for phase in PHASES)

    def pairs_per_second(self) -> float:
        total = self.total_time()
        if len(self.ranking) == 0 or total <= 0:
            return float("nan")
        return len(self.ranking) / total

    def blocker_recall(self) -> float:
        return ranking_metrics.blocker_recall(self.ranking, self.n_true_matches)

    def average_precision(self) -> float:
        return ranking_metrics.average_precision(self.ranking, self.n_true_matches)

    def max_f1(self) -> float:
        return ranking_metrics.max_f1(self.ranking, self.n_true_matches)

    def interpolated_11_point_precision(self) -> List[float]:
        return ranking_metrics.interpolated_11_point_precision(
            self.ranking, self.n_true_matches
        )

    @staticmethod
    def interpolated_11_point_recall_levels() -> List[float]:
        return ranking_metrics.interpolated_11_point_recall_levels()

    def precision_recall_curve(self) -> List[Tuple[float, float]]:
        return ranking_metrics.precision_recall_curve(self.ranking, self.n_true_matches)

    def precision_at_k(self, k: int) -> float:
        return ranking_metrics.precision_at_k(self.ranking, k)

    def recall_at_k(self, k: int) -> float:
        return ranking_metrics.recall_at_k(self.ranking, self.n_true_matches, k)

    def summary(self, k_values: List[int] = None) -> Dict[str, float]:
        """All scalar metrics plus total time and throughput."""
        metrics = ranking_metrics.compute_ranking_metrics(
            self.ranking, self.n_true_matches, k_values=k_values
        )
        metrics["time"] = self.total_time()
        metrics["pairs_per_second"] = self.pairs_per_second()
        return metrics

    def to_result(self, k_values: List[int] = None) -> ExperimentResult:
        return ExperimentResult(
            metrics=self.summary(k_values=k_values),
            timings=dict(self.timings),
            interpolated_precision=self.interpolated_11_point_precision(),
            metadata={
                "data": self.data.filename,
                "learner": repr(self.learner),
                "blocker": repr(self.blocker),
                "n_pairs": len(self.ranking),
                "n_true_matches": self.n_true_matches,
            },
        )
