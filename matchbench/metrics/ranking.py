"""
Ranking metrics for matching experiments.

All metrics are pure functions over an already sorted ranking (a sequence of
Present/Absent slots, rank 1 first) and the ground-truth match count T.
Recall always uses T as its denominator, so matches the blocker never
proposed count as misses. Metrics that are undefined (T = 0 or an empty
ranking) are returned as NaN.
"""

import math
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..core.types import CandidatePair, Present, RankSlot

ELEVEN_POINTS = np.array([0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0])

NAN = float("nan")


def rank_pairs(
    pairs: Iterable[CandidatePair],
    descending: bool = True,
    key: Callable[[CandidatePair], float] = None,
) -> List[RankSlot]:
    """
    Sort scored pairs into a ranking.

    Args:
        pairs: Scored candidate pairs.
        descending: Put the highest key first. Use False for distance
            functions where lower scores mean closer records.
        key: Sort key; defaults to the pair's score.

    Returns:
        Ranking slots, most confident first. Ties keep input order.

    Raises:
        ValueError: If a pair is unscored or its score is NaN or infinite.
    """
    pairs = list(pairs)
    if key is None:
        if any(p.score is None for p in pairs):
            raise ValueError("Cannot rank unscored pairs")
        if any(not math.isfinite(p.score) for p in pairs):
            raise ValueError("Cannot rank pairs with non-finite scores")
        key = _score_key
    ordered = sorted(pairs, key=key, reverse=descending)
    return [Present(p) for p in ordered]


def _score_key(pair: CandidatePair) -> float:
    return pair.score


def _is_undefined(slots: Sequence[RankSlot], n_true_matches: int) -> bool:
    return n_true_matches <= 0 or len(slots) == 0


def _hits(slots: Sequence[RankSlot]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Correct mask, running count of correct pairs and precision per rank."""
    correct = np.fromiter((s.is_correct for s in slots), dtype=bool, count=len(slots))
    hits = np.cumsum(correct)
    precision = hits / np.arange(1, len(slots) + 1)
    return correct, hits, precision


def blocker_recall(slots: Sequence[RankSlot], n_true_matches: int) -> float:
    """Fraction of the ground-truth matches present in the ranking."""
    if _is_undefined(slots, n_true_matches):
        return NAN
    n = sum(1 for s in slots if s.is_correct)
    return n / n_true_matches


def average_precision(slots: Sequence[RankSlot], n_true_matches: int) -> float:
    """
    Non-interpolated average precision.

    Sum of the precision at each rank holding a correct pair, divided by T.
    """
    if _is_undefined(slots, n_true_matches):
        return NAN
    correct, _, precision = _hits(slots)
    return float(precision[correct].sum() / n_true_matches)


def max_f1(slots: Sequence[RankSlot], n_true_matches: int) -> float:
    """
    Best F1 over all cutoffs.

    Only ranks holding a correct pair can set a new maximum. Returns 0.0
    when the ranking holds no correct pair.
    """
    if _is_undefined(slots, n_true_matches):
        return NAN
    correct, hits, precision = _hits(slots)
    if not correct.any():
        return 0.0
    p = precision[correct]
    r = hits[correct] / n_true_matches
    f1 = 2 * p * r / (p + r)
    return float(f1.max())


def interpolated_11_point_recall_levels() -> List[float]:
    """Recall levels matching interpolated_11_point_precision."""
    return ELEVEN_POINTS.tolist()


def interpolated_11_point_precision(
    slots: Sequence[RankSlot],
    n_true_matches: int,
) -> List[float]:
    """
    Interpolated precision at recall 0.0, 0.1, ..., 1.0.

    Each entry is the best precision seen at any rank whose recall reaches
    that level, or 0.0 if the level is never reached.
    """
    if _is_undefined(slots, n_true_matches):
        return [NAN] * len(ELEVEN_POINTS)
    _, hits, precision = _hits(slots)
    recall = hits / n_true_matches
    result = []
    for level in ELEVEN_POINTS:
        reached = recall >= level
        result.append(float(precision[reached].max()) if reached.any() else 0.0)
    return result


def precision_recall_curve(
    slots: Sequence[RankSlot],
    n_true_matches: int,
) -> List[Tuple[float, float]]:
    """
    Points (recall, interpolated precision), one per correct pair.

    The plotted precision at a correct rank is the best precision at that
    rank or any later correct rank, found with one backward pass.
    """
    if _is_undefined(slots, n_true_matches):
        return []
    correct, hits, precision = _hits(slots)
    at_correct = precision[correct]
    interpolated = np.maximum.accumulate(at_correct[::-1])[::-1]
    recall = hits[correct] / n_true_matches
    return [(float(r), float(p)) for r, p in zip(recall, interpolated)]


def precision_at_k(slots: Sequence[RankSlot], k: int) -> float:
    """Fraction of the top-k slots holding a correct pair."""
    if len(slots) == 0 or k <= 0:
        return NAN
    k = min(k, len(slots))
    return sum(1 for s in slots[:k] if s.is_correct) / k


def recall_at_k(slots: Sequence[RankSlot], n_true_matches: int, k: int) -> float:
    """Fraction of the ground-truth matches found in the top-k slots."""
    if _is_undefined(slots, n_true_matches) or k <= 0:
        return NAN
    k = min(k, len(slots))
    return sum(1 for s in slots[:k] if s.is_correct) / n_true_matches


def compute_ranking_metrics(
    slots: Sequence[RankSlot],
    n_true_matches: int,
    k_values: List[int] = None,
) -> Dict[str, float]:
    """
    Compute all scalar ranking metrics.

    Args:
        slots: Sorted ranking.
        n_true_matches: Ground-truth match count T.
        k_values: Cutoffs for P@k and R@k.

    Returns:
        Dict with blocker_recall, average_precision, max_f1 and p_at_k/r_at_k.
    """
    if k_values is None:
        k_values = [10, 50, 100]

    metrics = {
        "blocker_recall": blocker_recall(slots, n_true_matches),
        "average_precision": average_precision(slots, n_true_matches),
        "max_f1": max_f1(slots, n_true_matches),
    }
    for k in k_values:
        metrics[f"p_at_{k}"] = precision_at_k(slots, k)
        metrics[f"r_at_{k}"] = recall_at_k(slots, n_true_matches, k)
    return metrics


def is_undefined(value: float) -> bool:
    """True for metric values that could not be computed."""
    return isinstance(value, float) and math.isnan(value)
