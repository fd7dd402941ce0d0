"""Evaluation metrics for ranked candidate pairs."""

from .ranking import (
    rank_pairs,
    blocker_recall,
    average_precision,
    max_f1,
    interpolated_11_point_precision,
    interpolated_11_point_recall_levels,
    precision_recall_curve,
    precision_at_k,
    recall_at_k,
    compute_ranking_metrics,
    is_undefined,
)
