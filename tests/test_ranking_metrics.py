"""Tests for ranking metrics."""

import math

import pytest

from matchbench.core.types import Absent, CandidatePair
from matchbench.metrics import (
    average_precision,
    blocker_recall,
    compute_ranking_metrics,
    interpolated_11_point_precision,
    interpolated_11_point_recall_levels,
    is_undefined,
    max_f1,
    precision_at_k,
    precision_recall_curve,
    rank_pairs,
    recall_at_k,
)

C, I = True, False


def test_max_f1_takes_best_cutoff(ranking):
    slots = ranking([C, I, C, I])

    # rank 1: P=1, R=0.5 -> 0.667; rank 3: P=0.667, R=1 -> 0.8
    assert max_f1(slots, 2) == pytest.approx(0.8)


def test_max_f1_without_correct_pairs(ranking):
    assert max_f1(ranking([I, I]), 3) == 0.0


@pytest.mark.parametrize("n_true", [1, 3, 5])
def test_average_precision_perfect_ranking(ranking, n_true):
    slots = ranking([C] * n_true + [I] * 4)

    assert average_precision(slots, n_true) == pytest.approx(1.0)


def test_average_precision_uses_ground_truth_denominator(ranking):
    slots = ranking([C, I, C, I])

    # (1/1 + 2/3) / 4, two matches never reached the ranking
    assert average_precision(slots, 4) == pytest.approx((1 + 2 / 3) / 4)


def test_blocker_recall_counts_missed_matches(ranking):
    slots = ranking([C] * 6 + [I] * 3)

    assert blocker_recall(slots, 10) == pytest.approx(0.6)


def test_interpolated_11_point_precision(ranking):
    slots = ranking([C, I, C, I])

    result = interpolated_11_point_precision(slots, 2)

    assert len(result) == 11
    assert result[:6] == pytest.approx([1.0] * 6)
    assert result[6:] == pytest.approx([2 / 3] * 5)


def test_interpolated_11_point_unreached_levels_are_zero(ranking):
    result = interpolated_11_point_precision(ranking([C, I]), 4)

    assert result[:3] == pytest.approx([1.0, 1.0, 1.0])
    assert result[3:] == [0.0] * 8


def test_interpolated_precision_dominates_raw_precision(ranking):
    labels = [I, C, C, I, I, C, I, C, C, I]
    n_true = 6
    slots = ranking(labels)
    result = interpolated_11_point_precision(slots, n_true)
    levels = interpolated_11_point_recall_levels()

    n = 0
    for rank, label in enumerate(labels, start=1):
        n += label
        for j, level in enumerate(levels):
            if n / n_true >= level:
                assert result[j] >= n / rank - 1e-12


def test_recall_levels():
    assert interpolated_11_point_recall_levels() == pytest.approx(
        [i / 10 for i in range(11)]
    )


def test_precision_recall_curve(ranking):
    slots = ranking([I, C, C, I, C])

    curve = precision_recall_curve(slots, 4)

    recalls = [r for r, _ in curve]
    precisions = [p for _, p in curve]
    assert recalls == pytest.approx([0.25, 0.5, 0.75])
    assert precisions == pytest.approx([2 / 3, 2 / 3, 0.6])


def test_precision_and_recall_at_k(ranking):
    slots = ranking([C, I, C, I])

    assert precision_at_k(slots, 2) == pytest.approx(0.5)
    assert recall_at_k(slots, 4, 2) == pytest.approx(0.25)
    assert precision_at_k(slots, 10) == pytest.approx(0.5)


def test_undefined_when_no_ground_truth(ranking):
    slots = ranking([C, I])

    assert math.isnan(average_precision(slots, 0))
    assert math.isnan(max_f1(slots, 0))
    assert math.isnan(blocker_recall(slots, 0))
    assert all(math.isnan(v) for v in interpolated_11_point_precision(slots, 0))
    assert precision_recall_curve(slots, 0) == []


def test_undefined_when_ranking_empty():
    metrics = compute_ranking_metrics([], 5, k_values=[3])

    assert all(is_undefined(v) for v in metrics.values())


def test_absent_slots_match_incorrect_pairs(ranking):
    labels = [C, I, I, C, I, C]
    with_pairs = ranking(labels)
    with_absent = [Absent() if not label else slot
                   for label, slot in zip(labels, with_pairs)]

    assert compute_ranking_metrics(with_absent, 4) == pytest.approx(
        compute_ranking_metrics(with_pairs, 4)
    )
    assert interpolated_11_point_precision(with_absent, 4) == pytest.approx(
        interpolated_11_point_precision(with_pairs, 4)
    )
    assert precision_recall_curve(with_absent, 4) == precision_recall_curve(with_pairs, 4)


def test_rank_pairs_polarity_and_ties():
    pairs = [
        CandidatePair(None, None, False, 0.5),
        CandidatePair(None, None, True, 0.9),
        CandidatePair(None, None, True, 0.5),
    ]

    descending = [slot.pair for slot in rank_pairs(pairs, descending=True)]
    ascending = [slot.pair for slot in rank_pairs(pairs, descending=False)]

    assert descending == [pairs[1], pairs[0], pairs[2]]
    assert ascending == [pairs[0], pairs[2], pairs[1]]


def test_rank_pairs_is_stable_on_sorted_input():
    pairs = [CandidatePair(None, None, i % 2 == 0, s)
             for i, s in enumerate([0.3, 0.9, 0.3, 0.1, 0.9])]

    once = rank_pairs(pairs)
    twice = rank_pairs([slot.pair for slot in once])

    assert once == twice


def test_rank_pairs_custom_key():
    pairs = [CandidatePair(None, None, False, s) for s in [0.2, -0.8, 0.5]]

    ranked = rank_pairs(pairs, key=lambda p: abs(p.score))

    assert [slot.pair.score for slot in ranked] == [-0.8, 0.5, 0.2]


def test_rank_pairs_rejects_unscored():
    with pytest.raises(ValueError):
        rank_pairs([CandidatePair(None, None, True)])


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_rank_pairs_rejects_non_finite_scores(bad):
    pairs = [CandidatePair(None, None, True, 0.4), CandidatePair(None, None, False, bad)]

    with pytest.raises(ValueError, match="non-finite"):
        rank_pairs(pairs)
