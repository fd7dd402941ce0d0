"""Shared fixtures for matchbench tests."""

import pytest

from matchbench.core.types import Absent, CandidatePair, Present, Record
from matchbench.data import MatchData

# Two sources. Group 3 ("Carol White" / "Caroline Whyte") shares no token,
# so token blocking misses it and Jaccard scores it 0.
SAMPLE_ROWS = [
    ("A", "1", "Bob Smith"),
    ("A", "2", "Alice Jones"),
    ("A", "3", "Carol White"),
    ("B", "1", "Robert Smith"),
    ("B", "2", "Alice Jones"),
    ("B", "4", "Dan Brown"),
    ("B", "3", "Caroline Whyte"),
]


@pytest.fixture
def sample_data():
    return MatchData(SAMPLE_ROWS, filename="sample.tsv")


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.tsv"
    path.write_text("".join(f"{s}\t{g}\t{t}\n" for s, g, t in SAMPLE_ROWS))
    return path


def make_ranking(labels, scores=None):
    """
    Build ranking slots from labels.

    True/False give correct/incorrect pairs, None gives an Absent slot.
    """
    slots = []
    for i, label in enumerate(labels):
        if label is None:
            slots.append(Absent())
            continue
        score = scores[i] if scores is not None else float(len(labels) - i)
        a = Record(2 * i, "A", str(i), f"left {i}")
        b = Record(2 * i + 1, "B", str(i) if label else f"x{i}", f"right {i}")
        slots.append(Present(CandidatePair(a, b, bool(label), score)))
    return slots


@pytest.fixture
def ranking():
    """Factory fixture wrapping make_ranking."""
    return make_ranking
