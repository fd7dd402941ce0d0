"""Tests for distance functions and the teacher."""

import pytest

from matchbench.blocking import NullBlocker
from matchbench.core.registry import Registry, get_registry
from matchbench.core.types import Record
from matchbench.distances import BasicTeacher, JaccardDistance, TFIDFDistance


def _rec(text, index=0):
    return Record(index, "A", "1", text)


def test_jaccard_scores():
    dist = JaccardDistance()

    assert dist.score(_rec("Bob Smith"), _rec("Robert Smith")) == pytest.approx(1 / 3)
    assert dist.score(_rec("Alice Jones"), _rec("jones, alice")) == pytest.approx(1.0)
    assert dist.score(_rec("Dan"), _rec("Brown")) == 0.0
    assert dist.score(None, _rec("x")) == 0.0
    assert dist.higher_is_closer


def test_teacher_returns_trained_distance(sample_data):
    teacher = BasicTeacher(NullBlocker(), sample_data)

    dist = teacher.train(TFIDFDistance())

    assert dist.is_fitted
    assert dist.n_documents == 7
    a, b = sample_data.records[1], sample_data.records[4]
    assert dist.score(a, b) == pytest.approx(1.0)
    assert dist.score(sample_data.records[2], sample_data.records[6]) == 0.0


def test_tfidf_down_weights_common_tokens(sample_data):
    dist = TFIDFDistance().train(sample_data)
    smith = dist.score(_rec("Smith"), _rec("Smith Dan"))
    dan = dist.score(_rec("Dan"), _rec("Smith Dan"))

    assert dan > smith


def test_tfidf_requires_training():
    with pytest.raises(RuntimeError):
        TFIDFDistance().score(_rec("a"), _rec("a"))


def test_distances_registered():
    registry = get_registry("distances")

    assert registry.list() == ["jaccard", "tfidf"]
    assert isinstance(registry.create("jaccard"), JaccardDistance)


def test_train_returns_fitted_copy(sample_data):
    dist = JaccardDistance()

    fitted = dist.train(sample_data)

    assert fitted is not dist
    assert fitted.is_fitted
    assert not dist.is_fitted


def test_register_needs_class_or_factory():
    registry = Registry("scratch")

    with pytest.raises(ValueError):
        registry.register("empty")

    registry.register("jaccard", factory=JaccardDistance)
    assert "jaccard" in registry
    assert isinstance(registry.create("jaccard"), JaccardDistance)
