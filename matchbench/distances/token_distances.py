"""Token-based similarity functions."""

import math
from collections import Counter
from typing import Dict, Optional

from ..core.types import Record
from ..core.registry import get_registry
from ..data.match_data import MatchData
from ..tokens import Tokenizer
from .base import DistanceFunction, _text


class JaccardDistance(DistanceFunction):
    """Jaccard similarity of the records' token sets. No training needed."""

    def __init__(self, tokenizer: Tokenizer = None, **kwargs):
        super().__init__("jaccard", **kwargs)
        self.tokenizer = tokenizer or Tokenizer()

    def score(self, a: Optional[Record], b: Optional[Record]) -> float:
        sa = {tok.index for tok in self.tokenizer.tokenize(_text(a))}
        sb = {tok.index for tok in self.tokenizer.tokenize(_text(b))}
        union = len(sa | sb)
        if union == 0:
            return 0.0
        return len(sa & sb) / union


class TFIDFDistance(DistanceFunction):
    """
    Cosine similarity of TF-IDF weighted token vectors.

    Document frequencies are collected from the training dataset. Tokens
    never seen in training are weighted as if they occurred in one document.
    """

    def __init__(self, tokenizer: Tokenizer = None, **kwargs):
        super().__init__("tfidf", **kwargs)
        self.tokenizer = tokenizer or Tokenizer()
        self.document_frequency: Counter = Counter()
        self.n_documents = 0

    def train(self, data: MatchData, blocker=None) -> "TFIDFDistance":
        document_frequency = Counter()
        for record in data:
            document_frequency.update(
                {tok.index for tok in self.tokenizer.tokenize(record.text)}
            )
        fitted = super().train(data, blocker)
        fitted.document_frequency = document_frequency
        fitted.n_documents = len(data)
        return fitted

    def _vector(self, text: str) -> Dict[int, float]:
        tf = Counter(tok.index for tok in self.tokenizer.tokenize(text))
        vec = {}
        for index, count in tf.items():
            df = self.document_frequency.get(index, 1)
            vec[index] = math.log(count + 1.0) * math.log(max(self.n_documents, df) / df)
        norm = math.sqrt(sum(w * w for w in vec.values()))
        if norm == 0:
            return {}
        return {index: w / norm for index, w in vec.items()}

    def score(self, a: Optional[Record], b: Optional[Record]) -> float:
        if not self._is_fitted:
            raise RuntimeError("TFIDFDistance must be trained before scoring")
        va = self._vector(_text(a))
        vb = self._vector(_text(b))
        if len(va) > len(vb):
            va, vb = vb, va
        return sum(w * vb.get(index, 0.0) for index, w in va.items())


get_registry("distances").register("jaccard", JaccardDistance)
get_registry("distances").register("tfidf", TFIDFDistance)
