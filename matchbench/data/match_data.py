"""
In-memory labeled dataset for matching experiments.

Each record belongs to a source table and carries a group id; two distinct
records are a true match when their group ids agree. With a single source
the task is deduplication, with several sources only cross-source pairs are
admissible.
"""

import csv
from collections import Counter, defaultdict
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from ..core.types import Record
from ..core.registry import get_registry

COLUMNS = ["source", "group_id", "text"]


class MatchData:
    """Records grouped by source, with match labels derived from group ids."""

    def __init__(self, records: Iterable[Tuple[str, str, str]], filename: str = None):
        """
        Args:
            records: (source, group_id, text) triples.
            filename: Where the records were read from, for reporting.
        """
        self.filename = filename or "<memory>"
        self.records: List[Record] = [
            Record(i, str(src), str(gid), str(text))
            for i, (src, gid, text) in enumerate(records)
        ]
        self.sources: List[str] = []
        self._by_source: Dict[str, List[Record]] = defaultdict(list)
        for rec in self.records:
            if rec.source not in self._by_source:
                self.sources.append(rec.source)
            self._by_source[rec.source].append(rec)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, filename: str = None) -> "MatchData":
        """Build from a DataFrame with columns source, group_id, text."""
        missing = [c for c in COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Missing columns: {missing}")
        rows = df[COLUMNS].fillna("").astype(str).itertuples(index=False, name=None)
        return cls(rows, filename=filename)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"MatchData({self.filename!r}, records={len(self)}, sources={len(self.sources)})"

    def source_records(self, source: str) -> List[Record]:
        return list(self._by_source.get(source, []))

    @property
    def is_dedup(self) -> bool:
        return len(self.sources) <= 1

    def is_admissible(self, a: Record, b: Record) -> bool:
        """Whether (a, b) is a pair the task could ever propose."""
        if a.index == b.index:
            return False
        return self.is_dedup or a.source != b.source

    def is_match(self, a: Optional[Record], b: Optional[Record]) -> bool:
        if a is None or b is None:
            return False
        return self.is_admissible(a, b) and a.group_id == b.group_id

    def admissible_pairs(self) -> Iterator[Tuple[Record, Record]]:
        """Every admissible pair, in a deterministic order."""
        if self.is_dedup:
            yield from combinations(self.records, 2)
            return
        for src_a, src_b in combinations(self.sources, 2):
            for a in self._by_source[src_a]:
                for b in self._by_source[src_b]:
                    yield a, b

    def n_true_matches(self) -> int:
        """Number of true matching pairs in the whole dataset."""
        if self.is_dedup:
            counts = Counter(rec.group_id for rec in self.records)
            return sum(k * (k - 1) // 2 for k in counts.values())
        per_source = {
            src: Counter(rec.group_id for rec in recs)
            for src, recs in self._by_source.items()
        }
        total = 0
        for src_a, src_b in combinations(self.sources, 2):
            ca, cb = per_source[src_a], per_source[src_b]
            total += sum(k * cb.get(gid, 0) for gid, k in ca.items())
        return total


def load_match_data(path: str) -> MatchData:
    """
    Load a headerless tab-separated file of source, group_id, text.

    Args:
        path: File path.

    Returns:
        MatchData with one record per line.
    """
    df = pd.read_csv(
        path,
        sep="\t",
        header=None,
        names=COLUMNS,
        dtype=str,
        quoting=csv.QUOTE_NONE,
        keep_default_na=False,
    )
    return MatchData.from_frame(df, filename=str(path))


get_registry("datasets").register("tsv", factory=load_match_data)
