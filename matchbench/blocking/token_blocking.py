"""Token-based blocking strategy."""

from collections import defaultdict
from typing import Set

from ..core.types import CandidatePairs, Record
from ..core.registry import get_registry
from ..data.match_data import MatchData
from ..tokens import Tokenizer
from .base import BaseBlocker


class TokenBlocker(BaseBlocker):
    """
    Token blocking: group records by shared tokens.

    Records sharing at least one token are placed in the same block.
    """

    def __init__(
        self,
        min_token_length: int = 2,
        max_block_size: int = 1000,
        tokenizer: Tokenizer = None,
        **kwargs
    ):
        """
        Initialize token blocker.

        Args:
            min_token_length: Minimum token length to consider.
            max_block_size: Maximum records per block (prune large blocks).
            tokenizer: Tokenizer to split record text with.
        """
        super().__init__("token", **kwargs)
        self.min_token_length = min_token_length
        self.max_block_size = max_block_size
        self.tokenizer = tokenizer or Tokenizer()

    def _get_tokens(self, record: Record) -> Set[int]:
        """Token ids of a record, short tokens dropped."""
        return {
            tok.index for tok in self.tokenizer.tokenize(record.text)
            if len(tok.value) >= self.min_token_length
        }

    def block(self, data: MatchData) -> CandidatePairs:
        """Generate pairs from token blocks."""
        blocks = defaultdict(list)
        for record in data:
            for token in self._get_tokens(record):
                blocks[token].append(record)

        source_rank = {src: i for i, src in enumerate(data.sources)}

        def order(rec: Record):
            return source_rank[rec.source], rec.index

        candidate_set = set()
        n_pruned = 0
        for members in blocks.values():
            if len(members) > self.max_block_size:
                n_pruned += 1
                continue
            for i in range(len(members)):
                for j in range(i + 1, len(members)):
                    a, b = sorted((members[i], members[j]), key=order)
                    if data.is_admissible(a, b):
                        candidate_set.add((a, b))

        pairs = sorted(candidate_set, key=lambda p: (order(p[0]), order(p[1])))
        return self._label(
            data,
            pairs,
            metadata={"n_blocks": len(blocks), "n_pruned_blocks": n_pruned},
        )


get_registry("blockers").register("token", TokenBlocker)
