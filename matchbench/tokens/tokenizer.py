"""
Tokenizer and interning vocabulary.

Tokens are maximal runs of letters, maximal runs of digits, or (when
punctuation is kept) single punctuation characters. Every distinct token
string is interned once in a Vocabulary and receives a 1-based id in order
of first appearance.
"""

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Token:
    """An interned token: its id in the owning vocabulary and its string."""
    index: int
    value: str

    def __str__(self) -> str:
        return self.value


class Vocabulary:
    """
    Interning table mapping normalized strings to Tokens.

    The vocabulary only grows. Ids start at 1 and are never reused, so
    ``max_token_index`` can be used to size fixed-length vectors.
    Interning is serialized, so one vocabulary may be shared across threads.
    """

    def __init__(self):
        self._tokens: Dict[str, Token] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def intern(self, s: str) -> Token:
        """Return the Token for ``s``, allocating the next id on first sight."""
        with self._lock:
            tok = self._tokens.get(s)
            if tok is None:
                self._next_id += 1
                tok = Token(self._next_id, s)
                self._tokens[s] = tok
            return tok

    def get(self, s: str) -> Optional[Token]:
        """Look up ``s`` without interning it."""
        return self._tokens.get(s)

    def tokens(self) -> List[Token]:
        """All interned tokens, ordered by string."""
        with self._lock:
            return [self._tokens[k] for k in sorted(self._tokens)]

    @property
    def max_token_index(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, s: str) -> bool:
        return s in self._tokens


class Tokenizer:
    """
    Splits text into interned tokens.

    Args:
        ignore_punctuation: Drop punctuation instead of emitting it as
            one-character tokens.
        ignore_case: Lower-case tokens before interning.
        vocabulary: Vocabulary to intern into. A private one is created
            when omitted.
    """

    def __init__(
        self,
        ignore_punctuation: bool = True,
        ignore_case: bool = True,
        vocabulary: Vocabulary = None,
    ):
        self.ignore_punctuation = ignore_punctuation
        self.ignore_case = ignore_case
        self.vocabulary = vocabulary if vocabulary is not None else Vocabulary()

    def __repr__(self) -> str:
        return (f"Tokenizer(ignore_punctuation={self.ignore_punctuation}, "
                f"ignore_case={self.ignore_case})")

    def tokenize(self, text: str) -> List[Token]:
        """
        Tokenize ``text`` in a single left-to-right pass.

        Letters and digits never merge into one token, so "abc123" yields
        "abc" and "123".
        """
        tokens = []
        cursor = 0
        n = len(text)
        while cursor < n:
            ch = text[cursor]
            if ch.isspace():
                cursor += 1
            elif ch.isalpha():
                start = cursor
                while cursor < n and text[cursor].isalpha():
                    cursor += 1
                tokens.append(self._intern_normalized(text[start:cursor]))
            elif ch.isdecimal():
                start = cursor
                while cursor < n and text[cursor].isdecimal():
                    cursor += 1
                tokens.append(self._intern_normalized(text[start:cursor]))
            else:
                if not self.ignore_punctuation:
                    tokens.append(self._intern_normalized(ch))
                cursor += 1
        return tokens

    def token_strings(self, text: str) -> List[str]:
        """Tokenize ``text`` and return the token strings."""
        return [tok.value for tok in self.tokenize(text)]

    def intern(self, s: str) -> Token:
        """Intern ``s`` as given, without case folding."""
        return self.vocabulary.intern(s)

    def tokens(self) -> List[Token]:
        """All tokens seen so far, ordered by string."""
        return self.vocabulary.tokens()

    def max_token_index(self) -> int:
        return self.vocabulary.max_token_index

    def _intern_normalized(self, s: str) -> Token:
        return self.vocabulary.intern(s.lower() if self.ignore_case else s)
