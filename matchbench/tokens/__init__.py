"""Tokenization and token interning."""

from .tokenizer import Token, Tokenizer, Vocabulary
