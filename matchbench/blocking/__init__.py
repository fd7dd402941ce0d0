"""Blocking strategies for candidate pair generation."""

from .base import BaseBlocker
from .null import NullBlocker
from .token_blocking import TokenBlocker
