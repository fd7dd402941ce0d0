"""Core types and registry."""

from .types import (
    Record,
    CandidatePair,
    CandidatePairs,
    Present,
    Absent,
    RankSlot,
    ExperimentResult,
)
from .registry import Registry, get_registry
