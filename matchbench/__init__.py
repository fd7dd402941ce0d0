"""
matchbench: ranking evaluation for record-linkage pipelines

Scores blocked candidate pairs with a distance function, ranks them and
reports precision, recall, F1 and average precision over the ranking.
"""

__version__ = "0.1.0"

from .core.types import Record, CandidatePair, CandidatePairs, Present, Absent, ExperimentResult
from .core.registry import Registry, get_registry
from .tokens import Token, Tokenizer, Vocabulary

from . import data
from . import blocking
from . import distances
from . import metrics
from . import runner

from .runner import MatchExperiment
