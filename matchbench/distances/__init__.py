"""Distance functions, learners and the teacher that trains them."""

from .base import DistanceFunction, DistanceLearner, BasicTeacher
from .token_distances import JaccardDistance, TFIDFDistance
