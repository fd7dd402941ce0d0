"""Dataset handles."""

from .match_data import MatchData, load_match_data
