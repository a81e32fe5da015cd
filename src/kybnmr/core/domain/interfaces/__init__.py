"""Domain interfaces."""

from .match_policy import MatchPolicy

__all__ = ["MatchPolicy"]
