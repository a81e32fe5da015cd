"""Concrete matching policies."""

from typing import Dict, Type

from ..interfaces.match_policy import MatchPolicy
from .closest_match_policy import ClosestMatchPolicy
from .first_match_policy import FirstMatchPolicy

POLICIES: Dict[str, Type[MatchPolicy]] = {
    FirstMatchPolicy.name: FirstMatchPolicy,
    ClosestMatchPolicy.name: ClosestMatchPolicy,
}


def get_match_policy(name: str) -> MatchPolicy:
    """Instantiate a matching policy by name ("first" or "closest")."""
    try:
        return POLICIES[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown match policy '{name}'. Choose from: {', '.join(POLICIES)}"
        ) from None


__all__ = [
    "ClosestMatchPolicy",
    "FirstMatchPolicy",
    "POLICIES",
    "get_match_policy",
]
