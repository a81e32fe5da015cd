"""Merge a candidate into the most similar representative."""

from typing import TYPE_CHECKING, Callable, Optional, Sequence

import numpy as np

from ..interfaces.match_policy import MatchPolicy
from ..models.representative import Representative
from ..models.structure import Structure

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ...services.similarity_service import SimilarityService


class ClosestMatchPolicy(MatchPolicy):
    """
    Scan every representative and keep the one with the smallest
    fingerprint deviation. Equal deviations resolve to the earliest index.
    """

    name = "closest"

    def select(
        self,
        candidate: Structure,
        representatives: Sequence[Representative],
        similarity: "SimilarityService",
        candidate_fingerprint: Callable[[], np.ndarray],
    ) -> Optional[int]:
        best_index = None
        best_deviation = float("inf")
        for index, rep in enumerate(representatives):
            if not similarity.energy_close(candidate, rep.structure):
                continue
            deviation = similarity.deviation(
                candidate, rep.structure, candidate_fingerprint(), rep.fingerprint
            )
            if deviation is not None and deviation < best_deviation:
                best_index = index
                best_deviation = deviation
        return best_index
