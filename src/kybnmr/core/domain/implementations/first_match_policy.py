"""Merge a candidate into the first representative it matches."""

from typing import TYPE_CHECKING, Callable, Optional, Sequence

import numpy as np

from ..interfaces.match_policy import MatchPolicy
from ..models.representative import Representative
from ..models.structure import Structure

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ...services.similarity_service import SimilarityService


class FirstMatchPolicy(MatchPolicy):
    """Stop at the first similar representative in scan order."""

    name = "first"

    def select(
        self,
        candidate: Structure,
        representatives: Sequence[Representative],
        similarity: "SimilarityService",
        candidate_fingerprint: Callable[[], np.ndarray],
    ) -> Optional[int]:
        for index, rep in enumerate(representatives):
            # Energy is checked before the fingerprint is ever requested
            if not similarity.energy_close(candidate, rep.structure):
                continue
            if similarity.is_similar(
                candidate, rep.structure, candidate_fingerprint(), rep.fingerprint
            ):
                return index
        return None
