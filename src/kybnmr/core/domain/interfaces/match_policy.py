"""Interface for choosing which representative a candidate merges into."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional, Sequence

import numpy as np

from ..models.representative import Representative
from ..models.structure import Structure

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ...services.similarity_service import SimilarityService


class MatchPolicy(ABC):
    """Abstract base class for representative matching strategies."""

    name: str = ""

    @abstractmethod
    def select(
        self,
        candidate: Structure,
        representatives: Sequence[Representative],
        similarity: "SimilarityService",
        candidate_fingerprint: Callable[[], np.ndarray],
    ) -> Optional[int]:
        """
        Pick the representative a candidate belongs to.

        Args:
            candidate: Structure being placed
            representatives: Current representative set, in scan order
            similarity: Oracle bound to the run thresholds
            candidate_fingerprint: Returns the candidate fingerprint on demand

        Returns:
            Index into ``representatives``, or None if the candidate is new
        """
        pass
