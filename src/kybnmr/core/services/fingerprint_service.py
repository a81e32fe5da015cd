"""Service computing distance-spectrum fingerprints of conformers."""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional, Sequence

import numpy as np
from scipy.spatial.distance import pdist

from ..domain.errors import DegenerateStructure
from ..domain.models.structure import Structure

logger = logging.getLogger(__name__)


def fingerprint(structure: Structure) -> np.ndarray:
    """
    Compute the sorted array of all pairwise interatomic distances.

    The result has n*(n-1)/2 entries for n atoms and does not depend on
    rotation or translation of the structure. Isomers sharing the same
    multiset of distances are indistinguishable.

    Args:
        structure: Structure with at least two atoms

    Returns:
        Ascending float64 array of pair distances

    Raises:
        DegenerateStructure: If the structure has fewer than two atoms
    """
    if structure.num_atoms < 2:
        raise DegenerateStructure(
            f"Cannot fingerprint a structure with {structure.num_atoms} atom(s)"
        )
    # pdist enumerates the i<j pairs in condensed form
    distances = pdist(structure.get_coordinates(), metric="euclidean")
    return np.sort(distances)


class FingerprintService:
    """Service computing fingerprints, optionally in parallel."""

    def compute(self, structure: Structure) -> np.ndarray:
        """Fingerprint a single structure."""
        return fingerprint(structure)

    def compute_many(
        self, structures: Sequence[Structure], max_workers: Optional[int] = 1
    ) -> List[np.ndarray]:
        """
        Fingerprint a whole ensemble.

        Args:
            structures: Structures to fingerprint
            max_workers: Number of worker processes; 1 or None runs inline

        Returns:
            List of fingerprints aligned with the input order
        """
        if not max_workers or max_workers <= 1 or len(structures) < 2:
            return [fingerprint(s) for s in structures]

        logger.debug(
            "Precomputing %d fingerprints with %d workers",
            len(structures),
            max_workers,
        )
        results: List[Optional[np.ndarray]] = [None] * len(structures)
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(fingerprint, structure): i
                for i, structure in enumerate(structures)
            }
            for future in as_completed(futures):
                # Each task fills only its own slot
                results[futures[future]] = future.result()
        return results
