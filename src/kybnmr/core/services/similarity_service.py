"""Service deciding whether two conformers are duplicates."""

from typing import Optional

import numpy as np

from ..constants import HARTREE_TO_KCAL
from ..domain.errors import StructureMismatch
from ..domain.models.structure import Structure
from .fingerprint_service import fingerprint


def energy_difference_kcal(a: Structure, b: Structure) -> float:
    """Absolute energy difference of two structures in kcal/mol."""
    return abs(a.energy - b.energy) * HARTREE_TO_KCAL


def fingerprint_deviation(fp_a: np.ndarray, fp_b: np.ndarray) -> float:
    """Largest elementwise difference between two fingerprints in Angstrom."""
    if fp_a.shape != fp_b.shape:
        raise StructureMismatch(
            f"Fingerprints of length {fp_a.size} and {fp_b.size} are not comparable"
        )
    return float(np.max(np.abs(fp_a - fp_b)))


def _check_atom_counts(a: Structure, b: Structure) -> None:
    if a.num_atoms != b.num_atoms:
        raise StructureMismatch(
            f"Cannot compare a {a.num_atoms}-atom structure "
            f"with a {b.num_atoms}-atom structure"
        )


def is_similar(
    a: Structure,
    b: Structure,
    energy_threshold: float,
    distance_threshold: float,
) -> bool:
    """
    Check whether two structures are duplicates of one another.

    The energy test runs first; geometry is only compared when the energies
    are within ``energy_threshold`` kcal/mol.

    Args:
        a: First structure
        b: Second structure
        energy_threshold: Maximum energy difference in kcal/mol
        distance_threshold: Maximum fingerprint deviation in Angstrom

    Returns:
        True if both criteria are met

    Raises:
        StructureMismatch: If the atom counts differ and energies are close
    """
    return SimilarityService(energy_threshold, distance_threshold).is_similar(a, b)


class SimilarityService:
    """Similarity oracle bound to a pair of thresholds.

    Accepts precomputed fingerprints so callers can cache them.
    """

    def __init__(self, energy_threshold: float, distance_threshold: float):
        self.energy_threshold = energy_threshold
        self.distance_threshold = distance_threshold

    def energy_close(self, a: Structure, b: Structure) -> bool:
        """True if the energies differ by at most the energy threshold.

        A NaN energy difference is never close.
        """
        return energy_difference_kcal(a, b) <= self.energy_threshold

    def deviation(
        self,
        a: Structure,
        b: Structure,
        fp_a: Optional[np.ndarray] = None,
        fp_b: Optional[np.ndarray] = None,
    ) -> Optional[float]:
        """
        Compare two structures.

        Returns:
            The fingerprint deviation if the structures are similar, else None
        """
        if not self.energy_close(a, b):
            return None
        _check_atom_counts(a, b)
        if fp_a is None:
            fp_a = fingerprint(a)
        if fp_b is None:
            fp_b = fingerprint(b)
        value = fingerprint_deviation(fp_a, fp_b)
        if value <= self.distance_threshold:
            return value
        return None

    def is_similar(
        self,
        a: Structure,
        b: Structure,
        fp_a: Optional[np.ndarray] = None,
        fp_b: Optional[np.ndarray] = None,
    ) -> bool:
        return self.deviation(a, b, fp_a, fp_b) is not None
