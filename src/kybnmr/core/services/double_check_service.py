"""Service removing near-duplicate conformers from an ensemble.

A single left-to-right pass keeps a growing list of representatives. Each
candidate is compared against the representatives chosen so far; when the
matching policy finds a duplicate, the lower-energy structure of the two
stays as the representative. Candidates without a match become new
representatives. The surviving set is finally sorted by energy.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from tqdm import tqdm

from ..domain.errors import (
    DegenerateStructure,
    EmptyEnsemble,
    InvalidThreshold,
    StructureMismatch,
)
from ..domain.implementations import get_match_policy
from ..domain.interfaces.match_policy import MatchPolicy
from ..domain.models.dedup_report import DoubleCheckReport
from ..domain.models.representative import Representative
from ..domain.models.structure import Structure
from ..utils.benchmarking import Timer
from .fingerprint_service import FingerprintService
from .report_service import ReportService
from .similarity_service import SimilarityService

logger = logging.getLogger(__name__)


def validate_thresholds(energy_threshold: float, distance_threshold: float) -> None:
    """Raise InvalidThreshold unless both thresholds are non-negative numbers.

    NaN fails the comparison and is rejected as well.
    """
    for name, value in (
        ("energy", energy_threshold),
        ("distance", distance_threshold),
    ):
        if not value >= 0:
            raise InvalidThreshold(f"The {name} threshold must be >= 0, got {value}")


def validate_ensemble(ensemble: Sequence[Structure]) -> None:
    """Check the ensemble is non-empty and describes one molecule."""
    if not ensemble:
        raise EmptyEnsemble("Cannot double check an empty ensemble")
    num_atoms = ensemble[0].num_atoms
    for i, structure in enumerate(ensemble):
        if structure.num_atoms != num_atoms:
            raise StructureMismatch(
                f"Structure {i + 1} has {structure.num_atoms} atoms, "
                f"expected {num_atoms} like structure 1"
            )
    if num_atoms < 2:
        raise DegenerateStructure(
            f"Structures need at least two atoms, got {num_atoms}"
        )


class DoubleCheckService:
    """Service running the energy-and-geometry duplicate filter."""

    def __init__(
        self,
        energy_threshold: float,
        distance_threshold: float,
        policy: Union[str, MatchPolicy, None] = None,
        fingerprint_service: Optional[FingerprintService] = None,
        report_service: Optional[ReportService] = None,
        max_workers: int = 1,
        show_progress: bool = False,
    ):
        """
        Initialize the service.

        Args:
            energy_threshold: Energy window in kcal/mol
            distance_threshold: Fingerprint deviation window in Angstrom
            policy: Matching policy or its name; defaults to first match
            fingerprint_service: Fingerprint provider
            report_service: Report builder
            max_workers: Processes used to precompute fingerprints
            show_progress: Display a progress bar over the scan
        """
        validate_thresholds(energy_threshold, distance_threshold)
        if policy is None:
            policy = "first"
        if isinstance(policy, str):
            policy = get_match_policy(policy)
        self._similarity = SimilarityService(energy_threshold, distance_threshold)
        self._policy = policy
        self._fingerprints = fingerprint_service or FingerprintService()
        self._reports = report_service or ReportService()
        self._max_workers = max_workers
        self._show_progress = show_progress

    @property
    def energy_threshold(self) -> float:
        return self._similarity.energy_threshold

    @property
    def distance_threshold(self) -> float:
        return self._similarity.distance_threshold

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    def run(
        self, ensemble: Sequence[Structure]
    ) -> Tuple[List[Structure], DoubleCheckReport]:
        """
        Reduce an ensemble to its distinct conformers.

        Args:
            ensemble: Structures in discovery order

        Returns:
            Tuple of (energy-sorted representatives, report)

        Raises:
            EmptyEnsemble: If the ensemble is empty
            StructureMismatch: If atom counts differ within the ensemble
            DegenerateStructure: If structures have fewer than two atoms
        """
        validate_ensemble(ensemble)

        with Timer("double check") as timer:
            precomputed = None
            if self._max_workers and self._max_workers > 1:
                precomputed = self._fingerprints.compute_many(
                    ensemble, max_workers=self._max_workers
                )
            representatives, discarded, replaced = self._scan(ensemble, precomputed)
            # Stable sort keeps input order among equal energies
            ordered = sorted(representatives, key=lambda rep: rep.structure.energy)
            ranked = [rep.structure for rep in ordered]

        report = self._reports.build(
            ranked,
            input_count=len(ensemble),
            discarded=discarded,
            replaced=replaced,
            elapsed=timer.elapsed(),
            members=[rep.members for rep in ordered],
        )
        logger.info(
            "Double check (E <= %.4f kcal/mol, d <= %.4f A, %s match): "
            "%d of %d structures kept, %d discarded, %d replaced",
            self.energy_threshold,
            self.distance_threshold,
            self._policy.name,
            report.count,
            report.input_count,
            discarded,
            replaced,
        )
        return ranked, report

    def _scan(
        self,
        ensemble: Sequence[Structure],
        precomputed: Optional[List[np.ndarray]],
    ) -> Tuple[List[Representative], int, int]:
        first = ensemble[0]
        first_fp = (
            precomputed[0] if precomputed is not None else self._fingerprints.compute(first)
        )
        representatives = [Representative(first, first_fp)]
        discarded = 0
        replaced = 0

        candidates = range(1, len(ensemble))
        if self._show_progress:
            candidates = tqdm(candidates, desc="Double check", unit="conf")

        for i in candidates:
            candidate = ensemble[i]
            cache: List[np.ndarray] = []

            def candidate_fingerprint() -> np.ndarray:
                if not cache:
                    if precomputed is not None:
                        cache.append(precomputed[i])
                    else:
                        cache.append(self._fingerprints.compute(candidate))
                return cache[0]

            index = self._policy.select(
                candidate, representatives, self._similarity, candidate_fingerprint
            )
            if index is None:
                representatives.append(
                    Representative(candidate, candidate_fingerprint())
                )
                logger.debug(
                    "Structure %d (E=%.8f) is new representative %d",
                    i + 1,
                    candidate.energy,
                    len(representatives),
                )
                continue

            rep = representatives[index]
            if candidate.energy < rep.structure.energy:
                logger.debug(
                    "Structure %d (E=%.8f) replaces representative %d (E=%.8f)",
                    i + 1,
                    candidate.energy,
                    index + 1,
                    rep.structure.energy,
                )
                rep.replace(candidate, candidate_fingerprint())
                replaced += 1
            else:
                logger.debug(
                    "Structure %d (E=%.8f) duplicates representative %d",
                    i + 1,
                    candidate.energy,
                    index + 1,
                )
                rep.absorb()
                discarded += 1

        return representatives, discarded, replaced


def double_check(
    energy_threshold: float,
    distance_threshold: float,
    ensemble: Sequence[Structure],
    policy: Union[str, MatchPolicy, None] = None,
    max_workers: int = 1,
) -> Tuple[List[Structure], DoubleCheckReport]:
    """Run a one-off double check; see :class:`DoubleCheckService`.

    Raises:
        InvalidThreshold: If either threshold is negative
    """
    service = DoubleCheckService(
        energy_threshold,
        distance_threshold,
        policy=policy,
        max_workers=max_workers,
    )
    return service.run(ensemble)
