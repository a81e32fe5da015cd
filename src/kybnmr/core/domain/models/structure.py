#!/usr/bin/env python3
# src/kybnmr/core/domain/models/structure.py

"""
Domain model for one conformer: an ordered list of atoms plus its energy.

Atom order is significant. Two structures are only comparable when they
describe the same molecule with the same atom ordering.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .atom import Atom

Ensemble = List["Structure"]


@dataclass(frozen=True)
class Structure:
    """A conformer with its energy in Hartree."""

    atoms: Tuple[Atom, ...]
    energy: float
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        # Accept any sequence of atoms but store a tuple
        if not isinstance(self.atoms, tuple):
            object.__setattr__(self, "atoms", tuple(self.atoms))

    @classmethod
    def from_arrays(
        cls,
        elements: Sequence[str],
        coordinates: Iterable[Sequence[float]],
        energy: float,
        label: Optional[str] = None,
    ) -> "Structure":
        """Build a structure from parallel element and coordinate lists."""
        coords = [tuple(float(c) for c in row) for row in coordinates]
        if len(coords) != len(elements):
            raise ValueError(
                f"Got {len(elements)} elements but {len(coords)} coordinate rows"
            )
        atoms = tuple(Atom(element, xyz) for element, xyz in zip(elements, coords))
        return cls(atoms=atoms, energy=float(energy), label=label)

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    @property
    def elements(self) -> List[str]:
        return [atom.element for atom in self.atoms]

    def get_coordinates(self) -> np.ndarray:
        """Get coordinates of all atoms.

        Returns:
            numpy array of shape (n_atoms, 3) containing xyz coordinates
        """
        return np.array([atom.coordinates for atom in self.atoms], dtype=np.float64)
