#!/usr/bin/env python3
# src/kybnmr/core/domain/models/atom.py

"""
Domain model representing an atom in a conformer.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Atom:
    """An element symbol and a Cartesian position in Angstrom."""

    element: str
    coordinates: Tuple[float, float, float]

    @property
    def x(self) -> float:
        return self.coordinates[0]

    @property
    def y(self) -> float:
        return self.coordinates[1]

    @property
    def z(self) -> float:
        return self.coordinates[2]
