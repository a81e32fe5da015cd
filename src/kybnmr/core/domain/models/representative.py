"""Model for one slot of the representative set."""

from dataclasses import dataclass

import numpy as np

from .structure import Structure


@dataclass
class Representative:
    """A representative structure together with its cached fingerprint."""

    structure: Structure
    fingerprint: np.ndarray
    members: int = 1

    def absorb(self) -> None:
        """Record a duplicate that was discarded in favour of this structure."""
        self.members += 1

    def replace(self, structure: Structure, fingerprint: np.ndarray) -> None:
        """Make a lower-energy duplicate the new face of this cluster."""
        self.structure = structure
        self.fingerprint = fingerprint
        self.members += 1
