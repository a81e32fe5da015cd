# src/kybnmr/infrastructure/repositories/ensemble_repository.py
"""Repository implementation for conformer ensembles stored as XYZ files."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ...core.domain.models.structure import Structure
from ...core.interfaces.repository import Repository
from ..adapters.gaussian_adapter import GaussianAdapter
from ..adapters.xyz_adapter import read_ensemble, write_ensemble


class EnsembleRepository(Repository[List[Structure]]):
    """Repository for ensembles kept as ``<id>.xyz`` files in one directory."""

    def __init__(self, data_dir: Union[str, Path]):
        """
        Initialize repository with data directory.

        Args:
            data_dir: Directory containing ensemble files
        """
        self._data_dir = Path(data_dir)
        self._cache: Dict[str, List[Structure]] = {}

    def path_for(self, id: str) -> Path:
        return self._data_dir / f"{id}.xyz"

    def get(self, id: str) -> Optional[List[Structure]]:
        """
        Retrieve an ensemble by ID.

        Args:
            id: File stem of the ensemble

        Returns:
            List of structures, or None if no such file exists
        """
        if id in self._cache:
            return self._cache[id]

        file_path = self.path_for(id)
        if not file_path.is_file():
            return None

        structures = read_ensemble(file_path)
        self._cache[id] = structures
        return structures

    def list(self) -> Dict[str, List[Structure]]:
        """
        List all ensembles in the data directory.

        Returns:
            Dictionary mapping IDs to ensembles
        """
        ensembles = {}
        for file_path in sorted(self._data_dir.glob("*.xyz")):
            structures = self.get(file_path.stem)
            if structures is not None:
                ensembles[file_path.stem] = structures
        return ensembles

    def save(
        self, id: str, entity: Sequence[Structure], append: bool = False
    ) -> List[Structure]:
        """Write an ensemble, replacing the file unless ``append`` is set."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        write_ensemble(entity, self.path_for(id), append=append)
        # Appending changes the stored content, so reload on next access
        self._cache.pop(id, None)
        return list(entity)

    def delete(self, id: str) -> None:
        """Delete an ensemble file."""
        self._cache.pop(id, None)
        file_path = self.path_for(id)
        if file_path.exists():
            file_path.unlink()

    @staticmethod
    def from_gaussian_outputs(paths: Sequence[Union[str, Path]]) -> List[Structure]:
        """Build an ensemble from Gaussian output files in the given order."""
        return GaussianAdapter().read_many(paths)
