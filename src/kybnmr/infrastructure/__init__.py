"""Infrastructure implementations of core interfaces and adapters."""

from .repositories.ensemble_repository import EnsembleRepository
from .adapters.xyz_adapter import XYZAdapter
from .adapters.gaussian_adapter import GaussianAdapter

__all__ = [
    "EnsembleRepository",
    "XYZAdapter",
    "GaussianAdapter",
]
