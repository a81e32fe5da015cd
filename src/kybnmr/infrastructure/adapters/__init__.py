"""Adapters for external structure file formats."""

from .gaussian_adapter import GaussianAdapter, read_gaussian_output
from .xyz_adapter import XYZAdapter, read_ensemble, write_ensemble

__all__ = [
    "GaussianAdapter",
    "read_gaussian_output",
    "XYZAdapter",
    "read_ensemble",
    "write_ensemble",
]
