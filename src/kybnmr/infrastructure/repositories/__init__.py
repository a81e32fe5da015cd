"""Repositories backed by the file system."""

from .ensemble_repository import EnsembleRepository

__all__ = ["EnsembleRepository"]
