"""Domain model classes."""

from .atom import Atom
from .structure import Structure, Ensemble
from .dedup_report import ReportEntry, DoubleCheckReport
from .representative import Representative

__all__ = [
    "Atom",
    "Structure",
    "Ensemble",
    "ReportEntry",
    "DoubleCheckReport",
    "Representative",
]
