"""
Conformer double check for the NMR conformer pipeline.

Removes near-duplicate conformers from an ensemble by comparing energies
and sorted interatomic distance spectra.

Public API:
    double_check(energy_threshold, distance_threshold, ensemble)
        -> (representatives, report)
"""

__version__ = "0.1.0"

from kybnmr.core import (
    Atom,
    DegenerateStructure,
    DoubleCheckError,
    DoubleCheckReport,
    DoubleCheckService,
    EmptyEnsemble,
    EnsembleParseError,
    InvalidThreshold,
    ReportEntry,
    Structure,
    StructureMismatch,
    double_check,
    fingerprint,
    is_similar,
)

__all__ = [
    "__version__",
    "Atom",
    "Structure",
    "ReportEntry",
    "DoubleCheckReport",
    "DoubleCheckError",
    "InvalidThreshold",
    "EmptyEnsemble",
    "StructureMismatch",
    "DegenerateStructure",
    "EnsembleParseError",
    "DoubleCheckService",
    "double_check",
    "fingerprint",
    "is_similar",
]
