"""Core domain models, interfaces and services for conformer deduplication."""

from .domain.errors import (
    DegenerateStructure,
    DoubleCheckError,
    EmptyEnsemble,
    EnsembleParseError,
    InvalidThreshold,
    StructureMismatch,
)
from .domain.models import Atom, DoubleCheckReport, ReportEntry, Structure
from .services.double_check_service import DoubleCheckService, double_check
from .services.fingerprint_service import fingerprint
from .services.similarity_service import is_similar

__all__ = [
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
