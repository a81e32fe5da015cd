"""Core business logic services."""

from .fingerprint_service import FingerprintService, fingerprint
from .similarity_service import SimilarityService, is_similar
from .double_check_service import DoubleCheckService, double_check
from .report_service import ReportService, format_report, rank_by_energy

__all__ = [
    "FingerprintService",
    "fingerprint",
    "SimilarityService",
    "is_similar",
    "DoubleCheckService",
    "double_check",
    "ReportService",
    "format_report",
    "rank_by_energy",
]
