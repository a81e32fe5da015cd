"""Domain model for the summary of a double check run."""

from dataclasses import dataclass, field, asdict
from typing import List


@dataclass(frozen=True)
class ReportEntry:
    """One representative in the ranked output."""

    index: int
    energy: float
    relative_energy: float  # kcal/mol above the lowest representative
    members: int = 1  # input structures merged into this cluster


@dataclass
class DoubleCheckReport:
    """Contains the ranked representatives and run statistics."""

    count: int
    min_energy: float
    entries: List[ReportEntry] = field(default_factory=list)
    input_count: int = 0
    discarded: int = 0
    replaced: int = 0
    elapsed: float = 0.0

    @property
    def removed(self) -> int:
        """Number of input structures that did not survive as representatives."""
        return self.input_count - self.count

    def to_dict(self) -> dict:
        return asdict(self)
