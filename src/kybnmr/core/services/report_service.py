"""Service ranking representatives and summarising a double check run."""

from typing import List, Optional, Sequence

from ..constants import HARTREE_TO_KCAL
from ..domain.models.dedup_report import DoubleCheckReport, ReportEntry
from ..domain.models.structure import Structure


def rank_by_energy(structures: Sequence[Structure]) -> List[Structure]:
    """Sort ascending by energy; equal energies keep their input order."""
    return sorted(structures, key=lambda s: s.energy)


class ReportService:
    """Builds and renders reports over a finalized representative set."""

    def build(
        self,
        representatives: Sequence[Structure],
        input_count: int = 0,
        discarded: int = 0,
        replaced: int = 0,
        elapsed: float = 0.0,
        members: Optional[Sequence[int]] = None,
    ) -> DoubleCheckReport:
        """
        Build a report for representatives already sorted by energy.

        Args:
            representatives: Energy-sorted representative structures
            input_count: Number of structures in the input ensemble
            discarded: Candidates dropped as higher-energy duplicates
            replaced: Representatives replaced by a lower-energy duplicate
            elapsed: Wall time of the run in seconds
            members: Cluster size of each representative, aligned with
                ``representatives``; defaults to 1 each

        Returns:
            DoubleCheckReport with relative energies in kcal/mol
        """
        if not representatives:
            return DoubleCheckReport(
                count=0,
                min_energy=float("nan"),
                input_count=input_count,
                discarded=discarded,
                replaced=replaced,
                elapsed=elapsed,
            )

        if members is None:
            members = [1] * len(representatives)
        elif len(members) != len(representatives):
            raise ValueError(
                f"Got {len(members)} cluster size(s) for "
                f"{len(representatives)} representative(s)"
            )

        min_energy = min(s.energy for s in representatives)
        entries = [
            ReportEntry(
                index=i + 1,
                energy=s.energy,
                relative_energy=(s.energy - min_energy) * HARTREE_TO_KCAL,
                members=size,
            )
            for i, (s, size) in enumerate(zip(representatives, members))
        ]
        return DoubleCheckReport(
            count=len(entries),
            min_energy=min_energy,
            entries=entries,
            input_count=input_count,
            discarded=discarded,
            replaced=replaced,
            elapsed=elapsed,
        )


def format_report(report: DoubleCheckReport) -> str:
    """Render a report as a fixed-width text table."""
    lines = [
        f"{'#':>6s}  {'Energy (Eh)':>18s}  {'dE (kcal/mol)':>14s}  {'Members':>7s}",
        "-" * 51,
    ]
    for entry in report.entries:
        lines.append(
            f"{entry.index:>6d}  {entry.energy:>18.8f}  {entry.relative_energy:>14.4f}  "
            f"{entry.members:>7d}"
        )
    lines.append("-" * 51)
    lines.append(
        f"{report.count} representative(s) kept from {report.input_count} "
        f"structure(s): {report.discarded} discarded, {report.replaced} replaced"
    )
    return "\n".join(lines)
