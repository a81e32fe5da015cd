"""Adapter for multi-structure XYZ ensemble files.

Each block of the file holds one structure::

      3
          -44.77460877
     C         -2.3118744671        0.7678923498       -1.6678111578
     C         -1.6215849436       -0.3434974558       -1.2274196373
     C         -1.1789998859       -0.4358310737        0.0929450274

Line 1 is the atom count, line 2 the energy in Hartree and the following
lines are ``<symbol> <x> <y> <z>`` rows. Blocks repeat until end of file.
"""

import logging
import math
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, TextIO, Union

from ...core.domain.errors import EnsembleParseError
from ...core.domain.models.atom import Atom
from ...core.domain.models.structure import Structure

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_COUNT_RE = re.compile(r"^\+?\d+$")


def _parse_energy(line: str) -> float:
    """Energy lines are read leniently: anything non-numeric counts as 0.0."""
    try:
        value = float(line.strip())
    except ValueError:
        logger.debug("Non-numeric energy line %r read as 0.0", line)
        return 0.0
    if not math.isfinite(value):
        logger.debug("Non-finite energy line %r read as 0.0", line)
        return 0.0
    return value


def _parse_atom(line: str, source: str, line_no: int) -> Atom:
    fields = line.split()
    if len(fields) != 4:
        raise EnsembleParseError(
            f"Expected '<symbol> <x> <y> <z>', got {len(fields)} field(s): {line!r}",
            source,
            line_no,
        )
    try:
        x, y, z = (float(value) for value in fields[1:])
    except ValueError:
        raise EnsembleParseError(
            f"Invalid coordinate in row: {line!r}", source, line_no
        ) from None
    return Atom(fields[0], (x, y, z))


def parse_ensemble(lines: Iterable[str], source: str = "<string>") -> List[Structure]:
    """
    Parse XYZ blocks into structures.

    Args:
        lines: File content, one entry per line
        source: Name used in error messages and structure labels

    Returns:
        Structures in file order

    Raises:
        EnsembleParseError: On a malformed header, coordinate row or a block
            cut short by the end of the input
    """
    lines = [line.rstrip("\r\n") for line in lines]
    while lines and not lines[-1].strip():
        lines.pop()

    structures: List[Structure] = []
    pos = 0
    while pos < len(lines):
        header = lines[pos].strip()
        if not _COUNT_RE.match(header):
            raise EnsembleParseError(
                f"Invalid atom count line: {lines[pos]!r}", source, pos + 1
            )
        count = int(header)
        if count < 1:
            raise EnsembleParseError(
                f"Atom count must be positive, got {count}", source, pos + 1
            )

        first_row = pos + 2
        end = first_row + count
        if end > len(lines):
            found = max(0, len(lines) - first_row)
            raise EnsembleParseError(
                f"Block expects {count} atom(s) but the file ends after {found}",
                source,
                pos + 1,
            )

        energy = _parse_energy(lines[pos + 1])
        atoms = tuple(
            _parse_atom(lines[j], source, j + 1) for j in range(first_row, end)
        )
        structures.append(
            Structure(atoms, energy, label=f"{source}#{len(structures) + 1}")
        )
        pos = end

    return structures


def read_ensemble(path: PathLike) -> List[Structure]:
    """Read every structure from an XYZ ensemble file."""
    path = Path(path)
    with open(path, "r") as f:
        structures = parse_ensemble(f, source=str(path))
    logger.info("Read %d structure(s) from %s", len(structures), path)
    return structures


def format_structure(structure: Structure) -> str:
    """Format one structure as an XYZ block."""
    lines = [f"  {structure.num_atoms}", f"\t\t{structure.energy:.8f}"]
    for atom in structure.atoms:
        x, y, z = atom.coordinates
        lines.append(f"{atom.element:>2s} \t\t{x:14.10f} \t\t{y:14.10f} \t\t{z:14.10f}")
    return "\n".join(lines) + "\n"


def dump_ensemble(structures: Sequence[Structure], handle: TextIO) -> None:
    """Write structures to an open text handle."""
    for structure in structures:
        handle.write(format_structure(structure))


def write_ensemble(
    structures: Sequence[Structure], path: PathLike, append: bool = True
) -> Path:
    """
    Write structures as XYZ blocks.

    Args:
        structures: Structures to write
        path: Output file
        append: Append to an existing file instead of truncating it

    Returns:
        Path of the written file
    """
    path = Path(path)
    with open(path, "a" if append else "w") as f:
        dump_ensemble(structures, f)
    logger.info("Wrote %d structure(s) to %s", len(structures), path)
    return path


class XYZAdapter:
    """Adapter reading and writing XYZ ensemble files."""

    def __init__(self, append: bool = True):
        self.append = append

    def read(self, path: PathLike) -> List[Structure]:
        return read_ensemble(path)

    def write(
        self,
        structures: Sequence[Structure],
        path: PathLike,
        append: Optional[bool] = None,
    ) -> Path:
        return write_ensemble(
            structures, path, self.append if append is None else append
        )
