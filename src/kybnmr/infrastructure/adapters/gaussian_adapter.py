"""Adapter extracting the final geometry from Gaussian output files."""

import logging
import re
from pathlib import Path
from typing import List, Sequence, Union

from rdkit import Chem

from ...core.domain.errors import EnsembleParseError
from ...core.domain.models.atom import Atom
from ...core.domain.models.structure import Structure

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_NATOMS_RE = re.compile(r"NAtoms=\s*(\d+)")
_SCF_RE = re.compile(r"SCF Done:\s+E\(\S+\)\s*=\s*(-?\d+\.\d+(?:[DE][-+]?\d+)?)")
_ORIENTATION = "Standard orientation"
# Dashes, two column-title lines, dashes
_TABLE_HEADER_LINES = 4
_MAX_ATOMIC_NUMBER = 118


def element_symbol(atomic_number: int) -> str:
    """Look up the element symbol for an atomic number."""
    if not 1 <= atomic_number <= _MAX_ATOMIC_NUMBER:
        raise EnsembleParseError(f"Unknown atomic number: {atomic_number}")
    return Chem.GetPeriodicTable().GetElementSymbol(atomic_number)


def _atom_count(lines: Sequence[str], source: str) -> int:
    for line in lines:
        match = _NATOMS_RE.search(line)
        if match:
            return int(match.group(1))
    raise EnsembleParseError("NAtoms not found in the file", source)


def _final_energy(lines: Sequence[str]) -> float:
    energy = 0.0
    for line in lines:
        match = _SCF_RE.search(line)
        if match:
            energy = float(match.group(1).replace("D", "E"))
    return energy


def parse_gaussian_output(lines: Sequence[str], source: str = "<string>") -> Structure:
    """
    Parse the last ``Standard orientation`` table of a Gaussian log.

    Table rows look like::

         1          8           0        1.169391   -0.453770   -0.882827

    Only the atomic number (column 2) and the coordinates (columns 4-6)
    are used.

    Args:
        lines: Output file content
        source: Name used in error messages and the structure label

    Returns:
        Structure with the final geometry and the last SCF energy (0.0 if
        the file reports none)
    """
    lines = [line.rstrip("\r\n") for line in lines]
    n_atoms = _atom_count(lines, source)

    header_idx = None
    for i, line in enumerate(lines):
        if _ORIENTATION in line:
            header_idx = i
    if header_idx is None:
        raise EnsembleParseError("No 'Standard orientation' table found", source)

    first_row = header_idx + 1 + _TABLE_HEADER_LINES
    rows = lines[first_row:first_row + n_atoms]
    if len(rows) < n_atoms:
        raise EnsembleParseError(
            f"Orientation table has {len(rows)} row(s), expected {n_atoms}",
            source,
            header_idx + 1,
        )

    atoms: List[Atom] = []
    for offset, row in enumerate(rows):
        line_no = first_row + offset + 1
        fields = row.split()
        if len(fields) < 6:
            raise EnsembleParseError(
                f"Malformed orientation row: {row!r}", source, line_no
            )
        try:
            atomic_number = int(fields[1])
            x, y, z = (float(value) for value in fields[3:6])
        except ValueError:
            raise EnsembleParseError(
                f"Malformed orientation row: {row!r}", source, line_no
            ) from None
        try:
            symbol = element_symbol(atomic_number)
        except EnsembleParseError as exc:
            raise EnsembleParseError(str(exc), source, line_no) from None
        atoms.append(Atom(symbol, (x, y, z)))

    return Structure(tuple(atoms), _final_energy(lines), label=Path(source).name)


def read_gaussian_output(path: PathLike) -> Structure:
    """Read the final structure from a Gaussian ``.out`` file."""
    path = Path(path)
    if path.suffix.lower() != ".out":
        raise EnsembleParseError("Expected a Gaussian .out file", str(path))
    if path.is_dir():
        raise EnsembleParseError("Input is a directory, not a file", str(path))
    with open(path, "r") as f:
        structure = parse_gaussian_output(f.readlines(), source=str(path))
    logger.debug(
        "Read %d atoms (E=%.8f) from %s", structure.num_atoms, structure.energy, path
    )
    return structure


class GaussianAdapter:
    """Adapter for Gaussian output files."""

    def read(self, path: PathLike) -> Structure:
        return read_gaussian_output(path)

    def read_many(self, paths: Sequence[PathLike]) -> List[Structure]:
        """Read several outputs, keeping the given order."""
        return [read_gaussian_output(p) for p in paths]
