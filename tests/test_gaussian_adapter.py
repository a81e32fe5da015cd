import pytest

from kybnmr.core.domain.errors import EnsembleParseError
from kybnmr.infrastructure.adapters.gaussian_adapter import (
    GaussianAdapter,
    element_symbol,
    parse_gaussian_output,
    read_gaussian_output,
)

from conftest import GAUSSIAN_OUT


def test_element_symbol_lookup():
    assert element_symbol(1) == "H"
    assert element_symbol(8) == "O"
    assert element_symbol(17) == "Cl"
    with pytest.raises(EnsembleParseError):
        element_symbol(0)


def test_parse_uses_last_orientation_and_energy():
    structure = parse_gaussian_output(GAUSSIAN_OUT.splitlines(), source="water.out")
    assert structure.elements == ["O", "H", "H"]
    assert structure.atoms[0].coordinates == pytest.approx((0.0, 0.0, 0.117790))
    assert structure.atoms[1].coordinates == pytest.approx((0.0, 0.755453, -0.471161))
    assert structure.energy == pytest.approx(-76.4089783150)
    assert structure.label == "water.out"


def test_energy_defaults_to_zero_without_scf():
    lines = [line for line in GAUSSIAN_OUT.splitlines() if "SCF Done" not in line]
    assert parse_gaussian_output(lines).energy == 0.0


def test_missing_natoms_raises():
    lines = [line for line in GAUSSIAN_OUT.splitlines() if "NAtoms" not in line]
    with pytest.raises(EnsembleParseError):
        parse_gaussian_output(lines)


def test_missing_orientation_raises():
    with pytest.raises(EnsembleParseError):
        parse_gaussian_output([" NAtoms=      3", " Normal termination"])


def test_short_orientation_table_raises():
    lines = GAUSSIAN_OUT.splitlines()
    cut = max(i for i, line in enumerate(lines) if "Standard orientation" in line)
    with pytest.raises(EnsembleParseError):
        parse_gaussian_output(lines[: cut + 6])


def test_read_requires_out_suffix(tmp_path):
    path = tmp_path / "water.log"
    path.write_text(GAUSSIAN_OUT)
    with pytest.raises(EnsembleParseError):
        read_gaussian_output(path)


def test_read_many_keeps_order(tmp_path):
    first = tmp_path / "a.out"
    second = tmp_path / "b.out"
    first.write_text(GAUSSIAN_OUT)
    second.write_text(GAUSSIAN_OUT.replace("-76.4089783150", "-76.5000000000"))
    structures = GaussianAdapter().read_many([second, first])
    assert [s.label for s in structures] == ["b.out", "a.out"]
    assert structures[0].energy == pytest.approx(-76.5)
