import pytest

from kybnmr.core.domain.errors import EnsembleParseError
from kybnmr.infrastructure.adapters.xyz_adapter import (
    XYZAdapter,
    format_structure,
    parse_ensemble,
    read_ensemble,
    write_ensemble,
)

from conftest import make_structure


def test_parse_two_blocks(xyz_text):
    structures = parse_ensemble(xyz_text.splitlines(), source="pre_opt.xyz")
    assert len(structures) == 2
    first, second = structures
    assert first.num_atoms == 3
    assert first.energy == pytest.approx(-44.77460877)
    assert first.atoms[0].element == "C"
    assert first.atoms[0].coordinates == pytest.approx(
        (-2.3118744671, 0.7678923498, -1.6678111578)
    )
    assert second.elements == ["C", "C", "H"]
    assert second.label == "pre_opt.xyz#2"


def test_non_numeric_energy_line_reads_as_zero():
    text = "2\n energy: -1.5 gnorm: 0.001\nH 0 0 0\nH 0 0 0.74\n"
    (structure,) = parse_ensemble(text.splitlines())
    assert structure.energy == 0.0


@pytest.mark.parametrize("token", ["nan", "NaN", "inf", "-inf"])
def test_non_finite_energy_line_reads_as_zero(token):
    text = f"2\n{token}\nH 0 0 0\nH 0 0 0.74\n2\n-1.0\nH 0 0 0\nH 0 0 0.74\n"
    first, second = parse_ensemble(text.splitlines())
    assert first.energy == 0.0
    assert second.energy == -1.0


def test_trailing_blank_lines_are_ignored(xyz_text):
    structures = parse_ensemble((xyz_text + "\n\n  \n").splitlines())
    assert len(structures) == 2


def test_invalid_header_raises_with_line_number(xyz_text):
    lines = xyz_text.splitlines()
    lines[5] = "three"
    with pytest.raises(EnsembleParseError) as excinfo:
        parse_ensemble(lines, source="bad.xyz")
    assert excinfo.value.line_no == 6
    assert "bad.xyz:6" in str(excinfo.value)


def test_wrong_field_count_raises():
    text = "2\n-1.0\nH 0 0 0\nH 0 0\n"
    with pytest.raises(EnsembleParseError):
        parse_ensemble(text.splitlines())


def test_non_numeric_coordinate_raises():
    text = "2\n-1.0\nH 0 0 0\nH 0 zero 0\n"
    with pytest.raises(EnsembleParseError):
        parse_ensemble(text.splitlines())


def test_truncated_block_raises():
    text = "3\n-1.0\nH 0 0 0\nH 0 0 1\n"
    with pytest.raises(EnsembleParseError):
        parse_ensemble(text.splitlines())


def test_zero_atom_block_raises():
    with pytest.raises(EnsembleParseError):
        parse_ensemble(["0", "-1.0"])


def test_format_structure_fixed_width():
    s = make_structure(
        [(0.0, 0.0, 0.0), (-1.25, 2.5, 10.125)], -44.774608771, elements=["C", "Cl"]
    )
    assert format_structure(s) == (
        "  2\n"
        "\t\t-44.77460877\n"
        " C \t\t  0.0000000000 \t\t  0.0000000000 \t\t  0.0000000000\n"
        "Cl \t\t -1.2500000000 \t\t  2.5000000000 \t\t 10.1250000000\n"
    )


def test_write_appends_by_default(tmp_path, xyz_text):
    source = tmp_path / "in.xyz"
    source.write_text(xyz_text)
    structures = read_ensemble(source)

    out = tmp_path / "out.xyz"
    write_ensemble(structures[:1], out)
    write_ensemble(structures[1:], out)
    again = read_ensemble(out)
    assert again == structures


def test_write_overwrite(tmp_path, xyz_text):
    source = tmp_path / "in.xyz"
    source.write_text(xyz_text)
    structures = read_ensemble(source)

    out = tmp_path / "out.xyz"
    adapter = XYZAdapter(append=False)
    adapter.write(structures, out)
    adapter.write(structures[:1], out)
    assert len(adapter.read(out)) == 1
