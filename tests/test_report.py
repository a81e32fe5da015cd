import math

import pytest

from kybnmr.core.constants import HARTREE_TO_KCAL
from kybnmr.core.domain.models.dedup_report import ReportEntry
from kybnmr.core.services.report_service import (
    ReportService,
    format_report,
    rank_by_energy,
)

from conftest import SQUARE, make_structure


def test_rank_by_energy_is_stable():
    a = make_structure(SQUARE, -1.0, label="a")
    b = make_structure(SQUARE, -3.0, label="b")
    c = make_structure(SQUARE, -1.0, label="c")
    ranked = rank_by_energy([a, b, c])
    assert [s.label for s in ranked] == ["b", "a", "c"]


def test_build_report_relative_energies():
    structures = [
        make_structure(SQUARE, -2.0),
        make_structure(SQUARE, -1.99),
    ]
    report = ReportService().build(structures, input_count=5, discarded=2, replaced=1)
    assert report.count == 2
    assert report.min_energy == -2.0
    assert report.entries[0] == ReportEntry(index=1, energy=-2.0, relative_energy=0.0)
    assert report.entries[1].index == 2
    assert report.entries[1].relative_energy == pytest.approx(0.01 * HARTREE_TO_KCAL)
    assert report.removed == 3


def test_build_report_for_no_representatives():
    report = ReportService().build([])
    assert report.count == 0
    assert math.isnan(report.min_energy)
    assert report.entries == []


def test_report_to_dict():
    report = ReportService().build([make_structure(SQUARE, -1.5)], input_count=1)
    data = report.to_dict()
    assert data["count"] == 1
    assert data["entries"] == [
        {"index": 1, "energy": -1.5, "relative_energy": 0.0, "members": 1}
    ]


def test_format_report_lists_every_representative():
    structures = [make_structure(SQUARE, -44.7747), make_structure(SQUARE, -44.7)]
    report = ReportService().build(structures, input_count=3, discarded=1)
    text = format_report(report)
    lines = text.splitlines()
    assert "Energy (Eh)" in lines[0]
    assert lines[2].split() == ["1", "-44.77470000", "0.0000", "1"]
    assert lines[3].split()[0] == "2"
    assert lines[3].split()[1] == "-44.70000000"
    assert lines[-1] == (
        "2 representative(s) kept from 3 structure(s): 1 discarded, 0 replaced"
    )


def test_build_report_carries_cluster_sizes():
    structures = [make_structure(SQUARE, -2.0), make_structure(SQUARE, -1.0)]
    report = ReportService().build(structures, input_count=5, members=[3, 2])
    assert [entry.members for entry in report.entries] == [3, 2]
    assert format_report(report).splitlines()[2].split()[-1] == "3"
    with pytest.raises(ValueError):
        ReportService().build(structures, members=[1])
