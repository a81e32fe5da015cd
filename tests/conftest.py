import pytest

from kybnmr.core.domain.models.structure import Structure


def make_structure(coords, energy, elements=None, label=None):
    """Build a structure from a list of xyz rows (carbon atoms by default)."""
    if elements is None:
        elements = ["C"] * len(coords)
    return Structure.from_arrays(elements, coords, energy, label=label)


# Three 4-atom shapes with clearly different distance spectra
SQUARE = [(0.0, 0.0, 0.0), (1.5, 0.0, 0.0), (1.5, 1.5, 0.0), (0.0, 1.5, 0.0)]
CHAIN = [(0.0, 0.0, 0.0), (1.5, 0.0, 0.0), (3.0, 0.0, 0.0), (4.5, 0.0, 0.0)]
TETRA = [(0.0, 0.0, 0.0), (1.5, 0.0, 0.0), (0.75, 1.3, 0.0), (0.75, 0.43, 1.22)]


# Two optimisation steps of water; only the last geometry and energy count
RULER = " " + "-" * 69

GAUSSIAN_OUT = f"""
 Entering Gaussian System, Link 0=g16
 NAtoms=      3 NQM=        3 NQMF=       0 NMMF=      0 NMic=       0
                         Standard orientation:
{RULER}
 Center     Atomic      Atomic             Coordinates (Angstroms)
 Number     Number       Type             X           Y           Z
{RULER}
      1          8           0        0.000000    0.000000    0.119262
      2          1           0        0.000000    0.763239   -0.477047
      3          1           0        0.000000   -0.763239   -0.477047
{RULER}
 SCF Done:  E(RB3LYP) =  -76.4089533210     A.U. after   10 cycles
                         Standard orientation:
{RULER}
 Center     Atomic      Atomic             Coordinates (Angstroms)
 Number     Number       Type             X           Y           Z
{RULER}
      1          8           0        0.000000    0.000000    0.117790
      2          1           0        0.000000    0.755453   -0.471161
      3          1           0        0.000000   -0.755453   -0.471161
{RULER}
 SCF Done:  E(RB3LYP) =  -76.4089783150     A.U. after    7 cycles
 Normal termination of Gaussian 16
"""


def perturbed(coords, shift):
    """Move the second atom along x by ``shift`` Angstrom."""
    rows = [list(row) for row in coords]
    rows[1][0] += shift
    return rows


@pytest.fixture
def scenario_a():
    """S1 and S2 are duplicates (S1 lower), S3 is far higher in energy."""
    s1 = make_structure(
        [(0.0, 0.0, 0.0), (1.5, 0.0, 0.0), (0.0, 1.5, 0.0)], -44.774700, label="S1"
    )
    s2 = make_structure(
        [(0.0, 0.0, 0.0), (1.53, 0.0, 0.0), (0.0, 1.5, 0.0)], -44.774697, label="S2"
    )
    s3 = make_structure(
        [(0.0, 0.0, 0.0), (1.5, 0.0, 0.0), (0.0, 1.5, 0.0)], -44.700000, label="S3"
    )
    return s1, s2, s3


@pytest.fixture
def family_ensemble():
    """Nine structures: three shapes, three slightly perturbed copies each.

    Within a family the energy drops by 1e-5 Eh per copy, so the last copy
    is the lowest. Families are interleaved in the input order.
    """
    bases = [(SQUARE, -100.000), (CHAIN, -100.010), (TETRA, -100.020)]
    ensemble = []
    for k in range(3):
        for shape_index, (coords, energy) in enumerate(bases):
            ensemble.append(
                make_structure(
                    perturbed(coords, 0.01 * k),
                    energy - k * 1e-5,
                    label=f"family{shape_index}-{k}",
                )
            )
    return ensemble


@pytest.fixture
def xyz_text():
    return (
        "3\n"
        "        -44.77460877\n"
        "C         -2.3118744671        0.7678923498       -1.6678111578\n"
        "C         -1.6215849436       -0.3434974558       -1.2274196373\n"
        "C         -1.1789998859       -0.4358310737        0.0929450274\n"
        "3\n"
        "        -44.77460000\n"
        "C         -2.3118744671        0.7678923498       -1.6678111578\n"
        "C         -1.6215849436       -0.3434974558       -1.2274196373\n"
        "H         -1.1789998859       -0.4358310737        0.0929450274\n"
    )
