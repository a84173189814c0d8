import numpy as np

from latticepy.construction import get_lattice
from latticepy.core import (
    Bond,
    Unitcell,
    connection_list,
    connection_strengths,
    connectivity_list,
    describe,
    missing_reverse_bonds,
    reverse_bond,
)
from latticepy.models import square_unitcell


def _cluster() -> Unitcell:
    uc = Unitcell(lattice_vectors=np.zeros((0, 2)), basis=[[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
    uc.connections = [
        Bond(1, 2, "t", ()),
        Bond(0, 1, 1.0, ()),
        Bond(1, 0, "1.0", ()),
        Bond(0, 2, 0.5j, ()),
        Bond(2, 1, "t", ()),
    ]
    return uc


def test_connection_list_keeps_bond_order_per_site() -> None:
    uc = _cluster()
    out = connection_list(uc)
    assert len(out) == 3
    assert out[0] == [Bond(0, 1, 1.0, ()), Bond(0, 2, 0.5j, ())]
    assert out[1] == [Bond(1, 2, "t", ()), Bond(1, 0, "1.0", ())]
    assert out[2] == [Bond(2, 1, "t", ())]


def test_connectivity_list_pairs_neighbor_with_strength() -> None:
    pairs = connectivity_list(_cluster())
    assert pairs == [
        [(1, 1.0), (2, 0.5j)],
        [(2, "t"), (0, "1.0")],
        [(1, "t")],
    ]


def test_isolated_sites_have_empty_lists() -> None:
    uc = Unitcell(lattice_vectors=np.zeros((0, 1)), basis=[[0.0], [1.0]])
    assert connection_list(uc) == [[], []]
    assert connectivity_list(uc) == [[], []]
    assert connection_strengths(uc) == []


def test_strengths_in_first_appearance_order() -> None:
    strengths = connection_strengths(_cluster())
    assert strengths == ["t", 1.0, "1.0", 0.5j]
    assert isinstance(strengths[1], float)
    assert isinstance(strengths[2], str)


def test_reverse_bond_conjugates_and_negates_wrap() -> None:
    assert reverse_bond(Bond(0, 1, 1 + 1j, (1, -2))) == Bond(1, 0, 1 - 1j, (-1, 2))
    assert reverse_bond(Bond(2, 0, "t", ())) == Bond(0, 2, "t", ())


def test_missing_reverse_bonds_matches_copies_one_to_one() -> None:
    uc = _cluster()
    # 1->0 carries "1.0", which does not reverse the numeric 0->1
    missing = missing_reverse_bonds(uc)
    assert missing == [Bond(0, 1, 1.0, ()), Bond(1, 0, "1.0", ()), Bond(0, 2, 0.5j, ())]

    parallel = Unitcell(lattice_vectors=np.zeros((0, 1)), basis=[[0.0], [1.0]])
    parallel.connections = [Bond(0, 1, 1.0, ()), Bond(0, 1, 1.0, ()), Bond(1, 0, 1.0, ())]
    assert missing_reverse_bonds(parallel) == [Bond(0, 1, 1.0, ())]


def test_describe_lattice() -> None:
    lattice = get_lattice(square_unitcell(strength=0.5), [-2, 3])
    text = describe(lattice)
    assert text.splitlines()[0] == "Lattice"
    assert "  sites: 6" in text
    assert "  strengths: 0.5" in text
    assert "  unitcell repetitions: [-2, 3]" in text
    assert "filename" not in text
