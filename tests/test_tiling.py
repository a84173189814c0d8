from collections import Counter

import numpy as np
import pytest

from latticepy.construction import (
    boundary_mode,
    get_lattice,
    get_lattice_open,
    get_lattice_periodic,
    get_lattice_semiperiodic,
    lattice_to_unitcell,
)
from latticepy.core import add_bond, bloch_matrix, missing_reverse_bonds, real_space_matrix
from latticepy.models import chain_unitcell, diamond_unitcell, honeycomb_unitcell, square_unitcell


def _out_degrees(lattice) -> list[int]:
    counts = Counter(bond.from_site for bond in lattice.connections)
    return [counts[i] for i in range(lattice.n_sites)]


def test_boundary_modes() -> None:
    assert boundary_mode([2, 3]) == "open"
    assert boundary_mode([-2, -3]) == "periodic"
    assert boundary_mode([-2, 3]) == "semiperiodic"
    for bad in ([], [0, 2], [-1, 0]):
        with pytest.raises(ValueError):
            boundary_mode(bad)


def test_periodic_square_keeps_all_bonds() -> None:
    uc = square_unitcell()
    lattice = get_lattice(uc, [-2, -2])
    assert lattice.n_sites == 4
    assert len(lattice.connections) == 16
    assert _out_degrees(lattice) == [4, 4, 4, 4]
    assert np.allclose(lattice.lattice_vectors, 2.0 * uc.lattice_vectors)
    assert all(len(bond.wrap) == 2 for bond in lattice.connections)
    assert missing_reverse_bonds(lattice) == []


def test_open_square_drops_boundary_bonds() -> None:
    lattice = get_lattice(square_unitcell(), [2, 2])
    assert lattice.n_sites == 4
    assert len(lattice.connections) == 8
    assert lattice.lattice_vectors.shape == (0, 2)
    assert all(bond.wrap == () for bond in lattice.connections)
    pairs = {(bond.from_site, bond.to_site) for bond in lattice.connections}
    # sites 0=(0,0), 1=(0,1), 2=(1,0), 3=(1,1)
    assert pairs == {(0, 1), (1, 0), (0, 2), (2, 0), (1, 3), (3, 1), (2, 3), (3, 2)}


def test_semiperiodic_square_wraps_one_axis() -> None:
    lattice = get_lattice_semiperiodic(square_unitcell(), [-2, 2])
    assert lattice.n_sites == 4
    assert len(lattice.connections) == 12
    assert np.allclose(lattice.lattice_vectors, [[2.0, 0.0]])
    assert {len(bond.wrap) for bond in lattice.connections} == {1}
    assert {bond.wrap for bond in lattice.connections} == {(0,), (1,), (-1,)}
    assert missing_reverse_bonds(lattice) == []


def test_site_numbering_is_row_major() -> None:
    uc = honeycomb_unitcell()
    lattice = get_lattice(uc, [-2, -3])
    assert lattice.n_sites == 12
    assert np.array_equal(lattice.positions_indices, np.tile([0, 1], 6))
    # cell (1, 2), basis site 1 -> 2 * (1 * 3 + 2) + 1
    expected = uc.basis[1] + 1 * uc.lattice_vectors[0] + 2 * uc.lattice_vectors[1]
    assert np.allclose(lattice.positions[11], expected)
    assert lattice.unitcell_repetitions == (-2, -3)


def test_periodic_honeycomb_is_three_coordinated() -> None:
    lattice = get_lattice_periodic(honeycomb_unitcell(), [3, 3])
    assert lattice.n_sites == 18
    assert set(_out_degrees(lattice)) == {3}
    assert lattice.unitcell_repetitions == (-3, -3)


def test_periodic_diamond_in_three_dimensions() -> None:
    uc = diamond_unitcell()
    periodic = get_lattice(uc, [-2, -2, -2])
    assert periodic.n_sites == 16
    assert len(periodic.connections) == 64
    assert periodic.lattice_vectors.shape == (3, 3)

    finite = get_lattice_open(uc, [2, 2, 2])
    assert finite.n_sites == 16
    assert len(finite.connections) < 64
    assert missing_reverse_bonds(finite) == []


def test_single_cell_periodic_lattice_reproduces_bloch_matrix() -> None:
    uc = honeycomb_unitcell(strength=0.7)
    lattice = get_lattice_periodic(uc, [1, 1])
    assert len(lattice.connections) == len(uc.connections)
    for k in ([0.0, 0.0], [0.3, -1.1], [2.0, 0.5]):
        assert np.allclose(bloch_matrix(lattice, k), bloch_matrix(uc, k))


def test_periodic_lattice_bloch_at_zero_matches_real_space() -> None:
    lattice = get_lattice(honeycomb_unitcell(), [-3, -2])
    assert np.allclose(bloch_matrix(lattice, [0.0, 0.0]), real_space_matrix(lattice).astype(complex))


def test_lattice_to_unitcell_round_trip() -> None:
    lattice = get_lattice(square_unitcell(), [-2, -3])
    supercell = lattice_to_unitcell(lattice)
    assert supercell.periodicity == 2
    assert supercell.n_sites == 6
    again = get_lattice(supercell, [-1, -1])
    assert len(again.connections) == len(lattice.connections)
    assert np.allclose(again.lattice_vectors, lattice.lattice_vectors)


def test_lattice_does_not_alias_unitcell() -> None:
    uc = square_unitcell()
    lattice = get_lattice(uc, [-2, -2])
    add_bond(uc, 0, 0, 5.0, (2, 0))
    uc.basis[0, 0] = 10.0
    assert len(lattice.unitcell.connections) == 4
    assert lattice.unitcell.basis[0, 0] == 0.0
    assert lattice.positions[0, 0] == 0.0


@pytest.mark.parametrize("repetitions", [[], [0, 2], [2, 2, 2], [2]])
def test_malformed_repetitions_raise(repetitions: list[int]) -> None:
    with pytest.raises(ValueError):
        get_lattice(square_unitcell(), repetitions)


def test_wrong_mode_helpers_raise() -> None:
    uc = square_unitcell()
    with pytest.raises(ValueError):
        get_lattice_open(uc, [-2, 2])
    with pytest.raises(ValueError):
        get_lattice_semiperiodic(uc, [2, 2])
    with pytest.raises(ValueError):
        get_lattice_periodic(uc, [0, 2])


def test_one_dimensional_tiling_not_implemented() -> None:
    with pytest.raises(NotImplementedError):
        get_lattice(chain_unitcell(), [-4])
