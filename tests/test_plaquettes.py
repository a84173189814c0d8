import numpy as np
import pytest

from latticepy.construction import get_lattice, get_lattice_by_bond_distance
from latticepy.core import find_plaquettes, plaquette_statistics
from latticepy.models import honeycomb_unitcell, square_unitcell, triangular_unitcell


def test_square_site_has_four_squares() -> None:
    cluster = get_lattice_by_bond_distance(square_unitcell(), 2)
    loops = find_plaquettes(cluster, 0)
    assert len(loops) == 4
    for loop in loops:
        assert len(loop) == 4
        assert loop[0] == 0
        corners = cluster.positions[list(loop)]
        assert np.isclose(np.abs(corners - corners.mean(axis=0)).max(), 0.5)
    assert plaquette_statistics(cluster) == {4: 4}


def test_open_square_lattice_statistics() -> None:
    lattice = get_lattice(square_unitcell(), [4, 4])
    assert plaquette_statistics(lattice) == {4: 9}
    # corner site (0, 0) touches one square
    assert find_plaquettes(lattice, 0) == [(0, 1, 5, 4)]
    assert plaquette_statistics(lattice, site=5) == {4: 4}


def test_honeycomb_site_has_three_hexagons() -> None:
    cluster = get_lattice_by_bond_distance(honeycomb_unitcell(), 3)
    loops = find_plaquettes(cluster, 0, max_length=6)
    assert len(loops) == 3
    assert {len(loop) for loop in loops} == {6}
    stats = plaquette_statistics(cluster, max_length=6)
    assert set(stats) == {6}
    assert stats[6] >= 3


def test_triangular_site_has_six_triangles() -> None:
    cluster = get_lattice_by_bond_distance(triangular_unitcell(), 1)
    assert plaquette_statistics(cluster, site=0) == {3: 6}
    assert plaquette_statistics(cluster) == {3: 6}


def test_wrapping_bonds_are_not_followed() -> None:
    assert find_plaquettes(square_unitcell(), 0) == []
    periodic = get_lattice(square_unitcell(), [-3, -3])
    opened = get_lattice(square_unitcell(), [3, 3])
    assert plaquette_statistics(periodic) == plaquette_statistics(opened) == {4: 4}


def test_max_length_limits_loops() -> None:
    cluster = get_lattice_by_bond_distance(honeycomb_unitcell(), 3)
    assert find_plaquettes(cluster, 0, max_length=5) == []
    with pytest.raises(ValueError):
        find_plaquettes(cluster, 0, max_length=2)
    with pytest.raises(ValueError):
        find_plaquettes(cluster, cluster.n_sites)
