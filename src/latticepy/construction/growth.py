"""Finite lattices grown breadth-first from an origin site.

The unit cell is treated as an infinite tiling. Sites are accepted in FIFO
order, so every site is reached along a shortest bond path. Termination is
the caller's responsibility: the admission rule (bond distance or shape) must
bound the set of reachable sites.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Sequence

import numpy as np

from latticepy.core.connectivity import connection_list, reverse_bond
from latticepy.core.types import Array, Bond, Lattice, Unitcell

from .tiling import cell_origin, check_dimension


logger = logging.getLogger(__name__)

Shape = Callable[[Array], bool]
Admission = Callable[[Array, int], bool]


def _grow(unitcell: Unitcell, origin: int, admit: Admission) -> Lattice:
    check_dimension(unitcell)
    if not 0 <= origin < unitcell.n_sites:
        raise ValueError(f"origin must be a basis index in 0..{unitcell.n_sites - 1}, got {origin}.")

    outgoing = connection_list(unitcell)
    start_cell = (0,) * unitcell.periodicity
    frontier = deque([(unitcell.basis[origin].copy(), start_cell, origin, 0)])
    accepted: dict[tuple[tuple[int, ...], int], int] = {}
    positions: list[Array] = []
    positions_indices: list[int] = []
    connections: list[Bond] = []

    while frontier:
        position, cell, alpha, distance = frontier.popleft()
        if (cell, alpha) in accepted:
            continue
        index = len(positions)
        accepted[(cell, alpha)] = index
        positions.append(position)
        positions_indices.append(alpha)

        for bond in outgoing[alpha]:
            neighbor_cell = tuple(c + w for c, w in zip(cell, bond.wrap))
            neighbor = accepted.get((neighbor_cell, bond.to_site))
            if neighbor is not None:
                connections.append(Bond(index, neighbor, bond.strength, ()))
                continue
            neighbor_position = unitcell.basis[bond.to_site] + cell_origin(unitcell, neighbor_cell)
            if admit(neighbor_position, distance):
                frontier.append((neighbor_position, neighbor_cell, bond.to_site, distance + 1))

    # bonds were only linked towards earlier sites; add the missing directions
    present = {bond.key() for bond in connections}
    repaired = list(connections)
    for bond in connections:
        rev = reverse_bond(bond)
        if rev.key() not in present:
            present.add(rev.key())
            repaired.append(rev)

    logger.debug("Grew lattice from basis site %d: %d sites, %d bonds.", origin, len(positions), len(repaired))
    return Lattice(
        unitcell=unitcell.copy(),
        unitcell_repetitions=(),
        lattice_vectors=np.zeros((0, unitcell.dimension), dtype=float),
        positions=np.array(positions, dtype=float).reshape(len(positions), unitcell.dimension),
        positions_indices=positions_indices,
        connections=repaired,
    )


def get_lattice_by_bond_distance(unitcell: Unitcell, bond_distance: int, origin: int = 0) -> Lattice:
    """All sites within ``bond_distance`` bonds of basis site ``origin`` in cell 0."""

    if bond_distance < 0:
        raise ValueError("bond_distance must be non-negative.")
    return _grow(unitcell, origin, lambda _position, distance: distance < bond_distance)


def get_lattice_in_shape(unitcell: Unitcell, shape: Shape, origin: int = 0) -> Lattice:
    """Connected cluster around ``origin`` whose sites satisfy ``shape``.

    ``shape`` receives positions relative to the origin site.
    """

    center = unitcell.basis[origin].copy() if 0 <= origin < unitcell.n_sites else None
    return _grow(unitcell, origin, lambda position, _distance: bool(shape(position - center)))


def sphere_shape(radius: float) -> Shape:
    # compares the squared distance with the radius itself
    def _inside(point: Array) -> bool:
        return float(np.sum(np.asarray(point) ** 2)) < radius

    return _inside


def box_shape(extent: Sequence[float]) -> Shape:
    half = 0.5 * np.asarray(extent, dtype=float)
    if np.any(half <= 0.0):
        raise ValueError("Box extent must be positive along every axis.")

    def _inside(point: Array) -> bool:
        return bool(np.all(np.abs(np.asarray(point)) < half))

    return _inside


def get_lattice_in_sphere(unitcell: Unitcell, radius: float, origin: int = 0) -> Lattice:
    if radius <= 0.0:
        raise ValueError("radius must be positive.")
    return get_lattice_in_shape(unitcell, sphere_shape(radius), origin=origin)


def get_lattice_in_box(unitcell: Unitcell, extent: Sequence[float], origin: int = 0) -> Lattice:
    shape = box_shape(extent)
    if len(extent) != unitcell.dimension:
        raise ValueError(f"Box extent needs {unitcell.dimension} entries, got {len(extent)}.")
    return get_lattice_in_shape(unitcell, shape, origin=origin)
