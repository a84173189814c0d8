"""Connected components and bond-to-site transformation."""

from __future__ import annotations

import logging
from collections import Counter

import numpy as np

from .connectivity import reverse_bond
from .types import Array, Bond, Container, Lattice, Unitcell, zero_wrap


logger = logging.getLogger(__name__)


def label_connected_components(container: Container) -> tuple[Array, int]:
    """Label sites by connected component.

    Labels are positive integers; they are not necessarily contiguous because
    merged classes keep the smaller of the two labels.

    Returns:
        (labels, number_of_distinct_labels)
    """

    labels = np.zeros(container.n_sites, dtype=int)
    outgoing: list[list[int]] = [[] for _ in range(container.n_sites)]
    for bond in container.connections:
        outgoing[bond.from_site].append(bond.to_site)

    next_label = 1
    for site in range(container.n_sites):
        if labels[site] == 0:
            labels[site] = next_label
            next_label += 1
        for neighbor in outgoing[site]:
            if labels[neighbor] == 0:
                labels[neighbor] = labels[site]
            elif labels[neighbor] != labels[site]:
                low = min(labels[site], labels[neighbor])
                high = max(labels[site], labels[neighbor])
                labels[labels == high] = low

    n_labels = int(np.unique(labels).size)
    logger.debug("Found %d connected components over %d sites.", n_labels, container.n_sites)
    return labels, n_labels


def _subcontainer(container: Container, sites: Array, bonds: list[Bond]) -> Container:
    if isinstance(container, Unitcell):
        return Unitcell(
            lattice_vectors=container.lattice_vectors.copy(),
            basis=container.basis[sites].copy(),
            connections=bonds,
        )
    return Lattice(
        unitcell=container.unitcell.copy(),
        unitcell_repetitions=container.unitcell_repetitions,
        lattice_vectors=container.lattice_vectors.copy(),
        positions=container.positions[sites].copy(),
        positions_indices=container.positions_indices[sites].copy(),
        connections=bonds,
    )


def split_into_components(container: Container) -> list[Container]:
    """Split into independent containers, one per connected component.

    Sites keep their relative order; each part is indexed from 0.
    """

    labels, n_labels = label_connected_components(container)
    if n_labels <= 1:
        return [container.copy()]

    parts: list[Container] = []
    for label in np.unique(labels):
        sites = np.flatnonzero(labels == label)
        new_index = {int(old): new for new, old in enumerate(sites)}
        bonds = [
            Bond(new_index[bond.from_site], new_index[bond.to_site], bond.strength, bond.wrap)
            for bond in container.connections
            if labels[bond.from_site] == label
        ]
        parts.append(_subcontainer(container, sites, bonds))
    return parts


def bond_to_site_transform(container: Container) -> Container:
    """Insert a site at the midpoint of every undirected bond.

    Each bond pair ``i <-> j`` with wrap ``w`` becomes ``i <-> m`` (no wrap)
    and ``m <-> j`` (wrap ``w``). Inserted lattice sites carry
    ``positions_indices == -1``.
    """

    positions = container.site_positions
    vectors = container.lattice_vectors
    treated: Counter = Counter()
    midpoints: list[Array] = []
    bonds: list[Bond] = []
    no_wrap = zero_wrap(container.periodicity)

    for bond in container.connections:
        if treated[bond.key()] > 0:
            treated[bond.key()] -= 1
            continue
        treated[reverse_bond(bond).key()] += 1

        shift = np.asarray(bond.wrap, dtype=float) @ vectors if bond.wrap else 0.0
        target = positions[bond.to_site] + shift
        midpoints.append(0.5 * (positions[bond.from_site] + target))
        middle = container.n_sites + len(midpoints) - 1

        first = Bond(bond.from_site, middle, bond.strength, no_wrap)
        second = Bond(middle, bond.to_site, bond.strength, bond.wrap)
        bonds.extend([first, reverse_bond(first), second, reverse_bond(second)])

    new_positions = np.vstack([positions, *midpoints]) if midpoints else positions.copy()
    logger.debug("Bond-to-site transform inserted %d sites.", len(midpoints))
    if isinstance(container, Unitcell):
        return Unitcell(
            lattice_vectors=vectors.copy(),
            basis=new_positions,
            connections=bonds,
        )
    return Lattice(
        unitcell=container.unitcell.copy(),
        unitcell_repetitions=container.unitcell_repetitions,
        lattice_vectors=vectors.copy(),
        positions=new_positions,
        positions_indices=np.concatenate(
            [container.positions_indices, -np.ones(len(midpoints), dtype=int)]
        ),
        connections=bonds,
    )
