"""Tiling unit cells into open, periodic and semiperiodic lattices.

A signed repetition vector selects the boundary of every lattice-vector axis:
``r > 0`` repeats the cell ``r`` times with open ends, ``r < 0`` repeats it
``|r|`` times and wraps bonds around. Sites are numbered row-major over cells
(last axis fastest) with the basis index running fastest of all.
"""

from __future__ import annotations

import itertools
import logging
from typing import Sequence

import numpy as np

from latticepy.core.types import Array, Bond, Lattice, Unitcell


logger = logging.getLogger(__name__)

SUPPORTED_DIMENSIONS = (2, 3)


def check_dimension(unitcell: Unitcell) -> None:
    if unitcell.periodicity not in SUPPORTED_DIMENSIONS:
        raise NotImplementedError(
            f"Lattice construction is not implemented for {unitcell.periodicity}-dimensional unit cells."
        )


def boundary_mode(repetitions: Sequence[int]) -> str:
    """Return ``"open"``, ``"periodic"`` or ``"semiperiodic"`` for a signed repetition vector."""

    reps = [int(r) for r in repetitions]
    if len(reps) == 0:
        raise ValueError("Repetition vector must not be empty.")
    if any(r == 0 for r in reps):
        raise ValueError(f"Repetition vector must not contain zeros, got {reps}.")
    if all(r > 0 for r in reps):
        return "open"
    if all(r < 0 for r in reps):
        return "periodic"
    return "semiperiodic"


def _tile(unitcell: Unitcell, repetitions: Sequence[int]) -> Lattice:
    check_dimension(unitcell)
    reps = tuple(int(r) for r in repetitions)
    mode = boundary_mode(reps)
    if len(reps) != unitcell.periodicity:
        raise ValueError(
            f"Repetition vector needs {unitcell.periodicity} entries for this unit cell, got {len(reps)}."
        )

    counts = np.abs(np.asarray(reps, dtype=int))
    periodic_axes = [d for d, r in enumerate(reps) if r < 0]
    n_basis = unitcell.n_sites
    vectors = unitcell.lattice_vectors

    cells = list(itertools.product(*(range(n) for n in counts)))
    positions = np.zeros((len(cells) * n_basis, unitcell.dimension), dtype=float)
    for flat, cell in enumerate(cells):
        origin = np.asarray(cell, dtype=float) @ vectors
        positions[flat * n_basis : (flat + 1) * n_basis] = unitcell.basis + origin
    positions_indices = np.tile(np.arange(n_basis, dtype=int), len(cells))

    connections: list[Bond] = []
    for flat, cell in enumerate(cells):
        for bond in unitcell.connections:
            target = np.asarray(cell, dtype=int) + np.asarray(bond.wrap, dtype=int)
            crossing, target = np.divmod(target, counts)
            if any(crossing[d] != 0 for d in range(len(reps)) if reps[d] > 0):
                continue
            target_flat = int(np.ravel_multi_index(tuple(target), tuple(counts)))
            connections.append(
                Bond(
                    flat * n_basis + bond.from_site,
                    target_flat * n_basis + bond.to_site,
                    bond.strength,
                    tuple(int(crossing[d]) for d in periodic_axes),
                )
            )

    lattice_vectors = np.array(
        [vectors[d] * counts[d] for d in periodic_axes], dtype=float
    ).reshape(len(periodic_axes), unitcell.dimension)
    logger.debug(
        "Tiled %s lattice %s: %d sites, %d bonds.", mode, reps, positions.shape[0], len(connections)
    )
    return Lattice(
        unitcell=unitcell.copy(),
        unitcell_repetitions=reps,
        lattice_vectors=lattice_vectors,
        positions=positions,
        positions_indices=positions_indices,
        connections=connections,
    )


def get_lattice(unitcell: Unitcell, repetitions: Sequence[int]) -> Lattice:
    """Tile ``unitcell`` according to the signs of ``repetitions``."""

    return _tile(unitcell, repetitions)


def get_lattice_open(unitcell: Unitcell, repetitions: Sequence[int]) -> Lattice:
    reps = [int(r) for r in repetitions]
    if boundary_mode(reps) != "open":
        raise ValueError(f"Open boundaries need positive repetitions, got {reps}.")
    return _tile(unitcell, reps)


def get_lattice_periodic(unitcell: Unitcell, repetitions: Sequence[int]) -> Lattice:
    """Periodic tiling; repetitions are counts, given with either sign."""

    reps = [int(r) for r in repetitions]
    boundary_mode(reps)
    return _tile(unitcell, [-abs(r) for r in reps])


def get_lattice_semiperiodic(unitcell: Unitcell, repetitions: Sequence[int]) -> Lattice:
    reps = [int(r) for r in repetitions]
    if boundary_mode(reps) != "semiperiodic":
        raise ValueError(f"Semiperiodic boundaries need mixed-sign repetitions, got {reps}.")
    return _tile(unitcell, reps)


def lattice_to_unitcell(lattice: Lattice) -> Unitcell:
    """Re-use a lattice as a (super-)unit cell with the lattice's own periodicity."""

    return Unitcell(
        lattice_vectors=lattice.lattice_vectors.copy(),
        basis=lattice.positions.copy(),
        connections=list(lattice.connections),
    )


def cell_origin(unitcell: Unitcell, cell: Sequence[int]) -> Array:
    return np.asarray(cell, dtype=float) @ unitcell.lattice_vectors
