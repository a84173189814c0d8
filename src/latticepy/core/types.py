"""Core data structures for bond-list lattice graphs."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Union

import numpy as np


Array = np.ndarray
Strength = Union[int, float, complex, str]
Wrap = tuple[int, ...]


def _as_vectors(values, name: str) -> Array:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return np.zeros((0, arr.shape[-1] if arr.ndim == 2 else 0), dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D array of row vectors.")
    return arr


def zero_wrap(periodicity: int) -> Wrap:
    return (0,) * periodicity


def negate_wrap(wrap: Wrap) -> Wrap:
    return tuple(-w for w in wrap)


@dataclass(frozen=True)
class Bond:
    """Directed coupling between two sites, crossing ``wrap`` lattice vectors."""

    from_site: int
    to_site: int
    strength: Strength
    wrap: Wrap = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_site", int(self.from_site))
        object.__setattr__(self, "to_site", int(self.to_site))
        object.__setattr__(self, "wrap", tuple(int(w) for w in np.atleast_1d(self.wrap)))

    def key(self) -> tuple[int, int, Strength, Wrap]:
        return (self.from_site, self.to_site, self.strength, self.wrap)

    def with_strength(self, strength: Strength) -> Bond:
        return Bond(self.from_site, self.to_site, strength, self.wrap)


@dataclass
class Unitcell:
    """Periodic building block: basis sites, lattice vectors and bonds.

    ``lattice_vectors`` has one row per periodic direction (0 to 3 rows) and
    ``basis`` one row per site. Bonds reference rows of ``basis``.
    """

    lattice_vectors: Array
    basis: Array
    connections: list[Bond] = field(default_factory=list)
    filename: str | None = None

    def __post_init__(self) -> None:
        self.lattice_vectors = _as_vectors(self.lattice_vectors, "lattice_vectors")
        self.basis = _as_vectors(self.basis, "basis")
        self.connections = list(self.connections)

    @property
    def periodicity(self) -> int:
        return int(self.lattice_vectors.shape[0])

    @property
    def site_positions(self) -> Array:
        return self.basis

    @property
    def n_sites(self) -> int:
        return int(self.basis.shape[0])

    @property
    def dimension(self) -> int:
        return int(self.basis.shape[1]) if self.basis.ndim == 2 else 0

    def copy(self) -> Unitcell:
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"Unitcell(periodicity={self.periodicity}, basis_sites={self.n_sites}, "
            f"bonds={len(self.connections)})"
        )


def empty_unitcell() -> Unitcell:
    """Sentinel unit cell for lattices that were not generated from one."""

    return Unitcell(lattice_vectors=np.zeros((0, 0)), basis=np.zeros((0, 0)))


@dataclass
class Lattice:
    """Concrete realization of a unit cell with absolute site positions.

    ``positions_indices[i]`` is the basis index site ``i`` was generated from,
    or ``-1`` for sites without a counterpart in ``unitcell``.
    """

    unitcell: Unitcell
    unitcell_repetitions: tuple[int, ...]
    lattice_vectors: Array
    positions: Array
    positions_indices: Array
    connections: list[Bond] = field(default_factory=list)
    filename: str | None = None

    def __post_init__(self) -> None:
        self.unitcell_repetitions = tuple(int(r) for r in self.unitcell_repetitions)
        self.positions = _as_vectors(self.positions, "positions")
        self.lattice_vectors = _as_vectors(self.lattice_vectors, "lattice_vectors")
        self.positions_indices = np.asarray(self.positions_indices, dtype=int).reshape(-1)
        self.connections = list(self.connections)
        if self.positions_indices.shape[0] != self.positions.shape[0]:
            raise ValueError("positions_indices must have one entry per position.")

    @property
    def periodicity(self) -> int:
        return int(self.lattice_vectors.shape[0])

    @property
    def site_positions(self) -> Array:
        return self.positions

    @property
    def n_sites(self) -> int:
        return int(self.positions.shape[0])

    @property
    def dimension(self) -> int:
        return int(self.positions.shape[1]) if self.positions.ndim == 2 else 0

    def copy(self) -> Lattice:
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"Lattice(periodicity={self.periodicity}, sites={self.n_sites}, "
            f"bonds={len(self.connections)}, repetitions={self.unitcell_repetitions})"
        )


Container = Union[Unitcell, Lattice]


def with_connections(container: Container, connections: list[Bond]) -> Container:
    """Deep copy of ``container`` carrying ``connections`` instead of its own."""

    out = container.copy()
    out.connections = list(connections)
    return out
