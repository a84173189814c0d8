"""Nearest-neighbor unit cells of common lattices."""

from __future__ import annotations

import numpy as np

from latticepy.core.connections import add_bond
from latticepy.core.types import Strength, Unitcell

from .registry import register_unitcell


SQRT3 = float(np.sqrt(3.0))


@register_unitcell("chain")
def chain_unitcell(strength: Strength = 1.0) -> Unitcell:
    uc = Unitcell(lattice_vectors=[[1.0]], basis=[[0.0]])
    add_bond(uc, 0, 0, strength, (1,))
    return uc


@register_unitcell("square")
def square_unitcell(strength: Strength = 1.0) -> Unitcell:
    uc = Unitcell(lattice_vectors=[[1.0, 0.0], [0.0, 1.0]], basis=[[0.0, 0.0]])
    add_bond(uc, 0, 0, strength, (1, 0))
    add_bond(uc, 0, 0, strength, (0, 1))
    return uc


@register_unitcell("triangular")
def triangular_unitcell(strength: Strength = 1.0) -> Unitcell:
    uc = Unitcell(lattice_vectors=[[1.0, 0.0], [0.5, 0.5 * SQRT3]], basis=[[0.0, 0.0]])
    for wrap in ((1, 0), (0, 1), (1, -1)):
        add_bond(uc, 0, 0, strength, wrap)
    return uc


@register_unitcell("honeycomb")
def honeycomb_unitcell(strength: Strength = 1.0) -> Unitcell:
    uc = Unitcell(
        lattice_vectors=[[SQRT3, 0.0], [0.5 * SQRT3, 1.5]],
        basis=[[0.0, 0.0], [0.0, 1.0]],
    )
    for wrap in ((0, 0), (0, -1), (1, -1)):
        add_bond(uc, 0, 1, strength, wrap)
    return uc


@register_unitcell("kagome")
def kagome_unitcell(strength: Strength = 1.0) -> Unitcell:
    uc = Unitcell(
        lattice_vectors=[[2.0, 0.0], [1.0, SQRT3]],
        basis=[[0.0, 0.0], [1.0, 0.0], [0.5, 0.5 * SQRT3]],
    )
    add_bond(uc, 0, 1, strength, (0, 0))
    add_bond(uc, 0, 2, strength, (0, 0))
    add_bond(uc, 1, 2, strength, (0, 0))
    add_bond(uc, 0, 1, strength, (-1, 0))
    add_bond(uc, 0, 2, strength, (0, -1))
    add_bond(uc, 1, 2, strength, (1, -1))
    return uc


@register_unitcell("cubic")
def cubic_unitcell(strength: Strength = 1.0) -> Unitcell:
    uc = Unitcell(lattice_vectors=np.eye(3), basis=[[0.0, 0.0, 0.0]])
    for wrap in ((1, 0, 0), (0, 1, 0), (0, 0, 1)):
        add_bond(uc, 0, 0, strength, wrap)
    return uc


@register_unitcell("diamond")
def diamond_unitcell(strength: Strength = 1.0) -> Unitcell:
    # fcc primitive vectors with a two-site basis, conventional cube edge 1
    uc = Unitcell(
        lattice_vectors=[[0.0, 0.5, 0.5], [0.5, 0.0, 0.5], [0.5, 0.5, 0.0]],
        basis=[[0.0, 0.0, 0.0], [0.25, 0.25, 0.25]],
    )
    for wrap in ((0, 0, 0), (-1, 0, 0), (0, -1, 0), (0, 0, -1)):
        add_bond(uc, 0, 1, strength, wrap)
    return uc
