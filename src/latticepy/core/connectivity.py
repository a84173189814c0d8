"""Read-only views derived from a container's bond list."""

from __future__ import annotations

import logging
from collections import Counter

from .strength import conjugate_strength
from .types import Bond, Container, Strength, negate_wrap


logger = logging.getLogger(__name__)


def connection_list(container: Container) -> list[list[Bond]]:
    """Outgoing bonds of every site, in bond-list order."""

    out: list[list[Bond]] = [[] for _ in range(container.n_sites)]
    for bond in container.connections:
        out[bond.from_site].append(bond)
    return out


def connectivity_list(container: Container) -> list[list[tuple[int, Strength]]]:
    """``(neighbor, strength)`` pairs of every site."""

    out: list[list[tuple[int, Strength]]] = [[] for _ in range(container.n_sites)]
    for bond in container.connections:
        out[bond.from_site].append((bond.to_site, bond.strength))
    return out


def connection_strengths(container: Container) -> list[Strength]:
    """Distinct strengths in order of first appearance."""

    strengths: list[Strength] = []
    seen: set[tuple[bool, Strength]] = set()
    for bond in container.connections:
        # numbers and labels are kept apart even if they would compare equal
        key = (isinstance(bond.strength, str), bond.strength)
        if key not in seen:
            seen.add(key)
            strengths.append(bond.strength)
    return strengths


def reverse_bond(bond: Bond) -> Bond:
    return Bond(bond.to_site, bond.from_site, conjugate_strength(bond.strength), negate_wrap(bond.wrap))


def missing_reverse_bonds(container: Container) -> list[Bond]:
    """Bonds whose conjugate reverse is absent from the bond list.

    Parallel copies are matched one-to-one, so two identical forward bonds
    need two reverse bonds.
    """

    available = Counter(bond.key() for bond in container.connections)
    missing: list[Bond] = []
    for bond in container.connections:
        rev = reverse_bond(bond).key()
        if available[rev] > 0:
            available[rev] -= 1
        else:
            missing.append(bond)
    if missing:
        logger.warning("%d of %d bonds lack a reverse bond.", len(missing), len(container.connections))
    return missing


def describe(container: Container) -> str:
    """Multi-line summary of a unit cell or lattice."""

    lines = [
        f"{type(container).__name__}",
        f"  dimension: {container.dimension}",
        f"  periodicity: {container.periodicity}",
        f"  sites: {container.n_sites}",
        f"  bonds: {len(container.connections)}",
        f"  strengths: {', '.join(str(s) for s in connection_strengths(container)) or '-'}",
    ]
    repetitions = getattr(container, "unitcell_repetitions", None)
    if repetitions is not None:
        lines.append(f"  unitcell repetitions: {list(repetitions) or '-'}")
    if container.filename:
        lines.append(f"  filename: {container.filename}")
    return "\n".join(lines)
