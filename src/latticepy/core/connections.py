"""Connection algebra on the bond lists of unit cells and lattices.

Functions ending in a verb mutate their container in place and return ``None``;
``with_bond`` and ``optimized`` return modified deep copies instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .connectivity import connection_list, reverse_bond
from .strength import (
    ZERO_STRENGTH_TOLERANCE,
    add_strengths,
    conjugate_strength,
    evaluate_strength,
    is_negligible,
    is_symbolic,
    multiply_strengths,
    strengths_equal,
)
from .types import Bond, Container, Strength, Wrap, with_connections, zero_wrap


logger = logging.getLogger(__name__)

AUTO = "AUTO"
MULTIPLY = "MULTIPLY"
ALL = "ALL"


def _bond_matches(first: Bond, second: Bond) -> bool:
    return (
        first.from_site == second.from_site
        and first.to_site == second.to_site
        and first.wrap == second.wrap
        and strengths_equal(first.strength, second.strength)
    )


def _resolve_wrap(container: Container, wrap: Wrap | None) -> Wrap:
    if wrap is None:
        return zero_wrap(container.periodicity)
    wrap = tuple(int(w) for w in wrap)
    if len(wrap) != container.periodicity:
        raise ValueError(
            f"wrap must have {container.periodicity} components, got {len(wrap)}."
        )
    return wrap


def add_bond(
    container: Container,
    from_site: int,
    to_site: int,
    strength: Strength,
    wrap: Wrap | None = None,
    *,
    overwrite: bool = False,
) -> None:
    """Add a bond and its conjugate reverse.

    ``wrap=None`` means no crossing. Without ``overwrite`` each direction is
    appended only if an identical bond is not present yet.
    """

    forward = Bond(from_site, to_site, strength, _resolve_wrap(container, wrap))
    backward = reverse_bond(forward)
    if overwrite:
        container.connections.extend([forward, backward])
        return

    found_forward = any(_bond_matches(bond, forward) for bond in container.connections)
    found_backward = any(_bond_matches(bond, backward) for bond in container.connections)
    if not found_forward:
        container.connections.append(forward)
    if not found_backward:
        container.connections.append(backward)


def with_bond(
    container: Container,
    from_site: int,
    to_site: int,
    strength: Strength,
    wrap: Wrap | None = None,
    *,
    overwrite: bool = False,
) -> Container:
    out = container.copy()
    add_bond(out, from_site, to_site, strength, wrap, overwrite=overwrite)
    return out


def remove_bonds_by_strength(container: Container, strength: Strength = 0.0) -> None:
    container.connections = [
        bond for bond in container.connections if not strengths_equal(bond.strength, strength)
    ]


def _merged_bonds(bonds: Iterable[Bond], tolerance: float) -> list[Bond]:
    merged: dict[tuple[int, int, Wrap], Strength] = {}
    for bond in bonds:
        key = (bond.from_site, bond.to_site, bond.wrap)
        if key in merged:
            merged[key] = add_strengths(merged[key], bond.strength)
        else:
            merged[key] = bond.strength
    return [
        Bond(from_site, to_site, strength, wrap)
        for (from_site, to_site, wrap), strength in merged.items()
        if not is_negligible(strength, tolerance)
    ]


def optimize_connections(container: Container, tolerance: float = ZERO_STRENGTH_TOLERANCE) -> None:
    """Merge parallel bonds by summing strengths and drop near-zero bonds."""

    before = len(container.connections)
    container.connections = _merged_bonds(container.connections, tolerance)
    logger.debug("Optimized connections: %d -> %d bonds.", before, len(container.connections))


def optimized(container: Container, tolerance: float = ZERO_STRENGTH_TOLERANCE) -> Container:
    return with_connections(container, _merged_bonds(container.connections, tolerance))


def set_all_strengths(container: Container, value: Strength) -> None:
    container.connections = [bond.with_strength(value) for bond in container.connections]


def map_strengths(
    container: Container,
    mapping: Mapping[Strength, Strength],
    *,
    replace_in_strings: bool = True,
    evaluate: bool = False,
) -> None:
    """Replace strengths according to ``mapping``, entry by entry.

    Entries are applied in iteration order, so the value written by one entry
    can be matched (exactly or as a substring) by a later entry. With
    ``evaluate`` every remaining symbolic strength is computed as an
    arithmetic expression. Nothing is written if evaluation fails.
    """

    strengths = [bond.strength for bond in container.connections]
    for old, new in mapping.items():
        strengths = [new if strengths_equal(s, old) else s for s in strengths]
        if replace_in_strings and is_symbolic(old):
            strengths = [
                s.replace(old, str(new)) if is_symbolic(s) and old in s else s
                for s in strengths
            ]
    if evaluate:
        strengths = [evaluate_strength(s) if is_symbolic(s) else s for s in strengths]
    container.connections = [
        bond.with_strength(s) for bond, s in zip(container.connections, strengths)
    ]


def _nnn_strength(first: Bond, second: Bond, policy: Strength) -> Strength:
    if policy == AUTO:
        return f"NNN{first.to_site}to{second.to_site}"
    if policy == MULTIPLY:
        return f"{first.strength}*{second.strength}"
    return policy


def _member(strength: Strength, allowed: Iterable[Strength]) -> bool:
    return any(strengths_equal(strength, a) for a in allowed)


def add_next_nearest_neighbor_bonds(
    container: Container,
    strength: Strength = AUTO,
    restrict_to: Iterable[Strength] | str = ALL,
) -> None:
    """Compose every pair of bonds leaving a common site into a new bond pair.

    ``strength`` is ``"AUTO"`` (label ``NNN<a>to<b>``), ``"MULTIPLY"`` (textual
    product of the two strengths) or a literal strength. ``restrict_to`` limits
    the composed bonds to those whose strengths are all in the given collection.
    """

    allowed = [restrict_to] if isinstance(restrict_to, str) else list(restrict_to)
    restricted = not _member(ALL, allowed)
    new_bonds: list[Bond] = []
    for outgoing in connection_list(container):
        for i1, first in enumerate(outgoing):
            for second in outgoing[i1 + 1 :]:
                if restricted and not (_member(first.strength, allowed) and _member(second.strength, allowed)):
                    continue
                value = _nnn_strength(first, second, strength)
                offset = tuple(w2 - w1 for w1, w2 in zip(first.wrap, second.wrap))
                new_bonds.append(Bond(first.to_site, second.to_site, value, offset))
                new_bonds.append(Bond(second.to_site, first.to_site, value, tuple(-w for w in offset)))
    container.connections.extend(new_bonds)
    logger.debug("Added %d next-nearest-neighbor bonds.", len(new_bonds))


def square_connections(container: Container, tolerance: float = ZERO_STRENGTH_TOLERANCE) -> Container:
    """Return a copy whose bonds generate the square of the coupling matrix.

    Every ordered pair of bonds ``i->a`` and ``i->b`` (the pair of a bond with
    itself included) contributes ``a->b`` with strength
    ``conj(s_ia) * s_ib``; parallel contributions are merged afterwards.
    """

    squared: list[Bond] = []
    for outgoing in connection_list(container):
        for first in outgoing:
            for second in outgoing:
                offset = tuple(w2 - w1 for w1, w2 in zip(first.wrap, second.wrap))
                value = multiply_strengths(conjugate_strength(first.strength), second.strength)
                squared.append(Bond(first.to_site, second.to_site, value, offset))
    return with_connections(container, _merged_bonds(squared, tolerance))
