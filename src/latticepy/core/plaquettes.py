"""Plaquettes: minimal closed bond loops of a lattice graph.

A plaquette through a site is built from two of its neighbors joined by a
shortest path that avoids the site. Loops with a chord (a bond between two
non-consecutive loop sites) are discarded since they split into smaller
plaquettes. Only bonds with a zero wrap are followed, so loops that close
across a periodic boundary are not found.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from itertools import combinations

from .types import Container


logger = logging.getLogger(__name__)

Plaquette = tuple[int, ...]


def _undirected_neighbors(container: Container) -> list[set[int]]:
    neighbors: list[set[int]] = [set() for _ in range(container.n_sites)]
    for bond in container.connections:
        if bond.from_site == bond.to_site or any(bond.wrap):
            continue
        neighbors[bond.from_site].add(bond.to_site)
        neighbors[bond.to_site].add(bond.from_site)
    return neighbors


def _shortest_paths(
    neighbors: list[set[int]], start: int, goal: int, blocked: int, max_edges: int
) -> list[list[int]]:
    depth = {start: 0}
    parents: dict[int, list[int]] = {start: []}
    frontier = deque([start])
    while frontier:
        node = frontier.popleft()
        if node == goal or depth[node] >= max_edges:
            continue
        if goal in depth and depth[node] >= depth[goal]:
            continue
        for nxt in sorted(neighbors[node]):
            if nxt == blocked:
                continue
            if nxt not in depth:
                depth[nxt] = depth[node] + 1
                parents[nxt] = [node]
                frontier.append(nxt)
            elif depth[nxt] == depth[node] + 1:
                parents[nxt].append(node)
    if goal not in depth:
        return []

    paths: list[list[int]] = []
    stack = [(goal, [goal])]
    while stack:
        node, tail = stack.pop()
        if node == start:
            paths.append(tail[::-1])
            continue
        for parent in parents[node]:
            stack.append((parent, tail + [parent]))
    return paths


def _is_chordless(loop: Plaquette, neighbors: list[set[int]]) -> bool:
    n = len(loop)
    for i, j in combinations(range(n), 2):
        if j - i in (1, n - 1):
            continue
        if loop[j] in neighbors[loop[i]]:
            return False
    return True


def _oriented(loop: Plaquette) -> Plaquette:
    # first site fixed, walk towards the smaller of its two loop neighbors
    return loop if loop[1] <= loop[-1] else (loop[0], *loop[:0:-1])


def _canonical(loop: Plaquette) -> Plaquette:
    k = loop.index(min(loop))
    return _oriented(loop[k:] + loop[:k])


def _check_max_length(max_length: int) -> None:
    if max_length < 3:
        raise ValueError(f"max_length must be at least 3, got {max_length}.")


def _site_plaquettes(neighbors: list[set[int]], site: int, max_length: int) -> list[Plaquette]:
    found: set[Plaquette] = set()
    for a, b in combinations(sorted(neighbors[site]), 2):
        for path in _shortest_paths(neighbors, a, b, site, max_length - 2):
            loop = (site, *path)
            if _is_chordless(loop, neighbors):
                found.add(_oriented(loop))
    return sorted(found, key=lambda loop: (len(loop), loop))


def find_plaquettes(container: Container, site: int, max_length: int = 8) -> list[Plaquette]:
    """Plaquettes through ``site`` with at most ``max_length`` bonds.

    Each plaquette is a tuple of site indices starting at ``site``.
    """

    if not 0 <= site < container.n_sites:
        raise ValueError(f"site must be in 0..{container.n_sites - 1}, got {site}.")
    _check_max_length(max_length)
    return _site_plaquettes(_undirected_neighbors(container), site, max_length)


def plaquette_statistics(
    container: Container, max_length: int = 8, site: int | None = None
) -> dict[int, int]:
    """Number of plaquettes per loop length, for one site or the whole container."""

    if site is not None:
        return dict(sorted(Counter(len(p) for p in find_plaquettes(container, site, max_length)).items()))

    _check_max_length(max_length)
    neighbors = _undirected_neighbors(container)
    loops: set[Plaquette] = set()
    for index in range(container.n_sites):
        loops.update(_canonical(loop) for loop in _site_plaquettes(neighbors, index, max_length))
    counts = dict(sorted(Counter(len(loop) for loop in loops).items()))
    logger.debug("Found %d plaquettes over %d sites: %s", len(loops), container.n_sites, counts)
    return counts
