"""Storage configuration for unit cell and lattice bundles."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StorageConfig:
    """Default locations and formatting of saved bundles."""

    folder_unitcells: str = "unitcells"
    folder_lattices: str = "lattices"
    extension: str = ".json"
    indent: int | None = 2
