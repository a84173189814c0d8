from .bundles import (
    lattice_from_dict,
    lattice_to_dict,
    load_lattice,
    load_unitcell,
    save_lattice,
    save_unitcell,
    unitcell_from_dict,
    unitcell_to_dict,
)
from .config import StorageConfig

__all__ = [
    "StorageConfig",
    "save_unitcell",
    "load_unitcell",
    "save_lattice",
    "load_lattice",
    "unitcell_to_dict",
    "unitcell_from_dict",
    "lattice_to_dict",
    "lattice_from_dict",
]
