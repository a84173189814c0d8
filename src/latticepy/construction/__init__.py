from .growth import (
    box_shape,
    get_lattice_by_bond_distance,
    get_lattice_in_box,
    get_lattice_in_shape,
    get_lattice_in_sphere,
    sphere_shape,
)
from .tiling import (
    boundary_mode,
    get_lattice,
    get_lattice_open,
    get_lattice_periodic,
    get_lattice_semiperiodic,
    lattice_to_unitcell,
)

__all__ = [
    "boundary_mode",
    "get_lattice",
    "get_lattice_open",
    "get_lattice_periodic",
    "get_lattice_semiperiodic",
    "lattice_to_unitcell",
    "get_lattice_by_bond_distance",
    "get_lattice_in_shape",
    "get_lattice_in_sphere",
    "get_lattice_in_box",
    "sphere_shape",
    "box_shape",
]
