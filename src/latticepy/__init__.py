from .construction import (
    get_lattice,
    get_lattice_by_bond_distance,
    get_lattice_in_box,
    get_lattice_in_shape,
    get_lattice_in_sphere,
    get_lattice_open,
    get_lattice_periodic,
    get_lattice_semiperiodic,
)
from .core import (
    Bond,
    Lattice,
    Unitcell,
    add_bond,
    bloch_matrix,
    optimize_connections,
    real_space_matrix,
)
from .models import get_unitcell, list_unitcells

__all__ = [
    "Bond",
    "Unitcell",
    "Lattice",
    "add_bond",
    "optimize_connections",
    "real_space_matrix",
    "bloch_matrix",
    "get_lattice",
    "get_lattice_open",
    "get_lattice_periodic",
    "get_lattice_semiperiodic",
    "get_lattice_by_bond_distance",
    "get_lattice_in_shape",
    "get_lattice_in_sphere",
    "get_lattice_in_box",
    "get_unitcell",
    "list_unitcells",
]
