from .connections import (
    ALL,
    AUTO,
    MULTIPLY,
    add_bond,
    add_next_nearest_neighbor_bonds,
    map_strengths,
    optimize_connections,
    optimized,
    remove_bonds_by_strength,
    set_all_strengths,
    square_connections,
    with_bond,
)
from .connectivity import (
    connection_list,
    connection_strengths,
    connectivity_list,
    describe,
    missing_reverse_bonds,
    reverse_bond,
)
from .decomposition import bond_to_site_transform, label_connected_components, split_into_components
from .matrices import bloch_matrix, real_space_matrix
from .plaquettes import find_plaquettes, plaquette_statistics
from .strength import (
    ZERO_STRENGTH_TOLERANCE,
    StrengthEvaluationError,
    add_strengths,
    conjugate_strength,
    evaluate_strength,
    is_symbolic,
    multiply_strengths,
    strengths_equal,
)
from .types import Bond, Lattice, Unitcell, empty_unitcell

__all__ = [
    "Bond",
    "Unitcell",
    "Lattice",
    "empty_unitcell",
    "AUTO",
    "MULTIPLY",
    "ALL",
    "add_bond",
    "with_bond",
    "remove_bonds_by_strength",
    "optimize_connections",
    "optimized",
    "set_all_strengths",
    "map_strengths",
    "add_next_nearest_neighbor_bonds",
    "square_connections",
    "connection_list",
    "connectivity_list",
    "describe",
    "connection_strengths",
    "missing_reverse_bonds",
    "reverse_bond",
    "label_connected_components",
    "split_into_components",
    "bond_to_site_transform",
    "real_space_matrix",
    "bloch_matrix",
    "find_plaquettes",
    "plaquette_statistics",
    "ZERO_STRENGTH_TOLERANCE",
    "StrengthEvaluationError",
    "is_symbolic",
    "conjugate_strength",
    "add_strengths",
    "multiply_strengths",
    "strengths_equal",
    "evaluate_strength",
]
