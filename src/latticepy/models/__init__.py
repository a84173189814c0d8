from .registry import get_unitcell, list_unitcells, register_unitcell
from .unitcells import (
    chain_unitcell,
    cubic_unitcell,
    diamond_unitcell,
    honeycomb_unitcell,
    kagome_unitcell,
    square_unitcell,
    triangular_unitcell,
)

__all__ = [
    "register_unitcell",
    "get_unitcell",
    "list_unitcells",
    "chain_unitcell",
    "square_unitcell",
    "triangular_unitcell",
    "honeycomb_unitcell",
    "kagome_unitcell",
    "cubic_unitcell",
    "diamond_unitcell",
]
