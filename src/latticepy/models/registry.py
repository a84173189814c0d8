"""Preset unit cells by name.

Factories register themselves with the ``register_unitcell`` decorator and are
looked up case-insensitively; keyword arguments of ``get_unitcell`` are passed
through to the factory (for example ``strength``).
"""

from __future__ import annotations

from collections.abc import Callable
from difflib import get_close_matches
from typing import Any

from latticepy.core.types import Unitcell


UnitcellFactory = Callable[..., Unitcell]
_PRESETS: dict[str, UnitcellFactory] = {}


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def register_unitcell(
    name: str, *, overwrite: bool = False
) -> Callable[[UnitcellFactory], UnitcellFactory]:
    """Decorator adding a unit cell factory under ``name``."""

    key = _normalize(name)
    if not key:
        raise ValueError("Unit cell name must be non-empty.")

    def _register(factory: UnitcellFactory) -> UnitcellFactory:
        if key in _PRESETS and not overwrite and _PRESETS[key] is not factory:
            raise ValueError(f"Unit cell '{key}' is already registered.")
        _PRESETS[key] = factory
        return factory

    return _register


def list_unitcells() -> tuple[str, ...]:
    return tuple(sorted(_PRESETS))


def get_unitcell(name: str, **params: Any) -> Unitcell:
    key = _normalize(name)
    if key not in _PRESETS:
        hint = get_close_matches(key, _PRESETS, n=1)
        suggestion = f" Did you mean '{hint[0]}'?" if hint else ""
        raise KeyError(f"No unit cell preset named '{name}'.{suggestion}")
    unitcell = _PRESETS[key](**params)
    unitcell.filename = unitcell.filename or key
    return unitcell
