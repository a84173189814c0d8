"""JSON bundles for unit cells and lattices.

A unit cell bundle holds ``basis``, ``connections``, ``lattice_vectors`` and
``filename``; a lattice bundle holds ``unitcell`` (a nested unit cell bundle),
``unitcell_repetitions``, ``positions``, ``positions_indices``,
``connections``, ``lattice_vectors`` and ``filename``. Connections are stored
as ``[from, to, strength, wrap]`` with complex strengths as ``{"re", "im"}``.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import numpy as np

from latticepy.core.types import Bond, Lattice, Strength, Unitcell

from .config import StorageConfig


logger = logging.getLogger(__name__)


def _sanitize_token(value: str) -> str:
    token = re.sub(r"[^A-Za-z0-9._-]+", "_", value.strip())
    return token if token else "unnamed"


def _to_builtin(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, np.ndarray):
        return [_to_builtin(v) for v in value.tolist()]
    if isinstance(value, (complex, np.complexfloating)):
        return {"re": float(value.real), "im": float(value.imag)}
    if isinstance(value, (np.floating, np.integer)):
        return value.item()
    if isinstance(value, dict):
        return {str(k): _to_builtin(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(v) for v in value]
    return value


def _strength_from_builtin(value: Any) -> Strength:
    if isinstance(value, dict):
        return complex(float(value["re"]), float(value["im"]))
    return value


def _encode_connections(connections: list[Bond]) -> list[list[Any]]:
    return [
        [bond.from_site, bond.to_site, _to_builtin(bond.strength), list(bond.wrap)]
        for bond in connections
    ]


def _decode_connections(rows: list[list[Any]]) -> list[Bond]:
    bonds = []
    for row in rows:
        if len(row) != 4:
            raise ValueError("Each connection must be [from, to, strength, wrap].")
        from_site, to_site, strength, wrap = row
        bonds.append(Bond(int(from_site), int(to_site), _strength_from_builtin(strength), tuple(wrap)))
    return bonds


def _vectors(rows: list[list[float]], width: int) -> np.ndarray:
    return np.asarray(rows, dtype=float).reshape(len(rows), width)


def unitcell_to_dict(unitcell: Unitcell) -> dict[str, Any]:
    return {
        "kind": "unitcell",
        "basis": _to_builtin(unitcell.basis),
        "connections": _encode_connections(unitcell.connections),
        "lattice_vectors": _to_builtin(unitcell.lattice_vectors),
        "dimension": unitcell.dimension,
        "filename": unitcell.filename,
    }


def unitcell_from_dict(payload: dict[str, Any]) -> Unitcell:
    width = int(payload.get("dimension", 0))
    return Unitcell(
        lattice_vectors=_vectors(payload["lattice_vectors"], width),
        basis=_vectors(payload["basis"], width),
        connections=_decode_connections(payload["connections"]),
        filename=payload.get("filename"),
    )


def lattice_to_dict(lattice: Lattice) -> dict[str, Any]:
    return {
        "kind": "lattice",
        "unitcell": unitcell_to_dict(lattice.unitcell),
        "unitcell_repetitions": list(lattice.unitcell_repetitions),
        "positions": _to_builtin(lattice.positions),
        "positions_indices": _to_builtin(lattice.positions_indices),
        "connections": _encode_connections(lattice.connections),
        "lattice_vectors": _to_builtin(lattice.lattice_vectors),
        "dimension": lattice.dimension,
        "filename": lattice.filename,
    }


def lattice_from_dict(payload: dict[str, Any]) -> Lattice:
    width = int(payload.get("dimension", 0))
    return Lattice(
        unitcell=unitcell_from_dict(payload["unitcell"]),
        unitcell_repetitions=tuple(payload["unitcell_repetitions"]),
        lattice_vectors=_vectors(payload["lattice_vectors"], width),
        positions=_vectors(payload["positions"], width),
        positions_indices=np.asarray(payload["positions_indices"], dtype=int),
        connections=_decode_connections(payload["connections"]),
        filename=payload.get("filename"),
    )


def _save_json(path: Path, payload: dict[str, Any], indent: int | None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=indent)
        fh.write("\n")


def _load_json(path: Path, kind: str) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict) or payload.get("kind") != kind:
        raise ValueError(f"{path} does not contain a {kind} bundle.")
    return payload


def _default_path(folder: str, name: str | None, fallback: str, config: StorageConfig) -> Path:
    stem = _sanitize_token(name or fallback)
    if not stem.endswith(config.extension):
        stem += config.extension
    return Path(folder) / stem


def save_unitcell(
    unitcell: Unitcell,
    path: str | Path | None = None,
    config: StorageConfig | None = None,
) -> Path:
    """Write ``unitcell`` as JSON; without ``path`` it goes to ``config.folder_unitcells``."""

    config = config or StorageConfig()
    out = Path(path) if path is not None else _default_path(
        config.folder_unitcells, unitcell.filename, "unitcell", config
    )
    unitcell.filename = str(out)
    _save_json(out, unitcell_to_dict(unitcell), config.indent)
    logger.info("Saved unit cell to %s", out)
    return out


def load_unitcell(path: str | Path) -> Unitcell:
    source = Path(path)
    unitcell = unitcell_from_dict(_load_json(source, "unitcell"))
    unitcell.filename = str(source)
    return unitcell


def save_lattice(
    lattice: Lattice,
    path: str | Path | None = None,
    config: StorageConfig | None = None,
) -> Path:
    """Write ``lattice`` as JSON; without ``path`` it goes to ``config.folder_lattices``."""

    config = config or StorageConfig()
    out = Path(path) if path is not None else _default_path(
        config.folder_lattices, lattice.filename, "lattice", config
    )
    lattice.filename = str(out)
    _save_json(out, lattice_to_dict(lattice), config.indent)
    logger.info("Saved lattice to %s", out)
    return out


def load_lattice(path: str | Path) -> Lattice:
    source = Path(path)
    lattice = lattice_from_dict(_load_json(source, "lattice"))
    lattice.filename = str(source)
    return lattice
