"""Build a lattice from a JSON input file (unit cell -> construction -> edits -> save)."""

from __future__ import annotations

import argparse
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from latticepy.construction import (
    get_lattice,
    get_lattice_by_bond_distance,
    get_lattice_in_box,
    get_lattice_in_sphere,
)
from latticepy.core import (
    add_next_nearest_neighbor_bonds,
    bond_to_site_transform,
    connection_strengths,
    describe,
    label_connected_components,
    map_strengths,
    missing_reverse_bonds,
    optimize_connections,
)
from latticepy.core.types import Lattice, Unitcell
from latticepy.io import StorageConfig, load_unitcell, save_lattice, save_unitcell
from latticepy.io.bundles import _sanitize_token, _to_builtin
from latticepy.models import get_unitcell


logger = logging.getLogger(__name__)

CONSTRUCTION_METHODS = ("tiling", "bond_distance", "sphere", "box")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _resolve_path(base_dir: Path, path_like: str | Path) -> Path:
    p = Path(path_like)
    return p if p.is_absolute() else (base_dir / p)


def _load_json_config(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8-sig") as fh:
        cfg = json.load(fh)
    if not isinstance(cfg, dict):
        raise ValueError("Input config must be a JSON object.")
    return cfg


def _save_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(_to_builtin(payload), fh, indent=2, sort_keys=True)
        fh.write("\n")


def _default_template() -> dict[str, Any]:
    return {
        "run": {
            "name": "honeycomb_periodic",
            "output_dir": "outputs/lattices",
            "write_report": True,
        },
        "unitcell": {
            "preset": "honeycomb",
            "params": {"strength": 1.0},
            "path": None,
        },
        "construction": {
            "method": "tiling",
            "repetitions": [-4, -4],
            "bond_distance": 3,
            "origin": 0,
            "radius": 9.0,
            "extent": [6.0, 6.0],
        },
        "modifications": {
            "next_nearest_neighbors": {
                "enabled": False,
                "strength": "AUTO",
                "restrict_to": "ALL",
            },
            "map_strengths": {},
            "replace_in_strings": True,
            "evaluate": False,
            "optimize": True,
            "bond_to_site": False,
        },
        "output": {
            "save_unitcell": False,
            "save_lattice": True,
        },
    }


def write_input_template(path: str | Path) -> Path:
    out = Path(path)
    _save_json(out, _default_template())
    return out


def _build_unitcell(cfg: dict[str, Any], cfg_dir: Path) -> Unitcell:
    if cfg.get("path"):
        return load_unitcell(_resolve_path(cfg_dir, cfg["path"]))
    preset = cfg.get("preset")
    if not preset:
        raise ValueError("unitcell.preset or unitcell.path must be given.")
    return get_unitcell(str(preset), **dict(cfg.get("params", {})))


def _construct(unitcell: Unitcell, cfg: dict[str, Any]) -> Lattice:
    method = str(cfg.get("method", "tiling")).lower()
    origin = int(cfg.get("origin", 0))
    if method == "tiling":
        return get_lattice(unitcell, cfg["repetitions"])
    if method == "bond_distance":
        return get_lattice_by_bond_distance(unitcell, int(cfg["bond_distance"]), origin=origin)
    if method == "sphere":
        return get_lattice_in_sphere(unitcell, float(cfg["radius"]), origin=origin)
    if method == "box":
        return get_lattice_in_box(unitcell, [float(e) for e in cfg["extent"]], origin=origin)
    raise ValueError(f"construction.method must be one of: {', '.join(CONSTRUCTION_METHODS)}.")


def _modify(lattice: Lattice, cfg: dict[str, Any]) -> Lattice:
    nnn = dict(cfg.get("next_nearest_neighbors", {}))
    if nnn.get("enabled", False):
        add_next_nearest_neighbor_bonds(
            lattice,
            strength=nnn.get("strength", "AUTO"),
            restrict_to=nnn.get("restrict_to", "ALL"),
        )
    mapping = dict(cfg.get("map_strengths", {}))
    evaluate = bool(cfg.get("evaluate", False))
    if mapping or evaluate:
        map_strengths(
            lattice,
            mapping,
            replace_in_strings=bool(cfg.get("replace_in_strings", True)),
            evaluate=evaluate,
        )
    if cfg.get("optimize", True):
        optimize_connections(lattice)
    if cfg.get("bond_to_site", False):
        lattice = bond_to_site_transform(lattice)
    return lattice


def run_build_lattice(config_path: str | Path) -> dict[str, Any]:
    cfg_path = Path(config_path)
    cfg_dir = cfg_path.parent if cfg_path.parent != Path("") else Path(".")
    cfg = _load_json_config(cfg_path)
    run_cfg = dict(cfg.get("run", {}))
    run_name = _sanitize_token(str(run_cfg.get("name", cfg_path.stem)))
    output_dir = _resolve_path(cfg_dir, run_cfg.get("output_dir", "outputs/lattices"))
    output_cfg = dict(cfg.get("output", {}))
    storage = StorageConfig(
        folder_unitcells=str(output_dir / "unitcells"),
        folder_lattices=str(output_dir / "lattices"),
    )

    started = _utc_now_iso()
    t0 = time.perf_counter()
    unitcell = _build_unitcell(dict(cfg.get("unitcell", {})), cfg_dir)
    unitcell.filename = f"{run_name}_unitcell"
    lattice = _construct(unitcell, dict(cfg.get("construction", {})))
    lattice = _modify(lattice, dict(cfg.get("modifications", {})))
    lattice.filename = run_name
    _, n_components = label_connected_components(lattice)
    runtime = time.perf_counter() - t0

    outputs: dict[str, Any] = {}
    if output_cfg.get("save_unitcell", False):
        outputs["unitcell"] = save_unitcell(unitcell, config=storage)
    if output_cfg.get("save_lattice", True):
        outputs["lattice"] = save_lattice(lattice, config=storage)

    report: dict[str, Any] = {
        "run": {
            "name": run_name,
            "started_utc": started,
            "runtime_seconds": runtime,
        },
        "lattice": {
            "sites": lattice.n_sites,
            "bonds": len(lattice.connections),
            "periodicity": lattice.periodicity,
            "unitcell_repetitions": list(lattice.unitcell_repetitions),
            "components": n_components,
            "strengths": [str(s) for s in connection_strengths(lattice)],
            "missing_reverse_bonds": len(missing_reverse_bonds(lattice)),
        },
        "outputs": outputs,
    }
    if run_cfg.get("write_report", True):
        report_path = output_dir / f"{run_name}_report.json"
        report["outputs"]["report"] = str(report_path)
        _save_json(report_path, report)
    logger.info("Built %r in %.3f s.", lattice, runtime)
    logger.debug("%s", describe(lattice))
    return report


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", type=Path, default=None, help="Path to JSON build configuration.")
    parser.add_argument("--write-template", type=Path, default=None, help="Write template config and exit.")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages.")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.write_template is not None:
        out = write_input_template(args.write_template)
        print(f"Wrote template: {out}")
        return
    if args.input is None:
        raise ValueError("Provide --input <config.json> or --write-template <path>.")

    report = run_build_lattice(args.input)
    print(f"Build complete: {report['run']['name']}")
    print(f"sites={report['lattice']['sites']} bonds={report['lattice']['bonds']}")
    print(f"outputs={report['outputs']}")


if __name__ == "__main__":
    main()
