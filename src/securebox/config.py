"""
Configuration for unlock sweeps.

A sweep runs ``n_boxes`` shuffled boxes for every grid size listed and
records outcome and timing per box.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import yaml


@dataclass
class GridConfig:
    """Grid sizes to sweep, as (rows, columns) pairs."""
    sizes: List[Tuple[int, int]] = field(
        default_factory=lambda: [(n, n) for n in range(1, 9)]
    )


@dataclass
class SweepConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    n_boxes: int = 20
    seed: int = 0
    output_dir: str = "results/runs"

    @property
    def out_path(self) -> Path:
        return Path(self.output_dir)


def _parse_sizes(raw) -> List[Tuple[int, int]]:
    sizes = []
    for item in raw:
        if isinstance(item, int):
            sizes.append((item, item))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            sizes.append((int(item[0]), int(item[1])))
        else:
            raise ValueError(f"Invalid grid size: {item!r}")
    for rows, columns in sizes:
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Grid sizes must be positive, got {rows}x{columns}")
    return sizes


def load_config(path) -> SweepConfig:
    """Read the ``experiment`` block of a YAML file into a SweepConfig."""
    with open(path, "r", encoding="utf-8") as f:
        cfg = (yaml.safe_load(f) or {}).get("experiment", {})

    defaults = SweepConfig()
    grid = GridConfig()
    if "grid" in cfg and "sizes" in cfg["grid"]:
        grid = GridConfig(sizes=_parse_sizes(cfg["grid"]["sizes"]))

    return SweepConfig(
        grid=grid,
        n_boxes=int(cfg.get("n_boxes", defaults.n_boxes)),
        seed=int(cfg.get("seed", defaults.seed)),
        output_dir=str(cfg.get("output_dir", defaults.output_dir)),
    )
