"""Showcase grid: seeds, placement and idle animation for a wall of robots.

Cell ``i`` of a ``cols x rows`` grid shows the robot for seed
``f"{base_seed}-{i}"``, centered around the origin on the XZ plane.
Each robot bobs with its own phase and speed and spins slowly about its
own vertical axis. Animation state lives on the caller's side; generation
never sees it.

Generation can fan out over worker processes. Every worker builds its
own streams from the seed strings, so results are identical to a serial
run and come back in cell order.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import os
from dataclasses import dataclass
from math import sin

from robot_gen.assembler import generate
from robot_gen.primitives import Group, Vec3

log = logging.getLogger(__name__)

DEFAULT_COLS = 4
DEFAULT_ROWS = 3
DEFAULT_SPACING = 5.0

BOB_AMPLITUDE = 0.08
SPIN_PER_FRAME = 0.002


@dataclass(frozen=True)
class GridCell:
    index: int
    seed: str
    position: Vec3
    bob_offset: float
    bob_speed: float


def grid_layout(
    base_seed: str,
    cols: int = DEFAULT_COLS,
    rows: int = DEFAULT_ROWS,
    spacing: float = DEFAULT_SPACING,
) -> list[GridCell]:
    """Cells in row-major order."""
    cells = []
    for i in range(cols * rows):
        x = (i % cols - (cols - 1) / 2) * spacing
        z = (i // cols - (rows - 1) / 2) * spacing
        cells.append(
            GridCell(
                index=i,
                seed=f"{base_seed}-{i}",
                position=(x, 0.0, z),
                bob_offset=i * 0.3,
                bob_speed=0.8 + i * 0.05,
            )
        )
    return cells


def bob_height(cell: GridCell, t: float, amplitude: float = BOB_AMPLITUDE) -> float:
    """Vertical idle offset of a cell at time ``t`` (seconds)."""
    return sin(t * cell.bob_speed + cell.bob_offset) * amplitude


def spin_angle(frame: int, rate: float = SPIN_PER_FRAME) -> float:
    return frame * rate


def resolve_num_workers(requested: int) -> int:
    """0 = auto (cpu_count), 1 = serial (no multiprocessing)."""
    if requested == 0:
        return os.cpu_count() or 1
    return requested


def _generate_one(args) -> Group:
    seed, detail, solid = args
    return generate(seed, detail, solid)


def generate_grid(
    base_seed: str,
    detail: int = 1,
    solid: bool = False,
    cols: int = DEFAULT_COLS,
    rows: int = DEFAULT_ROWS,
    num_workers: int = 1,
) -> list[tuple[GridCell, Group]]:
    """Build every robot in the grid. Returns (cell, root) pairs in cell order."""
    cells = grid_layout(base_seed, cols, rows)
    jobs = [(c.seed, detail, solid) for c in cells]
    workers = min(resolve_num_workers(num_workers), len(jobs))

    if workers <= 1:
        roots = [_generate_one(job) for job in jobs]
    else:
        log.info("Generating %d robots on %d workers", len(jobs), workers)
        ctx = mp.get_context("spawn")
        with ctx.Pool(processes=workers) as pool:
            roots = pool.map(_generate_one, jobs)

    return list(zip(cells, roots))
