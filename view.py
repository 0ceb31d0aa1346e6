"""Interactive matplotlib viewer for a grid of robots.

Controls:
    Left-drag: orbit (pitch clamped to ViewerConfig.max_elevation_deg)
    Scroll: zoom in/out (clamped)
    Close the window to quit.

Robots bob with their own phase and each one spins slowly about its own
vertical axis. Wireframes are computed once per robot; each frame only re-applies the
cell transform.
"""

from __future__ import annotations

import logging
import time

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

from config import Config
from robot_gen.arena import transform_points
from robot_gen.grid import generate_grid
from robot_gen.mesh import solid_triangles, wireframe_segments
from robot_gen.render import cell_matrix

log = logging.getLogger(__name__)

ZOOM_STEP = 1.1


def _to_mpl(points: np.ndarray) -> np.ndarray:
    """Y-up world -> matplotlib's Z-up axes (x, -z, y)."""
    return points[..., [0, 2, 1]] * np.array([1.0, -1.0, 1.0])


def run_view(cfg: Config | None = None):
    """Open the viewer for the configured base seed and grid."""
    cfg = cfg or Config()
    gen, grid, viewer = cfg.generation, cfg.grid, cfg.viewer

    log.info("Generating %dx%d robots from '%s'...", grid.cols, grid.rows, gen.seed)
    placed = generate_grid(gen.seed, gen.detail, gen.solid, grid.cols, grid.rows, grid.num_workers)

    # Local-space geometry per robot, transformed every frame
    robots = []
    for cell, root in placed:
        segs, seg_colors = wireframe_segments(root)
        tris, tri_colors = solid_triangles(root)
        robots.append((cell, segs, seg_colors, tris, tri_colors))

    fig = plt.figure(figsize=(12, 8), facecolor=cfg.render.background)
    ax = fig.add_subplot(projection="3d", facecolor=cfg.render.background)
    ax.set_axis_off()
    ax.view_init(elev=viewer.initial_elevation_deg, azim=viewer.initial_azimuth_deg)

    state = {"distance": viewer.initial_distance}

    def apply_zoom():
        half = state["distance"]
        ax.set_xlim(-half, half)
        ax.set_ylim(-half, half)
        ax.set_zlim(cfg.render.floor_y, cfg.render.floor_y + 2 * half)
        ax.set_box_aspect((1, 1, 1))

    def on_scroll(event):
        factor = 1 / ZOOM_STEP if event.button == "up" else ZOOM_STEP
        state["distance"] = float(
            np.clip(state["distance"] * factor, viewer.min_distance, viewer.max_distance)
        )
        apply_zoom()
        fig.canvas.draw_idle()

    fig.canvas.mpl_connect("scroll_event", on_scroll)
    apply_zoom()

    # Floor grid
    half = cfg.render.floor_size / 2
    ticks = np.linspace(-half, half, cfg.render.floor_divisions + 1)
    floor = []
    for v in ticks:
        floor.append(((v, cfg.render.floor_y, -half), (v, cfg.render.floor_y, half)))
        floor.append(((-half, cfg.render.floor_y, v), (half, cfg.render.floor_y, v)))
    ax.add_collection3d(
        Line3DCollection(_to_mpl(np.asarray(floor)), colors=cfg.render.floor_color, linewidths=0.5)
    )

    faces = Poly3DCollection([], linewidths=0)
    edges = Line3DCollection([], linewidths=cfg.render.line_width)
    ax.add_collection3d(faces)
    ax.add_collection3d(edges)

    start = time.perf_counter()

    def update(frame):
        t = time.perf_counter() - start
        all_segs, all_seg_colors, all_tris, all_tri_colors = [], [], [], []
        for cell, segs, seg_colors, tris, tri_colors in robots:
            m = cell_matrix(cell, t, frame, viewer.bob_amplitude, viewer.spin_per_frame)
            if len(segs):
                all_segs.append(transform_points(m, segs))
                all_seg_colors.append(seg_colors)
            if len(tris):
                all_tris.append(transform_points(m, tris))
                all_tri_colors.append(tri_colors)

        if all_segs:
            edges.set_segments(_to_mpl(np.concatenate(all_segs)))
            edges.set_color(np.concatenate(all_seg_colors))
        if all_tris:
            faces.set_verts(_to_mpl(np.concatenate(all_tris)))
            faces.set_facecolor(np.concatenate(all_tri_colors))

        # Orbit pitch limit
        limit = viewer.max_elevation_deg
        if abs(ax.elev) > limit:
            ax.view_init(elev=float(np.clip(ax.elev, -limit, limit)), azim=ax.azim)
        return edges, faces

    anim = FuncAnimation(fig, update, interval=1000 / viewer.fps, blit=False, cache_frame_data=False)
    plt.show()
    return anim
