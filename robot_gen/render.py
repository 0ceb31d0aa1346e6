"""Headless PNG rendering of robots with Pillow.

A small pinhole camera projects the world-space wireframe (and, for
solid robots, the shaded faces) onto an image:

    - faces are painter-sorted back to front and alpha-blended
    - edges are drawn on top in their material color
    - a floor grid sits under the robots

No z-buffer: back edges stay visible through solid faces, which matches
the look of a translucent hologram closely enough for previews.

Usage:
    cells = generate_grid("robot-001")
    image = render_grid(cells, RenderConfig())
    image.save("robots.png")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from math import cos, radians, sin, tan

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from config import RenderConfig
from robot_gen.grid import (
    BOB_AMPLITUDE,
    SPIN_PER_FRAME,
    GridCell,
    bob_height,
    spin_angle,
)
from robot_gen.mesh import solid_triangles, wireframe_segments
from robot_gen.primitives import Group

log = logging.getLogger(__name__)

NEAR = 0.05


@dataclass(frozen=True)
class Camera:
    """Look-at pinhole camera with a vertical field of view."""

    position: tuple[float, float, float]
    target: tuple[float, float, float]
    fov_deg: float
    width: int
    height: int

    def basis(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        eye = np.asarray(self.position, dtype=float)
        forward = np.asarray(self.target, dtype=float) - eye
        forward /= np.linalg.norm(forward)
        right = np.cross(forward, (0.0, 1.0, 0.0))
        norm = np.linalg.norm(right)
        # Looking straight down: any horizontal right vector works
        right = right / norm if norm > 1e-9 else np.array([1.0, 0.0, 0.0])
        up = np.cross(right, forward)
        return right, up, forward

    def project(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Pixel coordinates (..., 2) and view depth (...) for world points (..., 3)."""
        right, up, forward = self.basis()
        rel = points - np.asarray(self.position, dtype=float)
        x, y, z = rel @ right, rel @ up, rel @ forward
        focal = (self.height / 2) / tan(radians(self.fov_deg) / 2)
        safe = np.where(z > NEAR, z, NEAR)
        px = self.width / 2 + x / safe * focal
        py = self.height / 2 - y / safe * focal
        return np.stack([px, py], axis=-1), z


def camera_from_config(cfg: RenderConfig) -> Camera:
    return Camera(cfg.camera_position, cfg.camera_target, cfg.fov_deg, cfg.width, cfg.height)


def fit_camera(root: Group, cfg: RenderConfig, margin: float = 1.3) -> Camera:
    """Camera looking at one robot from the configured direction, sized to its bounds."""
    segments, _ = wireframe_segments(root)
    if len(segments) == 0:
        return camera_from_config(cfg)
    pts = segments.reshape(-1, 3)
    lo, hi = pts.min(axis=0), pts.max(axis=0)
    center = (lo + hi) / 2
    extent = float(np.linalg.norm(hi - lo)) / 2
    direction = np.asarray(cfg.camera_position, dtype=float) - np.asarray(cfg.camera_target)
    direction /= np.linalg.norm(direction)
    distance = margin * extent / tan(radians(cfg.fov_deg) / 2)
    eye = center + direction * max(distance, NEAR * 10)
    return Camera(tuple(eye), tuple(center), cfg.fov_deg, cfg.width, cfg.height)


def cell_matrix(
    cell: GridCell,
    t: float = 0.0,
    frame: int = 0,
    amplitude: float = BOB_AMPLITUDE,
    spin_rate: float = SPIN_PER_FRAME,
) -> np.ndarray:
    """World matrix of a grid cell: spin about the robot's own Y axis, then bob and slot."""
    spin = spin_angle(frame, spin_rate)
    c, s = cos(spin), sin(spin)
    x, y, z = cell.position
    m = np.eye(4)
    m[:3, :3] = [[c, 0, s], [0, 1, 0], [-s, 0, c]]
    m[:3, 3] = (x, y + bob_height(cell, t, amplitude), z)
    return m


def _rgb(color) -> tuple[int, int, int]:
    return tuple(min(255, max(0, int(c * 255))) for c in color[:3])


def _draw_floor(draw: ImageDraw.ImageDraw, camera: Camera, cfg: RenderConfig):
    half = cfg.floor_size / 2
    ticks = np.linspace(-half, half, cfg.floor_divisions + 1)
    lines = []
    for v in ticks:
        lines.append(((v, cfg.floor_y, -half), (v, cfg.floor_y, half)))
        lines.append(((-half, cfg.floor_y, v), (half, cfg.floor_y, v)))
    _draw_segments(
        draw,
        camera,
        np.asarray(lines, dtype=float),
        np.tile(ImageColor.getrgb(cfg.floor_color), (len(lines), 1)) / 255,
        width=1,
    )


def _draw_segments(draw, camera: Camera, segments: np.ndarray, colors: np.ndarray, width: int):
    if len(segments) == 0:
        return
    pix, depth = camera.project(segments)
    visible = (depth > NEAR).all(axis=1)
    for (a, b), color in zip(pix[visible], colors[visible]):
        draw.line([tuple(a), tuple(b)], fill=_rgb(color), width=width)


def _draw_triangles(draw, camera: Camera, triangles: np.ndarray, colors: np.ndarray):
    if len(triangles) == 0:
        return
    pix, depth = camera.project(triangles)
    visible = (depth > NEAR).all(axis=1)
    pix, depth, colors = pix[visible], depth[visible], colors[visible]
    for i in np.argsort(-depth.mean(axis=1), kind="stable"):
        r, g, b = _rgb(colors[i])
        draw.polygon([tuple(p) for p in pix[i]], fill=(r, g, b, int(colors[i][3] * 255)))


def draw_robot(
    image: Image.Image,
    root: Group,
    camera: Camera,
    base: np.ndarray | None = None,
    line_width: int = 1,
):
    """Draw one robot tree onto an RGBA image in place."""
    draw = ImageDraw.Draw(image, "RGBA")
    triangles, tri_colors = solid_triangles(root, base)
    _draw_triangles(draw, camera, triangles, tri_colors)
    segments, seg_colors = wireframe_segments(root, base)
    _draw_segments(draw, camera, segments, seg_colors, line_width)


def render_robot(root: Group, cfg: RenderConfig, camera: Camera | None = None) -> Image.Image:
    """Render a single robot, framed automatically unless a camera is given."""
    camera = camera or fit_camera(root, cfg)
    image = Image.new("RGBA", (cfg.width, cfg.height), ImageColor.getrgb(cfg.background))
    draw_robot(image, root, camera, line_width=cfg.line_width)
    return image.convert("RGB")


def render_grid(
    placed: list[tuple[GridCell, Group]],
    cfg: RenderConfig,
    t: float = 0.0,
    frame: int = 0,
) -> Image.Image:
    """Render a grid of robots with the floor, at animation time ``t``."""
    camera = camera_from_config(cfg)
    image = Image.new("RGBA", (cfg.width, cfg.height), ImageColor.getrgb(cfg.background))
    _draw_floor(ImageDraw.Draw(image, "RGBA"), camera, cfg)

    # Far robots first so near ones overlap them
    def distance(item):
        cell, _ = item
        return -float(np.linalg.norm(np.subtract(cell.position, cfg.camera_position)))

    for cell, root in sorted(placed, key=distance):
        draw_robot(image, root, camera, cell_matrix(cell, t, frame), cfg.line_width)
    log.info("Rendered %d robots at %dx%d", len(placed), cfg.width, cfg.height)
    return image.convert("RGB")


def thumbnail_config(cfg: RenderConfig, size: int) -> RenderConfig:
    """Square copy of a render config for catalog cells."""
    return replace(cfg, width=size, height=size)
