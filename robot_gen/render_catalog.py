"""Render every part of each catalog region into a labeled PNG grid.

Usage:
    python -m robot_gen.render_catalog              # all regions
    python -m robot_gen.render_catalog head arm     # selected regions
    python -m robot_gen.render_catalog --out docs/  # custom output dir
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from config import RenderConfig
from robot_gen.parts import Region, get_generator, list_tags
from robot_gen.primitives import Color, Group
from robot_gen.render import render_robot, thumbnail_config
from robot_gen.resolution import profile_for
from robot_gen.stream import create_stream

log = logging.getLogger(__name__)

# Render settings
CELL = 320
LABEL_H = 32
BG_COLOR = (10, 10, 15)
LABEL_BG = (22, 22, 30)
LABEL_FG = (220, 220, 220)

PART_COLOR = Color.from_hsl(0.55, 0.8, 0.55)

# Representative dims per region at scale 1.0
REGION_DIMS = {
    Region.HEAD: (0.6,),
    Region.TORSO: (0.8, 1.2, 0.5),
    Region.ARM: (0.6, 0.12),
    Region.LEG: (0.8, 0.15),
}
LOCOMOTION_DIMS = {
    "bipedal": (0.8, 1.2, 1.0),
    "tank": (0.4, 1.5, 0.5),
    "wheel": (0.35, 0.15),
}
LOCOMOTION_DEFAULT = (0.5,)


def part_dims(region: Region, tag: str) -> tuple[float, ...]:
    if region is Region.LOCOMOTION:
        return LOCOMOTION_DIMS.get(tag, LOCOMOTION_DEFAULT)
    return REGION_DIMS[region]


def build_part(region: Region, tag: str, detail: int = 1, solid: bool = False) -> Group:
    """One catalog part on its own, with a stream derived from its name."""
    generator = get_generator(region, tag)
    stream = create_stream(f"catalog:{region.value}:{tag}")
    return generator(part_dims(region, tag), PART_COLOR, stream, profile_for(detail), solid)


def _try_load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Try to load a nice font, fall back to default."""
    candidates = [
        "/System/Library/Fonts/SFNSMono.ttf",
        "/System/Library/Fonts/Menlo.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for path in candidates:
        if Path(path).exists():
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    return ImageFont.load_default()


def render_region(
    region: Region, out_dir: Path, detail: int = 1, cfg: RenderConfig | None = None
) -> Path:
    """Render all tags of a region into a labeled grid PNG."""
    tags = list_tags(region)
    n = len(tags)
    cols = min(4, n)
    rows = math.ceil(n / cols)
    cell_cfg = thumbnail_config(cfg or RenderConfig(), CELL)

    cell_total_h = CELL + LABEL_H
    grid = Image.new("RGB", (cols * CELL, rows * cell_total_h), BG_COLOR)
    draw = ImageDraw.Draw(grid)
    font = _try_load_font(18)

    for idx, tag in enumerate(tags):
        cell_img = render_robot(build_part(region, tag, detail), cell_cfg)
        x = (idx % cols) * CELL
        y = (idx // cols) * cell_total_h
        grid.paste(cell_img, (x, y))

        # Label below the render
        label_y = y + CELL
        draw.rectangle([x, label_y, x + CELL, label_y + LABEL_H], fill=LABEL_BG)
        bbox = font.getbbox(tag)
        tw = bbox[2] - bbox[0]
        tx = x + (CELL - tw) // 2
        ty = label_y + (LABEL_H - (bbox[3] - bbox[1])) // 2
        draw.text((tx, ty), tag, fill=LABEL_FG, font=font)

    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{region.value}.png"
    grid.save(out_path)
    return out_path


def render_catalog(regions: list[str], out_dir: Path, detail: int = 1) -> list[Path]:
    """Render the named regions (all when empty). Unknown names exit with an error."""
    available = [r.value for r in Region]
    for name in regions:
        if name not in available:
            log.error("Unknown region '%s'. Available: %s", name, ", ".join(available))
            sys.exit(1)

    paths = []
    for name in regions or available:
        log.info("Rendering %s...", name)
        path = render_region(Region(name), out_dir, detail)
        log.info("  -> %s", path)
        paths.append(path)
    return paths


def main():
    parser = argparse.ArgumentParser(description="Render part catalog sheets")
    parser.add_argument("regions", nargs="*", help="Region names (default: all)")
    parser.add_argument("--out", default="docs/catalog", help="Output directory")
    parser.add_argument("--detail", type=int, default=1, help="Detail level 1-3")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    render_catalog(args.regions, Path(args.out), args.detail)


if __name__ == "__main__":
    main()
