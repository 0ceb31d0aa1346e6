"""
Robot generator command line.

Single entry point for describing, rendering, cataloguing, benchmarking
and viewing seeded wireframe robots.

Usage:
    python main.py describe robot-001-0 robot-001-1 [--detail N] [--solid]
    python main.py render [--seed BASE] [--out robots.png] [--cols 4] [--rows 3]
                          [--detail N] [--solid] [--workers N]
    python main.py catalog [REGION ...] [--out docs/catalog] [--detail N]
    python main.py bench [--count 1000]
    python main.py view [--seed BASE] [--detail N] [--solid]

Add --verbose before the subcommand for DEBUG logging.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config import Config

log = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure root logger level and install an excepthook.

    Unhandled exceptions go to the log with ``logging.critical`` before
    the previous hook prints them.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

    # Capture unhandled exceptions to the log
    _original_excepthook = sys.excepthook

    def _logging_excepthook(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.critical(
                "Unhandled exception", exc_info=(exc_type, exc_value, exc_tb)
            )
        _original_excepthook(exc_type, exc_value, exc_tb)

    sys.excepthook = _logging_excepthook


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    defaults = Config()
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="Seeded low-poly wireframe robots",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="DEBUG logging")
    sub = parser.add_subparsers(dest="command")

    # describe
    p_desc = sub.add_parser("describe", help="Print what each seed builds")
    p_desc.add_argument("seeds", nargs="+", help="Seed strings")
    p_desc.add_argument("--detail", type=int, default=defaults.generation.detail, help="Detail level 1-3")
    p_desc.add_argument("--solid", action="store_true", help="Include solid materials")

    # render
    p_render = sub.add_parser("render", help="Render a grid of robots to PNG")
    p_render.add_argument("--seed", type=str, default=defaults.generation.seed, help="Base seed")
    p_render.add_argument("--out", type=str, default="robots.png", help="Output PNG path")
    p_render.add_argument("--cols", type=int, default=defaults.grid.cols, help="Grid columns")
    p_render.add_argument("--rows", type=int, default=defaults.grid.rows, help="Grid rows")
    p_render.add_argument("--detail", type=int, default=defaults.generation.detail, help="Detail level 1-3")
    p_render.add_argument("--solid", action="store_true", help="Shade faces under the wireframe")
    p_render.add_argument("--workers", type=int, default=defaults.grid.num_workers, help="0 = auto, 1 = serial")

    # catalog
    p_cat = sub.add_parser("catalog", help="Render part catalog sheets")
    p_cat.add_argument("regions", nargs="*", help="Region names (default: all)")
    p_cat.add_argument("--out", type=str, default="docs/catalog", help="Output directory")
    p_cat.add_argument("--detail", type=int, default=defaults.generation.detail, help="Detail level 1-3")

    # bench
    p_bench = sub.add_parser("bench", help="Benchmark generation speed")
    p_bench.add_argument("--count", type=int, default=1000, help="Number of robots")

    # view
    p_view = sub.add_parser("view", help="Interactive matplotlib viewer")
    p_view.add_argument("--seed", type=str, default=defaults.generation.seed, help="Base seed")
    p_view.add_argument("--detail", type=int, default=defaults.generation.detail, help="Detail level 1-3")
    p_view.add_argument("--solid", action="store_true", help="Shade faces under the wireframe")

    return parser


def _config_from_args(args) -> Config:
    """Defaults overridden by whatever flags the subcommand defines."""
    cfg = Config()
    for section, key, attr in [
        ("generation", "seed", "seed"),
        ("generation", "detail", "detail"),
        ("generation", "solid", "solid"),
        ("grid", "cols", "cols"),
        ("grid", "rows", "rows"),
        ("grid", "num_workers", "workers"),
    ]:
        if hasattr(args, attr):
            setattr(getattr(cfg, section), key, getattr(args, attr))
    return cfg


def _cmd_describe(args):
    from robot_gen import assemble, describe_robot

    for i, seed in enumerate(args.seeds):
        root, blueprint = assemble(seed, args.detail, args.solid)
        if i:
            print()
        print(describe_robot(blueprint))
        print(f"  parts     {len(root.children)} groups, {len(root.primitives())} primitives")


def _cmd_render(args):
    from robot_gen.grid import generate_grid
    from robot_gen.render import render_grid

    cfg = _config_from_args(args)
    if cfg.grid.cols < 1 or cfg.grid.rows < 1:
        print("Error: --cols and --rows must be at least 1", file=sys.stderr)
        sys.exit(1)

    gen = cfg.generation
    log.info("Generating %dx%d robots from '%s'...", cfg.grid.cols, cfg.grid.rows, gen.seed)
    placed = generate_grid(
        gen.seed, gen.detail, gen.solid, cfg.grid.cols, cfg.grid.rows, cfg.grid.num_workers
    )
    image = render_grid(placed, cfg.render)

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out)
    log.info("  -> %s", out)


def _cmd_catalog(args):
    from robot_gen.render_catalog import render_catalog

    render_catalog(args.regions, Path(args.out), args.detail)
    log.info("Done.")


def _cmd_bench(args):
    from robot_gen.bench_gen import bench, print_stats

    log.info("Benchmarking %d robots...", args.count)
    print_stats(bench(args.count))


def _cmd_view(args):
    from view import run_view

    run_view(_config_from_args(args))


def main(argv: list[str] | None = None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)
    elif args.command == "describe":
        _cmd_describe(args)
    elif args.command == "render":
        _cmd_render(args)
    elif args.command == "catalog":
        _cmd_catalog(args)
    elif args.command == "bench":
        _cmd_bench(args)
    elif args.command == "view":
        _cmd_view(args)


if __name__ == "__main__":
    main()
