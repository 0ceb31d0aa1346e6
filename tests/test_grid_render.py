"""Fast end-to-end tests for the grid, renderers, config and CLI.

Runs in seconds: images are tiny and grids small.
"""

import sys
from math import sin

import numpy as np
import pytest
from PIL import Image, ImageColor

from config import Config, RenderConfig
from main import main
from robot_gen import generate
from robot_gen.bench_gen import bench
from robot_gen.grid import bob_height, generate_grid, grid_layout, resolve_num_workers, spin_angle
from robot_gen.parts import Region
from robot_gen.render import Camera, cell_matrix, render_grid, render_robot
from robot_gen.render_catalog import render_region

# ---------------------------------------------------------------------------
# Grid layout
# ---------------------------------------------------------------------------


class TestGrid:
    def test_default_layout(self):
        cells = grid_layout("robot-001")
        assert len(cells) == 12
        assert [c.seed for c in cells[:3]] == ["robot-001-0", "robot-001-1", "robot-001-2"]
        assert cells[0].position == (-7.5, 0.0, -5.0)
        assert cells[5].position == (-2.5, 0.0, 0.0)
        assert cells[11].position == (7.5, 0.0, 5.0)

    def test_bob_parameters(self):
        cells = grid_layout("x")
        assert cells[4].bob_offset == pytest.approx(1.2)
        assert cells[4].bob_speed == pytest.approx(1.0)
        assert bob_height(cells[4], 2.0) == pytest.approx(sin(2.0 * 1.0 + 1.2) * 0.08)

    def test_bob_amplitude_bound(self):
        cell = grid_layout("x")[3]
        assert all(abs(bob_height(cell, t / 10)) <= 0.08 for t in range(200))

    def test_spin(self):
        assert spin_angle(0) == 0.0
        assert spin_angle(500) == pytest.approx(1.0)

    def test_custom_shape(self):
        cells = grid_layout("b", cols=2, rows=1, spacing=4.0)
        assert [c.position for c in cells] == [(-2.0, 0.0, 0.0), (2.0, 0.0, 0.0)]

    def test_resolve_workers(self):
        assert resolve_num_workers(1) == 1
        assert resolve_num_workers(3) == 3
        assert resolve_num_workers(0) >= 1

    def test_serial_grid_matches_generate(self):
        placed = generate_grid("robot-001", cols=2, rows=1)
        assert [cell.index for cell, _ in placed] == [0, 1]
        assert placed[0][1] == generate("robot-001-0")
        assert placed[1][1] == generate("robot-001-1")

    def test_parallel_matches_serial(self):
        serial = generate_grid("par", detail=2, cols=2, rows=2, num_workers=1)
        parallel = generate_grid("par", detail=2, cols=2, rows=2, num_workers=2)
        assert serial == parallel


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _small_render_config() -> RenderConfig:
    return Config.for_smoketest().render


class TestRender:
    def test_camera_centers_target(self):
        cam = Camera((0.0, 0.0, 10.0), (0.0, 0.0, 0.0), 50.0, 200, 100)
        pix, depth = cam.project(np.array([[0.0, 0.0, 0.0], [0.0, 1.0, 0.0]]))
        assert pix[0] == pytest.approx((100, 50))
        assert depth[0] == pytest.approx(10.0)
        assert pix[1][1] < 50  # +Y is up on screen

    def test_cell_matrix_translation(self):
        cell = grid_layout("x")[0]
        m = cell_matrix(cell, t=0.0, frame=0)
        assert m[:3, 3] == pytest.approx((-7.5, bob_height(cell, 0.0), -5.0))

    @pytest.mark.parametrize("frame", [0, 250, 785, 1571, 5000])
    def test_spin_keeps_robot_in_its_cell(self, frame):
        cell = grid_layout("x")[0]
        m = cell_matrix(cell, t=0.0, frame=frame)
        assert (m[0, 3], m[2, 3]) == pytest.approx((-7.5, -5.0))
        angle = spin_angle(frame)
        assert m[:3, :3] == pytest.approx(
            [[np.cos(angle), 0, np.sin(angle)], [0, 1, 0], [-np.sin(angle), 0, np.cos(angle)]]
        )

    def test_spin_turns_about_robot_origin(self):
        cell = grid_layout("x")[11]
        m = cell_matrix(cell, t=0.0, frame=785)
        head = m @ np.array([0.0, 1.0, 0.0, 1.0])
        assert (head[0], head[2]) == pytest.approx((7.5, 5.0))

    def test_render_robot_draws_something(self):
        cfg = _small_render_config()
        image = render_robot(generate("robot-001-0"), cfg)
        assert image.size == (160, 100)
        bg = ImageColor.getrgb(cfg.background)
        pixels = np.asarray(image)
        assert (pixels != bg).any(axis=-1).sum() > 50

    def test_render_grid(self):
        cfg = _small_render_config()
        placed = generate_grid("robot-001", solid=True, cols=2, rows=1)
        image = render_grid(placed, cfg)
        assert isinstance(image, Image.Image)
        assert image.mode == "RGB"
        assert image.size == (cfg.width, cfg.height)

    def test_render_is_deterministic(self):
        cfg = _small_render_config()
        placed = generate_grid("det", cols=2, rows=1)
        a = np.asarray(render_grid(placed, cfg))
        b = np.asarray(render_grid(placed, cfg))
        assert np.array_equal(a, b)

    def test_catalog_sheet(self, tmp_path):
        path = render_region(Region.HEAD, tmp_path, cfg=_small_render_config())
        assert path == tmp_path / "head.png"
        with Image.open(path) as image:
            assert image.width > 0 and image.height > 0


# ---------------------------------------------------------------------------
# Config, bench and CLI
# ---------------------------------------------------------------------------


class TestConfig:
    def test_flat_dict(self):
        flat = Config().to_flat_dict()
        assert flat["generation/seed"] == "robot-001"
        assert flat["grid/cols"] == 4
        assert flat["render/fov_deg"] == 50.0
        assert flat["render/camera_position"] == (10.0, 8.0, 14.0)
        assert flat["viewer/spin_per_frame"] == 0.002
        assert all("/" in k for k in flat)

    def test_viewer_and_floor_limits(self):
        cfg = Config()
        assert (cfg.viewer.min_distance, cfg.viewer.max_distance) == (8.0, 35.0)
        assert cfg.viewer.min_distance <= cfg.viewer.initial_distance <= cfg.viewer.max_distance
        assert cfg.viewer.max_elevation_deg == 60.0
        assert abs(cfg.viewer.initial_elevation_deg) <= cfg.viewer.max_elevation_deg
        assert (cfg.render.floor_size, cfg.render.floor_divisions) == (24.0, 24)

    def test_presets(self):
        assert Config.for_preview().generation.detail == 3
        smoke = Config.for_smoketest()
        assert smoke.grid.cols * smoke.grid.rows == 2
        assert smoke.render.width < Config().render.width


class TestBench:
    def test_stats(self):
        stats = bench(5, edges=True)
        assert stats["n_robots"] == 5
        assert stats["prims_max"] >= stats["prims_mean"] > 0
        assert "edges_mean_ms" in stats


class TestCli:
    @pytest.fixture(autouse=True)
    def _keep_excepthook(self, monkeypatch):
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)

    def test_describe(self, capsys):
        main(["describe", "robot-001-0", "a"])
        out = capsys.readouterr().out
        assert "tapered" in out and "#56c3f4" in out
        assert "barrel" in out and "hooved" in out
        assert "40 primitives" in out

    def test_render(self, tmp_path):
        out = tmp_path / "nested" / "grid.png"
        main(["render", "--seed", "cli", "--cols", "2", "--rows", "1", "--out", str(out)])
        assert out.exists()

    def test_render_rejects_empty_grid(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["render", "--cols", "0", "--out", str(tmp_path / "x.png")])

    def test_catalog_unknown_region(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["catalog", "tail", "--out", str(tmp_path)])

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
