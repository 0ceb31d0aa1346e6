"""
Centralized configuration for robot generation, rendering and viewing.

All knobs in one place. CLI flags in main.py override the defaults.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class GenerationConfig:
    """What to build."""

    seed: str = "robot-001"  # Base seed; grid cells append "-<index>"
    detail: int = 1  # 1 = LOW, 2 = MED, 3 = HIGH (clamped)
    solid: bool = False  # Add shaded faces under the wireframe


@dataclass
class GridConfig:
    """Showcase grid layout."""

    cols: int = 4
    rows: int = 3
    spacing: float = 5.0  # World units between cell centers
    num_workers: int = 1  # 0 = auto, 1 = serial (no multiprocessing)


@dataclass
class RenderConfig:
    """Headless PNG renderer."""

    width: int = 1280
    height: int = 800
    background: str = "#0a0a0f"
    camera_position: tuple[float, float, float] = (10.0, 8.0, 14.0)
    camera_target: tuple[float, float, float] = (0.0, 0.0, 0.0)
    fov_deg: float = 50.0
    line_width: int = 1

    # Floor grid under the robots
    floor_y: float = -2.5
    floor_size: float = 24.0
    floor_divisions: int = 24
    floor_color: str = "#1a1a2e"


@dataclass
class ViewerConfig:
    """Interactive matplotlib viewer."""

    fps: int = 30
    bob_amplitude: float = 0.08
    spin_per_frame: float = 0.002  # Radians about Y

    # Orbit limits
    min_distance: float = 8.0
    max_distance: float = 35.0
    initial_distance: float = 18.0
    max_elevation_deg: float = 60.0  # Pitch limit, up and down
    initial_elevation_deg: float = 17.0
    initial_azimuth_deg: float = 35.0


@dataclass
class Config:
    """Complete configuration."""

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)

    def to_flat_dict(self) -> dict:
        """
        Convert to a flat dict for logging or serialization.

        Prefixes each section's keys with section name.
        Example: render.width -> "render/width"
        """
        result = {}
        for section_name, section in [
            ("generation", self.generation),
            ("grid", self.grid),
            ("render", self.render),
            ("viewer", self.viewer),
        ]:
            for key, value in asdict(section).items():
                result[f"{section_name}/{key}"] = value
        return result

    @classmethod
    def for_preview(cls) -> Config:
        """Higher detail, solid faces, full grid on all cores."""
        return cls(
            generation=GenerationConfig(detail=3, solid=True),
            grid=GridConfig(num_workers=0),
            render=RenderConfig(width=1920, height=1200, line_width=2),
        )

    @classmethod
    def for_smoketest(cls) -> Config:
        """Tiny grid, tiny image. Runs in well under a second."""
        return cls(
            generation=GenerationConfig(seed="smoke", detail=1),
            grid=GridConfig(cols=2, rows=1, num_workers=1),
            render=RenderConfig(width=160, height=100, floor_divisions=4),
            viewer=ViewerConfig(fps=5),
        )
