"""Placement tree: groups, primitives, geometry values and colors.

A generated robot is a tree of ``Group`` nodes (local transform + ordered
children) whose leaves are ``Primitive`` nodes (one geometry plus the
materials used to draw it). Part generators never build primitives by
hand; they go through ``PartBuilder.add`` which wraps each primitive in
its own transform group, the same nesting every renderer expects.

Coordinate convention:
    - Y-up, +Z toward the viewer, +X to the robot's left
    - Rotations are XYZ Euler angles in radians (matrix = Rx @ Ry @ Rz)
    - Every part's origin is its attachment point (shoulder, hip, neck)

Size convention (``Geometry.size``):
    - BOX: (width, height, depth)
    - CYLINDER: (radius_top, radius_bottom, height) -- Y-aligned, centered
    - SPHERE: (radius,)
    - TORUS: (radius, tube) -- ring in the XY plane
    - OCTAHEDRON / TETRAHEDRON / ICOSAHEDRON / DODECAHEDRON: (radius,)

Segment convention (``Geometry.segments``):
    - BOX: (sub, sub, sub)
    - CYLINDER: (radial, height)
    - SPHERE: (width, height)
    - TORUS: (radial, tubular)
    - polyhedra: (subdivision_level,)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from robot_gen.resolution import ResolutionProfile

Vec3 = tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
UNIT_SCALE: Vec3 = (1.0, 1.0, 1.0)

# Solid faces are drawn darker and slightly see-through so the edges read on top.
SOLID_SHADE = 0.7
SOLID_OPACITY = 0.85


class GeomKind(Enum):
    """Base shape vocabulary shared by every part generator."""

    BOX = "box"
    CYLINDER = "cylinder"
    SPHERE = "sphere"
    TORUS = "torus"
    OCTAHEDRON = "octahedron"
    TETRAHEDRON = "tetrahedron"
    ICOSAHEDRON = "icosahedron"
    DODECAHEDRON = "dodecahedron"


class MaterialRole(Enum):
    WIREFRAME_EDGES = "wireframeEdges"
    SOLID_FACE = "solidFace"


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * 6 * (2 / 3 - t)
    return p


@dataclass(frozen=True)
class Color:
    """Linear RGB color, channels in [0, 1]."""

    r: float
    g: float
    b: float

    @classmethod
    def from_hsl(cls, hue: float, sat: float, light: float) -> Color:
        h = hue % 1.0
        s = min(max(sat, 0.0), 1.0)
        lt = min(max(light, 0.0), 1.0)
        if s == 0:
            return cls(lt, lt, lt)
        p = lt * (1 + s) if lt <= 0.5 else lt + s - (lt * s)
        q = 2 * lt - p
        return cls(
            _hue_to_rgb(q, p, h + 1 / 3),
            _hue_to_rgb(q, p, h),
            _hue_to_rgb(q, p, h - 1 / 3),
        )

    def scaled(self, factor: float) -> Color:
        return Color(self.r * factor, self.g * factor, self.b * factor)

    @property
    def rgb255(self) -> tuple[int, int, int]:
        """Channels truncated to 0..255, as the hex string encodes them."""
        return tuple(min(255, max(0, int(c * 255))) for c in (self.r, self.g, self.b))

    @property
    def hex(self) -> str:
        r, g, b = self.rgb255
        return f"#{r:02x}{g:02x}{b:02x}"


# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Geometry:
    """An immutable shape description; see module doc for size/segment layout."""

    kind: GeomKind
    size: tuple[float, ...]
    segments: tuple[int, ...]


@dataclass(frozen=True)
class Material:
    """How one primitive is drawn in one pass.

    Attributes:
        role: Edge pass or face pass
        color: Resolved color (already darkened for solid faces)
        opacity: 1.0 for edges, SOLID_OPACITY for faces
        edge_threshold_deg: Face angle above which an edge is drawn (edges only)
    """

    role: MaterialRole
    color: Color
    opacity: float = 1.0
    edge_threshold_deg: float | None = None
    flat_shading: bool = False
    double_sided: bool = False


@dataclass(frozen=True)
class Primitive:
    """A leaf: one geometry and its materials (solid face first, edges last)."""

    geometry: Geometry
    materials: tuple[Material, ...]

    @property
    def wireframe(self) -> Material:
        return self.materials[-1]

    @property
    def solid(self) -> Material | None:
        for m in self.materials:
            if m.role is MaterialRole.SOLID_FACE:
                return m
        return None


@dataclass
class Group:
    """A transform node with ordered children (groups or primitives)."""

    position: Vec3 = ORIGIN
    rotation: Vec3 = ORIGIN
    scale: Vec3 = UNIT_SCALE
    children: list[Group | Primitive] = field(default_factory=list)
    name: str = ""

    def __post_init__(self):
        self.position = _vec3(self.position)
        self.rotation = _vec3(self.rotation)
        self.scale = _vec3(self.scale)

    def add(self, child: Group | Primitive) -> Group | Primitive:
        self.children.append(child)
        return child

    def walk(self) -> Iterator[Group | Primitive]:
        """Pre-order traversal including self."""
        yield self
        for child in self.children:
            if isinstance(child, Group):
                yield from child.walk()
            else:
                yield child

    def primitives(self) -> list[Primitive]:
        return [n for n in self.walk() if isinstance(n, Primitive)]


def _vec3(v) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))


# ---------------------------------------------------------------------------
# Geometry factories (segment counts come from the resolution profile)
# ---------------------------------------------------------------------------


def box(w: float, h: float, d: float, profile: ResolutionProfile) -> Geometry:
    n = profile.box_subdivisions
    return Geometry(GeomKind.BOX, (w, h, d), (n, n, n))


def cylinder(
    radius_top: float,
    radius_bottom: float,
    height: float,
    profile: ResolutionProfile,
    radial: int | None = None,
    height_segments: int | None = None,
) -> Geometry:
    """Cylinder, frustum or cone. ``radial``/``height_segments`` override the profile."""
    return Geometry(
        GeomKind.CYLINDER,
        (radius_top, radius_bottom, height),
        (
            profile.radial_segments if radial is None else radial,
            profile.height_segments if height_segments is None else height_segments,
        ),
    )


def cone(radius: float, height: float, profile: ResolutionProfile) -> Geometry:
    return Geometry(
        GeomKind.CYLINDER,
        (0.0, radius, height),
        (profile.cone_radial_segments, 1),
    )


def sphere(radius: float, profile: ResolutionProfile) -> Geometry:
    return Geometry(
        GeomKind.SPHERE,
        (radius,),
        (profile.sphere_width_segments, profile.sphere_height_segments),
    )


def torus(radius: float, tube: float, profile: ResolutionProfile) -> Geometry:
    return Geometry(
        GeomKind.TORUS,
        (radius, tube),
        (profile.torus_radial_segments, profile.torus_tubular_segments),
    )


def polyhedron(kind: GeomKind, radius: float, detail: int = 0) -> Geometry:
    return Geometry(kind, (radius,), (detail,))


def octahedron(radius: float, detail: int = 0) -> Geometry:
    return polyhedron(GeomKind.OCTAHEDRON, radius, detail)


def tetrahedron(radius: float, detail: int = 0) -> Geometry:
    return polyhedron(GeomKind.TETRAHEDRON, radius, detail)


def icosahedron(radius: float, detail: int = 0) -> Geometry:
    return polyhedron(GeomKind.ICOSAHEDRON, radius, detail)


def dodecahedron(radius: float, detail: int = 0) -> Geometry:
    return polyhedron(GeomKind.DODECAHEDRON, radius, detail)


def make_materials(
    color: Color, profile: ResolutionProfile, solid: bool
) -> tuple[Material, ...]:
    wire = Material(
        MaterialRole.WIREFRAME_EDGES,
        color,
        edge_threshold_deg=profile.edge_threshold_deg,
    )
    if not solid:
        return (wire,)
    face = Material(
        MaterialRole.SOLID_FACE,
        color.scaled(SOLID_SHADE),
        opacity=SOLID_OPACITY,
        flat_shading=True,
        double_sided=True,
    )
    return (face, wire)


class PartBuilder:
    """Accumulates wrapped primitives into one part group.

    Usage:
        b = PartBuilder(color, profile, solid, name="head:cube")
        b.add(box(1, 1, 1, profile), pos=(0, 0.5, 0))
        group = b.group
    """

    def __init__(
        self,
        color: Color,
        profile: ResolutionProfile,
        solid: bool,
        name: str = "",
    ):
        self.group = Group(name=name)
        self.profile = profile
        self.color = color
        self.solid = solid
        self._materials = make_materials(color, profile, solid)

    @property
    def poly_detail(self) -> int:
        return self.profile.polyhedron_detail

    def add(
        self,
        geometry: Geometry,
        pos: Vec3 = ORIGIN,
        rot: Vec3 = ORIGIN,
        scale: Vec3 = UNIT_SCALE,
        color: Color | None = None,
    ) -> Group:
        """Place one primitive under its own transform group."""
        if color is None or color == self.color:
            materials = self._materials
        else:
            materials = make_materials(color, self.profile, self.solid)
        wrapper = Group(position=pos, rotation=rot, scale=scale)
        wrapper.add(Primitive(geometry, materials))
        self.group.add(wrapper)
        return wrapper
