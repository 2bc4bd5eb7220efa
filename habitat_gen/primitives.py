"""Primitive geometry for cage assembly.

Accessories and the cage frame are composed from a handful of primitive
shapes. Each shape is built as an indexed triangle mesh (numpy arrays) so
meshes can be transformed, merged and handed to any renderer.

Coordinate convention:
    - Y-up, horizontal plane is X/Z
    - Primitives are centered on their local origin
    - CYLINDER / TUBE run along local Y
    - TORUS, PLANE and DISC lie in the local XY plane

Size convention (Prim.size):
    - BOX: (width, height, depth)  -- full extents
    - CYLINDER: (radius_top, radius_bottom, height)
    - TUBE: (radius, height, 0)  -- open-ended cylinder
    - TORUS: (radius, tube_radius, 0)
    - PLANE: (width, height, 0)
    - DISC: (radius, 0, 0)

Segments convention (Prim.segments):
    - CYLINDER / TUBE: (radial,)
    - TORUS: (radial, tubular)
    - DISC: (segments,)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import numpy as np

TWO_PI = 2 * np.pi


class EmptyMergeError(ValueError):
    """Raised when asked to merge zero geometries."""


class Shape(Enum):
    """Primitive shape kinds."""

    BOX = "box"
    CYLINDER = "cylinder"
    TUBE = "tube"
    TORUS = "torus"
    PLANE = "plane"
    DISC = "disc"


@dataclass(frozen=True, eq=False)
class Geometry:
    """An indexed triangle mesh. Arrays are copied and made read-only.

    Attributes:
        vertices: (N, 3) float array of positions
        faces: (M, 3) int array of vertex indices
    """

    vertices: np.ndarray
    faces: np.ndarray

    def __post_init__(self):
        verts = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        faces = np.array(self.faces, dtype=np.int64).reshape(-1, 3)
        verts.flags.writeable = False
        faces.flags.writeable = False
        object.__setattr__(self, "vertices", verts)
        object.__setattr__(self, "faces", faces)

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    def translated(self, offset: tuple[float, float, float]) -> Geometry:
        return Geometry(self.vertices + np.asarray(offset, dtype=np.float64), self.faces)

    def transformed(self, matrix: np.ndarray) -> Geometry:
        """Apply a 4x4 affine transform to every vertex."""
        m = np.asarray(matrix, dtype=np.float64)
        return Geometry(self.vertices @ m[:3, :3].T + m[:3, 3], self.faces)

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Axis-aligned (min, max) corners."""
        return self.vertices.min(axis=0), self.vertices.max(axis=0)


@dataclass(frozen=True)
class Prim:
    """A single primitive shape positioned relative to its parent's origin.

    Attributes:
        shape: Shape kind
        size: Size parameters -- meaning depends on shape (see module doc)
        pos: Position relative to the parent origin (x, y, z)
        material: Palette key (e.g. "wheel", "bowl_interior")
        euler: Rotation in radians (rx, ry, rz), XYZ order
        segments: Tessellation counts -- meaning depends on shape
        arc: Angular sweep for CYLINDER (radians), default full circle
    """

    shape: Shape
    size: tuple[float, float, float]
    pos: tuple[float, float, float]
    material: str
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0)
    segments: tuple[int, ...] = ()
    arc: float = TWO_PI

    def geometry(self) -> Geometry:
        """Local-space geometry (shared between prims with equal shape/size)."""
        return make_geometry(self.shape, self.size, self.segments, self.arc)


# ---------------------------------------------------------------------------
# Shape constructors
# ---------------------------------------------------------------------------


def _grid_faces(rows: int, cols: int) -> np.ndarray:
    """Two triangles per cell of a (rows+1) x (cols+1) vertex grid."""
    r, c = np.meshgrid(np.arange(rows), np.arange(cols), indexing="ij")
    a = r * (cols + 1) + c
    b = (r + 1) * (cols + 1) + c
    d = a + 1
    e = b + 1
    tri1 = np.stack([a, b, d], axis=-1).reshape(-1, 3)
    tri2 = np.stack([b, e, d], axis=-1).reshape(-1, 3)
    return np.concatenate([tri1, tri2])


def box(width: float, height: float, depth: float) -> Geometry:
    """Axis-aligned box, 4 vertices per face (24 vertices, 12 triangles)."""
    half = np.array([width, height, depth], dtype=np.float64) / 2
    corners = ((-1, -1), (1, -1), (1, 1), (-1, 1))
    verts: list[np.ndarray] = []
    faces: list[tuple[int, int, int]] = []
    for axis in range(3):
        u_axis, v_axis = (axis + 1) % 3, (axis + 2) % 3
        for sign in (1, -1):
            base = len(verts)
            for cu, cv in corners:
                v = np.zeros(3)
                v[axis] = sign * half[axis]
                v[u_axis] = cu * half[u_axis]
                v[v_axis] = cv * half[v_axis]
                verts.append(v)
            # Counter-clockwise seen from outside
            if sign > 0:
                faces += [(base, base + 1, base + 2), (base, base + 2, base + 3)]
            else:
                faces += [(base, base + 2, base + 1), (base, base + 3, base + 2)]
    return Geometry(np.array(verts), np.array(faces))


def cylinder(
    radius_top: float,
    radius_bottom: float,
    height: float,
    radial_segments: int = 8,
    height_segments: int = 1,
    open_ended: bool = False,
    theta_start: float = 0.0,
    theta_length: float = TWO_PI,
) -> Geometry:
    """Cylinder / frustum along Y, optionally open-ended or a partial sweep.

    Side: (radial+1) * (height_segments+1) vertices. Each cap adds a center
    vertex plus radial+1 rim vertices and `radial` triangles.
    """
    if radial_segments < 3 and theta_length >= TWO_PI:
        raise ValueError(f"radial_segments must be >= 3, got {radial_segments}")
    half_h = height / 2
    theta = theta_start + np.linspace(0.0, 1.0, radial_segments + 1) * theta_length
    v = np.linspace(0.0, 1.0, height_segments + 1)
    radius = v * (radius_bottom - radius_top) + radius_top
    y = half_h - v * height

    sin_t, cos_t = np.sin(theta), np.cos(theta)
    side = np.empty((height_segments + 1, radial_segments + 1, 3))
    side[..., 0] = radius[:, None] * sin_t[None, :]
    side[..., 1] = y[:, None]
    side[..., 2] = radius[:, None] * cos_t[None, :]

    verts = [side.reshape(-1, 3)]
    faces = [_grid_faces(height_segments, radial_segments)]
    n = len(verts[0])

    if not open_ended:
        idx = np.arange(radial_segments)
        for cap_y, cap_r, top in ((half_h, radius_top, True), (-half_h, radius_bottom, False)):
            rim = np.stack([cap_r * sin_t, np.full_like(theta, cap_y), cap_r * cos_t], axis=-1)
            center = n
            rim_start = n + 1
            verts.append(np.array([[0.0, cap_y, 0.0]]))
            verts.append(rim)
            i0 = rim_start + idx
            i1 = i0 + 1
            c = np.full_like(idx, center)
            tri = np.stack([c, i0, i1] if top else [c, i1, i0], axis=-1)
            faces.append(tri)
            n += 1 + len(rim)

    return Geometry(np.concatenate(verts), np.concatenate(faces))


def tube(radius: float, height: float, radial_segments: int = 16) -> Geometry:
    """Open-ended cylinder (no caps)."""
    return cylinder(radius, radius, height, radial_segments, open_ended=True)


def torus(
    radius: float,
    tube_radius: float,
    radial_segments: int = 8,
    tubular_segments: int = 16,
) -> Geometry:
    """Torus in the XY plane, axis along Z."""
    v = np.linspace(0.0, TWO_PI, radial_segments + 1)
    u = np.linspace(0.0, TWO_PI, tubular_segments + 1)
    vv, uu = np.meshgrid(v, u, indexing="ij")
    ring = radius + tube_radius * np.cos(vv)
    verts = np.stack(
        [ring * np.cos(uu), ring * np.sin(uu), tube_radius * np.sin(vv)], axis=-1
    ).reshape(-1, 3)
    return Geometry(verts, _grid_faces(radial_segments, tubular_segments))


def plane(width: float, height: float) -> Geometry:
    """Rectangle in the XY plane facing +Z (4 vertices, 2 triangles)."""
    hw, hh = width / 2, height / 2
    verts = [(-hw, -hh, 0), (hw, -hh, 0), (hw, hh, 0), (-hw, hh, 0)]
    return Geometry(np.array(verts, dtype=np.float64), np.array([(0, 1, 2), (0, 2, 3)]))


def disc(radius: float, segments: int = 8) -> Geometry:
    """Flat circle in the XY plane facing +Z: center + (segments+1) rim vertices."""
    theta = np.linspace(0.0, TWO_PI, segments + 1)
    rim = np.stack([radius * np.cos(theta), radius * np.sin(theta), np.zeros_like(theta)], -1)
    verts = np.concatenate([np.zeros((1, 3)), rim])
    i = np.arange(segments)
    faces = np.stack([np.zeros_like(i), i + 1, i + 2], axis=-1)
    return Geometry(verts, faces)


@lru_cache(maxsize=256)
def make_geometry(
    shape: Shape,
    size: tuple[float, float, float],
    segments: tuple[int, ...] = (),
    arc: float = TWO_PI,
) -> Geometry:
    """Build (and memoize) the local geometry for a primitive description."""
    if shape == Shape.BOX:
        return box(*size)
    if shape == Shape.CYLINDER:
        radial = segments[0] if segments else 8
        return cylinder(size[0], size[1], size[2], radial, theta_length=arc)
    if shape == Shape.TUBE:
        return tube(size[0], size[1], segments[0] if segments else 16)
    if shape == Shape.TORUS:
        radial, tubular = segments if len(segments) == 2 else (8, 16)
        return torus(size[0], size[1], radial, tubular)
    if shape == Shape.PLANE:
        return plane(size[0], size[1])
    if shape == Shape.DISC:
        return disc(size[0], segments[0] if segments else 8)
    raise ValueError(f"Unknown shape: {shape!r}")


def merge_geometries(geometries: Iterable[Geometry]) -> Geometry:
    """Concatenate geometries into one mesh without welding vertices.

    Vertex and triangle counts of the result are the exact sums of the
    inputs; only face indices are offset.
    """
    geoms = list(geometries)
    if not geoms:
        raise EmptyMergeError("Cannot merge an empty list of geometries")
    offsets = np.cumsum([0] + [g.n_vertices for g in geoms[:-1]])
    vertices = np.concatenate([g.vertices for g in geoms])
    faces = np.concatenate([g.faces + off for g, off in zip(geoms, offsets)])
    return Geometry(vertices, faces)


# ---------------------------------------------------------------------------
# Rotation utilities
# ---------------------------------------------------------------------------


def euler_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    """Euler angles (XYZ order) to a 3x3 rotation matrix: Rx @ Ry @ Rz."""
    cx, sx = np.cos(rx), np.sin(rx)
    cy, sy = np.cos(ry), np.sin(ry)
    cz, sz = np.cos(rz), np.sin(rz)
    mx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    my = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    mz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return mx @ my @ mz


def compose(
    pos: tuple[float, float, float],
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> np.ndarray:
    """4x4 affine matrix: rotate by euler, then translate by pos."""
    m = np.eye(4)
    m[:3, :3] = euler_matrix(*euler)
    m[:3, 3] = pos
    return m
