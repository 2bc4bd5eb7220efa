"""Cage frame — every bar batched into one mesh.

The frame is dozens of thin boxes sharing one material. Rather than one
mesh per bar, bar specs are laid out, instantiated, translated and merged
into a single geometry so the renderer issues a single draw.

Layout (Y-up, cage centered on X/Z):
    - 4 bottom rails at base height, 1.5x thicker cross-section
    - 4 top rails at full height
    - 4 corner posts
    - vertical face bars every `spacing`, inset half a spacing from the
      corners (front/back vary X, left/right vary Z)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from habitat_gen.materials import Material
from habitat_gen.primitives import Geometry, Shape, make_geometry, merge_geometries
from habitat_gen.scene import Node

log = logging.getLogger(__name__)

BOTTOM_RAIL_SCALE = 1.5


@dataclass(frozen=True)
class BarSpec:
    """One frame segment before merging: a box size plus its translation."""

    size: tuple[float, float, float]
    pos: tuple[float, float, float]
    shape: Shape = Shape.BOX

    def geometry(self) -> Geometry:
        return make_geometry(self.shape, self.size).translated(self.pos)


def bars_per_face(extent: float, spacing: float) -> int:
    """Face bar count: floor((extent - 2 * margin) / spacing) + 1, margin = spacing / 2."""
    margin = spacing / 2
    return max(0, math.floor((extent - 2 * margin) / spacing) + 1)


def face_positions(extent: float, spacing: float) -> list[float]:
    """Bar coordinates along one face, from the near inset to the far inset."""
    start = -extent / 2 + spacing / 2
    return [start + i * spacing for i in range(bars_per_face(extent, spacing))]


def layout_bars(
    width: float,
    height: float,
    depth: float,
    thickness: float,
    spacing: float,
    base: float = 1.0,
) -> tuple[BarSpec, ...]:
    """Bar specs for the full rectangular frame.

    Args:
        width, height, depth: Cage extents (X, Y, Z)
        thickness: Bar cross-section; bottom rails use 1.5x this
        spacing: Distance between face bars
        base: Height of the cage floor (bottom rails sit here)
    """
    t = thickness
    tb = t * BOTTOM_RAIL_SCALE
    # Rails and posts sit one thickness in from the outer edge
    xe = width / 2 - t
    ze = depth / 2 - t
    post_y = height / 2 + base

    specs: list[BarSpec] = []

    # Rails: bottom (thick) then top
    for y, s in ((base, tb), (height, t)):
        specs += [
            BarSpec((width, s, s), (0.0, y, ze)),
            BarSpec((width, s, s), (0.0, y, -ze)),
            BarSpec((s, s, depth), (xe, y, 0.0)),
            BarSpec((s, s, depth), (-xe, y, 0.0)),
        ]

    post = (t, height, t)
    for x, z in ((xe, ze), (xe, -ze), (-xe, ze), (-xe, -ze)):
        specs.append(BarSpec(post, (x, post_y, z)))

    # Front and back
    for x in face_positions(width, spacing):
        specs.append(BarSpec(post, (x, post_y, ze)))
        specs.append(BarSpec(post, (x, post_y, -ze)))

    # Left and right
    for z in face_positions(depth, spacing):
        specs.append(BarSpec(post, (xe, post_y, z)))
        specs.append(BarSpec(post, (-xe, post_y, z)))

    return tuple(specs)


def merge_bars(specs: tuple[BarSpec, ...] | list[BarSpec]) -> Geometry:
    """Instantiate, translate and merge bars. Raises EmptyMergeError if empty."""
    return merge_geometries(spec.geometry() for spec in specs)


def build_frame(specs: tuple[BarSpec, ...], palette: dict[str, Material]) -> Node:
    """One mesh node for the whole frame."""
    geom = merge_bars(specs)
    log.debug(
        "Frame: %d bars merged into %d vertices / %d triangles",
        len(specs),
        geom.n_vertices,
        geom.n_faces,
    )
    return Node("frame", geometry=geom, material=palette["bars"])
