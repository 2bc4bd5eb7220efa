"""Pellet scattering via bounded rejection sampling.

Pellets are drawn uniformly over the arena rectangle (centered at the
origin) and rejected when they land inside any exclusion zone. Rejection
keeps the distribution uniform over the valid region without subtracting
circles from the rectangle analytically.

The loop is capped per pellet: if the zones leave too little free area,
sampling fails with UnsatisfiablePlacementError instead of spinning forever.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from habitat_gen.materials import Material
from habitat_gen.primitives import TWO_PI, Shape, make_geometry
from habitat_gen.scene import Node

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100_000

# Pellet shape: small 6-sided cylinder lying on its side
PELLET_RADIUS = 0.3
PELLET_LENGTH = 0.8
PELLET_SEGMENTS = 6
PELLET_PITCH = np.pi / 2

# Below this acceptance rate the zones cover most of the arena
_LOW_ACCEPTANCE = 0.1


class UnsatisfiablePlacementError(RuntimeError):
    """Too many consecutive draws were rejected before every pellet was placed."""

    def __init__(self, placed: int, requested: int, attempts: int):
        self.placed = placed
        self.requested = requested
        self.attempts = attempts
        super().__init__(
            f"Unsatisfiable placement: placed {placed}/{requested} pellets "
            f"after {attempts} attempts"
        )


@dataclass(frozen=True)
class ExclusionZone:
    """Keep-out circle in the horizontal (X/Z) plane."""

    center_x: float
    center_z: float
    radius: float

    def contains(self, x: float, z: float) -> bool:
        """True when (x, z) is strictly closer than radius to the center."""
        return math.hypot(x - self.center_x, z - self.center_z) < self.radius


@dataclass(frozen=True)
class Pellet:
    """A scattered pellet: floor position and rotation about the vertical."""

    x: float
    z: float
    yaw: float


def sample_pellets(
    rng: np.random.Generator,
    count: int,
    arena_width: float,
    arena_depth: float,
    zones: tuple[ExclusionZone, ...] | list[ExclusionZone] = (),
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[Pellet]:
    """Sample `count` pellets inside the arena, outside every exclusion zone.

    Args:
        rng: Random generator (seed it for reproducible layouts)
        count: Number of pellets to place
        arena_width: Full arena extent along X, centered at 0
        arena_depth: Full arena extent along Z, centered at 0
        zones: Keep-out circles
        max_attempts: Consecutive rejected draws allowed before giving up
            (resets on every accepted pellet)

    Raises:
        UnsatisfiablePlacementError: `max_attempts` draws in a row were rejected
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    hw, hd = arena_width / 2, arena_depth / 2
    pellets: list[Pellet] = []
    attempts = 0
    misses = 0

    while len(pellets) < count:
        if misses >= max_attempts:
            raise UnsatisfiablePlacementError(len(pellets), count, attempts)
        attempts += 1

        x = float(rng.uniform(-hw, hw))
        z = float(rng.uniform(-hd, hd))
        if any(zone.contains(x, z) for zone in zones):
            misses += 1
            continue
        misses = 0

        yaw = float(rng.uniform(0.0, TWO_PI))
        pellets.append(Pellet(x, z, yaw))

    if attempts:
        rate = len(pellets) / attempts
        log.debug("Placed %d pellets in %d attempts (%.0f%%)", count, attempts, rate * 100)
        if rate < _LOW_ACCEPTANCE:
            log.warning(
                "Low pellet acceptance rate %.1f%% -- exclusion zones cover most of the arena",
                rate * 100,
            )
    return pellets


def build_pellets(
    pellets: list[Pellet],
    palette: dict[str, Material],
    height: float,
) -> Node:
    """Group node with one mesh child per pellet (all share one geometry)."""
    geom = make_geometry(
        Shape.CYLINDER,
        (PELLET_RADIUS, PELLET_RADIUS, PELLET_LENGTH),
        (PELLET_SEGMENTS,),
    )
    material = palette["pellet"]
    group = Node("pellets")
    for i, p in enumerate(pellets):
        group.add(
            Node(
                f"pellet_{i}",
                geometry=geom,
                material=material,
                position=(p.x, height, p.z),
                euler=(PELLET_PITCH, 0.0, p.yaw),
            )
        )
    return group
