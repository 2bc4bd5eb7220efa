"""Accessory registry and cage layout.

=== HOW TO ADD A NEW ACCESSORY ===

Each accessory is a single Python file in this directory. It must define:

1. A frozen dataclass called `Params` with the reference dimensions
2. A function `generate(params: Params) -> tuple[Prim, ...]`
   decorated with @lru_cache

Then add a PlacedAccessory row to LAYOUT below. No other code changes:
the cage assembler walks LAYOUT, and default exclusion zones are derived
from it.

=== CONVENTIONS ===

Coordinate system:
    - Y-up, prims positioned relative to the accessory origin
    - The accessory origin is moved to its PlacedAccessory position

Sizes and segments: see habitat_gen.primitives.

Materials:
    - Prims name a palette key (see habitat_gen.materials.make_palette)
"""

from __future__ import annotations

import importlib
import pkgutil
from dataclasses import dataclass
from math import pi

from habitat_gen.materials import Material
from habitat_gen.placement import ExclusionZone
from habitat_gen.scene import Node

_registry: dict[str, object] = {}


def _discover():
    """Auto-discover accessory modules that define Params + generate."""
    for info in pkgutil.iter_modules(__path__):
        mod = importlib.import_module(f".{info.name}", __package__)
        if hasattr(mod, "generate") and hasattr(mod, "Params"):
            _registry[info.name] = mod


_discover()


def get(name: str):
    """Get an accessory module by name. Raises KeyError if not found."""
    return _registry[name]


def list_accessories() -> list[str]:
    """List all available accessory names."""
    return sorted(_registry.keys())


# ---------------------------------------------------------------------------
# Layout table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlacedAccessory:
    """Where an accessory sits in the cage.

    Attributes:
        name: Accessory module name
        pos: Absolute position of the accessory origin (x, y, z)
        euler: Rotation of the whole accessory (rx, ry, rz)
        keep_out: Radius of the pellet exclusion zone around (x, z);
            None for accessories that don't sit on the bedding
    """

    name: str
    pos: tuple[float, float, float]
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0)
    keep_out: float | None = None


KEEP_OUT_RADIUS = 8.0

LAYOUT: tuple[PlacedAccessory, ...] = (
    PlacedAccessory("bottle", (-25.0, 20.0, 0.0), (0.0, pi / 2, 0.0)),
    PlacedAccessory("bowl", (20.0, 1.0, 20.0), keep_out=KEEP_OUT_RADIUS),
    PlacedAccessory("wheel", (20.0, 8.0, -20.0), (0.0, pi / 4, 0.0), KEEP_OUT_RADIUS),
    PlacedAccessory("house", (-20.0, 6.0, -20.0), keep_out=KEEP_OUT_RADIUS),
    PlacedAccessory("tunnel", (20.0, 3.0, 0.0), (0.0, pi / 4, 0.0), KEEP_OUT_RADIUS),
)


def exclusion_zones(
    layout: tuple[PlacedAccessory, ...] = LAYOUT,
) -> tuple[ExclusionZone, ...]:
    """Keep-out circles for every accessory that has one."""
    return tuple(
        ExclusionZone(p.pos[0], p.pos[2], p.keep_out)
        for p in layout
        if p.keep_out is not None
    )


def build_accessory(placed: PlacedAccessory, palette: dict[str, Material]) -> Node:
    """Instantiate an accessory's prims as a subtree at its layout transform."""
    mod = get(placed.name)
    prims = mod.generate(mod.Params())
    group = Node(placed.name, position=placed.pos, euler=placed.euler)
    for i, prim in enumerate(prims):
        group.add(
            Node(
                f"{placed.name}_{i}",
                geometry=prim.geometry(),
                material=palette[prim.material],
                position=prim.pos,
                euler=prim.euler,
            )
        )
    return group
