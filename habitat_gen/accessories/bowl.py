"""Food bowl — low-poly ceramic frustum with a darker inset interior.

Parameters:
    top_radius:     Rim radius
    bottom_radius:  Base radius (wider than the rim)
    height:         Bowl height
    wall:           Interior inset from the outer surface
    interior_lift:  Interior raised slightly to avoid z-fighting
"""

from dataclasses import dataclass
from functools import lru_cache

from habitat_gen.primitives import Prim, Shape


@dataclass(frozen=True)
class Params:
    top_radius: float = 4.0
    bottom_radius: float = 5.0
    height: float = 2.0
    wall: float = 0.4
    interior_lift: float = 0.1


@lru_cache(maxsize=16)
def generate(params: Params = Params()) -> tuple[Prim, ...]:
    """Generate a bowl (2 prims: outer shell + interior)."""
    outer = Prim(
        Shape.CYLINDER,
        (params.top_radius, params.bottom_radius, params.height),
        (0, 0, 0),
        "bowl",
        segments=(8,),
    )
    interior = Prim(
        Shape.CYLINDER,
        (
            params.top_radius - params.wall,
            params.bottom_radius - params.wall,
            params.height,
        ),
        (0, params.interior_lift, 0),
        "bowl_interior",
        segments=(8,),
    )
    return (outer, interior)
