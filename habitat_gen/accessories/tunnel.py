"""Play tunnel — open tube lying on its side with a ring at each end.

Parameters:
    radius:         Tube radius
    length:         Tube length (along X once laid down)
    ring_thickness: Tube radius of the end rings
"""

from dataclasses import dataclass
from functools import lru_cache
from math import pi

from habitat_gen.primitives import Prim, Shape


@dataclass(frozen=True)
class Params:
    radius: float = 3.0
    length: float = 15.0
    ring_thickness: float = 0.4


@lru_cache(maxsize=16)
def generate(params: Params = Params()) -> tuple[Prim, ...]:
    """Generate a tunnel (3 prims: tube + 2 end rings)."""
    tube = Prim(
        Shape.TUBE,
        (params.radius, params.length, 0),
        (0, 0, 0),
        "tunnel",
        euler=(0, 0, pi / 2),
        segments=(16,),
    )
    end = params.length / 2
    rings = tuple(
        Prim(
            Shape.TORUS,
            (params.radius, params.ring_thickness, 0),
            (x, 0, 0),
            "tunnel_ring",
            euler=(0, pi / 2, 0),
            segments=(8, 16),
        )
        for x in (end, -end)
    )
    return (tube, *rings)
