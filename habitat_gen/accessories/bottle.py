"""Water bottle — tilted transparent cylinder with a cap and a drinking spout.

Hangs on the cage wall, so it has no pellet keep-out zone.

Parameters:
    radius:         Bottle body radius
    length:         Bottle body length
    cap_radius:     Cap radius (slightly wider than the body)
    cap_length:     Cap length
    spout_radius:   Drinking spout radius
    spout_length:   Drinking spout length
    tilt:           Body/cap tilt about X (radians)
    spout_tilt:     Spout tilt about X (radians, negative points down)
"""

from dataclasses import dataclass
from functools import lru_cache
from math import pi

from habitat_gen.primitives import Prim, Shape


@dataclass(frozen=True)
class Params:
    radius: float = 2.0
    length: float = 8.0
    cap_radius: float = 2.2
    cap_length: float = 1.0
    spout_radius: float = 0.4
    spout_length: float = 3.0
    tilt: float = pi / 3
    spout_tilt: float = -pi / 6


@lru_cache(maxsize=16)
def generate(params: Params = Params()) -> tuple[Prim, ...]:
    """Generate a bottle (3 prims: body + cap + spout)."""
    r, cr, sr = params.radius, params.cap_radius, params.spout_radius

    body = Prim(
        Shape.CYLINDER,
        (r, r, params.length),
        (0, params.length / 2, 0),
        "bottle",
        euler=(params.tilt, 0, 0),
        segments=(8,),
    )
    cap = Prim(
        Shape.CYLINDER,
        (cr, cr, params.cap_length),
        (0, params.length, 0),
        "cap",
        euler=(params.tilt, 0, 0),
        segments=(8,),
    )
    spout = Prim(
        Shape.CYLINDER,
        (sr, sr, params.spout_length),
        (0, 0, params.spout_length),
        "spout",
        euler=(params.spout_tilt, 0, 0),
        segments=(6,),
    )
    return (body, cap, spout)
