"""Hideout house — half-cylinder shell on a floor, with a dark entrance.

Parameters:
    radius:          Shell radius
    length:          Shell length along X
    floor_depth:     Floor extent along Z
    entrance_radius: Radius of the dark disc marking the doorway
"""

from dataclasses import dataclass
from functools import lru_cache
from math import pi

from habitat_gen.primitives import Prim, Shape


@dataclass(frozen=True)
class Params:
    radius: float = 6.0
    length: float = 10.0
    floor_depth: float = 12.0
    entrance_radius: float = 3.0


@lru_cache(maxsize=16)
def generate(params: Params = Params()) -> tuple[Prim, ...]:
    """Generate a house (3 prims: shell + floor + entrance)."""
    r = params.radius
    shell = Prim(
        Shape.CYLINDER,
        (r, r, params.length),
        (0, 0, 0),
        "house",
        euler=(0, pi, pi / 2),
        segments=(8,),
        arc=pi,
    )
    floor = Prim(
        Shape.PLANE,
        (params.length, params.floor_depth, 0),
        (0, -r, 0),
        "house",
        euler=(-pi / 2, 0, 0),
    )
    entrance = Prim(
        Shape.DISC,
        (params.entrance_radius, 0, 0),
        (0, 0, -r),
        "entrance",
        euler=(0, pi, 0),
        segments=(8,),
    )
    return (shell, floor, entrance)
