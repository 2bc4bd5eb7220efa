"""Exercise wheel — torus rim with evenly spaced spokes on a stand.

The rim lies in the local XY plane. Spokes are boxes along Z rotated
about X, so they fan around the X axis; the accessory is yawed in the
layout to face into the cage.

Parameters:
    radius:         Rim radius (center of the tube)
    rim_thickness:  Rim tube radius
    n_spokes:       Number of spokes, spaced 2*pi/n apart
    spoke_width:    Square spoke cross-section
    stand_height:   Height of the support post under the hub
    stand_width:    Square post cross-section
    crossbar_width: Length of the horizontal crossbar
    crossbar_height: Square crossbar cross-section
    crossbar_offset: Crossbar height relative to the hub (negative = below)
"""

from dataclasses import dataclass
from functools import lru_cache
from math import pi

from habitat_gen.primitives import Prim, Shape


@dataclass(frozen=True)
class Params:
    radius: float = 6.0
    rim_thickness: float = 0.6
    n_spokes: int = 6
    spoke_width: float = 0.4
    stand_height: float = 14.0
    stand_width: float = 2.0
    crossbar_width: float = 8.0
    crossbar_height: float = 1.0
    crossbar_offset: float = -2.0


@lru_cache(maxsize=16)
def generate(params: Params = Params()) -> tuple[Prim, ...]:
    """Generate a wheel (rim + n spokes + stand + crossbar)."""
    prims: list[Prim] = [
        Prim(
            Shape.TORUS,
            (params.radius, params.rim_thickness, 0),
            (0, 0, 0),
            "wheel",
            segments=(8, 16),
        )
    ]

    # Spokes span almost the full inner diameter
    spoke_len = 2 * params.radius - 0.2
    sw = params.spoke_width
    for i in range(params.n_spokes):
        angle = i / params.n_spokes * 2 * pi
        prims.append(
            Prim(Shape.BOX, (sw, sw, spoke_len), (0, 0, 0), "wheel", euler=(angle, 0, 0))
        )

    prims.append(
        Prim(
            Shape.BOX,
            (params.stand_width, params.stand_height, params.stand_width),
            (0, -params.stand_height / 2, 0),
            "wheel",
        )
    )
    ch = params.crossbar_height
    prims.append(
        Prim(Shape.BOX, (params.crossbar_width, ch, ch), (0, params.crossbar_offset, 0), "wheel")
    )

    return tuple(prims)
