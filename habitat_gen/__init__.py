"""Procedural hamster-cage habitat built from primitive shapes.

Builds a furnished enclosure (frame, bedding, bottle, bowl, wheel, house,
tunnel, scattered pellets) as a scene graph and attaches it to a host
scene. Frame bars are batched into one mesh; pellets are rejection-sampled
around accessory keep-out zones.

Usage:
    from habitat_gen import CageConfig, HamsterCage, Scene

    scene = Scene()
    cage = HamsterCage(scene, CageConfig(pellet_count=60), seed=7)
    cage.root                 # the single node added to scene
"""

from habitat_gen.cage import HamsterCage, describe_cage
from habitat_gen.config import CageConfig, ConfigError
from habitat_gen.placement import ExclusionZone, Pellet, UnsatisfiablePlacementError
from habitat_gen.primitives import EmptyMergeError, Geometry, Prim, Shape
from habitat_gen.scene import Node, Scene
from habitat_gen.texture import TextureUnavailableError

__all__ = [
    "HamsterCage",
    "CageConfig",
    "ConfigError",
    "ExclusionZone",
    "Pellet",
    "UnsatisfiablePlacementError",
    "EmptyMergeError",
    "TextureUnavailableError",
    "Geometry",
    "Prim",
    "Shape",
    "Node",
    "Scene",
    "describe_cage",
]
