"""Cage assembler — builds the whole habitat and attaches it to a host scene.

Assembly order is fixed: bedding base, frame, each accessory in LAYOUT,
then pellets. Everything hangs off one root node, which is offset once
and added to the host scene exactly once.

Usage:
    from habitat_gen import HamsterCage, Scene

    scene = Scene()
    cage = HamsterCage(scene, seed=42)   # scene now holds cage.root
    print(describe_cage(cage))

Randomness (bedding texture + pellet scatter) comes from one numpy
Generator, so the same seed reproduces the same cage.
"""

from __future__ import annotations

import logging

import numpy as np

from habitat_gen import accessories
from habitat_gen.config import CageConfig
from habitat_gen.frame import BarSpec, build_frame, layout_bars
from habitat_gen.materials import Material, make_palette
from habitat_gen.placement import Pellet, build_pellets, sample_pellets
from habitat_gen.primitives import Shape, make_geometry
from habitat_gen.scene import Node, SceneLike
from habitat_gen.texture import TextureProvider, WoodShavingTexture, resolve_texture

log = logging.getLogger(__name__)

ROOT_NAME = "hamster_cage"


class HamsterCage:
    """A furnished cage built once, at construction time.

    Args:
        scene: Host exposing add(node); receives the root node
        config: Cage settings (validated before anything is built)
        seed: Integer seed for reproducibility. Overrides rng if both given.
        rng: Numpy random generator
        texture_provider: Bedding texture source; defaults to
            WoodShavingTexture drawing from the same rng

    Raises:
        ConfigError: invalid config
        TextureUnavailableError: the texture provider failed
        UnsatisfiablePlacementError: pellets could not be placed
    """

    def __init__(
        self,
        scene: SceneLike,
        config: CageConfig | None = None,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        texture_provider: TextureProvider | None = None,
    ):
        self.config = config or CageConfig()
        self.config.validate()

        if seed is not None:
            rng = np.random.default_rng(seed)
        elif rng is None:
            rng = np.random.default_rng()
        self.seed = seed
        self.rng = rng

        provider = texture_provider or WoodShavingTexture(rng)
        self.palette: dict[str, Material] = make_palette(
            resolve_texture(provider), self.config.texture_repeat
        )

        self.bar_specs: tuple[BarSpec, ...] = ()
        self.pellets: list[Pellet] = []
        self.root = self._build()
        scene.add(self.root)

        log.info(
            "Built cage %gx%gx%g: %d bars, %d accessories, %d pellets",
            self.config.width,
            self.config.height,
            self.config.depth,
            len(self.bar_specs),
            len(accessories.LAYOUT),
            len(self.pellets),
        )

    def _build(self) -> Node:
        cfg = self.config
        root = Node(ROOT_NAME)

        root.add(self._build_base())

        self.bar_specs = layout_bars(
            cfg.width,
            cfg.height,
            cfg.depth,
            cfg.bar_thickness,
            cfg.bar_spacing,
            base=cfg.base_thickness,
        )
        root.add(build_frame(self.bar_specs, self.palette))

        for placed in accessories.LAYOUT:
            root.add(accessories.build_accessory(placed, self.palette))

        self.pellets = sample_pellets(
            self.rng,
            cfg.pellet_count,
            cfg.arena_width,
            cfg.arena_depth,
            cfg.exclusion_zones,
            max_attempts=cfg.max_placement_attempts,
        )
        root.add(build_pellets(self.pellets, self.palette, cfg.pellet_height))

        root.position = cfg.offset
        return root

    def _build_base(self) -> Node:
        """Bedding slab, top face at base_thickness."""
        cfg = self.config
        size = (
            cfg.width - 2 * cfg.base_inset,
            cfg.base_thickness,
            cfg.depth - 2 * cfg.base_inset,
        )
        return Node(
            "base",
            geometry=make_geometry(Shape.BOX, size),
            material=self.palette["bedding"],
            position=(0.0, cfg.base_thickness / 2, 0.0),
        )


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------


def _subtree_stats(node: Node) -> tuple[int, int]:
    """(mesh count, vertex count) for a subtree."""
    meshes = 0
    verts = 0
    for n, _ in node.walk():
        if n.geometry is not None:
            meshes += 1
            verts += n.geometry.n_vertices
    return meshes, verts


def describe_cage(cage: HamsterCage) -> str:
    """Multi-line textual description of a built cage.

    Example output:
        Cage 60x30x60 (seed=42)  offset (+0.00, -1.00, +0.00)
          base       1 mesh       24 verts
          frame      1 mesh      864 verts  (36 bars)
          bottle     3 meshes    106 verts
          pellets   40 meshes   1200 verts
    """
    cfg = cage.config
    seed = f"seed={cage.seed}" if cage.seed is not None else "unseeded"
    ox, oy, oz = cfg.offset
    lines = [
        f"Cage {cfg.width:g}x{cfg.height:g}x{cfg.depth:g} ({seed})  "
        f"offset ({ox:+.2f}, {oy:+.2f}, {oz:+.2f})"
    ]
    for child in cage.root.children:
        meshes, verts = _subtree_stats(child)
        noun = "mesh" if meshes == 1 else "meshes"
        extra = f"  ({len(cage.bar_specs)} bars)" if child.name == "frame" else ""
        lines.append(f"  {child.name:<8} {meshes:>3} {noun:<6} {verts:>6} verts{extra}")
    return "\n".join(lines)
