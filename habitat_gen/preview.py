"""Build a cage offline and dump it for inspection.

Usage:
    python -m habitat_gen.preview                        # describe a random cage
    python -m habitat_gen.preview --seed 42              # reproducible
    python -m habitat_gen.preview --texture-out bedding.png --obj-out cage.obj
    python -m habitat_gen.preview --pellets 200 -v       # debug logging
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from habitat_gen.cage import HamsterCage, describe_cage
from habitat_gen.config import CageConfig, ConfigError
from habitat_gen.placement import UnsatisfiablePlacementError
from habitat_gen.scene import Scene

log = logging.getLogger(__name__)


def write_obj(scene: Scene, path: Path) -> int:
    """Write every mesh in the scene, baked to world space, as Wavefront OBJ.

    One `o` group per mesh node. Returns the number of meshes written.
    """
    lines = ["# habitat_gen cage export"]
    offset = 1  # OBJ indices are 1-based
    count = 0
    for node, world in scene.meshes():
        lines.append(f"o {node.name}")
        verts = node.world_vertices(world)
        lines.extend(f"v {x:.5f} {y:.5f} {z:.5f}" for x, y, z in verts)
        lines.extend(
            f"f {a + offset} {b + offset} {c + offset}" for a, b, c in node.geometry.faces
        )
        offset += len(verts)
        count += 1
    path.write_text("\n".join(lines) + "\n")
    return count


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build and inspect a hamster cage")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--pellets", type=int, default=None, help="Pellet count")
    parser.add_argument("--texture-out", type=Path, help="Save bedding texture PNG")
    parser.add_argument("--obj-out", type=Path, help="Save the scene as OBJ")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    config = CageConfig()
    if args.pellets is not None:
        config = dataclasses.replace(config, pellet_count=args.pellets)

    scene = Scene()
    try:
        cage = HamsterCage(scene, config, seed=args.seed)
    except (ConfigError, UnsatisfiablePlacementError) as e:
        log.error("Cannot build cage: %s", e)
        return 2

    print(describe_cage(cage))

    if args.texture_out:
        cage.palette["bedding"].texture.save(args.texture_out)
        print(f"  -> {args.texture_out}")
    if args.obj_out:
        n = write_obj(scene, args.obj_out)
        print(f"  -> {args.obj_out} ({n} meshes)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
