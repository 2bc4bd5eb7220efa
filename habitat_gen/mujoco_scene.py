"""MuJoCo host scene — writes the cage into an MjSpec before compilation.

Each mesh node becomes one static body with a visual-only mesh geom.
Vertices are baked to world space on the way in, so bodies sit at the
origin and no quaternions are needed. The cage graph is Y-up; MuJoCo is
Z-up, so every vertex is mapped (x, y, z) -> (x, -z, y) and scaled to
meters.

Usage:
    spec = mujoco.MjSpec()
    host = MjSpecScene(spec)
    HamsterCage(host, seed=0)
    model = spec.compile()

Flat meshes (house floor, entrance disc) and the open tunnel have no
volume, so meshes use shell inertia to compile.
"""

from __future__ import annotations

import logging

import mujoco
import numpy as np

from habitat_gen.scene import Node

log = logging.getLogger(__name__)

# Y-up scene -> Z-up MuJoCo: rotate +90 degrees about X
_Y_UP_TO_Z_UP = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0],
        [0.0, 1.0, 0.0],
    ]
)


def to_z_up(vertices: np.ndarray, scale: float = 1.0) -> np.ndarray:
    """Convert Y-up vertices to MuJoCo's Z-up frame, then scale."""
    return (np.asarray(vertices) @ _Y_UP_TO_Z_UP.T) * scale


class MjSpecScene:
    """SceneLike host that injects nodes into a mujoco.MjSpec.

    Args:
        spec: Spec to modify (must not be compiled yet)
        prefix: Name prefix for every injected body/mesh/geom
        scale: Multiplier from cage units to meters
    """

    def __init__(self, spec: mujoco.MjSpec, prefix: str = "habitat", scale: float = 0.01):
        self.spec = spec
        self.prefix = prefix
        self.scale = scale
        self.names: list[str] = []

    def add(self, node: Node) -> Node:
        count = 0
        for mesh_node, world in node.meshes():
            self._add_mesh(mesh_node, world)
            count += 1
        log.debug("Injected %d meshes from %r into MjSpec", count, node.name)
        return node

    def _add_mesh(self, node: Node, world: np.ndarray):
        name = f"{self.prefix}_{len(self.names)}_{node.name}"
        verts = to_z_up(node.world_vertices(world), self.scale)

        mesh = self.spec.add_mesh()
        mesh.name = name
        mesh.uservert = verts.reshape(-1).tolist()
        mesh.userface = node.geometry.faces.reshape(-1).tolist()
        mesh.inertia = mujoco.mjtMeshInertia.mjMESH_INERTIA_SHELL

        body = self.spec.worldbody.add_body()
        body.name = name
        body.pos = [0, 0, 0]

        geom = body.add_geom()
        geom.name = name
        geom.type = mujoco.mjtGeom.mjGEOM_MESH
        geom.meshname = name
        geom.rgba = list(node.material.rgba) if node.material else [1, 1, 1, 1]
        geom.contype = 0
        geom.conaffinity = 0

        self.names.append(name)
