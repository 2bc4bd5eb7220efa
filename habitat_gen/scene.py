"""Scene graph nodes.

A Node is either a pure grouping node or a mesh (geometry + material).
Transforms are local: position plus XYZ euler rotation relative to the
parent. The cage hands its root node to any host exposing `add(node)`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from habitat_gen.materials import Material
from habitat_gen.primitives import Geometry, compose


@dataclass(eq=False)
class Node:
    """A scene graph node.

    Attributes:
        name: Identifier, unique among siblings by convention
        geometry: Mesh geometry in local space (None for group nodes)
        material: Surface material (required when geometry is set)
        position: Translation relative to parent (x, y, z)
        euler: Rotation relative to parent (rx, ry, rz), XYZ order
        children: Child nodes
    """

    name: str
    geometry: Geometry | None = None
    material: Material | None = None
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0)
    children: list[Node] = field(default_factory=list)

    @property
    def is_mesh(self) -> bool:
        return self.geometry is not None

    def add(self, child: Node) -> Node:
        self.children.append(child)
        return child

    def local_matrix(self) -> np.ndarray:
        return compose(self.position, self.euler)

    def walk(self, parent: np.ndarray | None = None) -> Iterator[tuple[Node, np.ndarray]]:
        """Depth-first (node, world_matrix) pairs, this node first."""
        world = self.local_matrix() if parent is None else parent @ self.local_matrix()
        yield self, world
        for child in self.children:
            yield from child.walk(world)

    def meshes(self) -> Iterator[tuple[Node, np.ndarray]]:
        for node, world in self.walk():
            if node.is_mesh:
                yield node, world

    def find(self, name: str) -> Node:
        """First descendant (or self) with the given name. Raises KeyError."""
        for node, _ in self.walk():
            if node.name == name:
                return node
        raise KeyError(name)

    def world_vertices(self, world: np.ndarray) -> np.ndarray:
        """This mesh's vertices transformed by a world matrix."""
        if self.geometry is None:
            raise ValueError(f"Node {self.name!r} has no geometry")
        return self.geometry.transformed(world).vertices


class SceneLike(Protocol):
    """Anything the cage can attach its root node to."""

    def add(self, node: Node) -> object: ...


class Scene:
    """Minimal in-memory host scene."""

    def __init__(self):
        self.children: list[Node] = []

    def add(self, node: Node) -> Node:
        self.children.append(node)
        return node

    def meshes(self) -> Iterator[tuple[Node, np.ndarray]]:
        for child in self.children:
            yield from child.meshes()
