"""
Scene Graph (Transform Hierarchy)
=================================
An arena of transform nodes indexed by integer handle.

Why is this file needed?
------------------------
1. Hierarchy: Each planet is an orbit pivot at the origin holding the planet
   body at its orbital distance. Spinning the pivot moves the planet along its
   orbit; spinning the body turns the planet about its own (tilted) axis.
2. Decoupling: The hierarchy lives here as plain data. The PyVista view only
   copies world matrices onto actors, so the shape of the scene can be
   checked without a renderer.

Node tree for a planet with a moon and rings::

    ORBIT (origin, angle = revolution)
      └── BODY (offset = distance, tilt, angle = rotation)
            ├── ORBIT (moon pivot, position only, angle = revolution)
            │     └── BODY (moon)
            └── RING (static)

Classes:
    NodeKind: Node role.
    SceneNode: One transform in the arena.
    SceneGraph: The arena and world-matrix evaluation.
    BodyHandle: Indices of the nodes built for one catalog entry.
    SceneGraphBuilder: Builds the arena from the catalog.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, TYPE_CHECKING

import numpy as np

from orrery.model.catalog import (
    CelestialBodyDefinition, MoonDefinition, StarDefinition, validate_catalog
)
from orrery.model.transforms import compose, rotation_x, rotation_y, translation

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Bodies sit on the +X axis of their orbit pivot
REFERENCE_AXIS = np.array([1.0, 0.0, 0.0])


class NodeKind(Enum):
    STAR = "star"
    ORBIT = "orbit"
    BODY = "body"
    RING = "ring"


@dataclass
class SceneNode:
    index: int
    kind: NodeKind
    name: str
    parent: Optional[int] = None
    offset: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    tilt: float = 0.0  # radians about X, fixed at creation
    angle: float = 0.0  # radians about Y, advanced every frame
    radius: float = 0.0
    inherit_rotation: bool = True
    inner_radius: float = 0.0
    outer_radius: float = 0.0

    def local_matrix(self) -> npt.NDArray[np.float64]:
        return compose(translation(self.offset), rotation_x(self.tilt), rotation_y(self.angle))


class SceneGraph:
    """Flat list of nodes with parent-index links."""

    def __init__(self) -> None:
        self.nodes: list[SceneNode] = []
        self._children: dict[int, list[int]] = {}
        self._listeners: list[Callable[[SceneNode], None]] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def register_listener(self, callback: Callable[[SceneNode], None]) -> None:
        """Call `callback` for every node added from now on."""
        self._listeners.append(callback)

    def add_node(self, kind: NodeKind, name: str, parent: Optional[int] = None, **attrs) -> int:
        if parent is not None and not 0 <= parent < len(self.nodes):
            raise IndexError(f"Parent node {parent} does not exist.")

        index = len(self.nodes)
        node = SceneNode(index=index, kind=kind, name=name, parent=parent, **attrs)
        node.offset = np.asarray(node.offset, dtype=np.float64)
        self.nodes.append(node)
        self._children[index] = []
        if parent is not None:
            self._children[parent].append(index)

        for callback in self._listeners:
            callback(node)
        return index

    def node(self, index: int) -> SceneNode:
        return self.nodes[index]

    def children(self, index: int) -> list[int]:
        return list(self._children[index])

    def ancestors(self, index: int) -> list[int]:
        """Parent chain from the direct parent up to the root."""
        chain = []
        parent = self.nodes[index].parent
        while parent is not None:
            chain.append(parent)
            parent = self.nodes[parent].parent
        return chain

    def parent_frame(self, index: int) -> npt.NDArray[np.float64]:
        """The matrix a node's local transform is expressed in."""
        node = self.nodes[index]
        if node.parent is None:
            return np.eye(4)
        if node.inherit_rotation:
            return self.world_matrix(node.parent)
        return translation(self.world_position(node.parent))

    def world_matrix(self, index: int) -> npt.NDArray[np.float64]:
        return self.parent_frame(index) @ self.nodes[index].local_matrix()

    def world_position(self, index: int) -> npt.NDArray[np.float64]:
        return self.world_matrix(index)[:3, 3].copy()

    def shape(self) -> list[tuple[NodeKind, Optional[int], str]]:
        """(kind, parent, name) per node; identical for identical builds."""
        return [(n.kind, n.parent, n.name) for n in self.nodes]


@dataclass
class BodyHandle:
    """
    The nodes built for one catalog entry.

    Angle properties read and write straight through to the arena.
    """
    graph: SceneGraph = field(repr=False)
    definition: CelestialBodyDefinition
    orbit: int
    body: int
    moon_orbit: Optional[int] = None
    moon_body: Optional[int] = None
    ring: Optional[int] = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def has_moon(self) -> bool:
        return self.moon_body is not None

    @property
    def revolution_angle(self) -> float:
        return self.graph.nodes[self.orbit].angle

    @revolution_angle.setter
    def revolution_angle(self, value: float) -> None:
        self.graph.nodes[self.orbit].angle = value

    @property
    def rotation_angle(self) -> float:
        return self.graph.nodes[self.body].angle

    @rotation_angle.setter
    def rotation_angle(self, value: float) -> None:
        self.graph.nodes[self.body].angle = value

    @property
    def moon_revolution_angle(self) -> Optional[float]:
        return None if self.moon_orbit is None else self.graph.nodes[self.moon_orbit].angle

    @moon_revolution_angle.setter
    def moon_revolution_angle(self, value: float) -> None:
        if self.moon_orbit is None:
            raise AttributeError(f"'{self.name}' has no moon.")
        self.graph.nodes[self.moon_orbit].angle = value

    @property
    def moon_rotation_angle(self) -> Optional[float]:
        return None if self.moon_body is None else self.graph.nodes[self.moon_body].angle

    @moon_rotation_angle.setter
    def moon_rotation_angle(self, value: float) -> None:
        if self.moon_body is None:
            raise AttributeError(f"'{self.name}' has no moon.")
        self.graph.nodes[self.moon_body].angle = value

    def world_position(self) -> npt.NDArray[np.float64]:
        return self.graph.world_position(self.body)


class SceneGraphBuilder:
    """Turns catalog entries into nodes of a SceneGraph."""

    def __init__(self, graph: Optional[SceneGraph] = None) -> None:
        self.graph = graph if graph is not None else SceneGraph()

    def build(self, catalog: Sequence[CelestialBodyDefinition]) -> list[BodyHandle]:
        validate_catalog(catalog)

        handles = [self._build_body(definition) for definition in catalog]
        logger.info(f"Built scene graph: {len(handles)} bodies, {len(self.graph)} nodes.")
        return handles

    def build_star(self, star: StarDefinition) -> int:
        return self.graph.add_node(NodeKind.STAR, star.name, radius=star.radius)

    def _build_body(self, definition: CelestialBodyDefinition) -> BodyHandle:
        orbit, body = self._add_orbiting_pair(
            name=definition.name,
            parent=None,
            radius=definition.radius,
            distance=definition.distance,
            axial_tilt=definition.axial_tilt,
        )
        handle = BodyHandle(graph=self.graph, definition=definition, orbit=orbit, body=body)

        if definition.moon is not None:
            handle.moon_orbit, handle.moon_body = self._add_moon(definition.moon, parent=body)

        if definition.rings is not None:
            rings = definition.rings
            handle.ring = self.graph.add_node(
                NodeKind.RING,
                f"{definition.name} rings",
                parent=body,
                inner_radius=definition.radius + rings.inner_offset,
                outer_radius=definition.radius + rings.outer_offset,
            )
        return handle

    def _add_moon(self, moon: MoonDefinition, parent: int) -> tuple[int, int]:
        # Moon pivot follows the planet's position only, not its spin or tilt
        return self._add_orbiting_pair(
            name=moon.name,
            parent=parent,
            radius=moon.radius,
            distance=moon.distance,
            axial_tilt=moon.axial_tilt,
            inherit_rotation=False,
        )

    def _add_orbiting_pair(
        self,
        name: str,
        parent: Optional[int],
        radius: float,
        distance: float,
        axial_tilt: float,
        inherit_rotation: bool = True,
    ) -> tuple[int, int]:
        orbit = self.graph.add_node(
            NodeKind.ORBIT, f"{name} orbit", parent=parent, inherit_rotation=inherit_rotation
        )
        body = self.graph.add_node(
            NodeKind.BODY,
            name,
            parent=orbit,
            offset=REFERENCE_AXIS * distance,
            tilt=math.radians(axial_tilt),
            radius=radius,
        )
        return orbit, body
