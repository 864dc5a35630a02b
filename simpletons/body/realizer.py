from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, Iterable, TypeVar

import numpy as np

from simpletons.body.joint import Joint, JointKind
from simpletons.body.segment import SegmentDefinition

if TYPE_CHECKING:
    from simpletons.body.tree import BodyTree

H = TypeVar("H")


class TreeRealizer(ABC, Generic[H]):
    """Consumer that turns a body tree into its own domain objects.

    The tree never inspects the handles a realizer returns; it only threads
    them from a parent to its children. This keeps the body description free
    of any physics engine, renderer or debug sink.
    """

    @abstractmethod
    def root(self) -> tuple[H, Joint]:
        """Synthetic parent handle and joint for the root segment."""

    @abstractmethod
    def new_segment(
        self, definition: SegmentDefinition, parent: H, parent_joint: Joint
    ) -> H:
        """Create the consumer object for one segment.

        Called exactly once per node, in traversal order, always after the
        call that produced *parent*.

        Args:
            definition: Segment genes for this node
            parent: Handle returned for the parent node (or by ``root()``)
            parent_joint: Joint on the edge to the parent

        Returns:
            Handle passed on to this node's children
        """


@dataclass(frozen=True)
class RealizationRecord:
    node_id: int
    parent_id: int
    joint_kind: JointKind
    segment: SegmentDefinition


class RecordingRealizer(TreeRealizer[int]):
    """Debug sink: assigns sequential ids and records every call.

    The root handle is ``0``; the first realized segment gets id ``1``.
    """

    def __init__(self, root_joint: Joint | None = None) -> None:
        self._root_joint = root_joint or Joint.ground()
        self._last_id = 0
        self.records: list[RealizationRecord] = []

    def root(self) -> tuple[int, Joint]:
        return 0, self._root_joint

    def new_segment(
        self, definition: SegmentDefinition, parent: int, parent_joint: Joint
    ) -> int:
        self._last_id += 1
        self.records.append(
            RealizationRecord(
                node_id=self._last_id,
                parent_id=parent,
                joint_kind=parent_joint.kind,
                segment=definition,
            )
        )
        return self._last_id

    def linkage(self) -> list[tuple[int, int]]:
        """(node id, parent id) pairs in call order."""
        return [(r.node_id, r.parent_id) for r in self.records]


@dataclass
class SegmentPose:
    """World-space placement of one realized segment."""

    position: np.ndarray
    rotation: np.ndarray
    half_extents: np.ndarray
    joint_kind: JointKind
    parent: int | None = None
    segment: SegmentDefinition | None = field(default=None, repr=False)


class PoseRealizer(TreeRealizer[int]):
    """Places segments in world space from their face-relative genes.

    The root segment is centred on ``spawn_position`` with its own rotation.
    Every other segment sits on its parent's chosen face (see
    ``CuboidDefinition.child_offset``) and composes its rotation with the
    parent's. Handles are indices into ``poses``; the root's synthetic parent
    handle is ``-1``.
    """

    def __init__(
        self,
        spawn_position: tuple[float, float, float] = (0.0, 10.0, 0.0),
    ) -> None:
        self.spawn_position = np.asarray(spawn_position, dtype=float)
        self.poses: list[SegmentPose] = []

    def root(self) -> tuple[int, Joint]:
        return -1, Joint.ground()

    def new_segment(
        self, definition: SegmentDefinition, parent: int, parent_joint: Joint
    ) -> int:
        if parent < 0:
            position = self.spawn_position.copy()
            rotation = definition.rotation_matrix()
            parent_index = None
        else:
            parent_pose = self.poses[parent]
            parent_segment = parent_pose.segment
            offset = parent_segment.child_offset(definition)
            position = parent_pose.position + parent_pose.rotation @ offset
            rotation = parent_pose.rotation @ definition.rotation_matrix()
            parent_index = parent

        self.poses.append(
            SegmentPose(
                position=position,
                rotation=rotation,
                half_extents=definition.half_extents(),
                joint_kind=parent_joint.kind,
                parent=parent_index,
                segment=definition,
            )
        )
        return len(self.poses) - 1


def place_trees(
    trees: Iterable["BodyTree"], padding: float = 10.0, height: float = 5.0
) -> list[list[SegmentPose]]:
    """Pose every tree, spawning tree ``i`` at ``(i * padding, height, 0)``."""
    placed: list[list[SegmentPose]] = []
    for i, tree in enumerate(trees):
        realizer = PoseRealizer(spawn_position=(i * padding, height, 0.0))
        tree.realize(realizer)
        placed.append(realizer.poses)
    return placed
