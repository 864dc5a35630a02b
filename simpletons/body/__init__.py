from simpletons.body.joint import Joint, JointKind
from simpletons.body.realizer import (
    PoseRealizer,
    RealizationRecord,
    RecordingRealizer,
    SegmentPose,
    TreeRealizer,
    place_trees,
)
from simpletons.body.segment import (
    CuboidDefinition,
    FacePosition,
    SegmentDefinition,
    new_cuboid,
)
from simpletons.body.tree import BodyTree, BodyTreeDocument, NodeDocument, NodeHandle

__all__ = [
    "BodyTree",
    "BodyTreeDocument",
    "CuboidDefinition",
    "FacePosition",
    "Joint",
    "JointKind",
    "NodeDocument",
    "NodeHandle",
    "PoseRealizer",
    "RealizationRecord",
    "RecordingRealizer",
    "SegmentDefinition",
    "SegmentPose",
    "TreeRealizer",
    "new_cuboid",
    "place_trees",
]
