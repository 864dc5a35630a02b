from typing import ClassVar, Literal

import numpy as np
from pydantic import BaseModel

from simpletons.genes.parameter import (
    FACE_COUNT,
    Dimension,
    FaceCoord,
    FaceIndex,
    GeneLayout,
    ParameterHolder,
    ParamSet3d,
    Rotation,
    build_gene_layout,
)


class FacePosition(BaseModel, ParameterHolder):
    """Attachment point of a segment on a face of its parent.

    Absolute offsets are ill-defined without knowing both the parent's and the
    child's dimensions, so a child picks a parent face and a 2D coordinate on
    it instead.
    """

    GENE_LAYOUT: ClassVar[GeneLayout] = build_gene_layout(
        ("face", None), ("u", None), ("v", None)
    )

    face: FaceIndex
    u: FaceCoord
    v: FaceCoord


class CuboidDefinition(BaseModel, ParameterHolder):
    """Cuboid segment: 9 genes laid out as dims 0-2, pos 3-5, rot 6-8."""

    GENE_LAYOUT: ClassVar[GeneLayout] = build_gene_layout(
        ("dims", 3), ("pos", 3), ("rot", 3)
    )

    kind: Literal["cuboid"] = "cuboid"
    dims: ParamSet3d[Dimension]
    pos: FacePosition
    rot: ParamSet3d[Rotation]

    @property
    def face_index(self) -> int:
        """Face of the parent this segment is attached to."""
        return self.pos.face.get_face(FACE_COUNT)

    def half_extents(self) -> np.ndarray:
        return np.array(self.dims.components_scaled(), dtype=float)

    def rotation_matrix(self) -> np.ndarray:
        """Rotation relative to the parent, applied about x, then y, then z."""
        rx, ry, rz = self.rot.components_scaled()
        cx, sx = np.cos(rx), np.sin(rx)
        cy, sy = np.cos(ry), np.sin(ry)
        cz, sz = np.cos(rz), np.sin(rz)
        mx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
        my = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
        mz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
        return mz @ my @ mx

    def face_anchor(self, face: int, u: float, v: float) -> np.ndarray:
        """Point on *face* at face coordinates (u, v), in the local frame.

        Face ``f`` lies on axis ``f // 2`` (positive side for even ``f``);
        ``u`` and ``v`` span the two remaining axes in ascending order.
        """
        if not 0 <= face < FACE_COUNT:
            raise ValueError(f"face must be in [0, {FACE_COUNT}), got {face}")
        half = self.half_extents()
        axis = face // 2
        sign = 1.0 if face % 2 == 0 else -1.0
        first, second = (a for a in range(3) if a != axis)
        point = np.zeros(3)
        point[axis] = sign * half[axis]
        point[first] = u * half[first]
        point[second] = v * half[second]
        return point

    @staticmethod
    def face_normal(face: int) -> np.ndarray:
        if not 0 <= face < FACE_COUNT:
            raise ValueError(f"face must be in [0, {FACE_COUNT}), got {face}")
        normal = np.zeros(3)
        normal[face // 2] = 1.0 if face % 2 == 0 else -1.0
        return normal

    def child_offset(self, child: "CuboidDefinition") -> np.ndarray:
        """Centre of *child* in this segment's frame.

        The child sits on its chosen face anchor, pushed out along the face
        normal by its own half-extent on that axis so the two do not overlap.
        """
        face = child.face_index
        anchor = self.face_anchor(face, child.pos.u.get_scaled(), child.pos.v.get_scaled())
        return anchor + self.face_normal(face) * child.half_extents()[face // 2]


# Closed set of segment variants. Add new shapes as a discriminated union on
# ``kind``.
SegmentDefinition = CuboidDefinition


def new_cuboid(
    dims: tuple[float, float, float],
    pos: tuple[float, float, float],
    rot: tuple[float, float, float],
) -> CuboidDefinition:
    """Build a cuboid from raw gene triples; values outside [0, 1] are clamped.

    Args:
        dims: raw x, y, z dimension genes
        pos: raw face index and two face coordinate genes
        rot: raw x, y, z rotation genes
    """
    return CuboidDefinition(
        dims=ParamSet3d[Dimension](x=dims[0], y=dims[1], z=dims[2]),
        pos=FacePosition(face=pos[0], u=pos[1], v=pos[2]),
        rot=ParamSet3d[Rotation](x=rot[0], y=rot[1], z=rot[2]),
    )
