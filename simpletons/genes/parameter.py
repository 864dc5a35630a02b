import math
from enum import Enum
from typing import Any, ClassVar, Generic, Iterator, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    field_validator,
    model_serializer,
    model_validator,
)

from simpletons.exceptions import GeneIndexError

FACE_COUNT = 6


class GeneRole(str, Enum):
    """Semantic role of a gene; the role alone fixes its real-world range."""

    UNIT = "unit"
    DIMENSION = "dimension"
    FACE_INDEX = "face_index"
    FACE_COORD = "face_coord"
    ROTATION = "rotation"
    TORQUE = "torque"
    MAX_SPEED = "max_speed"


GENE_RANGES: dict[GeneRole, tuple[float, float]] = {
    GeneRole.UNIT: (0.0, 1.0),
    GeneRole.DIMENSION: (0.1, 10.0),
    # A face index is a count, not an interval: see FaceIndex.get_face
    GeneRole.FACE_INDEX: (0.0, 1.0),
    GeneRole.FACE_COORD: (-1.0, 1.0),
    GeneRole.ROTATION: (0.0, math.pi),
    GeneRole.TORQUE: (0.0, 50.0),
    GeneRole.MAX_SPEED: (0.0, 10.0),
}


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


class NormalizedParameter(BaseModel):
    """A single gene.

    The raw value always lives in [0, 1]; assigning anything outside that
    interval clamps it. Only ``get_scaled()`` carries physical units.

    Genes serialize as their bare raw float and validate from one, so a
    segment document stays a plain tree of numbers.
    """

    role: ClassVar[GeneRole] = GeneRole.UNIT

    value: float = 0.0

    model_config = ConfigDict(validate_assignment=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_value(cls, data: Any) -> Any:
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return {"value": data}
        return data

    @field_validator("value")
    @classmethod
    def _clamp(cls, v: float) -> float:
        if math.isnan(v):
            raise ValueError("gene value must not be NaN")
        return clamp_unit(v)

    @model_serializer
    def _as_bare_value(self) -> float:
        return self.value

    def get(self) -> float:
        return self.value

    def set(self, raw: float) -> None:
        self.value = raw

    def range(self) -> tuple[float, float]:
        """(min, max) of the scaled value."""
        return GENE_RANGES[self.role]

    def get_scaled(self) -> float:
        lo, hi = self.range()
        return lo + (hi - lo) * self.value

    def add_offset(self, offset: float) -> bool:
        """Add *offset* to the raw value and clamp. Returns True if it changed."""
        before = self.value
        self.set(before + offset)
        return self.value != before


class Dimension(NormalizedParameter):
    """x, y or z half-extent of a segment."""

    role: ClassVar[GeneRole] = GeneRole.DIMENSION


class FaceIndex(NormalizedParameter):
    """Which face of the parent segment a child attaches to."""

    role: ClassVar[GeneRole] = GeneRole.FACE_INDEX

    def get_face(self, count: int = FACE_COUNT) -> int:
        """Discrete face in ``[0, count - 1]``."""
        if count <= 0:
            raise ValueError(f"face count must be positive, got {count}")
        return min(int(self.value * count), count - 1)


class FaceCoord(NormalizedParameter):
    """Coordinate on the parent face, scaled to [-1, 1]."""

    role: ClassVar[GeneRole] = GeneRole.FACE_COORD


class Rotation(NormalizedParameter):
    """Rotation about one axis relative to the parent, scaled to [0, pi]."""

    role: ClassVar[GeneRole] = GeneRole.ROTATION


class Torque(NormalizedParameter):
    role: ClassVar[GeneRole] = GeneRole.TORQUE


class MaxSpeed(NormalizedParameter):
    role: ClassVar[GeneRole] = GeneRole.MAX_SPEED


# (field name, local index) per flat gene index; a local index of None means
# the field is itself a leaf parameter.
GeneLayout = tuple[tuple[str, Optional[int]], ...]


def build_gene_layout(*fields: tuple[str, Optional[int]]) -> GeneLayout:
    """Build a flat-index lookup table from ``(field, count)`` pairs.

    Pass ``None`` as the count for a field that is a single parameter.
    """
    layout: list[tuple[str, Optional[int]]] = []
    for name, count in fields:
        if count is None:
            layout.append((name, None))
        else:
            layout.extend((name, local) for local in range(count))
    return tuple(layout)


class ParameterHolder:
    """An ordered set of genes exposed as one flat index space.

    Subclasses declare ``GENE_LAYOUT``; composite holders delegate each index
    to a child holder through it.
    """

    GENE_LAYOUT: ClassVar[GeneLayout] = ()

    def param_count(self) -> int:
        return len(self.GENE_LAYOUT)

    def param_at(self, index: int) -> NormalizedParameter:
        """Return the live gene at *index* (mutations through it stick)."""
        if not 0 <= index < self.param_count():
            raise GeneIndexError(
                f"{type(self).__name__}: gene index {index} out of bounds "
                f"(count={self.param_count()})"
            )
        name, local = self.GENE_LAYOUT[index]
        child = getattr(self, name)
        if local is None:
            return child
        return child.param_at(local)

    def iter_params(self) -> Iterator[NormalizedParameter]:
        for i in range(self.param_count()):
            yield self.param_at(i)

    def raw_values(self) -> list[float]:
        return [p.get() for p in self.iter_params()]


P = TypeVar("P", bound=NormalizedParameter)


class ParamSet3d(BaseModel, ParameterHolder, Generic[P]):
    """Exactly three parameters of one role, addressed as x, y, z."""

    GENE_LAYOUT: ClassVar[GeneLayout] = build_gene_layout(
        ("x", None), ("y", None), ("z", None)
    )

    x: P
    y: P
    z: P

    def components(self) -> tuple[float, float, float]:
        return (self.x.get(), self.y.get(), self.z.get())

    def components_scaled(self) -> tuple[float, float, float]:
        return (self.x.get_scaled(), self.y.get_scaled(), self.z.get_scaled())
