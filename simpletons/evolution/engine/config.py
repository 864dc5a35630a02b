from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from simpletons.body.joint import JointKind

STICK_DIMS: tuple[float, float, float] = (0.04, 0.7, 0.04)
MAX_CHILDREN = 3


class MutationConfig(BaseModel):
    """Parameters of the sparse uniform mutation policy."""

    rate: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Probability that a gene is perturbed"
    )
    max_offset: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Largest absolute raw offset"
    )
    seed: int | None = Field(
        default=None, description="RNG seed used when no generator is supplied"
    )
    model_config = ConfigDict(extra="forbid")


class GrowthConfig(BaseModel):
    """Parameters of random body-tree growth."""

    max_depth: int = Field(default=3, ge=0, description="Maximum edges from root to leaf")
    max_children: int = Field(
        default=MAX_CHILDREN,
        ge=1,
        description="Child count is drawn uniformly in [0, max_children)",
    )
    stick_dims: tuple[float, float, float] = Field(
        default=STICK_DIMS,
        description="Raw dimension genes for new segments (narrow, elongated)",
    )
    joint_kinds: list[JointKind] = Field(
        default_factory=lambda: [JointKind.FIXED, JointKind.ROTATIONAL],
        min_length=1,
        description="Joint kinds drawn uniformly for new edges",
    )
    model_config = ConfigDict(extra="forbid")

    @field_validator("stick_dims")
    @classmethod
    def validate_stick_dims(cls, v: tuple[float, float, float]):
        for value in v:
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"stick_dims are raw genes in [0, 1], got {v}")
        return v

    @field_validator("joint_kinds")
    @classmethod
    def validate_joint_kinds(cls, v: list[JointKind]):
        if JointKind.GROUND in v:
            raise ValueError("ground joints only attach the root; not a growth choice")
        return v
