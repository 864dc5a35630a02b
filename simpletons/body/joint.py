from enum import Enum

from pydantic import BaseModel, Field, model_validator

from simpletons.genes.parameter import MaxSpeed, Torque


class JointKind(str, Enum):
    GROUND = "ground"  # synthetic root attachment, no parent body
    FIXED = "fixed"  # rigid weld at the face-relative offset
    ROTATIONAL = "rotational"  # actuated, carries torque/speed limits


class Joint(BaseModel):
    """Label of the edge between a child segment and its parent."""

    kind: JointKind = Field(description="How the child attaches to its parent")
    torque: Torque | None = Field(
        default=None, description="Torque limit gene (rotational joints only)"
    )
    max_speed: MaxSpeed | None = Field(
        default=None, description="Speed limit gene (rotational joints only)"
    )

    @model_validator(mode="after")
    def _validate_actuation(self) -> "Joint":
        actuated = self.kind == JointKind.ROTATIONAL
        has_genes = self.torque is not None or self.max_speed is not None
        if actuated and (self.torque is None or self.max_speed is None):
            raise ValueError("rotational joints need both torque and max_speed")
        if not actuated and has_genes:
            raise ValueError(
                f"{self.kind.value} joints carry no torque/max_speed genes"
            )
        return self

    @classmethod
    def ground(cls) -> "Joint":
        return cls(kind=JointKind.GROUND)

    @classmethod
    def fixed(cls) -> "Joint":
        return cls(kind=JointKind.FIXED)

    @classmethod
    def rotational(cls, torque: float, max_speed: float) -> "Joint":
        """Rotational joint from raw torque and speed genes."""
        return cls(
            kind=JointKind.ROTATIONAL,
            torque=Torque(value=torque),
            max_speed=MaxSpeed(value=max_speed),
        )

    @property
    def is_ground(self) -> bool:
        return self.kind == JointKind.GROUND
