from simpletons.evolution.engine.config import (
    MAX_CHILDREN,
    STICK_DIMS,
    GrowthConfig,
    MutationConfig,
)
from simpletons.evolution.engine.mutation import mutate, mutate_population

__all__ = [
    "MAX_CHILDREN",
    "STICK_DIMS",
    "GrowthConfig",
    "MutationConfig",
    "mutate",
    "mutate_population",
]
