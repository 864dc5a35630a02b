"""Growth and mutation of body trees."""

from simpletons.evolution.engine import (
    GrowthConfig,
    MutationConfig,
    mutate,
    mutate_population,
)
from simpletons.evolution.growth import grow_population, grow_random_tree
from simpletons.evolution.mutation import (
    ConstantMutationGenerator,
    RandomMutationGenerator,
)

__all__ = [
    "ConstantMutationGenerator",
    "GrowthConfig",
    "MutationConfig",
    "RandomMutationGenerator",
    "grow_population",
    "grow_random_tree",
    "mutate",
    "mutate_population",
]
