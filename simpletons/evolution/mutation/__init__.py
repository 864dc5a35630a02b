from simpletons.evolution.mutation.generators import (
    ConstantMutationGenerator,
    RandomMutationGenerator,
)

__all__ = ["ConstantMutationGenerator", "RandomMutationGenerator"]
