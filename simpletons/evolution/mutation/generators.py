import random

from simpletons.exceptions import MutationError
from simpletons.genes.mutation import MutationGenerator
from simpletons.utils.rng import make_rng


class RandomMutationGenerator(MutationGenerator):
    """Sparse uniform offsets.

    With probability ``rate`` draws uniformly in ``[-max_offset, max_offset]``,
    otherwise emits ``0``.
    """

    def __init__(
        self,
        rate: float,
        max_offset: float,
        rng: random.Random | None = None,
        seed: int | None = None,
    ):
        if not 0.0 <= rate <= 1.0:
            raise MutationError(f"Mutation rate must be in [0, 1], got {rate}")
        if not 0.0 <= max_offset <= 1.0:
            raise MutationError(f"Max offset must be in [0, 1], got {max_offset}")
        self.rate = rate
        self.max_offset = max_offset
        self.rng = make_rng(rng, seed)

    def offset(self) -> float:
        if self.rng.random() < self.rate:
            return self.rng.uniform(-self.max_offset, self.max_offset)
        return 0.0

    def __repr__(self) -> str:
        return f"RandomMutationGenerator(rate={self.rate}, max_offset={self.max_offset})"


class ConstantMutationGenerator(MutationGenerator):
    """Emits the same offset for every gene."""

    def __init__(self, value: float):
        self.value = value

    def offset(self) -> float:
        return self.value
