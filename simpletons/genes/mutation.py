from abc import ABC, abstractmethod

from simpletons.genes.parameter import ParameterHolder


class MutationGenerator(ABC):
    """Source of independent, identically distributed gene offsets.

    Offsets are added to raw gene values; results are clamped to [0, 1], so
    a generator may emit any real number.
    """

    @abstractmethod
    def offset(self) -> float:
        """Draw the offset for the next gene."""


def mutate_holder(holder: ParameterHolder, generator: MutationGenerator) -> int:
    """Draw one offset per gene of *holder* and apply it in place.

    Returns:
        Number of genes whose raw value actually changed.
    """
    changed = 0
    for index in range(holder.param_count()):
        if holder.param_at(index).add_offset(generator.offset()):
            changed += 1
    return changed
