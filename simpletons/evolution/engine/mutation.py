from __future__ import annotations

import random

from loguru import logger

from simpletons.body.tree import BodyTree
from simpletons.database.population import Population
from simpletons.evolution.engine.config import MutationConfig
from simpletons.evolution.mutation.generators import RandomMutationGenerator


def mutate(
    tree: BodyTree,
    rate: float,
    max_offset: float,
    *,
    rng: random.Random | None = None,
) -> int:
    """Mutate *tree* in place with the sparse uniform policy.

    Args:
        tree: Tree whose segment genes are perturbed
        rate: Probability that any one gene is perturbed, in [0, 1]
        max_offset: Largest absolute raw offset, in [0, 1]
        rng: Source of randomness (a fresh private RNG if omitted)

    Returns:
        Number of genes whose raw value changed.
    """
    return tree.mutate(RandomMutationGenerator(rate, max_offset, rng=rng))


def mutate_population(
    population: Population,
    config: MutationConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> int:
    """Mutate every tree of *population* in place from one RNG stream.

    Returns:
        Total number of genes changed.
    """
    config = config or MutationConfig()
    generator = RandomMutationGenerator(
        config.rate, config.max_offset, rng=rng, seed=config.seed
    )
    if not len(population):
        logger.info("[mutation] Empty population, nothing to mutate")
        return 0

    changed = sum(tree.mutate(generator) for tree in population)
    total = sum(
        segment.param_count() for tree in population for segment in tree.segments()
    )
    logger.info(
        "[mutation] Changed {}/{} gene(s) across {} tree(s) (rate={}, max_offset={})",
        changed,
        total,
        len(population),
        config.rate,
        config.max_offset,
    )
    return changed
