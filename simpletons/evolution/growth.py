from __future__ import annotations

import random

from loguru import logger

from simpletons.body.joint import Joint, JointKind
from simpletons.body.segment import SegmentDefinition, new_cuboid
from simpletons.body.tree import BodyTree, NodeHandle
from simpletons.database.population import Population
from simpletons.evolution.engine.config import GrowthConfig
from simpletons.utils.rng import make_rng


def random_segment(rng: random.Random, config: GrowthConfig) -> SegmentDefinition:
    """Stick-shaped segment with uniformly random raw position and rotation genes."""
    return new_cuboid(
        config.stick_dims,
        (rng.random(), rng.random(), rng.random()),
        (rng.random(), rng.random(), rng.random()),
    )


def random_joint(rng: random.Random, config: GrowthConfig) -> Joint:
    kind = rng.choice(config.joint_kinds)
    if kind == JointKind.ROTATIONAL:
        return Joint.rotational(torque=rng.random(), max_speed=rng.random())
    return Joint(kind=kind)


def _grow(
    tree: BodyTree,
    current: NodeHandle,
    depth: int,
    rng: random.Random,
    config: GrowthConfig,
) -> None:
    if depth <= 0:
        return
    for _ in range(rng.randrange(config.max_children)):
        child = tree.add_child(current, random_segment(rng, config), random_joint(rng, config))
        _grow(tree, child, depth - 1, rng, config)


def grow_random_tree(
    max_depth: int,
    *,
    rng: random.Random | None = None,
    config: GrowthConfig | None = None,
) -> BodyTree:
    """Grow a random body tree at most *max_depth* edges deep.

    Every node with remaining depth ``d > 0`` draws a child count uniformly in
    ``[0, config.max_children)``; children recurse with ``d - 1``, so a node at
    depth 0 never has children. ``max_depth`` overrides ``config.max_depth``.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    config = config or GrowthConfig(max_depth=max_depth)
    rng = make_rng(rng)

    tree = BodyTree.with_root(random_segment(rng, config))
    _grow(tree, tree.root, max_depth, rng, config)
    logger.debug(
        "[growth] Grew tree with {} segment(s), depth {}/{}",
        len(tree),
        tree.max_depth(),
        max_depth,
    )
    return tree


def grow_population(
    size: int,
    config: GrowthConfig | None = None,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> Population:
    """Seed a population of *size* random trees grown from one RNG stream."""
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    config = config or GrowthConfig()
    rng = make_rng(rng, seed)

    population = Population(
        grow_random_tree(config.max_depth, rng=rng, config=config) for _ in range(size)
    )
    logger.info(
        "[growth] Seeded population: {} tree(s), {} segment(s), max_depth={}",
        len(population),
        population.segment_count(),
        config.max_depth,
    )
    return population
