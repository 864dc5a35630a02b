import random

import pytest

from simpletons.body.joint import Joint
from simpletons.body.segment import new_cuboid
from simpletons.body.tree import BodyTree
from simpletons.database.population import Population
from simpletons.evolution.engine import MutationConfig, mutate, mutate_population
from simpletons.evolution.growth import grow_random_tree
from simpletons.evolution.mutation import (
    ConstantMutationGenerator,
    RandomMutationGenerator,
)
from simpletons.exceptions import MutationError
from simpletons.genes.mutation import mutate_holder


def _all_genes(tree):
    return [v for seg in tree.segments() for v in seg.raw_values()]


def test_rate_zero_is_a_no_op(rng):
    tree = grow_random_tree(3, rng=rng)
    before = _all_genes(tree)
    assert mutate(tree, 0.0, 1.0, rng=random.Random(7)) == 0
    assert _all_genes(tree) == before


def test_offsets_are_bounded(rng):
    tree = grow_random_tree(3, rng=rng)
    before = _all_genes(tree)
    mutate(tree, 1.0, 0.05, rng=random.Random(7))
    after = _all_genes(tree)
    assert len(after) == len(before)
    for old, new in zip(before, after):
        assert 0.0 <= new <= 1.0
        assert abs(new - old) <= 0.05 + 1e-12


def test_repeated_full_rate_mutation_reaches_both_bounds():
    tree = BodyTree(new_cuboid((0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (0.5, 0.5, 0.5)))
    for _ in range(20):
        tree.add_child(
            tree.root,
            new_cuboid((0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (0.5, 0.5, 0.5)),
            Joint.fixed(),
        )

    gen_rng = random.Random(42)
    for _ in range(500):
        mutate(tree, 1.0, 1.0, rng=gen_rng)

    genes = _all_genes(tree)
    assert 0.0 in genes
    assert 1.0 in genes


def test_same_seed_gives_same_mutation(rng):
    tree = grow_random_tree(3, rng=rng)
    clone = tree.copy()
    mutate(tree, 0.5, 0.2, rng=random.Random(3))
    mutate(clone, 0.5, 0.2, rng=random.Random(3))
    assert tree == clone


def test_constant_generator_shifts_every_gene():
    seg = new_cuboid((0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (0.5, 0.5, 0.5))
    assert mutate_holder(seg, ConstantMutationGenerator(0.25)) == 9
    assert seg.raw_values() == [0.75] * 9
    assert mutate_holder(seg, ConstantMutationGenerator(1.0)) == 9
    assert mutate_holder(seg, ConstantMutationGenerator(1.0)) == 0
    assert seg.raw_values() == [1.0] * 9


def test_generator_rejects_out_of_range_arguments():
    with pytest.raises(MutationError):
        RandomMutationGenerator(1.5, 0.1)
    with pytest.raises(MutationError):
        RandomMutationGenerator(0.1, -0.1)


def test_generator_draws_zero_when_not_selected():
    gen = RandomMutationGenerator(0.0, 1.0, seed=1)
    assert all(gen.offset() == 0.0 for _ in range(100))


def test_mutate_population_uses_config(rng):
    population = Population(grow_random_tree(2, rng=rng) for _ in range(4))
    before = [tree.copy() for tree in population]
    changed = mutate_population(population, MutationConfig(rate=1.0, max_offset=0.5, seed=9))
    assert changed > 0
    assert any(tree != old for tree, old in zip(population, before))


def test_mutate_population_empty():
    assert mutate_population(Population()) == 0


def test_mutation_config_bounds():
    with pytest.raises(ValueError):
        MutationConfig(rate=2.0)
