import random

import pytest

from simpletons.body.joint import JointKind
from simpletons.evolution.engine import STICK_DIMS, GrowthConfig
from simpletons.evolution.growth import grow_population, grow_random_tree


def test_depth_zero_gives_single_node(rng):
    tree = grow_random_tree(0, rng=rng)
    assert len(tree) == 1
    assert tree.children_of(tree.root) == []


def test_depth_is_bounded(rng):
    for _ in range(25):
        tree = grow_random_tree(2, rng=rng)
        assert tree.max_depth() <= 2
        assert tree.validate_structure() == []
        for handle in tree.handles():
            assert len(tree.children_of(handle)) < 3


def test_grown_segments_are_sticks_with_nine_genes(rng):
    tree = grow_random_tree(2, rng=rng)
    for segment in tree.segments():
        assert segment.param_count() == 9
        assert segment.dims.components() == STICK_DIMS


def test_grown_joints_come_from_config(rng):
    config = GrowthConfig(max_depth=4, joint_kinds=[JointKind.FIXED])
    tree = grow_random_tree(4, rng=rng, config=config)
    for handle in tree.handles():
        for _, joint in tree.children_of(handle):
            assert joint.kind == JointKind.FIXED


def test_same_seed_grows_same_tree():
    a = grow_random_tree(3, rng=random.Random(5))
    b = grow_random_tree(3, rng=random.Random(5))
    assert a == b


def test_negative_depth_rejected():
    with pytest.raises(ValueError):
        grow_random_tree(-1)


def test_grow_population_is_seeded():
    config = GrowthConfig(max_depth=2)
    first = grow_population(6, config, seed=11)
    second = grow_population(6, config, seed=11)
    assert len(first) == 6
    assert first == second


def test_growth_config_rejects_ground_joint():
    with pytest.raises(ValueError):
        GrowthConfig(joint_kinds=[JointKind.GROUND])
    with pytest.raises(ValueError):
        GrowthConfig(stick_dims=(0.1, 2.0, 0.1))
