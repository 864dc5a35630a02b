import random

import pytest

from simpletons.body.joint import Joint
from simpletons.body.segment import new_cuboid
from simpletons.body.tree import BodyTree


@pytest.fixture
def rng():
    return random.Random(1234)


def make_segment(dims=(0.5, 0.5, 0.5), pos=(0.0, 0.5, 0.5), rot=(0.0, 0.0, 0.0)):
    return new_cuboid(dims, pos, rot)


@pytest.fixture
def chain_tree():
    """root -> a -> b, plus a second child c of root."""
    tree = BodyTree(make_segment(dims=(0.1, 0.2, 0.3)))
    a = tree.add_child(tree.root, make_segment(dims=(0.4, 0.4, 0.4)), Joint.fixed())
    tree.add_child(a, make_segment(dims=(0.6, 0.6, 0.6)), Joint.rotational(0.5, 0.25))
    tree.add_child(tree.root, make_segment(dims=(0.9, 0.9, 0.9)), Joint.fixed())
    return tree
