import numpy as np
import pytest

from simpletons.body.segment import CuboidDefinition, new_cuboid
from simpletons.exceptions import GeneIndexError


def test_cuboid_has_nine_genes_in_layout_order():
    seg = new_cuboid((0.1, 0.2, 0.3), (0.4, 0.5, 0.6), (0.7, 0.8, 0.9))
    assert seg.param_count() == 9
    assert seg.raw_values() == [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]
    assert seg.param_at(0) is seg.dims.x
    assert seg.param_at(3) is seg.pos.face
    assert seg.param_at(8) is seg.rot.z
    with pytest.raises(GeneIndexError):
        seg.param_at(9)


def test_new_cuboid_clamps_raw_values():
    seg = new_cuboid((2.0, -1.0, 0.5), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    assert seg.dims.components() == (1.0, 0.0, 0.5)


def test_mutating_through_index_changes_segment():
    seg = new_cuboid((0.5, 0.5, 0.5), (0.0, 0.5, 0.5), (0.0, 0.0, 0.0))
    seg.param_at(2).set(0.75)
    assert seg.dims.z.get() == 0.75


def test_half_extents_are_scaled_dims():
    seg = new_cuboid((0.0, 1.0, 0.5), (0.0, 0.5, 0.5), (0.0, 0.0, 0.0))
    assert np.allclose(seg.half_extents(), [0.1, 10.0, 5.05])


def test_zero_rotation_is_identity():
    seg = new_cuboid((0.5, 0.5, 0.5), (0.0, 0.5, 0.5), (0.0, 0.0, 0.0))
    assert np.allclose(seg.rotation_matrix(), np.eye(3))


def test_rotation_matrix_is_orthonormal():
    seg = new_cuboid((0.5, 0.5, 0.5), (0.0, 0.5, 0.5), (0.3, 0.6, 0.9))
    m = seg.rotation_matrix()
    assert np.allclose(m @ m.T, np.eye(3))
    assert np.linalg.det(m) == pytest.approx(1.0)


def test_face_normals_point_outward():
    assert np.allclose(CuboidDefinition.face_normal(0), [1, 0, 0])
    assert np.allclose(CuboidDefinition.face_normal(1), [-1, 0, 0])
    assert np.allclose(CuboidDefinition.face_normal(4), [0, 0, 1])
    with pytest.raises(ValueError):
        CuboidDefinition.face_normal(6)


def test_child_sits_outside_parent_face():
    parent = new_cuboid((0.0, 0.0, 0.0), (0.0, 0.5, 0.5), (0.0, 0.0, 0.0))
    # face gene 0.0 -> face 0 (+x); face coordinates 0.5 -> centre of the face
    child = new_cuboid((0.0, 0.0, 0.0), (0.0, 0.5, 0.5), (0.0, 0.0, 0.0))
    offset = parent.child_offset(child)
    assert np.allclose(offset, [0.2, 0.0, 0.0])


def test_face_anchor_spans_face_coordinates():
    seg = new_cuboid((1.0, 1.0, 1.0), (0.0, 0.5, 0.5), (0.0, 0.0, 0.0))
    # face 3 is -y; u and v run over x and z
    anchor = seg.face_anchor(3, 1.0, -1.0)
    assert np.allclose(anchor, [10.0, -10.0, -10.0])


def test_segment_document_is_plain_numbers():
    seg = new_cuboid((0.1, 0.2, 0.3), (0.4, 0.5, 0.6), (0.7, 0.8, 0.9))
    data = seg.model_dump()
    assert data == {
        "kind": "cuboid",
        "dims": {"x": 0.1, "y": 0.2, "z": 0.3},
        "pos": {"face": 0.4, "u": 0.5, "v": 0.6},
        "rot": {"x": 0.7, "y": 0.8, "z": 0.9},
    }
    assert CuboidDefinition.model_validate(data) == seg
