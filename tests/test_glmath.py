import math

import numpy as np
import pytest

from glengine.glmath import (
    angle_axis,
    euler_angles,
    look_at,
    normalize,
    perspective,
    quat_from_euler,
    quat_multiply,
    quat_to_mat4,
    rotate_vector,
    translation_matrix,
)


def test_normalize_gives_unit_parallel_vector():
    v = np.array([3.0, -2.0, 7.0])
    n = normalize(v)
    assert math.isclose(np.linalg.norm(n), 1.0)
    assert np.allclose(np.cross(n, v), 0.0)
    assert np.dot(n, v) > 0


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize((0, 0, 0))


def test_angle_axis_zero_is_identity():
    assert np.allclose(angle_axis(0.0, (0, 1, 0)), [1, 0, 0, 0])


def test_rotate_quarter_turn_about_y():
    q = angle_axis(math.pi / 2, (0, 1, 0))
    assert np.allclose(rotate_vector(q, (1, 0, 0)), [0, 0, -1])


def test_rotation_preserves_length():
    q = normalize(quat_from_euler((0.3, -1.1, 0.7)))
    v = np.array([1.5, -2.0, 0.25])
    assert math.isclose(np.linalg.norm(rotate_vector(q, v)), np.linalg.norm(v))


def test_multiply_composes_rotations():
    a = angle_axis(0.4, (0, 1, 0))
    b = angle_axis(-0.9, (1, 0, 0))
    v = np.array([0.2, 0.5, -1.0])
    combined = rotate_vector(quat_multiply(a, b), v)
    assert np.allclose(combined, rotate_vector(a, rotate_vector(b, v)))


def test_multiply_by_identity():
    q = quat_from_euler((0.1, 0.2, 0.3))
    identity = angle_axis(0.0, (1, 0, 0))
    assert np.allclose(quat_multiply(identity, q), q)
    assert np.allclose(quat_multiply(q, identity), q)


def test_matrix_matches_vector_rotation():
    q = quat_from_euler((0.5, 1.2, -0.4))
    v = np.array([1.0, 2.0, 3.0])
    m = quat_to_mat4(q)
    assert np.allclose((m @ np.append(v, 1.0))[:3], rotate_vector(q, v))
    assert np.allclose(m[:3, :3] @ m[:3, :3].T, np.identity(3))


@pytest.mark.parametrize("angles", [(0.2, 0.4, 0.6), (-0.5, 0.3, 1.0), (0.0, 0.0, 0.0)])
def test_euler_round_trip(angles):
    assert np.allclose(euler_angles(quat_from_euler(angles)), angles)


def test_translation_matrix_moves_points():
    offset = np.array([4.0, -1.0, 2.5])
    point = np.array([1.0, 1.0, 1.0, 1.0])
    assert np.allclose((translation_matrix(offset) @ point)[:3], point[:3] + offset)


def test_look_at_places_eye_at_origin_and_center_ahead():
    eye = np.array([1.0, 2.0, 3.0])
    center = np.array([-2.0, 0.5, -4.0])
    view = look_at(eye, center, (0, 1, 0))
    assert np.allclose(view @ np.append(eye, 1.0), [0, 0, 0, 1])
    distance = np.linalg.norm(center - eye)
    assert np.allclose(view @ np.append(center, 1.0), [0, 0, -distance, 1])
    assert np.allclose(view[:3, :3] @ view[:3, :3].T, np.identity(3))


def test_perspective_maps_near_and_far_planes():
    near, far = 1.0, 100.0
    proj = perspective(math.radians(60.0), 16 / 9, near, far)
    clip_near = proj @ np.array([0.0, 0.0, -near, 1.0])
    clip_far = proj @ np.array([0.0, 0.0, -far, 1.0])
    assert math.isclose(clip_near[2] / clip_near[3], -1.0)
    assert math.isclose(clip_far[2] / clip_far[3], 1.0)


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 1.0, 10.0)