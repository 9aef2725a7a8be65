import math

import numpy as np
import pytest

from glengine.camera import Camera, WalkDirection
from glengine.glmath import look_at


@pytest.fixture
def camera():
    return Camera((0.0, 0.0, 3.0), (0.0, 0.0, 0.0))


def test_basis_is_orthonormal(camera):
    assert math.isclose(np.linalg.norm(camera.forward), 1.0)
    assert math.isclose(np.linalg.norm(camera.right), 1.0)
    assert math.isclose(np.dot(camera.forward, camera.right), 0.0, abs_tol=1e-12)
    assert math.isclose(np.dot(camera.up, camera.right), 0.0, abs_tol=1e-12)


def test_same_start_and_target_raises():
    with pytest.raises(ValueError):
        Camera((1, 1, 1), (1, 1, 1))


@pytest.mark.parametrize(
    "direction, attr, sign",
    [
        (WalkDirection.FORWARD, "forward", 1),
        (WalkDirection.BACKWARD, "forward", -1),
        (WalkDirection.STRAFE_LEFT, "right", -1),
        (WalkDirection.STRAFE_RIGHT, "right", 1),
    ],
)
def test_walk_moves_along_axis(camera, direction, attr, sign):
    start = camera.position.copy()
    camera.walk(direction)
    expected = start + sign * getattr(camera, attr) * camera.movement_speed
    assert np.allclose(camera.position, expected)


def test_no_walk_stays(camera):
    start = camera.position.copy()
    camera.walk(WalkDirection.NO_WALK)
    assert np.allclose(camera.position, start)


def test_mouse_look_zero_delta_keeps_forward(camera):
    forward = camera.forward.copy()
    camera.mouse_look((0.0, 0.0))
    assert np.allclose(camera.forward, forward)
    assert camera.yaw == 0.0


def test_mouse_look_accumulates_yaw(camera):
    camera.mouse_look((10.0, 0.0))
    assert math.isclose(camera.yaw, math.radians(10.0 * camera.mouselook_sensitivity))
    assert math.isclose(camera.pitch, 0.0, abs_tol=1e-12)
    assert math.isclose(np.linalg.norm(camera.forward), 1.0)


def test_view_matrix_matches_look_at(camera):
    camera.walk(WalkDirection.FORWARD)
    expected = look_at(camera.position, camera.position + camera.forward, camera.up)
    assert np.allclose(camera.view_matrix(), expected)


def test_update_from_angles_prints(camera, capsys):
    camera.update_vectors_from_orientation_angles()
    assert np.allclose(camera.forward, [0, 0, -1])
    out = capsys.readouterr().out
    assert "Yaw: 0.000000 --- Pitch: 0.000000" in out


def test_diagnostics_lists_vectors(camera):
    text = camera.diagnostics()
    assert text.startswith("====================")
    assert "Up vector: : 0.000000, 1.000000, 0.000000" in text