"""Vector, quaternion and matrix helpers for 3D transforms.

Vectors are numpy arrays of floats. Quaternions are arrays ordered
``(w, x, y, z)``. Matrices are row-major 4x4 arrays meant to be applied as
``matrix @ column_vector``, so a translation lives in the last column.
"""

from __future__ import annotations

import math

import numpy as np

_FLOAT_EPSILON = 1.1920929e-07


def _vec(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def normalize(v) -> np.ndarray:
    """Return ``v`` scaled to unit length."""
    arr = _vec(v)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def angle_axis(angle: float, axis) -> np.ndarray:
    """Quaternion rotating by ``angle`` radians around ``axis``."""
    x, y, z = _vec(axis)
    s = math.sin(angle * 0.5)
    return np.array([math.cos(angle * 0.5), x * s, y * s, z * s])


def quat_from_euler(angles) -> np.ndarray:
    """Quaternion from (pitch, yaw, roll) Euler angles in radians."""
    half = _vec(angles) * 0.5
    cx, cy, cz = np.cos(half)
    sx, sy, sz = np.sin(half)
    return np.array([
        cx * cy * cz + sx * sy * sz,
        sx * cy * cz - cx * sy * sz,
        cx * sy * cz + sx * cy * sz,
        cx * cy * sz - sx * sy * cz,
    ])


def quat_multiply(a, b) -> np.ndarray:
    """Hamilton product ``a * b``: apply ``b`` first, then ``a``."""
    aw, ax, ay, az = _vec(a)
    bw, bx, by, bz = _vec(b)
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by + ay * bw + az * bx - ax * bz,
        aw * bz + az * bw + ax * by - ay * bx,
    ])


def rotate_vector(q, v) -> np.ndarray:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    quat = _vec(q)
    vec = _vec(v)
    w, axis = quat[0], quat[1:]
    uv = np.cross(axis, vec)
    uuv = np.cross(axis, uv)
    return vec + (uv * w + uuv) * 2.0


def quat_to_mat4(q) -> np.ndarray:
    """4x4 rotation matrix for unit quaternion ``q``."""
    w, x, y, z = _vec(q)
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    return np.array([
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy), 0.0],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx), 0.0],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy), 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def euler_angles(q) -> np.ndarray:
    """(pitch, yaw, roll) in radians for quaternion ``q``."""
    w, x, y, z = _vec(q)

    pitch_y = 2.0 * (y * z + w * x)
    pitch_x = w * w - x * x - y * y + z * z
    if abs(pitch_x) <= _FLOAT_EPSILON and abs(pitch_y) <= _FLOAT_EPSILON:
        pitch = 2.0 * math.atan2(x, w)
    else:
        pitch = math.atan2(pitch_y, pitch_x)

    yaw = math.asin(min(1.0, max(-1.0, -2.0 * (x * z - w * y))))
    roll = math.atan2(2.0 * (x * y + w * z), w * w + x * x - y * y - z * z)
    return np.array([pitch, yaw, roll])


def translation_matrix(offset) -> np.ndarray:
    """4x4 matrix translating by ``offset``."""
    matrix = np.identity(4)
    matrix[:3, 3] = _vec(offset)
    return matrix


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _vec(eye)
    f = normalize(_vec(center) - eye)
    s = normalize(np.cross(f, _vec(up)))
    u = np.cross(s, f)
    matrix = np.identity(4)
    matrix[0, :3] = s
    matrix[1, :3] = u
    matrix[2, :3] = -f
    matrix[0, 3] = -np.dot(s, eye)
    matrix[1, 3] = -np.dot(u, eye)
    matrix[2, 3] = np.dot(f, eye)
    return matrix


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix