"""Position and orientation of an object in 3D space."""

from __future__ import annotations

import numpy as np

from .glmath import (
    angle_axis,
    euler_angles,
    quat_from_euler,
    quat_multiply,
    quat_to_mat4,
    rotate_vector,
    translation_matrix,
)


def _vector_from_args(args) -> np.ndarray:
    if len(args) == 1:
        vector = np.asarray(args[0], dtype=float)
    elif len(args) == 3:
        vector = np.array(args, dtype=float)
    else:
        raise TypeError("expected a 3-vector or three components")
    if vector.shape != (3,):
        raise ValueError("translation must have three components")
    return vector


class Transform:
    """A position plus a quaternion orientation ``(w, x, y, z)``."""

    def __init__(self, position=(0.0, 0.0, 0.0), rotation_euler_angles=(0.0, 0.0, 0.0)):
        self.position = np.array(position, dtype=float)
        self.orientation = quat_from_euler(rotation_euler_angles)

    def __repr__(self) -> str:
        return f"Transform(position={self.position.tolist()}, orientation={self.orientation.tolist()})"

    def forward(self) -> np.ndarray:
        return rotate_vector(self.orientation, (0.0, 0.0, -1.0))

    def up(self) -> np.ndarray:
        return rotate_vector(self.orientation, (0.0, 1.0, 0.0))

    def right(self) -> np.ndarray:
        return rotate_vector(self.orientation, (1.0, 0.0, 0.0))

    def translate_local(self, *args) -> np.ndarray:
        """Move by a vector expressed in the object's own frame."""
        self.position = self.position + rotate_vector(self.orientation, _vector_from_args(args))
        return self.position.copy()

    def translate(self, *args) -> np.ndarray:
        """Move by a vector expressed in the parent frame."""
        self.position = self.position + _vector_from_args(args)
        return self.position.copy()

    def rotate_around_axis(self, angle_radians: float, axis) -> np.ndarray:
        """Apply a rotation about ``axis`` on top of the current orientation."""
        self.orientation = quat_multiply(angle_axis(angle_radians, axis), self.orientation)
        return self.orientation.copy()

    def model_matrix(self) -> np.ndarray:
        """Translation times rotation."""
        return translation_matrix(self.position) @ quat_to_mat4(self.orientation)

    def euler_degrees(self) -> np.ndarray:
        """(pitch, yaw, roll) of the orientation in degrees."""
        return np.degrees(euler_angles(self.orientation))

    def debug_lines(self) -> list[str]:
        """Human-readable position and orientation lines."""
        x, y, z = self.position
        pitch, yaw, roll = self.euler_degrees()
        return [
            f"x: {x:.6f} y: {y:.6f} z: {z:.6f}",
            f"Pitch: {pitch:3.6f} Yaw: {yaw:3.5f} Roll: {roll:3.5f}",
        ]