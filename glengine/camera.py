"""A free-flying camera driven by walking and mouse look."""

from __future__ import annotations

import enum
import math

import numpy as np

from .glmath import angle_axis, euler_angles, look_at, normalize, quat_multiply, rotate_vector
from .helper import format_vector


class WalkDirection(enum.Enum):
    FORWARD = enum.auto()
    BACKWARD = enum.auto()
    STRAFE_LEFT = enum.auto()
    STRAFE_RIGHT = enum.auto()
    NO_WALK = enum.auto()


def _inverse(q: np.ndarray) -> np.ndarray:
    return q * np.array([1.0, -1.0, -1.0, -1.0]) / float(np.dot(q, q))


class Camera:
    """Camera with a position and forward/right/up basis vectors."""

    def __init__(self, starting_position, looking_at):
        self.mouselook_sensitivity = 0.5
        self.movement_speed = 0.1
        self.pitch = 0.0
        self.yaw = 0.0
        self.roll = 0.0
        self.position = np.array(starting_position, dtype=float)
        self.forward = normalize(np.asarray(looking_at, dtype=float) - self.position)
        self.up = np.array([0.0, 1.0, 0.0])
        self.right = normalize(np.cross(self.up, self.forward))

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.position + self.forward, self.up)

    def walk(self, direction: WalkDirection) -> None:
        """Step along the camera axes by ``movement_speed``."""
        vectors = {
            WalkDirection.FORWARD: self.forward,
            WalkDirection.BACKWARD: -self.forward,
            WalkDirection.STRAFE_LEFT: -self.right,
            WalkDirection.STRAFE_RIGHT: self.right,
        }
        walk_vector = vectors.get(direction, np.zeros(3))
        self.position = self.position + walk_vector * self.movement_speed

    def mouse_look(self, mouse_delta) -> None:
        dx, dy = mouse_delta
        rotation = self.update_vectors_using_quaternions(dx, dy)
        self.yaw += float(rotation[1])
        self.pitch += float(rotation[0])

    def update_vectors_from_orientation_angles(self) -> None:
        """Rebuild the basis from ``yaw`` and ``pitch`` (degrees) and print it."""
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        self.forward = normalize((
            math.sin(yaw),
            math.sin(pitch),
            -math.cos(pitch) * math.cos(yaw),
        ))
        self.right = np.cross(self.forward, self.up)
        print(self.diagnostics())

    def update_vectors_using_quaternions(self, mouse_delta_x: float, mouse_delta_y: float) -> np.ndarray:
        """Rotate the basis by a mouse movement; return the rotation's Euler angles."""
        yaw_rotation = angle_axis(math.radians(mouse_delta_x * self.mouselook_sensitivity), self.up)
        pitch_rotation = angle_axis(math.radians(mouse_delta_y * self.mouselook_sensitivity), self.right)

        rotated = rotate_vector(_inverse(yaw_rotation), self.forward)
        self.forward = rotate_vector(_inverse(pitch_rotation), rotated)
        self.right = np.cross(self.forward, self.up)

        return euler_angles(quat_multiply(yaw_rotation, pitch_rotation))

    def diagnostics(self) -> str:
        separator = "===================="
        return "\n".join([
            separator,
            f"Yaw: {self.yaw:f} --- Pitch: {self.pitch:f}",
            format_vector("Position: ", self.position),
            format_vector("Forward vector: ", self.forward),
            format_vector("Right vector: ", self.right),
            format_vector("Up vector: ", self.up),
            separator,
        ])