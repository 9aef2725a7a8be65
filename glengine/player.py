"""The player entity and its reactions to character input events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import events
from .ecs import Registry, SceneNode
from .input_events import (
    CharacterLookEvent,
    CharacterResetPositionEvent,
    CharacterWalkEvent,
    WalkDirections,
)
from .transform import Transform

PLAYER_TRANSFORM = "player_transform"
"""Registry key of the player's transform, kept apart from plain transforms."""

_FLOAT_EPSILON = 1.1920929e-07
_LOOK_SCALE = -0.001
_START_POSITION = (0.0, 1.65, 3.0)
_RESET_POSITION = (0.0, 0.0, 3.0)


@dataclass
class PlayerParams:
    mouse_look_sensitivity: float = 5.0
    movement_speed: float = 0.1
    pitch: float = 0.0
    yaw: float = 0.0


class Player:
    """Owns the player entity and moves it in response to input events."""

    def __init__(self, registry: Registry, dispatcher: Optional[events.EventDispatcher] = None):
        self.registry = registry
        self.dispatcher = dispatcher if dispatcher is not None else events.instance()
        self.entity: Optional[int] = None
        self.transform: Optional[Transform] = None
        self.params: Optional[PlayerParams] = None
        self.walk_vector = np.zeros(3)

    def setup(self, parent) -> int:
        """Create the player under ``parent`` and subscribe to input events."""
        self.entity = self.registry.create()
        self.params = self.registry.emplace(self.entity, PlayerParams())
        self.transform = self.registry.emplace(
            self.entity, Transform(_START_POSITION, (0.0, 0.0, 0.0)), PLAYER_TRANSFORM
        )
        self.registry.emplace(self.entity, SceneNode())
        SceneNode.add_child(self.registry, parent, self.entity)

        self.dispatcher.on(CharacterLookEvent, self.on_look)
        self.dispatcher.on(CharacterWalkEvent, self.on_walk)
        self.dispatcher.on(CharacterResetPositionEvent, self.on_reset_position)
        return self.entity

    def on_look(self, event: CharacterLookEvent) -> None:
        """Yaw around the world up axis, then pitch around the player's right axis."""
        dx, dy = event.look_direction
        scale = _LOOK_SCALE * self.params.mouse_look_sensitivity
        self.transform.rotate_around_axis(dx * scale, (0.0, 1.0, 0.0))
        self.transform.rotate_around_axis(dy * scale, self.transform.right())

    def on_walk(self, event: CharacterWalkEvent) -> None:
        """Move on the horizontal plane in the combined requested directions."""
        flags = WalkDirections(event.direction_flags)
        walk = np.zeros(3)
        if flags & WalkDirections.FORWARD:
            walk = walk + self.transform.forward()
        if flags & WalkDirections.BACKWARD:
            walk = walk - self.transform.forward()
        if flags & WalkDirections.STRAFE_LEFT:
            walk = walk - self.transform.right()
        if flags & WalkDirections.STRAFE_RIGHT:
            walk = walk + self.transform.right()

        length = float(np.linalg.norm(walk))
        if length > _FLOAT_EPSILON:
            walk = walk / length

        self.walk_vector = walk * (event.dt * event.speed)
        horizontal = np.array([self.walk_vector[0], 0.0, self.walk_vector[2]])
        self.transform.translate(horizontal * self.params.movement_speed)

    def on_reset_position(self, event: CharacterResetPositionEvent) -> None:
        self.transform.position = np.array(_RESET_POSITION)

    def debug_lines(self) -> list[str]:
        """Transform readout followed by the last walk vector and its length."""
        x, y, z = self.walk_vector
        return [
            *self.transform.debug_lines(),
            f"x: {x:.6f} y: {y:.6f} z: {z:.6f}",
            f"Magnitude: {float(np.linalg.norm(self.walk_vector)):.6f}",
        ]