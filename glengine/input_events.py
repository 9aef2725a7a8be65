"""Events emitted by the input system for character control."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .events import Event


class WalkDirections(enum.IntFlag):
    FORWARD = 1
    BACKWARD = 2
    STRAFE_LEFT = 4
    STRAFE_RIGHT = 8


@dataclass
class CharacterWalkEvent(Event):
    speed: float = 0.0
    dt: float = 0.0
    direction_flags: WalkDirections = WalkDirections(0)


@dataclass
class CharacterLookEvent(Event):
    look_direction: tuple[float, float] = (0.0, 0.0)


@dataclass
class CharacterResetPositionEvent(Event):
    position: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0), init=False)


@dataclass
class CharacterResetOrientationEvent(Event):
    orientation: tuple[float, float, float, float] = field(default=(1.0, 0.0, 0.0, 0.0), init=False)