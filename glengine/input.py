"""Keyboard and mouse handling that turns device state into character events."""

from __future__ import annotations

from typing import Iterable, Optional

from . import events
from .events import Observable
from .input_events import (
    CharacterLookEvent,
    CharacterResetPositionEvent,
    CharacterWalkEvent,
    WalkDirections,
)

WALK_SPEED = 75.0

_WALK_KEYS = {
    "w": WalkDirections.FORWARD,
    "s": WalkDirections.BACKWARD,
    "a": WalkDirections.STRAFE_LEFT,
    "d": WalkDirections.STRAFE_RIGHT,
}


def walk_flags(pressed: Iterable[str]) -> WalkDirections:
    """Walk directions requested by the set of pressed key names."""
    flags = WalkDirections(0)
    for name in pressed:
        flags |= _WALK_KEYS.get(name, WalkDirections(0))
    return flags


class Input(Observable):
    """Reads a window's input state each step and emits character events."""

    def __init__(self, dispatcher: Optional[events.EventDispatcher] = None):
        self.dispatcher = dispatcher if dispatcher is not None else events.instance()
        self.window = None
        self.last_mouse_position = (0.0, 0.0)
        self.mouse_delta = (0.0, 0.0)
        self.debug_controls = False

    def _send(self, event_type, event) -> None:
        self.dispatcher.dispatch(event_type, event)

    def setup(self, window) -> None:
        """Capture the cursor and start following mouse motion on ``window``."""
        self.window = window
        self.debug_controls = False
        window.cursor_captured = True
        if not window.raw_mouse_motion:
            raise RuntimeError("Raw mouse input not supported")
        window.cursor_listeners.append(self.mouse_cursor)
        self.last_mouse_position = tuple(float(c) for c in window.cursor_position)
        self._send(CharacterLookEvent, CharacterLookEvent(look_direction=(0.0, 0.0)))

    def mouse_cursor(self, xpos: float, ypos: float) -> None:
        """Emit a look event for the cursor's movement since the last call."""
        if self.debug_controls:
            return
        last_x, last_y = self.last_mouse_position
        self.mouse_delta = (float(xpos) - last_x, float(ypos) - last_y)
        self.last_mouse_position = (float(xpos), float(ypos))
        self._send(CharacterLookEvent, CharacterLookEvent(look_direction=self.mouse_delta))

    def process_input(self, delta_time: float) -> None:
        """Poll the window and emit events for the keys held down."""
        window = self.window
        window.poll_events()
        pressed = set(window.pressed_keys)

        if "q" in pressed:
            window.set_should_close()

        if "left_control" in pressed:
            self.debug_controls = not self.debug_controls
            window.cursor_captured = not self.debug_controls

        if "r" in pressed:
            self._send(CharacterResetPositionEvent, CharacterResetPositionEvent())

        flags = walk_flags(pressed)
        if flags:
            self._send(CharacterWalkEvent, CharacterWalkEvent(
                speed=WALK_SPEED, dt=delta_time, direction_flags=flags))