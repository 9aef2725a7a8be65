"""An application window tracking keys, cursor motion and close requests."""

from __future__ import annotations

from typing import Callable, Optional


def _default_key_names() -> dict[int, str]:
    from pyglet.window import key

    return {
        key.Q: "q", key.W: "w", key.A: "a", key.S: "s", key.D: "d",
        key.R: "r", key.LCTRL: "left_control",
    }


def _create_native(width: int, height: int, title: str):
    import pyglet

    config = pyglet.gl.Config(double_buffer=False, depth_size=24,
                              major_version=3, minor_version=3)
    try:
        return pyglet.window.Window(width=width, height=height, caption=title,
                                    config=config, vsync=False)
    except Exception as exc:
        raise RuntimeError("Couldn't create window") from exc


class Window:
    """Wraps a native window and keeps its input state.

    Cursor positions grow downwards on the y axis, from the top of the window.
    """

    def __init__(self, width: int, height: int, title: str, native=None,
                 key_names: Optional[dict[int, str]] = None):
        self.width = width
        self.height = height
        self.title = title
        self._native = native if native is not None else _create_native(width, height, title)
        self._key_names = key_names if key_names is not None else _default_key_names()
        self.pressed_keys: set[str] = set()
        self.cursor_position = (0.0, 0.0)
        self.cursor_listeners: list[Callable[[float, float], None]] = []
        self.raw_mouse_motion = True
        self._captured = False
        self._should_close = False
        self._native.push_handlers(
            on_key_press=self._on_key_press,
            on_key_release=self._on_key_release,
            on_mouse_motion=self._on_mouse_motion,
            on_close=self._on_close,
        )

    def _on_key_press(self, symbol, modifiers):
        name = self._key_names.get(symbol)
        if name is not None:
            self.pressed_keys.add(name)

    def _on_key_release(self, symbol, modifiers):
        name = self._key_names.get(symbol)
        if name is not None:
            self.pressed_keys.discard(name)

    def _on_mouse_motion(self, x, y, dx, dy):
        cx, cy = self.cursor_position
        self.cursor_position = (cx + dx, cy - dy)
        for listener in list(self.cursor_listeners):
            listener(*self.cursor_position)

    def _on_close(self):
        self._should_close = True
        return True

    @property
    def cursor_captured(self) -> bool:
        return self._captured

    @cursor_captured.setter
    def cursor_captured(self, captured: bool) -> None:
        self._captured = bool(captured)
        self._native.set_exclusive_mouse(self._captured)

    @property
    def should_close(self) -> bool:
        return self._should_close

    def set_should_close(self) -> None:
        self._should_close = True

    def poll_events(self) -> None:
        self._native.dispatch_events()

    def close(self) -> None:
        self._native.close()

    def __enter__(self) -> "Window":
        return self

    def __exit__(self, *exc) -> None:
        self.close()