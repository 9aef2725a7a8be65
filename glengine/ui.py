"""Immediate-mode text panels drawn over the scene each frame."""

from __future__ import annotations

from typing import Callable, Optional

Panels = dict[str, list[str]]


class _PygletPanelRenderer:
    """Draws panels as text labels from the top-left corner down."""

    def __init__(self) -> None:
        import pyglet

        self._pyglet = pyglet

    def __call__(self, panels: Panels, window) -> None:
        batch = self._pyglet.graphics.Batch()
        labels = []
        y = window.height - 20
        for title, lines in panels.items():
            for text in (f"[{title}]", *lines):
                labels.append(self._pyglet.text.Label(text, x=10, y=y, batch=batch))
                y -= 18
        batch.draw()


class UI:
    """Collects text per panel between begin_frame and end_frame."""

    def __init__(self, renderer: Optional[Callable[[Panels, object], None]] = None):
        self._renderer = renderer
        self.window = None
        self._panels: Optional[Panels] = None

    def init(self, window) -> None:
        self.window = window
        if self._renderer is None:
            self._renderer = _PygletPanelRenderer()

    def shutdown(self) -> None:
        self.window = None
        self._panels = None

    def begin_frame(self) -> None:
        if self.window is None:
            raise RuntimeError("UI is not initialised")
        self._panels = {}

    def text(self, title: str, line: str) -> None:
        if self._panels is None:
            raise RuntimeError("text outside of a frame")
        self._panels.setdefault(title, []).append(line)

    def end_frame(self) -> Panels:
        """Draw the collected panels and return them."""
        if self._panels is None:
            raise RuntimeError("end_frame without begin_frame")
        panels, self._panels = self._panels, None
        self._renderer(panels, self.window)
        return panels

    def _render_gui(self) -> None:
        self.text("Hello", "world!")

    def frame(self, render_function: Callable[[], None]) -> Panels:
        """Run ``render_function`` inside a frame with the default panel."""
        self.begin_frame()
        render_function()
        self._render_gui()
        return self.end_frame()