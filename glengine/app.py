"""The application: window, input, scene and UI run in a fixed-step loop."""

from __future__ import annotations

import time
from typing import Callable, Optional

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080


def consume_steps(accumulator: float, dt: float) -> tuple[int, float]:
    """Number of whole ``dt`` steps in ``accumulator`` and what remains."""
    if dt <= 0:
        raise ValueError("dt must be positive")
    steps = 0
    while accumulator >= dt:
        accumulator -= dt
        steps += 1
    return steps, accumulator


class _PygletAppGL:
    """Frame-level pipeline calls through pyglet's OpenGL bindings."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl

    def setup(self, width: int, height: int) -> None:
        gl = self._gl
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glClearColor(0.0, 0.0, 0.0, 1.0)
        gl.glViewport(0, 0, width, height)

    def clear(self) -> None:
        gl = self._gl
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

    def finish(self) -> None:
        self._gl.glFinish()


class App:
    """Wires the parts together; ``run`` drives the main loop."""

    def __init__(self, window=None, scene=None, input=None, ui=None, gl=None,
                 clock: Callable[[], float] = time.perf_counter,
                 desired_frame_rate: float = 60.0,
                 width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT):
        if window is None:
            from .window import Window

            window = Window(width, height, "App")
        if scene is None:
            from .scene import Scene

            scene = Scene()
        if input is None:
            from .input import Input

            input = Input()
        if ui is None:
            from .ui import UI

            ui = UI()
        self.window = window
        self.scene = scene
        self.input = input
        self.ui = ui
        self.gl = gl if gl is not None else _PygletAppGL()
        self.clock = clock
        self.desired_frame_rate = desired_frame_rate
        self.width = width
        self.height = height
        self.render_time = 0.0

        self.gl.setup(width, height)
        self.input.setup(self.window)
        self.scene.setup()
        self.ui.init(self.window)

    def __enter__(self) -> "App":
        return self

    def __exit__(self, *exc) -> None:
        self.ui.shutdown()
        self.window.close()

    def run(self) -> None:
        """Step the simulation at a fixed rate and render once per frame."""
        dt = 1.0 / self.desired_frame_rate
        current = self.clock()
        accumulator = 0.0
        while not self.window.should_close:
            now = self.clock()
            accumulator += now - current
            current = now

            steps, accumulator = consume_steps(accumulator, dt)
            for _ in range(steps):
                self.input.process_input(dt)
                self.scene.update(dt)

            start = time.perf_counter()
            self.render()
            self.render_time = time.perf_counter() - start

    def render(self) -> None:
        self.gl.clear()
        self.ui.begin_frame()
        self.scene.render(self.width, self.height)
        ms = self.render_time * 1000.0
        fps = 1000.0 / ms if ms > 0 else float("inf")
        self.ui.text("Frame time", f"Render time: {ms:f}   FPS: {fps:f}")
        self.ui.end_frame()
        self.gl.finish()


def main(argv=None) -> int:
    with App() as app:
        app.run()
    return 0