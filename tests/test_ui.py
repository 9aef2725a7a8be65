import pytest

from glengine.ui import UI


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, panels, window):
        self.calls.append((panels, window))


def make():
    recorder = Recorder()
    ui = UI(renderer=recorder)
    ui.init("win")
    return ui, recorder


def test_frame_collects_text():
    ui, recorder = make()
    ui.begin_frame()
    ui.text("Frame time", "a")
    ui.text("Frame time", "b")
    panels = ui.end_frame()
    assert panels == {"Frame time": ["a", "b"]}
    assert recorder.calls == [(panels, "win")]


def test_frame_runs_function_and_default_panel():
    ui, _ = make()
    panels = ui.frame(lambda: ui.text("Scene", "x"))
    assert panels == {"Scene": ["x"], "Hello": ["world!"]}


def test_text_outside_frame_raises():
    ui, _ = make()
    with pytest.raises(RuntimeError):
        ui.text("a", "b")
    with pytest.raises(RuntimeError):
        ui.end_frame()


def test_shutdown_requires_init_again():
    ui, _ = make()
    ui.shutdown()
    with pytest.raises(RuntimeError):
        ui.begin_frame()