"""Tests for the gallery's frame loop, run against stand-ins for the window and GL objects."""

import types

import numpy as np
import pytest
from PIL import Image

glfw = pytest.importorskip("glfw")

from shape_meshes.Examples import ShapeGallery  # noqa: E402
from shape_meshes.Rendering.Window import Window  # noqa: E402


class FakeWindow:
    """Window stand-in: records frames and presses a key on the first event poll."""

    def __init__(self, width, height, title, key=None):
        self.events = []
        self.key = key
        self.aspect = width / height
        self._closed = False
        self._key_callback = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.events.append("terminate")

    def should_close(self):
        return self._closed

    def close(self):
        self._closed = True

    def clear(self, *rgba):
        self.events.append("clear")

    def swap_buffers(self):
        self.events.append("swap")

    def poll_events(self):
        if self.key is not None and self._key_callback is not None:
            key, self.key = self.key, None
            self._key_callback(None, key, 0, glfw.PRESS, 0)

    def set_title(self, title):
        pass

    def set_key_callback(self, callback):
        self._key_callback = callback

    def get_mouse_pos(self):
        return 0.0, 0.0

    def is_mouse_button_pressed(self, button):
        return False

    def save_screenshot(self, path):
        self.events.append(f"screenshot:{path}")


class FakeShader:
    def __init__(self, *sources):
        pass

    def __getattr__(self, name):
        return lambda *args, **kwargs: None


class FakeTexture:
    @classmethod
    def from_array(cls, pixels):
        return cls()

    def bind(self, unit=0):
        pass


@pytest.fixture
def gallery(monkeypatch, backend):
    """Patch the gallery's GL collaborators; returns a callable running ``main`` with argv."""
    windows = []

    def run(*argv, key=None):
        def make_window(*args):
            window = FakeWindow(*args, key=key)
            windows.append(window)
            return window

        monkeypatch.setattr(ShapeGallery, "Window", make_window)
        monkeypatch.setattr(ShapeGallery, "GLBackend", lambda: backend)
        monkeypatch.setattr(ShapeGallery, "Shader", FakeShader)
        monkeypatch.setattr(ShapeGallery, "Texture2D", FakeTexture)
        monkeypatch.setattr(ShapeGallery, "GL", types.SimpleNamespace(
            glEnable=lambda cap: None, GL_DEPTH_TEST=0, GL_CULL_FACE=1))
        monkeypatch.setattr("sys.argv", ["shape-gallery", *argv])
        ShapeGallery.main()
        return windows[-1]

    return run


class TestScreenshot:
    """Tests for --screenshot on the different ways the loop can end."""

    def test_screenshot_after_escape(self, gallery, tmp_path):
        path = str(tmp_path / "shot.png")
        window = gallery("--screenshot", path, key=glfw.KEY_ESCAPE)
        assert window.events.count("swap") == 1
        assert window.events[-3:] == ["clear", f"screenshot:{path}", "terminate"]

    def test_screenshot_after_frame_limit(self, gallery, tmp_path):
        path = str(tmp_path / "shot.png")
        window = gallery("--frames", "3", "--screenshot", path)
        assert window.events.count("swap") == 3
        assert window.events[-2] == f"screenshot:{path}"

    def test_no_screenshot_unless_asked(self, gallery):
        window = gallery("--frames", "1")
        assert not [e for e in window.events if e.startswith("screenshot")]


class TestLoop:
    """Tests for loading and releasing meshes around the frame loop."""

    def test_every_shape_is_loaded_and_released(self, gallery, backend):
        gallery("--frames", "1", "--shape", "torus")
        created = backend.calls_named("create")
        deleted = backend.calls_named("delete")
        assert len(created) == len({load for load, _ in ShapeGallery.SHAPES.values()})
        assert sorted(h for _, h in deleted) == sorted(h for _, h, _ in created)


class TestWindowCapture:
    """Tests for writing the read-back frame to disk."""

    def test_save_screenshot_writes_rgb_png(self, tmp_path, recwarn):
        pixels = np.zeros((4, 6, 3), np.uint8)
        pixels[0, :, 0] = 255
        window = Window.__new__(Window)
        window.read_pixels = lambda: pixels
        path = tmp_path / "frame.png"
        window.save_screenshot(str(path))
        with Image.open(path) as img:
            assert img.mode == "RGB"
            assert img.size == (6, 4)
            assert img.getpixel((0, 0)) == (255, 0, 0)
        assert not [w for w in recwarn if issubclass(w.category, DeprecationWarning)]
