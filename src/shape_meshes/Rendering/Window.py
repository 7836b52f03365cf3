#!/usr/bin/env python3
# Window.py – GLFW window and GL context for previewing shapes
import logging
import sys
from typing import Callable, Optional, Tuple

import glfw
import numpy as np
from OpenGL.GL import *
from PIL import Image


class Window:
    def __init__(self, width: int, height: int, title: str,
                 gl_major: int = 3, gl_minor: int = 3, core_profile: bool = True,
                 visible: bool = True):
        if sys.platform == "darwin":
            if (gl_major, gl_minor) > (4, 1):
                gl_major, gl_minor = 4, 1

        if not glfw.init():
            raise RuntimeError("Failed to initialize GLFW")

        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, gl_major)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, gl_minor)
        if core_profile:
            glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        if sys.platform == "darwin":
            glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)

        glfw.window_hint(glfw.DOUBLEBUFFER, glfw.TRUE)
        glfw.window_hint(glfw.VISIBLE, glfw.TRUE if visible else glfw.FALSE)

        self._width = width
        self._height = height
        self._window = glfw.create_window(width, height, title, None, None)
        if not self._window:
            glfw.terminate()
            raise RuntimeError("Failed to create GLFW window")

        glfw.make_context_current(self._window)
        glfw.swap_interval(1)  # v-sync

        logging.info("OpenGL : %s", glGetString(GL_VERSION).decode())
        logging.info("GLSL   : %s", glGetString(GL_SHADING_LANGUAGE_VERSION).decode())

        def _resize_callback(window, w, h):
            self._width, self._height = w, h
            glViewport(0, 0, w, h)
        glfw.set_framebuffer_size_callback(self._window, _resize_callback)

    @property
    def aspect(self) -> float:
        w, h = self.framebuffer_size()
        return w / h if h else 1.0

    def should_close(self) -> bool:
        return glfw.window_should_close(self._window)

    def close(self) -> None:
        glfw.set_window_should_close(self._window, True)

    def swap_buffers(self) -> None:
        glfw.swap_buffers(self._window)

    def poll_events(self) -> None:
        glfw.poll_events()

    def clear(self, r: float = 0.0, g: float = 0.0, b: float = 0.0, a: float = 1.0) -> None:
        glClearColor(r, g, b, a)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

    def framebuffer_size(self) -> Tuple[int, int]:
        return glfw.get_framebuffer_size(self._window)

    def set_title(self, title: str) -> None:
        glfw.set_window_title(self._window, title)

    # ===== Input =====
    def set_key_callback(self, callback: Callable) -> None:
        glfw.set_key_callback(self._window, callback)

    def get_mouse_pos(self) -> Tuple[float, float]:
        return glfw.get_cursor_pos(self._window)

    def is_mouse_button_pressed(self, button: int) -> bool:
        return glfw.get_mouse_button(self._window, button) == glfw.PRESS

    # ===== Capture =====
    def read_pixels(self) -> np.ndarray:
        """Back buffer as an (h, w, 3) uint8 array, top row first."""
        w, h = self.framebuffer_size()
        glPixelStorei(GL_PACK_ALIGNMENT, 1)
        data = glReadPixels(0, 0, w, h, GL_RGB, GL_UNSIGNED_BYTE)
        return np.flipud(np.frombuffer(data, dtype=np.uint8).reshape(h, w, 3))

    def save_screenshot(self, path: str) -> None:
        Image.fromarray(self.read_pixels()).save(path)
        logging.info("Screenshot written to %s", path)

    # ===== Cleanup =====
    def terminate(self) -> None:
        if self._window:
            glfw.destroy_window(self._window)
            self._window = None
        glfw.terminate()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.terminate()
