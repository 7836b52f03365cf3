#!/usr/bin/env python3
# Shader.py

import logging

import numpy as np
from OpenGL.GL import *


class Shader:
    def __init__(self, vertex_src: str, fragment_src: str):
        self.id = glCreateProgram()
        vert = self._compile(vertex_src, GL_VERTEX_SHADER)
        frag = self._compile(fragment_src, GL_FRAGMENT_SHADER)
        glAttachShader(self.id, vert)
        glAttachShader(self.id, frag)
        glLinkProgram(self.id)
        if not glGetProgramiv(self.id, GL_LINK_STATUS):
            log = glGetProgramInfoLog(self.id).decode()
            glDeleteProgram(self.id)
            glDeleteShader(vert)
            glDeleteShader(frag)
            raise RuntimeError(f"Program link failed:\n{log}")
        glDeleteShader(vert)
        glDeleteShader(frag)

    # --------------------------------------------------------------------- internal
    def _compile(self, src: str, shader_type):
        shader = glCreateShader(shader_type)
        glShaderSource(shader, src)
        glCompileShader(shader)
        if not glGetShaderiv(shader, GL_COMPILE_STATUS):
            log = glGetShaderInfoLog(shader).decode()
            glDeleteShader(shader)
            numbered_src = '\n'.join(f"{i + 1:4d}: {line}"
                                     for i, line in enumerate(src.splitlines()))
            type_name = {GL_VERTEX_SHADER: "vertex",
                         GL_FRAGMENT_SHADER: "fragment"}.get(shader_type, str(shader_type))
            raise RuntimeError(f"{type_name.capitalize()} shader compile failed:\n"
                               f"{log}\nSource with line numbers:\n{numbered_src}")
        return shader

    def _location(self, name: str) -> int:
        loc = glGetUniformLocation(self.id, name)
        if loc == -1:
            # unused uniforms are stripped by the GLSL compiler
            logging.debug("Uniform '%s' not active in program %d", name, self.id)
        return loc

    # --------------------------------------------------------------------- program use
    def use(self):
        glUseProgram(self.id)

    def delete(self):
        if self.id:
            glDeleteProgram(self.id)
            self.id = 0

    # --------------------------------------------------------------------- setters
    def set_int(self, name: str, value: int):
        glUniform1i(self._location(name), int(value))

    def set_float(self, name: str, value: float):
        glUniform1f(self._location(name), float(value))

    def set_vec3(self, name: str, x: float, y: float, z: float):
        glUniform3f(self._location(name), x, y, z)

    def set_uniform_matrix(self, name: str, matrix, transpose: bool = True):
        """
        Upload a 4×4 float matrix uniform.

        NumPy matrices are row-major, OpenGL expects column-major, so
        ``transpose`` defaults to True.
        """
        mat = np.asarray(matrix, dtype=np.float32)
        if mat.shape != (4, 4):
            raise ValueError(f"Matrix uniform '{name}' must be 4×4")
        glUniformMatrix4fv(self._location(name), 1, GL_TRUE if transpose else GL_FALSE, mat)

    def set_uniform_matrix3(self, name: str, matrix3, transpose: bool = True):
        """Upload a 3×3 float matrix uniform (normal matrix)."""
        mat = np.asarray(matrix3, dtype=np.float32)
        if mat.shape != (3, 3):
            raise ValueError(f"Matrix uniform '{name}' must be 3×3")
        glUniformMatrix3fv(self._location(name), 1, GL_TRUE if transpose else GL_FALSE, mat)
