#!/usr/bin/env python3
# Mesh.py – VAO/VBO/EBO for one interleaved vertex buffer plus optional indices
import ctypes

import numpy as np
from OpenGL.GL import *

from shape_meshes.MeshDataTypes import AttributeLayout


class Mesh:
    """
    GPU copy of a mesh.  The attribute layout is captured by the VAO once at
    creation; ``upload`` replaces the buffer contents without touching it.
    """
    def __init__(self, vertices: np.ndarray, indices: np.ndarray,
                 layout: AttributeLayout, dynamic: bool = False):
        """
        vertices: flat float32 array, ``layout.stride`` bytes per vertex.
        indices:  flat uint32 array, may be empty for non-indexed meshes.
        dynamic:  allocate with GL_DYNAMIC_DRAW for per-frame replacement.
        """
        self.usage = GL_DYNAMIC_DRAW if dynamic else GL_STATIC_DRAW
        self.stride = layout.stride

        # ---- VAO -----------------------------------------------------------
        self.vao = glGenVertexArrays(1)
        glBindVertexArray(self.vao)

        # ---- VBO / EBO -----------------------------------------------------
        self.vbo = glGenBuffers(1)
        self.ebo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
        glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, self.ebo)   # recorded in the VAO

        # ---- attribute layout ---------------------------------------------
        for attr in layout.attributes:
            glEnableVertexAttribArray(attr.location)
            glVertexAttribPointer(attr.location, attr.size, GL_FLOAT, GL_FALSE,
                                  layout.stride, ctypes.c_void_p(attr.offset))

        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        self.vertex_count = 0
        self.index_count = 0
        self.upload(vertices, indices)

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """Replace vertex and index data (buffers are re-specified, not patched)."""
        vertices = np.ascontiguousarray(vertices, dtype=np.float32)
        indices = np.ascontiguousarray(indices, dtype=np.uint32)
        # typed buffers stay alive via self until the next upload
        self._vertices_ctypes = (ctypes.c_float * vertices.size).from_buffer(vertices)
        self._indices_ctypes = (ctypes.c_uint32 * indices.size).from_buffer(indices)
        self.vertex_count = vertices.nbytes // self.stride
        self.index_count = indices.size

        glBindVertexArray(self.vao)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
        glBufferData(GL_ARRAY_BUFFER, vertices.nbytes,
                     self._vertices_ctypes if vertices.size else None, self.usage)
        glBufferData(GL_ELEMENT_ARRAY_BUFFER, indices.nbytes,
                     self._indices_ctypes if indices.size else None, self.usage)
        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

    def draw_elements(self, mode: int, count: int, byte_offset: int = 0) -> None:
        """Indexed draw of ``count`` indices starting ``byte_offset`` into the EBO."""
        glBindVertexArray(self.vao)
        glDrawElements(mode, count, GL_UNSIGNED_INT, ctypes.c_void_p(byte_offset))
        glBindVertexArray(0)

    def draw_arrays(self, mode: int, first: int, count: int) -> None:
        glBindVertexArray(self.vao)
        glDrawArrays(mode, first, count)
        glBindVertexArray(0)

    def delete(self) -> None:
        if self.vao:
            glDeleteBuffers(2, [self.vbo, self.ebo])
            glDeleteVertexArrays(1, [self.vao])
            self.vao = 0

    def __del__(self):
        """Delete GL objects when the instance is garbage-collected."""
        try:
            self.delete()
        except Exception:
            pass
