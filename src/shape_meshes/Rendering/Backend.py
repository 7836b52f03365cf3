#!/usr/bin/env python3
# Backend.py – PyOpenGL implementation of the registry's render backend
import logging
from typing import Dict

import numpy as np
from OpenGL.GL import *

from shape_meshes.MeshDataTypes import AttributeLayout, Topology
from .Mesh import Mesh


class GLBackend:
    """RenderBackend on top of PyOpenGL; handles are VAO names."""

    def __init__(self):
        self._meshes: Dict[int, Mesh] = {}

    def _mesh(self, handle: int) -> Mesh:
        try:
            return self._meshes[handle]
        except KeyError:
            raise ValueError(f"Unknown mesh handle {handle}") from None

    def create_mesh(self, vertices: np.ndarray, indices: np.ndarray,
                    layout: AttributeLayout, dynamic: bool = False) -> int:
        mesh = Mesh(vertices, indices, layout, dynamic)
        handle = int(mesh.vao)
        self._meshes[handle] = mesh
        logging.debug("GL mesh %d: %d vertices, %d indices (%s)", handle,
                      mesh.vertex_count, mesh.index_count, "dynamic" if dynamic else "static")
        return handle

    def update_mesh(self, handle: int, vertices: np.ndarray, indices: np.ndarray) -> None:
        self._mesh(handle).upload(vertices, indices)

    def draw_elements(self, handle: int, topology: Topology, count: int, byte_offset: int = 0) -> None:
        self._mesh(handle).draw_elements(int(topology), count, byte_offset)

    def draw_arrays(self, handle: int, topology: Topology, first: int, count: int) -> None:
        self._mesh(handle).draw_arrays(int(topology), first, count)

    def set_wireframe(self, enabled: bool) -> None:
        glPolygonMode(GL_FRONT_AND_BACK, GL_LINE if enabled else GL_FILL)

    def delete_mesh(self, handle: int) -> None:
        mesh = self._meshes.pop(handle, None)
        if mesh is not None:
            mesh.delete()
