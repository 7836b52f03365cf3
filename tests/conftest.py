"""Pytest configuration for shape_meshes tests.

Provides a render backend that records every call instead of touching a GL
context, plus geometry helpers shared by the generator tests.
"""

import numpy as np
import pytest


class RecordingBackend:
    """In-memory stand-in for GLBackend; handles are consecutive ints."""

    def __init__(self):
        self.calls = []
        self.buffers = {}
        self.layouts = {}
        self.wireframe = False
        self._next_handle = 1

    def create_mesh(self, vertices, indices, layout, dynamic=False):
        handle = self._next_handle
        self._next_handle += 1
        self.buffers[handle] = (np.array(vertices), np.array(indices))
        self.layouts[handle] = layout
        self.calls.append(("create", handle, dynamic))
        return handle

    def update_mesh(self, handle, vertices, indices):
        self.buffers[handle] = (np.array(vertices), np.array(indices))
        self.calls.append(("update", handle))

    def draw_elements(self, handle, topology, count, byte_offset=0):
        self.calls.append(("elements", handle, topology, count, byte_offset))

    def draw_arrays(self, handle, topology, first, count):
        self.calls.append(("arrays", handle, topology, first, count))

    def set_wireframe(self, enabled):
        self.wireframe = enabled
        self.calls.append(("wireframe", enabled))

    def delete_mesh(self, handle):
        self.buffers.pop(handle, None)
        self.calls.append(("delete", handle))

    # ------------------------------------------------------------ inspection
    def draws(self):
        return [c for c in self.calls if c[0] in ("elements", "arrays")]

    def calls_named(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def backend():
    """Fresh recording backend for each test."""
    return RecordingBackend()


def _face_normals(mesh):
    tris = mesh.triangles().astype(np.int64)
    p = mesh.positions.astype(np.float64)
    cross = np.cross(p[tris[:, 1]] - p[tris[:, 0]], p[tris[:, 2]] - p[tris[:, 0]])
    return tris, p, cross


@pytest.fixture
def winding_agrees():
    """Check that every non-degenerate triangle faces the way its vertex normals point."""

    def check(mesh, eps=1e-10):
        tris, _, cross = _face_normals(mesh)
        n = mesh.normals.astype(np.float64)
        corner_normals = n[tris[:, 0]] + n[tris[:, 1]] + n[tris[:, 2]]
        solid = np.linalg.norm(cross, axis=1) > eps
        dots = np.einsum("ij,ij->i", cross[solid], corner_normals[solid])
        return bool(np.all(dots > 0.0))

    return check


@pytest.fixture
def faces_outward():
    """Check that every non-degenerate triangle of a convex mesh faces away from its centre."""

    def check(mesh, eps=1e-10):
        tris, p, cross = _face_normals(mesh)
        centre = p.mean(axis=0)
        face_centres = p[tris].mean(axis=1)
        solid = np.linalg.norm(cross, axis=1) > eps
        dots = np.einsum("ij,ij->i", cross[solid], face_centres[solid] - centre)
        return bool(np.all(dots > 0.0))

    return check
