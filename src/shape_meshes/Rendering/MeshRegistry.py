#!/usr/bin/env python3
# MeshRegistry.py – one GPU handle per named shape, static or regenerated per draw
"""
The registry owns every mesh handle of one render context.

* ``load``     – upload a generated :class:`MeshBuffer` once (``StaticMesh``)
* ``allocate`` – reserve one persistent handle that ``draw_dynamic`` refills
                 on every call (``DynamicMesh``)
* ``draw``     – draw a whole mesh or one of its named sub-ranges

The attribute layout is a value given at construction and handed to the
backend with every buffer it creates.  Nothing here is thread-safe; call it
from the thread owning the GL context.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional, Protocol, Union

import numpy as np

from shape_meshes.MeshDataTypes import (INDEX_SIZE, AttributeLayout, MeshBuffer, SubRange,
                                        Topology)


class MeshNotLoadedError(RuntimeError):
    """A draw was requested for a mesh that was never loaded or generated."""


class RenderBackend(Protocol):
    """Graphics API surface the registry drives; handles are opaque ints."""

    def create_mesh(self, vertices: np.ndarray, indices: np.ndarray,
                    layout: AttributeLayout, dynamic: bool = False) -> int: ...

    def update_mesh(self, handle: int, vertices: np.ndarray, indices: np.ndarray) -> None: ...

    def draw_elements(self, handle: int, topology: Topology, count: int, byte_offset: int = 0) -> None: ...

    def draw_arrays(self, handle: int, topology: Topology, first: int, count: int) -> None: ...

    def set_wireframe(self, enabled: bool) -> None: ...

    def delete_mesh(self, handle: int) -> None: ...


@dataclass
class StaticMesh:
    handle: int
    vertex_count: int
    index_count: int
    topology: Topology = Topology.Triangles
    ranges: Dict[str, SubRange] = field(default_factory=dict)
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def element_count(self) -> int:
        return self.index_count if self.index_count else self.vertex_count

    def describe(self, buffer: MeshBuffer) -> None:
        self.vertex_count = buffer.vertex_count
        self.index_count = buffer.index_count
        self.topology = buffer.topology
        self.ranges = dict(buffer.ranges)
        self.metadata = dict(buffer.metadata)


@dataclass
class DynamicMesh(StaticMesh):
    """Persistent handle whose contents are rebuilt by ``regenerate`` on each draw."""
    regenerate: Optional[Callable[..., MeshBuffer]] = None

    @property
    def filled(self) -> bool:
        return self.vertex_count > 0


MeshHandle = Union[StaticMesh, DynamicMesh]


class MeshRegistry:
    def __init__(self, backend: RenderBackend, layout: Optional[AttributeLayout] = None):
        self.backend = backend
        self.layout = layout if layout is not None else AttributeLayout.default()
        self._meshes: Dict[str, MeshHandle] = {}

    # --------------------------------------------------------------------- lookup
    def __contains__(self, name: str) -> bool:
        return name in self._meshes

    def __len__(self) -> int:
        return len(self._meshes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._meshes)

    def get(self, name: str) -> MeshHandle:
        try:
            return self._meshes[name]
        except KeyError:
            raise MeshNotLoadedError(f"Mesh '{name}' has not been loaded") from None

    # --------------------------------------------------------------------- static
    def load(self, name: str, buffer: MeshBuffer) -> StaticMesh:
        """Upload ``buffer`` once; a mesh of the same name is released after the upload succeeds."""
        buffer.validate()
        handle = self.backend.create_mesh(buffer.interleaved(), buffer.indices, self.layout, dynamic=False)
        self.release(name)
        entry = StaticMesh(handle, 0, 0)
        entry.describe(buffer)
        self._meshes[name] = entry
        logging.debug("loaded %s: %d vertices, %d indices", name, entry.vertex_count, entry.index_count)
        return entry

    # --------------------------------------------------------------------- dynamic
    def allocate(self, name: str, regenerate: Callable[..., MeshBuffer]) -> DynamicMesh:
        """Reserve the persistent handle of a per-draw-regenerated mesh.

        Allocating an existing dynamic mesh keeps its handle and swaps the
        regenerate function.
        """
        entry = self._meshes.get(name)
        if isinstance(entry, DynamicMesh):
            entry.regenerate = regenerate
            return entry
        handle = self.backend.create_mesh(np.zeros(0, np.float32), np.zeros(0, np.uint32),
                                          self.layout, dynamic=True)
        self.release(name)
        entry = DynamicMesh(handle, 0, 0, regenerate=regenerate)
        self._meshes[name] = entry
        logging.debug("allocated dynamic mesh %s", name)
        return entry

    def draw_dynamic(self, name: str, wireframe: bool = False, part: Optional[str] = None,
                     **params) -> MeshBuffer:
        """Regenerate ``name`` from ``params``, replace its buffers and draw it."""
        entry = self.get(name)
        if not isinstance(entry, DynamicMesh):
            raise TypeError(f"Mesh '{name}' is static; use draw()")
        buffer = entry.regenerate(**params).validate()
        self.backend.update_mesh(entry.handle, buffer.interleaved(), buffer.indices)
        entry.describe(buffer)
        self._issue(name, entry, part, wireframe)
        return buffer

    # --------------------------------------------------------------------- drawing
    def draw(self, name: str, part: Optional[str] = None, wireframe: bool = False) -> None:
        """Draw a loaded mesh, or only its sub-range ``part``.

        A dynamic mesh redraws whatever its last ``draw_dynamic`` produced.
        """
        entry = self.get(name)
        if isinstance(entry, DynamicMesh) and not entry.filled:
            raise MeshNotLoadedError(f"Dynamic mesh '{name}' has no geometry yet; call draw_dynamic first")
        self._issue(name, entry, part, wireframe)

    def draw_parts(self, name: str, parts, wireframe: bool = False) -> None:
        for part in parts:
            self.draw(name, part, wireframe)

    def _issue(self, name: str, entry: MeshHandle, part: Optional[str], wireframe: bool) -> None:
        if part is None:
            offset, count = 0, entry.element_count
        else:
            try:
                sub = entry.ranges[part]
            except KeyError:
                raise ValueError(f"Mesh '{name}' has no sub-range '{part}'") from None
            offset, count = sub.offset, sub.count

        if wireframe:
            self.backend.set_wireframe(True)
        try:
            if entry.index_count:
                self.backend.draw_elements(entry.handle, entry.topology, count, offset * INDEX_SIZE)
            else:
                self.backend.draw_arrays(entry.handle, entry.topology, offset, count)
        finally:
            if wireframe:
                self.backend.set_wireframe(False)

    # --------------------------------------------------------------------- lifetime
    def release(self, name: str) -> None:
        entry = self._meshes.pop(name, None)
        if entry is not None:
            self.backend.delete_mesh(entry.handle)
            logging.debug("released %s", name)

    def release_all(self) -> None:
        for name in list(self._meshes):
            self.release(name)
