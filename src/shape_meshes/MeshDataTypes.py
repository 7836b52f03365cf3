# MeshDataTypes.py

import ctypes
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

# === Vertex layout ===
FLOATS_PER_VERTEX = 8  # position(3) + normal(3) + uv(2)

class Vertex(ctypes.Structure):
    _fields_ = [
        ("position", ctypes.c_float * 3),
        ("normal",   ctypes.c_float * 3),
        ("uv",       ctypes.c_float * 2),
    ]

VERTEX_STRIDE = ctypes.sizeof(Vertex)          # 32 bytes
INDEX_SIZE    = ctypes.sizeof(ctypes.c_uint32)


@dataclass(frozen=True)
class VertexAttribute:
    location: int
    size: int       # float components
    offset: int     # bytes from the start of a vertex


@dataclass(frozen=True)
class AttributeLayout:
    """Vertex attribute pointers shared by every mesh of a registry."""
    stride: int
    attributes: Tuple[VertexAttribute, ...]

    @classmethod
    def default(cls) -> "AttributeLayout":
        """position → 0, normal → 1, uv → 2, read straight off :class:`Vertex`."""
        return cls(VERTEX_STRIDE, (
            VertexAttribute(0, 3, Vertex.position.offset),
            VertexAttribute(1, 3, Vertex.normal.offset),
            VertexAttribute(2, 2, Vertex.uv.offset),
        ))


# === Clamp limits ===
MIN_SEGMENTS = 3
MIN_EXTENT   = 0.01
MAX_FLATTEN  = 0.95

# === Enums ===
class Topology(IntEnum):
    Triangles     = 0x0004  # GL_TRIANGLES
    TriangleStrip = 0x0005  # GL_TRIANGLE_STRIP
    TriangleFan   = 0x0006  # GL_TRIANGLE_FAN

class NormalPolicy(IntEnum):
    Analytic      = 0
    AreaWeighted  = 1
    FrameRelative = 2
    Approximate   = 3

class BoxSide(IntEnum):
    Back   = 0
    Bottom = 1
    Left   = 2
    Right  = 3
    Top    = 4
    Front  = 5

# === Parameter clamping ===
def clamp_segments(count: int, minimum: int = MIN_SEGMENTS) -> int:
    return max(int(count), minimum)

def clamp_extent(value: float, minimum: float = MIN_EXTENT) -> float:
    value = float(value)
    return value if value > 0.0 else minimum

def clamp_sweep(degrees: float) -> float:
    return min(max(float(degrees), 0.0), 360.0)

def clamp_flatten(value: float) -> float:
    return min(max(float(value), 0.0), MAX_FLATTEN)


@dataclass(frozen=True)
class SubRange:
    """Named window into a mesh: indices when the mesh is indexed, vertices otherwise."""
    name: str
    offset: int
    count: int

    @property
    def byte_offset(self) -> int:
        return self.offset * INDEX_SIZE


@dataclass(eq=False)
class MeshBuffer:
    """
    Host-side mesh produced by a generator.

    vertices : (N, 8) float32, interleaved position / normal / uv
    indices  : (M,) uint32, empty for non-indexed shapes
    topology : primitive type used when drawing
    ranges   : named sub-ranges for partial draws
    metadata : segment counts and the normal policy the generator used
    """
    vertices: np.ndarray
    indices: np.ndarray = field(default_factory=lambda: np.zeros(0, np.uint32))
    topology: Topology = Topology.Triangles
    ranges: Dict[str, SubRange] = field(default_factory=dict)
    metadata: Dict[str, object] = field(default_factory=dict)

    def __post_init__(self):
        self.vertices = np.ascontiguousarray(self.vertices, dtype=np.float32).reshape(-1, FLOATS_PER_VERTEX)
        self.indices = np.ascontiguousarray(self.indices, dtype=np.uint32).reshape(-1)

    # --------------------------------------------------------------------- counts
    @property
    def vertex_count(self) -> int:
        return self.vertices.shape[0]

    @property
    def index_count(self) -> int:
        return self.indices.size

    @property
    def is_indexed(self) -> bool:
        return self.indices.size > 0

    @property
    def element_count(self) -> int:
        """Number of elements a full draw covers."""
        return self.index_count if self.is_indexed else self.vertex_count

    # --------------------------------------------------------------------- attribute views
    @property
    def positions(self) -> np.ndarray:
        return self.vertices[:, 0:3]

    @property
    def normals(self) -> np.ndarray:
        return self.vertices[:, 3:6]

    @property
    def uvs(self) -> np.ndarray:
        return self.vertices[:, 6:8]

    def interleaved(self) -> np.ndarray:
        """Flat float32 array ready for upload."""
        return self.vertices.reshape(-1)

    def triangles(self) -> np.ndarray:
        """(T, 3) vertex indices of a triangle-list mesh."""
        if self.topology != Topology.Triangles:
            raise ValueError(f"triangles() needs a triangle list, mesh uses {self.topology.name}")
        if self.is_indexed:
            return self.indices.reshape(-1, 3)
        return np.arange(self.vertex_count, dtype=np.uint32).reshape(-1, 3)

    def sub_range(self, name: str) -> SubRange:
        try:
            return self.ranges[name]
        except KeyError:
            known = ", ".join(sorted(self.ranges)) or "<none>"
            raise ValueError(f"Mesh has no sub-range '{name}' (known: {known})") from None

    def validate(self) -> "MeshBuffer":
        if self.is_indexed and int(self.indices.max()) >= self.vertex_count:
            raise ValueError(
                f"Index {int(self.indices.max())} out of range for {self.vertex_count} vertices")
        for r in self.ranges.values():
            if r.offset < 0 or r.offset + r.count > self.element_count:
                raise ValueError(f"Sub-range '{r.name}' exceeds {self.element_count} elements")
        return self


class MeshBuilder:
    """Append-only accumulator used by the generators."""

    def __init__(self):
        self._blocks: List[np.ndarray] = []
        self._tris: List[np.ndarray] = []
        self._vertex_count = 0
        self._index_count = 0
        self._ranges: Dict[str, SubRange] = {}

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    def add_vertices(self, positions, normals, uvs) -> int:
        """Append a block of vertices and return the index of its first vertex."""
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        normals = np.asarray(normals, dtype=np.float64).reshape(-1, 3)
        uvs = np.asarray(uvs, dtype=np.float64).reshape(-1, 2)
        if not (len(positions) == len(normals) == len(uvs)):
            raise ValueError("positions, normals and uvs must have the same length")
        base = self._vertex_count
        self._blocks.append(np.hstack((positions, normals, uvs)))
        self._vertex_count += len(positions)
        return base

    def add_triangles(self, triangles, name: Optional[str] = None) -> SubRange:
        tris = np.asarray(triangles, dtype=np.uint32).reshape(-1, 3)
        sub = SubRange(name or "", self._index_count, tris.size)
        self._tris.append(tris)
        self._index_count += tris.size
        if name:
            self._ranges[name] = sub
        return sub

    def add_range(self, name: str, offset: int, count: int) -> SubRange:
        sub = SubRange(name, offset, count)
        self._ranges[name] = sub
        return sub

    def build(self, topology: Topology = Topology.Triangles, **metadata) -> MeshBuffer:
        vertices = (np.vstack(self._blocks) if self._blocks
                    else np.zeros((0, FLOATS_PER_VERTEX)))
        indices = (np.concatenate([t.reshape(-1) for t in self._tris]) if self._tris
                   else np.zeros(0, np.uint32))
        return MeshBuffer(vertices, indices, topology, dict(self._ranges), metadata)


def ring_angles(slices: int, closed: bool, start: float = 0.0, sweep: float = 2.0 * math.pi) -> np.ndarray:
    """Angles of a ring; an open ring carries one extra sample at the end of the sweep."""
    count = slices if closed else slices + 1
    return start + np.arange(count, dtype=np.float64) * (sweep / slices)


def close_seam(grid: np.ndarray) -> np.ndarray:
    """Make the last column of a (rows, cols, k) grid an exact copy of the first."""
    grid[..., -1, :] = grid[..., 0, :]
    return grid
