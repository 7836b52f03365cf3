#!/usr/bin/env python3
# Topology.py – index patterns shared by every generator
"""
Triangle index emitters.  Every function works on vertex *index ranges* only and
returns a ``(T, 3)`` uint32 array; none of them knows which shape it is used for.

Rings are expected to run with increasing angle from +X toward +Z when the
caller talks about "up" and "down".
"""
import numpy as np


def _flip(tris: np.ndarray) -> np.ndarray:
    return tris[:, [0, 2, 1]]


def fan(center: int, ring_start: int, slices: int,
        wrap: bool = True, upward: bool = False) -> np.ndarray:
    """Disk fan ``center, ring[i], ring[i+1]`` for each slice.

    wrap=True closes the ring with ``(i+1) mod slices``; otherwise the ring must
    hold ``slices + 1`` vertices with the last one duplicating the first.
    ``upward`` reverses the winding so the cap faces +Y.
    """
    i = np.arange(slices, dtype=np.int64)
    nxt = (i + 1) % slices if wrap else i + 1
    tris = np.empty((slices, 3), dtype=np.int64)
    tris[:, 0] = center
    tris[:, 1] = ring_start + i
    tris[:, 2] = ring_start + nxt
    if upward:
        tris = _flip(tris)
    return tris.astype(np.uint32)


def grid(row_cells: int, col_cells: int, start: int = 0,
         wrap: bool = False, flip: bool = False) -> np.ndarray:
    """Rectangular grid of ``row_cells × col_cells`` quads.

    Each cell emits ``(r,c), (r+1,c), (r,c+1)`` and ``(r,c+1), (r+1,c), (r+1,c+1)``.
    A row holds ``col_cells + 1`` vertices, or ``col_cells`` when ``wrap`` closes
    the last column onto the first.
    """
    stride = col_cells if wrap else col_cells + 1
    r, c = np.meshgrid(np.arange(row_cells, dtype=np.int64),
                       np.arange(col_cells, dtype=np.int64), indexing="ij")
    r = r.reshape(-1)
    c = c.reshape(-1)
    cn = (c + 1) % col_cells if wrap else c + 1

    v00 = start + r * stride + c
    v10 = start + (r + 1) * stride + c
    v01 = start + r * stride + cn
    v11 = start + (r + 1) * stride + cn

    tris = np.empty((2 * r.size, 3), dtype=np.int64)
    tris[0::2] = np.stack((v00, v10, v01), axis=1)
    tris[1::2] = np.stack((v01, v10, v11), axis=1)
    if flip:
        tris = _flip(tris)
    return tris.astype(np.uint32)


def ring_wall(a_start: int, b_start: int, slices: int,
              wrap: bool = False, flip: bool = False) -> np.ndarray:
    """Lateral wall between ring ``a`` and ring ``b``.

    Same two triangles per column as :func:`grid` for a single row of cells,
    except the rings may live anywhere in the vertex buffer.
    """
    c = np.arange(slices, dtype=np.int64)
    cn = (c + 1) % slices if wrap else c + 1

    tris = np.empty((2 * slices, 3), dtype=np.int64)
    tris[0::2] = np.stack((a_start + c, b_start + c, a_start + cn), axis=1)
    tris[1::2] = np.stack((a_start + cn, b_start + c, b_start + cn), axis=1)
    if flip:
        tris = _flip(tris)
    return tris.astype(np.uint32)


def seam_stitch(last_ring_start: int, first_ring_start: int, count: int,
                flip: bool = False) -> np.ndarray:
    """Join the closing ring of one substructure to the opening ring of another.

    Both rings hold ``count`` vertices and are closed; they are distinct vertices
    even where their positions coincide.
    """
    return ring_wall(last_ring_start, first_ring_start, count, wrap=True, flip=flip)
