#!/usr/bin/env python3
# Normals.py – normal strategies and frame propagation for swept tubes
"""
Three interchangeable ways to produce vertex normals:

* analytic      – closed-form direction from the parametric surface, normalized here
* area-weighted – every triangle adds its edge cross product scaled by its own
                  magnitude to each of its corners; normalized once at the end
* frame-relative – cross-section direction expressed in a propagated
                  tangent / normal / binormal frame

All results are unit length.
"""
from typing import Sequence, Tuple

import numpy as np

_EPS = 1e-12


def normalize(v) -> np.ndarray:
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v)
    return v / n if n > 0 else v


def normalize_rows(v, fallback: Sequence[float] = (0.0, 1.0, 0.0)) -> np.ndarray:
    """Normalize every row of ``v``; rows of zero length become ``fallback``."""
    v = np.array(v, dtype=np.float64)
    lengths = np.linalg.norm(v, axis=-1, keepdims=True)
    degenerate = lengths[..., 0] <= _EPS
    lengths[degenerate] = 1.0
    v = v / lengths
    v[degenerate] = normalize(fallback)
    return v


def triangle_normal(p1, p2, p3) -> np.ndarray:
    """Unit normal of a counter-clockwise triangle."""
    p1 = np.asarray(p1, dtype=np.float64)
    return normalize(np.cross(np.asarray(p2) - p1, np.asarray(p3) - p1))


def quad_normal(p1, p2, p3, p4) -> np.ndarray:
    """Unit normal of a planar counter-clockwise quad (cross of its diagonals)."""
    p1, p2, p3, p4 = (np.asarray(p, dtype=np.float64) for p in (p1, p2, p3, p4))
    return normalize(np.cross(p3 - p1, p4 - p2))


# ------------------------------------------------------------------------- analytic
def analytic_normals(directions) -> np.ndarray:
    """Closed-form (unnormalized) surface directions → unit normals."""
    return normalize_rows(directions)


# ------------------------------------------------------------------------- accumulated
def area_weighted_normals(positions, triangles, fallback: Sequence[float] = (1.0, 0.0, 0.0)) -> np.ndarray:
    """Per-vertex sum of adjacent face normals weighted by face area.

    Parameters
    ----------
    positions : ndarray
        (N, 3) vertex positions.
    triangles : ndarray
        (T, 3) vertex indices, wound counter-clockwise seen from outside.
    fallback : sequence of float
        Direction given to vertices touched only by zero-area triangles.

    Returns
    -------
    ndarray
        (N, 3) float64 unit normals.
    """
    return normalize_rows(accumulate_face_normals(positions, triangles), fallback)


def accumulate_face_normals(positions, triangles) -> np.ndarray:
    """Unnormalized accumulation step of :func:`area_weighted_normals`."""
    p = np.asarray(positions, dtype=np.float64)
    tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    p0, p1, p2 = p[tris[:, 0]], p[tris[:, 1]], p[tris[:, 2]]
    face = np.cross(p1 - p0, p2 - p0)
    face *= np.linalg.norm(face, axis=1, keepdims=True)

    acc = np.zeros_like(p)
    for corner in range(3):
        np.add.at(acc, tris[:, corner], face)
    return acc


# ------------------------------------------------------------------------- frames
def rotation_matrix(axis, angle: float) -> np.ndarray:
    """3×3 rotation about a unit ``axis`` (Rodrigues)."""
    x, y, z = normalize(axis)
    c, s = np.cos(angle), np.sin(angle)
    k = np.array([[0, -z, y],
                  [z, 0, -x],
                  [-y, x, 0]], dtype=np.float64)
    return np.eye(3) + s * k + (1.0 - c) * (k @ k)


def _initial_frame(tangent: np.ndarray, up) -> Tuple[np.ndarray, np.ndarray]:
    binormal = np.cross(tangent, up)
    if np.linalg.norm(binormal) <= 1e-6:
        # up is parallel to the tangent; use the axis the tangent leans on least
        alt = np.zeros(3)
        alt[int(np.argmin(np.abs(tangent)))] = 1.0
        binormal = np.cross(tangent, alt)
    binormal = normalize(binormal)
    normal = normalize(np.cross(binormal, tangent))
    return normal, binormal


def propagate_frames(tangents, up=(0.0, 1.0, 0.0)) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Parallel-transport a frame along a sampled curve.

    The first frame comes from ``up`` via cross products; every following one is
    the previous frame rotated about ``T[k-1] × T[k]`` by the angle between the
    two tangents, so the cross-section never twists on its own.

    Returns ``(T, N, B)``, each (K, 3), with ``B = T × N``.
    """
    t = normalize_rows(tangents)
    count = len(t)
    normals = np.empty_like(t)
    binormals = np.empty_like(t)

    normals[0], binormals[0] = _initial_frame(t[0], np.asarray(up, dtype=np.float64))
    for k in range(1, count):
        n = normals[k - 1]
        axis = np.cross(t[k - 1], t[k])
        s = np.linalg.norm(axis)
        if s > 1e-9:
            angle = np.arctan2(s, np.clip(np.dot(t[k - 1], t[k]), -1.0, 1.0))
            n = rotation_matrix(axis / s, angle) @ n
        # re-orthogonalize against drift
        n = normalize(n - np.dot(n, t[k]) * t[k])
        normals[k] = n
        binormals[k] = np.cross(t[k], n)
    return t, normals, binormals


def frame_normals(normals, binormals, phis, scale_n: float = 1.0, scale_b: float = 1.0) -> np.ndarray:
    """Unit normals of an elliptical cross-section swept through a frame list.

    The section at angle ``phi`` lies at ``cos(phi)·scale_n·N + sin(phi)·scale_b·B``;
    its outward normal is ``cos(phi)/scale_n·N + sin(phi)/scale_b·B``.

    Returns (K, S, 3) for K frames and S angles.
    """
    n = np.asarray(normals, dtype=np.float64)[:, None, :]
    b = np.asarray(binormals, dtype=np.float64)[:, None, :]
    phis = np.asarray(phis, dtype=np.float64)[None, :, None]
    return normalize_rows(np.cos(phis) / scale_n * n + np.sin(phis) / scale_b * b)
