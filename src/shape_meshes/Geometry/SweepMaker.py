#!/usr/bin/env python3
# SweepMaker.py – tubes swept along a centreline with parallel-transported frames
"""
Spring, curved cone and spiral share one recipe:

1. sample a centreline and its tangents,
2. propagate a (T, N, B) frame along it (:func:`propagate_frames`),
3. sweep a circular or flattened cross-section ``cos(phi)·a·N + sin(phi)·B``
   around every frame and connect consecutive rings.

Rings advance along +T, so the grid is emitted flipped to keep faces outward.
"""
import math

import numpy as np

from shape_meshes.MeshDataTypes import (MeshBuffer, MeshBuilder, NormalPolicy, clamp_extent,
                                        clamp_flatten, clamp_segments, close_seam, ring_angles)
from shape_meshes.Geometry import Topology as topo
from shape_meshes.Geometry.Normals import frame_normals, normalize_rows, propagate_frames

SPRING_MIN_SAMPLES_PER_COIL = 8
SPIRAL_CAP_RINGS = 8


class SweepMaker:

    # ------------------------------------------------------------------------- helpers
    @staticmethod
    def _section(normals, binormals, phis, scale_n: float = 1.0) -> np.ndarray:
        """Unit-radius cross-section offsets, shape (K, S, 3)."""
        n = normals[:, None, :]
        b = binormals[:, None, :]
        phis = phis[None, :, None]
        return np.cos(phis) * scale_n * n + np.sin(phis) * b

    @staticmethod
    def _sweep(centers, tangents, radii, segments: int, up, duplicate_seam: bool = True,
               scale_n: float = 1.0):
        """Positions and normals of rings swept along ``centers``.

        Returns ``(positions, normals, frames)`` where positions/normals are
        (K, S, 3) and frames is the ``(T, N, B)`` triple.
        """
        t, n, b = propagate_frames(tangents, up)
        phis = ring_angles(segments, closed=not duplicate_seam)
        offsets = SweepMaker._section(n, b, phis, scale_n)
        positions = centers[:, None, :] + np.asarray(radii, dtype=np.float64)[:, None, None] * offsets
        normals = frame_normals(n, b, phis, scale_n=scale_n)
        if duplicate_seam:
            close_seam(positions)
            close_seam(normals)
        return positions, normals, (t, n, b)

    @staticmethod
    def _uvs(rows: int, cols: int, columns_per_row: int) -> np.ndarray:
        u = np.arange(columns_per_row) / cols
        v = np.arange(rows + 1) / rows
        uu, vv = np.meshgrid(u, v, indexing="xy")
        return np.stack((uu, vv), axis=-1)

    # ------------------------------------------------------------------------- spring
    @staticmethod
    def create_spring(main_radius: float = 1.0, tube_radius: float = 0.1, coils: int = 6,
                      tube_segments: int = 18, spring_length: float = 4.0) -> MeshBuffer:
        """Helical tube around +Z rising ``spring_length`` over ``coils`` turns.

        The helix is sampled ``max(tube_segments, 8)`` times per turn.
        """
        big_r = clamp_extent(main_radius)
        small_r = clamp_extent(tube_radius)
        length = clamp_extent(spring_length)
        coils = max(int(coils), 1)
        cols = clamp_segments(tube_segments)
        per_coil = max(cols, SPRING_MIN_SAMPLES_PER_COIL)
        rows = coils * per_coil

        theta = np.arange(rows + 1) * (2.0 * math.pi / per_coil)
        rise = length / (coils * 2.0 * math.pi)
        centers = np.stack((big_r * np.cos(theta), big_r * np.sin(theta),
                            np.arange(rows + 1) * (length / rows)), axis=1)
        tangents = np.stack((-big_r * np.sin(theta), big_r * np.cos(theta),
                             np.full(rows + 1, rise)), axis=1)

        pos, nrm, _ = SweepMaker._sweep(centers, tangents, np.full(rows + 1, small_r), cols,
                                        up=(0.0, 0.0, 1.0))
        builder = MeshBuilder()
        builder.add_vertices(pos.reshape(-1, 3), nrm.reshape(-1, 3),
                             SweepMaker._uvs(rows, cols, cols + 1).reshape(-1, 2))
        builder.add_triangles(topo.grid(rows, cols, flip=True), name="tube")
        return builder.build(normal_policy=NormalPolicy.FrameRelative,
                             coils=coils, tube_segments=cols, rings=rows + 1)

    # ------------------------------------------------------------------------- curved cone
    @staticmethod
    def create_curved_cone(num_slices: int = 18, curve_steps: int = 12, radius: float = 0.5,
                           height: float = 2.0, bend_radius: float = 2.0) -> MeshBuffer:
        """Cone whose axis follows a circular arc of ``bend_radius`` in the XY plane.

        The arc starts at the origin heading +X and bends toward +Y through
        ``height / bend_radius`` radians; the section radius shrinks linearly to 0.
        """
        cols = clamp_segments(num_slices)
        rows = clamp_segments(curve_steps)
        r = clamp_extent(radius)
        h = clamp_extent(height)
        bend = clamp_extent(bend_radius)

        t = np.arange(rows + 1) / rows
        a = t * (h / bend)
        centers = np.stack((bend * np.sin(a), bend * (1.0 - np.cos(a)), np.zeros(rows + 1)), axis=1)
        tangents = np.stack((np.cos(a), np.sin(a), np.zeros(rows + 1)), axis=1)

        pos, nrm, _ = SweepMaker._sweep(centers, tangents, r * (1.0 - t), cols, up=(0.0, 1.0, 0.0))
        builder = MeshBuilder()
        builder.add_vertices(pos.reshape(-1, 3), nrm.reshape(-1, 3),
                             SweepMaker._uvs(rows, cols, cols + 1).reshape(-1, 2))
        builder.add_triangles(topo.grid(rows, cols, flip=True), name="surface")
        return builder.build(normal_policy=NormalPolicy.FrameRelative,
                             num_slices=cols, curve_steps=rows)

    # ------------------------------------------------------------------------- spiral
    @staticmethod
    def create_spiral(tube_radius: float = 0.1, flatten_factor: float = 0.0, loop_spacing: float = 0.3,
                      num_loops: float = 3.0, tube_segments: int = 16, spiral_segments: int = 128) -> MeshBuffer:
        """
        Archimedean spiral tube in the XY plane, capped at its inner end.

        The centreline radius grows by ``loop_spacing`` per turn and starts half a
        turn in, at angle π.  ``flatten_factor`` squashes the section along the
        frame normal.  The inner end gets a pole vertex plus ``SPIRAL_CAP_RINGS``
        hemispherical rings, the last of which is stitched to the first tube ring.

        Ranges: ``tube`` and ``cap``.
        """
        tr = clamp_extent(tube_radius)
        squash = 1.0 - clamp_flatten(flatten_factor)
        spacing = clamp_extent(loop_spacing)
        loops = clamp_extent(num_loops)
        cols = clamp_segments(tube_segments)
        segments = clamp_segments(spiral_segments)

        step = loops * 2.0 * math.pi / segments
        first = min(int(math.pi / step), segments - 1)
        theta = np.arange(first, segments + 1) * step
        rows = len(theta) - 1
        rho = spacing * theta / (2.0 * math.pi)
        centers = np.stack((rho * np.cos(theta), rho * np.sin(theta), np.zeros(rows + 1)), axis=1)
        tangents = np.gradient(centers, axis=0)

        pos, nrm, (t, n, b) = SweepMaker._sweep(centers, tangents, np.full(rows + 1, tr), cols,
                                                up=(1.0, 0.0, 0.0), duplicate_seam=False,
                                                scale_n=squash)
        builder = MeshBuilder()
        tube = builder.add_vertices(pos.reshape(-1, 3), nrm.reshape(-1, 3),
                                    SweepMaker._uvs(rows, cols, cols).reshape(-1, 2))

        # cap: pole + rings between the pole and the first tube ring
        t0, n0, b0 = t[0], n[:1], b[:1]
        phis = ring_angles(cols, closed=True)
        section = SweepMaker._section(n0, b0, phis, squash)[0]
        section_normal = (np.cos(phis)[:, None] / squash * n0 + np.sin(phis)[:, None] * b0)

        pole = builder.add_vertices(centers[0] - tr * t0, -t0[None, :], [[0.5, -1.0]])
        polar = np.arange(1, SPIRAL_CAP_RINGS + 1) * (0.5 * math.pi / (SPIRAL_CAP_RINGS + 1))
        ring_r = np.sin(polar)[:, None, None]
        ring_z = np.cos(polar)[:, None, None]
        cap_pos = centers[0] + tr * (ring_r * section[None] - ring_z * t0)
        cap_nrm = normalize_rows(ring_r * section_normal[None] - ring_z * t0)
        cap_uv = np.stack(np.broadcast_arrays(np.arange(cols)[None, :] / cols, -ring_z[:, :, 0]), axis=-1)
        cap = builder.add_vertices(cap_pos.reshape(-1, 3), cap_nrm.reshape(-1, 3), cap_uv.reshape(-1, 2))

        builder.add_triangles(topo.grid(rows, cols, start=tube, wrap=True, flip=True), name="tube")
        cap_start = builder.add_triangles(topo.fan(pole, cap, cols, upward=True))
        builder.add_triangles(topo.grid(SPIRAL_CAP_RINGS - 1, cols, start=cap, wrap=True, flip=True))
        last_ring = cap + (SPIRAL_CAP_RINGS - 1) * cols
        stitch = builder.add_triangles(topo.seam_stitch(last_ring, tube, cols, flip=True))
        builder.add_range("cap", cap_start.offset, stitch.offset + stitch.count - cap_start.offset)
        return builder.build(normal_policy=NormalPolicy.FrameRelative,
                             tube_segments=cols, rings=rows + 1, cap_rings=SPIRAL_CAP_RINGS)
