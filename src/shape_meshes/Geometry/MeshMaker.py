#!/usr/bin/env python3
# MeshMaker.py – fixed-topology and disk-capped axisymmetric generators
import math

import numpy as np

from shape_meshes.MeshDataTypes import (MeshBuffer, MeshBuilder, NormalPolicy, Topology,
                                        BoxSide, SubRange, clamp_extent, clamp_segments, clamp_sweep,
                                        ring_angles)
from shape_meshes.Geometry import Topology as topo
from shape_meshes.Geometry.Normals import analytic_normals, quad_normal, triangle_normal


class MeshMaker:
    """Factory for flat-faced shapes and solids of revolution around +Y.

    Every generator is pure: the same arguments give byte-identical buffers.
    Out-of-range arguments are clamped silently.
    """

    # ------------------------------------------------------------------------- helpers
    @staticmethod
    def _ring(radius: float, y: float, angles: np.ndarray) -> np.ndarray:
        ring = np.stack((radius * np.cos(angles),
                         np.full_like(angles, y),
                         radius * np.sin(angles)), axis=1)
        if len(angles) > 1 and math.isclose(angles[-1] - angles[0], 2.0 * math.pi):
            ring[-1] = ring[0]
        return ring

    @staticmethod
    def _disk_uvs(angles: np.ndarray) -> np.ndarray:
        return np.stack((0.5 + 0.5 * np.cos(angles), 0.5 + 0.5 * np.sin(angles)), axis=1)

    @staticmethod
    def _flat_faces(faces) -> MeshBuffer:
        """Non-indexed triangle list from ``(corners, uvs)`` polygons, one flat normal each."""
        builder = MeshBuilder()
        for corners, uvs in faces:
            corners = np.asarray(corners, dtype=np.float64)
            if len(corners) == 3:
                normal = triangle_normal(*corners)
                order = [0, 1, 2]
            else:
                normal = quad_normal(*corners)
                order = [0, 1, 2, 0, 2, 3]
            builder.add_vertices(corners[order], np.tile(normal, (len(order), 1)),
                                 np.asarray(uvs, dtype=np.float64)[order])
        return builder.build(Topology.Triangles, normal_policy=NormalPolicy.Analytic)

    # ------------------------------------------------------------------------- box
    @staticmethod
    def create_box(size: float = 1.0) -> MeshBuffer:
        """Unit box centred at the origin (24 verts, 36 indices, one range per face)."""
        s = clamp_extent(size) * 0.5
        faces = [
            # back
            ([ s,  s, -s], [0, 0, -1], [0, 1]),
            ([ s, -s, -s], [0, 0, -1], [0, 0]),
            ([-s, -s, -s], [0, 0, -1], [1, 0]),
            ([-s,  s, -s], [0, 0, -1], [1, 1]),
            # bottom
            ([-s, -s,  s], [0, -1, 0], [0, 1]),
            ([-s, -s, -s], [0, -1, 0], [0, 0]),
            ([ s, -s, -s], [0, -1, 0], [1, 0]),
            ([ s, -s,  s], [0, -1, 0], [1, 1]),
            # left
            ([-s,  s, -s], [-1, 0, 0], [0, 1]),
            ([-s, -s, -s], [-1, 0, 0], [0, 0]),
            ([-s, -s,  s], [-1, 0, 0], [1, 0]),
            ([-s,  s,  s], [-1, 0, 0], [1, 1]),
            # right
            ([ s,  s,  s], [1, 0, 0], [0, 1]),
            ([ s, -s,  s], [1, 0, 0], [0, 0]),
            ([ s, -s, -s], [1, 0, 0], [1, 0]),
            ([ s,  s, -s], [1, 0, 0], [1, 1]),
            # top
            ([-s,  s, -s], [0, 1, 0], [0, 1]),
            ([-s,  s,  s], [0, 1, 0], [0, 0]),
            ([ s,  s,  s], [0, 1, 0], [1, 0]),
            ([ s,  s, -s], [0, 1, 0], [1, 1]),
            # front
            ([-s,  s,  s], [0, 0, 1], [0, 1]),
            ([-s, -s,  s], [0, 0, 1], [0, 0]),
            ([ s, -s,  s], [0, 0, 1], [1, 0]),
            ([ s,  s,  s], [0, 0, 1], [1, 1]),
        ]
        builder = MeshBuilder()
        builder.add_vertices([f[0] for f in faces], [f[1] for f in faces], [f[2] for f in faces])
        for side in BoxSide:
            base = 4 * side.value
            builder.add_triangles([[base, base + 1, base + 2], [base + 2, base + 3, base]],
                                  name=side.name.lower())
        return builder.build(normal_policy=NormalPolicy.Analytic)

    # ------------------------------------------------------------------------- plane
    @staticmethod
    def create_plane(width: float = 2.0, height: float = 2.0) -> MeshBuffer:
        """Quad in the XZ plane facing +Y."""
        w = clamp_extent(width) * 0.5
        h = clamp_extent(height) * 0.5
        builder = MeshBuilder()
        builder.add_vertices(
            [[-w, 0, h], [w, 0, h], [w, 0, -h], [-w, 0, -h]],
            np.tile([0.0, 1.0, 0.0], (4, 1)),
            [[0, 0], [1, 0], [1, 1], [0, 1]])
        builder.add_triangles([[0, 1, 2], [0, 2, 3]], name="plane")
        return builder.build(normal_policy=NormalPolicy.Analytic)

    # ------------------------------------------------------------------------- prism
    @staticmethod
    def create_prism(size: float = 1.0) -> MeshBuffer:
        """Triangular prism along Y; 2 caps + 3 walls as a plain triangle list."""
        s = clamp_extent(size) * 0.5
        section = [(s, -s), (-s, -s), (0.0, s)]          # (x, z)
        bottom = [np.array([x, -s, z]) for x, z in section]
        top = [np.array([x, s, z]) for x, z in section]

        faces = [
            ([bottom[0], bottom[2], bottom[1]], [[1, 0], [0.5, 1], [0, 0]]),
            ([top[0], top[1], top[2]], [[1, 0], [0, 0], [0.5, 1]]),
        ]
        for a, b in ((0, 1), (1, 2), (2, 0)):
            faces.append(([bottom[a], bottom[b], top[b], top[a]],
                          [[0, 0], [1, 0], [1, 1], [0, 1]]))
        mesh = MeshMaker._flat_faces(faces)
        mesh.ranges.update(MeshMaker._face_ranges(["bottom", "top", "back", "left", "right"],
                                                  [3, 3, 6, 6, 6]))
        return mesh

    # ------------------------------------------------------------------------- pyramids
    @staticmethod
    def create_pyramid3(base_size: float = 1.0, height: float = 1.0) -> MeshBuffer:
        """Tetrahedral pyramid: triangular base plus three sides (12 verts)."""
        s = clamp_extent(base_size) * 0.5
        h = clamp_extent(height) * 0.5
        apex = np.array([0.0, h, 0.0])
        a, b, c = (np.array([-s, -h, s]), np.array([0.0, -h, -s]), np.array([s, -h, s]))

        faces = [([a, b, c], [[0, 0], [0.5, 1], [1, 0]])]
        for p, q in ((a, c), (c, b), (b, a)):
            faces.append(([apex, p, q], [[0.5, 1], [0, 0], [1, 0]]))
        mesh = MeshMaker._flat_faces(faces)
        mesh.ranges.update(MeshMaker._face_ranges(["base", "sides"], [3, 9]))
        return mesh

    @staticmethod
    def create_pyramid4(base_size: float = 1.0, height: float = 1.0) -> MeshBuffer:
        """Square pyramid: two base triangles plus four sides (18 verts)."""
        s = clamp_extent(base_size) * 0.5
        h = clamp_extent(height) * 0.5
        apex = np.array([0.0, h, 0.0])
        corners = [np.array([-s, -h, s]), np.array([s, -h, s]),
                   np.array([s, -h, -s]), np.array([-s, -h, -s])]

        base = [corners[3], corners[2], corners[1], corners[0]]
        faces = [(base, [[0, 0], [1, 0], [1, 1], [0, 1]])]
        for i in range(4):
            faces.append(([apex, corners[i], corners[(i + 1) % 4]], [[0.5, 1], [0, 0], [1, 0]]))
        mesh = MeshMaker._flat_faces(faces)
        mesh.ranges.update(MeshMaker._face_ranges(["base", "sides"], [6, 12]))
        return mesh

    @staticmethod
    def _face_ranges(names, counts) -> dict:
        ranges, offset = {}, 0
        for name, count in zip(names, counts):
            ranges[name] = SubRange(name, offset, count)
            offset += count
        return ranges

    # ------------------------------------------------------------------------- fin
    @staticmethod
    def create_fin(base_length: float = 2.9, top_length: float = 0.75,
                   height: float = 2.5, thickness: float = 0.1) -> MeshBuffer:
        """Trapezoidal fin lying in XY, extruded along Z by ``2 * thickness``.

        Ranges: ``front`` and ``back`` (textured faces), ``front_back`` (both) and
        ``edges`` (the four untextured rims).
        """
        b, t = clamp_extent(base_length), clamp_extent(top_length)
        h, d = clamp_extent(height), clamp_extent(thickness)
        p = [np.array(v, dtype=np.float64) for v in (
            (0, 0, -d), (b, 0, -d), (0, h, -d), (t, h, -d),
            (0, 0, d), (b, 0, d), (0, h, d), (t, h, d))]
        uv = {0: (0, 0), 1: (1, 0), 2: (0, 1), 3: (1, 1),
              4: (0, 0), 5: (1, 0), 6: (0, 1), 7: (1, 1)}

        quads = [
            ("front", (0, 2, 3, 1)),
            ("back", (4, 5, 7, 6)),
            ("top", (2, 6, 7, 3)),
            ("bottom", (0, 1, 5, 4)),
            ("left", (0, 4, 6, 2)),
            ("slope", (1, 3, 7, 5)),
        ]
        builder = MeshBuilder()
        for name, quad in quads:
            corners = [p[i] for i in quad]
            normal = quad_normal(*corners)
            base = builder.add_vertices(corners, np.tile(normal, (4, 1)), [uv[i] for i in quad])
            builder.add_triangles([[base, base + 1, base + 2], [base + 2, base + 3, base]],
                                  name=name if name in ("front", "back") else None)
        builder.add_range("front_back", 0, 12)
        builder.add_range("edges", 12, 24)
        return builder.build(normal_policy=NormalPolicy.Analytic)

    # ------------------------------------------------------------------------- cone
    @staticmethod
    def create_cone(radius: float = 1.0, height: float = 1.0, num_slices: int = 18) -> MeshBuffer:
        """Cone on the XZ plane with apex at +Y.

        Layout: bottom centre, closed rim (``n``), apex, then two side vertices per
        slice sharing that slice's slant normal.  Ranges ``bottom`` and ``sides``.
        """
        r, h = clamp_extent(radius), clamp_extent(height)
        n = clamp_segments(num_slices)
        angles = ring_angles(n, closed=True)
        builder = MeshBuilder()

        center = builder.add_vertices([[0, 0, 0]], [[0, -1, 0]], [[0.5, 0.5]])
        rim = builder.add_vertices(MeshMaker._ring(r, 0.0, angles),
                                   np.tile([0.0, -1.0, 0.0], (n, 1)),
                                   MeshMaker._disk_uvs(angles))
        apex = builder.add_vertices([[0, h, 0]], [[0, 1, 0]], [[0.5, 0.0]])

        a0 = angles
        a1 = angles + 2.0 * math.pi / n
        mid = 0.5 * (a0 + a1)
        slant = analytic_normals(np.stack((h * np.cos(mid), np.full(n, r), h * np.sin(mid)), axis=1))
        side_pos = np.empty((2 * n, 3))
        side_pos[0::2] = MeshMaker._ring(r, 0.0, a0)
        side_pos[1::2] = MeshMaker._ring(r, 0.0, a1)
        side_uv = np.empty((2 * n, 2))
        side_uv[0::2, 0] = np.arange(n) / n
        side_uv[1::2, 0] = (np.arange(n) + 1) / n
        side_uv[:, 1] = 1.0
        sides = builder.add_vertices(side_pos, np.repeat(slant, 2, axis=0), side_uv)

        builder.add_triangles(topo.fan(center, rim, n), name="bottom")
        i = np.arange(n)
        builder.add_triangles(np.stack((np.full(n, apex), sides + 2 * i + 1, sides + 2 * i), axis=1),
                              name="sides")
        return builder.build(normal_policy=NormalPolicy.Analytic, num_slices=n)

    @staticmethod
    def create_partial_cone(radius: float = 1.0, height: float = 1.0,
                            num_slices: int = 18, arc_degrees: float = 180.0) -> MeshBuffer:
        """Open cone wall spanning ``arc_degrees`` centred on +X; edges are left open."""
        r, h = clamp_extent(radius), clamp_extent(height)
        n = clamp_segments(num_slices)
        arc = math.radians(clamp_sweep(arc_degrees))
        angles = ring_angles(n, closed=False, start=-0.5 * arc, sweep=arc)

        slant = analytic_normals(np.stack((np.cos(angles), np.full(n + 1, r / h), np.sin(angles)), axis=1))
        u = np.arange(n + 1) / n
        builder = MeshBuilder()
        base = builder.add_vertices(MeshMaker._ring(r, 0.0, angles), slant,
                                    np.stack((u, np.ones(n + 1)), axis=1))
        tip = builder.add_vertices(np.tile([0.0, h, 0.0], (n + 1, 1)), slant,
                                   np.stack((u, np.zeros(n + 1)), axis=1))
        builder.add_triangles(topo.ring_wall(base, tip, n), name="sides")
        return builder.build(normal_policy=NormalPolicy.Analytic, num_slices=n,
                             arc_degrees=math.degrees(arc))

    # ------------------------------------------------------------------------- cylinders
    @staticmethod
    def _frustum(bottom_radius: float, top_radius: float, height: float, n: int) -> MeshBuffer:
        rb, rt = bottom_radius, top_radius
        cap_angles = ring_angles(n, closed=True)
        side_angles = ring_angles(n, closed=False)
        slope = (rb - rt) / height
        builder = MeshBuilder()

        bottom_center = builder.add_vertices([[0, 0, 0]], [[0, -1, 0]], [[0.5, 0.5]])
        bottom_rim = builder.add_vertices(MeshMaker._ring(rb, 0.0, cap_angles),
                                          np.tile([0.0, -1.0, 0.0], (n, 1)),
                                          MeshMaker._disk_uvs(cap_angles))
        top_center = builder.add_vertices([[0, height, 0]], [[0, 1, 0]], [[0.5, 0.5]])
        top_rim = builder.add_vertices(MeshMaker._ring(rt, height, cap_angles),
                                       np.tile([0.0, 1.0, 0.0], (n, 1)),
                                       MeshMaker._disk_uvs(cap_angles))

        side_normals = analytic_normals(np.stack((np.cos(side_angles),
                                                  np.full(n + 1, slope),
                                                  np.sin(side_angles)), axis=1))
        u = np.arange(n + 1) / n
        side_bottom = builder.add_vertices(MeshMaker._ring(rb, 0.0, side_angles), side_normals,
                                           np.stack((u, np.ones(n + 1)), axis=1))
        side_top = builder.add_vertices(MeshMaker._ring(rt, height, side_angles), side_normals,
                                        np.stack((u, np.zeros(n + 1)), axis=1))

        builder.add_triangles(topo.fan(bottom_center, bottom_rim, n), name="bottom")
        builder.add_triangles(topo.fan(top_center, top_rim, n, upward=True), name="top")
        builder.add_triangles(topo.ring_wall(side_bottom, side_top, n), name="sides")
        return builder.build(normal_policy=NormalPolicy.Analytic, num_slices=n)

    @staticmethod
    def create_cylinder(radius: float = 1.0, height: float = 1.0, num_slices: int = 36) -> MeshBuffer:
        """Capped cylinder; ranges ``bottom`` [0,3n), ``top`` [3n,6n), ``sides`` [6n,12n)."""
        r = clamp_extent(radius)
        return MeshMaker._frustum(r, r, clamp_extent(height), clamp_segments(num_slices))

    @staticmethod
    def create_tapered_cylinder(bottom_radius: float = 1.0, top_radius: float = 0.5,
                                height: float = 1.0, num_slices: int = 18) -> MeshBuffer:
        """Capped frustum with side normals tilted by ``(bottom_radius - top_radius) / height``."""
        return MeshMaker._frustum(clamp_extent(bottom_radius), clamp_extent(top_radius),
                                  clamp_extent(height), clamp_segments(num_slices))

    # ------------------------------------------------------------------------- tube
    @staticmethod
    def create_tube(outer_radius: float = 2.0, inner_radius: float = 1.7,
                    height: float = 1.0, num_slices: int = 30) -> MeshBuffer:
        """Hollow cylinder: outer wall, inward-facing inner wall, annular caps."""
        ro = clamp_extent(outer_radius)
        ri = min(clamp_extent(inner_radius), ro)
        h = clamp_extent(height)
        n = clamp_segments(num_slices)
        angles = ring_angles(n, closed=False)
        u = np.arange(n + 1) / n
        radial = np.stack((np.cos(angles), np.zeros(n + 1), np.sin(angles)), axis=1)
        down = np.tile([0.0, -1.0, 0.0], (n + 1, 1))
        builder = MeshBuilder()

        def wall_uv(v):
            return np.stack((u, np.full(n + 1, v)), axis=1)

        def cap_uv(radius):
            return 0.5 + 0.5 * (radius / ro) * np.stack((np.cos(angles), np.sin(angles)), axis=1)

        outer_bottom = builder.add_vertices(MeshMaker._ring(ro, 0.0, angles), radial, wall_uv(1.0))
        outer_top = builder.add_vertices(MeshMaker._ring(ro, h, angles), radial, wall_uv(0.0))
        inner_bottom = builder.add_vertices(MeshMaker._ring(ri, 0.0, angles), -radial, wall_uv(1.0))
        inner_top = builder.add_vertices(MeshMaker._ring(ri, h, angles), -radial, wall_uv(0.0))
        cap_bottom_outer = builder.add_vertices(MeshMaker._ring(ro, 0.0, angles), down, cap_uv(ro))
        cap_bottom_inner = builder.add_vertices(MeshMaker._ring(ri, 0.0, angles), down, cap_uv(ri))
        cap_top_outer = builder.add_vertices(MeshMaker._ring(ro, h, angles), -down, cap_uv(ro))
        cap_top_inner = builder.add_vertices(MeshMaker._ring(ri, h, angles), -down, cap_uv(ri))

        builder.add_triangles(topo.ring_wall(outer_bottom, outer_top, n), name="outer")
        builder.add_triangles(topo.ring_wall(inner_top, inner_bottom, n), name="inner")
        builder.add_triangles(topo.ring_wall(cap_bottom_inner, cap_bottom_outer, n), name="bottom")
        builder.add_triangles(topo.ring_wall(cap_top_outer, cap_top_inner, n), name="top")
        return builder.build(normal_policy=NormalPolicy.Analytic, num_slices=n)
