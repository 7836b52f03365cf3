#!/usr/bin/env python3
# SurfaceMaker.py – latitude/longitude grids and deformed parametric surfaces
import math

import numpy as np

from shape_meshes.MeshDataTypes import (MeshBuffer, MeshBuilder, NormalPolicy, clamp_extent,
                                        clamp_flatten, clamp_segments, clamp_sweep, close_seam)
from shape_meshes.Geometry import Topology as topo
from shape_meshes.Geometry.Normals import accumulate_face_normals, analytic_normals, normalize_rows


class SurfaceMaker:
    """Generators whose vertices form one ``(rows+1) × (cols+1)`` parametric grid."""

    # ------------------------------------------------------------------------- helpers
    @staticmethod
    def _grid_mesh(positions, normals, uvs, tris) -> MeshBuilder:
        builder = MeshBuilder()
        builder.add_vertices(positions.reshape(-1, 3), normals.reshape(-1, 3), uvs.reshape(-1, 2))
        builder.add_triangles(tris, name="surface")
        return builder

    @staticmethod
    def _uv_grid(u: np.ndarray, v: np.ndarray) -> np.ndarray:
        uu, vv = np.meshgrid(u, v, indexing="xy")
        return np.stack((uu, vv), axis=-1)

    @staticmethod
    def _spow(x: np.ndarray, e: float) -> np.ndarray:
        """Sign-preserving power ``sign(x)·|x|^e``; float noise around zero counts as zero."""
        x = np.where(np.abs(x) < 1e-12, 0.0, x)
        return np.sign(x) * np.abs(x) ** e

    # ------------------------------------------------------------------------- spheres
    @staticmethod
    def _latlong(radius: float, rows: int, cols: int, theta_top: float, theta_bottom: float,
                 flip_u: bool = True):
        """Rows run from ``theta_bottom`` up to ``theta_top`` (polar angle from +Y)."""
        theta = theta_bottom + (theta_top - theta_bottom) * np.arange(rows + 1) / rows
        phi = np.arange(cols + 1) * (2.0 * math.pi / cols)
        th, ph = np.meshgrid(theta, phi, indexing="ij")

        unit = np.stack((np.sin(th) * np.cos(ph), np.cos(th), np.sin(th) * np.sin(ph)), axis=-1)
        close_seam(unit)
        u = np.arange(cols + 1) / cols
        if flip_u:
            u = 1.0 - u
        uvs = SurfaceMaker._uv_grid(u, np.arange(rows + 1) / rows)
        return radius * unit, unit, uvs

    @staticmethod
    def create_sphere(latitude_segments: int = 18, longitude_segments: int = 18,
                      radius: float = 1.0) -> MeshBuffer:
        """UV sphere; rows run south to north, ``u = 1 - lon/L`` and ``v = lat/L``.

        The seam column is duplicated: ``lon = 0`` and ``lon = L`` share positions and
        differ in ``u`` by exactly 1.  Range ``upper_half`` covers the northern rows.
        """
        rows = clamp_segments(latitude_segments)
        cols = clamp_segments(longitude_segments)
        pos, nrm, uvs = SurfaceMaker._latlong(clamp_extent(radius), rows, cols, 0.0, math.pi)
        builder = SurfaceMaker._grid_mesh(pos, nrm, uvs, topo.grid(rows, cols))

        north = rows // 2
        builder.add_range("upper_half", (rows - north) * cols * 6, north * cols * 6)
        return builder.build(normal_policy=NormalPolicy.Analytic,
                             latitude_segments=rows, longitude_segments=cols)

    @staticmethod
    def create_hemisphere(latitude_segments: int = 18, longitude_segments: int = 18,
                          radius: float = 1.0) -> MeshBuffer:
        """Northern half of :meth:`create_sphere` with ``latitude_segments // 2`` rows."""
        rows = max(clamp_segments(latitude_segments) // 2, 1)
        cols = clamp_segments(longitude_segments)
        pos, nrm, uvs = SurfaceMaker._latlong(clamp_extent(radius), rows, cols, 0.0, 0.5 * math.pi)
        builder = SurfaceMaker._grid_mesh(pos, nrm, uvs, topo.grid(rows, cols))
        return builder.build(normal_policy=NormalPolicy.Analytic,
                             latitude_segments=rows, longitude_segments=cols)

    # ------------------------------------------------------------------------- tori
    @staticmethod
    def _torus_grid(main_radius: float, tube_radii: np.ndarray, main_angles: np.ndarray, tube_segments: int):
        phi = np.arange(tube_segments + 1) * (2.0 * math.pi / tube_segments)
        th, ph = np.meshgrid(main_angles, phi, indexing="ij")
        rr = np.asarray(tube_radii, dtype=np.float64)[:, None]

        ring = main_radius + rr * np.cos(ph)
        pos = np.stack((ring * np.cos(th), ring * np.sin(th), rr * np.sin(ph)), axis=-1)
        nrm = analytic_normals(np.stack((np.cos(ph) * np.cos(th),
                                         np.cos(ph) * np.sin(th),
                                         np.sin(ph)), axis=-1))
        return close_seam(pos), close_seam(nrm)

    @staticmethod
    def create_torus(main_radius: float = 1.0, tube_radius: float = 0.25,
                     main_segments: int = 18, tube_segments: int = 18) -> MeshBuffer:
        """Torus around +Z; range ``half`` covers the first half of the major sweep."""
        rows = clamp_segments(main_segments)
        cols = clamp_segments(tube_segments)
        main_angles = np.arange(rows + 1) * (2.0 * math.pi / rows)
        pos, nrm = SurfaceMaker._torus_grid(clamp_extent(main_radius),
                                            np.full(rows + 1, clamp_extent(tube_radius)),
                                            main_angles, cols)
        pos[-1] = pos[0]
        nrm[-1] = nrm[0]
        uvs = SurfaceMaker._uv_grid(np.arange(rows + 1) / rows, np.arange(cols + 1) / cols)
        uvs = uvs.transpose(1, 0, 2)

        builder = SurfaceMaker._grid_mesh(pos, nrm, uvs, topo.grid(rows, cols))
        builder.add_range("half", 0, (rows // 2) * cols * 6)
        return builder.build(normal_policy=NormalPolicy.Analytic,
                             main_segments=rows, tube_segments=cols)

    @staticmethod
    def create_extra_torus(thickness: float = 0.4) -> MeshBuffer:
        """Fixed 30×30 unit torus whose tube radius is ``thickness`` (0.1 when above 1)."""
        thickness = clamp_extent(thickness)
        return SurfaceMaker.create_torus(1.0, thickness if thickness <= 1.0 else 0.1, 30, 30)

    @staticmethod
    def create_tapered_torus(main_radius: float = 1.0, tube_radius_start: float = 0.3,
                             tube_radius_end: float = 0.05, main_segments: int = 32,
                             tube_segments: int = 16, sweep_degrees: float = 270.0) -> MeshBuffer:
        """Torus arc whose tube radius goes linearly from start to end along the sweep."""
        rows = clamp_segments(main_segments)
        cols = clamp_segments(tube_segments)
        r0, r1 = clamp_extent(tube_radius_start), clamp_extent(tube_radius_end)
        t = np.arange(rows + 1) / rows
        sweep = math.radians(clamp_sweep(sweep_degrees))

        pos, nrm = SurfaceMaker._torus_grid(clamp_extent(main_radius), r0 + (r1 - r0) * t,
                                            t * sweep, cols)
        uvs = SurfaceMaker._uv_grid(np.arange(cols + 1) / cols, t)
        builder = SurfaceMaker._grid_mesh(pos, nrm, uvs, topo.grid(rows, cols))
        return builder.build(normal_policy=NormalPolicy.Analytic,
                             main_segments=rows, tube_segments=cols)

    # ------------------------------------------------------------------------- superellipsoid
    @staticmethod
    def create_superellipsoid(scale_x: float = 1.0, scale_y: float = 1.0, scale_z: float = 1.0,
                              vertical_exponent: float = 1.0, horizontal_exponent: float = 1.0,
                              u_segments: int = 24, v_segments: int = 24) -> MeshBuffer:
        """
        Superellipsoid with +Z as its polar axis.

        Positions apply ``sign(x)·|x|^e`` to the vertical (u) and horizontal (v)
        angles and scale per axis.  Normals divide the exponentiated coordinates by
        their axis scale and normalize; this is not the true gradient and drifts as
        the exponents move away from 1.
        """
        sx, sy, sz = (clamp_extent(s, 0.1) for s in (scale_x, scale_y, scale_z))
        e1 = clamp_extent(vertical_exponent, 0.1)
        e2 = clamp_extent(horizontal_exponent, 0.1)
        rows = clamp_segments(u_segments)
        cols = clamp_segments(v_segments)

        u = -0.5 * math.pi + np.arange(rows + 1) * (math.pi / rows)
        v = -math.pi + np.arange(cols + 1) * (2.0 * math.pi / cols)
        uu, vv = np.meshgrid(u, v, indexing="ij")
        cu, su = SurfaceMaker._spow(np.cos(uu), e1), SurfaceMaker._spow(np.sin(uu), e1)
        cv, sv = SurfaceMaker._spow(np.cos(vv), e2), SurfaceMaker._spow(np.sin(vv), e2)

        pos = close_seam(np.stack((sx * cu * cv, sy * cu * sv, sz * su), axis=-1))
        nrm = close_seam(normalize_rows(np.stack((cu * cv / sx, cu * sv / sy, su / sz), axis=-1)))
        uvs = SurfaceMaker._uv_grid(np.arange(cols + 1) / cols, np.arange(rows + 1) / rows)

        builder = SurfaceMaker._grid_mesh(pos, nrm, uvs, topo.grid(rows, cols, flip=True))
        return builder.build(normal_policy=NormalPolicy.Approximate,
                             u_segments=rows, v_segments=cols)

    # ------------------------------------------------------------------------- sine cone
    @staticmethod
    def create_sine_cone(base_radius: float = 0.5, height: float = 2.0, flatten_factor: float = 0.0,
                         sine_amplitude: float = 0.1, sine_frequency: float = 2.0, sine_phase: float = 0.0,
                         radial_segments: int = 24, height_segments: int = 24) -> MeshBuffer:
        """
        Cone along +X whose radius tapers as ``(1 - t)^0.65`` and whose centreline is
        pushed along Y by ``amplitude · sin(frequency · 2πt + phase)``.

        Normals come from area-weighted accumulation; the two seam columns share
        their accumulated sum so shading stays continuous across the seam.
        """
        r = clamp_extent(base_radius)
        h = clamp_extent(height)
        flatten = clamp_flatten(flatten_factor)
        cols = clamp_segments(radial_segments)
        rows = clamp_segments(height_segments)

        t = np.arange(rows + 1) / rows
        radius = r * (1.0 - t) ** 0.65
        lift = float(sine_amplitude) * np.sin(float(sine_frequency) * t * 2.0 * math.pi + float(sine_phase))
        theta = np.arange(cols + 1) * (2.0 * math.pi / cols)
        tt, th = np.meshgrid(t, theta, indexing="ij")
        rad = radius[:, None]

        pos = np.stack((tt * h,
                        np.cos(th) * rad * (1.0 - flatten) + lift[:, None],
                        np.sin(th) * rad), axis=-1)
        close_seam(pos)
        tris = topo.grid(rows, cols, flip=True)

        acc = accumulate_face_normals(pos.reshape(-1, 3), tris).reshape(rows + 1, cols + 1, 3)
        seam = acc[:, 0] + acc[:, -1]
        acc[:, 0] = seam
        acc[:, -1] = seam
        nrm = normalize_rows(acc, fallback=(1.0, 0.0, 0.0))

        uvs = SurfaceMaker._uv_grid(np.arange(cols + 1) / cols, t)
        builder = SurfaceMaker._grid_mesh(pos, nrm, uvs, tris)
        return builder.build(normal_policy=NormalPolicy.AreaWeighted,
                             radial_segments=cols, height_segments=rows)
