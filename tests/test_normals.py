"""Unit tests for normal computation and frame propagation."""

import math

import numpy as np
import pytest

from shape_meshes.Geometry.Normals import (area_weighted_normals, frame_normals, normalize_rows,
                                           propagate_frames, quad_normal, rotation_matrix,
                                           triangle_normal)


class TestBasics:
    """Tests for single-face normals and normalization."""

    def test_normalize_rows_uses_fallback_for_zero_rows(self):
        out = normalize_rows([[3.0, 0.0, 4.0], [0.0, 0.0, 0.0]], fallback=(0.0, 0.0, 2.0))
        np.testing.assert_allclose(out, [[0.6, 0.0, 0.8], [0.0, 0.0, 1.0]])

    def test_normalize_rows_keeps_leading_dimensions(self):
        out = normalize_rows(np.ones((2, 5, 3)))
        assert out.shape == (2, 5, 3)
        np.testing.assert_allclose(np.linalg.norm(out, axis=-1), 1.0)

    def test_counter_clockwise_triangle_faces_plus_z(self):
        np.testing.assert_allclose(triangle_normal([0, 0, 0], [1, 0, 0], [0, 1, 0]), [0, 0, 1])

    def test_quad_normal_of_unit_square(self):
        n = quad_normal([0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0])
        np.testing.assert_allclose(n, [0, 0, 1])


class TestAreaWeighted:
    """Tests for accumulated vertex normals."""

    def test_flat_sheet_gets_sheet_normal(self):
        positions = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]]
        out = area_weighted_normals(positions, [[0, 1, 2], [0, 2, 3]])
        np.testing.assert_allclose(out, np.tile([0.0, 0.0, 1.0], (4, 1)))

    def test_larger_face_dominates_shared_vertex(self):
        positions = [[0, 0, 0], [2, 0, 0], [0, 2, 0], [0, 1, 0], [0, 0, 1]]
        out = area_weighted_normals(positions, [[0, 1, 2], [0, 3, 4]])
        assert out[0, 2] > out[0, 0] > 0.0
        np.testing.assert_allclose(np.linalg.norm(out[0]), 1.0)

    def test_zero_area_faces_fall_back(self):
        positions = [[0, 0, 0], [1, 0, 0], [2, 0, 0]]
        out = area_weighted_normals(positions, [[0, 1, 2]])
        np.testing.assert_allclose(out, np.tile([1.0, 0.0, 0.0], (3, 1)))


class TestFrames:
    """Tests for parallel-transported frames."""

    def test_rotation_matrix_quarter_turn(self):
        r = rotation_matrix([0, 0, 1], math.pi / 2)
        np.testing.assert_allclose(r @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)

    def test_straight_line_keeps_initial_frame(self):
        t, n, b = propagate_frames(np.tile([1.0, 0.0, 0.0], (5, 1)), up=(0.0, 1.0, 0.0))
        np.testing.assert_allclose(n, np.tile([0.0, 1.0, 0.0], (5, 1)), atol=1e-12)
        np.testing.assert_allclose(b, np.tile([0.0, 0.0, 1.0], (5, 1)), atol=1e-12)

    def test_frames_stay_orthonormal_on_a_circle(self):
        a = np.linspace(0.0, 2.0 * math.pi, 40)
        tangents = np.stack((-np.sin(a), np.cos(a), np.full_like(a, 0.2)), axis=1)
        t, n, b = propagate_frames(tangents, up=(0.0, 0.0, 1.0))
        np.testing.assert_allclose(np.einsum("ij,ij->i", t, n), 0.0, atol=1e-9)
        np.testing.assert_allclose(np.linalg.norm(n, axis=1), 1.0)
        np.testing.assert_allclose(b, np.cross(t, n), atol=1e-9)

    def test_helix_frames_do_not_twist(self):
        # a rotation-minimizing frame has no normal motion along the binormal
        a = np.linspace(0.0, 4.0 * math.pi, 2000)
        tangents = np.stack((-np.sin(a), np.cos(a), np.ones_like(a)), axis=1)
        t, n, b = propagate_frames(tangents, up=(0.0, 0.0, 1.0))
        twist = np.einsum("ij,ij->i", n[1:] - n[:-1], b[:-1])
        assert np.abs(twist).max() < 1e-4

    def test_planar_arc_keeps_out_of_plane_components(self):
        a = np.linspace(0.0, 1.5, 30)
        tangents = np.stack((np.cos(a), np.sin(a), np.zeros_like(a)), axis=1)
        t, n, b = propagate_frames(tangents, up=(0.0, 1.0, 1.0))
        np.testing.assert_allclose(b[:, 2], b[0, 2], atol=1e-12)
        np.testing.assert_allclose(n[:, 2], n[0, 2], atol=1e-12)

    def test_up_parallel_to_tangent_still_gives_a_frame(self):
        t, n, b = propagate_frames([[0.0, 1.0, 0.0], [0.0, 1.0, 0.0]], up=(0.0, 1.0, 0.0))
        assert np.all(np.isfinite(n))
        assert abs(np.dot(n[0], t[0])) < 1e-12
        assert np.linalg.norm(b[0]) == pytest.approx(1.0)

    def test_frame_normals_follow_section_angle(self):
        n = np.array([[0.0, 1.0, 0.0]])
        b = np.array([[0.0, 0.0, 1.0]])
        out = frame_normals(n, b, np.array([0.0, math.pi / 2]))
        assert out.shape == (1, 2, 3)
        np.testing.assert_allclose(out[0], [[0.0, 1.0, 0.0], [0.0, 0.0, 1.0]], atol=1e-12)

    def test_flattened_section_tilts_normals_toward_short_axis(self):
        n = np.array([[0.0, 1.0, 0.0]])
        b = np.array([[0.0, 0.0, 1.0]])
        out = frame_normals(n, b, np.array([math.pi / 4]), scale_n=0.5)[0, 0]
        assert out[1] > out[2]
