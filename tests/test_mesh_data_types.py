"""Unit tests for the mesh containers, clamps and vertex layout."""

import math

import numpy as np
import pytest

from shape_meshes.MeshDataTypes import (FLOATS_PER_VERTEX, VERTEX_STRIDE, AttributeLayout,
                                        MeshBuffer, MeshBuilder, SubRange, Topology,
                                        clamp_extent, clamp_flatten, clamp_segments, clamp_sweep,
                                        close_seam, ring_angles)


class TestLayout:
    """Tests for the interleaved vertex layout."""

    def test_stride_is_eight_floats(self):
        assert FLOATS_PER_VERTEX == 8
        assert VERTEX_STRIDE == 32

    def test_default_layout_offsets(self):
        layout = AttributeLayout.default()
        assert layout.stride == 32
        assert [(a.location, a.size, a.offset) for a in layout.attributes] == [
            (0, 3, 0), (1, 3, 12), (2, 2, 24)]

    def test_layouts_compare_by_value(self):
        assert AttributeLayout.default() == AttributeLayout.default()


class TestClamps:
    """Tests for silent parameter correction."""

    def test_segments(self):
        assert clamp_segments(1) == 3
        assert clamp_segments(-5) == 3
        assert clamp_segments(12) == 12

    def test_extent(self):
        assert clamp_extent(0.0) == 0.01
        assert clamp_extent(-2.0) == 0.01
        assert clamp_extent(0.0, 0.1) == 0.1
        assert clamp_extent(1.5) == 1.5

    def test_sweep_and_flatten(self):
        assert clamp_sweep(-10) == 0.0
        assert clamp_sweep(400) == 360.0
        assert clamp_flatten(2.0) == 0.95
        assert clamp_flatten(-1.0) == 0.0


class TestRings:
    """Tests for ring sampling helpers."""

    def test_closed_ring_has_one_sample_per_slice(self):
        a = ring_angles(4, closed=True)
        np.testing.assert_allclose(a, [0, math.pi / 2, math.pi, 3 * math.pi / 2])

    def test_open_ring_reaches_end_of_sweep(self):
        a = ring_angles(4, closed=False, start=-1.0, sweep=2.0)
        assert len(a) == 5
        assert a[0] == -1.0
        assert a[-1] == pytest.approx(1.0)

    def test_close_seam_copies_first_column(self):
        grid = np.arange(2 * 3 * 2, dtype=float).reshape(2, 3, 2)
        close_seam(grid)
        np.testing.assert_array_equal(grid[:, -1], grid[:, 0])


class TestMeshBuffer:
    """Tests for MeshBuffer and MeshBuilder."""

    def _triangle(self):
        builder = MeshBuilder()
        base = builder.add_vertices([[0, 0, 0], [1, 0, 0], [0, 1, 0]],
                                    np.tile([0, 0, 1], (3, 1)),
                                    [[0, 0], [1, 0], [0, 1]])
        builder.add_triangles([[base, base + 1, base + 2]], name="face")
        return builder.build(label="tri")

    def test_builder_output(self):
        mesh = self._triangle()
        assert mesh.vertices.shape == (3, 8)
        assert mesh.vertices.dtype == np.float32
        assert mesh.indices.dtype == np.uint32
        assert mesh.ranges["face"] == SubRange("face", 0, 3)
        assert mesh.metadata == {"label": "tri"}
        assert mesh.interleaved().size == 24

    def test_attribute_views(self):
        mesh = self._triangle()
        np.testing.assert_array_equal(mesh.normals, np.tile([0, 0, 1], (3, 1)))
        np.testing.assert_array_equal(mesh.uvs[1], [1, 0])

    def test_add_vertices_rejects_mismatched_lengths(self):
        with pytest.raises(ValueError):
            MeshBuilder().add_vertices([[0, 0, 0]], [[0, 0, 1], [0, 0, 1]], [[0, 0]])

    def test_validate_rejects_out_of_range_index(self):
        mesh = MeshBuffer(np.zeros((3, 8)), [0, 1, 3])
        with pytest.raises(ValueError, match="out of range"):
            mesh.validate()

    def test_validate_rejects_oversized_range(self):
        mesh = MeshBuffer(np.zeros((3, 8)), [0, 1, 2], ranges={"x": SubRange("x", 0, 6)})
        with pytest.raises(ValueError, match="exceeds"):
            mesh.validate()

    def test_unknown_sub_range(self):
        with pytest.raises(ValueError, match="face"):
            self._triangle().sub_range("missing")

    def test_non_indexed_triangles_are_consecutive(self):
        mesh = MeshBuffer(np.zeros((6, 8)))
        assert not mesh.is_indexed
        assert mesh.element_count == 6
        np.testing.assert_array_equal(mesh.triangles(), [[0, 1, 2], [3, 4, 5]])

    def test_triangles_requires_triangle_list(self):
        mesh = MeshBuffer(np.zeros((4, 8)), topology=Topology.TriangleStrip)
        with pytest.raises(ValueError):
            mesh.triangles()

    def test_sub_range_byte_offset(self):
        assert SubRange("top", 24, 6).byte_offset == 96
