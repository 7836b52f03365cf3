"""Unit tests for the triangle index emitters."""

import numpy as np

from shape_meshes.Geometry import Topology as topo


class TestFan:
    """Tests for disk fans."""

    def test_wrapped_fan_closes_onto_first_rim_vertex(self):
        tris = topo.fan(0, 1, 4)
        assert tris.shape == (4, 3)
        assert tris.dtype == np.uint32
        np.testing.assert_array_equal(tris[0], [0, 1, 2])
        np.testing.assert_array_equal(tris[-1], [0, 4, 1])

    def test_open_fan_uses_duplicated_last_vertex(self):
        tris = topo.fan(0, 1, 4, wrap=False)
        np.testing.assert_array_equal(tris[-1], [0, 4, 5])

    def test_upward_reverses_winding(self):
        down = topo.fan(7, 10, 5)
        up = topo.fan(7, 10, 5, upward=True)
        np.testing.assert_array_equal(up, down[:, [0, 2, 1]])


class TestGrid:
    """Tests for rectangular grids."""

    def test_grid_counts_and_first_cell(self):
        tris = topo.grid(2, 3)
        assert tris.shape == (12, 3)
        np.testing.assert_array_equal(tris[0], [0, 4, 1])
        np.testing.assert_array_equal(tris[1], [1, 4, 5])
        assert tris.max() == 11

    def test_wrapped_grid_reuses_first_column(self):
        tris = topo.grid(1, 3, wrap=True)
        assert tris.max() == 5
        np.testing.assert_array_equal(tris[-2], [2, 5, 0])
        np.testing.assert_array_equal(tris[-1], [0, 5, 3])

    def test_start_offsets_every_index(self):
        np.testing.assert_array_equal(topo.grid(2, 2, start=100), topo.grid(2, 2) + 100)

    def test_flip_swaps_last_two_corners(self):
        np.testing.assert_array_equal(topo.grid(3, 4, flip=True), topo.grid(3, 4)[:, [0, 2, 1]])

    def test_every_quad_is_covered_once(self):
        tris = topo.grid(4, 5)
        edges = {}
        for a, b, c in tris.tolist():
            for e in ((a, b), (b, c), (c, a)):
                key = tuple(sorted(e))
                edges[key] = edges.get(key, 0) + 1
        # interior edges are shared by exactly two triangles
        assert max(edges.values()) == 2


class TestRingWall:
    """Tests for walls between two rings and seam stitching."""

    def test_ring_wall_between_distant_rings(self):
        tris = topo.ring_wall(0, 10, 2)
        np.testing.assert_array_equal(tris, [[0, 10, 1], [1, 10, 11], [1, 11, 2], [2, 11, 12]])

    def test_ring_wall_matches_single_row_grid(self):
        np.testing.assert_array_equal(topo.ring_wall(0, 7, 6), topo.grid(1, 6))

    def test_seam_stitch_wraps(self):
        tris = topo.seam_stitch(0, 5, 3)
        assert tris.shape == (6, 3)
        np.testing.assert_array_equal(tris[-2], [2, 7, 0])
        np.testing.assert_array_equal(tris[-1], [0, 7, 5])
        assert tris.max() == 7
