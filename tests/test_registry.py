"""Unit tests for MeshRegistry against a recording backend."""

import numpy as np
import pytest

from shape_meshes.Geometry.MeshMaker import MeshMaker
from shape_meshes.MeshDataTypes import AttributeLayout, MeshBuffer, Topology
from shape_meshes.Rendering.MeshRegistry import (DynamicMesh, MeshNotLoadedError, MeshRegistry,
                                                 StaticMesh)
from shape_meshes.ShapeParameters import PartialConeParameters


@pytest.fixture
def registry(backend):
    return MeshRegistry(backend)


def _regenerate(**params):
    return PartialConeParameters(**params).generate()


class TestStaticMeshes:
    """Tests for load-once meshes."""

    def test_load_uploads_once(self, registry, backend):
        entry = registry.load("box", MeshMaker.create_box())
        assert isinstance(entry, StaticMesh)
        assert (entry.vertex_count, entry.index_count) == (24, 36)
        assert backend.calls == [("create", entry.handle, False)]
        vertices, indices = backend.buffers[entry.handle]
        assert vertices.size == 24 * 8
        assert indices.size == 36
        assert "box" in registry
        assert len(registry) == 1

    def test_every_mesh_gets_the_registry_layout(self, registry, backend):
        registry.load("a", MeshMaker.create_box())
        registry.load("b", MeshMaker.create_plane())
        assert all(layout == AttributeLayout.default() for layout in backend.layouts.values())

    def test_full_draw(self, registry, backend):
        entry = registry.load("box", MeshMaker.create_box())
        registry.draw("box")
        assert backend.draws() == [("elements", entry.handle, Topology.Triangles, 36, 0)]

    def test_sub_range_draw_uses_byte_offset(self, registry, backend):
        entry = registry.load("box", MeshMaker.create_box())
        registry.draw("box", "top")
        assert backend.draws() == [("elements", entry.handle, Topology.Triangles, 6, 96)]

    def test_non_indexed_mesh_draws_arrays(self, registry, backend):
        entry = registry.load("prism", MeshMaker.create_prism())
        registry.draw("prism")
        registry.draw("prism", "top")
        assert backend.draws() == [
            ("arrays", entry.handle, Topology.Triangles, 0, 24),
            ("arrays", entry.handle, Topology.Triangles, 3, 3),
        ]

    def test_wireframe_is_restored(self, registry, backend):
        registry.load("box", MeshMaker.create_box())
        registry.draw("box", wireframe=True)
        assert [c[0] for c in backend.calls[1:]] == ["wireframe", "elements", "wireframe"]
        assert backend.wireframe is False

    def test_wireframe_is_restored_when_draw_fails(self, registry, backend):
        registry.load("box", MeshMaker.create_box())

        def broken(*args):
            raise RuntimeError("lost context")
        backend.draw_elements = broken

        with pytest.raises(RuntimeError):
            registry.draw("box", wireframe=True)
        assert backend.wireframe is False

    def test_draw_before_load_fails_loudly(self, registry):
        with pytest.raises(MeshNotLoadedError, match="cone"):
            registry.draw("cone")

    def test_unknown_part(self, registry):
        registry.load("box", MeshMaker.create_box())
        with pytest.raises(ValueError, match="lid"):
            registry.draw("box", "lid")

    def test_reload_replaces_old_handle(self, registry, backend):
        first = registry.load("box", MeshMaker.create_box())
        second = registry.load("box", MeshMaker.create_box(2.0))
        assert ("delete", first.handle) in backend.calls
        assert registry.get("box") is second
        assert len(registry) == 1

    def test_failed_reload_keeps_old_mesh(self, registry, backend):
        first = registry.load("box", MeshMaker.create_box())

        def broken(*args, **kwargs):
            raise RuntimeError("out of memory")
        backend.create_mesh = broken

        with pytest.raises(RuntimeError):
            registry.load("box", MeshMaker.create_box(2.0))
        assert registry.get("box") is first
        assert backend.calls_named("delete") == []

    def test_invalid_buffer_is_rejected_before_upload(self, registry, backend):
        bad = MeshBuffer(np.zeros((3, 8)), [0, 1, 5])
        with pytest.raises(ValueError):
            registry.load("bad", bad)
        assert backend.calls == []
        assert "bad" not in registry

    def test_release_all(self, registry, backend):
        a = registry.load("a", MeshMaker.create_box())
        b = registry.load("b", MeshMaker.create_plane())
        registry.release_all()
        assert len(registry) == 0
        assert backend.calls_named("delete") == [("delete", a.handle), ("delete", b.handle)]

    def test_release_unknown_name_is_a_no_op(self, registry, backend):
        registry.release("nothing")
        assert backend.calls == []


class TestDynamicMeshes:
    """Tests for meshes regenerated on every draw."""

    def test_allocate_creates_an_empty_dynamic_buffer(self, registry, backend):
        entry = registry.allocate("partial_cone", _regenerate)
        assert isinstance(entry, DynamicMesh)
        assert not entry.filled
        assert backend.calls == [("create", entry.handle, True)]
        vertices, indices = backend.buffers[entry.handle]
        assert vertices.size == 0 and indices.size == 0

    def test_allocate_is_idempotent(self, registry, backend):
        first = registry.allocate("partial_cone", _regenerate)
        second = registry.allocate("partial_cone", _regenerate)
        assert first is second
        assert len(backend.calls_named("create")) == 1

    def test_draw_dynamic_replaces_buffers_in_place(self, registry, backend):
        entry = registry.allocate("partial_cone", _regenerate)
        a = registry.draw_dynamic("partial_cone", num_slices=4)
        b = registry.draw_dynamic("partial_cone", num_slices=8, arc_degrees=90.0)
        assert a.index_count == 24
        assert b.index_count == 48
        assert backend.calls_named("update") == [("update", entry.handle)] * 2
        assert backend.draws()[-1] == ("elements", entry.handle, Topology.Triangles, 48, 0)
        assert entry.index_count == 48
        assert len(backend.calls_named("create")) == 1

    def test_plain_draw_reuses_last_geometry(self, registry, backend):
        entry = registry.allocate("partial_cone", _regenerate)
        registry.draw_dynamic("partial_cone", num_slices=5)
        registry.draw("partial_cone", wireframe=True)
        assert backend.draws()[-1] == ("elements", entry.handle, Topology.Triangles, 30, 0)

    def test_plain_draw_before_first_generation_fails(self, registry):
        registry.allocate("partial_cone", _regenerate)
        with pytest.raises(MeshNotLoadedError):
            registry.draw("partial_cone")

    def test_draw_dynamic_on_static_mesh(self, registry):
        registry.load("box", MeshMaker.create_box())
        with pytest.raises(TypeError):
            registry.draw_dynamic("box", size=2.0)

    def test_draw_dynamic_unknown_name(self, registry):
        with pytest.raises(MeshNotLoadedError):
            registry.draw_dynamic("spiral")

    def test_draw_dynamic_rejects_unknown_parameters(self, registry):
        registry.allocate("partial_cone", _regenerate)
        with pytest.raises(TypeError):
            registry.draw_dynamic("partial_cone", bogus=1)
