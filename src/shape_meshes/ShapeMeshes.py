#!/usr/bin/env python3
# ShapeMeshes.py – load / draw entry points for every primitive shape
"""
``ShapeMeshes`` pairs each shape with a ``load_*_mesh`` call (generate and
upload once) and a ``draw_*_mesh`` call (draw the stored handle, optionally one
named part, optionally as wireframe).

Tapered torus, partial cone, curved cone, spiral, sine cone and
superellipsoid are regenerated on every draw: their ``load_*_mesh`` only
allocates the persistent handle and their ``draw_*_mesh`` takes the shape
parameters.
"""
import warnings
from typing import Optional, Type

from shape_meshes.MeshDataTypes import AttributeLayout, BoxSide, MeshBuffer
from shape_meshes.Rendering.MeshRegistry import MeshRegistry, RenderBackend
from shape_meshes import ShapeParameters as sp


def _regenerator(params_type: Type[sp.ShapeParameters]):
    def regenerate(**params) -> MeshBuffer:
        return params_type(**params).generate()
    return regenerate


class ShapeMeshes:
    def __init__(self, backend: RenderBackend, layout: Optional[AttributeLayout] = None):
        self.registry = MeshRegistry(backend, layout)

    def release_all(self) -> None:
        self.registry.release_all()

    def _load(self, name: str, params: sp.ShapeParameters) -> MeshBuffer:
        mesh = params.generate()
        self.registry.load(name, mesh)
        return mesh

    def _draw_parts(self, name: str, wireframe: bool, **parts: bool) -> None:
        for part, enabled in parts.items():
            if enabled:
                self.registry.draw(name, part, wireframe)

    # ------------------------------------------------------------------ box
    def load_box_mesh(self, size: float = 1.0) -> MeshBuffer:
        return self._load("box", sp.BoxParameters(size))

    def draw_box_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("box", wireframe=wireframe)

    def draw_box_mesh_side(self, side: BoxSide, wireframe: bool = False) -> None:
        self.registry.draw("box", BoxSide(side).name.lower(), wireframe)

    # ------------------------------------------------------------------ flat-faced
    def load_plane_mesh(self, width: float = 2.0, height: float = 2.0) -> MeshBuffer:
        return self._load("plane", sp.PlaneParameters(width, height))

    def draw_plane_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("plane", wireframe=wireframe)

    def load_prism_mesh(self, size: float = 1.0) -> MeshBuffer:
        return self._load("prism", sp.PrismParameters(size))

    def draw_prism_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("prism", wireframe=wireframe)

    def load_pyramid3_mesh(self, base_size: float = 1.0, height: float = 1.0) -> MeshBuffer:
        return self._load("pyramid3", sp.Pyramid3Parameters(base_size, height))

    def draw_pyramid3_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("pyramid3", wireframe=wireframe)

    def load_pyramid4_mesh(self, base_size: float = 1.0, height: float = 1.0) -> MeshBuffer:
        return self._load("pyramid4", sp.Pyramid4Parameters(base_size, height))

    def draw_pyramid4_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("pyramid4", wireframe=wireframe)

    # ------------------------------------------------------------------ fin
    def load_fin_mesh(self, base_length: float = 2.9, top_length: float = 0.75,
                      height: float = 2.5, thickness: float = 0.1) -> MeshBuffer:
        return self._load("fin", sp.FinParameters(base_length, top_length, height, thickness))

    def draw_fin_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("fin", wireframe=wireframe)

    def draw_fin_sides(self, wireframe: bool = False) -> None:
        """Front and back faces, the ones that carry a texture."""
        self.registry.draw("fin", "front_back", wireframe)

    def draw_fin_front_only(self, wireframe: bool = False) -> None:
        self.registry.draw("fin", "front", wireframe)

    def draw_fin_back_only(self, wireframe: bool = False) -> None:
        self.registry.draw("fin", "back", wireframe)

    def draw_fin_untextured_sides(self, wireframe: bool = False) -> None:
        """Top, bottom, left and slope faces."""
        self.registry.draw("fin", "edges", wireframe)

    # ------------------------------------------------------------------ cone / cylinders
    def load_cone_mesh(self, radius: float = 1.0, height: float = 1.0, num_slices: int = 18) -> MeshBuffer:
        return self._load("cone", sp.ConeParameters(radius, height, num_slices))

    def draw_cone_mesh(self, draw_bottom: bool = True, wireframe: bool = False) -> None:
        self._draw_parts("cone", wireframe, bottom=draw_bottom, sides=True)

    def load_cylinder_mesh(self, radius: float = 1.0, height: float = 1.0, num_slices: int = 36) -> MeshBuffer:
        return self._load("cylinder", sp.CylinderParameters(radius, height, num_slices))

    def draw_cylinder_mesh(self, draw_top: bool = True, draw_bottom: bool = True,
                           draw_sides: bool = True, wireframe: bool = False) -> None:
        self._draw_parts("cylinder", wireframe, bottom=draw_bottom, top=draw_top, sides=draw_sides)

    def load_tapered_cylinder_mesh(self, bottom_radius: float = 1.0, top_radius: float = 0.5,
                                   height: float = 1.0, num_slices: int = 18) -> MeshBuffer:
        return self._load("tapered_cylinder",
                          sp.TaperedCylinderParameters(bottom_radius, top_radius, height, num_slices))

    def draw_tapered_cylinder_mesh(self, draw_top: bool = True, draw_bottom: bool = True,
                                   draw_sides: bool = True, wireframe: bool = False) -> None:
        self._draw_parts("tapered_cylinder", wireframe, bottom=draw_bottom, top=draw_top, sides=draw_sides)

    def load_tube_mesh(self, outer_radius: float = 2.0, inner_radius: float = 1.7,
                       height: float = 1.0, num_slices: int = 30) -> MeshBuffer:
        return self._load("tube", sp.TubeParameters(outer_radius, inner_radius, height, num_slices))

    def draw_tube_mesh(self, draw_outer: bool = True, draw_inner: bool = True,
                       draw_caps: bool = True, wireframe: bool = False) -> None:
        self._draw_parts("tube", wireframe, outer=draw_outer, inner=draw_inner,
                         bottom=draw_caps, top=draw_caps)

    # ------------------------------------------------------------------ sphere / torus
    def load_sphere_mesh(self, latitude_segments: int = 18, longitude_segments: int = 18,
                         radius: float = 1.0) -> MeshBuffer:
        return self._load("sphere", sp.SphereParameters(latitude_segments, longitude_segments, radius))

    def draw_sphere_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("sphere", wireframe=wireframe)

    def draw_half_sphere_mesh(self, wireframe: bool = False) -> None:
        """Northern half of the loaded sphere."""
        self.registry.draw("sphere", "upper_half", wireframe)

    def load_hemisphere_mesh(self, latitude_segments: int = 18, longitude_segments: int = 18,
                             radius: float = 1.0) -> MeshBuffer:
        return self._load("hemisphere", sp.HemisphereParameters(latitude_segments, longitude_segments, radius))

    def draw_hemisphere_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("hemisphere", wireframe=wireframe)

    def load_torus_mesh(self, main_radius: float = 1.0, tube_radius: float = 0.25,
                        main_segments: int = 18, tube_segments: int = 18) -> MeshBuffer:
        return self._load("torus", sp.TorusParameters(main_radius, tube_radius, main_segments, tube_segments))

    def draw_torus_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("torus", wireframe=wireframe)

    def draw_half_torus_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("torus", "half", wireframe)

    def load_extra_torus_mesh1(self, thickness: float = 0.4) -> MeshBuffer:
        return self._load("extra_torus1", sp.ExtraTorusParameters(thickness))

    def draw_extra_torus_mesh1(self, wireframe: bool = False) -> None:
        self.registry.draw("extra_torus1", wireframe=wireframe)

    def load_extra_torus_mesh2(self, thickness: float = 0.6) -> MeshBuffer:
        return self._load("extra_torus2", sp.ExtraTorusParameters(thickness))

    def draw_extra_torus_mesh2(self, wireframe: bool = False) -> None:
        self.registry.draw("extra_torus2", wireframe=wireframe)

    def load_spring_mesh(self, main_radius: float = 1.0, tube_radius: float = 0.1, coils: int = 6,
                         tube_segments: int = 18, spring_length: float = 4.0) -> MeshBuffer:
        return self._load("spring", sp.SpringParameters(main_radius, tube_radius, coils,
                                                        tube_segments, spring_length))

    def draw_spring_mesh(self, wireframe: bool = False) -> None:
        self.registry.draw("spring", wireframe=wireframe)

    # ------------------------------------------------------------------ regenerated per draw
    def load_partial_cone_mesh(self) -> None:
        self.registry.allocate("partial_cone", _regenerator(sp.PartialConeParameters))

    def draw_partial_cone_mesh(self, wireframe: bool = False, **params) -> MeshBuffer:
        """params: radius, height, num_slices, arc_degrees."""
        return self.registry.draw_dynamic("partial_cone", wireframe, **params)

    def load_curved_cone_mesh(self) -> None:
        self.registry.allocate("curved_cone", _regenerator(sp.CurvedConeParameters))

    def draw_curved_cone_mesh(self, wireframe: bool = False, **params) -> MeshBuffer:
        """params: num_slices, curve_steps, radius, height, bend_radius."""
        return self.registry.draw_dynamic("curved_cone", wireframe, **params)

    def load_tapered_torus_mesh(self) -> None:
        self.registry.allocate("tapered_torus", _regenerator(sp.TaperedTorusParameters))

    def draw_tapered_torus_mesh(self, wireframe: bool = False, **params) -> MeshBuffer:
        """params: main_radius, tube_radius_start, tube_radius_end, main_segments,
        tube_segments, sweep_degrees."""
        return self.registry.draw_dynamic("tapered_torus", wireframe, **params)

    def load_spiral_mesh(self) -> None:
        self.registry.allocate("spiral", _regenerator(sp.SpiralParameters))

    def draw_spiral_mesh(self, wireframe: bool = False, **params) -> MeshBuffer:
        return self.registry.draw_dynamic("spiral", wireframe, **params)

    def load_sine_cone_mesh(self) -> None:
        self.registry.allocate("sine_cone", _regenerator(sp.SineConeParameters))

    def draw_sine_cone_mesh(self, wireframe: bool = False, **params) -> MeshBuffer:
        return self.registry.draw_dynamic("sine_cone", wireframe, **params)

    def load_superellipsoid_mesh(self) -> None:
        self.registry.allocate("superellipsoid", _regenerator(sp.SuperellipsoidParameters))

    def draw_superellipsoid_mesh(self, wireframe: bool = False, **params) -> MeshBuffer:
        return self.registry.draw_dynamic("superellipsoid", wireframe, **params)


def _deprecated(old: str, new: str) -> None:
    warnings.warn(f"{old}() is deprecated; use {new}(wireframe=True)", DeprecationWarning, stacklevel=3)


class LegacyShapeMeshes(ShapeMeshes):
    """Old ``*_lines`` entry points kept for existing callers; each warns once per call site."""

    def draw_box_mesh_lines(self) -> None:
        _deprecated("draw_box_mesh_lines", "draw_box_mesh")
        self.draw_box_mesh(wireframe=True)

    def draw_cone_mesh_lines(self) -> None:
        _deprecated("draw_cone_mesh_lines", "draw_cone_mesh")
        self.draw_cone_mesh(wireframe=True)

    def draw_cylinder_mesh_lines(self) -> None:
        _deprecated("draw_cylinder_mesh_lines", "draw_cylinder_mesh")
        self.draw_cylinder_mesh(wireframe=True)

    def draw_plane_mesh_lines(self) -> None:
        _deprecated("draw_plane_mesh_lines", "draw_plane_mesh")
        self.draw_plane_mesh(wireframe=True)

    def draw_prism_mesh_lines(self) -> None:
        _deprecated("draw_prism_mesh_lines", "draw_prism_mesh")
        self.draw_prism_mesh(wireframe=True)

    def draw_pyramid3_mesh_lines(self) -> None:
        _deprecated("draw_pyramid3_mesh_lines", "draw_pyramid3_mesh")
        self.draw_pyramid3_mesh(wireframe=True)

    def draw_pyramid4_mesh_lines(self) -> None:
        _deprecated("draw_pyramid4_mesh_lines", "draw_pyramid4_mesh")
        self.draw_pyramid4_mesh(wireframe=True)

    def draw_sphere_mesh_lines(self) -> None:
        _deprecated("draw_sphere_mesh_lines", "draw_sphere_mesh")
        self.draw_sphere_mesh(wireframe=True)

    def draw_half_sphere_mesh_lines(self) -> None:
        _deprecated("draw_half_sphere_mesh_lines", "draw_hemisphere_mesh")
        self.draw_hemisphere_mesh(wireframe=True)

    def draw_tapered_cylinder_mesh_lines(self) -> None:
        _deprecated("draw_tapered_cylinder_mesh_lines", "draw_tapered_cylinder_mesh")
        self.draw_tapered_cylinder_mesh(wireframe=True)

    def draw_torus_mesh_lines(self) -> None:
        _deprecated("draw_torus_mesh_lines", "draw_torus_mesh")
        self.draw_torus_mesh(wireframe=True)

    def draw_half_torus_mesh_lines(self) -> None:
        _deprecated("draw_half_torus_mesh_lines", "draw_half_torus_mesh")
        self.draw_half_torus_mesh(wireframe=True)
