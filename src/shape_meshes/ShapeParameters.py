# ShapeParameters.py
"""
One frozen value type per shape family.  ``params.generate()`` (or the module-level
:func:`generate`) runs the matching generator; parameters are never mutated, and
out-of-range values are clamped inside the generator.
"""
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Type

from shape_meshes.MeshDataTypes import MeshBuffer
from shape_meshes.Geometry.MeshMaker import MeshMaker
from shape_meshes.Geometry.SurfaceMaker import SurfaceMaker
from shape_meshes.Geometry.SweepMaker import SweepMaker


@dataclass(frozen=True)
class ShapeParameters:
    def generate(self) -> MeshBuffer:
        return generate(self)


# === Fixed topology ===
@dataclass(frozen=True)
class BoxParameters(ShapeParameters):
    size: float = 1.0

@dataclass(frozen=True)
class PlaneParameters(ShapeParameters):
    width: float = 2.0
    height: float = 2.0

@dataclass(frozen=True)
class PrismParameters(ShapeParameters):
    size: float = 1.0

@dataclass(frozen=True)
class Pyramid3Parameters(ShapeParameters):
    base_size: float = 1.0
    height: float = 1.0

@dataclass(frozen=True)
class Pyramid4Parameters(ShapeParameters):
    base_size: float = 1.0
    height: float = 1.0

@dataclass(frozen=True)
class FinParameters(ShapeParameters):
    base_length: float = 2.9
    top_length: float = 0.75
    height: float = 2.5
    thickness: float = 0.1

# === Disk-capped solids ===
@dataclass(frozen=True)
class ConeParameters(ShapeParameters):
    radius: float = 1.0
    height: float = 1.0
    num_slices: int = 18

@dataclass(frozen=True)
class PartialConeParameters(ShapeParameters):
    radius: float = 1.0
    height: float = 1.0
    num_slices: int = 18
    arc_degrees: float = 180.0

@dataclass(frozen=True)
class CylinderParameters(ShapeParameters):
    radius: float = 1.0
    height: float = 1.0
    num_slices: int = 36

@dataclass(frozen=True)
class TaperedCylinderParameters(ShapeParameters):
    bottom_radius: float = 1.0
    top_radius: float = 0.5
    height: float = 1.0
    num_slices: int = 18

@dataclass(frozen=True)
class TubeParameters(ShapeParameters):
    outer_radius: float = 2.0
    inner_radius: float = 1.7
    height: float = 1.0
    num_slices: int = 30

# === Latitude / longitude grids ===
@dataclass(frozen=True)
class SphereParameters(ShapeParameters):
    latitude_segments: int = 18
    longitude_segments: int = 18
    radius: float = 1.0

@dataclass(frozen=True)
class HemisphereParameters(SphereParameters):
    pass

@dataclass(frozen=True)
class TorusParameters(ShapeParameters):
    main_radius: float = 1.0
    tube_radius: float = 0.25
    main_segments: int = 18
    tube_segments: int = 18

@dataclass(frozen=True)
class ExtraTorusParameters(ShapeParameters):
    thickness: float = 0.4

@dataclass(frozen=True)
class TaperedTorusParameters(ShapeParameters):
    main_radius: float = 1.0
    tube_radius_start: float = 0.3
    tube_radius_end: float = 0.05
    main_segments: int = 32
    tube_segments: int = 16
    sweep_degrees: float = 270.0

# === Swept tubes ===
@dataclass(frozen=True)
class SpringParameters(ShapeParameters):
    main_radius: float = 1.0
    tube_radius: float = 0.1
    coils: int = 6
    tube_segments: int = 18
    spring_length: float = 4.0

@dataclass(frozen=True)
class CurvedConeParameters(ShapeParameters):
    num_slices: int = 18
    curve_steps: int = 12
    radius: float = 0.5
    height: float = 2.0
    bend_radius: float = 2.0

@dataclass(frozen=True)
class SpiralParameters(ShapeParameters):
    tube_radius: float = 0.1
    flatten_factor: float = 0.0
    loop_spacing: float = 0.3
    num_loops: float = 3.0
    tube_segments: int = 16
    spiral_segments: int = 128

# === Deformed / implicit surfaces ===
@dataclass(frozen=True)
class SineConeParameters(ShapeParameters):
    base_radius: float = 0.5
    height: float = 2.0
    flatten_factor: float = 0.0
    sine_amplitude: float = 0.1
    sine_frequency: float = 2.0
    sine_phase: float = 0.0
    radial_segments: int = 24
    height_segments: int = 24

@dataclass(frozen=True)
class SuperellipsoidParameters(ShapeParameters):
    scale_x: float = 1.0
    scale_y: float = 1.0
    scale_z: float = 1.0
    vertical_exponent: float = 1.0
    horizontal_exponent: float = 1.0
    u_segments: int = 24
    v_segments: int = 24


_GENERATORS: Dict[Type[ShapeParameters], Callable[..., MeshBuffer]] = {
    BoxParameters:             MeshMaker.create_box,
    PlaneParameters:           MeshMaker.create_plane,
    PrismParameters:           MeshMaker.create_prism,
    Pyramid3Parameters:        MeshMaker.create_pyramid3,
    Pyramid4Parameters:        MeshMaker.create_pyramid4,
    FinParameters:             MeshMaker.create_fin,
    ConeParameters:            MeshMaker.create_cone,
    PartialConeParameters:     MeshMaker.create_partial_cone,
    CylinderParameters:        MeshMaker.create_cylinder,
    TaperedCylinderParameters: MeshMaker.create_tapered_cylinder,
    TubeParameters:            MeshMaker.create_tube,
    SphereParameters:          SurfaceMaker.create_sphere,
    HemisphereParameters:      SurfaceMaker.create_hemisphere,
    TorusParameters:           SurfaceMaker.create_torus,
    ExtraTorusParameters:      SurfaceMaker.create_extra_torus,
    TaperedTorusParameters:    SurfaceMaker.create_tapered_torus,
    SpringParameters:          SweepMaker.create_spring,
    CurvedConeParameters:      SweepMaker.create_curved_cone,
    SpiralParameters:          SweepMaker.create_spiral,
    SineConeParameters:        SurfaceMaker.create_sine_cone,
    SuperellipsoidParameters:  SurfaceMaker.create_superellipsoid,
}


def generate(params: ShapeParameters) -> MeshBuffer:
    """Build the mesh described by ``params``."""
    try:
        generator = _GENERATORS[type(params)]
    except KeyError:
        raise TypeError(f"No generator registered for {type(params).__name__}") from None
    return generator(**asdict(params))
