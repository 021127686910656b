"""
Scene Graph

Declarative, renderer-agnostic description of what to draw: meshes with
geometry, transform and material, plus lights and a camera. Every node is a
frozen dataclass, so two scenes compare equal exactly when they describe the
same primitives in the same order with the same parameters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

Vec3 = tuple[float, float, float]


class MaterialKind(Enum):
    STANDARD = "standard"
    SHADOW = "shadow"


class LightKind(Enum):
    AMBIENT = "ambient"
    DIRECTIONAL = "directional"


@dataclass(frozen=True)
class BoxGeometry:
    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class CylinderGeometry:
    """Cylinder along the local Y axis."""
    radius_top: float
    radius_bottom: float
    height: float
    radial_segments: int = 32


@dataclass(frozen=True)
class PlaneGeometry:
    """Plane in the local XY plane, facing +Z."""
    width: float
    height: float


Geometry = Union[BoxGeometry, CylinderGeometry, PlaneGeometry]


@dataclass(frozen=True)
class Material:
    """
    Surface parameters.

    STANDARD materials are lit with metalness/roughness; SHADOW materials
    are invisible except where shadows fall on them.
    """
    kind: MaterialKind = MaterialKind.STANDARD
    color: str = "#ffffff"
    metalness: float = 0.0
    roughness: float = 1.0
    opacity: float = 1.0


@dataclass(frozen=True)
class Mesh:
    name: str
    geometry: Geometry
    material: Material
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)  # Euler XYZ, radians
    cast_shadow: bool = False
    receive_shadow: bool = False


@dataclass(frozen=True)
class Light:
    kind: LightKind
    intensity: float
    position: Optional[Vec3] = None
    cast_shadow: bool = False


@dataclass(frozen=True)
class OrbitLimits:
    """Allowed camera orbit; polar angle is measured from straight up."""
    enable_pan: bool = False
    min_polar_angle: float = 0.0
    max_polar_angle: float = 3.141592653589793


@dataclass(frozen=True)
class Camera:
    position: Vec3
    target: Vec3 = (0.0, 0.0, 0.0)
    fov: float = 50.0
    orbit: OrbitLimits = field(default_factory=OrbitLimits)


@dataclass(frozen=True)
class SceneGraph:
    meshes: tuple[Mesh, ...]
    lights: tuple[Light, ...]
    camera: Camera

    def mesh(self, name: str) -> Mesh:
        """Return the mesh called ``name``; raises KeyError if absent."""
        for m in self.meshes:
            if m.name == name:
                return m
        raise KeyError(name)
