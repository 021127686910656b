"""
Scene Composer

Maps a Configuration and its catalog entry to a SceneGraph. Pure function,
no Streamlit or renderer imports; the renderer adapter in ui/scene_renderer.py
turns the result into pixels.

Topology is fixed for every model and color, in this order:
body, underbody, wheel_front, wheel_rear, ground. Only the body size (from the
catalog) and the paint color vary.
"""

import math

from domain.catalog import CatalogEntry
from domain.errors import InvalidKey
from domain.models import Configuration
from domain.scene import (
    BoxGeometry,
    Camera,
    CylinderGeometry,
    Light,
    LightKind,
    Material,
    MaterialKind,
    Mesh,
    OrbitLimits,
    PlaneGeometry,
    SceneGraph,
)


# =============================================================================
# Constants
# =============================================================================

PAINT_METALNESS = 0.8
PAINT_ROUGHNESS = 0.2
BODY_ELEVATION = 0.5

UNDERBODY_SIZE = (2.5, 0.6, 1.2)
UNDERBODY_COLOR = "#111111"

WHEEL_RADIUS = 0.4
WHEEL_WIDTH = 0.2
WHEEL_SEGMENTS = 32
WHEEL_COLOR = "#222222"
# (name, x) pairs; both hubs sit at the same height and lateral offset
WHEEL_OFFSETS = (("wheel_front", 1.2), ("wheel_rear", -1.2))
WHEEL_Y = 0.0
WHEEL_Z = 0.6

GROUND_SIZE = 12.0
GROUND_Y = -0.5
GROUND_SHADOW_OPACITY = 0.4

AMBIENT_INTENSITY = 0.6
DIRECTIONAL_INTENSITY = 1.2
DIRECTIONAL_POSITION = (10.0, 10.0, 5.0)

CAMERA_POSITION = (5.0, 3.0, 5.0)
CAMERA_FOV = 50.0
# Stop just above the horizon so the camera never dips under the ground plane
MAX_POLAR_ANGLE = math.pi / 2.2


def compose(config: Configuration, catalog_entry: CatalogEntry) -> SceneGraph:
    """
    Build the scene for a configuration.

    Args:
        config: The configuration to draw
        catalog_entry: Catalog entry for config.model_key

    Returns:
        A SceneGraph; identical inputs always give an equal graph

    Raises:
        InvalidKey: If catalog_entry does not belong to config.model_key
    """
    if catalog_entry.model_key != config.model_key:
        raise InvalidKey(
            f"Catalog entry {catalog_entry.model_key.value!r} does not match "
            f"configuration model {config.model_key.value!r}"
        )

    meshes = (
        _body(config.color_value, catalog_entry.body_size),
        _underbody(),
        *(_wheel(name, x) for name, x in WHEEL_OFFSETS),
        _ground(),
    )
    lights = (
        Light(LightKind.AMBIENT, AMBIENT_INTENSITY),
        Light(
            LightKind.DIRECTIONAL,
            DIRECTIONAL_INTENSITY,
            position=DIRECTIONAL_POSITION,
            cast_shadow=True,
        ),
    )
    camera = Camera(
        position=CAMERA_POSITION,
        fov=CAMERA_FOV,
        orbit=OrbitLimits(enable_pan=False, max_polar_angle=MAX_POLAR_ANGLE),
    )
    return SceneGraph(meshes=meshes, lights=lights, camera=camera)


def _body(color_value: str, size) -> Mesh:
    length, height, width = size
    return Mesh(
        name="body",
        geometry=BoxGeometry(length, height, width),
        material=Material(
            color=color_value,
            metalness=PAINT_METALNESS,
            roughness=PAINT_ROUGHNESS,
        ),
        position=(0.0, BODY_ELEVATION, 0.0),
        cast_shadow=True,
    )


def _underbody() -> Mesh:
    return Mesh(
        name="underbody",
        geometry=BoxGeometry(*UNDERBODY_SIZE),
        material=Material(color=UNDERBODY_COLOR),
    )


def _wheel(name: str, x: float) -> Mesh:
    return Mesh(
        name=name,
        geometry=CylinderGeometry(WHEEL_RADIUS, WHEEL_RADIUS, WHEEL_WIDTH, WHEEL_SEGMENTS),
        material=Material(color=WHEEL_COLOR),
        position=(x, WHEEL_Y, WHEEL_Z),
        rotation=(0.0, 0.0, math.pi / 2),
    )


def _ground() -> Mesh:
    return Mesh(
        name="ground",
        geometry=PlaneGeometry(GROUND_SIZE, GROUND_SIZE),
        material=Material(kind=MaterialKind.SHADOW, opacity=GROUND_SHADOW_OPACITY),
        position=(0.0, GROUND_Y, 0.0),
        rotation=(-math.pi / 2, 0.0, 0.0),
        receive_shadow=True,
    )
