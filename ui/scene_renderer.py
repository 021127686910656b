"""
Scene Renderer

Turns a SceneGraph into a Plotly figure. This is the only module that knows
about pixels; everything upstream works on the declarative scene.

Scene coordinates are Y-up; Plotly's 3D scene is Z-up, so points map
(x, y, z) -> (x, -z, y).

Plotly cannot cap the camera's polar angle, so the orbit limit is approximated
with turntable drag (no roll) and a z-range that starts at the ground plane.
"""

import math

import numpy as np
import plotly.graph_objects as go

from domain.scene import (
    BoxGeometry,
    CylinderGeometry,
    LightKind,
    MaterialKind,
    Mesh,
    PlaneGeometry,
    SceneGraph,
)

# Plotly camera.eye is in normalized scene units
EYE_SCALE = 3.0
SHADOW_TINT = "#2b2b2b"
BACKGROUND = "#1a1a2e"
FIGURE_HEIGHT = 500


# =============================================================================
# Geometry -> triangles
# =============================================================================

def box_triangles(geometry: BoxGeometry) -> tuple[np.ndarray, np.ndarray]:
    """Vertices (8x3) and faces (12x3) of an axis-aligned, centered box."""
    hx, hy, hz = geometry.width / 2, geometry.height / 2, geometry.depth / 2
    vertices = np.array(
        [
            [-hx, -hy, -hz], [hx, -hy, -hz], [hx, hy, -hz], [-hx, hy, -hz],
            [-hx, -hy, hz], [hx, -hy, hz], [hx, hy, hz], [-hx, hy, hz],
        ],
        dtype=float,
    )
    faces = np.array(
        [
            [0, 1, 2], [0, 2, 3],  # back
            [4, 6, 5], [4, 7, 6],  # front
            [0, 4, 5], [0, 5, 1],  # bottom
            [3, 2, 6], [3, 6, 7],  # top
            [0, 3, 7], [0, 7, 4],  # left
            [1, 5, 6], [1, 6, 2],  # right
        ],
        dtype=int,
    )
    return vertices, faces


def cylinder_triangles(geometry: CylinderGeometry) -> tuple[np.ndarray, np.ndarray]:
    """Closed cylinder along local Y with ``radial_segments`` sides."""
    n = geometry.radial_segments
    theta = np.linspace(0.0, 2 * math.pi, n, endpoint=False)
    half = geometry.height / 2
    top = np.column_stack(
        [geometry.radius_top * np.cos(theta), np.full(n, half), geometry.radius_top * np.sin(theta)]
    )
    bottom = np.column_stack(
        [geometry.radius_bottom * np.cos(theta), np.full(n, -half), geometry.radius_bottom * np.sin(theta)]
    )
    centers = np.array([[0.0, half, 0.0], [0.0, -half, 0.0]])
    vertices = np.vstack([top, bottom, centers])
    top_center, bottom_center = 2 * n, 2 * n + 1

    faces = []
    for i in range(n):
        j = (i + 1) % n
        faces.append([i, j, n + i])
        faces.append([j, n + j, n + i])
        faces.append([top_center, j, i])
        faces.append([bottom_center, n + i, n + j])
    return vertices, np.array(faces, dtype=int)


def plane_triangles(geometry: PlaneGeometry) -> tuple[np.ndarray, np.ndarray]:
    """Plane in local XY, centered at the origin."""
    hx, hy = geometry.width / 2, geometry.height / 2
    vertices = np.array(
        [[-hx, -hy, 0.0], [hx, -hy, 0.0], [hx, hy, 0.0], [-hx, hy, 0.0]]
    )
    faces = np.array([[0, 1, 2], [0, 2, 3]], dtype=int)
    return vertices, faces


_TRIANGULATORS = {
    BoxGeometry: box_triangles,
    CylinderGeometry: cylinder_triangles,
    PlaneGeometry: plane_triangles,
}


# =============================================================================
# Transforms
# =============================================================================

def rotation_matrix(rotation) -> np.ndarray:
    """Euler XYZ rotation matrix (Rx @ Ry @ Rz)."""
    rx, ry, rz = rotation
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    mx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    my = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    mz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return mx @ my @ mz


def to_plotly_axes(points: np.ndarray) -> np.ndarray:
    """Map Y-up scene points (Nx3) to Plotly's Z-up axes."""
    points = np.atleast_2d(points)
    return np.column_stack([points[:, 0], -points[:, 2], points[:, 1]])


def mesh_vertices(mesh: Mesh) -> tuple[np.ndarray, np.ndarray]:
    """World-space vertices (Plotly axes) and faces for one mesh."""
    triangulate = _TRIANGULATORS[type(mesh.geometry)]
    local, faces = triangulate(mesh.geometry)
    world = local @ rotation_matrix(mesh.rotation).T + np.asarray(mesh.position, dtype=float)
    return to_plotly_axes(world), faces


# =============================================================================
# Figure
# =============================================================================

def _lighting(scene: SceneGraph, mesh: Mesh) -> dict:
    ambient = sum(l.intensity for l in scene.lights if l.kind is LightKind.AMBIENT)
    directional = sum(l.intensity for l in scene.lights if l.kind is LightKind.DIRECTIONAL)
    material = mesh.material
    return dict(
        ambient=min(1.0, ambient),
        diffuse=min(1.0, directional * (1.0 - 0.5 * material.metalness)),
        specular=min(2.0, 2.0 * material.metalness),
        roughness=max(0.05, min(1.0, material.roughness)),
        fresnel=0.2,
    )


def _light_position(scene: SceneGraph) -> dict:
    for light in scene.lights:
        if light.kind is LightKind.DIRECTIONAL and light.position is not None:
            x, y, z = to_plotly_axes(np.asarray(light.position, dtype=float))[0]
            return dict(x=float(x) * 1e3, y=float(y) * 1e3, z=float(z) * 1e3)
    return dict(x=1e5, y=1e5, z=0)


def mesh_trace(scene: SceneGraph, mesh: Mesh) -> go.Mesh3d:
    vertices, faces = mesh_vertices(mesh)
    shadow = mesh.material.kind is MaterialKind.SHADOW
    return go.Mesh3d(
        x=vertices[:, 0],
        y=vertices[:, 1],
        z=vertices[:, 2],
        i=faces[:, 0],
        j=faces[:, 1],
        k=faces[:, 2],
        name=mesh.name,
        color=SHADOW_TINT if shadow else mesh.material.color,
        opacity=mesh.material.opacity,
        flatshading=not isinstance(mesh.geometry, CylinderGeometry),
        lighting=_lighting(scene, mesh),
        lightposition=_light_position(scene),
        hoverinfo="skip",
        showscale=False,
    )


def build_figure(scene: SceneGraph, height: int = FIGURE_HEIGHT) -> go.Figure:
    """Render a SceneGraph as a Plotly 3D figure."""
    fig = go.Figure(data=[mesh_trace(scene, m) for m in scene.meshes])

    eye = to_plotly_axes(np.asarray(scene.camera.position, dtype=float))[0] / EYE_SCALE
    center = to_plotly_axes(np.asarray(scene.camera.target, dtype=float))[0] / EYE_SCALE
    hidden_axis = dict(visible=False, showbackground=False)

    fig.update_layout(
        height=height,
        margin=dict(l=0, r=0, t=0, b=0),
        paper_bgcolor=BACKGROUND,
        showlegend=False,
        dragmode="turntable" if not scene.camera.orbit.enable_pan else "orbit",
        scene=dict(
            xaxis=hidden_axis,
            yaxis=hidden_axis,
            zaxis=hidden_axis,
            aspectmode="data",
            camera=dict(
                eye=dict(x=float(eye[0]), y=float(eye[1]), z=float(eye[2])),
                center=dict(x=float(center[0]), y=float(center[1]), z=float(center[2])),
                up=dict(x=0, y=0, z=1),
                projection=dict(type="perspective"),
            ),
        ),
    )
    return fig
