"""Scene data types and procedural geometry for the USD viewport."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

DEFAULT_MATERIAL_PATH = "/World/DefaultMaterial"


def _vec3(values) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {array.shape}")
    return array


def _identity() -> np.ndarray:
    return np.eye(4)


@dataclass(frozen=True)
class Vertex3D:
    """A mesh vertex with position, normal and texture coordinate."""

    position: tuple[float, float, float]
    normal: tuple[float, float, float]
    uv: tuple[float, float]


@dataclass
class USDGeometry:
    """Renderable geometry extracted from a USD prim."""

    prim_path: str
    prim_type: str
    vertices: list[Vertex3D]
    indices: list[int]
    transform: np.ndarray = field(default_factory=_identity)
    material_path: str | None = None
    visibility: bool = True

    def triangles(self):
        """Yield the vertex positions of each complete triangle in local space."""
        whole = len(self.indices) - len(self.indices) % 3
        it = iter(self.indices[:whole])
        for a, b, c in zip(it, it, it):
            yield (
                _vec3(self.vertices[a].position),
                _vec3(self.vertices[b].position),
                _vec3(self.vertices[c].position),
            )


@dataclass
class USDLight:
    """A UsdLux light."""

    prim_path: str
    light_type: str
    intensity: float = 1.0
    color: np.ndarray = field(default_factory=lambda: np.ones(3))
    transform: np.ndarray = field(default_factory=_identity)
    exposure: float = 0.0
    cone_angle: float | None = None
    cone_softness: float | None = None


@dataclass
class USDMaterial:
    """A UsdShade material reduced to preview-surface parameters."""

    prim_path: str
    diffuse_color: np.ndarray
    metallic: float
    roughness: float
    opacity: float = 1.0
    emission_color: np.ndarray = field(default_factory=lambda: np.zeros(3))


@dataclass
class USDCamera:
    """A UsdGeom camera."""

    prim_path: str
    transform: np.ndarray
    focal_length: float
    horizontal_aperture: float
    vertical_aperture: float
    clipping_range: tuple[float, float]


@dataclass
class USDScene:
    """Everything loaded from one stage."""

    stage_id: str = ""
    geometries: list[USDGeometry] = field(default_factory=list)
    lights: list[USDLight] = field(default_factory=list)
    materials: dict[str, USDMaterial] = field(default_factory=dict)
    cameras: list[USDCamera] = field(default_factory=list)
    time_code: float = 0.0


def translation_matrix(offset) -> np.ndarray:
    """Return a 4x4 matrix translating by ``offset``."""
    matrix = np.eye(4)
    matrix[:3, 3] = _vec3(offset)
    return matrix


def rotation_x_matrix(angle: float) -> np.ndarray:
    """Return a 4x4 matrix rotating by ``angle`` radians about the X axis."""
    c, s = math.cos(angle), math.sin(angle)
    matrix = np.eye(4)
    matrix[1, 1] = c
    matrix[1, 2] = -s
    matrix[2, 1] = s
    matrix[2, 2] = c
    return matrix


def transform_point(matrix, point) -> np.ndarray:
    """Apply an affine 4x4 transform to a point."""
    matrix = np.asarray(matrix, dtype=float)
    return matrix[:3, :3] @ _vec3(point) + matrix[:3, 3]


def transform_vector(matrix, vector) -> np.ndarray:
    """Apply the linear part of a 4x4 transform to a direction."""
    matrix = np.asarray(matrix, dtype=float)
    return matrix[:3, :3] @ _vec3(vector)


_CUBE_FACES = (
    # (normal, [(position, uv), ...])
    ((0.0, 0.0, 1.0), [
        ((-1.0, -1.0, 1.0), (0.0, 0.0)),
        ((1.0, -1.0, 1.0), (1.0, 0.0)),
        ((1.0, 1.0, 1.0), (1.0, 1.0)),
        ((-1.0, 1.0, 1.0), (0.0, 1.0)),
    ]),
    ((0.0, 0.0, -1.0), [
        ((-1.0, -1.0, -1.0), (1.0, 0.0)),
        ((-1.0, 1.0, -1.0), (1.0, 1.0)),
        ((1.0, 1.0, -1.0), (0.0, 1.0)),
        ((1.0, -1.0, -1.0), (0.0, 0.0)),
    ]),
    ((0.0, 1.0, 0.0), [
        ((-1.0, 1.0, -1.0), (0.0, 1.0)),
        ((-1.0, 1.0, 1.0), (0.0, 0.0)),
        ((1.0, 1.0, 1.0), (1.0, 0.0)),
        ((1.0, 1.0, -1.0), (1.0, 1.0)),
    ]),
    ((0.0, -1.0, 0.0), [
        ((-1.0, -1.0, -1.0), (1.0, 1.0)),
        ((1.0, -1.0, -1.0), (0.0, 1.0)),
        ((1.0, -1.0, 1.0), (0.0, 0.0)),
        ((-1.0, -1.0, 1.0), (1.0, 0.0)),
    ]),
    ((1.0, 0.0, 0.0), [
        ((1.0, -1.0, -1.0), (1.0, 0.0)),
        ((1.0, 1.0, -1.0), (1.0, 1.0)),
        ((1.0, 1.0, 1.0), (0.0, 1.0)),
        ((1.0, -1.0, 1.0), (0.0, 0.0)),
    ]),
    ((-1.0, 0.0, 0.0), [
        ((-1.0, -1.0, -1.0), (0.0, 0.0)),
        ((-1.0, -1.0, 1.0), (1.0, 0.0)),
        ((-1.0, 1.0, 1.0), (1.0, 1.0)),
        ((-1.0, 1.0, -1.0), (0.0, 1.0)),
    ]),
)


def create_cube_geometry(prim_path: str, transform) -> USDGeometry:
    """Build a 2x2x2 cube centred on the origin, four vertices per face."""
    vertices: list[Vertex3D] = []
    indices: list[int] = []
    for normal, corners in _CUBE_FACES:
        base = len(vertices)
        vertices.extend(Vertex3D(position, normal, uv) for position, uv in corners)
        indices.extend(base + offset for offset in (0, 1, 2, 0, 2, 3))
    return USDGeometry(
        prim_path=prim_path,
        prim_type="Cube",
        vertices=vertices,
        indices=indices,
        transform=np.asarray(transform, dtype=float),
        material_path=DEFAULT_MATERIAL_PATH,
        visibility=True,
    )


def create_sphere_geometry(prim_path: str, transform) -> USDGeometry:
    """Build a unit UV sphere with 32 segments and 16 rings."""
    radius = 1.0
    segments = 32
    rings = 16

    vertices: list[Vertex3D] = []
    for ring in range(rings + 1):
        phi = math.pi * ring / rings
        y = math.cos(phi)
        ring_radius = math.sin(phi)
        for segment in range(segments + 1):
            theta = 2.0 * math.pi * segment / segments
            x = ring_radius * math.cos(theta)
            z = ring_radius * math.sin(theta)
            vertices.append(
                Vertex3D(
                    position=(x * radius, y * radius, z * radius),
                    normal=(x, y, z),
                    uv=(segment / segments, ring / rings),
                )
            )

    indices: list[int] = []
    for ring in range(rings):
        for segment in range(segments):
            current = ring * (segments + 1) + segment
            below = current + segments + 1
            indices.extend((current, below, current + 1))
            indices.extend((current + 1, below, below + 1))

    return USDGeometry(
        prim_path=prim_path,
        prim_type="Sphere",
        vertices=vertices,
        indices=indices,
        transform=np.asarray(transform, dtype=float),
        material_path=DEFAULT_MATERIAL_PATH,
        visibility=True,
    )


def create_plane_geometry(prim_path: str, transform) -> USDGeometry:
    """Build a 10x10 ground plane in the XZ plane facing +Y."""
    size = 5.0
    up = (0.0, 1.0, 0.0)
    vertices = [
        Vertex3D((-size, 0.0, -size), up, (0.0, 0.0)),
        Vertex3D((size, 0.0, -size), up, (1.0, 0.0)),
        Vertex3D((size, 0.0, size), up, (1.0, 1.0)),
        Vertex3D((-size, 0.0, size), up, (0.0, 1.0)),
    ]
    return USDGeometry(
        prim_path=prim_path,
        prim_type="Plane",
        vertices=vertices,
        indices=[0, 1, 2, 0, 2, 3],
        transform=np.asarray(transform, dtype=float),
        material_path=DEFAULT_MATERIAL_PATH,
        visibility=True,
    )