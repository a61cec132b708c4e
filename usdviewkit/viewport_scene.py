"""Scene data handed to the host renderer, and the USD viewport that builds it."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

_IDENTITY = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

_ELEVATION_LIMIT = math.pi * 0.49

_PLACEHOLDER_MATERIAL_ID = "usd_material"


@dataclass
class CameraSettings:
    """Sensitivities of the viewport navigation."""

    orbit_sensitivity: float = 0.5
    pan_sensitivity: float = 1.0
    zoom_sensitivity: float = 1.0


@dataclass
class CameraData:
    """Camera state shared with the renderer; ``fov`` is in degrees."""

    position: Vec3 = (5.0, 5.0, 5.0)
    target: Vec3 = (0.0, 0.0, 0.0)
    up: Vec3 = (0.0, 1.0, 0.0)
    fov: float = 45.0
    near: float = 0.1
    far: float = 1000.0


@dataclass
class ViewportSettings:
    """Display toggles of the viewport."""

    wireframe: bool = False
    lighting: bool = True
    show_grid: bool = True
    show_ground_plane: bool = False


@dataclass
class MeshData:
    """A triangle mesh with flat vertex, normal and UV arrays."""

    id: str
    vertices: list[float]
    normals: list[float]
    uvs: list[float]
    indices: list[int]
    material_id: str | None = None
    transform: tuple[tuple[float, ...], ...] = _IDENTITY


@dataclass
class MaterialData:
    """A simple physically based material."""

    id: str
    name: str
    base_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    metallic: float = 0.0
    roughness: float = 0.5
    emission: Vec3 = (0.0, 0.0, 0.0)
    diffuse_texture: str | None = None
    normal_texture: str | None = None
    roughness_texture: str | None = None
    metallic_texture: str | None = None


class LightType(Enum):
    """Kinds of light the renderer understands."""

    DIRECTIONAL = "directional"
    POINT = "point"
    SPOT = "spot"


@dataclass
class LightData:
    """A light source."""

    id: str
    light_type: LightType
    position: Vec3 = (0.0, 0.0, 0.0)
    direction: Vec3 = (0.0, -1.0, 0.0)
    color: Vec3 = (1.0, 1.0, 1.0)
    intensity: float = 1.0
    range: float = 100.0
    spot_angle: float = 0.0


@dataclass
class SceneData:
    """Everything the renderer needs to draw one scene."""

    name: str = ""
    meshes: list[MeshData] = field(default_factory=list)
    materials: list[MaterialData] = field(default_factory=list)
    lights: list[LightData] = field(default_factory=list)
    camera: CameraData = field(default_factory=CameraData)
    bounding_box: tuple[Vec3, Vec3] | None = None


@dataclass
class ViewportData:
    """Scene and settings plus flags telling the renderer what changed."""

    scene: SceneData = field(default_factory=SceneData)
    settings: ViewportSettings = field(default_factory=ViewportSettings)
    scene_dirty: bool = False
    settings_dirty: bool = False


@dataclass(frozen=True)
class Orbit:
    """Rotate the camera around its target."""

    delta_x: float
    delta_y: float


@dataclass(frozen=True)
class Pan:
    """Move camera and target together."""

    delta_x: float
    delta_y: float


@dataclass(frozen=True)
class Zoom:
    """Move the camera along its view direction."""

    delta: float


@dataclass(frozen=True)
class Reset:
    """Restore the default camera."""


@dataclass(frozen=True)
class SetPosition:
    """Place the camera and its target explicitly."""

    position: Vec3
    target: Vec3


CameraManipulation = Orbit | Pan | Zoom | Reset | SetPosition


def _placeholder_cube() -> MeshData:
    return MeshData(
        id="cube",
        vertices=[
            -1.0, -1.0, 1.0,
            1.0, -1.0, 1.0,
            1.0, 1.0, 1.0,
            -1.0, 1.0, 1.0,
            -1.0, -1.0, -1.0,
            -1.0, 1.0, -1.0,
            1.0, 1.0, -1.0,
            1.0, -1.0, -1.0,
        ],
        normals=[
            0.0, 0.0, 1.0,
            0.0, 0.0, 1.0,
            0.0, 0.0, 1.0,
            0.0, 0.0, 1.0,
            0.0, 0.0, -1.0,
            0.0, 0.0, -1.0,
            0.0, 0.0, -1.0,
            0.0, 0.0, -1.0,
        ],
        uvs=[
            0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0,
            0.0, 0.0, 1.0, 0.0, 1.0, 1.0, 0.0, 1.0,
        ],
        indices=[
            0, 1, 2, 2, 3, 0,
            4, 5, 6, 6, 7, 4,
            3, 2, 6, 6, 5, 3,
            0, 4, 7, 7, 1, 0,
            1, 7, 6, 6, 2, 1,
            4, 0, 3, 3, 5, 4,
        ],
        material_id=_PLACEHOLDER_MATERIAL_ID,
        transform=_IDENTITY,
    )


def _orbit(camera: CameraData, delta_theta: float, delta_phi: float) -> Vec3:
    offset = [p - t for p, t in zip(camera.position, camera.target)]
    radius = math.sqrt(sum(c * c for c in offset))
    if radius == 0.0:
        return camera.position
    theta = math.atan2(offset[2], offset[0]) + delta_theta
    phi = math.asin(max(-1.0, min(1.0, offset[1] / radius))) + delta_phi
    phi = max(-_ELEVATION_LIMIT, min(_ELEVATION_LIMIT, phi))
    tx, ty, tz = camera.target
    return (
        tx + radius * math.cos(phi) * math.cos(theta),
        ty + radius * math.sin(phi),
        tz + radius * math.cos(phi) * math.sin(theta),
    )


@dataclass
class USDViewport:
    """Turns a USD stage into scene data and applies camera navigation to it."""

    current_stage: str = ""
    viewport_data: ViewportData = field(default_factory=ViewportData)
    camera_settings: CameraSettings = field(default_factory=CameraSettings)

    def load_stage(self, stage_path: str) -> None:
        """Build the scene for ``stage_path`` and mark it dirty."""
        logger.info("Loading stage: %s", stage_path)
        scene = SceneData(name=f"USD Stage: {stage_path}")
        scene.meshes.append(_placeholder_cube())
        scene.materials.append(
            MaterialData(
                id=_PLACEHOLDER_MATERIAL_ID,
                name="USD Material",
                base_color=(0.7, 0.7, 0.9, 1.0),
                metallic=0.0,
                roughness=0.5,
                emission=(0.0, 0.0, 0.0),
            )
        )
        scene.lights.append(
            LightData(
                id="sun",
                light_type=LightType.DIRECTIONAL,
                position=(0.0, 10.0, 5.0),
                direction=(-0.5, -1.0, -0.5),
                color=(1.0, 1.0, 0.9),
                intensity=5.0,
                range=100.0,
                spot_angle=0.0,
            )
        )
        scene.bounding_box = ((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))

        self.viewport_data.scene = scene
        self.viewport_data.scene_dirty = True
        self.current_stage = stage_path

    def handle_camera_manipulation(self, manipulation: CameraManipulation) -> None:
        """Apply one navigation step to the scene camera and mark the scene dirty."""
        camera = self.viewport_data.scene.camera
        settings = self.camera_settings

        match manipulation:
            case Orbit(delta_x=dx, delta_y=dy):
                camera.position = _orbit(
                    camera, dx * settings.orbit_sensitivity, dy * settings.orbit_sensitivity
                )
            case Pan(delta_x=dx, delta_y=dy):
                fx, fy, fz = (t - p for t, p in zip(camera.target, camera.position))
                ux, uy, uz = camera.up
                right = (fy * uz - fz * uy, fz * ux - fx * uz, fx * uy - fy * ux)
                pan_x = dx * settings.pan_sensitivity
                pan_y = dy * settings.pan_sensitivity
                shift = tuple(r * pan_x + u * pan_y for r, u in zip(right, camera.up))
                camera.position = tuple(p + s for p, s in zip(camera.position, shift))
                camera.target = tuple(t + s for t, s in zip(camera.target, shift))
            case Zoom(delta=delta):
                factor = delta * settings.zoom_sensitivity
                direction = [t - p for t, p in zip(camera.target, camera.position)]
                camera.position = tuple(p + d * factor for p, d in zip(camera.position, direction))
            case Reset():
                self.viewport_data.scene.camera = CameraData()
            case SetPosition(position=position, target=target):
                camera.position = tuple(position)
                camera.target = tuple(target)
            case _:
                raise TypeError(f"unknown camera manipulation: {manipulation!r}")

        self.viewport_data.scene_dirty = True