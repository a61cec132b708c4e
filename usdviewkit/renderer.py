"""Scene-holding renderer state for the USD viewport."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from usdviewkit.camera import Camera3D
from usdviewkit.geometry import (
    DEFAULT_MATERIAL_PATH,
    USDCamera,
    USDLight,
    USDMaterial,
    USDScene,
    create_cube_geometry,
    create_plane_geometry,
    create_sphere_geometry,
    rotation_x_matrix,
    transform_point,
    transform_vector,
    translation_matrix,
)


class ShadingMode(Enum):
    """How geometry is drawn."""

    WIREFRAME = "wireframe"
    WIREFRAME_ON_SURFACE = "wireframe_on_surface"
    FLAT_SHADED = "flat_shaded"
    SMOOTH_SHADED = "smooth_shaded"
    MATERIAL_PREVIEW = "material_preview"
    RENDERED = "rendered"

    @property
    def is_wireframe(self) -> bool:
        """True for modes drawn as wireframe."""
        return self in (ShadingMode.WIREFRAME, ShadingMode.WIREFRAME_ON_SURFACE)


class ComplexityLevel(Enum):
    """Level of detail used when tessellating."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


@dataclass(frozen=True)
class CameraMode:
    """Either the free viewport camera or a camera prim on the stage."""

    prim_path: str | None = None

    @classmethod
    def viewport(cls) -> CameraMode:
        return cls(None)

    @classmethod
    def usd_camera(cls, prim_path: str) -> CameraMode:
        return cls(prim_path)

    @property
    def is_viewport(self) -> bool:
        return self.prim_path is None


@dataclass
class USDRenderSettings:
    """Options controlling what is drawn and how."""

    shading_mode: ShadingMode = ShadingMode.SMOOTH_SHADED
    show_guides: bool = False
    show_render: bool = True
    show_proxy: bool = False
    show_purposes: list[str] = field(default_factory=lambda: ["default", "render"])
    complexity: ComplexityLevel = ComplexityLevel.MEDIUM
    enable_lighting: bool = True
    ambient_occlusion: bool = False


def _copy_camera(camera: Camera3D) -> Camera3D:
    return replace(
        camera,
        position=camera.position.copy(),
        target=camera.target.copy(),
        up=camera.up.copy(),
    )


@dataclass
class USDRenderer:
    """Holds the loaded scene, selection and render settings."""

    camera: Camera3D = field(default_factory=Camera3D)
    current_scene: USDScene = field(default_factory=USDScene)
    render_settings: USDRenderSettings = field(default_factory=USDRenderSettings)
    selected_prims: list[str] = field(default_factory=list)
    camera_mode: CameraMode = field(default_factory=CameraMode.viewport)

    def load_stage(self, stage_id: str) -> None:
        """Replace the current scene with the one for ``stage_id``."""
        self.current_scene = USDScene(stage_id=stage_id)
        self.create_mock_scene(stage_id)

    def create_mock_scene(self, stage_id: str) -> None:
        """Add a cube, a sphere, a ground plane, a light and a material."""
        scene = self.current_scene
        scene.geometries.extend(
            [
                create_cube_geometry("/World/Cube", translation_matrix((-2.0, 0.0, 0.0))),
                create_sphere_geometry("/World/Sphere", translation_matrix((2.0, 0.0, 0.0))),
                create_plane_geometry("/World/Plane", translation_matrix((0.0, -1.0, 0.0))),
            ]
        )
        scene.lights.append(
            USDLight(
                prim_path="/World/DefaultLight",
                light_type="distant",
                intensity=1.0,
                color=np.array([1.0, 1.0, 0.9]),
                transform=rotation_x_matrix(math.radians(-45.0)),
                exposure=0.0,
            )
        )
        scene.materials[DEFAULT_MATERIAL_PATH] = USDMaterial(
            prim_path=DEFAULT_MATERIAL_PATH,
            diffuse_color=np.array([0.6, 0.7, 0.8]),
            metallic=0.1,
            roughness=0.4,
            opacity=1.0,
            emission_color=np.zeros(3),
        )

    def select_prim(self, prim_path: str) -> None:
        """Add ``prim_path`` to the selection if it is not already there."""
        if prim_path not in self.selected_prims:
            self.selected_prims.append(prim_path)

    def deselect_prim(self, prim_path: str) -> None:
        """Remove ``prim_path`` from the selection."""
        self.selected_prims = [path for path in self.selected_prims if path != prim_path]

    def clear_selection(self) -> None:
        self.selected_prims.clear()

    def set_shading_mode(self, mode: ShadingMode) -> None:
        self.render_settings.shading_mode = mode

    def set_camera_mode(self, mode: CameraMode) -> None:
        self.camera_mode = mode

    def get_active_camera(self) -> Camera3D:
        """Return a copy of the camera to render with."""
        if not self.camera_mode.is_viewport:
            for usd_camera in self.current_scene.cameras:
                if usd_camera.prim_path == self.camera_mode.prim_path:
                    return self._from_usd_camera(usd_camera)
        return _copy_camera(self.camera)

    def _from_usd_camera(self, usd_camera: USDCamera) -> Camera3D:
        camera = _copy_camera(self.camera)
        position = transform_point(usd_camera.transform, (0.0, 0.0, 0.0))
        forward = -transform_vector(usd_camera.transform, (0.0, 0.0, 1.0))
        camera.position = position
        camera.target = position + forward
        camera.fov = 2.0 * math.atan(usd_camera.horizontal_aperture / (2.0 * usd_camera.focal_length))
        camera.near, camera.far = usd_camera.clipping_range
        return camera

    def draw_list(self) -> list[tuple[str, str | None]]:
        """Return the draw calls for a frame as (kind, prim path) pairs."""
        style = "wireframe" if self.render_settings.shading_mode.is_wireframe else "mesh"
        calls: list[tuple[str, str | None]] = [
            (style, geometry.prim_path)
            for geometry in self.current_scene.geometries
            if geometry.visibility
        ]
        if self.render_settings.enable_lighting:
            calls.append(("grid", None))
        calls.append(("axis_gizmo", None))
        return calls