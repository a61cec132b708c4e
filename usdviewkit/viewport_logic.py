"""Viewport state: camera navigation, render settings and the loaded stage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from usdviewkit.camera import Camera3D
from usdviewkit.geometry import USDScene
from usdviewkit.renderer import ShadingMode, USDRenderer

logger = logging.getLogger(__name__)

TEST_STAGE_ID = "test_stage"


@dataclass
class USDViewportLogic:
    """Camera, settings and renderer state behind a USD viewport."""

    camera: Camera3D = field(default_factory=Camera3D)
    background_color: tuple[float, float, float, float] = (0.2, 0.2, 0.2, 1.0)
    enable_wireframe: bool = False
    enable_lighting: bool = True
    enable_grid: bool = True
    samples: int = 4
    viewport_width: int = 1920
    viewport_height: int = 1080
    usd_renderer: USDRenderer = field(default_factory=USDRenderer)
    current_stage: str | None = None

    def copy(self) -> USDViewportLogic:
        """Return a copy with its own camera and a fresh, empty renderer."""
        camera = replace(
            self.camera,
            position=self.camera.position.copy(),
            target=self.camera.target.copy(),
            up=self.camera.up.copy(),
        )
        return replace(self, camera=camera, usd_renderer=USDRenderer())

    def process(self, inputs: list[Any]) -> list[Any]:
        """The viewport is an endpoint: it consumes inputs and produces nothing."""
        return []

    def reset_camera(self) -> None:
        """Restore the default camera."""
        self.camera = Camera3D()

    def set_top_view(self) -> None:
        """Look down on the origin from above."""
        self.camera.position = Camera3D(position=(0.0, 10.0, 0.0)).position
        self.camera.target = Camera3D().target

    def set_front_view(self) -> None:
        """Look at the origin from the front."""
        self.camera.position = Camera3D(position=(0.0, 0.0, 10.0)).position
        self.camera.target = Camera3D().target

    def orbit_camera(self, delta_x: float, delta_y: float) -> None:
        """Orbit around the target, with the vertical axis inverted."""
        self.camera.orbit(delta_x, -delta_y)

    def orbit_camera_at_mouse(self, delta_x: float, delta_y: float, mouse_x: float, mouse_y: float) -> None:
        """Orbit around the scene point under the mouse."""
        pivot = self.camera.find_orbit_pivot(mouse_x, mouse_y, self.usd_renderer.current_scene.geometries)
        self.camera.orbit_around_point(pivot, delta_x, -delta_y)

    def pan_camera(self, delta_x: float, delta_y: float, viewport_height: float) -> None:
        """Pan so that the scene follows the mouse one to one."""
        pan_delta = self.camera.screen_to_world_pan(delta_x, delta_y, viewport_height)
        self.camera.position = self.camera.position + pan_delta
        self.camera.target = self.camera.target + pan_delta

    def zoom_camera(self, delta: float) -> None:
        """Move the camera nearer to or further from its target."""
        self.camera.zoom(delta)

    def zoom_camera_to_mouse(self, delta: float, mouse_x: float, mouse_y: float) -> None:
        """Zoom towards the scene point under the mouse."""
        point = self.camera.find_orbit_pivot(mouse_x, mouse_y, self.usd_renderer.current_scene.geometries)
        self.camera.zoom_to_point(point, delta)

    def resize_viewport(self, width: int, height: int) -> None:
        """Record the new viewport size and update the camera aspect ratio."""
        if height == 0:
            raise ValueError("viewport height must be non-zero")
        self.viewport_width = int(width)
        self.viewport_height = int(height)
        self.camera.set_aspect(width / height)

    def load_stage(self, stage_id: str) -> None:
        """Load a stage into the renderer and remember it as current."""
        self.current_stage = stage_id
        self.usd_renderer.load_stage(stage_id)

    def load_test_stage(self) -> None:
        """Load the built-in sample stage, logging any failure."""
        self.current_stage = TEST_STAGE_ID
        try:
            self.usd_renderer.load_stage(TEST_STAGE_ID)
        except (OSError, ValueError) as exc:
            logger.error("Failed to load test stage: %s", exc)

    def set_shading_mode(self, mode: ShadingMode) -> None:
        self.usd_renderer.set_shading_mode(mode)

    def select_prim(self, prim_path: str) -> None:
        self.usd_renderer.select_prim(prim_path)

    def clear_selection(self) -> None:
        self.usd_renderer.clear_selection()

    @property
    def scene(self) -> USDScene:
        """The scene currently held by the renderer."""
        return self.usd_renderer.current_scene

    @property
    def selected_prims(self) -> list[str]:
        """Paths of the selected prims, in selection order."""
        return self.usd_renderer.selected_prims