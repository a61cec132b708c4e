import math

import numpy as np
import pytest

from usdviewkit.geometry import USDCamera, translation_matrix
from usdviewkit.renderer import (
    CameraMode,
    ComplexityLevel,
    ShadingMode,
    USDRenderer,
    USDRenderSettings,
)


@pytest.fixture
def loaded():
    renderer = USDRenderer()
    renderer.load_stage("test_stage")
    return renderer


def test_default_settings():
    settings = USDRenderSettings()
    assert settings.shading_mode is ShadingMode.SMOOTH_SHADED
    assert settings.show_purposes == ["default", "render"]
    assert settings.complexity is ComplexityLevel.MEDIUM
    assert settings.enable_lighting is True
    assert settings.show_proxy is False


def test_load_stage_builds_mock_scene(loaded):
    scene = loaded.current_scene
    assert scene.stage_id == "test_stage"
    assert [g.prim_path for g in scene.geometries] == ["/World/Cube", "/World/Sphere", "/World/Plane"]
    assert [g.prim_type for g in scene.geometries] == ["Cube", "Sphere", "Plane"]
    assert len(scene.lights) == 1
    assert scene.lights[0].light_type == "distant"
    assert list(scene.materials) == ["/World/DefaultMaterial"]


def test_load_stage_replaces_previous_scene(loaded):
    loaded.load_stage("other")
    assert loaded.current_scene.stage_id == "other"
    assert len(loaded.current_scene.geometries) == 3


def test_mock_geometry_positions(loaded):
    cube, sphere, plane = loaded.current_scene.geometries
    assert np.allclose(cube.transform[:3, 3], [-2.0, 0.0, 0.0])
    assert np.allclose(sphere.transform[:3, 3], [2.0, 0.0, 0.0])
    assert np.allclose(plane.transform[:3, 3], [0.0, -1.0, 0.0])


def test_mock_material_values(loaded):
    material = loaded.current_scene.materials["/World/DefaultMaterial"]
    assert np.allclose(material.diffuse_color, [0.6, 0.7, 0.8])
    assert material.metallic == pytest.approx(0.1)
    assert material.roughness == pytest.approx(0.4)


def test_light_transform_is_rotation(loaded):
    transform = loaded.current_scene.lights[0].transform
    rotation = transform[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.eye(3))
    assert np.allclose(transform[:3, 3], 0.0)


def test_selection_has_no_duplicates():
    renderer = USDRenderer()
    renderer.select_prim("/World/Cube")
    renderer.select_prim("/World/Sphere")
    renderer.select_prim("/World/Cube")
    assert renderer.selected_prims == ["/World/Cube", "/World/Sphere"]


def test_deselect_and_clear():
    renderer = USDRenderer()
    renderer.select_prim("/a")
    renderer.select_prim("/b")
    renderer.deselect_prim("/a")
    assert renderer.selected_prims == ["/b"]
    renderer.clear_selection()
    assert renderer.selected_prims == []


def test_set_shading_and_camera_mode():
    renderer = USDRenderer()
    renderer.set_shading_mode(ShadingMode.WIREFRAME)
    assert renderer.render_settings.shading_mode is ShadingMode.WIREFRAME
    renderer.set_camera_mode(CameraMode.usd_camera("/World/Cam"))
    assert renderer.camera_mode.prim_path == "/World/Cam"
    assert not renderer.camera_mode.is_viewport


def test_active_camera_is_viewport_copy():
    renderer = USDRenderer()
    active = renderer.get_active_camera()
    assert np.allclose(active.position, renderer.camera.position)
    active.position[0] = 99.0
    assert renderer.camera.position[0] != 99.0 and renderer.camera.position[0] == pytest.approx(5.0)


def test_active_camera_from_usd_camera():
    renderer = USDRenderer()
    renderer.current_scene.cameras.append(
        USDCamera(
            prim_path="/World/Cam",
            transform=translation_matrix((1.0, 2.0, 3.0)),
            focal_length=10.0,
            horizontal_aperture=20.0,
            vertical_aperture=15.0,
            clipping_range=(0.5, 500.0),
        )
    )
    renderer.set_camera_mode(CameraMode.usd_camera("/World/Cam"))
    camera = renderer.get_active_camera()
    assert np.allclose(camera.position, [1.0, 2.0, 3.0])
    assert np.allclose(camera.target, [1.0, 2.0, 2.0])
    assert camera.fov == pytest.approx(math.pi / 2)
    assert (camera.near, camera.far) == (0.5, 500.0)


def test_missing_usd_camera_falls_back_to_viewport():
    renderer = USDRenderer()
    renderer.set_camera_mode(CameraMode.usd_camera("/Nope"))
    camera = renderer.get_active_camera()
    assert np.allclose(camera.position, renderer.camera.position)
    assert camera.fov == pytest.approx(renderer.camera.fov)


def test_draw_list_styles(loaded):
    calls = loaded.draw_list()
    assert calls[:3] == [("mesh", "/World/Cube"), ("mesh", "/World/Sphere"), ("mesh", "/World/Plane")]
    assert calls[-2:] == [("grid", None), ("axis_gizmo", None)]
    loaded.set_shading_mode(ShadingMode.WIREFRAME_ON_SURFACE)
    loaded.render_settings.enable_lighting = False
    loaded.current_scene.geometries[1].visibility = False
    assert loaded.draw_list() == [
        ("wireframe", "/World/Cube"),
        ("wireframe", "/World/Plane"),
        ("axis_gizmo", None),
    ]