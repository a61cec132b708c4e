# usdviewkit

Scene, camera and stage-loading logic behind a USD viewport. It holds the data
and the maths a rendering host needs; it draws nothing itself.

## Modules

- `usdviewkit.geometry`: scene records (`Vertex3D`, `USDGeometry`, `USDLight`,
  `USDMaterial`, `USDCamera`, `USDScene`), 4x4 matrix helpers
  (`translation_matrix`, `rotation_x_matrix`, `transform_point`,
  `transform_vector`) and builders for primitive meshes
  (`create_cube_geometry`, `create_sphere_geometry`, `create_plane_geometry`).
- `usdviewkit.camera`: `Camera3D`, a Maya-style camera with `orbit`, `pan`,
  `zoom`, `screen_to_world_pan`, `screen_to_ray`, `orbit_around_point`,
  `zoom_to_point` and ray/triangle picking (`ray_triangle_intersect`,
  `find_closest_intersection`, `find_orbit_pivot`), plus the matrix builders
  `look_at_rh` and `perspective_rh`.
- `usdviewkit.renderer`: `USDRenderer`, which loads a stage into a `USDScene`,
  tracks the selection, the shading mode (`ShadingMode`) and the camera mode
  (`CameraMode`), resolves the active camera with `get_active_camera` and lists
  a frame's draw calls with `draw_list`. Settings live in `USDRenderSettings`.
- `usdviewkit.viewport_logic`: `USDViewportLogic`, which ties the camera and the
  renderer together for mouse-driven navigation, viewport resizing and selection.
- `usdviewkit.viewport_scene`: `USDViewport`, which builds `SceneData` /
  `ViewportData` for a host renderer and applies camera manipulations
  (`Orbit`, `Pan`, `Zoom`, `Reset`, `SetPosition`) to its `CameraData`.
- `usdviewkit.stage_loader`: `LoadStageNode`, a panel of typed parameters
  (`FilePathParameter`, `BooleanParameter`, `StringParameter`) that loads a
  stage from a file, and `process_with_parameters`.
- `usdviewkit.stage_file_info`: `describe_file` returns a `FileInfo` (size,
  modification time, extension); `display_path` shortens long paths and
  `is_usd_extension` recognises `.usd`, `.usda`, `.usdc` and `.usdz`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Example

```python
from usdviewkit.viewport_logic import USDViewportLogic
from usdviewkit.renderer import ShadingMode

viewport = USDViewportLogic()
viewport.load_test_stage()
viewport.resize_viewport(1280, 720)

# Orbit around whatever lies under the centre of the screen.
viewport.orbit_camera_at_mouse(0.1, 0.0, 0.5, 0.5)
viewport.zoom_camera(-1.0)
viewport.set_shading_mode(ShadingMode.WIREFRAME)
viewport.select_prim("/World/Cube")
print(viewport.selected_prims)            # ['/World/Cube']
print(viewport.usd_renderer.draw_list())  # [('wireframe', '/World/Cube'), ...]
```

A camera on its own:

```python
import numpy as np
from usdviewkit.camera import Camera3D

camera = Camera3D()
origin, direction = camera.screen_to_ray(0.5, 0.5)
hit = camera.ray_triangle_intersect(
    origin, direction,
    np.array([-1.0, -1.0, 0.0]), np.array([1.0, -1.0, 0.0]), np.array([0.0, 1.0, 0.0]),
)
```

The data-driven viewport:

```python
from usdviewkit.viewport_scene import USDViewport, Orbit, Reset

viewport = USDViewport()
viewport.load_stage("scene.usda")
viewport.handle_camera_manipulation(Orbit(0.2, 0.1))
viewport.handle_camera_manipulation(Reset())
```

## What it does not do

- It does not parse USD files. Loading a stage, by any id or path, fills the
  scene with a fixed sample: a cube, a sphere, a ground plane, one distant
  light and one material (`USDViewport.load_stage` builds a single cube).
- It has no GPU, window or widget code and no file dialog; a host application
  draws the scene and shows the parameter panels.
- It has no command-line entry point.