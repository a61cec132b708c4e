"""Orbiting viewport camera with picking helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from usdviewkit.geometry import USDGeometry, transform_point

_PHI_MIN = 0.01
_PHI_MAX = math.pi - 0.01
_PARALLEL_EPSILON = 0.00001
_MIN_HIT_DISTANCE = 0.1


def _vec(values) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(3)


def _normalize(vector: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return vector / np.linalg.norm(vector)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _spherical_offset(offset: np.ndarray, radius: float, delta_theta: float, delta_phi: float) -> np.ndarray:
    """Rotate ``offset`` in spherical coordinates, keeping its length."""
    theta = math.atan2(offset[2], offset[0]) + delta_theta
    with np.errstate(divide="ignore", invalid="ignore"):
        cos_phi = float(np.float64(offset[1]) / np.float64(radius))
    phi = math.acos(cos_phi) if -1.0 <= cos_phi <= 1.0 else float("nan")
    phi = _clamp(phi + delta_phi, _PHI_MIN, _PHI_MAX)
    return np.array(
        [
            radius * math.sin(phi) * math.cos(theta),
            radius * math.cos(phi),
            radius * math.sin(phi) * math.sin(theta),
        ]
    )


def look_at_rh(eye, target, up) -> np.ndarray:
    """Return a right-handed view matrix looking from ``eye`` towards ``target``."""
    eye = _vec(eye)
    forward = _normalize(_vec(target) - eye)
    side = _normalize(np.cross(forward, _vec(up)))
    upward = np.cross(side, forward)
    matrix = np.eye(4)
    matrix[0, :3] = side
    matrix[1, :3] = upward
    matrix[2, :3] = -forward
    matrix[0, 3] = -np.dot(eye, side)
    matrix[1, 3] = -np.dot(eye, upward)
    matrix[2, 3] = np.dot(eye, forward)
    return matrix


def perspective_rh(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a right-handed perspective matrix with a [0, 1] depth range."""
    half = 0.5 * fov
    h = math.cos(half) / math.sin(half)
    w = h / aspect
    r = far / (near - far)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = w
    matrix[1, 1] = h
    matrix[2, 2] = r
    matrix[2, 3] = r * near
    matrix[3, 2] = -1.0
    return matrix


def _project_point(matrix: np.ndarray, point) -> np.ndarray:
    homogeneous = matrix @ np.append(_vec(point), 1.0)
    return homogeneous[:3] / homogeneous[3]


@dataclass
class Camera3D:
    """Perspective camera with orbit, pan and zoom navigation."""

    position: np.ndarray = field(default_factory=lambda: np.array([5.0, 5.0, 5.0]))
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    fov: float = math.radians(45.0)
    near: float = 0.1
    far: float = 100.0
    aspect: float = 1.0
    orbit_sensitivity: float = 0.5
    pan_sensitivity: float = 1.0
    zoom_sensitivity: float = 1.0

    def __post_init__(self) -> None:
        self.position = _vec(self.position)
        self.target = _vec(self.target)
        self.up = _vec(self.up)

    def _basis(self) -> tuple[np.ndarray, np.ndarray]:
        forward = _normalize(self.target - self.position)
        right = _normalize(np.cross(forward, self.up))
        upward = _normalize(np.cross(right, forward))
        return right, upward

    def build_view_projection_matrix(self) -> np.ndarray:
        """Return projection times view."""
        view = look_at_rh(self.position, self.target, self.up)
        projection = perspective_rh(self.fov, self.aspect, self.near, self.far)
        return projection @ view

    def orbit(self, delta_x: float, delta_y: float) -> None:
        """Rotate the camera around its target."""
        offset = self.position - self.target
        radius = float(np.linalg.norm(offset))
        new_offset = _spherical_offset(
            offset,
            radius,
            delta_x * self.orbit_sensitivity,
            delta_y * self.orbit_sensitivity,
        )
        self.position = self.target + new_offset

    def pan(self, delta_x: float, delta_y: float) -> None:
        """Move position and target together across the view plane."""
        right, upward = self._basis()
        pan_vector = right * delta_x * self.pan_sensitivity + upward * delta_y * self.pan_sensitivity
        self.position = self.position + pan_vector
        self.target = self.target + pan_vector

    def zoom(self, delta: float) -> None:
        """Change the distance to the target, never closer than 0.1."""
        to_target = self.target - self.position
        direction = _normalize(to_target)
        distance = float(np.linalg.norm(to_target))
        new_distance = max(distance + delta * self.zoom_sensitivity, 0.1)
        self.position = self.target - direction * new_distance

    def set_aspect(self, aspect: float) -> None:
        """Set the width-to-height ratio of the projection."""
        self.aspect = aspect

    def screen_to_world_pan(self, screen_delta_x: float, screen_delta_y: float, viewport_height: float) -> np.ndarray:
        """Convert a pixel delta into a world-space move at the target distance."""
        distance = float(np.linalg.norm(self.target - self.position))
        fov_height = 2.0 * distance * math.tan(self.fov / 2.0)
        world_per_pixel = fov_height / viewport_height
        right, upward = self._basis()
        return right * (screen_delta_x * world_per_pixel) + upward * (screen_delta_y * world_per_pixel)

    def screen_to_ray(self, screen_x: float, screen_y: float) -> tuple[np.ndarray, np.ndarray]:
        """Return origin and unit direction of the ray through a normalised screen point."""
        ndc_x = screen_x * 2.0 - 1.0
        ndc_y = 1.0 - screen_y * 2.0
        inverse = np.linalg.inv(self.build_view_projection_matrix())
        near_point = _project_point(inverse, (ndc_x, ndc_y, -1.0))
        far_point = _project_point(inverse, (ndc_x, ndc_y, 1.0))
        return near_point, _normalize(far_point - near_point)

    def orbit_around_point(self, pivot, delta_x: float, delta_y: float) -> None:
        """Orbit around ``pivot`` and make it the new target."""
        pivot = _vec(pivot)
        offset = self.position - pivot
        radius = float(np.linalg.norm(offset))
        if radius < 0.001:
            return
        new_offset = _spherical_offset(
            offset,
            radius,
            delta_x * self.orbit_sensitivity,
            delta_y * self.orbit_sensitivity,
        )
        self.position = pivot + new_offset
        self.target = pivot

    def zoom_to_point(self, target_point, delta: float) -> None:
        """Move towards ``target_point`` by an amount scaled with its distance."""
        target_point = _vec(target_point)
        to_point = target_point - self.position
        direction = _normalize(to_point)
        distance = float(np.linalg.norm(to_point))
        zoom_amount = delta * self.zoom_sensitivity * distance * 2.0
        new_position = self.position + direction * zoom_amount
        if float(np.linalg.norm(target_point - new_position)) > 0.1:
            self.position = new_position
            previous_position = self.position - direction * zoom_amount
            target_direction = _normalize(self.target - previous_position)
            self.target = self.position + target_direction * float(np.linalg.norm(self.target - self.position))

    def ray_triangle_intersect(self, ray_origin, ray_direction, v0, v1, v2) -> float | None:
        """Return the ray parameter of a hit with the triangle, or None."""
        ray_origin, ray_direction = _vec(ray_origin), _vec(ray_direction)
        v0, v1, v2 = _vec(v0), _vec(v1), _vec(v2)
        edge1 = v1 - v0
        edge2 = v2 - v0
        h = np.cross(ray_direction, edge2)
        a = float(np.dot(edge1, h))
        if -_PARALLEL_EPSILON < a < _PARALLEL_EPSILON:
            return None
        f = 1.0 / a
        s = ray_origin - v0
        u = f * float(np.dot(s, h))
        if u < 0.0 or u > 1.0:
            return None
        q = np.cross(s, edge1)
        v = f * float(np.dot(ray_direction, q))
        if v < 0.0 or u + v > 1.0:
            return None
        t = f * float(np.dot(edge2, q))
        return t if t > _PARALLEL_EPSILON else None

    def find_closest_intersection(self, ray_origin, ray_direction, geometries: list[USDGeometry]) -> np.ndarray | None:
        """Return the nearest hit point on visible geometry further than 0.1, or None."""
        ray_origin, ray_direction = _vec(ray_origin), _vec(ray_direction)
        closest_distance = math.inf
        closest_point = None
        for geometry in geometries:
            if not geometry.visibility:
                continue
            for a, b, c in geometry.triangles():
                hit = self.ray_triangle_intersect(
                    ray_origin,
                    ray_direction,
                    transform_point(geometry.transform, a),
                    transform_point(geometry.transform, b),
                    transform_point(geometry.transform, c),
                )
                if hit is not None and _MIN_HIT_DISTANCE < hit < closest_distance:
                    closest_distance = hit
                    closest_point = ray_origin + ray_direction * hit
        return closest_point

    def find_orbit_pivot(self, mouse_x: float, mouse_y: float, geometries: list[USDGeometry]) -> np.ndarray:
        """Pick the geometry under the mouse, or a point at the target distance."""
        ray_origin, ray_direction = self.screen_to_ray(mouse_x, mouse_y)
        hit = self.find_closest_intersection(ray_origin, ray_direction, geometries)
        if hit is not None:
            return hit
        fallback_distance = float(np.linalg.norm(self.target - self.position))
        return ray_origin + ray_direction * fallback_distance