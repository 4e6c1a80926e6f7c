"""Camera projection of 3D points and edges onto a screen."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from termview3d.screen import Point as ScreenPoint
from termview3d.screen import Screen

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


@dataclass
class Point:
    """A position in 3D space."""

    x: float
    y: float
    z: float


def _to_pixel(value: float) -> int:
    """Round half away from zero, saturating to a 32-bit range."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _INT_MAX if value > 0 else _INT_MIN
    rounded = math.floor(abs(value) + 0.5)
    rounded = rounded if value >= 0 else -rounded
    return max(_INT_MIN, min(_INT_MAX, rounded))


@dataclass
class Camera:
    """A pinhole camera; angles are radians applied as yaw, pitch, roll from +z."""

    coordinates: Point
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    viewport_distance: float = 0.1
    viewport_fov: float = 1.7
    screen: Screen = field(default_factory=Screen)
    braille_mode: bool = True

    def world_to_camera(self, point: Point) -> Point:
        """Express a world point in the camera's frame."""
        s_yaw, s_pitch, s_roll = math.sin(self.yaw), math.sin(self.pitch), math.sin(self.roll)
        c_yaw, c_pitch, c_roll = math.cos(self.yaw), math.cos(self.pitch), math.cos(self.roll)

        dx = point.x - self.coordinates.x
        dy = point.y - self.coordinates.y
        dz = point.z - self.coordinates.z

        yx = dx * c_yaw - dz * s_yaw
        yy = dy
        yz = dx * s_yaw + dz * c_yaw

        px = yx
        py = yy * c_pitch - yz * s_pitch
        pz = yy * s_pitch + yz * c_pitch

        return Point(px * c_roll - py * s_roll, px * s_roll + py * c_roll, pz)

    def camera_to_screen(self, point: Point) -> ScreenPoint:
        """Project a point in camera space onto screen sub-pixels."""
        width, height = self.screen.width, self.screen.height
        if width == 0 or height == 0:
            return ScreenPoint(0, 0)

        viewport_x = point.x * self.viewport_distance / point.z
        viewport_y = point.y * self.viewport_distance / point.z
        viewport_width = 2.0 * self.viewport_distance * math.tan(self.viewport_fov / 2.0)

        # Braille cells hold twice as many rows as block cells of the same size.
        aspect_ratio = height / width if self.braille_mode else height * 2.0 / width
        viewport_height = aspect_ratio * viewport_width

        screen_x = (viewport_x / viewport_width + 0.5) * width
        screen_y = (1.0 - (viewport_y / viewport_height + 0.5)) * height
        return ScreenPoint(_to_pixel(screen_x), _to_pixel(screen_y))

    def plot_model_points(self, model: Any) -> None:
        for point in model.points:
            self.write(True, model.model_to_world(point))

    def plot_model_edges(self, model: Any) -> None:
        for start, end in model.edges:
            self.edge(model.model_to_world(start), model.model_to_world(end))

    def write(self, value: bool, point: Point) -> None:
        """Plot a world point if it lies in front of the viewport."""
        camera_point = self.world_to_camera(point)
        if camera_point.z >= self.viewport_distance:
            self.screen.write(value, self.camera_to_screen(camera_point))

    def edge(self, start: Point, end: Point) -> None:
        """Plot a world edge, clipped against the viewport plane."""
        camera_start = self.world_to_camera(start)
        camera_end = self.world_to_camera(end)
        clip_start = camera_start.z < self.viewport_distance
        clip_end = camera_end.z < self.viewport_distance

        if clip_start and clip_end:
            return
        if not clip_start and not clip_end:
            self.screen.line(
                self.camera_to_screen(camera_start), self.camera_to_screen(camera_end)
            )
            return

        clipped, unclipped = (camera_start, camera_end) if clip_start else (camera_end, camera_start)
        behind = self.viewport_distance - clipped.z
        dx = unclipped.x - clipped.x
        dy = unclipped.y - clipped.y
        dz = unclipped.z - clipped.z
        ratio = behind / dz
        moved = Point(ratio * dx + clipped.x, ratio * dy + clipped.y, self.viewport_distance)
        self.screen.line(self.camera_to_screen(moved), self.camera_to_screen(unclipped))