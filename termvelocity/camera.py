"""Colour helpers, the view frustum and a rasterising camera."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

from termvelocity.debug import debug
from termvelocity.geometry import Matrix44, Transform, Vector2, Vector3
from termvelocity.mesh import LightingMode, Mesh, RenderMode, Triangle
from termvelocity.screendata import ScreenData

_MIN_GLOW = 0.55
_MIN_BRIGHTNESS = 0.15
_EDGE_WHITENESS = 0.03
_EDGE_SHARPENING = 11


def deg_to_rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * math.pi / 180.0


def color_lerp(c1: int, c2: int, u: float) -> int:
    """Blend two colours; ``u`` is clamped to [0, 1]."""
    u = min(max(u, 0.0), 1.0)
    r = int((1 - u) * ((c1 >> 16) & 0xFF) + u * ((c2 >> 16) & 0xFF))
    g = int((1 - u) * ((c1 >> 8) & 0xFF) + u * ((c2 >> 8) & 0xFF))
    b = int((1 - u) * (c1 & 0xFF) + u * (c2 & 0xFF))
    return (r << 16) | (g << 8) | b


def color_lerp3(c1: int, c2: int, c3: int, u: float, v: float) -> int:
    """Blend three colours with barycentric weights u, v and 1 - u - v."""
    w = 1.0 - u - v
    r = int(u * ((c1 >> 16) & 0xFF) + v * ((c2 >> 16) & 0xFF) + w * ((c3 >> 16) & 0xFF))
    g = int(u * ((c1 >> 8) & 0xFF) + v * ((c2 >> 8) & 0xFF) + w * ((c3 >> 8) & 0xFF))
    b = int(u * (c1 & 0xFF) + v * (c2 & 0xFF) + w * (c3 & 0xFF))
    return (r << 16) | (g << 8) | b


def rgb(r: int, g: int, b: int) -> int:
    """Pack clamped 0-255 channels into a 0xRRGGBB colour."""
    r, g, b = (min(max(int(c), 0), 255) for c in (r, g, b))
    return (r << 16) | (g << 8) | b


def _ieee_div(a: float, b: float) -> float:
    """Floating-point division that yields inf/nan instead of raising."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


@dataclass
class Frustum:
    """Perspective view volume looking down -Z."""

    fov_y: float = field(default_factory=lambda: deg_to_rad(60.0))
    aspect: float = 16.0 / 9.0
    near_z: float = 0.01
    far_z: float = 200.0
    proj_matrix: Matrix44 = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.init_proj_matrix()

    def init_proj_matrix(self) -> None:
        """Rebuild the projection matrix from the frustum parameters."""
        tan_half = math.tan(self.fov_y / 2.0)
        depth = self.far_z - self.near_z
        self.proj_matrix = Matrix44((
            (1.0 / (self.aspect * tan_half), 0.0, 0.0, 0.0),
            (0.0, 1.0 / tan_half, 0.0, 0.0),
            (0.0, 0.0, self.far_z / depth, -(self.near_z * self.far_z) / depth),
            (0.0, 0.0, -1.0, 0.0),
        ))

    def ndc_space(self, point: Vector3) -> Vector3:
        """Project a view-space point; x and y are divided by w, z is not."""
        vec = self.proj_matrix @ point.to4()
        return Vector3(_ieee_div(vec.x, vec.w), _ieee_div(vec.y, vec.w), vec.z)


class Renderable(Protocol):
    """Anything with a transform and a mesh."""

    transform: Transform
    mesh: Mesh


@dataclass
class Camera:
    """A viewpoint that rasterises meshes into a ScreenData."""

    frustum: Frustum = field(default_factory=Frustum)
    transform: Transform = field(default_factory=Transform)

    def __post_init__(self) -> None:
        debug(str(self.transform))

    def _to_screen(self, point: Vector3) -> Vector3:
        pos = self.frustum.ndc_space(point)
        return Vector3(
            (pos.x * 0.5 + 0.5) * ScreenData.WIDTH,
            (-pos.y * 0.5 + 0.5) * ScreenData.HEIGHT,
            pos.z,
        )

    def _brightness(self, world: list[Vector3], lighting: LightingMode) -> Optional[float]:
        w0, w1, w2 = world
        normal = (w1 - w0).cross(w2 - w0).normalized()
        centre = (w0 + w1 + w2) / 3.0
        view = (centre * -1).normalized()
        brightness = normal.dot(view)
        if brightness < 0:
            return None
        if lighting is LightingMode.GLOWING:
            return _MIN_GLOW + (1 - _MIN_GLOW - brightness * (1 - _MIN_GLOW))
        return _MIN_BRIGHTNESS + brightness * (1 - _MIN_BRIGHTNESS)

    def draw(self, game_objects: Iterable[Renderable], screen_data: ScreenData) -> None:
        """Rasterise every object's triangles with depth testing and shading."""
        screen_data.refresh()
        view = self.transform.to_world_matrix().inverse()
        for game_object in game_objects:
            mesh = game_object.mesh
            to_view = view @ game_object.transform.to_world_matrix()
            for triangle in mesh.triangles:
                world = [
                    (to_view @ mesh.vertices[index].to4()).to3()
                    for index in triangle.vertex_indices
                ]
                if any(p.z > -self.frustum.near_z for p in world):
                    continue
                if any(p.z < -self.frustum.far_z for p in world):
                    continue
                brightness = self._brightness(world, mesh.lighting_mode)
                if brightness is None:
                    continue
                screen = [self._to_screen(p) for p in world]
                self._rasterize(mesh, triangle, screen, brightness, screen_data)

    def _rasterize(
        self,
        mesh: Mesh,
        triangle: Triangle,
        screen: list[Vector3],
        brightness: float,
        screen_data: ScreenData,
    ) -> None:
        s0, s1, s2 = screen
        min_x = max(int(min(s.x for s in screen)), 0)
        max_x = min(int(max(s.x for s in screen)), ScreenData.WIDTH - 1)
        min_y = max(int(min(s.y for s in screen)), 0)
        max_y = min(int(max(s.y for s in screen)), ScreenData.HEIGHT - 1)

        a = Vector2(s0.x, s0.y)
        v0 = Vector2(s1.x, s1.y) - a
        v1 = Vector2(s2.x, s2.y) - a
        d00 = v0.dot(v0)
        d01 = v0.dot(v1)
        d11 = v1.dot(v1)
        denom = d00 * d11 - d01 * d01
        if denom == 0:
            return

        if mesh.render_mode is RenderMode.VERTEX_COLORS:
            corner_colors = [mesh.vertex_colors[i] for i in triangle.vertex_indices]
        else:
            corner_colors = None
        near, far = self.frustum.near_z, self.frustum.far_z

        for y in range(min_y, max_y + 1):
            py = y - a.y
            for x in range(min_x, max_x + 1):
                px = x - a.x
                d20 = px * v0.x + py * v0.y
                d21 = px * v1.x + py * v1.y
                v = (d11 * d20 - d01 * d21) / denom
                w = (d00 * d21 - d01 * d20) / denom
                u = 1.0 - v - w
                if u < 0 or v < 0 or w < 0:
                    continue
                z = u * s0.z + v * s1.z + w * s2.z

                if corner_colors is not None:
                    color = color_lerp3(*corner_colors, u, v)
                else:
                    color = triangle.color

                r = int((color >> 16) * brightness)
                g = int(((color >> 8) & 0xFF) * brightness)
                b = int((color & 0xFF) * brightness)
                color = (r << 16) | (g << 8) | b

                if mesh.lighting_mode is LightingMode.CRYSTAL:
                    edge_distance = 1 - min(u, v, w)
                    edge_color = color_lerp(color, 0xFFFFFF, _EDGE_WHITENESS)
                    color = color_lerp(color, edge_color, edge_distance ** _EDGE_SHARPENING)

                if z < -far or z > -near:
                    continue
                screen_data.set_pixel(x, y, z, color)

    def draw_wireframe(
        self, game_objects: Iterable[Renderable], screen_data: ScreenData
    ) -> None:
        """Draw triangle outlines in each triangle's flat colour."""
        screen_data.refresh()
        for game_object in game_objects:
            mesh = game_object.mesh
            to_world = game_object.transform.to_world_matrix()
            for triangle in mesh.triangles:
                points = [
                    self._to_screen((to_world @ mesh.vertices[index].to4()).to3())
                    for index in triangle.vertex_indices
                ]
                if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in points):
                    continue
                for p in points:
                    screen_data.set_pixel(int(p.x), int(p.y), p.z, triangle.color)
                for start, end in zip(points, points[1:] + points[:1]):
                    screen_data.draw_line(
                        int(start.x), int(start.y), int(end.x), int(end.y), triangle.color
                    )