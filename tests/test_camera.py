import math
from dataclasses import dataclass, field

import pytest

from termvelocity.camera import (
    Camera,
    Frustum,
    color_lerp,
    color_lerp3,
    deg_to_rad,
    rgb,
)
from termvelocity.geometry import Transform, Vector3
from termvelocity.mesh import LightingMode, Mesh, RenderMode, Triangle
from termvelocity.screendata import ScreenData


@dataclass
class Body:
    mesh: Mesh
    transform: Transform = field(default_factory=Transform)


def _triangle_mesh(z, color, *, reverse=False, lighting=LightingMode.REGULAR,
                   mode=RenderMode.TRIANGLE_COLORS):
    vertices = [Vector3(-1.0, -1.0, z), Vector3(1.0, -1.0, z), Vector3(0.0, 1.0, z)]
    indices = (0, 2, 1) if reverse else (0, 1, 2)
    return Mesh(
        vertices=vertices,
        triangles=[Triangle(indices, color)],
        vertex_colors=[color] * 3,
        render_mode=mode,
        lighting_mode=lighting,
    )


def _lit_count(screen):
    return sum(1 for row in screen.pixels for value in row if value)


def test_deg_to_rad():
    assert deg_to_rad(180.0) == pytest.approx(math.pi)
    assert deg_to_rad(0.0) == 0.0


def test_rgb_packs_and_clamps():
    assert rgb(255, 0, 0) == 0xFF0000
    assert rgb(300, -5, 128) == rgb(255, 0, 128)


def test_color_lerp_endpoints_and_clamp():
    c1, c2 = 0x102030, 0xA0B0C0
    assert color_lerp(c1, c2, 0.0) == c1
    assert color_lerp(c1, c2, 1.0) == c2
    assert color_lerp(c1, c2, 5.0) == c2
    assert color_lerp(c1, c2, -2.0) == c1


def test_color_lerp_midpoint_truncates():
    assert color_lerp(0x000000, 0xFFFFFF, 0.5) == 0x7F7F7F


def test_color_lerp3_corners():
    c1, c2, c3 = 0x112233, 0x445566, 0x778899
    assert color_lerp3(c1, c2, c3, 1.0, 0.0) == c1
    assert color_lerp3(c1, c2, c3, 0.0, 1.0) == c2
    assert color_lerp3(c1, c2, c3, 0.0, 0.0) == c3


def test_projection_matrix_looks_down_negative_z():
    frustum = Frustum()
    assert frustum.proj_matrix.rows[3] == (0.0, 0.0, -1.0, 0.0)


def test_ndc_centre_and_edges():
    frustum = Frustum()
    distance = 5.0
    tan_half = math.tan(frustum.fov_y / 2)
    centre = frustum.ndc_space(Vector3(0.0, 0.0, -distance))
    assert centre.x == pytest.approx(0.0)
    assert centre.y == pytest.approx(0.0)
    top = frustum.ndc_space(Vector3(0.0, tan_half * distance, -distance))
    assert top.y == pytest.approx(1.0)
    side = frustum.ndc_space(Vector3(frustum.aspect * tan_half * distance, 0.0, -distance))
    assert side.x == pytest.approx(1.0)


def test_ndc_at_camera_plane_is_infinite():
    point = Frustum().ndc_space(Vector3(1.0, 0.0, 0.0))
    assert point.x == math.inf


def test_init_proj_matrix_follows_parameters():
    frustum = Frustum()
    frustum.aspect = 1.0
    frustum.init_proj_matrix()
    assert frustum.proj_matrix.rows[0][0] == pytest.approx(frustum.proj_matrix.rows[1][1])


def test_draw_fills_triangle_centre_and_clears_first():
    screen = ScreenData()
    screen.set_pixel(0, 0, 0.0, 0x123456)
    Camera().draw([Body(_triangle_mesh(-5.0, 0xFFFFFF))], screen)
    assert screen.get_pixel(128, 80) > 0
    assert screen.get_pixel(0, 0) == 0


def test_draw_culls_back_faces():
    screen = ScreenData()
    Camera().draw([Body(_triangle_mesh(-5.0, 0xFFFFFF, reverse=True))], screen)
    assert _lit_count(screen) == 0


def test_draw_skips_triangles_behind_camera():
    screen = ScreenData()
    Camera().draw([Body(_triangle_mesh(5.0, 0xFFFFFF))], screen)
    assert _lit_count(screen) == 0


def test_draw_uses_camera_transform():
    reference = ScreenData()
    Camera().draw([Body(_triangle_mesh(-5.0, 0xFFFFFF))], reference)

    screen = ScreenData()
    camera = Camera(transform=Transform(position=Vector3(0.0, 0.0, 10.0)))
    camera.draw([Body(_triangle_mesh(5.0, 0xFFFFFF))], screen)
    assert reference.get_pixel(128, 80) > 0
    assert screen.get_pixel(128, 80) == reference.get_pixel(128, 80)
    assert _lit_count(screen) == _lit_count(reference)


def test_vertex_colours_keep_hue():
    screen = ScreenData()
    mesh = _triangle_mesh(-5.0, 0xFF0000, mode=RenderMode.VERTEX_COLORS)
    Camera().draw([Body(mesh)], screen)
    pixel = screen.get_pixel(128, 80)
    assert pixel & 0x00FFFF == 0
    assert pixel >> 16 > 0


def test_glowing_is_dimmer_when_facing_camera():
    regular, glowing = ScreenData(), ScreenData()
    Camera().draw([Body(_triangle_mesh(-5.0, 0xFF0000))], regular)
    Camera().draw(
        [Body(_triangle_mesh(-5.0, 0xFF0000, lighting=LightingMode.GLOWING))], glowing
    )
    assert glowing.get_pixel(128, 80) >> 16 < regular.get_pixel(128, 80) >> 16


@pytest.mark.parametrize("near_first", [True, False])
def test_nearer_triangle_wins(near_first):
    near = Body(_triangle_mesh(-3.0, 0xFF0000))
    far = Body(_triangle_mesh(-6.0, 0x0000FF))
    objects = [near, far] if near_first else [far, near]
    screen = ScreenData()
    Camera().draw(objects, screen)
    pixel = screen.get_pixel(128, 80)
    assert pixel & 0x00FFFF == 0
    assert pixel >> 16 > 0


def test_wireframe_draws_outline_only():
    screen = ScreenData()
    Camera().draw_wireframe([Body(_triangle_mesh(-5.0, 0x00FF00))], screen)
    colours = {value for row in screen.pixels for value in row if value}
    assert colours == {0x00FF00}
    assert screen.get_pixel(128, 80) == 0