import pytest

from termvelocity.app import (
    ARROW_COLOR,
    COCKPIT_COLOR,
    COMPUTER_COLOR,
    build_scene,
    game_over_message,
    main,
)
from termvelocity.cockpit import CockpitScript, MoveHandlerScript
from termvelocity.engine import GameEngine, SphereCollider
from termvelocity.input import Input
from termvelocity.mesh import LightingMode
from termvelocity.title import SHADOW_COLOR

TETRAHEDRON = "\n".join(
    [
        "v 0 0 0",
        "v 1 0 0",
        "v 0 1 0",
        "v 0 0 1",
        "f 1 2 3",
        "f 1 2 4",
        "f 1 3 4",
        "f 2 3 4",
        "",
    ]
)
WHITE = 0xFFFFFF
TITLE_PPM = "P3\n2 1\n255\n255 255 255 255 255 255\n"


@pytest.fixture
def assets(tmp_path, monkeypatch):
    models = tmp_path / "models"
    models.mkdir()
    for name in ("cockpit", "comp", "cylinderW", "arrow"):
        (models / f"{name}.obj").write_text(TETRAHEDRON)
    images = tmp_path / "images"
    images.mkdir()
    for name in ("terminal", "velocity"):
        (images / f"{name}.ppm").write_text(TITLE_PPM)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def engine():
    return GameEngine(seed=1, input_state=Input(read_char=lambda: None))


def _settle(engine):
    engine.frame(0)


def test_build_scene_adds_objects_in_order(assets, engine):
    added = build_scene(engine)
    names = [obj.name for obj in added]
    assert names == [
        "MoveHandler",
        "BulletHandler",
        "Cockpit",
        "Computer",
        "Barrel1",
        "Barrel2",
        "Arrow",
        "AsteroidManager",
        "PlayerBody",
        "TopTitle",
        "BottomTitle",
    ]
    _settle(engine)
    assert [obj.name for obj in engine.scene.game_objects] == names


def test_move_handler_is_findable(assets, engine):
    build_scene(engine)
    _settle(engine)
    holder = engine.get_object_by_name("MoveHandler")
    handler = holder.get_script(MoveHandlerScript)
    assert handler.curr_move_speed.length() == 0.0


def test_cockpit_parts_are_coloured(assets, engine):
    build_scene(engine)
    _settle(engine)
    cockpit = engine.get_object_by_name("Cockpit")
    assert set(cockpit.mesh.vertex_colors) == {COCKPIT_COLOR}
    assert len(cockpit.mesh.vertex_colors) == len(cockpit.mesh.vertices)
    assert cockpit.mesh.lighting_mode is LightingMode.CRYSTAL
    assert cockpit.tags == ["cockpit"]
    computer = engine.get_object_by_name("Computer")
    assert set(computer.mesh.vertex_colors) == {COMPUTER_COLOR}


def test_barrels_mirror_each_other(assets, engine):
    build_scene(engine)
    _settle(engine)
    left = engine.get_object_by_name("Barrel1")
    right = engine.get_object_by_name("Barrel2")
    assert left.get_script(CockpitScript).delta.x == -right.get_script(CockpitScript).delta.x
    assert left.transform.scale == right.transform.scale
    assert left.mesh.vertex_colors == right.mesh.vertex_colors


def test_arrow_is_shaded_between_near_and_far_colours(assets, engine):
    build_scene(engine)
    _settle(engine)
    arrow = engine.get_object_by_name("Arrow")
    assert 0xD70040 in arrow.mesh.vertex_colors
    assert 0xFFC300 in arrow.mesh.vertex_colors
    assert ARROW_COLOR not in arrow.mesh.vertex_colors


def test_player_body_has_small_hitbox(assets, engine):
    build_scene(engine)
    _settle(engine)
    player = engine.get_object_by_name("PlayerBody")
    hitbox = player.get_script(SphereCollider)
    assert hitbox.radius == pytest.approx(0.1)


def test_titles_are_drawn_on_overlay(assets, engine):
    build_scene(engine)
    screen = engine.screen.screen_data
    overlay = [color for row in screen.image_pixels for color in row if color]
    assert WHITE in overlay
    assert SHADOW_COLOR in overlay


def test_build_scene_requires_models(tmp_path, monkeypatch, engine):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(OSError):
        build_scene(engine)


def test_game_over_message_reports_score():
    message = game_over_message(42)
    lines = message.splitlines()
    assert lines[0] == "Game over! You died due to an asteroid collision."
    assert lines[1] == "Final score: 42"


def test_main_fails_without_assets(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["--seed", "3"]) == 1
    assert "cannot load game assets" in capsys.readouterr().err


def test_main_rejects_bad_seed():
    with pytest.raises(SystemExit) as info:
        main(["--seed", "abc"])
    assert info.value.code == 2