import signal

import pytest

from termvelocity.engine import GameEngine, GameObject, Scene, Script, SphereCollider
from termvelocity.geometry import Transform, Vector3
from termvelocity.input import Input
from termvelocity.screendata import ScreenData
from termvelocity.tui import HOME, SHOW_CURSOR


def make_engine():
    return GameEngine(seed=7, input_state=Input(read_char=lambda: None))


class Recorder(Script):
    def __init__(self):
        self.started = []
        self.updates = []

    def start(self, engine, game_object):
        self.started.append(game_object.name)

    def update(self, delta_time, engine, game_object):
        self.updates.append(delta_time)


class Deleter(Script):
    def update(self, delta_time, engine, game_object):
        game_object.delete_self = True


class Ender(Script):
    def update(self, delta_time, engine, game_object):
        engine.end = True


def test_spheres_overlap_when_closer_than_radii_sum():
    a, b = SphereCollider(1.0), SphereCollider(1.0)
    b.position = Vector3(1.5, 0.0, 0.0)
    assert a.is_colliding_with(b) is True
    assert b.is_colliding_with(a) is True


def test_spheres_touching_exactly_do_not_collide():
    a, b = SphereCollider(1.0), SphereCollider(1.0)
    b.position = Vector3(0.0, 2.0, 0.0)
    assert a.is_colliding_with(b) is False


def test_collider_follows_object_position():
    engine = make_engine()
    collider = SphereCollider(0.5)
    obj = GameObject(transform=Transform(position=Vector3(1.0, 2.0, 3.0)), scripts=[collider])
    obj.start(engine)
    assert collider.position == Vector3(1.0, 2.0, 3.0)
    obj.transform.position = Vector3(4.0, 5.0, 6.0)
    obj.update(10, engine)
    assert collider.position == Vector3(4.0, 5.0, 6.0)


def test_has_tag():
    obj = GameObject(tags=["asteroid", "rock"])
    assert obj.has_tag("rock") is True
    assert obj.has_tag("crystal") is False
    assert GameObject().has_tag("rock") is False


def test_get_script_matches_exact_type():
    collider = SphereCollider()
    obj = GameObject(scripts=[Recorder(), collider])
    assert obj.get_script(SphereCollider) is collider
    assert obj.get_script(Script) is None


def test_default_game_object_name():
    assert GameObject().name == "GameObject"


def test_update_skipped_when_marked_for_deletion():
    engine = make_engine()
    recorder = Recorder()
    obj = GameObject(scripts=[recorder], delete_self=True)
    obj.update(16, engine)
    assert recorder.updates == []


def test_added_object_is_started_and_pending_until_frame(capfd):
    engine = make_engine()
    recorder = Recorder()
    engine.add_object(GameObject(name="Thing", scripts=[recorder]))
    assert recorder.started == ["Thing"]
    assert engine.get_object_by_name("Thing") is None
    engine.frame(10)
    found = engine.get_object_by_name("Thing")
    assert found is not None and found.get_script(Recorder) is recorder
    assert recorder.updates == []
    engine.frame(20)
    assert recorder.updates == [20]
    capfd.readouterr()


def test_frame_writes_screen_to_terminal(capfd):
    engine = make_engine()
    engine.frame(10)
    out = capfd.readouterr().out
    assert out.startswith(HOME)


def test_frame_removes_objects_marked_for_deletion(capfd):
    engine = make_engine()
    engine.scene.game_objects.append(GameObject(name="Doomed", scripts=[Deleter()]))
    engine.scene.game_objects.append(GameObject(name="Kept"))
    engine.frame(10)
    assert [obj.name for obj in engine.scene.game_objects] == ["Kept"]
    capfd.readouterr()


def test_tick_passes_delta_to_every_object():
    engine = make_engine()
    first, second = Recorder(), Recorder()
    engine.scene = Scene([GameObject(scripts=[first]), GameObject(scripts=[second])])
    engine.tick(33)
    assert first.updates == [33]
    assert second.updates == [33]


def test_get_object_by_name_returns_first_match():
    engine = make_engine()
    a, b = GameObject(name="X"), GameObject(name="X")
    engine.scene.game_objects.extend([a, b])
    assert engine.get_object_by_name("X") is a
    assert engine.get_object_by_name("Y") is None


def test_crosshair_is_white_around_centre():
    engine = make_engine()
    engine.draw_crosshair()
    data = engine.screen.screen_data
    cx, cy = ScreenData.WIDTH // 2, ScreenData.HEIGHT // 2
    assert data.get_pixel(cx - 2, cy - 2) == 0xFFFFFF
    assert data.get_pixel(cx + 3, cy + 3) == 0xFFFFFF
    assert data.get_pixel(cx, cy) == 0
    white = sum(row.count(0xFFFFFF) for row in data.pixels)
    assert white == 12


def test_same_seed_gives_same_random_sequence():
    a = GameEngine(seed=42, input_state=Input(read_char=lambda: None))
    b = GameEngine(seed=42, input_state=Input(read_char=lambda: None))
    assert [a.gen.random() for _ in range(3)] == [b.gen.random() for _ in range(3)]
    assert a.seed == 42


def test_run_stops_on_end_flag_and_calls_callback(capfd):
    engine = make_engine()
    engine.scene.game_objects.append(GameObject(name="Ender", scripts=[Ender()]))
    calls = []
    previous = signal.getsignal(signal.SIGINT)
    try:
        engine.run(lambda: calls.append(engine.end))
    finally:
        signal.signal(signal.SIGINT, previous)
    assert calls == [True]
    assert SHOW_CURSOR in capfd.readouterr().out


class Boom(Script):
    def update(self, delta_time, engine, game_object):
        raise RuntimeError("boom")


def test_run_propagates_errors_without_calling_callback(capfd):
    engine = make_engine()
    engine.scene.game_objects.append(GameObject(scripts=[Boom()]))
    calls = []
    previous = signal.getsignal(signal.SIGINT)
    try:
        with pytest.raises(RuntimeError, match="boom"):
            engine.run(lambda: calls.append(True))
    finally:
        signal.signal(signal.SIGINT, previous)
    assert calls == []
    capfd.readouterr()