"""Asteroids, crystals and the manager that keeps spawning them."""

from __future__ import annotations

import math
import random
from pathlib import Path
from typing import Union

from termvelocity.camera import color_lerp, rgb
from termvelocity.cockpit import MoveHandlerScript
from termvelocity.debug import debug
from termvelocity.engine import GameEngine, GameObject, Script, SphereCollider
from termvelocity.geometry import Transform, Vector3
from termvelocity.mesh import LightingMode, Mesh

_ZERO = Vector3(0.0, 0.0, 0.0)
_AXES = (Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0))

ROCK_MODEL_COUNT = 8
CRYSTAL_MODEL_COUNT = 3
SPAWN_RANGE = 30.0
SPAWN_DISTANCE = 120.0
CRYSTAL_EVERY = 15
COLLIDER_RADIUS = 2.0
ROCK_SCALE = Vector3(4.0, 4.0, 4.0)
CRYSTAL_RESET_Z = -80.0
CRYSTAL_WRAP_Z = -3.0
ASTEROID_PASS_DISTANCE = 10.0


def random_rock_color(gen: random.Random) -> int:
    """Return a grey rock colour, now and then tinted brown."""
    r = gen.uniform(0.35, 0.45)
    g = b = r
    brown_chance = gen.uniform(0.0, 1.0)
    if gen.uniform(0.0, 1.0) < brown_chance ** 3:
        r += gen.uniform(0.05, 0.1)
        g += gen.uniform(0.02, 0.06)
    return (int(r * 255.0) << 16) | (int(g * 255.0) << 8) | int(b * 255.0)


def hsl_to_rgb(h: float, s: float, l: float) -> int:
    """Convert hue (degrees), saturation and lightness to a 0xRRGGBB colour."""
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    x = c * (1.0 - abs(math.fmod(h / 60.0, 2.0) - 1.0))
    m = l - c / 2.0

    if h < 60.0:
        r1, g1, b1 = c, x, 0.0
    elif h < 120.0:
        r1, g1, b1 = x, c, 0.0
    elif h < 180.0:
        r1, g1, b1 = 0.0, c, x
    elif h < 240.0:
        r1, g1, b1 = 0.0, x, c
    elif h < 300.0:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x

    return rgb(int((r1 + m) * 255.0), int((g1 + m) * 255.0), int((b1 + m) * 255.0))


def _random_spin(gen: random.Random, speed_mult: float) -> Vector3:
    scale = gen.randint(-1, 1)
    axis = _AXES[gen.randrange(3)]
    return axis * scale * speed_mult


def _random_orientation(gen: random.Random) -> Vector3:
    return Vector3(gen.uniform(-3.0, 3.0), gen.uniform(-3.0, 3.0), gen.uniform(-3.0, 3.0))


def _drift(game_object: GameObject, rotation_speed: Vector3, position_speed: Vector3, delta_time: int) -> None:
    seconds = delta_time / 1000.0
    transform = game_object.transform
    transform.rotation = transform.rotation + rotation_speed * seconds
    transform.position = transform.position + position_speed * seconds


class AsteroidScript(Script):
    """Drifts and tumbles a rock towards the player; removes it once passed."""

    def __init__(self, speed_mult: float = 1.0) -> None:
        self.speed_mult = speed_mult
        self.rotation_speed = _ZERO
        self.position_speed = _ZERO

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        debug("AsteroidScript started")
        gen = engine.gen
        game_object.transform.scale = ROCK_SCALE
        game_object.tags.append("asteroid")

        self.position_speed = Vector3(
            gen.uniform(-3.0, 3.0) / 10.0,
            gen.uniform(-3.0, 3.0) / 10.0,
            gen.uniform(2.0, 8.0),
        ) * self.speed_mult
        self.rotation_speed = _random_spin(gen, self.speed_mult)
        game_object.transform.rotation = _random_orientation(gen)
        game_object.mesh.vertex_colors.extend(
            random_rock_color(gen) for _ in game_object.mesh.vertices
        )

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        _drift(game_object, self.rotation_speed, self.position_speed, delta_time)
        camera_z = engine.camera.transform.position.z
        if game_object.transform.position.z > camera_z + ASTEROID_PASS_DISTANCE:
            game_object.delete_self = True


class CrystalScript(Script):
    """Drifts a two-tone crystal; it wraps back into the distance when it gets close."""

    def __init__(self, speed_mult: float = 1.0) -> None:
        self.speed_mult = speed_mult
        self.rotation_speed = _ZERO
        self.position_speed = _ZERO

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        debug("CrystalScript started")
        gen = engine.gen
        game_object.transform.scale = ROCK_SCALE

        self.rotation_speed = _random_spin(gen, self.speed_mult)
        game_object.transform.rotation = _random_orientation(gen)
        self.position_speed = Vector3(
            gen.uniform(-3.0, 3.0) / 20.0,
            gen.uniform(-3.0, 3.0) / 20.0,
            gen.uniform(2.0, 8.0),
        )

        hue = gen.randint(0, 360)
        high = hsl_to_rgb(hue, gen.uniform(0.8, 0.95), gen.uniform(0.45, 0.55))
        low = hsl_to_rgb((hue + 70) % 360, gen.uniform(0.8, 0.95), gen.uniform(0.45, 0.55))
        if gen.randrange(2) == 0:
            high, low = low, high

        mesh = game_object.mesh
        if mesh.vertices:
            min_y = min(v.y for v in mesh.vertices)
            span = max(v.y for v in mesh.vertices) - min_y
            mesh.vertex_colors.extend(
                color_lerp(low, high, (v.y - min_y) / span if span else 0.0)
                for v in mesh.vertices
            )
        mesh.lighting_mode = LightingMode.CRYSTAL

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        _drift(game_object, self.rotation_speed, self.position_speed, delta_time)
        position = game_object.transform.position
        if position.z > CRYSTAL_WRAP_Z:
            game_object.transform.position = Vector3(position.x, position.y, CRYSTAL_RESET_Z)


class AsteroidManager(Script):
    """Spawns asteroids ahead of the camera, faster as time passes and the ship speeds up."""

    CENTER_ASTEROID_PER_SECOND = 0.2

    def __init__(self, model_directory: Union[str, Path] = "models") -> None:
        self.model_directory = model_directory
        self.asteroid_period = 0.04
        self.curr_asteroid_period = self.asteroid_period
        self.curr_mult = 1.0
        self.count = 0

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        debug("AsteroidManager started")
        self.asteroid_period = 0.04
        self.curr_asteroid_period = self.asteroid_period
        self.curr_mult = 1.0
        self.count = 0

    def _spawn(self, engine: GameEngine, model: str, name: str, script: Script, centered: bool) -> None:
        camera = engine.camera.transform.position
        if centered:
            x, y = camera.x, camera.y
        else:
            x = engine.gen.uniform(-SPAWN_RANGE, SPAWN_RANGE) + camera.x
            y = engine.gen.uniform(-SPAWN_RANGE, SPAWN_RANGE) + camera.y
        spawned = GameObject(
            transform=Transform(position=Vector3(x, y, camera.z - SPAWN_DISTANCE)),
            mesh=Mesh.load_obj_file(model, directory=self.model_directory),
            name=name,
            tags=[name.lower()],
            scripts=[SphereCollider(COLLIDER_RADIUS), script],
        )
        engine.add_object(spawned)

    def _spawn_asteroid(self, engine: GameEngine, centered: bool = False) -> None:
        model = f"rock_{engine.gen.randint(1, ROCK_MODEL_COUNT)}"
        self._spawn(engine, model, "Asteroid", AsteroidScript(self.curr_mult), centered)

    def _spawn_crystal(self, engine: GameEngine) -> None:
        model = f"sharp-crystal-{engine.gen.randint(1, CRYSTAL_MODEL_COUNT)}"
        self._spawn(engine, model, "Crystal", CrystalScript(self.curr_mult), False)

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        seconds = delta_time / 1000.0
        self.curr_mult += seconds * 0.05

        while self.curr_asteroid_period <= 0:
            debug("Spawning asteroid")
            self._spawn_asteroid(engine)
            self.curr_asteroid_period = self.asteroid_period
            self.count += 1
            if self.count % CRYSTAL_EVERY == 0:
                debug("Spawning crystal")
                self._spawn_crystal(engine)

        if engine.gen.uniform(0.0, 1.0) < self.CENTER_ASTEROID_PER_SECOND * seconds * self.curr_mult:
            self._spawn_asteroid(engine, centered=True)

        holder = engine.get_object_by_name("MoveHandler")
        handler = holder.get_script(MoveHandlerScript) if holder is not None else None
        if handler is None:
            raise LookupError("no MoveHandler object with a MoveHandlerScript in the scene")
        forward_speed = abs(handler.curr_move_speed.z)
        self.curr_asteroid_period -= (
            seconds
            * (forward_speed + 0.15)
            * self.curr_mult ** 0.75
            * engine.gen.uniform(0.5, 1.5)
        )