"""Bullets, the gun that fires them and the player's hitbox."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import ClassVar, Union

from termvelocity.debug import debug
from termvelocity.engine import GameEngine, GameObject, Script, SphereCollider
from termvelocity.geometry import Transform, Vector3
from termvelocity.mesh import LightingMode, Mesh, RenderMode
from termvelocity.tui import play_audio

_ZERO = Vector3(0.0, 0.0, 0.0)
BULLET_COLOR = 0x00FFFF
BULLET_SCALE = Vector3(0.5, 0.5, 0.5)
CRYSTAL_POINTS = 10


class PlayerBodyScript(Script):
    """Keeps the player's hitbox on the camera and ends the game on an asteroid hit."""

    score: ClassVar[int] = 0

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        pass

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        game_object.transform.position = engine.camera.transform.position

        hitbox = game_object.get_script(SphereCollider)
        if hitbox is None:
            debug("PlayerBodyScript does not have a hitbox!")
            return
        for obj in engine.scene.game_objects:
            if not obj.has_tag("asteroid"):
                continue
            other = obj.get_script(SphereCollider)
            if other is not None and other.is_colliding_with(hitbox):
                debug(f"!!! Player hit by asteroid !!! at {obj.transform.position} "
                      f"from {game_object.transform.position}")
                engine.end = True


class BulletScript(Script):
    """Flies straight ahead, shatters crystals it touches and expires after a while."""

    DURATION = 5000
    SPEED = 60.0

    def __init__(self) -> None:
        self.rotation_speed = _ZERO
        self.position_speed = _ZERO
        self.elapsed_time = 0

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        debug("BulletScript started")
        game_object.transform.scale = BULLET_SCALE
        self.rotation_speed = Vector3(10.0, 0.0, 0.0)
        mesh = game_object.mesh
        mesh.render_mode = RenderMode.VERTEX_COLORS
        mesh.vertex_colors.extend([BULLET_COLOR] * len(mesh.vertices))
        mesh.lighting_mode = LightingMode.GLOWING
        self.position_speed = engine.camera.transform.front() * self.SPEED
        self.elapsed_time = 0

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        seconds = delta_time / 1000.0
        transform = game_object.transform
        transform.rotation = transform.rotation + self.rotation_speed * seconds
        transform.position = transform.position + self.position_speed * seconds

        collider = game_object.get_script(SphereCollider)
        if collider is None:
            debug("BulletScript: SphereCollider not found!")
            return
        for other in engine.scene.game_objects:
            if not other.has_tag("crystal") or other.delete_self:
                continue
            target = other.get_script(SphereCollider)
            if target is not None and target.is_colliding_with(collider):
                play_audio("boom", 5)
                PlayerBodyScript.score += CRYSTAL_POINTS
                game_object.delete_self = True
                other.delete_self = True

        self.elapsed_time += delta_time
        if self.elapsed_time > self.DURATION:
            debug(f"BulletScript: bullet expired after {self.elapsed_time}ms")
            game_object.delete_self = True


class BulletHandlerScript(Script):
    """Fires a pair of bullets from the barrels when 'q' is pressed."""

    FIRE_KEY = "q"
    BARREL_OFFSETS = (Vector3(1.0, -1.0, -2.0), Vector3(-1.0, -1.0, -2.0))

    def __init__(self, model_directory: Union[str, Path] = "models") -> None:
        self.model_directory = model_directory

    def _spawn_bullet(self, engine: GameEngine, delta: Vector3) -> None:
        camera = engine.camera.transform
        rotate = Transform(rotation=camera.rotation).to_world_matrix()
        bullet = GameObject(
            transform=dataclasses.replace(
                camera, position=camera.position + (rotate @ delta.to4()).to3()
            ),
            mesh=Mesh.load_obj_file("sphere8", directory=self.model_directory),
            name="Bullet",
            tags=[],
            scripts=[SphereCollider(2.0), BulletScript()],
        )
        engine.add_object(bullet)

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        debug("BulletHandlerScript started")

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        if engine.input.is_first_down(self.FIRE_KEY):
            for offset in self.BARREL_OFFSETS:
                self._spawn_bullet(engine, offset)
            play_audio("lazer", 2)