"""Player movement and the cockpit parts that stay in front of the camera."""

from __future__ import annotations

import dataclasses

from termvelocity.camera import color_lerp
from termvelocity.engine import GameEngine, GameObject, Script
from termvelocity.geometry import Vector3
from termvelocity.mesh import LightingMode

DIST_TO_CAMERA = 0.37

_ZERO = Vector3(0.0, 0.0, 0.0)
_ARROW_NEAR_COLOR = 0xD70040
_ARROW_FAR_COLOR = 0xFFC300
_LAG_FACTOR = 0.13
_ROTATION_LAG = 0.3
_MIN_MOVE_SPEED = 0.01
_MOVE_PUSHBACK = 30.0


class MoveHandlerScript(Script):
    """Turns WASD and space into damped camera rotation and movement."""

    ROTATION_ACCEL = 0.0002
    MOVE_ACCEL = 0.007
    ROTATION_DAMPING = 1.2
    MOVE_DAMPING = 1.3

    def __init__(self) -> None:
        self.curr_rot_speed = _ZERO
        self.curr_move_speed = _ZERO

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        self.curr_rot_speed = _ZERO
        self.curr_move_speed = _ZERO

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        rotation_speed = self.ROTATION_ACCEL * delta_time
        move_speed = self.MOVE_ACCEL * delta_time
        camera = engine.camera.transform
        keys = engine.input

        rot = self.curr_rot_speed
        if keys.is_down("a"):
            rot = dataclasses.replace(rot, y=rot.y + rotation_speed)
        if keys.is_down("d"):
            rot = dataclasses.replace(rot, y=rot.y - rotation_speed)
        if keys.is_down("w"):
            rot = dataclasses.replace(rot, x=rot.x + rotation_speed)
        if keys.is_down("s"):
            rot = dataclasses.replace(rot, x=rot.x - rotation_speed)
        if keys.is_down(" "):
            self.curr_move_speed = self.curr_move_speed + camera.front() * move_speed

        self.curr_rot_speed = rot / self.ROTATION_DAMPING
        self.curr_move_speed = self.curr_move_speed / self.MOVE_DAMPING
        camera.rotation = camera.rotation + self.curr_rot_speed
        camera.position = camera.position + self.curr_move_speed


def _move_handler(engine: GameEngine) -> MoveHandlerScript:
    holder = engine.get_object_by_name("MoveHandler")
    handler = holder.get_script(MoveHandlerScript) if holder is not None else None
    if handler is None:
        raise LookupError("no MoveHandler object with a MoveHandlerScript in the scene")
    return handler


class _CameraAttachment(Script):
    """Shared placement of objects that ride along in front of the camera."""

    def __init__(
        self,
        delta: Vector3,
        color: int,
        lighting_mode: LightingMode,
        rotation: Vector3 = _ZERO,
    ) -> None:
        self.delta = delta
        self.color = color
        self.lighting_mode = lighting_mode
        self.rotation = rotation

    def _place_initially(self, game_object: GameObject) -> None:
        game_object.mesh.lighting_mode = self.lighting_mode
        game_object.tags = ["cockpit"]
        game_object.transform.position = Vector3(0.0, 0.0, -DIST_TO_CAMERA) + self.delta

    def _follow_camera(self, engine: GameEngine, game_object: GameObject) -> MoveHandlerScript:
        camera = engine.camera.transform
        front = camera.front()
        rotate = dataclasses.replace(camera, position=_ZERO).to_world_matrix()
        rotated_delta = (rotate @ self.delta.to4()).to3()

        handler = _move_handler(engine)
        move_speed = handler.curr_move_speed.length()
        rot_speed = handler.curr_rot_speed

        distance = DIST_TO_CAMERA
        if move_speed >= _MIN_MOVE_SPEED:
            distance += move_speed / _MOVE_PUSHBACK

        lag = Vector3(rot_speed.y * _LAG_FACTOR, -rot_speed.x * _LAG_FACTOR, 0.0)
        lagged = (rotate @ lag.to4()).to3()

        game_object.transform.position = camera.position + front * distance + rotated_delta + lagged
        return handler


class CockpitScript(_CameraAttachment):
    """A single-coloured cockpit part that sways as the ship turns."""

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        game_object.mesh.vertex_colors.extend([self.color] * len(game_object.mesh.vertices))
        self._place_initially(game_object)

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        handler = self._follow_camera(engine, game_object)
        camera = engine.camera.transform
        game_object.transform.rotation = (
            camera.rotation + self.rotation - handler.curr_rot_speed * _ROTATION_LAG
        )


class ArrowScript(_CameraAttachment):
    """The dashboard arrow, shaded from red at the near end to amber at the far end."""

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        vertices = game_object.mesh.vertices
        if vertices:
            near_z = min(v.z for v in vertices)
            far_z = max(v.z for v in vertices)
            span = far_z - near_z
            game_object.mesh.vertex_colors.extend(
                color_lerp(
                    _ARROW_NEAR_COLOR,
                    _ARROW_FAR_COLOR,
                    (v.z - near_z) / span if span else 0.0,
                )
                for v in vertices
            )
        self._place_initially(game_object)

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        self._follow_camera(engine, game_object)
        game_object.transform.rotation = _ZERO