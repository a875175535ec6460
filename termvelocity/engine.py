"""Game objects, scripts and the main frame loop."""

from __future__ import annotations

import random
import secrets
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Type, TypeVar

from termvelocity.camera import Camera
from termvelocity.debug import debug
from termvelocity.geometry import Transform, Vector3
from termvelocity.input import Input
from termvelocity.mesh import Mesh
from termvelocity.screendata import ScreenData
from termvelocity.tui import ConsoleScreen, end_terminal_session, start_terminal_session

ScriptT = TypeVar("ScriptT", bound="Script")

_TARGET_FRAME_MS = 1000 // 30
_FIRST_DELTA_MS = 10
_CROSSHAIR_COLOR = 0xFFFFFF
_CROSSHAIR_OFFSET = 2


class Script:
    """Behaviour attached to a game object; subclasses override the hooks."""

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        """Called once when the owning object is added to the engine."""
        debug("!ERROR! Base ObjectScript::start called.")

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        """Called every frame with the elapsed milliseconds."""
        debug("!ERROR! Base ObjectScript::update called.")


class SphereCollider(Script):
    """A sphere that follows its object's position."""

    def __init__(self, radius: float = 1.0) -> None:
        self.radius = radius
        self.position = Vector3(0.0, 0.0, 0.0)

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        self.position = game_object.transform.position

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        self.position = game_object.transform.position

    def is_colliding_with(self, other: SphereCollider) -> bool:
        """Return True when the two spheres overlap."""
        return (other.position - self.position).length() < other.radius + self.radius


@dataclass
class GameObject:
    """A named thing in the scene with a transform, a mesh and scripts."""

    transform: Transform = field(default_factory=Transform)
    mesh: Mesh = field(default_factory=Mesh)
    scripts: list[Script] = field(default_factory=list)
    name: str = "GameObject"
    tags: list[str] = field(default_factory=list)
    delete_self: bool = False

    def __post_init__(self) -> None:
        debug("GameObject created: " + self.name)

    def start(self, engine: GameEngine) -> None:
        """Start every script in order."""
        debug("Starting object: " + self.name)
        for script in self.scripts:
            debug("Starting script")
            script.start(engine, self)

    def update(self, delta_time: int, engine: GameEngine) -> None:
        """Update every script unless the object is marked for deletion."""
        if self.delete_self:
            return
        for script in self.scripts:
            script.update(delta_time, engine, self)

    def has_tag(self, tag: str) -> bool:
        """Return True if the object carries the tag."""
        return tag in self.tags

    def get_script(self, script_type: Type[ScriptT]) -> Optional[ScriptT]:
        """Return the first script of exactly this type, or None."""
        for script in self.scripts:
            if type(script) is script_type:
                return script
        return None


@dataclass
class Scene:
    """The objects currently in play."""

    game_objects: list[GameObject] = field(default_factory=list)


class GameEngine:
    """Owns the scene, camera, screen and input, and runs the frame loop."""

    def __init__(self, seed: Optional[int] = None, input_state: Optional[Input] = None) -> None:
        self.camera = Camera()
        self.screen = ConsoleScreen()
        self.scene = Scene()
        self.input = input_state if input_state is not None else Input()
        self.seed = seed if seed is not None else secrets.randbits(32)
        self.gen = random.Random(self.seed)
        self.end = False
        self._pending: list[GameObject] = []
        debug(f"GameEngine created with seed: {self.seed}")

    def add_object(self, game_object: GameObject) -> None:
        """Start the object now; it joins the scene at the end of the frame."""
        game_object.start(self)
        self._pending.append(game_object)

    def get_object_by_name(self, name: str) -> Optional[GameObject]:
        """Return the first object in the scene with this name, or None."""
        return next((obj for obj in self.scene.game_objects if obj.name == name), None)

    def tick(self, delta_time: int) -> None:
        """Update every object in the scene."""
        for game_object in self.scene.game_objects:
            game_object.update(delta_time, self)

    def draw_crosshair(self) -> None:
        """Draw four small corner marks around the screen centre."""
        cx = ScreenData.WIDTH // 2
        cy = ScreenData.HEIGHT // 2
        o = _CROSSHAIR_OFFSET
        points = (
            (cx - o, cy - o), (cx - o + 1, cy - o), (cx - o, cy - o + 1),
            (cx + o, cy - o), (cx + o + 1, cy - o), (cx + o + 1, cy - o + 1),
            (cx - o, cy + o), (cx - o + 1, cy + o + 1), (cx - o, cy + o + 1),
            (cx + o, cy + o + 1), (cx + o + 1, cy + o + 1), (cx + o + 1, cy + o),
        )
        for x, y in points:
            self.screen.screen_data.set_pixel(x, y, 0.0, _CROSSHAIR_COLOR)

    def frame(self, delta_time: int) -> None:
        """Run one frame: input, updates, drawing and scene bookkeeping."""
        self.input.update(delta_time)
        self.tick(delta_time)

        self.camera.draw(self.scene.game_objects, self.screen.screen_data)
        self.draw_crosshair()
        self.screen.draw()

        self.scene.game_objects.extend(self._pending)
        self._pending.clear()
        self.scene.game_objects[:] = [
            obj for obj in self.scene.game_objects if not obj.delete_self
        ]

    def run(self, end_callback: Optional[Callable[[], None]] = None) -> None:
        """Run frames at about 30 per second until ``end`` is set."""
        start_terminal_session()
        last_dt = _FIRST_DELTA_MS
        try:
            while True:
                frame_start = time.perf_counter()
                self.frame(last_dt)

                elapsed = int((time.perf_counter() - frame_start) * 1000)
                if elapsed < _TARGET_FRAME_MS:
                    time.sleep((_TARGET_FRAME_MS - elapsed) / 1000)
                else:
                    debug(f"Frame took too long: {elapsed}ms")

                last_dt = int((time.perf_counter() - frame_start) * 1000)
                if self.end:
                    debug("Game ended")
                    break
        finally:
            end_terminal_session()
        if end_callback is not None:
            end_callback()