"""Game entry point: builds the starting scene and runs the engine."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from termvelocity.asteroids import AsteroidManager
from termvelocity.cockpit import ArrowScript, CockpitScript, MoveHandlerScript
from termvelocity.combat import BulletHandlerScript, PlayerBodyScript
from termvelocity.engine import GameEngine, GameObject, SphereCollider
from termvelocity.geometry import Transform, Vector3
from termvelocity.mesh import LightingMode, Mesh
from termvelocity.title import TitleScript

COCKPIT_COLOR = 0x323542
BARREL_COLOR = 0x8D93B5
COMPUTER_COLOR = 0x00C0C0
ARROW_COLOR = 0xAA2222
PLAYER_RADIUS = 0.1

_ZERO = Vector3(0.0, 0.0, 0.0)
_BARREL_ROTATION = Vector3(1.57, 0.0, 0.0)
_BARREL_SCALE = Vector3(0.11, 0.4, 0.11)


def _barrel(name: str, side: float) -> GameObject:
    return GameObject(
        name=name,
        mesh=Mesh.load_obj_file("cylinderW"),
        scripts=[
            CockpitScript(
                Vector3(side * 0.225, -0.23, -0.22),
                BARREL_COLOR,
                LightingMode.REGULAR,
                _BARREL_ROTATION,
            )
        ],
        transform=Transform(scale=_BARREL_SCALE),
    )


def build_scene(engine: GameEngine) -> list[GameObject]:
    """Add the player's ship, the spawners and the title banners to the engine.

    Models are read from ``models/`` and title images from ``images/``.
    Returns the objects in the order they were added.
    """
    objects = [
        GameObject(name="MoveHandler", scripts=[MoveHandlerScript()]),
        GameObject(name="BulletHandler", scripts=[BulletHandlerScript()]),
        GameObject(
            name="Cockpit",
            mesh=Mesh.load_obj_file("cockpit"),
            scripts=[CockpitScript(_ZERO, COCKPIT_COLOR, LightingMode.CRYSTAL)],
            transform=Transform(scale=Vector3(0.775, 0.775, 0.775)),
        ),
        GameObject(
            name="Computer",
            mesh=Mesh.load_obj_file("comp"),
            scripts=[
                CockpitScript(
                    Vector3(0.0, -0.27, 0.01),
                    COMPUTER_COLOR,
                    LightingMode.REGULAR,
                    Vector3(-0.9, 0.0, 0.0),
                )
            ],
            transform=Transform(scale=Vector3(0.5, 0.5, 4.0)),
        ),
        _barrel("Barrel1", 1.0),
        _barrel("Barrel2", -1.0),
        GameObject(
            name="Arrow",
            mesh=Mesh.load_obj_file("arrow"),
            scripts=[
                ArrowScript(Vector3(0.0, -0.13, 0.05), ARROW_COLOR, LightingMode.REGULAR, _ZERO)
            ],
            transform=Transform(
                position=Vector3(0.0, 0.0, -1.5),
                scale=Vector3(0.05, 0.15, 0.05) * 2.0,
            ),
        ),
        GameObject(name="AsteroidManager", scripts=[AsteroidManager()]),
        GameObject(
            name="PlayerBody",
            scripts=[SphereCollider(PLAYER_RADIUS), PlayerBodyScript()],
        ),
        GameObject(name="TopTitle", scripts=[TitleScript("terminal", True)]),
        GameObject(name="BottomTitle", scripts=[TitleScript("velocity", False)]),
    ]
    for game_object in objects:
        engine.add_object(game_object)
    return objects


def game_over_message(score: int) -> str:
    """Return the text shown when the player's ship is destroyed."""
    return (
        "Game over! You died due to an asteroid collision.\n"
        f"Final score: {score}"
    )


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termvelocity",
        description="Fly through an asteroid field in the terminal. "
        "WASD steers, space thrusts, q fires.",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed for the game")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game until the ship is hit; return the exit status."""
    args = _parse_args(argv)
    engine = GameEngine(seed=args.seed)
    try:
        build_scene(engine)
    except (OSError, ValueError) as exc:
        print(f"termvelocity: cannot load game assets: {exc}", file=sys.stderr)
        return 1
    engine.run(lambda: print(game_over_message(PlayerBodyScript.score)))
    return 0


if __name__ == "__main__":
    sys.exit(main())