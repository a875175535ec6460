"""The sliding title banner shown at the start of a game."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from termvelocity.debug import debug
from termvelocity.engine import GameEngine, GameObject, Script
from termvelocity.image import Image
from termvelocity.screendata import ScreenData

SHADOW_COLOR = 0x666666
_GAP = 3


class TitleScript(Script):
    """Shows an image with a drop shadow that accelerates off the screen.

    The top title slides left, the bottom one slides right.
    """

    ACCEL = 10.0

    def __init__(self, filename: str, on_top: bool, directory: Union[str, Path] = "images") -> None:
        self.image = Image.load_ppm_file(filename, directory)
        self.shadow = Image(
            self.image.width,
            self.image.height,
            [SHADOW_COLOR if color != 0 else 0 for color in self.image.pixels],
        )
        self.on_top = on_top
        self.vel_x = 0.0
        self.curr_x = 0.0
        self.curr_y = 0.0

    def draw(self, engine: GameEngine) -> None:
        """Draw the shadow and then the image onto the overlay layer."""
        screen = engine.screen.screen_data
        screen.draw_image(self.shadow, self.curr_x + 1, self.curr_y)
        screen.draw_image(self.shadow, self.curr_x + 2, self.curr_y)
        screen.draw_image(self.image, self.curr_x, self.curr_y)

    def start(self, engine: GameEngine, game_object: GameObject) -> None:
        self.curr_x = float(ScreenData.WIDTH // 2 - self.image.width // 2)
        if self.on_top:
            self.curr_y = float(ScreenData.HEIGHT // 2 - self.image.height - _GAP)
        else:
            self.curr_y = float(ScreenData.HEIGHT // 2 + _GAP)
        debug(f"TitleScript started at {self.curr_x}, {self.curr_y}")
        self.draw(engine)

    def update(self, delta_time: int, engine: GameEngine, game_object: GameObject) -> None:
        screen = engine.screen.screen_data
        self.vel_x += self.ACCEL * delta_time / 1000.0
        direction = -1 if self.on_top else 1
        self.curr_x += self.vel_x ** 2.3 * delta_time / 1000.0 * direction
        if self.on_top:
            screen.clear_images()
        self.draw(engine)
        if self.curr_x + self.image.width < 0 or self.curr_x > ScreenData.WIDTH:
            debug("TitleScript finished, deleting object")
            screen.clear_images()
            game_object.delete_self = True