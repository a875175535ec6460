"""Off-screen frame buffer with depth testing and an image overlay layer."""

from __future__ import annotations

from typing import ClassVar

from termvelocity.image import Image

_CLEAR_DEPTH = -100000.0


class ScreenData:
    """Colour, depth and overlay buffers for a fixed-size screen.

    Colours are 0xRRGGBB integers. Larger depth values are closer to the
    viewer and win the depth test. Overlay pixels that are non-zero are
    shown on top of the rendered scene.
    """

    FAC: ClassVar[int] = 16
    WIDTH: ClassVar[int] = 16 * FAC
    HEIGHT: ClassVar[int] = 9 * FAC

    def __init__(self) -> None:
        self.pixels: list[list[int]] = []
        self.image_pixels: list[list[int]] = []
        self.depth_buffer: list[list[float]] = []
        self.refresh()
        self.clear_images()

    @classmethod
    def _in_bounds(cls, x: int, y: int) -> bool:
        return 0 <= x < cls.WIDTH and 0 <= y < cls.HEIGHT

    def refresh(self) -> None:
        """Clear the colour buffer and reset the depth buffer."""
        self.pixels = [[0] * self.WIDTH for _ in range(self.HEIGHT)]
        self.depth_buffer = [[_CLEAR_DEPTH] * self.WIDTH for _ in range(self.HEIGHT)]

    def get_pixel(self, x: int, y: int) -> int:
        """Return the visible colour at (x, y), or 0 when out of bounds."""
        if not self._in_bounds(x, y):
            return 0
        overlay = self.image_pixels[y][x]
        return overlay if overlay != 0 else self.pixels[y][x]

    def set_pixel(self, x: int, y: int, z: float, color: int) -> bool:
        """Set (x, y) to ``color`` if it passes the depth test; report success."""
        if not self._in_bounds(x, y):
            return False
        if z < self.depth_buffer[y][x]:
            return False
        self.pixels[y][x] = color
        self.depth_buffer[y][x] = z
        return True

    def set_image_pixel(self, x: int, y: int, color: int) -> None:
        """Set an overlay pixel; out-of-bounds coordinates are ignored."""
        if self._in_bounds(x, y):
            self.image_pixels[y][x] = color

    def clear_images(self) -> None:
        """Reset the overlay layer to fully transparent."""
        self.image_pixels = [[0] * self.WIDTH for _ in range(self.HEIGHT)]

    def draw_line(
        self, x1: int, y1: int, x2: int, y2: int, color: int, z: float = 1.0
    ) -> None:
        """Draw a line between two points with Bresenham's algorithm."""
        x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)
        dx = abs(x2 - x1)
        dy = abs(y2 - y1)
        sx = 1 if x1 < x2 else -1
        sy = 1 if y1 < y2 else -1
        err = dx - dy

        while True:
            self.set_pixel(x1, y1, z, color)
            if x1 == x2 and y1 == y2:
                break
            err2 = err * 2
            if err2 > -dy:
                err -= dy
                x1 += sx
            if err2 < dx:
                err += dx
                y1 += sy

    def draw_image(self, image: Image, x: float = 0, y: float = 0) -> None:
        """Copy an image onto the overlay with its top-left corner at (x, y).

        Black (0x000000) image pixels are transparent.
        """
        left, top = int(x), int(y)
        if image.width == 0:
            return
        for index, color in enumerate(image.pixels):
            if color == 0:
                continue
            row, col = divmod(index, image.width)
            self.set_image_pixel(left + col, top + row, color)