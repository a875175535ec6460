"""Raster images loaded from PPM files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


class PpmError(ValueError):
    """Raised when PPM data cannot be decoded."""


@dataclass
class Image:
    """A width x height grid of 0xRRGGBB colours, stored row by row."""

    width: int
    height: int
    pixels: Optional[list[int]] = field(default=None)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        if self.pixels is None:
            self.pixels = [0] * (self.width * self.height)
        elif len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match image dimensions")

    @classmethod
    def load_ppm_file(cls, filename: str, directory: Union[str, Path] = "images") -> Image:
        """Load ``<directory>/<filename>.ppm``."""
        path = Path(directory) / f"{filename}.ppm"
        return cls.from_ppm_bytes(path.read_bytes())

    @classmethod
    def from_ppm_bytes(cls, data: bytes) -> Image:
        """Decode a P3 (text) or P6 (binary) PPM image."""
        parts = data.split(b"\n", 3)
        while len(parts) < 4:
            parts.append(b"")
        header_line, size_line, max_line, body = parts
        header = header_line.decode("ascii", errors="replace").strip()
        if header not in ("P3", "P6"):
            raise PpmError(f"Unsupported PPM format: {header}")

        try:
            width, height = (int(token) for token in size_line.split()[:2])
            int(max_line.split()[0])
        except (ValueError, IndexError) as exc:
            raise PpmError("malformed PPM header") from exc

        count = width * height
        if header == "P3":
            try:
                values = [int(token) for token in body.split()[: 3 * count]]
            except ValueError as exc:
                raise PpmError("malformed PPM pixel data") from exc
        else:
            values = list(body[: 3 * count])
        if len(values) < 3 * count:
            raise PpmError("PPM pixel data is truncated")

        channels = iter(values)
        pixels = [(r << 16) | (g << 8) | b for r, g, b in zip(channels, channels, channels)]
        return cls(width, height, pixels)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("Pixel coordinates out of bounds")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y)."""
        return self.pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Set the colour at (x, y)."""
        self.pixels[self._index(x, y)] = color