"""Triangle meshes and a Wavefront OBJ loader."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from termvelocity.geometry import Vector3


class RenderMode(enum.Enum):
    """How a mesh's triangles are coloured."""

    VERTEX_COLORS = enum.auto()
    TRIANGLE_COLORS = enum.auto()


class LightingMode(enum.Enum):
    """How a mesh reacts to lighting."""

    REGULAR = enum.auto()
    CRYSTAL = enum.auto()
    GLOWING = enum.auto()


@dataclass
class Triangle:
    """Three vertex indices and a flat colour."""

    vertex_indices: tuple[int, int, int]
    color: int = 0


@dataclass
class Mesh:
    """Vertices, triangles and per-vertex colours of a model."""

    vertices: list[Vector3] = field(default_factory=list)
    triangles: list[Triangle] = field(default_factory=list)
    vertex_colors: list[int] = field(default_factory=list)
    render_mode: RenderMode = RenderMode.VERTEX_COLORS
    lighting_mode: LightingMode = LightingMode.REGULAR

    @classmethod
    def load_obj_file(
        cls,
        obj_name: str,
        render_mode: RenderMode = RenderMode.VERTEX_COLORS,
        lighting_mode: LightingMode = LightingMode.REGULAR,
        directory: Union[str, Path] = "models",
    ) -> Mesh:
        """Load ``<directory>/<obj_name>.obj``, centred and scaled to a unit cube."""
        path = Path(directory) / f"{obj_name}.obj"
        return cls.from_obj_text(path.read_text(), render_mode, lighting_mode)

    @classmethod
    def from_obj_text(
        cls,
        text: str,
        render_mode: RenderMode = RenderMode.VERTEX_COLORS,
        lighting_mode: LightingMode = LightingMode.REGULAR,
    ) -> Mesh:
        """Parse OBJ vertices and faces; polygons are fan-triangulated."""
        mesh = cls(render_mode=render_mode, lighting_mode=lighting_mode)
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line or line.startswith("#"):
                continue
            kind, *fields = line.split() or [""]
            try:
                if kind == "v":
                    x, y, z = (float(value) for value in fields[:3])
                    mesh.vertices.append(Vector3(x, y, z))
                elif kind == "f":
                    indices = [int(token.split("/", 1)[0]) - 1 for token in fields]
                    first = indices[0] if indices else 0
                    mesh.triangles.extend(
                        Triangle((first, prev, cur))
                        for prev, cur in zip(indices[1:], indices[2:])
                    )
            except ValueError as exc:
                raise ValueError(f"malformed OBJ line {line_number}: {line!r}") from exc
        mesh.center_self()
        return mesh

    def center_self(self) -> None:
        """Move the centroid to the origin and fit the mesh into a unit cube."""
        if not self.vertices:
            return
        centroid = sum(self.vertices, Vector3(0.0, 0.0, 0.0)) / len(self.vertices)
        centered = [v - centroid for v in self.vertices]
        max_dim = max(
            max(getattr(v, axis) for v in centered) - min(getattr(v, axis) for v in centered)
            for axis in ("x", "y", "z")
        )
        self.vertices = [v / max_dim for v in centered]