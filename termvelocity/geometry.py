"""Vectors, 4x4 matrices and object transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Union

_SINGULAR_EPSILON = 1e-6


@dataclass(frozen=True)
class Vector2:
    """A point or direction on the screen plane."""

    x: float
    y: float

    def dot(self, other: Vector2) -> float:
        """Return the dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Vector3:
    """A point or direction in 3D space."""

    x: float
    y: float
    z: float

    def to4(self, w: float = 1.0) -> Vector4:
        """Return this vector extended with a fourth component."""
        return Vector4(self.x, self.y, self.z, w)

    def normalized(self) -> Vector3:
        """Return the unit vector in the same direction; zero stays zero."""
        length = self.length()
        if length == 0:
            return Vector3(0.0, 0.0, 0.0)
        return Vector3(self.x / length, self.y / length, self.z / length)

    def dot(self, other: Vector3) -> float:
        """Return the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Return the cross product with another vector."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vector3:
        if scalar == 0:
            return Vector3(0.0, 0.0, 0.0)
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __str__(self) -> str:
        return f"Vector3({self.x:f}, {self.y:f}, {self.z:f})"


@dataclass(frozen=True)
class Vector4:
    """A homogeneous 3D coordinate."""

    x: float
    y: float
    z: float
    w: float

    def to3(self) -> Vector3:
        """Return the first three components."""
        return Vector3(self.x, self.y, self.z)


_ZERO_ROWS = ((0.0,) * 4,) * 4


def _minor(rows: Sequence[Sequence[float]], skip_row: int, skip_col: int) -> list[list[float]]:
    return [
        [value for col, value in enumerate(row) if col != skip_col]
        for index, row in enumerate(rows)
        if index != skip_row
    ]


def _det(rows: Sequence[Sequence[float]]) -> float:
    if len(rows) == 1:
        return rows[0][0]
    return sum(
        (-1) ** col * value * _det(_minor(rows, 0, col))
        for col, value in enumerate(rows[0])
    )


@dataclass(frozen=True)
class Matrix44:
    """A row-major 4x4 matrix; the default is all zeros."""

    rows: tuple[tuple[float, ...], ...] = _ZERO_ROWS

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.rows)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("Matrix44 needs exactly 4 rows of 4 values")
        object.__setattr__(self, "rows", rows)

    @classmethod
    def identity(cls) -> Matrix44:
        """Return the identity matrix."""
        return cls(tuple(tuple(1.0 if i == j else 0.0 for j in range(4)) for i in range(4)))

    def determinant(self) -> float:
        """Return the determinant."""
        return _det(self.rows)

    def inverse(self) -> Matrix44:
        """Return the inverse, or the zero matrix when it is not invertible."""
        det = self.determinant()
        if abs(det) < _SINGULAR_EPSILON:
            return Matrix44()
        cofactors = [
            [(-1) ** (i + j) * _det(_minor(self.rows, i, j)) for j in range(4)]
            for i in range(4)
        ]
        return Matrix44(
            tuple(tuple(cofactors[j][i] / det for j in range(4)) for i in range(4))
        )

    def __matmul__(self, other: Union[Matrix44, Vector4]):
        if isinstance(other, Vector4):
            vec = (other.x, other.y, other.z, other.w)
            return Vector4(*(sum(a * b for a, b in zip(row, vec)) for row in self.rows))
        if isinstance(other, Matrix44):
            columns = tuple(zip(*other.rows))
            return Matrix44(
                tuple(
                    tuple(sum(a * b for a, b in zip(row, col)) for col in columns)
                    for row in self.rows
                )
            )
        return NotImplemented


@dataclass
class Transform:
    """Position, rotation (radians, XYZ) and scale of an object."""

    position: Vector3 = Vector3(0.0, 0.0, 0.0)
    rotation: Vector3 = Vector3(0.0, 0.0, 0.0)
    scale: Vector3 = Vector3(1.0, 1.0, 1.0)

    def to_world_matrix(self) -> Matrix44:
        """Return the matrix taking object-space points to world space."""
        cx, sx = math.cos(self.rotation.x), math.sin(self.rotation.x)
        cy, sy = math.cos(self.rotation.y), math.sin(self.rotation.y)
        cz, sz = math.cos(self.rotation.z), math.sin(self.rotation.z)

        scaling = Matrix44((
            (self.scale.x, 0, 0, 0),
            (0, self.scale.y, 0, 0),
            (0, 0, self.scale.z, 0),
            (0, 0, 0, 1),
        ))
        x_rot = Matrix44((
            (1, 0, 0, 0),
            (0, cx, -sx, 0),
            (0, sx, cx, 0),
            (0, 0, 0, 1),
        ))
        y_rot = Matrix44((
            (cy, 0, sy, 0),
            (0, 1, 0, 0),
            (-sy, 0, cy, 0),
            (0, 0, 0, 1),
        ))
        z_rot = Matrix44((
            (cz, -sz, 0, 0),
            (sz, cz, 0, 0),
            (0, 0, 1, 0),
            (0, 0, 0, 1),
        ))
        translation = Matrix44((
            (1, 0, 0, self.position.x),
            (0, 1, 0, self.position.y),
            (0, 0, 1, self.position.z),
            (0, 0, 0, 1),
        ))
        return translation @ z_rot @ y_rot @ x_rot @ scaling

    def front(self) -> Vector3:
        """Return the forward (-Z) direction after rotation."""
        rotation_only = Transform(rotation=self.rotation)
        return (rotation_only.to_world_matrix() @ Vector3(0.0, 0.0, -1.0).to4()).to3()

    def __str__(self) -> str:
        p, r, s = self.position, self.rotation, self.scale
        return (
            f"Position({p.x:f}, {p.y:f}, {p.z:f})"
            f" Rotation({r.x:f}, {r.y:f}, {r.z:f})"
            f" Scale({s.x:f}, {s.y:f}, {s.z:f})"
        )