"""Camera, projection and screen/world coordinate mapping.

Matrices are flat sequences of 16 floats in column-major order, the
layout used by OpenGL.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from .color import Color

_PI = 3.14159265359

Matrix = tuple[float, ...]

IDENTITY: Matrix = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)


def rad2deg(x: float) -> float:
    return float(x) * 180.0 / _PI


def deg2rad(x: float) -> float:
    return float(x) * _PI / 180.0


@dataclass
class Vec3:
    """A point or direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vec3:
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        n = self.length()
        if n == 0:
            raise ValueError("cannot normalise a zero vector")
        return self * (1.0 / n)


@dataclass
class Camera:
    position: Vec3 = field(default_factory=Vec3)
    rotation: Vec3 = field(default_factory=Vec3)
    scale: float = 1.0


def _as_matrix(m: Sequence[float]) -> Matrix:
    values = tuple(float(v) for v in m)
    if len(values) != 16:
        raise ValueError(f"a 4x4 matrix needs 16 values, got {len(values)}")
    return values


def invert_matrix(m: Sequence[float]) -> Matrix:
    """Invert a column-major 4x4 matrix; raise ValueError if it is singular."""
    m = _as_matrix(m)
    inv = [0.0] * 16
    inv[0] = (m[5] * m[10] * m[15] - m[5] * m[11] * m[14] - m[9] * m[6] * m[15]
              + m[9] * m[7] * m[14] + m[13] * m[6] * m[11] - m[13] * m[7] * m[10])
    inv[4] = (-m[4] * m[10] * m[15] + m[4] * m[11] * m[14] + m[8] * m[6] * m[15]
              - m[8] * m[7] * m[14] - m[12] * m[6] * m[11] + m[12] * m[7] * m[10])
    inv[8] = (m[4] * m[9] * m[15] - m[4] * m[11] * m[13] - m[8] * m[5] * m[15]
              + m[8] * m[7] * m[13] + m[12] * m[5] * m[11] - m[12] * m[7] * m[9])
    inv[12] = (-m[4] * m[9] * m[14] + m[4] * m[10] * m[13] + m[8] * m[5] * m[14]
               - m[8] * m[6] * m[13] - m[12] * m[5] * m[10] + m[12] * m[6] * m[9])
    inv[1] = (-m[1] * m[10] * m[15] + m[1] * m[11] * m[14] + m[9] * m[2] * m[15]
              - m[9] * m[3] * m[14] - m[13] * m[2] * m[11] + m[13] * m[3] * m[10])
    inv[5] = (m[0] * m[10] * m[15] - m[0] * m[11] * m[14] - m[8] * m[2] * m[15]
              + m[8] * m[3] * m[14] + m[12] * m[2] * m[11] - m[12] * m[3] * m[10])
    inv[9] = (-m[0] * m[9] * m[15] + m[0] * m[11] * m[13] + m[8] * m[1] * m[15]
              - m[8] * m[3] * m[13] - m[12] * m[1] * m[11] + m[12] * m[3] * m[9])
    inv[13] = (m[0] * m[9] * m[14] - m[0] * m[10] * m[13] - m[8] * m[1] * m[14]
               + m[8] * m[2] * m[13] + m[12] * m[1] * m[10] - m[12] * m[2] * m[9])
    inv[2] = (m[1] * m[6] * m[15] - m[1] * m[7] * m[14] - m[5] * m[2] * m[15]
              + m[5] * m[3] * m[14] + m[13] * m[2] * m[7] - m[13] * m[3] * m[6])
    inv[6] = (-m[0] * m[6] * m[15] + m[0] * m[7] * m[14] + m[4] * m[2] * m[15]
              - m[4] * m[3] * m[14] - m[12] * m[2] * m[7] + m[12] * m[3] * m[6])
    inv[10] = (m[0] * m[5] * m[15] - m[0] * m[7] * m[13] - m[4] * m[1] * m[15]
               + m[4] * m[3] * m[13] + m[12] * m[1] * m[7] - m[12] * m[3] * m[5])
    inv[14] = (-m[0] * m[5] * m[14] + m[0] * m[6] * m[13] + m[4] * m[1] * m[14]
               - m[4] * m[2] * m[13] - m[12] * m[1] * m[6] + m[12] * m[2] * m[5])
    inv[3] = (-m[1] * m[6] * m[11] + m[1] * m[7] * m[10] + m[5] * m[2] * m[11]
              - m[5] * m[3] * m[10] - m[9] * m[2] * m[7] + m[9] * m[3] * m[6])
    inv[7] = (m[0] * m[6] * m[11] - m[0] * m[7] * m[10] - m[4] * m[2] * m[11]
              + m[4] * m[3] * m[10] + m[8] * m[2] * m[7] - m[8] * m[3] * m[6])
    inv[11] = (-m[0] * m[5] * m[11] + m[0] * m[7] * m[9] + m[4] * m[1] * m[11]
               - m[4] * m[3] * m[9] - m[8] * m[1] * m[7] + m[8] * m[3] * m[5])
    inv[15] = (m[0] * m[5] * m[10] - m[0] * m[6] * m[9] - m[4] * m[1] * m[10]
               + m[4] * m[2] * m[9] + m[8] * m[1] * m[6] - m[8] * m[2] * m[5])

    det = m[0] * inv[0] + m[1] * inv[4] + m[2] * inv[8] + m[3] * inv[12]
    if det == 0:
        raise ValueError("matrix is singular")
    scale = 1.0 / det
    return tuple(v * scale for v in inv)


def perspective_matrix(fovy: float, aspect: float, near: float, far: float) -> Matrix:
    """Perspective projection with a vertical field of view in degrees."""
    if aspect == 0 or near == far:
        raise ValueError("degenerate perspective parameters")
    f = 1.0 / math.tan(math.radians(fovy) / 2.0)
    m = [0.0] * 16
    m[0] = f / aspect
    m[5] = f
    m[10] = (far + near) / (near - far)
    m[11] = -1.0
    m[14] = 2.0 * far * near / (near - far)
    return tuple(m)


def ortho_matrix(left: float, right: float, bottom: float, top: float) -> Matrix:
    """2D orthographic projection with the near and far planes at -1 and 1."""
    if right == left or top == bottom:
        raise ValueError("degenerate orthographic bounds")
    m = list(IDENTITY)
    m[0] = 2.0 / (right - left)
    m[5] = 2.0 / (top - bottom)
    m[10] = -1.0
    m[12] = -(right + left) / (right - left)
    m[13] = -(top + bottom) / (top - bottom)
    return tuple(m)


def look_at_matrix(eye: Vec3, center: Vec3, up: Vec3) -> Matrix:
    """View matrix for a camera at ``eye`` looking at ``center``."""
    f = (center - eye).normalized()
    s = f.cross(up).normalized()
    u = s.cross(f)
    return (
        s.x, u.x, -f.x, 0.0,
        s.y, u.y, -f.y, 0.0,
        s.z, u.z, -f.z, 0.0,
        -s.dot(eye), -u.dot(eye), f.dot(eye), 1.0,
    )


@dataclass
class Graphics:
    """Viewport, camera and projection state of the renderer."""

    width: int = 0
    height: int = 0
    view_angle: float = 40.0
    near_plane: float = 1.0
    far_plane: float = 1000.0
    eye: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 15.0))
    center: Vec3 = field(default_factory=Vec3)
    debug: bool = False
    clear_color: Color = field(default_factory=lambda: Color.named("black"))
    projection: Matrix = IDENTITY
    modelview: Matrix = IDENTITY
    view: Matrix = IDENTITY

    def set_viewport(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def set_view_angle(self, angle: float) -> None:
        self.view_angle = float(angle)

    def set_clear_color(self, color: Color) -> None:
        self.clear_color = color.copy()

    def _require_viewport(self) -> None:
        if self.width == 0 or self.height == 0:
            raise ValueError("viewport has zero size")

    def projection_2d(self) -> Matrix:
        """Switch to a pixel-aligned 2D projection and return it."""
        self._require_viewport()
        self.projection = ortho_matrix(0, self.width, 0, self.height)
        self.modelview = IDENTITY
        return self.projection

    def projection_3d(self) -> Matrix:
        """Switch to the perspective camera projection and return it."""
        self._require_viewport()
        self.near_plane = 1.0
        self.projection = perspective_matrix(
            self.view_angle, self.width / self.height, self.near_plane, self.far_plane
        )
        self.modelview = look_at_matrix(self.eye, self.center, Vec3(0.0, 1.0, 0.0))
        return self.projection

    def update_view_matrix(self, matrix: Sequence[float] | None = None) -> None:
        """Record the model-view matrix used for coordinate mapping."""
        self.view = self.modelview if matrix is None else _as_matrix(matrix)

    def world_to_screen(self, pos: Vec3) -> Vec3:
        """Project a world point to screen pixels (origin bottom left)."""
        self._require_viewport()
        v = self.view
        x = pos.x * v[0] + pos.y * v[4] + pos.z * v[8] + v[12]
        y = pos.x * v[1] + pos.y * v[5] + pos.z * v[9] + v[13]
        z = pos.x * v[2] + pos.y * v[6] + pos.z * v[10] + v[14]
        if z == 0:
            raise ValueError("point lies in the plane of the eye")
        t = math.tan(math.pi * self.view_angle / 360.0)
        sx = self.width // 2 * (1 - x / z / (self.width * t / self.height))
        sy = self.height // 2 * (1 - y / z / t)
        return Vec3(sx, sy, 0.0)

    def _eye_ray(self, x: int, y: int, proj_inv: Matrix) -> tuple[float, float, float]:
        cx = (2.0 * x) / self.width - 1.0
        cy = (2.0 * y) / self.height - 1.0
        cz = -1.0
        ex = cx * proj_inv[0] + cy * proj_inv[4] + cz * proj_inv[8]
        ey = cx * proj_inv[1] + cy * proj_inv[5] + cz * proj_inv[9]
        return ex, ey, -1.0

    def screen_to_floor(self, x: int, y: int, projection: Sequence[float] | None = None) -> Vec3:
        """Intersect the ray through a screen pixel with the floor plane y = 0.

        Returns the zero vector when a matrix is singular or the ray runs
        parallel to the floor.
        """
        self._require_viewport()
        proj = self.projection if projection is None else _as_matrix(projection)
        try:
            proj_inv = invert_matrix(proj)
            view_inv = invert_matrix(self.view)
        except ValueError:
            return Vec3()
        ex, ey, ez = self._eye_ray(x, y, proj_inv)
        line = [ex * view_inv[k] + ey * view_inv[4 + k] + ez * view_inv[8 + k] for k in range(3)]
        origin = view_inv[12:15]
        if line[1] == 0:
            return Vec3()
        t = -origin[1] / line[1]
        return Vec3(*(t * d + o for d, o in zip(line, origin)))

    def viewing_direction(self, x: int, y: int, projection: Sequence[float] | None = None) -> Vec3:
        """Direction of the ray through a screen pixel in eye coordinates."""
        self._require_viewport()
        proj = self.projection if projection is None else _as_matrix(projection)
        try:
            proj_inv = invert_matrix(proj)
        except ValueError:
            return Vec3()
        return Vec3(*self._eye_ray(x, y, proj_inv))

    def format_matrix(self, m: Sequence[float]) -> str:
        """Format a 4-vector on one line or a 4x4 matrix as four rows."""
        values = [f"{float(v):g}" for v in m]
        if len(values) == 4:
            return " ".join(values)
        if len(values) == 16:
            return "\n".join(" ".join(values[row + 4 * col] for col in range(4)) for row in range(4))
        return ""