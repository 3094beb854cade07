"""A flat floor plane, optionally textured, with a 100-unit grid."""

from __future__ import annotations

from dataclasses import dataclass, field

from .color import Color
from .graphics import Vec3

SQUARE = 100

TexCoord = tuple[float, float]
Quad = tuple[tuple[TexCoord, Vec3], ...]
Line = tuple[Vec3, Vec3]


def is_power_of_two(n: int) -> bool:
    """True when ``n`` has at most one bit set (zero counts, as for mipmaps)."""
    n = int(n)
    if n < 0:
        raise ValueError(f"size must not be negative, got {n}")
    return n & (n - 1) == 0


@dataclass
class Floor:
    """A rectangular floor centred on ``position``, measured in world units."""

    width: float = 0.0
    depth: float = 0.0
    texture_width: int = 0
    texture_height: int = 0
    position: Vec3 = field(default_factory=Vec3)
    texture_id: int = 0
    color: Color = field(default_factory=lambda: Color(0.0, 0.5, 0.0, 1.0))
    tiling: bool = False
    show_grid: bool = False

    def set_size(self, width: float, depth: float) -> None:
        """Set the floor size; the tiled surface uses whole 100-unit squares."""
        self.width = float(width)
        self.depth = float(depth)

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = Vec3(float(x), float(y), float(z))

    def move(self, dx: float, dy: float, dz: float) -> None:
        self.position = self.position + Vec3(dx, dy, dz)

    def height_at(self, x: float, z: float) -> float:
        """Height of the floor surface at (x, z); the floor is flat.

        Raises TypeError or ValueError when a coordinate is not a number.
        """
        float(x)
        float(z)
        return 0.0 * (self.width + self.depth)

    def set_texture_size(self, width: int, height: int) -> None:
        """Record the pixel size of the loaded texture image.

        A textured floor is drawn in untinted white.
        """
        if width < 0 or height < 0:
            raise ValueError("texture size must not be negative")
        self.texture_width = int(width)
        self.texture_height = int(height)
        self.color = Color(1.0, 1.0, 1.0, 1.0)

    @property
    def mipmapped(self) -> bool:
        """Whether the texture size allows mipmaps (both sides powers of two)."""
        return is_power_of_two(self.texture_width) and is_power_of_two(self.texture_height)

    @property
    def origin(self) -> Vec3:
        """Translation applied to the coordinates from :meth:`tile_quads`."""
        p = self.position
        return Vec3(p.x - self.width / 2.0, p.y - 1.0, p.z - self.depth / 2.0)

    @property
    def grid_origin(self) -> Vec3:
        """Translation applied to the coordinates from :meth:`grid_lines`."""
        p = self.position
        return Vec3(p.x, p.y + 3.0, p.z)

    def _texture_repeat(self) -> TexCoord:
        if not self.tiling:
            return 1.0, 1.0
        if self.texture_width == 0 or self.texture_height == 0:
            raise ValueError("tiling needs the texture size")
        return self.width / self.texture_width, self.depth / self.texture_height

    def tile_quads(self) -> list[Quad]:
        """The textured squares of the floor, each as four (texcoord, vertex) pairs.

        Vertices are relative to :attr:`origin`.  Without tiling the texture
        is stretched over the whole floor; with tiling it repeats once per
        texture-sized patch.
        """
        nx = int(self.width / SQUARE)
        nz = int(self.depth / SQUARE)
        if nx <= 0 or nz <= 0:
            return []
        rx, ry = self._texture_repeat()
        y = self.position.y
        quads: list[Quad] = []
        for ix in range(nx):
            vx = float(ix * SQUARE)
            tx0, tx1 = ix / nx, (ix + 1) / nx
            for iz in range(nz):
                vz = float(iz * SQUARE)
                ty0, ty1 = iz / nz, (iz + 1) / nz
                quads.append((
                    ((tx0 * rx, ty0 * ry), Vec3(vx, y, vz)),
                    ((tx0 * rx, ty1 * ry), Vec3(vx, y, vz + SQUARE)),
                    ((tx1 * rx, ty1 * ry), Vec3(vx + SQUARE, y, vz + SQUARE)),
                    ((tx1 * rx, ty0 * ry), Vec3(vx + SQUARE, y, vz)),
                ))
        return quads

    def grid_lines(self) -> list[Line]:
        """Grid lines every 100 units, relative to :attr:`grid_origin`.

        Lines running along z come first, then those running along x.
        """
        half_w = self.width / 2.0
        half_d = self.depth / 2.0
        y = self.position.y

        def steps(half: float):
            k = 0
            while -half + k * SQUARE <= half:
                yield -half + k * SQUARE
                k += 1

        lines: list[Line] = [(Vec3(n, y, -half_d), Vec3(n, y, half_d)) for n in steps(half_w)]
        lines += [(Vec3(-half_w, y, n), Vec3(half_w, y, n)) for n in steps(half_d)]
        return lines