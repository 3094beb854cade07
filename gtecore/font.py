"""Bitmap fonts: BMP loading and layout of glyph quads from a 16x16 glyph sheet."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from os import PathLike
from pathlib import Path

from .color import Color

GRID = 16
NUMBER_LIMIT = 1_000_000

TexCoord = tuple[float, float]
Vertex = tuple[float, float]


class BitmapError(ValueError):
    """Raised when a BMP file cannot be read or is of an unsupported kind."""


@dataclass(frozen=True)
class Bitmap:
    """RGBA pixel data, four bytes per pixel, bottom row first."""

    width: int
    height: int
    pixels: bytes

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """The RGBA value at column ``x`` of row ``y`` (row 0 is the bottom)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the bitmap")
        i = 4 * (y * self.width + x)
        r, g, b, a = self.pixels[i:i + 4]
        return r, g, b, a


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    def read(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self._data):
            raise BitmapError("unexpected end of bitmap data")
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def word(self, n: int) -> int:
        return int.from_bytes(self.read(n), "little")


def parse_bmp(data: bytes) -> Bitmap:
    """Decode an uncompressed 24-bit or 32-bit BMP into RGBA pixels.

    In 24-bit images pure black becomes fully transparent and every other
    colour fully opaque; 32-bit images keep their own alpha.
    """
    reader = _Reader(data)
    if reader.read(2) != b"BM":
        raise BitmapError("not a BMP file")
    reader.read(12)
    header_size = reader.word(4)
    if header_size == 12:
        width = reader.word(2)
        height = reader.word(2)
        reader.read(2)
        bit_count = reader.word(2)
        if bit_count != 24:
            raise BitmapError("OS/2 bitmaps must have 24 bits per pixel")
    else:
        width = reader.word(4)
        height = reader.word(4)
        reader.read(2)
        bit_count = reader.word(2)
        compression = reader.word(4)
        reader.read(20)
        if compression != 0:
            raise BitmapError("compressed bitmaps are not supported")
        if bit_count not in (24, 32):
            raise BitmapError(f"bitmaps must have 24 or 32 bits per pixel, not {bit_count}")

    out = bytearray()
    if bit_count == 24:
        padding = (4 - (3 * width) % 4) % 4
        for _ in range(height):
            row = reader.read(3 * width + padding)
            for i in range(0, 3 * width, 3):
                b, g, r = row[i], row[i + 1], row[i + 2]
                out += bytes((r, g, b, 0 if r + g + b == 0 else 255))
    else:
        for _ in range(height):
            row = reader.read(4 * width)
            for i in range(0, 4 * width, 4):
                b, g, r, a = row[i:i + 4]
                out += bytes((r, g, b, a))
    return Bitmap(width, height, bytes(out))


def read_bmp(path: str | PathLike[str]) -> Bitmap:
    """Read and decode a BMP file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise BitmapError(f"cannot read {path}: {exc}") from exc
    return parse_bmp(data)


@dataclass(frozen=True)
class GlyphQuad:
    """One character drawn as a textured quad at (x, y).

    ``tex_coords`` and ``vertices`` list the four corners counter-clockwise
    from the bottom left; vertices are relative to (x, y).  ``next_x`` is
    where the following character starts.
    """

    code: int
    x: int
    y: int
    tex_coords: tuple[TexCoord, TexCoord, TexCoord, TexCoord]
    vertices: tuple[Vertex, Vertex, Vertex, Vertex]
    next_x: int


def glyph_quad(code: int, size: float) -> GlyphQuad:
    """The quad for character ``code`` (0..255) of a 16x16 glyph sheet, placed at the origin."""
    if not 0 <= code <= 255:
        raise ValueError(f"character code {code} is outside 0..255")
    row, col = divmod(code, GRID)
    row = GRID - row - 1
    d = 1.0 / GRID
    u0 = col * d + 0.15 * d
    u1 = (col + 1) * d - 0.15 * d
    v0 = row * d + 0.1 * d
    v1 = (row + 1) * d - 0.1 * d
    w = size * 0.7
    h = size * 0.8
    return GlyphQuad(
        code=code,
        x=0,
        y=0,
        tex_coords=((u0, v0), (u1, v0), (u1, v1), (u0, v1)),
        vertices=((0.0, 0.0), (w, 0.0), (w, h), (0.0, h)),
        next_x=int(size * 0.5),
    )


def format_number(number: int) -> str:
    """Decimal text of ``number``; only values within +-1,000,000 are shown."""
    number = int(number)
    if not -NUMBER_LIMIT <= number <= NUMBER_LIMIT:
        raise ValueError(f"{number} is outside the displayable range")
    return str(number)


@dataclass
class Font:
    """A font drawn from a bitmap holding 16 rows of 16 glyphs."""

    size: float = 16.0
    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0, 1.0))
    bitmap: Bitmap | None = None

    @property
    def width(self) -> int:
        return self.bitmap.width if self.bitmap else 0

    @property
    def height(self) -> int:
        return self.bitmap.height if self.bitmap else 0

    def load(self, path: str | PathLike[str]) -> Bitmap:
        """Load the glyph sheet from a 24-bit or 32-bit BMP file, replacing any earlier one."""
        self.bitmap = read_bmp(path)
        return self.bitmap

    def layout_text(self, x: int, y: int, text: str) -> list[GlyphQuad]:
        """Quads for each character of ``text``, laid out left to right from (x, y)."""
        quads: list[GlyphQuad] = []
        for ch in text:
            glyph = glyph_quad(ord(ch), self.size)
            quad = replace(glyph, x=x, y=y, next_x=int(x + self.size * 0.5))
            quads.append(quad)
            x = quad.next_x
        return quads

    def layout_number(self, x: int, y: int, number: int) -> list[GlyphQuad]:
        """Quads for a number; numbers beyond +-1,000,000 produce nothing."""
        try:
            text = format_number(number)
        except ValueError:
            return []
        return self.layout_text(x, y, text)