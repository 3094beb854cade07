"""Loading and animating models stored in the MD3 binary format.

All numbers in the file are little-endian.  Vertex positions are stored
as 16-bit integers in units of 1/64.  The file's y and z axes are swapped
so that y points up in world space.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .graphics import Vec3

MAGIC = b"IDP3"
VERTEX_SCALE = 0.015625  # 1/64

_NVEC = (
    -1.0, -0.93, -0.87, -0.8, -0.73, -0.67, -0.6, -0.53, -0.47, -0.4, -0.33,
    -0.27, -0.2, -0.13, -0.07, 0.0, 0.07, 0.13, 0.2, 0.27, 0.33, 0.4, 0.47,
    0.53, 0.6, 0.67, 0.73, 0.8, 0.87, 0.93, 1.0, 1.0,
)

_HEADER = struct.Struct("<4si64s9i")
_FRAME = struct.Struct("<3f3f3ff16s")
_MESH = struct.Struct("<4s64s10i")
_TRIANGLE = struct.Struct("<3i")
_TEXCOORD = struct.Struct("<2f")
_VERTEX = struct.Struct("<4h")
_NAME_LENGTH = 64


class Md3Error(ValueError):
    """Raised when MD3 data cannot be read or is malformed."""


def _cstr(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _unpack(layout: struct.Struct, data: bytes, offset: int) -> tuple:
    if offset < 0 or offset + layout.size > len(data):
        raise Md3Error(f"MD3 data ends before offset {offset} + {layout.size}")
    return layout.unpack_from(data, offset)


def reencode_normal(packed: int) -> int:
    """Turn a latitude/longitude packed normal into the 3x5-bit normal code."""
    lng = (packed & 255) * 2 * 3.1416 / 255.0
    lat = ((packed >> 8) & 255) * 2 * 3.1416 / 255.0
    x = int(15 * (1.01 + math.cos(lat) * math.sin(lng)))
    y = int(15 * (1.01 + math.cos(lng)))
    z = int(15 * (1.01 + math.sin(lat) * math.sin(lng)))
    return x + 32 * y + 32 * 32 * z


def decode_normal(code: int) -> Vec3:
    """Decode a 3x5-bit normal code into a (roughly unit) vector."""
    return Vec3(_NVEC[code & 31], _NVEC[(code >> 5) & 31], _NVEC[(code >> 10) & 31])


@dataclass
class Md3Header:
    ident: bytes
    version: int
    filename: str
    num_flags: int
    num_frames: int
    num_tags: int
    num_surfaces: int
    num_skins: int
    offset_frames: int
    offset_tags: int
    offset_surfaces: int
    offset_end: int


@dataclass
class Md3Frame:
    """Bounding box, origin and radius of one animation frame, in file axes."""

    min: Vec3
    max: Vec3
    origin: Vec3
    radius: float
    name: str


@dataclass
class Md3Mesh:
    """One surface mesh; ``vertices`` holds (x, y, z, normal code) for every frame."""

    name: str
    flags: int
    num_frames: int
    num_vertices: int
    skin: str
    triangles: list[tuple[int, int, int]]
    tex_coords: list[tuple[float, float]]
    vertices: list[tuple[int, int, int, int]]

    def vertex(self, frame: int, index: int) -> tuple[int, int, int, int]:
        if not 0 <= frame < self.num_frames:
            raise IndexError(f"mesh {self.name!r} has no frame {frame}")
        return self.vertices[frame * self.num_vertices + index]


@dataclass
class MeshGroup:
    """The range of flattened triangle vertices drawn with one texture."""

    name: str
    start_index: int
    end_index: int
    material_name: str
    texture_filename: str
    texture_id: int = 0
    kd: tuple[float, float, float, float] = (0.8, 0.8, 0.8, 1.0)
    format: int = 7

    @property
    def count(self) -> int:
        return self.end_index - self.start_index


@dataclass
class Md3Model:
    """A parsed MD3 model with its first frame decoded.

    ``vertices``, ``normals`` and ``tex_coords`` hold three entries per
    triangle, meshes one after another.
    """

    header: Md3Header
    frames: list[Md3Frame]
    meshes: list[Md3Mesh]
    groups: list[MeshGroup]
    tex_coords: list[tuple[float, float]]
    vertices: list[Vec3] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    min_bound: Vec3 = field(default_factory=Vec3)
    max_bound: Vec3 = field(default_factory=Vec3)
    position: Vec3 = field(default_factory=Vec3)

    @property
    def num_frames(self) -> int:
        return len(self.frames)

    @property
    def num_triangles(self) -> int:
        return sum(len(mesh.triangles) for mesh in self.meshes)

    def _check_frame(self, frame: int) -> None:
        if not 0 <= frame < len(self.frames):
            raise IndexError(f"model has no frame {frame}")

    def frame_geometry(
        self, frame: int, next_frame: int, interpolation: float = 0.0
    ) -> tuple[list[Vec3], list[Vec3]]:
        """Vertices and normals blended between two frames."""
        self._check_frame(frame)
        self._check_frame(next_frame)
        t = float(interpolation)
        vertices: list[Vec3] = []
        normals: list[Vec3] = []
        for mesh in self.meshes:
            for triangle in mesh.triangles:
                for index in triangle:
                    x1, y1, z1, n1 = mesh.vertex(frame, index)
                    x2, y2, z2, n2 = mesh.vertex(next_frame, index)
                    vertices.append(Vec3(
                        VERTEX_SCALE * (x1 + t * (x2 - x1)),
                        VERTEX_SCALE * (z1 + t * (z2 - z1)),
                        VERTEX_SCALE * (y1 + t * (y2 - y1)),
                    ))
                    a = decode_normal(n1)
                    b = decode_normal(n2)
                    normals.append(a + (b - a) * t)
        return vertices, normals

    def bounds(
        self, frame: int, next_frame: int, interpolation: float = 0.0
    ) -> tuple[Vec3, Vec3]:
        """Bounding box corners blended between two frames, in world axes."""
        self._check_frame(frame)
        self._check_frame(next_frame)
        t = float(interpolation)
        a, b = self.frames[frame], self.frames[next_frame]

        def blend(p: Vec3, q: Vec3) -> Vec3:
            v = p + (q - p) * t
            return Vec3(v.x, v.z, v.y)

        return blend(a.min, b.min), blend(a.max, b.max)

    def animation_step(self, current: float, start: int, stop: int) -> tuple[int, int, float]:
        """Frames and blend factor for playing ``start``..``stop`` at ``current``.

        Returns the frame, the frame that follows it (back to ``start``
        after ``stop``) and how far playback is between the two.
        """
        if start > current:
            current = float(start)
        if start < 0 or stop < 0:
            raise ValueError("animation frames must not be negative")
        if start >= self.num_frames or stop >= self.num_frames:
            raise ValueError(
                f"animation {start}..{stop} exceeds the {self.num_frames} frames of the model"
            )
        frame = int(current)
        interpolation = float(current) - frame
        next_frame = frame + 1
        if next_frame > stop:
            next_frame = start
        return frame, next_frame, interpolation


def _parse_frame(data: bytes, offset: int) -> Md3Frame:
    values = _unpack(_FRAME, data, offset)
    return Md3Frame(
        min=Vec3(*values[0:3]),
        max=Vec3(*values[3:6]),
        origin=Vec3(*values[6:9]),
        radius=values[9],
        name=_cstr(values[10]),
    )


def _parse_mesh(data: bytes, base: int) -> tuple[Md3Mesh, int]:
    (_ident, name, flags, num_frames, num_skins, num_vertices, num_triangles,
     off_tris, off_skins, off_st, off_verts, off_end) = _unpack(_MESH, data, base)
    if min(num_frames, num_skins, num_vertices, num_triangles) < 0:
        raise Md3Error("negative count in mesh header")
    if off_end <= 0:
        raise Md3Error("mesh has no size")

    triangles = [
        _unpack(_TRIANGLE, data, base + off_tris + _TRIANGLE.size * i)
        for i in range(num_triangles)
    ]
    for triangle in triangles:
        if any(not 0 <= index < num_vertices for index in triangle):
            raise Md3Error(f"triangle {triangle} refers to a missing vertex")

    skin_start = base + off_skins
    if not 0 <= skin_start <= len(data):
        raise Md3Error("skin name lies outside the data")
    skin = _cstr(data[skin_start:skin_start + _NAME_LENGTH])

    tex_coords = [
        _unpack(_TEXCOORD, data, base + off_st + _TEXCOORD.size * i)
        for i in range(num_vertices)
    ]
    vertices = []
    for i in range(num_vertices * num_frames):
        x, y, z, n = _unpack(_VERTEX, data, base + off_verts + _VERTEX.size * i)
        vertices.append((x, y, z, reencode_normal(n)))

    mesh = Md3Mesh(
        name=_cstr(name),
        flags=flags,
        num_frames=num_frames,
        num_vertices=num_vertices,
        skin=skin,
        triangles=[tuple(t) for t in triangles],
        tex_coords=[tuple(st) for st in tex_coords],
        vertices=vertices,
    )
    return mesh, off_end


def parse_md3(data: bytes) -> Md3Model:
    """Parse MD3 file contents and decode the first frame."""
    data = bytes(data)
    fields = _unpack(_HEADER, data, 0)
    header = Md3Header(fields[0], fields[1], _cstr(fields[2]), *fields[3:])
    if header.ident != MAGIC:
        raise Md3Error(f"not an MD3 file (identifier {header.ident!r})")
    if header.num_frames <= 0:
        raise Md3Error("model has no frames")
    if header.num_surfaces < 0:
        raise Md3Error("negative number of meshes")

    frames = [
        _parse_frame(data, header.offset_frames + _FRAME.size * i)
        for i in range(header.num_frames)
    ]

    meshes: list[Md3Mesh] = []
    offset = header.offset_surfaces
    for _ in range(header.num_surfaces):
        mesh, size = _parse_mesh(data, offset)
        meshes.append(mesh)
        offset += size

    groups: list[MeshGroup] = []
    tex_coords: list[tuple[float, float]] = []
    total = 0
    for mesh in meshes:
        start = 3 * total
        total += len(mesh.triangles)
        groups.append(MeshGroup(mesh.name, start, 3 * total, mesh.skin, mesh.skin))
        for triangle in mesh.triangles:
            for index in triangle:
                s, t = mesh.tex_coords[index]
                tex_coords.append((s, 1.0 - t))

    model = Md3Model(header, frames, meshes, groups, tex_coords)
    model.vertices, model.normals = model.frame_geometry(0, 0, 0.0)
    model.min_bound, model.max_bound = model.bounds(0, 0, 0.0)
    model.position = Vec3(0.0, (model.max_bound.y - model.min_bound.y) / 2.0, 0.0)
    return model


def load_md3(path: str | PathLike[str]) -> Md3Model:
    """Read and parse an MD3 file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise Md3Error(f"could not load {path}: {exc}") from exc
    return parse_md3(data)