"""Triangle meshes: loading from Wavefront OBJ files and drawing."""

from __future__ import annotations

import enum
import os
from typing import Iterable, Optional, Sequence

import numpy as np

from .components import Vertex


class Attribute(enum.IntEnum):
    """Vertex attribute locations used by the shader layout."""

    POSITION = 0
    TEXTURE_COORDINATES = 1
    COLOR = 2
    NORMAL = 3


_LAYOUT = (
    (Attribute.POSITION, 3),
    (Attribute.TEXTURE_COORDINATES, 2),
    (Attribute.COLOR, 3),
    (Attribute.NORMAL, 3),
)
_FLOATS_PER_VERTEX = sum(size for _, size in _LAYOUT)
_FLOAT_BYTES = np.dtype(np.float32).itemsize
_WHITE = (1.0, 1.0, 1.0)
_MESH_BOUNDARIES = frozenset({"o", "g", "usemtl"})


def _floats(args: Sequence[str], size: int, line_no: int) -> tuple[float, ...]:
    if len(args) < size:
        raise ValueError(f"line {line_no}: expected {size} numbers")
    return tuple(float(a) for a in args[:size])


def _resolve(token: str, count: int, line_no: int) -> int:
    number = int(token)
    if number == 0:
        raise ValueError(f"line {line_no}: index 0 is not valid")
    index = number - 1 if number > 0 else count + number
    if not 0 <= index < count:
        raise ValueError(f"line {line_no}: index {number} out of range")
    return index


def _parse_corner(token: str, counts: tuple[int, int, int], line_no: int):
    parts = token.split("/")
    position = _resolve(parts[0], counts[0], line_no)
    uv = _resolve(parts[1], counts[1], line_no) if len(parts) > 1 and parts[1] else None
    normal = _resolve(parts[2], counts[2], line_no) if len(parts) > 2 and parts[2] else None
    return position, uv, normal


def _face_normal(points: Sequence[Sequence[float]]) -> tuple[float, float, float]:
    pts = np.asarray(points, dtype=float)
    normal = np.cross(pts, np.roll(pts, -1, axis=0)).sum(axis=0)
    length = float(np.linalg.norm(normal))
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return tuple(float(c) for c in normal / length)


def load_obj(filename) -> tuple[list[Vertex], list[int]]:
    """Read the first mesh of an OBJ file as triangulated vertices and indices.

    Each face corner becomes its own vertex. Texture coordinates are flipped
    vertically, missing normals are replaced by the face normal and every
    vertex is white.
    """
    positions: list[tuple[float, ...]] = []
    uvs: list[tuple[float, float]] = []
    normals: list[tuple[float, ...]] = []
    faces: list[list[tuple[int, Optional[int], Optional[int]]]] = []

    with open(filename, encoding="utf-8") as stream:
        for line_no, raw in enumerate(stream, 1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            keyword, *args = line.split()
            if keyword == "v":
                positions.append(_floats(args, 3, line_no))
            elif keyword == "vt":
                u = float(args[0]) if args else 0.0
                v = float(args[1]) if len(args) > 1 else 0.0
                uvs.append((u, v))
            elif keyword == "vn":
                normals.append(_floats(args, 3, line_no))
            elif keyword == "f":
                if len(args) < 3:
                    raise ValueError(f"line {line_no}: a face needs at least three corners")
                counts = (len(positions), len(uvs), len(normals))
                faces.append([_parse_corner(token, counts, line_no) for token in args])
            elif keyword in _MESH_BOUNDARIES and faces:
                break

    if not faces:
        raise ValueError(f"{os.fspath(filename)}: no faces found")

    vertices: list[Vertex] = []
    indices: list[int] = []
    for face in faces:
        start = len(vertices)
        face_normal = _face_normal([positions[p] for p, _, _ in face])
        for p, t, n in face:
            if t is None:
                uv = (0.0, 0.0)
            else:
                u, v = uvs[t]
                uv = (u, 1.0 - v)
            vertices.append(Vertex(
                position=positions[p],
                texture_coordinates=uv,
                color=_WHITE,
                normal=normals[n] if n is not None else face_normal,
            ))
        for i in range(1, len(face) - 1):
            indices.extend((start, start + i, start + i + 1))
    return vertices, indices


class _PygletMeshGL:
    """Vertex array and buffer calls through pyglet's OpenGL bindings."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl

    def upload(self, vertex_data, index_data, stride, layout):
        gl = self._gl
        vao, vbo, ebo = gl.GLuint(), gl.GLuint(), gl.GLuint()
        gl.glGenVertexArrays(1, vao)
        gl.glGenBuffers(1, vbo)
        gl.glGenBuffers(1, ebo)

        gl.glBindVertexArray(vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, vertex_data.nbytes,
                        vertex_data.tobytes(), gl.GL_STATIC_DRAW)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo)
        gl.glBufferData(gl.GL_ELEMENT_ARRAY_BUFFER, index_data.nbytes,
                        index_data.tobytes(), gl.GL_STATIC_DRAW)

        for location, size, offset in layout:
            gl.glVertexAttribPointer(int(location), size, gl.GL_FLOAT, gl.GL_FALSE,
                                     stride, offset)
            gl.glEnableVertexAttribArray(int(location))

        gl.glBindVertexArray(0)
        return vao.value, vbo.value, ebo.value

    def draw_elements(self, vao, count):
        gl = self._gl
        gl.glBindVertexArray(vao)
        gl.glDrawElements(gl.GL_TRIANGLES, count, gl.GL_UNSIGNED_INT, None)
        gl.glBindVertexArray(0)


class Mesh:
    """Indexed triangle mesh; GPU buffers are created on first use."""

    def __init__(self, vertices: Iterable[Vertex], indices: Iterable[int], gl=None):
        self.vertices = list(vertices)
        self.indices = [int(i) for i in indices]
        out_of_range = [i for i in self.indices if not 0 <= i < len(self.vertices)]
        if out_of_range:
            raise ValueError(f"indices out of range: {out_of_range[:5]}")
        self._gl = gl
        self.vao: Optional[int] = None
        self.vbo: Optional[int] = None
        self.ebo: Optional[int] = None

    @classmethod
    def from_file(cls, filename) -> "Mesh":
        return cls(*load_obj(filename))

    def _backend(self):
        if self._gl is None:
            self._gl = _PygletMeshGL()
        return self._gl

    def interleaved(self) -> np.ndarray:
        """Vertex data as a float32 array, one row per vertex."""
        rows = [
            (*v.position, *v.texture_coordinates, *v.color, *v.normal)
            for v in self.vertices
        ]
        return np.array(rows, dtype=np.float32).reshape(-1, _FLOATS_PER_VERTEX)

    def setup(self) -> None:
        """Create and fill the vertex array and buffers."""
        layout = []
        offset = 0
        for attribute, size in _LAYOUT:
            layout.append((attribute, size, offset))
            offset += size * _FLOAT_BYTES
        vertex_data = np.ascontiguousarray(self.interleaved())
        index_data = np.ascontiguousarray(self.indices, dtype=np.uint32)
        self.vao, self.vbo, self.ebo = self._backend().upload(
            vertex_data, index_data, _FLOATS_PER_VERTEX * _FLOAT_BYTES, layout
        )

    def draw(self, shader_program) -> None:
        if self.vao is None:
            self.setup()
        shader_program.use()
        self._backend().draw_elements(self.vao, len(self.indices))