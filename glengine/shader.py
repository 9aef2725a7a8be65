"""Compiling shader stages, linking programs and setting uniforms."""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Sequence

import numpy as np

from .helper import print_gl_error

VERTEX_SHADER = 0x8B31
FRAGMENT_SHADER = 0x8B30
GEOMETRY_SHADER = 0x8DD9
COMPUTE_SHADER = 0x91B9

_log = logging.getLogger(__name__)
_LIGHT_FIELDS = ("position", "diffuse", "ambient", "specular")
_SHADER_KINDS = {
    VERTEX_SHADER: "vertex",
    FRAGMENT_SHADER: "fragment",
    GEOMETRY_SHADER: "geometry",
    COMPUTE_SHADER: "compute",
}


class ShaderError(RuntimeError):
    """A shader could not be loaded or compiled."""


def load_shader_source(filename) -> str:
    """Read a shader's source text."""
    try:
        with open(filename, encoding="utf-8") as stream:
            return stream.read()
    except OSError as exc:
        raise ShaderError(f"Couldn't open shader source file {filename}") from exc


def light_uniform_names(array_name: str, index: int) -> dict[str, str]:
    """Uniform names of each light field for element ``index`` of an array."""
    return {field: f"{array_name}[{index}].{field}" for field in _LIGHT_FIELDS}


class _PygletShaderGL:
    """Shader and uniform calls through pyglet's OpenGL bindings.

    Stages are compiled by pyglet; the handles given out for them are keys
    into this object, while programs use plain OpenGL program ids.
    """

    def __init__(self) -> None:
        from pyglet import gl
        from pyglet.graphics import shader as pyglet_shader

        self._gl = gl
        self._pyglet_shader = pyglet_shader
        self._keys = itertools.count(1)
        self._targets: dict[int, int] = {}
        self._compiled: dict = {}

    def create_shader(self, target):
        key = next(self._keys)
        self._targets[key] = target
        return key

    def compile_shader(self, shader_id, source):
        target = self._targets[shader_id]
        kind = _SHADER_KINDS.get(target)
        if kind is None:
            return f"unsupported shader target {target:#x}"
        try:
            compiled = self._pyglet_shader.Shader(source, kind)
        except self._pyglet_shader.ShaderException as exc:
            return str(exc) or " "
        _log.info("Shader compilation status: %s", 1)
        self._compiled[shader_id] = compiled
        return ""

    def delete_shader(self, shader_id):
        compiled = self._compiled.pop(shader_id, None)
        self._targets.pop(shader_id, None)
        if compiled is not None:
            compiled.delete()

    def create_program(self):
        return self._gl.glCreateProgram()

    def attach_shader(self, program_id, shader_id):
        self._gl.glAttachShader(program_id, self._compiled[shader_id].id)

    def link_program(self, program_id):
        self._gl.glLinkProgram(program_id)

    def use_program(self, program_id):
        self._gl.glUseProgram(program_id)

    def uniform_location(self, program_id, name):
        gl = self._gl
        raw = name.encode("utf-8") + b"\0"
        buffer = (gl.GLchar * len(raw)).from_buffer_copy(raw)
        return gl.glGetUniformLocation(program_id, buffer)

    def uniform_vec3(self, location, values):
        self._gl.glUniform3fv(location, 1, (self._gl.GLfloat * 3)(*values))

    def uniform_int(self, location, value):
        self._gl.glUniform1i(location, value)

    def uniform_matrix4(self, location, values):
        gl = self._gl
        gl.glUniformMatrix4fv(location, 1, gl.GL_FALSE, (gl.GLfloat * 16)(*values))

    def uniform_matrix3(self, location, values):
        gl = self._gl
        gl.glUniformMatrix3fv(location, 1, gl.GL_FALSE, (gl.GLfloat * 9)(*values))

    def get_error(self):
        return self._gl.glGetError()


def _vec3(values) -> tuple[float, float, float]:
    result = tuple(float(v) for v in values)
    if len(result) != 3:
        raise ValueError(f"expected 3 components, got {len(result)}")
    return result


def _column_major(matrix, size: int) -> tuple[float, ...]:
    arr = np.asarray(matrix, dtype=float)
    if arr.shape != (size, size):
        raise ValueError(f"expected a {size}x{size} matrix, got shape {arr.shape}")
    return tuple(float(v) for v in arr.flatten(order="F"))


class Shader:
    """One compiled shader stage."""

    def __init__(self, target: int, source_filename, gl=None):
        self._gl = gl if gl is not None else _PygletShaderGL()
        self.target = target
        self.ready = False
        self.shader_id = self._gl.create_shader(target)
        _log.info("Initializing shader %r with ID %s", str(source_filename), self.shader_id)

        source = load_shader_source(source_filename)
        if not source:
            raise ShaderError("Couldn't load and compile shaders: empty source")
        info_log = self._gl.compile_shader(self.shader_id, source)
        if info_log:
            raise ShaderError(f"Couldn't load and compile shaders: {info_log}")
        self.ready = True

    def delete(self) -> None:
        self._gl.delete_shader(self.shader_id)


class ShaderProgram:
    """A linked program built from ``(target, filename)`` pairs."""

    def __init__(self, pairs: Iterable[tuple[int, str]], gl=None):
        self._gl = gl if gl is not None else _PygletShaderGL()
        self.program_id = self._gl.create_program()
        self.shaders = [Shader(target, filename, self._gl) for target, filename in pairs]
        print_gl_error("After prepareShaders", self._gl.get_error)
        for shader in self.shaders:
            self._gl.attach_shader(self.program_id, shader.shader_id)
        self._gl.link_program(self.program_id)

    def use(self) -> None:
        self._gl.use_program(self.program_id)

    def disuse(self) -> None:
        self._gl.use_program(0)

    @contextmanager
    def _bound(self) -> Iterator[None]:
        self.use()
        try:
            yield
        finally:
            self.disuse()

    def _location(self, name: str):
        return self._gl.uniform_location(self.program_id, name)

    def _destroy_shaders(self) -> None:
        for shader in self.shaders:
            shader.delete()
        self.shaders.clear()

    def set_vec3(self, vector, name: str) -> None:
        with self._bound():
            self._gl.uniform_vec3(self._location(name), _vec3(vector))

    def set_int(self, value: int, name: str) -> None:
        with self._bound():
            self._gl.uniform_int(self._location(name), int(value))

    def set_lights(self, lights: Sequence, array_name: str) -> None:
        """Set ``<array_name>Count`` and every light's position and colours."""
        with self._bound():
            self._gl.uniform_int(self._location(f"{array_name}Count"), len(lights))
            for index, light in enumerate(lights):
                for field, uniform in light_uniform_names(array_name, index).items():
                    self._gl.uniform_vec3(self._location(uniform), _vec3(getattr(light, field)))

    def set_matrix4(self, matrix, name: str) -> None:
        values = _column_major(matrix, 4)
        with self._bound():
            self._gl.uniform_matrix4(self._location(name), values)

    def set_matrix3(self, matrix, name: str) -> None:
        values = _column_major(matrix, 3)
        with self._bound():
            self._gl.uniform_matrix3(self._location(name), values)