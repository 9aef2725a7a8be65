from types import SimpleNamespace

import numpy as np
import pytest

from glengine.glmath import translation_matrix
from glengine.shader import (
    FRAGMENT_SHADER,
    VERTEX_SHADER,
    Shader,
    ShaderError,
    ShaderProgram,
    light_uniform_names,
    load_shader_source,
)


class FakeShaderGL:
    def __init__(self, info_log=""):
        self.calls = []
        self.info_log = info_log
        self._next_id = 10

    def create_shader(self, target):
        self._next_id += 1
        self.calls.append(("create_shader", target))
        return self._next_id

    def compile_shader(self, shader_id, source):
        self.calls.append(("compile", shader_id, source))
        return self.info_log

    def delete_shader(self, shader_id):
        self.calls.append(("delete", shader_id))

    def create_program(self):
        return 99

    def attach_shader(self, program_id, shader_id):
        self.calls.append(("attach", program_id, shader_id))

    def link_program(self, program_id):
        self.calls.append(("link", program_id))

    def use_program(self, program_id):
        self.calls.append(("use", program_id))

    def uniform_location(self, program_id, name):
        return name

    def uniform_vec3(self, location, values):
        self.calls.append(("vec3", location, values))

    def uniform_int(self, location, value):
        self.calls.append(("int", location, value))

    def uniform_matrix4(self, location, values):
        self.calls.append(("mat4", location, values))

    def uniform_matrix3(self, location, values):
        self.calls.append(("mat3", location, values))

    def get_error(self):
        return 0


@pytest.fixture
def sources(tmp_path):
    vert = tmp_path / "shader.vert"
    frag = tmp_path / "shader.frag"
    vert.write_text("void main() { gl_Position = vec4(0.0); }\n")
    frag.write_text("void main() {}\n")
    return vert, frag


@pytest.fixture
def program(sources):
    gl = FakeShaderGL()
    vert, frag = sources
    prog = ShaderProgram([(VERTEX_SHADER, vert), (FRAGMENT_SHADER, frag)], gl=gl)
    gl.calls.clear()
    return prog, gl


def test_load_shader_source_reads_text(sources):
    vert, _ = sources
    assert load_shader_source(vert) == vert.read_text()


def test_load_shader_source_missing_file(tmp_path):
    with pytest.raises(ShaderError):
        load_shader_source(tmp_path / "absent.vert")


def test_light_uniform_names():
    names = light_uniform_names("lights", 2)
    assert list(names) == ["position", "diffuse", "ambient", "specular"]
    assert names["position"] == "lights[2].position"
    assert names["specular"] == "lights[2].specular"


def test_shader_compiles_source(sources):
    gl = FakeShaderGL()
    vert, _ = sources
    shader = Shader(VERTEX_SHADER, vert, gl=gl)
    assert shader.ready
    assert shader.target == VERTEX_SHADER
    assert ("compile", shader.shader_id, vert.read_text()) in gl.calls


def test_shader_with_info_log_fails(sources):
    vert, _ = sources
    with pytest.raises(ShaderError, match="syntax error"):
        Shader(VERTEX_SHADER, vert, gl=FakeShaderGL(info_log="syntax error"))


def test_empty_shader_fails_without_compiling(tmp_path):
    empty = tmp_path / "empty.frag"
    empty.write_text("")
    gl = FakeShaderGL()
    with pytest.raises(ShaderError):
        Shader(FRAGMENT_SHADER, empty, gl=gl)
    assert not any(call[0] == "compile" for call in gl.calls)


def test_shader_delete(sources):
    gl = FakeShaderGL()
    shader = Shader(VERTEX_SHADER, sources[0], gl=gl)
    shader.delete()
    assert gl.calls[-1] == ("delete", shader.shader_id)


def test_program_attaches_in_order_then_links(sources):
    gl = FakeShaderGL()
    prog = ShaderProgram([(VERTEX_SHADER, sources[0]), (FRAGMENT_SHADER, sources[1])], gl=gl)
    attach_and_link = [c for c in gl.calls if c[0] in ("attach", "link")]
    ids = [s.shader_id for s in prog.shaders]
    assert attach_and_link == [("attach", 99, ids[0]), ("attach", 99, ids[1]), ("link", 99)]
    assert [s.target for s in prog.shaders] == [VERTEX_SHADER, FRAGMENT_SHADER]


def test_use_and_disuse(program):
    prog, gl = program
    prog.use()
    prog.disuse()
    assert gl.calls == [("use", 99), ("use", 0)]


def test_set_vec3_binds_and_unbinds(program):
    prog, gl = program
    prog.set_vec3(np.array([1, 2, 3]), "cameraPosition")
    assert gl.calls == [("use", 99), ("vec3", "cameraPosition", (1.0, 2.0, 3.0)), ("use", 0)]


def test_set_int(program):
    prog, gl = program
    prog.set_int(4, "sampler")
    assert gl.calls[1] == ("int", "sampler", 4)


def test_set_matrix4_is_column_major(program):
    prog, gl = program
    prog.set_matrix4(translation_matrix((7, 8, 9)), "model")
    _, name, values = gl.calls[1]
    assert name == "model"
    assert len(values) == 16
    assert values[12:15] == (7.0, 8.0, 9.0)
    assert gl.calls[-1] == ("use", 0)


def test_set_matrix3_rejects_wrong_shape(program):
    prog, _ = program
    with pytest.raises(ValueError):
        prog.set_matrix3(np.identity(4), "normalMatrix")


def test_set_matrix3_round_trips_transpose(program):
    prog, gl = program
    matrix = np.arange(9, dtype=float).reshape(3, 3)
    prog.set_matrix3(matrix, "normalMatrix")
    values = gl.calls[1][2]
    assert np.array(values).reshape(3, 3).T.tolist() == matrix.tolist()


def test_set_lights(program):
    prog, gl = program
    lights = [
        SimpleNamespace(position=(1, 0, 0), diffuse=(0, 0, 1), ambient=(0.2, 0.2, 0.2), specular=(1, 1, 1)),
        SimpleNamespace(position=(0, 2, 0), diffuse=(1, 0, 0), ambient=(0.1, 0.1, 0.1), specular=(0.7, 0.7, 0.7)),
    ]
    prog.set_lights(lights, "lights")
    assert gl.calls[0] == ("use", 99)
    assert gl.calls[1] == ("int", "lightsCount", 2)
    assert ("vec3", "lights[1].position", (0.0, 2.0, 0.0)) in gl.calls
    assert ("vec3", "lights[0].diffuse", (0.0, 0.0, 1.0)) in gl.calls
    assert sum(1 for c in gl.calls if c[0] == "vec3") == 8
    assert gl.calls[-1] == ("use", 0)