"""The game scene: resources, the scene graph, the player and per-frame work."""

from __future__ import annotations

import math
import random
from pathlib import Path
from typing import Optional

from .components import Light, Vertex
from .ecs import Registry, SceneNode
from .events import EventDispatcher
from .factory import Factory
from .glmath import look_at, perspective
from .mesh import Mesh
from .player import Player
from .render_system import RenderSystem
from .resources import ResourceManager
from .shader import FRAGMENT_SHADER, VERTEX_SHADER, ShaderProgram
from .texture import Texture
from .transform import Transform

_RESOURCES = (
    ("human", "models/better-human.obj", "models/better-humanTexture.jpg"),
    ("cube", "models/blender-cube.obj", "models/test-texture.jpg"),
)
_VERTEX_SHADER_FILE = "shaders/phong-with-uniforms.vert"
_FRAGMENT_SHADER_FILE = "shaders/phong-with-uniforms.frag"
_CUBE_COUNT = 50
_ROTATION_SPEED = 1.0


def make_cube_mesh() -> Mesh:
    """A unit cube with coloured corners."""
    corners = [
        ((-0.5, -0.5, 0.5), (1.0, 0.0, 0.0)),
        ((0.5, -0.5, 0.5), (0.0, 1.0, 0.0)),
        ((0.5, 0.5, 0.5), (0.0, 0.0, 1.0)),
        ((-0.5, 0.5, 0.5), (1.0, 1.0, 1.0)),
        ((-0.5, -0.5, -0.5), (1.0, 0.0, 0.0)),
        ((0.5, -0.5, -0.5), (0.0, 1.0, 0.0)),
        ((0.5, 0.5, -0.5), (0.0, 0.0, 1.0)),
        ((-0.5, 0.5, -0.5), (1.0, 1.0, 1.0)),
    ]
    vertices = [Vertex(position=p, texture_coordinates=(0.0, 0.0), color=c) for p, c in corners]
    indices = [
        0, 1, 2, 2, 3, 0,
        1, 5, 6, 6, 2, 1,
        7, 6, 5, 5, 4, 7,
        4, 0, 3, 3, 7, 4,
        4, 5, 1, 1, 0, 4,
        3, 2, 6, 6, 7, 3,
    ]
    return Mesh(vertices, indices)


class Scene:
    """Owns the registry and everything placed in it."""

    def __init__(self, base_path=".", dispatcher: Optional[EventDispatcher] = None,
                 shader_gl=None, render_gl=None, rng: Optional[random.Random] = None):
        self.base_path = Path(base_path)
        self.registry = Registry()
        self.factory = Factory(rng=rng)
        self.player = Player(self.registry, dispatcher)
        self._shader_gl = shader_gl
        self._render_gl = render_gl
        self.root: Optional[int] = None
        self.player_entity: Optional[int] = None
        self.player_transform: Optional[Transform] = None
        self.shader_program: Optional[ShaderProgram] = None
        self.renderer: Optional[RenderSystem] = None

    def setup(self) -> None:
        """Load resources and populate the scene graph."""
        self.load_resources()
        self.renderer = RenderSystem(self.registry, gl=self._render_gl)

        self.root = self.registry.create()
        self.registry.emplace(self.root, Transform())
        self.registry.emplace(self.root, SceneNode())

        self.player_entity = self.player.setup(self.root)
        self.player_transform = self.player.transform

        human = self.factory.human(self.registry, self.root)
        human_transform = self.registry.get(human, Transform)
        human_transform.rotate_around_axis(math.radians(45.0), (0.0, 1.0, 0.0))
        human_transform.translate_local(0.0, 0.0, -10.0)
        human_transform.translate(5.0, 0.0, 0.0)

        for i in range(_CUBE_COUNT):
            self.factory.blender_cube(self.registry, human if i % 2 else self.root)

        lights = [
            (Light(diffuse=(0.0, 0.0, 1.0), ambient=(0.2, 0.2, 0.2), specular=(1.0, 1.0, 1.0)),
             (15.0, 0.0, 15.0)),
            (Light(diffuse=(1.0, 0.0, 0.0), ambient=(0.1, 0.1, 0.1), specular=(0.7, 0.7, 0.7)),
             (-15.0, 0.0, -15.0)),
            (Light(diffuse=(0.0, 1.0, 0.0), ambient=(0.1, 0.1, 0.1), specular=(0.7, 0.7, 0.7)),
             (15.0, 0.0, -15.0)),
        ]
        for light, position in lights:
            self.factory.create_light(self.registry, self.root, light, position)

    def load_resources(self) -> None:
        """Load meshes and textures not yet registered, and build the shader program."""
        for name, mesh_file, texture_file in _RESOURCES:
            if name not in ResourceManager.meshes:
                ResourceManager.meshes[name] = Mesh.from_file(self.base_path / mesh_file)
            if name not in ResourceManager.textures:
                ResourceManager.textures[name] = Texture(self.base_path / texture_file)
        self.shader_program = ShaderProgram(
            [
                (VERTEX_SHADER, str(self.base_path / _VERTEX_SHADER_FILE)),
                (FRAGMENT_SHADER, str(self.base_path / _FRAGMENT_SHADER_FILE)),
            ],
            gl=self._shader_gl,
        )

    def update(self, dt: float) -> None:
        """Spin every plain transform around the world up axis."""
        for _entity, transform in self.registry.view(Transform):
            transform.rotate_around_axis(_ROTATION_SPEED * dt, (0.0, 1.0, 0.0))

    def view_projection(self, window_width: int, window_height: int):
        """Camera position, view matrix and projection matrix from the player."""
        transform = self.player_transform
        position = transform.position
        view = look_at(position, position + transform.forward(), transform.up())
        projection = perspective(math.radians(60.0), window_width / window_height, 1.0, 100.0)
        return position, view, projection

    def render(self, window_width: int, window_height: int) -> list[str]:
        """Draw the scene graph; return the player's debug readout."""
        position, view, projection = self.view_projection(window_width, window_height)
        self.renderer.draw_scene_graph(position, view, projection, self.shader_program,
                                       window_width, window_height, self.root)
        return self.player.debug_lines()