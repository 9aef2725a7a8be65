"""Drawing every mesh of a scene graph with its world transform and the scene lights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .components import Light
from .ecs import Registry, SceneNode
from .mesh import Mesh
from .texture import Texture
from .transform import Transform

Vec3 = tuple[float, float, float]


@dataclass
class ShaderLightData:
    """One light as the shader's light array expects it."""

    position: Vec3
    ambient: Vec3
    diffuse: Vec3
    specular: Vec3

    @classmethod
    def from_light(cls, light: Light, position) -> "ShaderLightData":
        return cls(
            position=tuple(float(c) for c in position),
            ambient=tuple(light.ambient),
            diffuse=tuple(light.diffuse),
            specular=tuple(light.specular),
        )


def world_matrix(registry: Registry, entity, root) -> np.ndarray:
    """Model matrix of ``entity`` combined with those of its ancestors below ``root``.

    Climbing stops at ``root``, at an invalid parent, or at a parent lacking
    a transform or scene node.
    """
    matrix = registry.get(entity, Transform).model_matrix()
    parent = registry.get(entity, SceneNode).parent
    while registry.valid(parent) and parent != root:
        if not registry.all_of(parent, Transform, SceneNode):
            break
        matrix = registry.get(parent, Transform).model_matrix() @ matrix
        parent = registry.get(parent, SceneNode).parent
    return matrix


def normal_matrix(model) -> np.ndarray:
    """Upper-left 3x3 of the inverse transpose of ``model``."""
    return np.transpose(np.linalg.inv(np.asarray(model, dtype=float)))[:3, :3]


class _PygletRenderGL:
    """Pipeline state calls through pyglet's OpenGL bindings."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl

    def enable_face_culling(self) -> None:
        self._gl.glEnable(self._gl.GL_CULL_FACE)


class RenderSystem:
    """Draws entities that carry a transform, a mesh and a texture."""

    def __init__(self, registry: Registry, gl=None):
        self.registry = registry
        self._gl = gl if gl is not None else _PygletRenderGL()
        self._gl.enable_face_culling()

    def collect_lights(self, root) -> list[ShaderLightData]:
        """Every light in the scene with its world position."""
        return [
            ShaderLightData.from_light(light, world_matrix(self.registry, entity, root)[:3, 3])
            for entity, light, _transform, _node in self.registry.view(Light, Transform, SceneNode)
        ]

    def drawables(self, root) -> list[tuple[Any, Any, Any, np.ndarray]]:
        """``(entity, mesh, texture, world matrix)`` for each drawable in the graph."""
        return [
            (entity, mesh, texture, world_matrix(self.registry, entity, root))
            for entity, _node, _transform, mesh, texture
            in self.registry.view(SceneNode, Transform, Mesh, Texture)
        ]

    def _draw_mesh(self, mesh, texture, camera_position, model, view_matrix,
                   projection_matrix, shader_program) -> None:
        shader_program.set_vec3(camera_position, "cameraPosition")
        shader_program.set_matrix4(view_matrix, "view")
        shader_program.set_matrix4(projection_matrix, "projection")
        shader_program.set_matrix3(normal_matrix(model), "normalMatrix")
        shader_program.set_matrix4(model, "model")
        texture.bind()
        mesh.draw(shader_program)
        texture.unbind()

    def draw_scene_graph(self, camera_position, view_matrix, projection_matrix, shader_program,
                         screen_width, screen_height, scene_graph_root) -> None:
        """Draw every mesh using transforms accumulated through the scene graph."""
        shader_program.set_lights(self.collect_lights(scene_graph_root), "lights")
        for _entity, mesh, texture, model in self.drawables(scene_graph_root):
            self._draw_mesh(mesh, texture, camera_position, model, view_matrix,
                            projection_matrix, shader_program)

    def draw_scene(self, camera_position, view_matrix, projection_matrix, shader_program,
                   screen_width, screen_height) -> None:
        """Draw every mesh using only its own transform, ignoring the scene graph."""
        lights = [
            ShaderLightData.from_light(light, transform.position)
            for _entity, light, transform in self.registry.view(Light, Transform)
        ]
        shader_program.set_lights(lights, "lights")

        shader_program.set_vec3(camera_position, "cameraPosition")
        shader_program.set_matrix4(view_matrix, "view")
        shader_program.set_matrix4(projection_matrix, "projection")

        for _entity, transform, mesh, texture in self.registry.view(Transform, Mesh, Texture):
            model = transform.model_matrix()
            shader_program.set_matrix3(normal_matrix(model), "normalMatrix")
            shader_program.set_matrix4(model, "model")
            texture.bind()
            mesh.draw(shader_program)
            texture.unbind()