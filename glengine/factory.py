"""Prefab constructors that populate a registry with ready-made entities."""

from __future__ import annotations

import random
from typing import Optional

from .components import Light
from .ecs import Registry, SceneNode
from .mesh import Mesh
from .resources import ResourceManager
from .texture import Texture
from .transform import Transform


class Factory:
    """Builds entities from resources that have already been loaded."""

    def __init__(self, meshes: Optional[dict] = None, textures: Optional[dict] = None,
                 rng: Optional[random.Random] = None):
        self.meshes = ResourceManager.meshes if meshes is None else meshes
        self.textures = ResourceManager.textures if textures is None else textures
        self.rng = rng if rng is not None else random.Random()

    def _resource(self, table: dict, name: str, kind: str):
        try:
            return table[name]
        except KeyError:
            raise KeyError(f"{kind} {name!r} has not been loaded") from None

    def _scattered(self) -> int:
        return self.rng.randrange(50) - 25

    def human(self, registry: Registry, parent) -> int:
        """A textured human mesh at the origin, attached under ``parent``."""
        entity = registry.create()
        registry.emplace(entity, Transform())
        registry.emplace(entity, SceneNode())
        SceneNode.add_child(registry, parent, entity)
        registry.emplace(entity, self._resource(self.meshes, "human", "mesh"), Mesh)
        registry.emplace(entity, self._resource(self.textures, "human", "texture"), Texture)
        return entity

    def blender_cube(self, registry: Registry, parent) -> int:
        """A textured cube at a random whole-number position under ``parent``."""
        entity = registry.create()
        registry.emplace(entity, SceneNode())
        SceneNode.add_child(registry, parent, entity)
        position = (
            float(self._scattered() + 10),
            float(self._scattered()),
            float(self._scattered()),
        )
        registry.emplace(entity, Transform(position))
        registry.emplace(entity, self._resource(self.meshes, "cube", "mesh"), Mesh)
        registry.emplace(entity, self._resource(self.textures, "cube", "texture"), Texture)
        return entity

    def create_light(self, registry: Registry, parent, light: Light,
                     position=(0.0, 0.0, 0.0)) -> int:
        """A light at ``position``; attached under ``parent`` when it is valid."""
        entity = registry.create()
        registry.emplace(entity, Transform(position))
        registry.emplace(entity, light, Light)
        registry.emplace(entity, SceneNode())
        if registry.valid(parent):
            SceneNode.add_child(registry, parent, entity)
        return entity