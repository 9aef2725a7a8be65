"""A small entity-component registry and scene-graph node component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, Optional

NULL = None


class Registry:
    """Entities are integer ids; each holds components keyed by type or name."""

    def __init__(self) -> None:
        self._next_id = 0
        self._entities: dict[int, dict[Hashable, Any]] = {}

    def _components(self, entity) -> dict[Hashable, Any]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(f"invalid entity {entity!r}") from None

    def create(self) -> int:
        entity = self._next_id
        self._next_id += 1
        self._entities[entity] = {}
        return entity

    def emplace(self, entity, component, key: Optional[Hashable] = None):
        """Attach ``component`` under ``key`` (its type by default) and return it."""
        components = self._components(entity)
        key = type(component) if key is None else key
        if key in components:
            raise ValueError(f"entity {entity} already has component {key!r}")
        components[key] = component
        return component

    def get(self, entity, key: Hashable):
        components = self._components(entity)
        try:
            return components[key]
        except KeyError:
            raise KeyError(f"entity {entity} has no component {key!r}") from None

    def valid(self, entity) -> bool:
        return entity is not None and entity in self._entities

    def all_of(self, entity, *args: Hashable) -> bool:
        components = self._components(entity)
        return all(key in components for key in args)

    def view(self, *args: Hashable) -> Iterator[tuple]:
        """Yield ``(entity, component, ...)`` for entities holding every key."""
        for entity, components in list(self._entities.items()):
            if all(key in components for key in args):
                yield (entity, *(components[key] for key in args))

    def destroy(self, entity) -> None:
        self._components(entity)
        del self._entities[entity]


@dataclass
class SceneNode:
    """Parent link and child set of an entity in the scene graph."""

    parent: Optional[int] = NULL
    children: set[int] = field(default_factory=set)

    @staticmethod
    def add_child(registry: Registry, parent: int, child: int) -> None:
        parent_node = registry.get(parent, SceneNode)
        child_node = registry.get(child, SceneNode)
        parent_node.children.add(child)
        child_node.parent = parent