"""Shared registries of loaded meshes and textures."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .mesh import Mesh
    from .texture import Texture


class ResourceManager:
    """Process-wide name-to-resource maps."""

    meshes: ClassVar[dict[str, "Mesh"]] = {}
    textures: ClassVar[dict[str, "Texture"]] = {}

    @classmethod
    def clear(cls) -> None:
        """Forget every loaded mesh and texture."""
        cls.meshes.clear()
        cls.textures.clear()