"""Plain data components: lights, materials and mesh vertices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .texture import Texture

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


def _components(values: Iterable[float], size: int, name: str) -> tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} needs {size} components, got {len(result)}")
    return result


@dataclass
class Light:
    """Colour terms of a point light."""

    diffuse: Vec3 = (0.0, 0.0, 0.0)
    ambient: Vec3 = (0.0, 0.0, 0.0)
    specular: Vec3 = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        self.diffuse = _components(self.diffuse, 3, "diffuse")
        self.ambient = _components(self.ambient, 3, "ambient")
        self.specular = _components(self.specular, 3, "specular")


@dataclass
class Material:
    """Texture maps and shininess of a surface."""

    diffuse: "Texture"
    specular: "Texture"
    emission: "Texture"
    shininess: float

    def __post_init__(self) -> None:
        self.shininess = float(self.shininess)


@dataclass
class Vertex:
    """One mesh vertex; fields are laid out in this order on the GPU."""

    position: Vec3 = (0.0, 0.0, 0.0)
    texture_coordinates: Vec2 = (0.0, 0.0)
    color: Vec3 = (0.0, 0.0, 0.0)
    normal: Vec3 = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        self.position = _components(self.position, 3, "position")
        self.texture_coordinates = _components(self.texture_coordinates, 2, "texture_coordinates")
        self.color = _components(self.color, 3, "color")
        self.normal = _components(self.normal, 3, "normal")