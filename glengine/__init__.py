"""OpenGL scene engine: math helpers, entity registry, scene graph, meshes, shaders, input and a first-person player."""

__version__ = "0.1.0"