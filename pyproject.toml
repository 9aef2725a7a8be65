[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glengine"
version = "0.1.0"
description = "A small OpenGL scene engine with an entity registry, scene graph, Phong lighting and a first-person player"
requires-python = ">=3.10"
keywords = ["opengl", "3d", "rendering", "scene-graph", "ecs", "game-engine", "quaternion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "numpy",
    "pyglet",
    "pillow",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
glengine = "glengine.app:main"

[tool.hatch.build.targets.wheel]
packages = ["glengine"]

[tool.pytest.ini_options]
addopts = "-ra"
