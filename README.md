# glengine

A small real-time 3D engine on OpenGL, through pyglet. It keeps its world
in an entity registry and arranges entities in a scene graph. It lights
meshes with point lights through a shader program and lets you walk around
as a first-person player.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
glengine
```

This opens a 1920×1080 single-buffered window with the OpenGL 3.3 profile
and builds the scene. It reads these files relative to the working
directory:

- `models/better-human.obj` and `models/better-humanTexture.jpg`
- `models/blender-cube.obj` and `models/test-texture.jpg`
- `shaders/phong-with-uniforms.vert` and `shaders/phong-with-uniforms.frag`

The scene contains a human mesh, 50 cubes at random positions and three
coloured point lights. Half the cubes are attached to the root and half to
the human. Every transform spins slowly around the world up axis.

### Controls

| Key / input  | Action                                           |
|--------------|--------------------------------------------------|
| Mouse        | Look around                                      |
| W / S        | Walk forward / backward                          |
| A / D        | Strafe left / right                              |
| R            | Move the player back to (0, 0, 3)                |
| Left Control | Toggle debug controls: frees the cursor and stops mouse look |
| Q            | Quit                                             |

The simulation advances in fixed steps of 1/60 s (`app.consume_steps`).
Rendering happens once per frame. Text panels drawn over the scene show
the render time and FPS, the player's position and orientation, and the
last walk vector.

## Using the pieces

The modules can also be used on their own:

- `glengine.glmath` has vector, quaternion and matrix helpers:
  `normalize`, `angle_axis`, `quat_from_euler`, `quat_multiply`,
  `rotate_vector`, `quat_to_mat4`, `euler_angles`, `translation_matrix`,
  `look_at` and `perspective`. Quaternions are `(w, x, y, z)` numpy arrays.
- `glengine.transform.Transform` holds a position and an orientation. It
  offers `translate`, `translate_local`, `rotate_around_axis`,
  `model_matrix`, `forward`, `up` and `right`.
- `glengine.camera.Camera` is a free camera with `walk`, `mouse_look` and
  `view_matrix`.
- `glengine.ecs.Registry` creates entities and stores components keyed by
  type or by name, and gives a `view` over them.
  `SceneNode.add_child` links entities into a hierarchy.
- `glengine.events.EventDispatcher` dispatches events by their exact class.
  `events.instance()` returns the shared dispatcher. `Observable` and
  `Observer` send to it and subscribe to it. The character events
  (`CharacterWalkEvent`, `CharacterLookEvent`,
  `CharacterResetPositionEvent`, `CharacterResetOrientationEvent`) and the
  `WalkDirections` flags live in `glengine.input_events`.
- `glengine.mesh.load_obj` reads the first mesh of a Wavefront OBJ file
  and triangulates it. It flips texture coordinates vertically and fills
  in face normals where a face has none. `Mesh` uploads the result on
  first draw.
- `glengine.texture.load_image` reads an image into a numpy array with
  Pillow.
- `glengine.render_system.world_matrix` combines transforms up the scene
  graph. `normal_matrix` derives the matrix for normals.

```python
from glengine.ecs import Registry, SceneNode
from glengine.transform import Transform
from glengine.render_system import world_matrix

registry = Registry()
root = registry.create()
registry.emplace(root, Transform(), Transform)
registry.emplace(root, SceneNode(), SceneNode)

child = registry.create()
registry.emplace(child, Transform((1.0, 0.0, 0.0)), Transform)
registry.emplace(child, SceneNode(), SceneNode)
SceneNode.add_child(registry, root, child)

print(world_matrix(registry, child, root))
```

## What it does not do

- No meshes, textures or shader sources come with the package. The
  `glengine` command needs the files listed above in the working
  directory, and it stops with an error if one is missing.
- The OBJ reader ignores material libraries. It keeps only the first
  object or group in a file.
- The on-screen panels are plain text labels, not interactive widgets.