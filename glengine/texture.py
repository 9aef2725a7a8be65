"""Image textures loaded from files and uploaded to the GPU."""

from __future__ import annotations

from typing import Optional

import numpy as np
from PIL import Image

_NATIVE_MODES = frozenset({"L", "LA", "RGB", "RGBA"})


class TextureError(RuntimeError):
    """An image file could not be loaded."""


def load_image(filename) -> np.ndarray:
    """Pixels of an image as a uint8 array of shape (height, width, channels).

    The first row is the top of the image; the channel count follows the file.
    """
    try:
        with Image.open(filename) as image:
            image.load()
            if image.mode == "1" or image.mode.startswith(("I", "F")):
                image = image.convert("L")
            elif image.mode not in _NATIVE_MODES:
                has_alpha = "A" in image.mode or "transparency" in image.info
                image = image.convert("RGBA" if has_alpha else "RGB")
            pixels = np.array(image, dtype=np.uint8)
    except OSError as exc:
        raise TextureError(f"Error when loading texture file {filename}") from exc
    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]
    return pixels


def _to_rgb(pixels: np.ndarray) -> np.ndarray:
    channels = pixels.shape[2]
    if channels in (1, 2):
        return np.repeat(pixels[:, :, :1], 3, axis=2)
    return pixels[:, :, :3]


class _PygletTextureGL:
    """Texture calls through pyglet's OpenGL bindings."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl

    def upload(self, pixels):
        gl = self._gl
        height, width, _ = pixels.shape
        data = np.ascontiguousarray(pixels, dtype=np.uint8).tobytes()

        texture_id = gl.GLuint()
        gl.glGenTextures(1, texture_id)
        gl.glBindTexture(gl.GL_TEXTURE_2D, texture_id.value)

        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)

        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, gl.GL_RGB, width, height, 0,
                        gl.GL_RGB, gl.GL_UNSIGNED_BYTE, data)
        gl.glGenerateMipmap(gl.GL_TEXTURE_2D)

        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        return texture_id.value

    def bind_texture(self, texture_id):
        self._gl.glBindTexture(self._gl.GL_TEXTURE_2D, texture_id)


class Texture:
    """A 2D RGB texture; the image is sent to the GPU on first bind."""

    def __init__(self, filename, gl=None):
        pixels = load_image(filename)
        self.filename = str(filename)
        self.height, self.width, self.channels = pixels.shape
        self._pixels: Optional[np.ndarray] = pixels
        self._gl = gl
        self.texture_id: Optional[int] = None

    def _backend(self):
        if self._gl is None:
            self._gl = _PygletTextureGL()
        return self._gl

    def bind(self) -> None:
        gl = self._backend()
        if self.texture_id is None:
            self.texture_id = gl.upload(_to_rgb(self._pixels))
            self._pixels = None
        gl.bind_texture(self.texture_id)

    def unbind(self) -> None:
        self._backend().bind_texture(0)