import numpy as np
import pytest
from PIL import Image

from glengine.texture import Texture, TextureError, load_image


class FakeTextureGL:
    def __init__(self):
        self.uploads = []
        self.bound = []

    def upload(self, pixels):
        self.uploads.append(pixels)
        return 7

    def bind_texture(self, texture_id):
        self.bound.append(texture_id)


def save(tmp_path, array, name="image.png"):
    path = tmp_path / name
    Image.fromarray(array).save(path)
    return path


def rgb_array():
    return np.arange(24, dtype=np.uint8).reshape(2, 4, 3)


def test_load_rgb_round_trip(tmp_path):
    array = rgb_array()
    pixels = load_image(save(tmp_path, array))
    assert pixels.shape == array.shape
    assert np.array_equal(pixels, array)


def test_load_grayscale_keeps_one_channel(tmp_path):
    array = np.arange(8, dtype=np.uint8).reshape(2, 4)
    pixels = load_image(save(tmp_path, array))
    assert pixels.shape == (*array.shape, 1)
    assert np.array_equal(pixels[:, :, 0], array)


def test_load_rgba_keeps_alpha(tmp_path):
    array = np.arange(32, dtype=np.uint8).reshape(2, 4, 4)
    pixels = load_image(save(tmp_path, array))
    assert np.array_equal(pixels, array)


def test_palette_image_becomes_rgb(tmp_path):
    path = tmp_path / "palette.png"
    Image.new("RGB", (3, 2), (10, 20, 30)).convert("P").save(path)
    pixels = load_image(path)
    assert pixels.shape[:2] == (2, 3)
    assert pixels[0, 0].tolist() == [10, 20, 30]


def test_missing_file_raises(tmp_path):
    with pytest.raises(TextureError):
        load_image(tmp_path / "absent.png")


def test_non_image_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(TextureError):
        Texture(path)


def test_texture_dimensions(tmp_path):
    array = rgb_array()
    texture = Texture(save(tmp_path, array), gl=FakeTextureGL())
    assert (texture.height, texture.width, texture.channels) == array.shape
    assert texture.texture_id is None


def test_bind_uploads_once(tmp_path):
    gl = FakeTextureGL()
    array = rgb_array()
    texture = Texture(save(tmp_path, array), gl=gl)
    texture.bind()
    texture.unbind()
    texture.bind()
    assert len(gl.uploads) == 1
    assert np.array_equal(gl.uploads[0], array)
    assert gl.bound == [7, 0, 7]
    assert texture.texture_id == 7


def test_rgba_upload_drops_alpha(tmp_path):
    gl = FakeTextureGL()
    array = np.arange(32, dtype=np.uint8).reshape(2, 4, 4)
    Texture(save(tmp_path, array), gl=gl).bind()
    assert np.array_equal(gl.uploads[0], array[:, :, :3])


def test_grayscale_upload_repeats_channel(tmp_path):
    gl = FakeTextureGL()
    array = np.arange(8, dtype=np.uint8).reshape(2, 4)
    Texture(save(tmp_path, array), gl=gl).bind()
    uploaded = gl.uploads[0]
    assert uploaded.shape[:2] == array.shape
    assert all(np.array_equal(uploaded[:, :, c], array) for c in range(uploaded.shape[2]))