"""Tests for raster decoding and encoding."""

import base64
import io

import numpy as np
import pytest
from PIL import Image

from ridgetrace.tracing import Raster, trace
from ridgetrace.utils.io import (
    decode_raster,
    discover_images,
    encode_png,
    encode_png_data_url,
    load_json,
    load_raster,
    save_json,
    save_raster,
)


def png_bytes(array: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format="PNG")
    return buffer.getvalue()


def test_decode_rgb_png_fills_alpha():
    rgb = np.zeros((3, 4, 3), dtype=np.uint8)
    rgb[..., 0] = 200
    rgb[..., 2] = 50
    raster = decode_raster(png_bytes(rgb))

    assert (raster.width, raster.height) == (4, 3)
    assert list(raster.data[1, 2]) == [200, 0, 50, 255]


def test_decode_grayscale_png():
    gray = np.array([[0, 128], [255, 64]], dtype=np.uint8)
    raster = decode_raster(png_bytes(gray))

    assert list(raster.data[0, 1]) == [128, 128, 128, 255]


def test_decode_invalid_bytes():
    with pytest.raises(ValueError):
        decode_raster(b"not an image")


def test_data_url(ridge_pattern):
    traced = trace(ridge_pattern, 30, False)
    url = encode_png_data_url(traced)

    assert url.startswith("data:image/png;base64,")
    decoded = decode_raster(base64.b64decode(url.split(",", 1)[1]))
    assert decoded == traced


def test_encode_png_is_png(ridge_pattern):
    assert encode_png(ridge_pattern).startswith(b"\x89PNG")


def test_save_and_load_keep_channel_order(tmp_path):
    data = np.zeros((2, 3, 4), dtype=np.uint8)
    data[..., 0] = 255
    data[..., 3] = 255
    raster = Raster(3, 2, data)

    path = save_raster(raster, tmp_path / "nested" / "red.png")
    loaded = load_raster(path)

    assert path.exists()
    assert list(loaded.data[0, 0]) == [255, 0, 0, 255]


def test_load_raster_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raster(tmp_path / "missing.png")

    broken = tmp_path / "broken.png"
    broken.write_bytes(b"garbage")
    with pytest.raises(ValueError):
        load_raster(broken)


def test_discover_images(tmp_path):
    (tmp_path / "sub").mkdir()
    for name in ["b.png", "a.JPG", "notes.txt", "sub/c.tif"]:
        (tmp_path / name).write_bytes(b"")

    found = [p.relative_to(tmp_path).as_posix() for p in discover_images(tmp_path)]
    assert found == ["a.JPG", "b.png", "sub/c.tif"]

    flat = discover_images(tmp_path, recursive=False)
    assert [p.name for p in flat] == ["a.JPG", "b.png"]


def test_json_helpers(tmp_path):
    path = tmp_path / "out" / "data.json"
    save_json({"threshold": 30}, path)

    assert load_json(path) == {"threshold": 30}
