"""Tests for magnitude binarization and trace statistics."""

import numpy as np
import pytest

from ridgetrace.tracing.binarization import (
    background_value,
    binarize,
    ridge_coverage,
    ridge_mask,
    ridge_value,
)


def magnitudes(*values):
    return np.array([values], dtype=np.float32)


def test_strictly_greater_is_ridge():
    out = binarize(magnitudes(9.0, 10.0, 10.5), threshold=10.0)

    assert list(out.data[0, :, 0]) == [255, 255, 0]


def test_equal_to_threshold_is_background():
    out = binarize(magnitudes(30.0), threshold=30)

    assert list(out.data[0, 0]) == [255, 255, 255, 255]


def test_magnitude_clamped_to_255():
    # 1000 clamps to 255, which does not exceed 255
    out = binarize(magnitudes(1000.0, 254.0), threshold=255.0)
    assert list(out.data[0, :, 0]) == [255, 255]

    out = binarize(magnitudes(1000.0, 254.0), threshold=254.5)
    assert list(out.data[0, :, 0]) == [0, 255]


def test_threshold_not_rounded_to_float32():
    # 29.9999996 rounds to 30.0 in float32, but the comparison uses the exact value
    assert np.float32(29.9999996) == np.float32(30.0)

    out = binarize(magnitudes(30.0), threshold=29.9999996)
    assert out.data[0, 0, 0] == 0

    out = binarize(magnitudes(30.0), threshold=30.0000004)
    assert out.data[0, 0, 0] == 255


def test_invert_swaps_colors():
    plain = binarize(magnitudes(0.0, 100.0), threshold=50.0)
    inverted = binarize(magnitudes(0.0, 100.0), threshold=50.0, invert=True)

    assert list(plain.data[0, :, 0]) == [255, 0]
    assert list(inverted.data[0, :, 0]) == [0, 255]


@pytest.mark.parametrize("invert", [False, True])
def test_channels_equal_and_opaque(invert):
    rng = np.random.default_rng(7)
    plane = rng.uniform(0, 400, size=(6, 8)).astype(np.float32)
    out = binarize(plane, threshold=120.0, invert=invert)

    assert out.shape == (6, 8)
    assert np.array_equal(out.data[..., 0], out.data[..., 1])
    assert np.array_equal(out.data[..., 0], out.data[..., 2])
    assert np.all(out.data[..., 3] == 255)
    assert set(np.unique(out.data[..., :3])) <= {0, 255}


def test_palette_values():
    assert background_value(False) == 255
    assert background_value(True) == 0
    assert ridge_value(False) == 0
    assert ridge_value(True) == 255


@pytest.mark.parametrize("invert", [False, True])
def test_ridge_mask_and_coverage(invert):
    plane = np.array([[0.0, 50.0], [80.0, 5.0]], dtype=np.float32)
    out = binarize(plane, threshold=40.0, invert=invert)

    assert ridge_mask(out, invert).tolist() == [[False, True], [True, False]]
    assert ridge_coverage(out, invert) == 0.5
