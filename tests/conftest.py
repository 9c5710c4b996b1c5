"""Shared test fixtures."""

import numpy as np
import pytest

from ridgetrace.tracing.raster import Raster, raster_from_array


def solid_raster(width: int, height: int, rgb=(128, 128, 128), alpha: int = 255) -> Raster:
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[..., :3] = rgb
    data[..., 3] = alpha
    return Raster(width, height, data)


@pytest.fixture
def flat_gray() -> Raster:
    """5x5 raster, every pixel RGB (128, 128, 128)."""
    return solid_raster(5, 5)


@pytest.fixture
def vertical_edge() -> Raster:
    """5x5 raster, left 2 columns black, right 3 columns white."""
    gray = np.full((5, 5), 255, dtype=np.uint8)
    gray[:, :2] = 0
    return raster_from_array(gray)


@pytest.fixture
def noisy_raster() -> Raster:
    """Deterministic 11x9 random RGBA raster with varying alpha."""
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(9, 11, 4), dtype=np.uint8)
    return Raster(11, 9, data)


@pytest.fixture
def ridge_pattern() -> Raster:
    """32x24 raster of dark sinusoidal ridges on a light background."""
    yy, xx = np.mgrid[0:24, 0:32]
    ridges = 127.5 + 127.5 * np.sin(xx / 2.0 + yy / 5.0)
    return raster_from_array(ridges.round().astype(np.uint8))
