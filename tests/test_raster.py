"""Tests for raster containers and buffer validation."""

import numpy as np
import pytest

from ridgetrace.tracing import raster as raster_module
from ridgetrace.tracing.raster import (
    AllocationFailureError,
    InvalidDimensionsError,
    InvalidPixelValuesError,
    Raster,
    TraceError,
    allocate_plane,
    raster_from_array,
    raster_from_buffer,
    to_pixel_bytes,
    validate_dimensions,
)


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_validate_dimensions_rejects_non_positive(width, height):
    with pytest.raises(InvalidDimensionsError):
        validate_dimensions(width, height)


def test_validate_dimensions_checks_buffer_length():
    validate_dimensions(3, 2, 24)
    with pytest.raises(InvalidDimensionsError, match="Buffer length 23"):
        validate_dimensions(3, 2, 23)


def test_invalid_dimensions_is_trace_error_and_value_error():
    assert issubclass(InvalidDimensionsError, TraceError)
    assert issubclass(InvalidDimensionsError, ValueError)
    assert issubclass(AllocationFailureError, MemoryError)


def test_raster_from_buffer_is_row_major():
    buffer = bytes(range(24))
    raster = raster_from_buffer(3, 2, buffer)

    assert raster.shape == (2, 3)
    # Pixel (x=1, y=1) starts at byte (1 * 3 + 1) * 4 = 16
    assert list(raster.data[1, 1]) == [16, 17, 18, 19]
    assert raster.to_bytes() == buffer


def test_raster_from_buffer_copies_input():
    buffer = bytearray(16)
    raster = raster_from_buffer(2, 2, buffer)
    buffer[0] = 200

    assert raster.data[0, 0, 0] == 0


def test_raster_from_buffer_length_mismatch():
    with pytest.raises(InvalidDimensionsError):
        raster_from_buffer(2, 2, bytes(15))


def test_raster_from_buffer_rejects_empty():
    with pytest.raises(InvalidDimensionsError):
        raster_from_buffer(0, 0, b"")


def test_raster_rejects_mismatched_data_shape():
    with pytest.raises(InvalidDimensionsError):
        Raster(4, 4, np.zeros((4, 3, 4), dtype=np.uint8))


def test_raster_from_array_grayscale():
    gray = np.array([[0, 100], [200, 255]], dtype=np.uint8)
    raster = raster_from_array(gray)

    assert list(raster.data[1, 0]) == [200, 200, 200, 255]
    assert list(raster.data[0, 1]) == [100, 100, 100, 255]


def test_raster_from_array_rgb_fills_alpha():
    rgb = np.zeros((2, 3, 3), dtype=np.uint8)
    rgb[..., 0] = 10
    raster = raster_from_array(rgb)

    assert raster.width == 3
    assert raster.height == 2
    assert np.all(raster.data[..., 3] == 255)
    assert np.all(raster.data[..., 0] == 10)


def test_raster_from_array_rejects_unknown_layout():
    with pytest.raises(InvalidDimensionsError):
        raster_from_array(np.zeros((2, 2, 2), dtype=np.uint8))
    with pytest.raises(InvalidDimensionsError):
        raster_from_array(np.zeros((0, 4), dtype=np.uint8))


def test_raster_equality_compares_pixels():
    a = raster_from_array(np.full((2, 2), 7, dtype=np.uint8))
    b = a.copy()
    assert a == b

    b.data[0, 0, 0] = 8
    assert a != b


def test_allocate_plane_is_zero_float32():
    plane = allocate_plane(3, 4)

    assert plane.shape == (3, 4)
    assert plane.dtype == np.float32
    assert not plane.any()


def test_allocate_plane_wraps_memory_error(monkeypatch):
    def failing_zeros(*args, **kwargs):
        raise MemoryError("out of memory")

    monkeypatch.setattr(raster_module.np, "zeros", failing_zeros)

    with pytest.raises(AllocationFailureError) as excinfo:
        allocate_plane(10, 10)

    assert isinstance(excinfo.value.__cause__, MemoryError)


def test_raster_rejects_out_of_range_values():
    data = np.full((3, 3, 4), 300, dtype=np.int32)

    with pytest.raises(InvalidPixelValuesError, match="300"):
        Raster(3, 3, data)
    with pytest.raises(InvalidPixelValuesError):
        Raster(3, 3, np.full((3, 3, 4), -1, dtype=np.int16))


def test_raster_converts_in_range_wider_dtypes():
    raster = Raster(2, 2, np.full((2, 2, 4), 255, dtype=np.int64))

    assert raster.data.dtype == np.uint8
    assert np.all(raster.data == 255)


def test_raster_from_buffer_rejects_out_of_range_array():
    buffer = np.zeros(16, dtype=np.int32)
    buffer[5] = 256

    with pytest.raises(InvalidPixelValuesError):
        raster_from_buffer(2, 2, buffer)


@pytest.mark.parametrize("array", [
    np.full((2, 2), 1000, dtype=np.int32),
    np.full((2, 2, 3), -5, dtype=np.int32),
    np.full((2, 2, 4), 256.0),
    np.array([[0.0, np.nan], [1.0, 2.0]]),
])
def test_raster_from_array_rejects_invalid_values(array):
    with pytest.raises(InvalidPixelValuesError):
        raster_from_array(array)


def test_invalid_pixel_values_is_trace_error_and_value_error():
    assert issubclass(InvalidPixelValuesError, TraceError)
    assert issubclass(InvalidPixelValuesError, ValueError)


def test_to_pixel_bytes_truncates_fractions():
    values = to_pixel_bytes(np.array([0.0, 12.9, 255.0]))

    assert values.dtype == np.uint8
    assert list(values) == [0, 12, 255]
