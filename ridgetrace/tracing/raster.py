"""
Raster containers and buffer plumbing for the ridge trace pipeline.

A raster is the external RGBA byte image handed to and returned from
the pipeline. Intermediate stages work on single-channel float32 planes
of the same height and width.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np


class TraceError(Exception):
    """Base class for errors raised by the ridge trace pipeline."""
    pass


class InvalidDimensionsError(TraceError, ValueError):
    """Raised when raster dimensions or buffer length are inconsistent."""
    pass


class AllocationFailureError(TraceError, MemoryError):
    """Raised when an intermediate buffer cannot be allocated."""
    pass


class InvalidPixelValuesError(TraceError, ValueError):
    """Raised when channel values do not fit in an unsigned byte."""
    pass


# Number of channels in an external raster (R, G, B, A)
CHANNELS = 4

# Dtype of intermediate planes
PLANE_DTYPE = np.float32


@dataclass(eq=False)
class Raster:
    """
    RGBA byte raster, row-major with origin at the top-left.

    Attributes:
        width: Number of columns
        height: Number of rows
        data: uint8 array of shape (height, width, 4)
    """
    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        validate_dimensions(self.width, self.height)
        expected = (self.height, self.width, CHANNELS)
        if self.data.shape != expected:
            raise InvalidDimensionsError(
                f"Raster data has shape {self.data.shape}, expected {expected}"
            )
        self.data = to_pixel_bytes(self.data)

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width) of the raster."""
        return self.height, self.width

    def to_bytes(self) -> bytes:
        """Return the flat RGBA buffer."""
        return self.data.tobytes()

    def copy(self) -> "Raster":
        return Raster(self.width, self.height, self.data.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )


def validate_dimensions(
    width: int,
    height: int,
    length: Optional[int] = None
) -> None:
    """
    Check raster dimensions and, optionally, a flat buffer length.

    Args:
        width: Raster width in pixels
        height: Raster height in pixels
        length: Length of a flat RGBA buffer, if one is supplied

    Raises:
        InvalidDimensionsError: If width or height is not positive, or
            length does not equal width * height * 4
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            f"Raster dimensions must be positive (got {width}x{height})"
        )

    if length is not None and length != width * height * CHANNELS:
        raise InvalidDimensionsError(
            f"Buffer length {length} does not match {width}x{height}x{CHANNELS} "
            f"= {width * height * CHANNELS}"
        )


def raster_from_buffer(
    width: int,
    height: int,
    buffer: Union[bytes, bytearray, memoryview, np.ndarray]
) -> Raster:
    """
    Build a raster from a flat RGBA byte buffer.

    The buffer is copied, so the caller may reuse it afterwards.

    Args:
        width: Raster width
        height: Raster height
        buffer: Flat RGBA bytes, row-major

    Returns:
        Raster owning a copy of the data

    Raises:
        InvalidDimensionsError: On non-positive dimensions or a length mismatch
        InvalidPixelValuesError: If an array buffer holds values outside [0, 255]
    """
    if isinstance(buffer, np.ndarray):
        flat = to_pixel_bytes(buffer.reshape(-1))
    else:
        flat = np.frombuffer(bytes(buffer), dtype=np.uint8)

    validate_dimensions(width, height, flat.size)

    data = flat.reshape(height, width, CHANNELS).copy()
    return Raster(width, height, data)


def raster_from_array(array: np.ndarray) -> Raster:
    """
    Build a raster from a numpy image array.

    Accepted layouts:
    - (H, W, 4): RGBA, copied as is
    - (H, W, 3): RGB, alpha filled with 255
    - (H, W): grayscale, replicated into R, G and B with alpha 255

    Args:
        array: Image array with values in [0, 255]

    Returns:
        RGBA raster

    Raises:
        InvalidDimensionsError: If the array layout is not supported
        InvalidPixelValuesError: If values fall outside [0, 255]
    """
    array = np.asarray(array)

    if array.ndim == 2:
        height, width = array.shape
        validate_dimensions(width, height)
        data = np.empty((height, width, CHANNELS), dtype=np.uint8)
        data[..., :3] = to_pixel_bytes(array)[..., np.newaxis]
        data[..., 3] = 255
    elif array.ndim == 3 and array.shape[2] == 3:
        height, width = array.shape[:2]
        validate_dimensions(width, height)
        data = np.empty((height, width, CHANNELS), dtype=np.uint8)
        data[..., :3] = to_pixel_bytes(array)
        data[..., 3] = 255
    elif array.ndim == 3 and array.shape[2] == CHANNELS:
        height, width = array.shape[:2]
        validate_dimensions(width, height)
        data = to_pixel_bytes(array).copy()
    else:
        raise InvalidDimensionsError(
            f"Unsupported raster array shape {array.shape}; "
            "expected (H, W), (H, W, 3) or (H, W, 4)"
        )

    return Raster(width, height, data)


def allocate_plane(height: int, width: int) -> np.ndarray:
    """
    Allocate a zero-filled intermediate plane.

    Args:
        height: Number of rows
        width: Number of columns

    Returns:
        float32 array of shape (height, width) filled with 0

    Raises:
        AllocationFailureError: If the buffer cannot be allocated
    """
    try:
        return np.zeros((height, width), dtype=PLANE_DTYPE)
    except MemoryError as exc:
        raise AllocationFailureError(
            f"Could not allocate {width}x{height} intermediate plane"
        ) from exc


def to_pixel_bytes(array: np.ndarray) -> np.ndarray:
    """
    Convert channel values to uint8 without wrapping.

    uint8 input is returned unchanged. Other dtypes must hold finite
    values in [0, 255]; fractional floats are truncated toward zero.

    Raises:
        InvalidPixelValuesError: If any value is out of range or not finite
    """
    if array.dtype == np.uint8:
        return array

    if array.size:
        if np.issubdtype(array.dtype, np.floating) and not np.isfinite(array).all():
            raise InvalidPixelValuesError("Channel values must be finite")
        low, high = array.min(), array.max()
        if low < 0 or high > 255:
            raise InvalidPixelValuesError(
                f"Channel values must be in [0, 255] (got {low} to {high})"
            )

    return array.astype(np.uint8)
