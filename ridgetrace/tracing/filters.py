"""
Luminance, smoothing and gradient stages of the ridge trace pipeline.

Each stage takes a complete plane from the previous stage and returns a
new float32 plane of the same shape. The one-pixel border of the
smoothing and gradient outputs is never computed and stays at 0.
"""

from typing import Tuple

import numpy as np

from .kernels import SMOOTHING_KERNEL, SOBEL_X, SOBEL_Y, kernel_taps
from .raster import Raster, allocate_plane


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Luminance (ITU-R BT.601 weights):
#
#     Y = 0.299 * R + 0.587 * G + 0.114 * B
#
# 3x3 correlation over interior pixels (1 <= x <= W-2, 1 <= y <= H-2):
#
#     O(y, x) = Σ_{dy=-1..1} Σ_{dx=-1..1} K(dy+1, dx+1) * I(y+dy, x+dx)
#
# Gradient magnitude:
#
#     M(y, x) = sqrt(Gx(y, x)² + Gy(y, x)²)
#
# Sums are accumulated in double precision in row-major tap order and the
# result is rounded to float32 once per stage. Interior slices are shifted
# views of the source plane, so every pixel sees exactly the same
# arithmetic as a per-pixel loop would perform.
# =============================================================================


def to_luminance(raster: Raster) -> np.ndarray:
    """
    Convert an RGBA raster to a single-channel luminance plane.

    Alpha is ignored. No clamping is applied since channel values are
    already in [0, 255].

    Args:
        raster: Input RGBA raster

    Returns:
        float32 luminance plane of shape (height, width)
    """
    luminance = allocate_plane(raster.height, raster.width)

    rgb = raster.data.astype(np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    luminance[...] = 0.299 * r + 0.587 * g + 0.114 * b
    return luminance


def _has_interior(plane: np.ndarray) -> bool:
    h, w = plane.shape
    return h >= 3 and w >= 3


def _correlate_interior(plane: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Correlate the interior of a plane with a 3x3 kernel.

    Args:
        plane: Source plane of shape (H, W) with H, W >= 3
        kernel: 3x3 kernel

    Returns:
        float64 array of shape (H-2, W-2) holding the response at every
        interior pixel
    """
    h, w = plane.shape
    source = plane.astype(np.float64)

    response = np.zeros((h - 2, w - 2), dtype=np.float64)
    for dy, dx, weight in kernel_taps(kernel):
        response += source[1 + dy:h - 1 + dy, 1 + dx:w - 1 + dx] * weight

    return response


def smooth(luminance: np.ndarray) -> np.ndarray:
    """
    Apply the fixed 3x3 smoothing kernel.

    Border pixels are set to 0 rather than copied from the input.

    Args:
        luminance: float32 luminance plane

    Returns:
        float32 smoothed plane of the same shape
    """
    h, w = luminance.shape
    smoothed = allocate_plane(h, w)

    if _has_interior(luminance):
        smoothed[1:h - 1, 1:w - 1] = _correlate_interior(luminance, SMOOTHING_KERNEL)

    return smoothed


def compute_gradients(smoothed: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute signed Sobel responses.

    Args:
        smoothed: float32 smoothed plane

    Returns:
        Tuple of (Gx, Gy) float64 planes of the input shape, zero on the
        border
    """
    h, w = smoothed.shape
    gx = np.zeros((h, w), dtype=np.float64)
    gy = np.zeros((h, w), dtype=np.float64)

    if _has_interior(smoothed):
        gx[1:h - 1, 1:w - 1] = _correlate_interior(smoothed, SOBEL_X)
        gy[1:h - 1, 1:w - 1] = _correlate_interior(smoothed, SOBEL_Y)

    return gx, gy


def gradient_magnitude(smoothed: np.ndarray) -> np.ndarray:
    """
    Compute the Sobel gradient magnitude.

    The raw Euclidean magnitude is returned without clamping, so values
    may exceed 255. Orientation is discarded.

    Args:
        smoothed: float32 smoothed plane

    Returns:
        float32 magnitude plane of the same shape, zero on the border
    """
    h, w = smoothed.shape
    magnitude = allocate_plane(h, w)

    if _has_interior(smoothed):
        gx, gy = compute_gradients(smoothed)
        interior = (slice(1, h - 1), slice(1, w - 1))
        magnitude[interior] = np.sqrt(gx[interior] * gx[interior] + gy[interior] * gy[interior])

    return magnitude
