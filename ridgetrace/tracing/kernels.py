"""
Fixed convolution kernels for the ridge trace pipeline.

All kernels are 3x3 and stored as read-only arrays so they cannot be
modified at runtime.
"""

from typing import Iterator, Tuple

import numpy as np


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Smoothing (binomial approximation of a Gaussian, sigma ~ 0.85):
#
#     1/16 * | 1 2 1 |
#            | 2 4 2 |
#            | 1 2 1 |
#
# Weights sum to 1, so a flat region keeps its intensity.
#
# Sobel operators:
#
#     Gx = | -1 0 1 |      Gy = | -1 -2 -1 |
#          | -2 0 2 |           |  0  0  0 |
#          | -1 0 1 |           |  1  2  1 |
#
# Both sum to 0, so a flat region has zero response.
#
# Reference:
# Sobel, I., & Feldman, G. (1968).
# "A 3x3 isotropic gradient operator for image processing."
# =============================================================================


def _frozen(rows) -> np.ndarray:
    kernel = np.array(rows, dtype=np.float64)
    kernel.setflags(write=False)
    return kernel


SMOOTHING_KERNEL = _frozen([
    [1 / 16, 2 / 16, 1 / 16],
    [2 / 16, 4 / 16, 2 / 16],
    [1 / 16, 2 / 16, 1 / 16],
])

SOBEL_X = _frozen([
    [-1, 0, 1],
    [-2, 0, 2],
    [-1, 0, 1],
])

SOBEL_Y = _frozen([
    [-1, -2, -1],
    [0, 0, 0],
    [1, 2, 1],
])


def kernel_taps(kernel: np.ndarray) -> Iterator[Tuple[int, int, float]]:
    """
    Iterate over the taps of a 3x3 kernel in row-major order.

    Args:
        kernel: 3x3 kernel

    Yields:
        (dy, dx, weight) with offsets in {-1, 0, 1}
    """
    if kernel.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 kernel, got shape {kernel.shape}")

    for ky in range(3):
        for kx in range(3):
            yield ky - 1, kx - 1, float(kernel[ky, kx])
