"""
Binarization of gradient magnitude planes into black/white rasters.
"""

import numpy as np

from .raster import CHANNELS, Raster


# Channel value for pixels classified as ridge (before inversion)
RIDGE_VALUE = 0

# Channel value for background pixels (before inversion)
BACKGROUND_VALUE = 255

# Magnitudes are clamped to this value before thresholding
MAGNITUDE_CEILING = 255.0


def background_value(invert: bool = False) -> int:
    """Channel value written for background (and border) pixels."""
    return 255 - BACKGROUND_VALUE if invert else BACKGROUND_VALUE


def ridge_value(invert: bool = False) -> int:
    """Channel value written for ridge pixels."""
    return 255 - RIDGE_VALUE if invert else RIDGE_VALUE


def binarize(
    magnitude: np.ndarray,
    threshold: float,
    invert: bool = False
) -> Raster:
    """
    Threshold a gradient magnitude plane into an RGBA raster.

    Algorithm:
    1. Clamp magnitude to at most 255
    2. Magnitude strictly greater than threshold -> ridge (0), else 255
    3. If invert, replace value v with 255 - v
    4. Write v into R, G and B; alpha is always 255

    A magnitude exactly equal to the threshold is background.

    Args:
        magnitude: float32 magnitude plane of shape (H, W)
        threshold: Edge threshold (any real >= 0)
        invert: Whether to swap ridge and background colors

    Returns:
        RGBA raster of shape (H, W) with channel values in {0, 255}
    """
    h, w = magnitude.shape

    # Compare in double precision so the threshold is not rounded to float32
    clamped = np.minimum(magnitude.astype(np.float64), MAGNITUDE_CEILING)
    is_ridge = clamped > float(threshold)

    values = np.where(is_ridge, ridge_value(invert), background_value(invert)).astype(np.uint8)

    data = np.empty((h, w, CHANNELS), dtype=np.uint8)
    data[..., 0] = values
    data[..., 1] = values
    data[..., 2] = values
    data[..., 3] = 255

    return Raster(w, h, data)


def ridge_mask(traced: Raster, invert: bool = False) -> np.ndarray:
    """
    Recover the ridge classification from a traced raster.

    Args:
        traced: Output of the trace pipeline
        invert: The invert flag the raster was produced with

    Returns:
        Boolean array of shape (H, W), True where a ridge was detected
    """
    return traced.data[..., 0] == ridge_value(invert)


def ridge_coverage(traced: Raster, invert: bool = False) -> float:
    """
    Fraction of pixels classified as ridge.

    Args:
        traced: Output of the trace pipeline
        invert: The invert flag the raster was produced with

    Returns:
        Ridge pixel count divided by total pixel count, in [0, 1]
    """
    mask = ridge_mask(traced, invert)
    return float(np.count_nonzero(mask)) / mask.size
