"""
Ridge trace pipeline.

Composes the four stages in a fixed order:

    RGBA raster -> luminance -> smoothed -> gradient magnitude -> binary RGBA

Every call allocates its own intermediate planes and reads no shared
mutable state, so the result depends only on (raster, threshold, invert)
and calls may run concurrently from several threads.
"""

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from .binarization import binarize
from .filters import gradient_magnitude, smooth, to_luminance
from .raster import Raster, raster_from_array, validate_dimensions


@dataclass
class TraceStages:
    """
    Intermediate results of a single pipeline run.

    Attributes:
        luminance: float32 luminance plane
        smoothed: float32 smoothed plane (zero border)
        magnitude: float32 gradient magnitude plane (zero border)
        output: Final binary RGBA raster
    """
    luminance: np.ndarray
    smoothed: np.ndarray
    magnitude: np.ndarray
    output: Raster


def trace_stages(
    raster: Raster,
    threshold: float,
    invert: bool = False
) -> TraceStages:
    """
    Run the pipeline and keep every intermediate plane.

    Args:
        raster: Input RGBA raster
        threshold: Edge threshold (any real >= 0)
        invert: Whether to invert the output polarity

    Returns:
        TraceStages with all intermediate planes and the output raster

    Raises:
        InvalidDimensionsError: If the raster dimensions are invalid
        AllocationFailureError: If an intermediate plane cannot be allocated
    """
    validate_dimensions(raster.width, raster.height)

    luminance = to_luminance(raster)
    smoothed = smooth(luminance)
    magnitude = gradient_magnitude(smoothed)
    output = binarize(magnitude, threshold, invert)

    return TraceStages(
        luminance=luminance,
        smoothed=smoothed,
        magnitude=magnitude,
        output=output
    )


def trace(raster: Raster, threshold: float, invert: bool = False) -> Raster:
    """
    Trace ridges in an RGBA raster.

    Args:
        raster: Input RGBA raster (not modified)
        threshold: Edge threshold; magnitudes strictly above it are ridges
        invert: If True, ridges are white on black instead of black on white

    Returns:
        New RGBA raster of the same dimensions with channel values in
        {0, 255} and alpha 255

    Raises:
        InvalidDimensionsError: If the raster dimensions are invalid
        AllocationFailureError: If an intermediate plane cannot be allocated
    """
    return trace_stages(raster, threshold, invert).output


def trace_array(
    array: np.ndarray,
    threshold: float,
    invert: bool = False
) -> np.ndarray:
    """
    Trace ridges in a numpy image array.

    Args:
        array: (H, W), (H, W, 3) or (H, W, 4) image with values in [0, 255]
        threshold: Edge threshold
        invert: Whether to invert the output polarity

    Returns:
        uint8 RGBA array of shape (H, W, 4)
    """
    return trace(raster_from_array(array), threshold, invert).data


class RidgeTracer:
    """
    Configurable ridge tracer.

    Holds the processing parameters and provides a consistent interface
    for single and batch processing. No state is carried between calls.
    """

    def __init__(self, threshold: float = 30.0, invert: bool = False):
        """
        Initialize the tracer.

        Args:
            threshold: Edge threshold
            invert: Whether to invert the output polarity
        """
        self.threshold = threshold
        self.invert = invert

    def __call__(self, raster: Raster) -> Raster:
        return trace(raster, self.threshold, self.invert)

    def with_threshold(self, threshold: float) -> "RidgeTracer":
        """Return a new tracer with a different threshold."""
        return RidgeTracer(threshold=threshold, invert=self.invert)

    def process_batch(self, rasters: Iterable[Raster]) -> List[Raster]:
        """
        Trace a batch of rasters.

        Args:
            rasters: Input rasters

        Returns:
            Traced rasters in input order
        """
        return [self(raster) for raster in rasters]

    def __repr__(self) -> str:
        return f"RidgeTracer(threshold={self.threshold}, invert={self.invert})"
