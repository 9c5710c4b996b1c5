"""
Ridge trace pipeline.

This package turns an RGBA raster into a binary ridge trace:
- Luminance conversion
- 3x3 smoothing
- Sobel gradient magnitude
- Threshold binarization with optional inversion
"""

from .raster import (
    Raster,
    TraceError,
    InvalidDimensionsError,
    AllocationFailureError,
    InvalidPixelValuesError,
    validate_dimensions,
    raster_from_buffer,
    raster_from_array,
    allocate_plane,
    to_pixel_bytes
)
from .kernels import (
    SMOOTHING_KERNEL,
    SOBEL_X,
    SOBEL_Y,
    kernel_taps
)
from .filters import (
    to_luminance,
    smooth,
    compute_gradients,
    gradient_magnitude
)
from .binarization import (
    binarize,
    background_value,
    ridge_value,
    ridge_mask,
    ridge_coverage
)
from .pipeline import (
    TraceStages,
    trace,
    trace_stages,
    trace_array,
    RidgeTracer
)

__all__ = [
    # Raster
    'Raster',
    'TraceError',
    'InvalidDimensionsError',
    'AllocationFailureError',
    'InvalidPixelValuesError',
    'validate_dimensions',
    'raster_from_buffer',
    'raster_from_array',
    'allocate_plane',
    'to_pixel_bytes',
    # Kernels
    'SMOOTHING_KERNEL',
    'SOBEL_X',
    'SOBEL_Y',
    'kernel_taps',
    # Filters
    'to_luminance',
    'smooth',
    'compute_gradients',
    'gradient_magnitude',
    # Binarization
    'binarize',
    'background_value',
    'ridge_value',
    'ridge_mask',
    'ridge_coverage',
    # Pipeline
    'TraceStages',
    'trace',
    'trace_stages',
    'trace_array',
    'RidgeTracer',
]
