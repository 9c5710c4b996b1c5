"""
Ridge trace framework.

Turns fingerprint photographs and scans into binary ridge traces.
"""

from ridgetrace.tracing import (
    Raster,
    TraceError,
    InvalidDimensionsError,
    AllocationFailureError,
    InvalidPixelValuesError,
    RidgeTracer,
    trace
)

__version__ = "0.1.0"

__all__ = [
    'Raster',
    'TraceError',
    'InvalidDimensionsError',
    'AllocationFailureError',
    'InvalidPixelValuesError',
    'RidgeTracer',
    'trace',
]
