"""
Data records for the ridge trace framework.
"""

from .records import (
    ScanRecord,
    ScanHistory
)

__all__ = [
    'ScanRecord',
    'ScanHistory',
]
