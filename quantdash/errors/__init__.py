"""
Error classification for the analytics core.

Data quality errors are recoverable: the session surfaces them as a
notification and keeps running. System failures mark conditions the caller
cannot fix by supplying different input.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    InsufficientDataError,
    IngestionError,
)
from .system_failures import (
    SystemFailureError,
    MetricsCalculationError,
    ExportError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "InsufficientDataError",
    "IngestionError",
    # System Failures
    "SystemFailureError",
    "MetricsCalculationError",
    "ExportError",
]
