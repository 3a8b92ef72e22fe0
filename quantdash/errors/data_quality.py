"""
Data quality error classifications for analytics inputs.

These exceptions categorize problems with series, uploaded files and
computation parameters that a session can recover from.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format or out of range."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Not enough points for a calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class IngestionError(DataQualityError):
    """Uploaded file could not be turned into rows."""

    def __init__(self, message: str, file_name: Optional[str] = None,
                 kind: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.file_name = file_name
        self.kind = kind
