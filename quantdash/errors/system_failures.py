"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that a different input would not fix.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class MetricsCalculationError(SystemFailureError):
    """Critical error in an indicator or metric calculation."""

    def __init__(self, message: str, metric_name: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name
        self.calculation_input = calculation_input


class ExportError(SystemFailureError):
    """Report serialization or file system failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
