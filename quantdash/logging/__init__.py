"""
Logging configuration and utilities for the analytics core.
"""
from .config import configure_logging, get_logger, get_session_logger, log_notification

__all__ = ["configure_logging", "get_logger", "get_session_logger", "log_notification"]
