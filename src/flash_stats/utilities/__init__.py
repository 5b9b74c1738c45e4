"""
Simplified Utilities.
"""

from .logging_patterns import get_logger, log_operation

__all__ = ["get_logger", "log_operation"]
