"""
Utility functions and decorators.
"""

from .error_handlers import handle_aggregation_errors

__all__ = ["handle_aggregation_errors"]
