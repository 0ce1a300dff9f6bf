"""
Observability module.

Provides logging configuration and safe structured-logging helpers.
"""

from citeparse.observability.logger import configure_logging, get_logger
from citeparse.observability.log_utils import log_with_context, safe_log_value

__all__ = ["configure_logging", "get_logger", "log_with_context", "safe_log_value"]
