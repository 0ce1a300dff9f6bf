"""
Logging utilities for untrusted LLM text.

LLM output is often large and multi-line. These helpers render any value
attached to a log call as one bounded line, so a bad citation record or
a runaway phrase cannot flood or split the log.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s+")
_MAX_KEYS_SHOWN = 5


def _describe_mapping(value: Mapping) -> str:
    keys = [str(key) for key in list(value)[:_MAX_KEYS_SHOWN]]
    if len(value) > _MAX_KEYS_SHOWN:
        keys.append("...")
    return f"{type(value).__name__}({len(value)} keys: {', '.join(keys)})"


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Render a value as a single bounded log line.

    Strings have every whitespace run (newlines included) collapsed to a
    single space. Mappings show their size and first keys, which is
    enough to tell which citation spelling a record used. Sequences show
    only their size.

    Args:
        value: Value to render
        max_length: Characters kept before truncating

    Returns:
        str: One-line representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = _WHITESPACE_RUN.sub(" ", value).strip()
        elif isinstance(value, Mapping):
            text = _describe_mapping(value)
        elif isinstance(value, (list, tuple)):
            text = f"{type(value).__name__}({len(value)} items)"
        else:
            text = _WHITESPACE_RUN.sub(" ", str(value))

        if len(text) > max_length:
            return f"{text[:max_length]}... ({len(text)} chars)"
        return text
    except Exception as e:  # pylint: disable=broad-except
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message followed by its rendered context.

    The rendered values are appended to the message as key=value pairs,
    since the console formatter prints only the message, and are also
    attached to the record as attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.DEBUG, etc.)
        message: Log message in "function - text" form
        **context: Values to render with safe_log_value
    """
    if not logger.isEnabledFor(level):
        return
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    if not safe_context:
        logger.log(level, message)
        return
    rendered = " ".join(f"{key}={val}" for key, val in safe_context.items())
    logger.log(level, "%s | %s", message, rendered, extra=safe_context)
