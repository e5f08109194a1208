"""
Parse tracing.

Methods wrapped with ``traced`` log ``BEGIN <name>`` / ``END <name>`` on the
``monkey.parser.trace`` logger, indented by nesting depth. Nothing is
formatted unless that logger is enabled for DEBUG.
"""

import functools
import logging
import sys
from typing import Callable, Optional, TextIO, TypeVar

TRACE_LOGGER_NAME = "monkey.parser.trace"
TRACE_INDENT = "\t"

logger = logging.getLogger(TRACE_LOGGER_NAME)

F = TypeVar("F", bound=Callable)


def traced(method: F) -> F:
    """Trace entry and exit of a parser method.

    The instance must carry an integer ``_trace_depth`` attribute.
    """
    name = method.__name__.lstrip("_")

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if not logger.isEnabledFor(logging.DEBUG):
            return method(self, *args, **kwargs)

        indent = TRACE_INDENT * self._trace_depth
        logger.debug("%sBEGIN %s", indent, name)
        self._trace_depth += 1
        try:
            return method(self, *args, **kwargs)
        finally:
            self._trace_depth -= 1
            logger.debug("%sEND %s", indent, name)

    return wrapper  # type: ignore[return-value]


def enable_tracing(stream: Optional[TextIO] = None) -> logging.Handler:
    """Send parse traces to ``stream`` (stderr by default).

    Returns the installed handler so callers can remove it again with
    ``disable_tracing``.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def disable_tracing(handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    if not logger.handlers:
        logger.setLevel(logging.NOTSET)
