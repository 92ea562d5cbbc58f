"""Decorator that logs a function's calls and results at DEBUG level."""

import logging
from functools import wraps

log = logging.getLogger(__name__)


def debug_log(prefix: str | None = None):
    """Log each call of the wrapped function with its args, then its return value."""

    def decorator(func):
        title = f"{prefix} - {func.__name__}" if prefix else func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            log.debug("%s invoked: args=%r kwargs=%r", title, args, kwargs)
            result = func(*args, **kwargs)
            log.debug("%s returned: %r", title, result)
            return result

        return wrapper

    return decorator
