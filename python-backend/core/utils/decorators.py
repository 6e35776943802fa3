"""
Utility decorators.
"""

import functools
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


def timer(func: Callable) -> Callable:
    """
    Log the wall-clock duration of a call in milliseconds.

    The duration is logged at DEBUG level on success and at WARNING level
    when the call raises; the exception is re-raised unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.warning(f"{func.__qualname__} failed after {elapsed_ms:.1f} ms")
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{func.__qualname__} took {elapsed_ms:.1f} ms")
        return result

    return wrapper
