import logging
import time
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def timing_metric(name: str, slow_ms: float = 1000.0) -> Iterator[None]:
    """
    Log how long the wrapped block took.
    Blocks slower than `slow_ms` are logged at WARNING.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if duration_ms >= slow_ms else logging.INFO
        logger.log(level, "[METRIC] %s took %.1fms", name, duration_ms)
