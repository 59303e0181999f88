"""
Performance monitoring utilities.
"""

import time
from contextlib import contextmanager

from operation.monitoring.metrics import get_metrics_registry


@contextmanager
def performance_timer(name: str):
    """
    Record the duration of the enclosed block under ``name``, even if it raises.

    Usage:
        with performance_timer("inference.gpt2"):
            transport.generate(...)
    """
    timer = get_metrics_registry().timer(name)
    start = time.perf_counter()
    try:
        yield
    finally:
        timer.record(time.perf_counter() - start)
