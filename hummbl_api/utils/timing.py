# =============================================
# File: hummbl_api/utils/timing.py
# Purpose: Stopwatch context manager for engine and handler timings
# =============================================
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from loguru import logger


@contextmanager
def timer(label: Optional[str] = None) -> Iterator[Callable[[], int]]:
    """
    Yield a callable returning whole milliseconds since entry.

    With a label, the total is also written to the debug log on exit.
    """
    t0 = time.perf_counter()

    def elapsed() -> int:
        return int((time.perf_counter() - t0) * 1000)

    try:
        yield elapsed
    finally:
        if label:
            logger.debug(f"[timing] {label} took {elapsed()} ms")
