import time


def get_current_time() -> float:
    """Wall-clock time in seconds with sub-microsecond resolution."""
    return time.perf_counter()
