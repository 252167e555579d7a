# sandbox/measure.py
import gc
import time
from typing import Any, Callable, List, Optional

from ..agents.analyst import InvalidInput
from ..utils.config import get_settings
from ..utils.logger import get_logger

log = get_logger("Sandbox")

DEFAULT_FACTOR = 10


class OperationCounter:
    """Explicit operation counter handed to an instrumented algorithm."""

    def __init__(self):
        self.count = 0

    def tick(self, k: int = 1) -> None:
        self.count += k

    def __repr__(self) -> str:
        return f"OperationCounter(count={self.count})"


def _identity(n: int) -> int:
    return n


def timed(
    algorithm: Callable[[Any], Any],
    make_input: Optional[Callable[[int], Any]] = None,
    repeats: Optional[int] = None,
    timer: Callable[[], float] = time.perf_counter,
) -> Callable[[int], float]:
    """
    Wrap ``algorithm`` into a work callable that returns wall-clock cost in ms.

    A fresh input is built for every repeat outside the timed region, so
    in-place algorithms (sorts, shuffles) never see pre-processed data.
    The fastest of ``repeats`` runs is reported.
    """
    make_input = make_input or _identity
    if repeats is None:
        repeats = get_settings().timing_repeats
    if repeats < 1:
        raise InvalidInput("invalid_range", f"repeats must be at least 1, got {repeats}")

    def work(n: int) -> float:
        best = float("inf")
        for _ in range(repeats):
            data = make_input(n)
            gc_was_enabled = gc.isenabled()
            gc.disable()
            try:
                start = timer()
                algorithm(data)
                elapsed = timer() - start
            finally:
                if gc_was_enabled:
                    gc.enable()
            best = min(best, elapsed)
        runtime_ms = max(best, 0.0) * 1000.0
        log.debug(f"timed {getattr(algorithm, '__name__', algorithm)} n={n}: {runtime_ms:.4f}ms")
        return runtime_ms

    work.__qualname__ = f"timed({getattr(algorithm, '__qualname__', repr(algorithm))})"
    return work


def counted(
    algorithm: Callable[[Any, OperationCounter], Any],
    make_input: Optional[Callable[[int], Any]] = None,
) -> Callable[[int], float]:
    """
    Wrap ``algorithm(data, counter)`` into a work callable whose cost is the
    number of operations it reported through ``counter.tick()``.
    """
    make_input = make_input or _identity

    def work(n: int) -> float:
        counter = OperationCounter()
        algorithm(make_input(n), counter)
        log.debug(f"counted {getattr(algorithm, '__name__', algorithm)} n={n}: {counter.count} ops")
        return float(counter.count)

    work.__qualname__ = f"counted({getattr(algorithm, '__qualname__', repr(algorithm))})"
    return work


def geometric_sizes(start: int, stop: int, factor: int = DEFAULT_FACTOR) -> List[int]:
    """Sizes start, start*factor, start*factor**2, ... not exceeding stop."""
    if start < 1 or factor < 2 or stop < start:
        raise InvalidInput(
            "invalid_range",
            f"Need start >= 1, factor >= 2 and stop >= start (got {start}, {stop}, {factor})",
        )
    sizes = []
    n = start
    while n <= stop:
        sizes.append(n)
        n *= factor
    return sizes
