r"""
Timing utilities for benchmarks.

``amrap`` ("as many reps as possible") is the adaptive repetition primitive:
it keeps running batches of a repeatable operation until the target duration
is used up, and reports how long it really took and how many repetitions fit.

    from micro_bench.runner.timing import Timer, amrap

    result = await amrap(lambda n: [f() for _ in range(n)], 1000)
    print(f"{result.reps} reps in {result.elapsed_ms}ms")
"""

import asyncio
import inspect
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from micro_bench.types import RepetitionResult

__all__ = ["RepeatFunction", "Timer", "TimerResult", "amrap", "measure_call"]

RepeatFunction = Callable[[Callable[[int], Any], float], Awaitable[RepetitionResult]]

# Upper bound on how fast a batch may grow from one round to the next
MAX_GROWTH = 16


@dataclass
class TimerResult:
    """Duration and return value of one timed call.

    Attributes:
        elapsed_ns: Wall time of the call in nanoseconds.
        result: What the call returned, awaited if it was awaitable.
    """

    elapsed_ns: int
    result: Any = None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000


class Timer:
    """Measures the wall time of a ``with`` block using ``perf_counter_ns``.

        with Timer() as timer:
            batch(size)
        elapsed_ns += timer.elapsed_ns
    """

    def __init__(self) -> None:
        self._start = 0
        self._end = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, *exc: object) -> None:
        self._end = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        return self._end - self._start


async def measure_call(func: Callable[..., Any], *args: Any) -> TimerResult:
    """Measure a single call, awaiting its result if it is awaitable.

    Args:
        func: Function or coroutine function to call.
        *args: Positional arguments.

    Returns:
        TimerResult with elapsed time and the (awaited) return value.
    """
    start = time.perf_counter_ns()
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    end = time.perf_counter_ns()
    return TimerResult(elapsed_ns=end - start, result=result)


def _next_batch_size(batch: int, reps: int, elapsed_ns: int, remaining_ns: float) -> int:
    if elapsed_ns <= 0:
        return batch * 2
    per_rep_ns = elapsed_ns / reps
    estimate = int(remaining_ns / per_rep_ns) + 1
    return max(1, min(estimate, batch * MAX_GROWTH))


async def amrap(batch: Callable[[int], Any], target_ms: float) -> RepetitionResult:
    """Run ``batch(n)`` with growing ``n`` until ``target_ms`` has elapsed.

    Only time spent inside ``batch`` counts. The event loop gets control
    between batches. The returned elapsed time is never below the target.

    Args:
        batch: Runs the operation ``n`` times. May return an awaitable.
        target_ms: Target duration in milliseconds.

    Returns:
        RepetitionResult with actual elapsed milliseconds and repetitions.

    Raises:
        ValueError: If target_ms is not positive.
    """
    if target_ms <= 0:
        msg = f"Target duration must be positive, got {target_ms}"
        raise ValueError(msg)

    target_ns = target_ms * 1_000_000
    elapsed_ns = 0
    reps = 0
    size = 1

    while True:
        with Timer() as timer:
            pending = batch(size)
            if inspect.isawaitable(pending):
                await pending
        elapsed_ns += timer.elapsed_ns
        reps += size

        remaining_ns = target_ns - elapsed_ns
        if remaining_ns <= 0:
            break

        size = _next_batch_size(size, reps, elapsed_ns, remaining_ns)
        await asyncio.sleep(0)

    return RepetitionResult(elapsed_ms=elapsed_ns / 1_000_000, reps=reps)
