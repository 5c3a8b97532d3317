r"""
Per-case measurement and throughput normalization.

The repetition primitive always overshoots its target a little, by a
different amount every time. Throughput is scaled back to the budget so
cases are comparable:

    throughput = floor(reps * budget / elapsed)

    from micro_bench.runner.measure import normalize

    normalize(reps=500, budget_ms=1000, elapsed_ms=1250)  # 400
"""

import inspect
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from micro_bench.runner.classifier import SENTINEL_THROUGHPUT, probe
from micro_bench.runner.timing import RepeatFunction
from micro_bench.types import Classification, RepetitionResult

__all__ = ["CaseMeasurement", "make_batch", "measure_case", "normalize"]


@dataclass(frozen=True, slots=True)
class CaseMeasurement:
    """Outcome of one case.

    Attributes:
        classification: Warmup classification.
        throughput: Normalized throughput, or the sentinel when not measured.
        repetition: Raw primitive result (None when not measured).
    """

    classification: Classification
    throughput: int
    repetition: RepetitionResult | None = None


def normalize(reps: int, budget_ms: float, elapsed_ms: float) -> int:
    """Scale a repetition count to what fits in exactly ``budget_ms``.

    Raises:
        ValueError: If elapsed_ms is not positive.
    """
    if elapsed_ms <= 0:
        msg = f"Elapsed time must be positive, got {elapsed_ms}"
        raise ValueError(msg)
    return math.floor(reps * budget_ms / elapsed_ms)


def make_batch(callback: Callable[..., Any], args: tuple[Any, ...]) -> Callable[[int], Any]:
    """Wrap ``callback(*args)`` into a batch running it ``n`` times.

    The batch stays synchronous until a call returns an awaitable; from then
    on it returns a coroutine that awaits every result, including that one.
    """

    async def finish(pending: Awaitable[Any], remaining: int) -> None:
        await pending
        for _ in range(remaining):
            result = callback(*args)
            if inspect.isawaitable(result):
                await result

    def run(n: int) -> Any:
        for i in range(n):
            result = callback(*args)
            if inspect.isawaitable(result):
                return finish(result, n - i - 1)
        return None

    return run


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def measure_case(
    callback: Callable[..., Any],
    *,
    args: tuple[Any, ...] = (),
    pre: Callable[..., Any] | None = None,
    pre_args: tuple[Any, ...] = (),
    post: Callable[[Any], Any] | None = None,
    budget_ms: float,
    repeat: RepeatFunction,
) -> CaseMeasurement:
    """Run the full lifecycle of one case.

    ``pre(*pre_args)`` produces the case state. The callback is called as
    ``callback(*args, state)`` when ``pre`` is given and as ``callback(*args)``
    otherwise. ``post(state)`` runs exactly once after the case whatever
    happened, as long as ``pre`` succeeded.
    """
    if pre:
        state = await _resolve(pre(*pre_args))
        call_args = (*args, state)
    else:
        state = None
        call_args = args

    try:
        classification = await probe(callback, *call_args, budget_ms=budget_ms)
        if classification != Classification.MEASURED:
            return CaseMeasurement(classification, SENTINEL_THROUGHPUT[classification])

        repetition = await repeat(make_batch(callback, call_args), budget_ms)
    finally:
        if post:
            await _resolve(post(state))

    throughput = normalize(repetition.reps, budget_ms, repetition.elapsed_ms)
    return CaseMeasurement(classification, throughput, repetition)
