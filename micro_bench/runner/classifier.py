r"""
Warmup classification of benchmark cases.

Every case runs once, timed, right before its measurement. A case whose
single run already uses more than the whole budget is skipped (reported as
0); one that uses more than half of it is marginal (reported as 1, too slow
to repeat meaningfully). Everything else is measured.

    from micro_bench.runner.classifier import classify

    classify(warmup_ms=600, budget_ms=1000)  # Classification.MARGINAL
"""

import gc
from collections.abc import Callable
from typing import Any

from micro_bench.runner.timing import measure_call
from micro_bench.types import Classification

__all__ = ["SENTINEL_THROUGHPUT", "classify", "probe"]

# Throughput reported for cases that are not measured
SENTINEL_THROUGHPUT: dict[Classification, int] = {
    Classification.SKIPPED: 0,
    Classification.MARGINAL: 1,
}


def classify(warmup_ms: float, budget_ms: float) -> Classification:
    """Classify a case from the duration of its single warmup run."""
    if warmup_ms > budget_ms:
        return Classification.SKIPPED
    if warmup_ms * 2 > budget_ms:
        return Classification.MARGINAL
    return Classification.MEASURED


async def probe(callback: Callable[..., Any], *args: Any, budget_ms: float) -> Classification:
    """Collect garbage, run ``callback(*args)`` once and classify it.

    Exceptions raised by the callback propagate.
    """
    gc.collect()
    warmup = await measure_call(callback, *args)
    return classify(warmup.elapsed_ms, budget_ms)
