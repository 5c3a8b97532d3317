r"""
Registration functions called from benchmark files.

Registrations go to the runner that is loading the file, found through a
context variable set by ``BenchmarkRunner.activate()``.

    from micro_bench import benchmark, benchmark_complex

    benchmark("sum", {
        "builtin": lambda: sum(range(100)),
        "loop": lambda: [i for i in range(100)],
    }, time_budget=500)

    benchmark_complex(
        "sort",
        {"n": {"name": "N", "values": [10, 1000]}},
        lambda data, items: sorted(items),
        pre=lambda data: list(range(data["n"], 0, -1)),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from micro_bench.exceptions import RunnerNotActiveError

if TYPE_CHECKING:
    from micro_bench.runner.scheduler import BenchmarkRunner

__all__ = ["active_runner", "benchmark", "benchmark_complex", "get_active_runner"]

active_runner: ContextVar[BenchmarkRunner | None] = ContextVar("active_runner", default=None)


def get_active_runner() -> BenchmarkRunner:
    """Get the runner accepting registrations in the current context.

    Raises:
        RunnerNotActiveError: If no runner is active.
    """
    runner = active_runner.get()
    if runner is None:
        raise RunnerNotActiveError
    return runner


def benchmark(
    name: str,
    cases: Mapping[str, Callable[..., Any]],
    *,
    pre: Callable[[], Any] | None = None,
    post: Callable[[Any], Any] | None = None,
    time_budget: float | None = None,
) -> None:
    """Register a benchmark made of independent named cases.

    Args:
        name: Benchmark name, used as the output group label.
        cases: Case name to callback. Callbacks take the ``pre`` state as their
            only argument when ``pre`` is given and no arguments otherwise.
        pre: Called before each case, returns the per-case state.
        post: Called with the per-case state after each case.
        time_budget: Target milliseconds per case.
    """
    get_active_runner().register_simple(name, cases, pre=pre, post=post, time_budget=time_budget)


def benchmark_complex(
    name: str,
    parameters: Mapping[str, Any],
    callback: Callable[..., Any],
    *,
    pre: Callable[[dict[str, Any]], Any] | None = None,
    post: Callable[[Any], Any] | None = None,
    time_budget: float | None = None,
) -> None:
    """Register a benchmark swept over a parameter grid.

    Args:
        name: Benchmark name, used as the output group label.
        parameters: Dimension key to ``{"name": ..., "values": [...]}`` or
            ``{"name": ..., "options": [{"name", "value", "filter"}, ...]}``.
        callback: Called as ``callback(data, pre_data)`` for each combination,
            or ``callback(data)`` when there is no ``pre``.
        pre: Called as ``pre(data)`` before each combination.
        post: Called as ``post(pre_data)`` after each combination.
        time_budget: Target milliseconds per combination.
    """
    get_active_runner().register_complex(
        name,
        parameters,
        callback,
        pre=pre,
        post=post,
        time_budget=time_budget,
    )
