r"""
micro-bench: micro-benchmark harness with adaptive repetition.

Benchmark files register cases; each case runs for a fixed time budget
and reports how many repetitions fit in it.

    from micro_bench import benchmark

    benchmark("join", {
        "plus": lambda: "a" + "b" + "c",
        "join": lambda: "".join(("a", "b", "c")),
    })

    $ taskset 01 micro-bench run "bench/**/*.py"
"""

from micro_bench.api import benchmark, benchmark_complex
from micro_bench.config import DEFAULT_TIME_BUDGET_MS, RunnerConfig
from micro_bench.types import Classification, MeasurementResult, Option, RunCounters

__all__ = [
    "Classification",
    "DEFAULT_TIME_BUDGET_MS",
    "MeasurementResult",
    "Option",
    "RunCounters",
    "RunnerConfig",
    "benchmark",
    "benchmark_complex",
]

__version__ = "0.1.0"
