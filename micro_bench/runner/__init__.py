r"""
Benchmark runner and orchestration.

Coordinates the job queue, parameter grids, warmup classification
and throughput normalization.

    from micro_bench.runner import BenchmarkRunner

    runner = BenchmarkRunner()
    with runner.activate():
        await runner.append_file("bench/sort.py")
        exit_code = await runner.finish()
"""

from micro_bench.runner.classifier import classify
from micro_bench.runner.grid import Grid, expand_grid
from micro_bench.runner.measure import measure_case, normalize
from micro_bench.runner.scheduler import BenchmarkRunner, run_files
from micro_bench.runner.timing import Timer, amrap

__all__ = [
    "BenchmarkRunner",
    "Grid",
    "Timer",
    "amrap",
    "classify",
    "expand_grid",
    "measure_case",
    "normalize",
    "run_files",
]
