r"""
Benchmark runner: queue, drain loop and run-wide counters.

Benchmark files register jobs while they are imported. The first
registration arms a drain task on the running event loop; the task only
starts on the next loop iteration, so every job a file declares is queued
before any of them runs. Jobs then run strictly one at a time, in
registration order, each inside its own failure boundary.

    runner = BenchmarkRunner()
    with runner.activate():
        for path in discover_files(["bench/**/*.py"]):
            await runner.append_file(path)
        exit_code = await runner.finish()
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from micro_bench.api import active_runner
from micro_bench.config import RunnerConfig
from micro_bench.exceptions import MalformedBenchmarkError, RunnerNotActiveError
from micro_bench.loader import load_benchmark_file
from micro_bench.reporting.console import ConsoleReporter
from micro_bench.runner.grid import expand_grid
from micro_bench.runner.measure import CaseMeasurement, measure_case
from micro_bench.runner.timing import RepeatFunction, amrap
from micro_bench.types import (
    Case,
    ComplexBenchmark,
    GroupClose,
    GroupOpen,
    Job,
    MeasurementResult,
    QueueEntry,
    RunCounters,
    SimpleBenchmark,
)

__all__ = ["BenchmarkRunner", "run_files"]

logger = logging.getLogger(__name__)

SIMPLE_COLUMNS = ["result", "case"]


class BenchmarkRunner:
    """Owns the job queue and counters of one benchmark run."""

    def __init__(
        self,
        *,
        config: RunnerConfig | None = None,
        reporter: ConsoleReporter | None = None,
        repeat: RepeatFunction = amrap,
    ) -> None:
        self._config = config or RunnerConfig()
        self._reporter = reporter or ConsoleReporter()
        self._repeat = repeat

        self._queue: deque[QueueEntry] = deque()
        self._running = False
        self._discovery_done = False
        self._drain_task: asyncio.Task[None] | None = None
        self._finished = asyncio.Event()
        self._abort: Exception | None = None

        self.counters = RunCounters()
        self.results: list[MeasurementResult] = []

    @property
    def running(self) -> bool:
        """True while a drain task is scheduled or active."""
        return self._running

    @property
    def pending(self) -> int:
        """Number of queue entries not yet consumed."""
        return len(self._queue)

    @contextmanager
    def activate(self) -> Iterator[BenchmarkRunner]:
        """Route ``micro_bench.benchmark`` registrations to this runner."""
        token = active_runner.set(self)
        try:
            yield self
        finally:
            active_runner.reset(token)

    # Queue

    def enqueue_group_open(self, label: str) -> None:
        self._queue.append(GroupOpen(label))

    def enqueue_group_close(self) -> None:
        self._queue.append(GroupClose())

    def enqueue_job(self, job: Job) -> None:
        """Append a job and arm the drain task if it is idle."""
        if not self._running:
            self._arm()
        self._queue.append(job)
        logger.debug("Queued benchmark %r (%d pending)", job.name, len(self._queue))

    def _arm(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise RunnerNotActiveError from e

        self._running = True
        self._drain_task = loop.create_task(self._drain())
        logger.debug("Drain scheduled")

    # Registration

    def register_simple(
        self,
        name: str,
        cases: Mapping[str, Callable[..., Any]],
        *,
        pre: Callable[[], Any] | None = None,
        post: Callable[[Any], Any] | None = None,
        time_budget: float | None = None,
    ) -> None:
        """Register a benchmark of independent named cases."""
        description = SimpleBenchmark(cases=cases, pre=pre, post=post, time_budget=time_budget)
        self.enqueue_job(Job(name=name, description=description))

    def register_complex(
        self,
        name: str,
        parameters: Mapping[str, Any],
        callback: Callable[..., Any],
        *,
        pre: Callable[[dict[str, Any]], Any] | None = None,
        post: Callable[[Any], Any] | None = None,
        time_budget: float | None = None,
    ) -> None:
        """Register a benchmark swept over a parameter grid."""
        description = ComplexBenchmark(
            parameters=parameters,
            callback=callback,
            pre=pre,
            post=post,
            time_budget=time_budget,
        )
        self.enqueue_job(Job(name=name, description=description, complex=True))

    # Discovery

    async def append_file(self, path: Path | str) -> None:
        """Load a benchmark file, grouping its jobs under the file path."""
        self.counters.files += 1
        self.enqueue_group_open(str(path))
        with self.activate():
            load_benchmark_file(path)
        self.enqueue_group_close()

    async def finish(self) -> int:
        """Signal that discovery is complete and wait for the run to end.

        Returns:
            Exit status: 1 if any benchmark failed, 0 otherwise.

        Raises:
            Exception: Whatever aborted the drain outside a job, such as a
                reporter failure.
        """
        self._discovery_done = True
        if not self._running and self._abort is None:
            self._arm()
        await self._finished.wait()
        if self._abort is not None:
            raise self._abort
        return self.counters.exit_code

    # Drain

    async def _drain(self) -> None:
        try:
            await self._consume()
        except Exception as e:
            # Raised outside every job boundary; finish() re-raises it
            logger.exception("Drain aborted")
            self._running = False
            self._abort = e
            self._finished.set()

    async def _consume(self) -> None:
        while self._queue:
            entry = self._queue.popleft()

            if isinstance(entry, GroupOpen):
                self._reporter.group(entry.label)
                continue

            if isinstance(entry, GroupClose):
                self._reporter.group_end()
                self._reporter.line()
                continue

            await self._run_job(entry)

        self._running = False
        if self._discovery_done:
            self._reporter.summary(self.counters)
            logger.debug("Run finished with exit code %d", self.counters.exit_code)
            self._finished.set()

    async def _run_job(self, job: Job) -> None:
        self._reporter.group(job.name)
        self.counters.benchmarks += 1
        logger.debug("Running benchmark %r", job.name)

        try:
            if job.complex:
                await self._run_complex(job.name, job.description)
            else:
                await self._run_simple(job.name, job.description)
        except Exception as e:
            self._reporter.error(e)
            logger.warning("Benchmark %r failed: %s", job.name, e)
            self.counters.failed += 1

        self._reporter.group_end()

    def _budget(self, time_budget: float | None) -> float:
        return self._config.time_budget_ms if time_budget is None else time_budget

    def _announce_estimate(self, budget_ms: float, num_cases: int) -> None:
        total_ms = budget_ms * num_cases
        if total_ms > self._config.estimate_threshold_ms:
            self._reporter.line(f"Estimate: {int(total_ms // 1000)} seconds for {num_cases} cases")

    def _emit(self, benchmark: str, keys: list[str], labels: dict[str, Any], outcome: CaseMeasurement) -> None:
        self._reporter.row(keys, {**labels, "result": outcome.throughput})
        self.results.append(
            MeasurementResult(
                benchmark=benchmark,
                labels=labels,
                classification=outcome.classification,
                throughput=outcome.throughput,
            )
        )

    async def _run_simple(self, name: str, description: SimpleBenchmark) -> None:
        cases = [Case(name=case_name, callback=callback) for case_name, callback in description.cases.items()]
        if not cases:
            msg = f"Benchmark '{name}' declares no cases"
            raise MalformedBenchmarkError(msg)

        budget_ms = self._budget(description.time_budget)
        self._announce_estimate(budget_ms, len(cases))

        for case in cases:
            outcome = await measure_case(
                case.callback,
                pre=description.pre,
                post=description.post,
                budget_ms=budget_ms,
                repeat=self._repeat,
            )
            self._emit(name, SIMPLE_COLUMNS, {"case": case.name}, outcome)

    async def _run_complex(self, name: str, description: ComplexBenchmark) -> None:
        grid = expand_grid(description.parameters)
        budget_ms = self._budget(description.time_budget)
        self._announce_estimate(budget_ms, len(grid))

        keys = ["result", *grid.keys]
        multi = len(grid.dimensions) > 1
        if multi:
            self._reporter.row(keys, {"result": "", **grid.display_names})

        for case in grid:
            outcome = await measure_case(
                description.callback,
                args=(case.data,),
                pre=description.pre,
                pre_args=(case.data,),
                post=description.post,
                budget_ms=budget_ms,
                repeat=self._repeat,
            )
            self._emit(name, keys, case.labels, outcome)

            if multi and grid.ends_sweep(case):
                self._reporter.line()


async def run_files(
    files: Iterable[Path | str],
    *,
    config: RunnerConfig | None = None,
    reporter: ConsoleReporter | None = None,
    repeat: RepeatFunction = amrap,
) -> BenchmarkRunner:
    """Load every file into a fresh runner and wait for the run to finish.

    Returns:
        The finished runner; ``runner.counters.exit_code`` is the run status.
    """
    runner = BenchmarkRunner(config=config, reporter=reporter, repeat=repeat)
    with runner.activate():
        for path in files:
            await runner.append_file(path)
        await runner.finish()
    return runner
