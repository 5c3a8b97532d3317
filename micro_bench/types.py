r"""
Core types for the micro-benchmark harness.

    from micro_bench.types import Classification, MeasurementResult

    for row in runner.results:
        if row.classification == Classification.MEASURED:
            print(f"{row.benchmark}: {row.throughput}")
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Any

__all__ = [
    "Case",
    "Classification",
    "ComplexBenchmark",
    "Dimension",
    "GridCase",
    "GroupClose",
    "GroupOpen",
    "Job",
    "MeasurementResult",
    "Option",
    "QueueEntry",
    "RepetitionResult",
    "RunCounters",
    "SimpleBenchmark",
]


class Classification(IntEnum):
    """Outcome of the warmup probe for a single case."""

    MEASURED = auto()
    MARGINAL = auto()
    SKIPPED = auto()


@dataclass(frozen=True, slots=True)
class Option:
    """One admissible value along a parameter dimension.

    Attributes:
        label: Text shown in result rows and passed to filters.
        value: Value handed to the benchmark callback.
        filter: Predicate over the label map of a candidate combination.
    """

    label: Any
    value: Any
    filter: Callable[[dict[str, Any]], bool] | None = None


@dataclass(frozen=True, slots=True)
class Dimension:
    """One axis of a complex benchmark's parameter grid."""

    key: str
    display_name: str
    options: tuple[Option, ...]


@dataclass(frozen=True, slots=True)
class Case:
    """A named callback of a simple benchmark."""

    name: str
    callback: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class GridCase:
    """One resolved combination of a parameter grid.

    Attributes:
        labels: Dimension key to option label.
        data: Dimension key to option value.
    """

    labels: dict[str, Any]
    data: dict[str, Any]


@dataclass(frozen=True, slots=True)
class SimpleBenchmark:
    """Description of a benchmark made of independent named cases.

    Attributes:
        cases: Case name to callback, called as ``callback(state)`` with ``pre``
            and as ``callback()`` without.
        pre: Called before each case, returns the per-case state.
        post: Called with the per-case state after each case.
        time_budget: Target milliseconds per case (None = runner default).
    """

    cases: Mapping[str, Callable[..., Any]]
    pre: Callable[[], Any] | None = None
    post: Callable[[Any], Any] | None = None
    time_budget: float | None = None


@dataclass(frozen=True, slots=True)
class ComplexBenchmark:
    """Description of a benchmark swept over a parameter grid.

    Attributes:
        parameters: Dimension key to ``{"name", "options" | "values"}`` or a Dimension.
        callback: Called as ``callback(data, pre_data)`` with ``pre``, else ``callback(data)``.
        pre: Called as ``pre(data)`` before each combination.
        post: Called as ``post(pre_data)`` after each combination.
        time_budget: Target milliseconds per combination (None = runner default).
    """

    parameters: Mapping[str, Any]
    callback: Callable[..., Any]
    pre: Callable[[dict[str, Any]], Any] | None = None
    post: Callable[[Any], Any] | None = None
    time_budget: float | None = None


@dataclass(frozen=True, slots=True)
class Job:
    """A registered benchmark waiting in the runner queue."""

    name: str
    description: SimpleBenchmark | ComplexBenchmark
    complex: bool = False


@dataclass(frozen=True, slots=True)
class GroupOpen:
    """Queue marker opening an output group, one per loaded file."""

    label: str


@dataclass(frozen=True, slots=True)
class GroupClose:
    """Queue marker closing the innermost output group."""


QueueEntry = GroupOpen | GroupClose | Job


@dataclass(frozen=True, slots=True)
class RepetitionResult:
    """Result of the adaptive repetition primitive.

    Attributes:
        elapsed_ms: Time actually spent running batches, in milliseconds.
        reps: Number of completed repetitions.
    """

    elapsed_ms: float
    reps: int


@dataclass(frozen=True, slots=True)
class MeasurementResult:
    """One emitted result row.

    Attributes:
        benchmark: Name of the job the row belongs to.
        labels: Case name (simple) or dimension labels (complex).
        classification: Warmup classification of the case.
        throughput: Normalized repetitions per budget, 0 or 1 when not measured.
    """

    benchmark: str
    labels: dict[str, Any]
    classification: Classification
    throughput: int

    @property
    def measured(self) -> bool:
        """True if the case went through full measurement."""
        return self.classification == Classification.MEASURED


@dataclass(slots=True)
class RunCounters:
    """Run-wide counters printed in the final summary."""

    files: int = 0
    benchmarks: int = 0
    failed: int = 0

    @property
    def exit_code(self) -> int:
        """Process exit status for the run."""
        return 1 if self.failed > 0 else 0
