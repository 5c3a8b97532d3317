from pathlib import Path

__all__ = (
    "BenchmarkLoadError",
    "MalformedBenchmarkError",
    "MicroBenchError",
    "PreconditionError",
    "RunnerNotActiveError",
)


class MicroBenchError(Exception):
    """Root of every error raised by micro-bench.

    Subclasses may define a class-level ``detail`` used as the message when
    the error is raised without one.
    """

    detail: str = ""

    def __init__(self, message: str = "") -> None:
        self.detail = message or self.detail
        super().__init__(self.detail)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.detail!r})"


class PreconditionError(MicroBenchError):
    """The process is not set up for stable measurements.

    Raised once at startup, before any benchmark file is loaded.
    """


class MalformedBenchmarkError(MicroBenchError, ValueError):
    """A benchmark description has no cases or an unusable parameter grid."""


class RunnerNotActiveError(MicroBenchError, RuntimeError):
    """A benchmark was registered while no runner was accepting registrations."""

    detail = (
        "No active benchmark runner. Benchmark files must be loaded by `micro-bench run` "
        "or inside `BenchmarkRunner.activate()` with a running event loop"
    )


class BenchmarkLoadError(MicroBenchError):
    """A benchmark file could not be imported."""

    def __init__(self, path: Path | str, reason: str = "") -> None:
        message = f"Failed to load benchmark file {str(path)!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = Path(path)
