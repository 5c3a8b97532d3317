r"""
Shared pytest fixtures for micro-bench tests.
"""

import inspect
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from micro_bench.config import RunnerConfig
from micro_bench.types import RepetitionResult


class FakeRepeat:
    """Stand-in for the repetition primitive with a fixed outcome.

    Runs each batch once with ``batch_size`` so callbacks are exercised,
    then reports ``reps`` repetitions in ``elapsed_ms`` (the target when None).
    """

    def __init__(self, *, reps: int = 100, elapsed_ms: float | None = None, batch_size: int = 1) -> None:
        self.reps = reps
        self.elapsed_ms = elapsed_ms
        self.batch_size = batch_size
        self.targets: list[float] = []

    async def __call__(self, batch, target_ms: float) -> RepetitionResult:
        self.targets.append(target_ms)
        pending = batch(self.batch_size)
        if inspect.isawaitable(pending):
            await pending
        elapsed = target_ms if self.elapsed_ms is None else self.elapsed_ms
        return RepetitionResult(elapsed_ms=elapsed, reps=self.reps)


@pytest.fixture
def fake_repeat() -> FakeRepeat:
    """Repetition primitive reporting 100 reps in exactly the budget."""
    return FakeRepeat()


@pytest.fixture
def make_repeat() -> Callable[..., FakeRepeat]:
    """Factory for repetition primitives with a chosen outcome."""
    return FakeRepeat


@pytest.fixture
def fast_config() -> RunnerConfig:
    """Short budget so real measurements finish quickly."""
    return RunnerConfig(time_budget_ms=20)


@pytest.fixture
def write_bench(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a benchmark file into tmp_path and return its path."""

    def write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return write
