r"""
Harness configuration and defaults.

Time budgets are expressed in milliseconds. Every case of a benchmark gets
the same budget; a benchmark may set its own with ``time_budget=``.

    from micro_bench.config import RunnerConfig

    config = RunnerConfig.from_env()
    print(f"Default budget: {config.time_budget_ms}ms")
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

__all__ = [
    "DEFAULT_TIME_BUDGET_MS",
    "ENV_PREFIX",
    "ESTIMATE_THRESHOLD_MS",
    "RunnerConfig",
    "get_env",
    "get_time_budget",
]

# Look for .env in current dir, then next to the package
_env_file = Path(".env")
if not _env_file.exists():
    _env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

ENV_PREFIX = "MICRO_BENCH_"

DEFAULT_TIME_BUDGET_MS = 1_000.0

# Print a duration estimate before benchmarks expected to run longer than this
ESTIMATE_THRESHOLD_MS = 10_000.0


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with MICRO_BENCH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "TIME_BUDGET").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def get_time_budget() -> float:
    """Get the default per-case time budget in milliseconds.

    Reads ``MICRO_BENCH_TIME_BUDGET`` and falls back to DEFAULT_TIME_BUDGET_MS.

    Raises:
        ValueError: If the variable is set but is not a positive number.
    """
    raw = get_env("TIME_BUDGET")
    if raw is None or raw.strip() == "":
        return DEFAULT_TIME_BUDGET_MS

    try:
        budget = float(raw)
    except ValueError:
        msg = f"Invalid {ENV_PREFIX}TIME_BUDGET '{raw}': expected milliseconds"
        raise ValueError(msg) from None

    if budget <= 0:
        msg = f"Invalid {ENV_PREFIX}TIME_BUDGET '{raw}': must be positive"
        raise ValueError(msg)
    return budget


@dataclass
class RunnerConfig:
    """Configuration for a benchmark run.

    Attributes:
        time_budget_ms: Budget for benchmarks that do not set their own.
        estimate_threshold_ms: Announce estimated duration above this total.
        verbose: Enable verbose output.
    """

    time_budget_ms: float = DEFAULT_TIME_BUDGET_MS
    estimate_threshold_ms: float = ESTIMATE_THRESHOLD_MS
    verbose: bool = False

    @classmethod
    def from_env(cls, *, verbose: bool = False) -> "RunnerConfig":
        """Build a config honouring MICRO_BENCH_* environment overrides."""
        return cls(time_budget_ms=get_time_budget(), verbose=verbose)
