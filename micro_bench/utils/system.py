"""Process setup checks for stable measurements.

Timings are only trustworthy when the process is pinned to one CPU and the
garbage collector is under the harness's control. Both are checked once at
startup, before any benchmark file is loaded.
"""

from __future__ import annotations

import gc

import psutil

from micro_bench.exceptions import PreconditionError

__all__ = [
    "check_collection_control",
    "check_preconditions",
    "check_single_cpu",
    "get_cpu_affinity",
    "pin_to_cpu",
]


def get_cpu_affinity() -> list[int] | None:
    """CPUs the current process may run on, or None where unsupported."""
    process = psutil.Process()
    if not hasattr(process, "cpu_affinity"):
        return None
    return process.cpu_affinity()


def pin_to_cpu(cpu: int) -> None:
    """Restrict the current process to a single CPU.

    Raises:
        PreconditionError: If affinity cannot be set on this platform or CPU.
    """
    process = psutil.Process()
    if not hasattr(process, "cpu_affinity"):
        raise PreconditionError("CPU affinity is not supported on this platform")

    try:
        process.cpu_affinity([cpu])
    except (ValueError, psutil.Error) as e:
        raise PreconditionError(f"Cannot pin process to CPU {cpu}: {e}") from e


def check_collection_control() -> None:
    """Require the automatic garbage collector to be enabled.

    The harness forces a collection before each case; with automatic
    collection disabled, garbage accumulates inside the timed sections
    instead.
    """
    if not gc.isenabled():
        raise PreconditionError(
            "micro-bench requires automatic garbage collection; remove gc.disable() from the startup path"
        )


def check_single_cpu() -> None:
    """Require the process to be pinned to exactly one CPU."""
    affinity = get_cpu_affinity()
    if affinity is None:
        raise PreconditionError("CPU affinity cannot be inspected on this platform; use --skip-checks")
    if len(affinity) != 1:
        cpus = ",".join(str(c) for c in affinity)
        raise PreconditionError(
            f"micro-bench must run pinned to a single CPU (allowed: {cpus}); "
            "launch with `taskset 01 micro-bench run ...` or pass --pin-cpu"
        )


def check_preconditions() -> None:
    """Run all startup checks.

    Raises:
        PreconditionError: On the first failed check.
    """
    check_collection_control()
    check_single_cpu()
