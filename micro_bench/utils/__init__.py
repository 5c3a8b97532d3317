"""Utility modules for micro-bench."""

from micro_bench.utils.logs import setup_logging
from micro_bench.utils.system import (
    check_collection_control,
    check_preconditions,
    check_single_cpu,
    get_cpu_affinity,
    pin_to_cpu,
)

__all__ = [
    "check_collection_control",
    "check_preconditions",
    "check_single_cpu",
    "get_cpu_affinity",
    "pin_to_cpu",
    "setup_logging",
]
