r"""
Command-line interface for micro-bench.

    micro-bench run "bench/**/*.py"
    micro-bench check
"""

from micro_bench.cli.main import app, main

__all__ = [
    "app",
    "main",
]
