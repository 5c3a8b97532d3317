r"""
Console reporting for benchmark runs.

    from micro_bench.reporting import ConsoleReporter

    reporter = ConsoleReporter()
    reporter.group("bench/sort.py")
    reporter.row(["result", "case"], {"result": 1234, "case": "sorted"})
"""

from micro_bench.reporting.console import ConsoleReporter, format_error, format_row

__all__ = [
    "ConsoleReporter",
    "format_error",
    "format_row",
]
