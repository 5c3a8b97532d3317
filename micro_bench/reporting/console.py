r"""
Grouped console output for benchmark runs.

Rows are printed with the result right-aligned in a fixed-width column,
followed by the case labels:

         1234 small, dense
          987 small, sparse
"""

import traceback
from collections.abc import Mapping, Sequence
from typing import Any

import typer

from micro_bench.types import RunCounters

__all__ = ["RESULT_WIDTH", "ConsoleReporter", "format_error", "format_row"]

RESULT_WIDTH = 10


def format_row(keys: Sequence[str], record: Mapping[str, Any]) -> str:
    """Format ``record`` as a row, first key as the aligned column."""
    first = f"{record[keys[0]]} ".rjust(RESULT_WIDTH)
    others = ", ".join(str(record[key]) for key in keys[1:])
    return first + others


def format_error(error: BaseException) -> str:
    """Full traceback of ``error``, including chained causes."""
    return "".join(traceback.format_exception(error)).rstrip()


class ConsoleReporter:
    """Prints indented groups, result rows and the run summary."""

    def __init__(self, *, indent: str = "  ") -> None:
        self._indent = indent
        self._depth = 0

    @property
    def depth(self) -> int:
        """Current group nesting level."""
        return self._depth

    def _prefix(self, text: str) -> str:
        return "\n".join(self._indent * self._depth + part for part in text.split("\n"))

    def line(self, text: str = "") -> None:
        typer.echo(self._prefix(text) if text else "")

    def group(self, label: str) -> None:
        self.line(label)
        self._depth += 1

    def group_end(self) -> None:
        self._depth = max(0, self._depth - 1)

    def row(self, keys: Sequence[str], record: Mapping[str, Any]) -> None:
        self.line(format_row(keys, record))

    def error(self, error: BaseException) -> None:
        typer.secho(self._prefix(f"-> {format_error(error)}"), fg=typer.colors.RED, err=True)

    def summary(self, counters: RunCounters) -> None:
        self.line(f"files: {counters.files}")
        self.line(f"benchmarks: {counters.benchmarks}")
        self.line(f"failed: {counters.failed}")
