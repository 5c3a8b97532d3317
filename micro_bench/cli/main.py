r"""
Command-line interface for micro-bench.

    taskset 01 micro-bench run "bench/**/*.py"
    micro-bench run bench/sort.py --pin-cpu 2 --time-budget 250
    micro-bench check
"""

import asyncio
import logging
from typing import Annotated

import typer

from micro_bench.config import RunnerConfig
from micro_bench.exceptions import BenchmarkLoadError, PreconditionError
from micro_bench.loader import discover_files
from micro_bench.runner import run_files
from micro_bench.utils import check_preconditions, get_cpu_affinity, pin_to_cpu, setup_logging

__all__ = ["app", "main"]

# Exit status for problems detected before any benchmark runs
SETUP_ERROR = 2

app = typer.Typer(
    name="micro-bench",
    help="Micro-benchmark harness with adaptive repetition.",
    no_args_is_help=True,
)


@app.command()
def run(
    patterns: Annotated[list[str], typer.Argument(help="Benchmark files or glob patterns")],
    pin_cpu: Annotated[
        int | None, typer.Option("--pin-cpu", help="Pin the process to this CPU before checking")
    ] = None,
    skip_checks: Annotated[
        bool, typer.Option("--skip-checks", help="Do not verify CPU pinning and GC control")
    ] = False,
    time_budget: Annotated[
        float | None, typer.Option("-t", "--time-budget", help="Default milliseconds per case")
    ] = None,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Run benchmark files and report throughput per case."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        if pin_cpu is not None:
            pin_to_cpu(pin_cpu)
        if not skip_checks:
            check_preconditions()
    except PreconditionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(SETUP_ERROR)

    try:
        config = RunnerConfig.from_env(verbose=verbose)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(SETUP_ERROR)

    if time_budget is not None:
        if time_budget <= 0:
            typer.echo("Error: --time-budget must be positive", err=True)
            raise typer.Exit(SETUP_ERROR)
        config.time_budget_ms = time_budget

    files = discover_files(patterns)
    if not files:
        typer.echo(f"Error: No benchmark files match {', '.join(patterns)}", err=True)
        raise typer.Exit(SETUP_ERROR)

    if verbose:
        typer.echo(f"Files: {len(files)}")
        typer.echo(f"Default budget: {config.time_budget_ms:g}ms\n")

    try:
        runner = asyncio.run(run_files(files, config=config))
    except BenchmarkLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(SETUP_ERROR)

    raise typer.Exit(runner.counters.exit_code)


@app.command()
def check() -> None:
    """Verify that this process is set up for stable measurements."""
    affinity = get_cpu_affinity()
    if affinity is not None:
        typer.echo(f"CPU affinity: {', '.join(str(c) for c in affinity)}")

    try:
        check_preconditions()
    except PreconditionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(SETUP_ERROR)

    typer.echo("OK")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
