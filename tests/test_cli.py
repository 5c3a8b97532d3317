r"""
Tests for micro_bench.cli module.
"""

import importlib

from typer.testing import CliRunner

from micro_bench.cli import app
from micro_bench.exceptions import PreconditionError

runner = CliRunner()

# The package re-exports the main() function under the module name
cli_main = importlib.import_module("micro_bench.cli.main")

HEALTHY = """
from micro_bench import benchmark

benchmark("noop", {"a": lambda: None, "b": lambda: None})
"""

FAILING = """
from micro_bench import benchmark

def explode():
    raise RuntimeError("always fails")

benchmark("broken", {"only": explode})
benchmark("noop", {"a": lambda: None})
"""


class TestRun:
    def test_successful_run(self, write_bench):
        path = write_bench("healthy.py", HEALTHY)

        result = runner.invoke(app, ["run", str(path), "--skip-checks", "-t", "5"])

        assert result.exit_code == 0
        assert "  noop" in result.output
        assert "files: 1" in result.output
        assert "benchmarks: 1" in result.output
        assert "failed: 0" in result.output

    def test_failed_benchmark_sets_exit_code(self, write_bench):
        path = write_bench("failing.py", FAILING)

        result = runner.invoke(app, ["run", str(path), "--skip-checks", "-t", "5"])

        assert result.exit_code == 1
        assert "RuntimeError: always fails" in result.output
        assert "benchmarks: 2" in result.output
        assert "failed: 1" in result.output

    def test_glob_pattern(self, write_bench, tmp_path):
        write_bench("one.py", HEALTHY)
        write_bench("two.py", HEALTHY)

        result = runner.invoke(app, ["run", str(tmp_path / "*.py"), "--skip-checks", "-t", "5"])

        assert result.exit_code == 0
        assert "files: 2" in result.output

    def test_no_matching_files(self, tmp_path):
        result = runner.invoke(app, ["run", str(tmp_path / "*.py"), "--skip-checks"])

        assert result.exit_code == 2
        assert "No benchmark files match" in result.output

    def test_invalid_time_budget(self, write_bench):
        path = write_bench("healthy.py", HEALTHY)

        result = runner.invoke(app, ["run", str(path), "--skip-checks", "-t", "0"])

        assert result.exit_code == 2
        assert "must be positive" in result.output

    def test_load_error(self, write_bench):
        path = write_bench("syntax.py", "def broken(:\n")

        result = runner.invoke(app, ["run", str(path), "--skip-checks", "-t", "5"])

        assert result.exit_code == 2
        assert "Failed to load benchmark file" in result.output

    def test_precondition_failure_stops_before_loading(self, write_bench, monkeypatch):
        loaded = write_bench("marker.py", "raise SystemExit('should not load')\n")

        def fail():
            raise PreconditionError("must run pinned to a single CPU")

        monkeypatch.setattr(cli_main, "check_preconditions", fail)

        result = runner.invoke(app, ["run", str(loaded)])

        assert result.exit_code == 2
        assert "must run pinned to a single CPU" in result.output

    def test_pin_cpu_runs_before_checks(self, write_bench, monkeypatch):
        path = write_bench("healthy.py", HEALTHY)
        calls = []
        monkeypatch.setattr(cli_main, "pin_to_cpu", lambda cpu: calls.append(("pin", cpu)))
        monkeypatch.setattr(cli_main, "check_preconditions", lambda: calls.append(("check",)))

        result = runner.invoke(app, ["run", str(path), "--pin-cpu", "0", "-t", "5"])

        assert result.exit_code == 0
        assert calls == [("pin", 0), ("check",)]

    def test_env_budget_is_validated(self, write_bench, monkeypatch):
        path = write_bench("healthy.py", HEALTHY)
        monkeypatch.setenv("MICRO_BENCH_TIME_BUDGET", "soon")

        result = runner.invoke(app, ["run", str(path), "--skip-checks"])

        assert result.exit_code == 2
        assert "MICRO_BENCH_TIME_BUDGET" in result.output


class TestCheck:
    def test_check_passes(self, monkeypatch):
        monkeypatch.setattr(cli_main, "get_cpu_affinity", lambda: [0])
        monkeypatch.setattr(cli_main, "check_preconditions", lambda: None)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "CPU affinity: 0" in result.output
        assert "OK" in result.output

    def test_check_fails(self, monkeypatch):
        monkeypatch.setattr(cli_main, "get_cpu_affinity", lambda: [0, 1])

        def fail():
            raise PreconditionError("must run pinned to a single CPU")

        monkeypatch.setattr(cli_main, "check_preconditions", fail)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 2
        assert "must run pinned" in result.output
