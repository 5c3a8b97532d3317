r"""
Tests for micro_bench.reporting module.
"""

from micro_bench.reporting import ConsoleReporter, format_error, format_row
from micro_bench.types import RunCounters


class TestFormatRow:
    def test_result_column_is_right_aligned(self):
        assert format_row(["result", "case"], {"result": 1234, "case": "sorted"}) == "     1234 sorted"

    def test_labels_joined(self):
        row = format_row(["result", "a", "b"], {"result": 7, "a": 1, "b": "x"})
        assert row == "        7 1, x"

    def test_header_row(self):
        row = format_row(["result", "a", "b"], {"result": "", "a": "A", "b": "B"})
        assert row == " " * 10 + "A, B"

    def test_wide_result_is_not_truncated(self):
        row = format_row(["result", "case"], {"result": 12345678901, "case": "x"})
        assert row == "12345678901 x"


class TestFormatError:
    def test_includes_chained_cause(self):
        try:
            try:
                raise KeyError("inner")
            except KeyError as e:
                raise RuntimeError("outer") from e
        except RuntimeError as e:
            text = format_error(e)

        assert "KeyError: 'inner'" in text
        assert "RuntimeError: outer" in text
        assert "direct cause" in text


class TestConsoleReporter:
    def test_groups_indent(self, capsys):
        reporter = ConsoleReporter()
        reporter.group("file.py")
        reporter.group("bench")
        reporter.line("row")
        reporter.group_end()
        reporter.group_end()
        reporter.line("after")

        assert capsys.readouterr().out.splitlines() == ["file.py", "  bench", "    row", "after"]

    def test_blank_line_has_no_indent(self, capsys):
        reporter = ConsoleReporter()
        reporter.group("bench")
        reporter.line()

        assert capsys.readouterr().out.splitlines() == ["bench", ""]

    def test_group_end_never_negative(self):
        reporter = ConsoleReporter()
        reporter.group_end()
        assert reporter.depth == 0

    def test_error_goes_to_stderr(self, capsys):
        reporter = ConsoleReporter()
        reporter.group("bench")
        try:
            raise ValueError("bad input")
        except ValueError as e:
            reporter.error(e)

        captured = capsys.readouterr()
        assert captured.out == "bench\n"
        assert captured.err.startswith("  -> Traceback")
        assert "ValueError: bad input" in captured.err

    def test_summary(self, capsys):
        ConsoleReporter().summary(RunCounters(files=2, benchmarks=3, failed=1))
        assert capsys.readouterr().out.splitlines() == ["files: 2", "benchmarks: 3", "failed: 1"]
