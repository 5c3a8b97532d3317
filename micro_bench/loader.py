r"""
Benchmark file discovery and loading.

    from micro_bench.loader import discover_files, load_benchmark_file

    for path in discover_files(["bench/**/*.py"]):
        load_benchmark_file(path)
"""

import glob
import importlib.util
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from micro_bench.exceptions import BenchmarkLoadError

__all__ = ["discover_files", "load_benchmark_file"]

logger = logging.getLogger(__name__)

MODULE_PREFIX = "micro_bench_files"

_loaded = 0


def discover_files(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns into benchmark file paths.

    Patterns are expanded in order, matches of each pattern sorted, and
    files matched by several patterns kept once. ``**`` matches any number
    of directories.

    Args:
        patterns: File paths or glob patterns.

    Returns:
        Matching files in discovery order.
    """
    seen: set[Path] = set()
    files: list[Path] = []
    for pattern in patterns:
        matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True))
        for path in matches:
            resolved = path.resolve()
            if not path.is_file() or resolved in seen:
                continue
            seen.add(resolved)
            files.append(path)
        if not matches:
            logger.info("Pattern %r matched no files", pattern)
    return files


def _module_name(path: Path) -> str:
    global _loaded
    _loaded += 1
    stem = "".join(c if c.isalnum() else "_" for c in path.stem)
    return f"{MODULE_PREFIX}.{stem}_{_loaded}"


def load_benchmark_file(path: Path | str) -> ModuleType:
    """Import a benchmark file, running its registrations.

    Args:
        path: Path to a Python file.

    Returns:
        The executed module.

    Raises:
        BenchmarkLoadError: If the file is missing or raises while importing.
    """
    path = Path(path).resolve()
    if not path.is_file():
        raise BenchmarkLoadError(path, "no such file")

    name = _module_name(path)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise BenchmarkLoadError(path, "not a Python module")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    logger.debug("Loading %s as %s", path, name)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[name]
        raise BenchmarkLoadError(path, f"{type(e).__name__}: {e}") from e
    return module
