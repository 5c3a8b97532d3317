r"""
Parameter grid expansion for complex benchmarks.

Each dimension is declared either with ``values`` (every value becomes an
option labelled by itself) or with ``options`` carrying explicit labels and
an optional ``filter`` over the labels of the whole combination:

    grid = expand_grid({
        "size": {"name": "Size", "values": [10, 100]},
        "format": {
            "name": "Format",
            "options": [
                {"name": "dense", "value": "dense"},
                {"name": "sparse", "value": "sparse", "filter": lambda l: l["size"] > 10},
            ],
        },
    })
    len(grid)  # 3
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from micro_bench.exceptions import MalformedBenchmarkError
from micro_bench.types import Dimension, GridCase, Option

__all__ = ["Grid", "expand_grid", "make_dimension", "make_option"]


def make_option(declaration: Any) -> Option:
    """Build an Option from an Option, a mapping, or a bare value."""
    if isinstance(declaration, Option):
        return declaration
    if isinstance(declaration, Mapping):
        if "value" not in declaration:
            msg = f"Option {dict(declaration)!r} has no 'value'"
            raise MalformedBenchmarkError(msg)
        label = declaration.get("label", declaration.get("name", declaration["value"]))
        return Option(label=label, value=declaration["value"], filter=declaration.get("filter"))
    return Option(label=declaration, value=declaration)


def make_dimension(key: str, declaration: Any) -> Dimension:
    """Normalize a dimension declaration.

    Accepts a Dimension or a mapping with ``name`` (or ``display_name``) and
    exactly one of ``options`` or ``values``.
    """
    if isinstance(declaration, Dimension):
        dimension = declaration
    elif isinstance(declaration, Mapping):
        has_options = declaration.get("options") is not None
        has_values = declaration.get("values") is not None
        if has_options == has_values:
            msg = f"Parameter '{key}' must declare exactly one of 'options' or 'values'"
            raise MalformedBenchmarkError(msg)

        raw = declaration["options"] if has_options else declaration["values"]
        dimension = Dimension(
            key=key,
            display_name=str(declaration.get("name", declaration.get("display_name", key))),
            options=tuple(make_option(item) for item in raw),
        )
    else:
        msg = f"Parameter '{key}' must be a mapping or Dimension, got {type(declaration).__name__}"
        raise MalformedBenchmarkError(msg)

    if not dimension.options:
        msg = f"Parameter '{key}' has no options"
        raise MalformedBenchmarkError(msg)
    return dimension


@dataclass(frozen=True, slots=True)
class Grid:
    """Expanded parameter grid.

    Attributes:
        dimensions: Normalized dimensions in declaration order.
        cases: Admitted combinations, last dimension varying fastest.
        product_size: Size of the unfiltered cartesian product.
    """

    dimensions: tuple[Dimension, ...]
    cases: tuple[GridCase, ...]
    product_size: int

    def __len__(self) -> int:
        return len(self.cases)

    def __iter__(self) -> Iterator[GridCase]:
        return iter(self.cases)

    @property
    def keys(self) -> list[str]:
        """Dimension keys in declaration order."""
        return [d.key for d in self.dimensions]

    @property
    def display_names(self) -> dict[str, str]:
        """Dimension key to display name."""
        return {d.key: d.display_name for d in self.dimensions}

    @property
    def last_key(self) -> str:
        """Key of the innermost dimension."""
        return self.dimensions[-1].key

    @property
    def last_value(self) -> Any:
        """Value of the innermost dimension's last option."""
        return self.dimensions[-1].options[-1].value

    def ends_sweep(self, case: GridCase) -> bool:
        """True if ``case`` closes a sweep of the innermost dimension.

        Compares by equality, so equal values appearing in several options of
        the last dimension each count as the end of a sweep.
        """
        return case.data[self.last_key] == self.last_value


def _admitted(options: Sequence[Option], labels: dict[str, Any]) -> bool:
    return all(option.filter(labels) for option in options if option.filter is not None)


def expand_grid(parameters: Mapping[str, Any]) -> Grid:
    """Expand parameter declarations into the filtered cartesian product.

    Args:
        parameters: Dimension key to declaration, in sweep order.

    Returns:
        Grid with every admitted combination.

    Raises:
        MalformedBenchmarkError: If there are no parameters or a dimension is unusable.
    """
    if not parameters:
        msg = "Complex benchmark declares no parameters"
        raise MalformedBenchmarkError(msg)

    dimensions = tuple(make_dimension(key, declaration) for key, declaration in parameters.items())
    keys = [d.key for d in dimensions]

    cases: list[GridCase] = []
    product_size = 0
    for options in itertools.product(*(d.options for d in dimensions)):
        product_size += 1
        labels = dict(zip(keys, (o.label for o in options), strict=True))
        if not _admitted(options, labels):
            continue
        data = dict(zip(keys, (o.value for o in options), strict=True))
        cases.append(GridCase(labels=labels, data=data))

    return Grid(dimensions=dimensions, cases=tuple(cases), product_size=product_size)
