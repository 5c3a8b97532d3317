"""Sorting inputs of different sizes and initial orders."""

import random

from micro_bench import benchmark_complex

ORDERS = {
    "sorted": lambda n: list(range(n)),
    "reversed": lambda n: list(range(n, 0, -1)),
    "random": lambda n: random.Random(n).sample(range(n), n),
}


def make_input(data):
    return ORDERS[data["order"]](data["size"])


benchmark_complex(
    "sorted()",
    {
        "size": {"name": "Size", "values": [10, 1_000, 100_000]},
        "order": {
            "name": "Order",
            "options": [
                {"name": "sorted", "value": "sorted"},
                {"name": "reversed", "value": "reversed"},
                # Random inputs at the largest size take most of the budget per call
                {"name": "random", "value": "random", "filter": lambda labels: labels["size"] < 100_000},
            ],
        },
    },
    lambda data, items: sorted(items),
    pre=make_input,
)
