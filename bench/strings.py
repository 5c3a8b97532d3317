"""String building: concatenation against join and f-strings."""

from micro_bench import benchmark

PARTS = [str(i) for i in range(100)]


def concat():
    out = ""
    for part in PARTS:
        out += part
    return out


benchmark(
    "string building",
    {
        "concat": concat,
        "join": lambda: "".join(PARTS),
        "fstring": lambda: f"{PARTS[0]}{PARTS[1]}{PARTS[2]}",
    },
)
