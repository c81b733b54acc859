"""f(x, y) = (x * y) + (x / y), built by a factory function.

    arithgraph calc examples/quotient_sum.py --builder build -i examples/quotient_sum.toml
"""

from collections.abc import Callable, Mapping

import arithgraph as ag


def _divide(x: ag.Node, y: ag.Node) -> Callable[[Mapping[int, int]], int]:
    def compute(values: Mapping[int, int]) -> int:
        if values[y.id] == 0:
            return 0
        return values[x.id] // values[y.id]

    return compute


def build() -> ag.Builder:
    builder = ag.Builder()

    x = builder.create_input()
    y = builder.create_input()
    x_times_y = builder.mul(x, y)
    x_div_y = builder.hint([x, y], _divide(x, y))

    # (x / y) * y == x
    builder.assert_equal(builder.mul(x_div_y, y), x)

    builder.add(x_times_y, x_div_y)
    return builder


if __name__ == "__main__":
    builder = build()
    result = ag.evaluate_graph(builder, {0: 10, 1: 2})
    for node in builder:
        print(f"{node!r} = {result.get_value(node)}")
    print(f"Constraints satisfied: {result.constraints_satisfied}")
