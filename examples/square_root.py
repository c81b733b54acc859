"""f(x) = sqrt(x + 7), with the root supplied by a hint."""

import math

import arithgraph as ag

builder = ag.Builder()

x = builder.create_input()
seven = builder.create_constant(7)
x_plus_seven = builder.add(x, seven)

root = builder.hint([x_plus_seven], lambda values: math.isqrt(values[x_plus_seven.id]))

root_squared = builder.mul(root, root)
builder.assert_equal(root_squared, x_plus_seven)


if __name__ == "__main__":
    result = ag.evaluate_graph(builder, {x.id: 2})
    print(f"sqrt(2 + 7) = {result.get_value(root)}")
    print(f"Constraints satisfied: {result.constraints_satisfied}")
