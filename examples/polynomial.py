"""f(x) = x^2 + x + 5.

Run directly, or with the CLI:
    arithgraph calc examples/polynomial.py -x 0=3
"""

import arithgraph as ag

builder = ag.Builder()

x = builder.create_input()
x_squared = builder.mul(x, x)
five = builder.create_constant(5)
x_squared_plus_x = builder.add(x_squared, x)
result = builder.add(x_squared_plus_x, five)


if __name__ == "__main__":
    values = ag.fill_nodes(builder, {x.id: 3})
    print(f"x = {values[x.id]}")
    print(f"x^2 = {values[x_squared.id]}")
    print(f"x^2 + x + 5 = {values[result.id]}")
    print(f"Constraints satisfied: {ag.check_constraints(builder, values)}")
