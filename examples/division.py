"""f(a) = (a + 1) / 8, with the quotient supplied by a hint.

The hint computes the quotient on the host; the constraint c * 8 == a + 1
only holds when a + 1 is a multiple of 8.
"""

import arithgraph as ag

builder = ag.Builder()

a = builder.create_input()
one = builder.create_constant(1)
b = builder.add(a, one)
eight = builder.create_constant(8)

c = builder.hint([b], lambda values: values[b.id] // 8)

c_times_8 = builder.mul(c, eight)
builder.assert_equal(c_times_8, b)


if __name__ == "__main__":
    for a_value in (15, 16):
        result = ag.evaluate_graph(builder, {a.id: a_value})
        print(f"a = {a_value}: c = {result.get_value(c)}, constraints satisfied: {result.constraints_satisfied}")
