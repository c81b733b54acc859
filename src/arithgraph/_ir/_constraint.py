"""Equality constraints between graph nodes."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Constraint:
    """Assertion that two nodes evaluate to the same word.

    The pair is order-independent; ``left`` and ``right`` only record the
    argument order of ``Builder.assert_equal`` for diagnostics.
    """

    left: int
    right: int

    def __str__(self) -> str:
        return f"Node({self.left}) == Node({self.right})"
